"""Board stages: flop, turn and river."""

from enum import Enum

from pokerboard.board.errors import InvalidCardCount


class BoardStage(Enum):
    """Community card stages, in the order they are revealed.

    Each value is (card_count, artifact_name).
    """

    FLOP = (3, "flop")
    TURN = (4, "turn")
    RIVER = (5, "river")

    def __init__(self, card_count: int, artifact_name: str):
        self.card_count = card_count
        self.artifact_name = artifact_name

    @property
    def filename(self) -> str:
        return f"{self.artifact_name}.jpeg"

    @property
    def previous(self) -> "BoardStage | None":
        """Stage whose artifact this stage reads, or None for the flop."""
        if self is BoardStage.FLOP:
            return None
        # Turn and river both build on the flop image.
        return BoardStage.FLOP

    @classmethod
    def for_card_count(cls, count: int) -> "BoardStage":
        """Select the stage for a number of board cards.

        Raises:
            InvalidCardCount: If no stage has that many cards.
        """
        for stage in cls:
            if stage.card_count == count:
                return stage
        raise InvalidCardCount(count)
