"""Compose poker board images from per-card JPEG assets.

A board is built in stages. The flop joins three card images into one row;
the turn and river extend the flop image with one or two more cards:

    3 cards -> flop.jpeg  = card0 | card1 | card2
    4 cards -> turn.jpeg  = flop.jpeg | card3
    5 cards -> river.jpeg = flop.jpeg | card3 | card4

Every row is built by repeated two-image horizontal concatenation onto a
white canvas.
"""

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

from PIL import Image

from pokerboard.assets import card_asset_path
from pokerboard.board.codec import DEFAULT_QUALITY, ImageCodec
from pokerboard.board.errors import DimensionMismatchError, ImageOpenError, WriteError
from pokerboard.board.stages import BoardStage

logger = logging.getLogger(__name__)

BACKGROUND = "white"


@dataclass(frozen=True)
class OutputArtifact:
    """A composed board image persisted to disk."""

    stage: BoardStage
    path: Path
    width: int
    height: int

    def read_bytes(self) -> bytes:
        """Read the persisted JPEG back for upload."""
        try:
            return self.path.read_bytes()
        except OSError as e:
            raise ImageOpenError(self.path, str(e), stage=self.stage) from e


def combine_two_images(
    first: Image.Image,
    second: Image.Image,
    codec: ImageCodec,
    background=BACKGROUND,
    stage: Optional[BoardStage] = None,
) -> Image.Image:
    """Place two equally tall images side by side on a fresh canvas."""
    if first.height != second.height:
        raise DimensionMismatchError([first.height, second.height], stage=stage)

    canvas = codec.create_canvas(first.width + second.width, first.height, background, stage=stage).result()
    canvas = codec.paste(first, canvas, 0, 0, stage=stage).result()
    canvas = codec.paste(second, canvas, first.width, 0, stage=stage).result()
    return canvas


def combine_three_images(
    first: Image.Image,
    second: Image.Image,
    third: Image.Image,
    codec: ImageCodec,
    background=BACKGROUND,
    stage: Optional[BoardStage] = None,
) -> Image.Image:
    """Join the first pair, then join that row with the third image."""
    row = combine_two_images(first, second, codec, background, stage)
    return combine_two_images(row, third, codec, background, stage)


def _compose_row(
    files: Sequence,
    output_path: Path,
    codec: ImageCodec,
    background=BACKGROUND,
    quality: int = DEFAULT_QUALITY,
    stage: Optional[BoardStage] = None,
) -> Image.Image:
    """Open two or three `files` in order, join them left to right and write the row."""
    images = [codec.open_image(path, stage=stage).result() for path in files]
    if len(images) == 2:
        row = combine_two_images(*images, codec, background, stage)
    elif len(images) == 3:
        row = combine_three_images(*images, codec, background, stage)
    else:
        raise ValueError(f"Expected 2 or 3 files, got {len(files)}")

    codec.write_file(row, output_path, quality, stage=stage).result()
    return row


def combine_two(
    files: Sequence,
    output_path,
    codec: Optional[ImageCodec] = None,
    background=BACKGROUND,
    quality: int = DEFAULT_QUALITY,
) -> Path:
    """Combine two image files into a single row written to `output_path`.

    Args:
        files: Two image paths, left to right
        output_path: Destination JPEG, overwritten if present
        codec: Codec to run on (a private one is created when omitted)

    Returns:
        The output path
    """
    if len(files) != 2:
        raise ValueError(f"combine_two needs exactly 2 files, got {len(files)}")
    return _combine_files(files, Path(output_path), codec, background, quality)


def combine_three(
    files: Sequence,
    output_path,
    codec: Optional[ImageCodec] = None,
    background=BACKGROUND,
    quality: int = DEFAULT_QUALITY,
) -> Path:
    """Combine three image files into a single row written to `output_path`.

    Same result as `combine_two` on the first pair followed by `combine_two`
    of that row with the third file. The intermediate row stays in memory,
    so `output_path` is only written once.
    """
    if len(files) != 3:
        raise ValueError(f"combine_three needs exactly 3 files, got {len(files)}")
    return _combine_files(files, Path(output_path), codec, background, quality)


def _combine_files(files, output_path: Path, codec, background, quality) -> Path:
    if codec is not None:
        _compose_row(files, output_path, codec, background, quality)
        return output_path
    with ImageCodec() as own_codec:
        _compose_row(files, output_path, own_codec, background, quality)
    return output_path


class BoardImageComposer:
    """Builds flop, turn and river images into one output directory.

    Calls that share an output directory must not overlap; use one composer
    per directory to build independent boards side by side.
    """

    def __init__(
        self,
        resources_dir="resources",
        output_dir="output",
        jpeg_quality: int = DEFAULT_QUALITY,
        background=BACKGROUND,
        codec: Optional[ImageCodec] = None,
    ):
        self.resources_dir = Path(resources_dir)
        self.output_dir = Path(output_dir)
        self.jpeg_quality = jpeg_quality
        self.background = background
        self._owns_codec = codec is None
        self.codec = codec or ImageCodec()
        self._board_executor: Optional[ThreadPoolExecutor] = None

    @classmethod
    def from_settings(cls, settings, codec: Optional[ImageCodec] = None) -> "BoardImageComposer":
        return cls(
            resources_dir=settings.resources_dir,
            output_dir=settings.output_dir,
            jpeg_quality=settings.jpeg_quality,
            background=settings.background,
            codec=codec,
        )

    def __enter__(self) -> "BoardImageComposer":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        if self._board_executor is not None:
            self._board_executor.shutdown(wait=True)
            self._board_executor = None
        if self._owns_codec:
            self.codec.close()

    def stage_path(self, stage: BoardStage) -> Path:
        return self.output_dir / stage.filename

    def compose_board(self, cards: Sequence[str]) -> OutputArtifact:
        """Compose the board image for 3, 4 or 5 cards.

        Args:
            cards: Card identifiers in board order (e.g. ["2h", "9s", "Kd"])

        Returns:
            The written OutputArtifact

        Raises:
            InvalidCardCount: If the number of cards is not 3, 4 or 5
            ImageOpenError: If a card asset or the flop image is unreadable
            PasteError: If the images cannot be joined (including height mismatch)
            WriteError: If the output cannot be persisted
        """
        stage = BoardStage.for_card_count(len(cards))
        assets = [card_asset_path(card, self.resources_dir) for card in cards]
        self._ensure_output_dir(stage)

        if stage is BoardStage.FLOP:
            files = assets[0:3]
        elif stage is BoardStage.TURN:
            files = [self._previous_artifact(stage), assets[3]]
        else:
            files = [self._previous_artifact(stage), assets[3], assets[4]]

        output_path = self.stage_path(stage)
        row = _compose_row(files, output_path, self.codec, self.background, self.jpeg_quality, stage)

        logger.info(f"Composed {stage.artifact_name} ({row.width}x{row.height}): {output_path}")
        return OutputArtifact(stage=stage, path=output_path, width=row.width, height=row.height)

    def submit(self, cards: Sequence[str]) -> Future:
        """Compose a board in the background.

        Boards submitted to one composer run one after another.

        Returns:
            Future resolving to the OutputArtifact
        """
        if self._board_executor is None:
            self._board_executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="pokerboard-board")
        return self._board_executor.submit(self.compose_board, list(cards))

    def compose_and_upload(self, cards: Sequence[str], uploader) -> str:
        """Compose a board and hand the JPEG to `uploader`.

        Args:
            cards: Card identifiers in board order
            uploader: Object with `upload_image(data, title=None) -> str`

        Returns:
            Public URL reported by the uploader
        """
        artifact = self.compose_board(cards)
        url = uploader.upload_image(artifact.read_bytes(), title=f"{artifact.stage.artifact_name}: {' '.join(cards)}")
        logger.info(f"Uploaded {artifact.stage.artifact_name}: {url}")
        return url

    def _ensure_output_dir(self, stage: BoardStage) -> None:
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise WriteError(self.output_dir, str(e), stage=stage) from e

    def _previous_artifact(self, stage: BoardStage) -> Path:
        previous = self.stage_path(stage.previous)
        if not previous.exists():
            raise ImageOpenError(
                previous,
                f"{stage.previous.artifact_name} image missing, compose the {stage.previous.artifact_name} first",
                stage=stage,
            )
        return previous
