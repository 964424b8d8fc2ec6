"""Board image composition for Pokerboard."""

from pokerboard.board.codec import ImageCodec
from pokerboard.board.compose import (
    BoardImageComposer,
    OutputArtifact,
    combine_two,
    combine_three,
    combine_two_images,
    combine_three_images,
)
from pokerboard.board.errors import (
    BoardImageError,
    InvalidCardCount,
    ImageOpenError,
    PasteError,
    DimensionMismatchError,
    WriteError,
    UploadError,
)
from pokerboard.board.stages import BoardStage

__all__ = [
    # codec.py
    "ImageCodec",
    # compose.py
    "BoardImageComposer",
    "OutputArtifact",
    "combine_two",
    "combine_three",
    "combine_two_images",
    "combine_three_images",
    # errors.py
    "BoardImageError",
    "InvalidCardCount",
    "ImageOpenError",
    "PasteError",
    "DimensionMismatchError",
    "WriteError",
    "UploadError",
    # stages.py
    "BoardStage",
]
