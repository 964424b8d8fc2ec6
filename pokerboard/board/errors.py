"""Errors raised while composing and uploading board images."""

from typing import Optional


class BoardImageError(Exception):
    """Base error for board image composition.

    Attributes:
        stage: The BoardStage being composed when the error occurred,
            or None when it happened outside a stage.
    """

    def __init__(self, message: str, stage=None):
        self.stage = stage
        if stage is not None:
            message = f"[{stage.artifact_name}] {message}"
        super().__init__(message)


class InvalidCardCount(BoardImageError):
    """Card count does not match flop (3), turn (4) or river (5)."""

    def __init__(self, count: int):
        self.count = count
        super().__init__(f"Expected 3, 4 or 5 cards, got {count}")


class ImageOpenError(BoardImageError):
    """Source image is missing or cannot be decoded."""

    def __init__(self, path, reason: str, stage=None):
        self.path = path
        super().__init__(f"Cannot open image {path}: {reason}", stage=stage)


class PasteError(BoardImageError):
    """Compositing onto the canvas failed."""
    pass


class DimensionMismatchError(PasteError):
    """Images placed in one row do not share a height."""

    def __init__(self, heights: list[int], stage=None):
        self.heights = heights
        super().__init__(f"Images must have equal heights, got {heights}", stage=stage)


class WriteError(BoardImageError):
    """Encoding or persisting the composite failed."""

    def __init__(self, path, reason: str, stage=None):
        self.path = path
        super().__init__(f"Cannot write image {path}: {reason}", stage=stage)


class UploadError(BoardImageError):
    """Upload collaborator reported a failure."""

    def __init__(self, message: str, status_code: Optional[int] = None, stage=None):
        self.status_code = status_code
        super().__init__(message, stage=stage)
