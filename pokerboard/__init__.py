"""Pokerboard - compose flop/turn/river board images from card assets.

Exports are lazily loaded so `python -m pokerboard.<module>` does not pull
in Pillow or requests before it is needed.
"""

__version__ = "0.1.0"

__all__ = [
    # board/compose.py
    "BoardImageComposer",
    "OutputArtifact",
    "combine_two",
    "combine_three",
    # board/stages.py
    "BoardStage",
    # board/errors.py
    "BoardImageError",
    "InvalidCardCount",
    "ImageOpenError",
    "PasteError",
    "DimensionMismatchError",
    "WriteError",
    "UploadError",
    # imgur/client.py
    "ImgurClient",
    # config.py
    "Settings",
    "load_settings",
]


def __getattr__(name: str):
    """Lazy import for module exports."""
    if name in ("BoardImageComposer", "OutputArtifact", "combine_two", "combine_three"):
        from pokerboard.board import compose
        return getattr(compose, name)
    elif name == "BoardStage":
        from pokerboard.board import stages
        return getattr(stages, name)
    elif name in (
        "BoardImageError",
        "InvalidCardCount",
        "ImageOpenError",
        "PasteError",
        "DimensionMismatchError",
        "WriteError",
        "UploadError",
    ):
        from pokerboard.board import errors
        return getattr(errors, name)
    elif name == "ImgurClient":
        from pokerboard.imgur import client
        return getattr(client, name)
    elif name in ("Settings", "load_settings"):
        from pokerboard import config
        return getattr(config, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
