"""Imgur upload integration for Pokerboard."""

from .client import ImgurClient, IMGUR_API_BASE

__all__ = [
    "ImgurClient",
    "IMGUR_API_BASE",
]
