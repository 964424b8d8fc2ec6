"""Shared fixtures for Pokerboard tests.

Card assets are solid-colour JPEGs with distinct widths so composite
sizes reveal exactly which inputs were joined.
"""

import pytest
from PIL import Image

from pokerboard.board import BoardImageComposer, ImageCodec

CARD_HEIGHT = 140
CARD_WIDTHS = {
    "2h": 100,
    "9s": 110,
    "Kd": 120,
    "7c": 90,
    "As": 105,
}
CARD_COLORS = {
    "2h": (200, 30, 30),
    "9s": (20, 20, 20),
    "Kd": (30, 30, 200),
    "7c": (30, 160, 60),
    "As": (120, 60, 160),
}


@pytest.fixture
def resources_dir(tmp_path):
    """Directory of card assets; "Qh" is deliberately taller than the rest."""
    path = tmp_path / "resources"
    path.mkdir()
    for card, width in CARD_WIDTHS.items():
        Image.new("RGB", (width, CARD_HEIGHT), CARD_COLORS[card]).save(path / f"{card}.jpeg", "JPEG")
    Image.new("RGB", (100, CARD_HEIGHT + 10), (250, 200, 0)).save(path / "Qh.jpeg", "JPEG")
    return path


@pytest.fixture
def output_dir(tmp_path):
    return tmp_path / "output"


@pytest.fixture
def codec():
    with ImageCodec() as codec:
        yield codec


@pytest.fixture
def composer(resources_dir, output_dir):
    with BoardImageComposer(resources_dir=resources_dir, output_dir=output_dir) as composer:
        yield composer


@pytest.fixture
def isolated_env(tmp_path, monkeypatch):
    """Run from an empty directory with no Pokerboard/Imgur variables set."""
    workdir = tmp_path / "work"
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    for var in (
        "POKERBOARD_RESOURCES_DIR",
        "POKERBOARD_OUTPUT_DIR",
        "POKERBOARD_JPEG_QUALITY",
        "IMGUR_CLIENT_ID",
    ):
        # Set before deleting so values loaded from .env are undone too.
        monkeypatch.setenv(var, "")
        monkeypatch.delenv(var)
    return workdir
