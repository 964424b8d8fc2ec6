#!/usr/bin/env python3
"""
Card assets for Pokerboard.

Card identifiers are a rank followed by a suit letter ("2h", "Td", "Kc").
Each identifier maps to `<resources_dir>/<card>.jpeg`. This module also
renders simple placeholder card faces so a resources folder can be
bootstrapped without artwork.
"""
import logging
import os
from pathlib import Path

from PIL import Image, ImageDraw, ImageFont

logger = logging.getLogger(__name__)

RANKS = "23456789TJQKA"
SUITS = "shdc"

ASSET_SUFFIX = ".jpeg"

# Placeholder card face size
CARD_WIDTH = 200
CARD_HEIGHT = 280

COLORS = {
    "face": "#FFFFFF",
    "border": "#222222",
    "black": "#111111",
    "red": "#C0392B",
}


def card_asset_path(card: str, resources_dir="resources") -> Path:
    """Return the asset path for a card identifier."""
    return Path(resources_dir) / f"{card}{ASSET_SUFFIX}"


def parse_card(card: str) -> tuple[str, str]:
    """Split a card identifier into (rank, suit).

    "10" is accepted for the ten and normalized to "T"; suits are
    case-insensitive.

    Raises:
        ValueError: If the identifier is not a known card
    """
    if not card or len(card) < 2:
        raise ValueError(f"Invalid card identifier: {card!r}")

    rank, suit = card[:-1].upper(), card[-1].lower()
    if rank == "10":
        rank = "T"
    if len(rank) != 1 or rank not in RANKS or suit not in SUITS:
        raise ValueError(f"Invalid card identifier: {card!r}")
    return rank, suit


def full_deck() -> list[str]:
    """All 52 card identifiers, grouped by suit."""
    return [f"{rank}{suit}" for suit in SUITS for rank in RANKS]


def _load_font(name: str, size: int):
    """Try to load a font, falling back to Pillow's default."""
    font_paths = [
        f"C:/Windows/Fonts/{name}.ttf",
        f"/usr/share/fonts/truetype/{name}.ttf",
        f"/usr/share/fonts/truetype/dejavu/{name}.ttf",
        f"/usr/share/fonts/{name}.ttf",
    ]

    for path in font_paths:
        if os.path.exists(path):
            try:
                return ImageFont.truetype(path, size)
            except OSError:
                continue

    try:
        return ImageFont.truetype(name, size)
    except OSError:
        return ImageFont.load_default(size)


def draw_suit(draw, suit: str, cx: int, cy: int, size: int, fill: str) -> None:
    """Draw a suit pip centered at (cx, cy)."""
    half = size // 2
    quarter = size // 4

    if suit == "d":
        points = [(cx, cy - half), (cx + half * 3 // 4, cy), (cx, cy + half), (cx - half * 3 // 4, cy)]
        draw.polygon(points, fill=fill)
    elif suit == "h":
        draw.ellipse((cx - half, cy - half, cx, cy), fill=fill)
        draw.ellipse((cx, cy - half, cx + half, cy), fill=fill)
        draw.polygon([(cx - half, cy - quarter), (cx + half, cy - quarter), (cx, cy + half)], fill=fill)
    elif suit == "s":
        draw.ellipse((cx - half, cy - quarter, cx, cy + quarter), fill=fill)
        draw.ellipse((cx, cy - quarter, cx + half, cy + quarter), fill=fill)
        draw.polygon([(cx - half, cy), (cx + half, cy), (cx, cy - half)], fill=fill)
        draw.polygon([(cx, cy), (cx - quarter, cy + half), (cx + quarter, cy + half)], fill=fill)
    elif suit == "c":
        r = size // 5
        for px, py in ((cx, cy - quarter), (cx - quarter, cy + r // 2), (cx + quarter, cy + r // 2)):
            draw.ellipse((px - r, py - r, px + r, py + r), fill=fill)
        draw.polygon([(cx, cy), (cx - quarter, cy + half), (cx + quarter, cy + half)], fill=fill)
    else:
        raise ValueError(f"Unknown suit: {suit!r}")


def render_placeholder_card(
    card: str,
    out_path,
    width: int = CARD_WIDTH,
    height: int = CARD_HEIGHT,
) -> Path:
    """
    Render a plain card face (rank in the corners, suit pip in the middle).

    Args:
        card: Card identifier, e.g. "Kd"
        out_path: Destination JPEG path
        width: Card width in pixels
        height: Card height in pixels

    Returns:
        The written path
    """
    rank, suit = parse_card(card)
    ink = COLORS["red"] if suit in "hd" else COLORS["black"]
    label = "10" if rank == "T" else rank

    img = Image.new("RGB", (width, height), COLORS["face"])
    draw = ImageDraw.Draw(img)

    border = max(2, width // 80)
    radius = max(4, width // 12)
    draw.rounded_rectangle(
        (border, border, width - 1 - border, height - 1 - border),
        radius=radius,
        outline=COLORS["border"],
        width=border,
    )

    font = _load_font("DejaVuSans-Bold", max(12, height // 8))
    margin = width // 12
    draw.text((margin, margin), label, font=font, fill=ink)
    bbox = draw.textbbox((0, 0), label, font=font)
    draw.text(
        (width - margin - (bbox[2] - bbox[0]), height - margin - (bbox[3] - bbox[1]) - bbox[1]),
        label,
        font=font,
        fill=ink,
    )

    draw_suit(draw, suit, width // 2, height // 2, min(width, height) // 3, ink)

    out_path = Path(out_path)
    os.makedirs(out_path.parent, exist_ok=True)
    img.save(out_path, "JPEG", quality=95)
    return out_path


def render_placeholder_deck(
    resources_dir="resources",
    width: int = CARD_WIDTH,
    height: int = CARD_HEIGHT,
    overwrite: bool = False,
) -> list[Path]:
    """Render placeholder assets for all 52 cards.

    Existing assets are left alone unless `overwrite` is set.
    """
    written = []
    for card in full_deck():
        path = card_asset_path(card, resources_dir)
        if path.exists() and not overwrite:
            continue
        written.append(render_placeholder_card(card, path, width, height))

    logger.info(f"Rendered {len(written)} placeholder cards in {resources_dir}")
    return written
