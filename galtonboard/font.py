"""8x8 column-major bitmap font for the SSD1306 framebuffer."""

from __future__ import annotations

GLYPH_WIDTH = 8

# Each glyph is eight column bytes; bit 0 is the top row.
_GLYPHS: tuple[bytes, ...] = (
    bytes((0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00)),  # blank
    bytes((0x78, 0x14, 0x12, 0x11, 0x12, 0x14, 0x78, 0x00)),  # A
    bytes((0x7F, 0x49, 0x49, 0x49, 0x49, 0x49, 0x7F, 0x00)),  # B
    bytes((0x7E, 0x41, 0x41, 0x41, 0x41, 0x41, 0x41, 0x00)),  # C
    bytes((0x7F, 0x41, 0x41, 0x41, 0x41, 0x41, 0x7E, 0x00)),  # D
    bytes((0x7F, 0x49, 0x49, 0x49, 0x49, 0x49, 0x49, 0x00)),  # E
    bytes((0x7F, 0x09, 0x09, 0x09, 0x09, 0x01, 0x01, 0x00)),  # F
    bytes((0x7F, 0x41, 0x41, 0x41, 0x51, 0x51, 0x73, 0x00)),  # G
    bytes((0x7F, 0x08, 0x08, 0x08, 0x08, 0x08, 0x7F, 0x00)),  # H
    bytes((0x00, 0x00, 0x00, 0x7F, 0x00, 0x00, 0x00, 0x00)),  # I
    bytes((0x21, 0x41, 0x41, 0x3F, 0x01, 0x01, 0x01, 0x00)),  # J
    bytes((0x00, 0x7F, 0x08, 0x08, 0x14, 0x22, 0x41, 0x00)),  # K
    bytes((0x7F, 0x40, 0x40, 0x40, 0x40, 0x40, 0x40, 0x00)),  # L
    bytes((0x7F, 0x02, 0x04, 0x08, 0x04, 0x02, 0x7F, 0x00)),  # M
    bytes((0x7F, 0x02, 0x04, 0x08, 0x10, 0x20, 0x7F, 0x00)),  # N
    bytes((0x3E, 0x41, 0x41, 0x41, 0x41, 0x41, 0x3E, 0x00)),  # O
    bytes((0x7F, 0x11, 0x11, 0x11, 0x11, 0x11, 0x0E, 0x00)),  # P
    bytes((0x3E, 0x41, 0x41, 0x49, 0x51, 0x61, 0x7E, 0x00)),  # Q
    bytes((0x7F, 0x11, 0x11, 0x11, 0x31, 0x51, 0x0E, 0x00)),  # R
    bytes((0x46, 0x49, 0x49, 0x49, 0x49, 0x30, 0x00, 0x00)),  # S
    bytes((0x01, 0x01, 0x01, 0x7F, 0x01, 0x01, 0x01, 0x00)),  # T
    bytes((0x3F, 0x40, 0x40, 0x40, 0x40, 0x40, 0x3F, 0x00)),  # U
    bytes((0x0F, 0x10, 0x20, 0x40, 0x20, 0x10, 0x0F, 0x00)),  # V
    bytes((0x7F, 0x20, 0x10, 0x08, 0x10, 0x20, 0x7F, 0x00)),  # W
    bytes((0x00, 0x41, 0x22, 0x14, 0x14, 0x22, 0x41, 0x00)),  # X
    bytes((0x01, 0x02, 0x04, 0x78, 0x04, 0x02, 0x01, 0x00)),  # Y
    bytes((0x41, 0x61, 0x59, 0x45, 0x43, 0x41, 0x00, 0x00)),  # Z
    bytes((0x3E, 0x41, 0x41, 0x49, 0x41, 0x41, 0x3E, 0x00)),  # 0
    bytes((0x00, 0x00, 0x42, 0x7F, 0x40, 0x00, 0x00, 0x00)),  # 1
    bytes((0x30, 0x49, 0x49, 0x49, 0x49, 0x46, 0x00, 0x00)),  # 2
    bytes((0x49, 0x49, 0x49, 0x49, 0x49, 0x49, 0x36, 0x00)),  # 3
    bytes((0x3F, 0x20, 0x20, 0x78, 0x20, 0x20, 0x00, 0x00)),  # 4
    bytes((0x4F, 0x49, 0x49, 0x49, 0x49, 0x30, 0x00, 0x00)),  # 5
    bytes((0x3F, 0x48, 0x48, 0x48, 0x48, 0x48, 0x30, 0x00)),  # 6
    bytes((0x01, 0x01, 0x01, 0x61, 0x31, 0x0D, 0x03, 0x00)),  # 7
    bytes((0x36, 0x49, 0x49, 0x49, 0x49, 0x49, 0x36, 0x00)),  # 8
    bytes((0x06, 0x09, 0x09, 0x09, 0x09, 0x09, 0x7F, 0x00)),  # 9
)

_LETTER_OFFSET = 1
_DIGIT_OFFSET = 27


def _check_character(character: str) -> None:
    if not isinstance(character, str) or len(character) != 1:
        raise ValueError(f"expected a single character, got {character!r}")


def glyph_index(character: str) -> int:
    """Return the font table index of a character; unsupported ones map to blank (0).

    Only upper-case letters and digits have glyphs; no case folding is done here.
    """
    _check_character(character)
    if "A" <= character <= "Z":
        return ord(character) - ord("A") + _LETTER_OFFSET
    if "0" <= character <= "9":
        return ord(character) - ord("0") + _DIGIT_OFFSET
    return 0


def glyph(character: str) -> bytes:
    """Return the eight column bytes drawn for a character (ASCII lower case folded)."""
    _check_character(character)
    if "a" <= character <= "z":
        character = character.upper()
    return _GLYPHS[glyph_index(character)]