# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
"""Six-dot Braille cells and their Unicode encoding.

Dots are numbered the usual way: 1, 2, 3 down the left column and 4, 5, 6 down the
right column. Dot n occupies bit n-1 of the chord, which is also how the Unicode
Braille Patterns block lays out U+2800 through U+283F.
"""
import enum
import typing

from .commontypes import InvalidChord, InvalidDot

BRAILLE_BLANK: typing.Final[int] = 0x2800
FULL_CHORD: typing.Final[int] = 0b111111


@enum.unique
class Dot(enum.IntEnum):
    DOT_1 = 1 << 0
    DOT_2 = 1 << 1
    DOT_3 = 1 << 2
    DOT_4 = 1 << 3
    DOT_5 = 1 << 4
    DOT_6 = 1 << 5

    @property
    def number(self) -> int:
        return self.bit_length()

    @classmethod
    def numbered(cls, number: int) -> "Dot":
        if not 1 <= number <= 6:
            raise InvalidDot(number)
        return cls(1 << (number - 1))


def coerce_dot(value: typing.Any) -> Dot:
    # bool is an int subclass, but True is not a dot
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidDot(value)
    try:
        return Dot(value)
    except ValueError:
        raise InvalidDot(value) from None


def chord_to_cell(chord: int) -> str:
    if not 1 <= chord <= FULL_CHORD:
        raise InvalidChord(f"chord {chord!r} is outside 1..{FULL_CHORD}")
    return chr(BRAILLE_BLANK + chord)


def cell_to_chord(cell: str) -> int:
    if len(cell) != 1:
        raise InvalidChord(f"expected a single character, got {cell!r}")
    chord = ord(cell) - BRAILLE_BLANK
    if not 1 <= chord <= FULL_CHORD:
        raise InvalidChord(f"{cell!r} is not a non-blank six-dot Braille cell")
    return chord


def dots_of(chord: int) -> tuple[int, ...]:
    return tuple(dot.number for dot in Dot if chord & dot)
