"""Decide whether a solution's output contains the expected answer."""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable

Matcher = Callable[[str, str], bool]

# Block letters used by puzzles whose answer is read off a rendered grid.
# Each glyph is 4 cells wide and 6 rows tall; letters are separated by one
# empty column.
GLYPHS: dict[str, tuple[str, ...]] = {
    "A": (".##.", "#..#", "#..#", "####", "#..#", "#..#"),
    "B": ("###.", "#..#", "###.", "#..#", "#..#", "###."),
    "C": (".##.", "#..#", "#...", "#...", "#..#", ".##."),
    "E": ("####", "#...", "###.", "#...", "#...", "####"),
    "F": ("####", "#...", "###.", "#...", "#...", "#..."),
    "G": (".##.", "#..#", "#...", "#.##", "#..#", ".###"),
    "H": ("#..#", "#..#", "####", "#..#", "#..#", "#..#"),
    "I": (".###", "..#.", "..#.", "..#.", "..#.", ".###"),
    "J": ("..##", "...#", "...#", "...#", "#..#", ".##."),
    "K": ("#..#", "#.#.", "##..", "#.#.", "#.#.", "#..#"),
    "L": ("#...", "#...", "#...", "#...", "#...", "####"),
    "O": (".##.", "#..#", "#..#", "#..#", "#..#", ".##."),
    "P": ("###.", "#..#", "#..#", "###.", "#...", "#..."),
    "R": ("###.", "#..#", "#..#", "###.", "#.#.", "#..#"),
    "S": (".###", "#...", "#...", ".##.", "...#", "###."),
    "U": ("#..#", "#..#", "#..#", "#..#", "#..#", ".##."),
    "Y": ("#...", "#...", ".#.#", "..#.", "..#.", "..#."),
    "Z": ("####", "...#", "..#.", ".#..", "#...", "####"),
}

# (lit, unlit) characters programs commonly print grids with.
PALETTES: tuple[tuple[str, str], ...] = (
    ("#", "."),
    ("#", " "),
    ("█", " "),
)

_INTEGER = re.compile(r"[+-]?\d+")


def contains_answer(expected: str, actual: str) -> bool:
    """Plain substring containment of the stripped expected answer."""
    expected = expected.strip()
    return bool(expected) and expected in actual


def render_glyphs(text: str, lit: str = "#", unlit: str = ".") -> list[str] | None:
    """Render *text* in the block-letter font, or None if a letter is missing."""
    if not text or any(ch not in GLYPHS for ch in text):
        return None
    rows = []
    for row in range(6):
        cells = unlit.join(GLYPHS[ch][row] for ch in text)
        rows.append(cells.replace("#", lit).replace(".", unlit))
    return rows


def glyphs_match(expected: str, actual: str) -> bool:
    """True when *actual* draws *expected* as block letters.

    Trailing unlit cells are ignored on each line, so grids printed with
    spaces and stripped line endings still match.
    """
    expected = expected.strip()
    lines = actual.splitlines()
    for lit, unlit in PALETTES:
        rows = render_glyphs(expected, lit, unlit)
        if rows is None:
            return False
        if _grid_in_lines(rows, lines, unlit):
            return True
    return False


def _grid_in_lines(rows: list[str], lines: list[str], unlit: str) -> bool:
    width = len(rows[0])
    for top in range(len(lines) - len(rows) + 1):
        offset = lines[top].find(rows[0].rstrip(unlit))
        while offset != -1:
            if all(
                lines[top + k][offset:offset + width].rstrip(unlit) == rows[k].rstrip(unlit)
                for k in range(len(rows))
            ):
                return True
            offset = lines[top].find(rows[0].rstrip(unlit), offset + 1)
    return False


def numeric_spellings(expected: str) -> list[str]:
    """Scientific-notation spellings of an integer answer.

    Covers the exact-digits mantissa (``1234567`` -> ``1.234567e+06``), the
    six-fraction-digit form of ``%e`` (``1.234568e+07``) and the
    six-significant-digit form of ``%g`` (``1.23457e+07``), each with two-
    and three-digit exponents and either exponent letter. These are what
    C-family and R runtimes print for large values held in floating point.
    """
    expected = expected.strip()
    if not _INTEGER.fullmatch(expected):
        return []
    sign = "-" if expected.startswith("-") else ""
    digits = expected.lstrip("+-").lstrip("0")
    if len(digits) < 2:
        return []
    fraction = digits[1:].rstrip("0")
    forms = [(f"{digits[0]}.{fraction}" if fraction else digits[0], len(digits) - 1)]
    value = float(digits)
    for fmt in ("e", "g"):
        mantissa, sep, exponent = format(value, fmt).partition("e")
        # %g drops the exponent for small values; inf has none either
        if sep:
            forms.append((mantissa, int(exponent)))
    spellings = []
    for mantissa, exponent in forms:
        for e in ("e", "E"):
            spellings.append(f"{sign}{mantissa}{e}+{exponent:02d}")
            spellings.append(f"{sign}{mantissa}{e}+{exponent:03d}")
    return list(dict.fromkeys(spellings))


def numeric_match(expected: str, actual: str) -> bool:
    return any(s in actual for s in numeric_spellings(expected))


DEFAULT_MATCHERS: tuple[Matcher, ...] = (contains_answer, glyphs_match, numeric_match)


class Judge:
    """Ordered matching policy; the first matcher that accepts wins."""

    def __init__(self, matchers: Iterable[Matcher] = DEFAULT_MATCHERS) -> None:
        self.matchers = tuple(matchers)

    def judge(self, actual: str, expected: str) -> bool:
        if not expected.strip():
            return False
        return any(m(expected, actual) for m in self.matchers)


def outputs_match(expected: str, actual: str) -> bool:
    """Compare with the default policy."""
    return Judge().judge(actual, expected)
