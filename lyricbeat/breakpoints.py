"""Breakpoint table: markup characters that map to musical pause lengths."""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Final

ESCAPE_CHARACTER: Final[str] = "\\"
DEFAULT_SIGNATURE: Final[int] = 4  # quarter-note beat


@dataclass(frozen=True)
class Breakpoint:
    """
    A single markup character and the pause it stands for.

    Attributes:
        character: The delimiter that triggers a pause.
        signature: Beat-unit denominator (4 = quarter-note beat).
        length:    Note-length denominator relative to a whole note
                   (1, 2, 4, 8, 16 = whole, half, quarter, eighth, sixteenth).
    """

    character: str
    signature: int
    length: int

    @property
    def fraction(self) -> float:
        """Length relative to the beat unit, as a real number."""
        return self.length / self.signature

    def seconds_at(self, bpm: int) -> float:
        """Convert the pause to seconds: 60 * (length / signature) / bpm."""
        return 60.0 * self.fraction / bpm


# ── Default table ───────────────────────────────────────────────────────────

BREAKPOINTS: Final[tuple[Breakpoint, ...]] = (
    Breakpoint("#", DEFAULT_SIGNATURE, 1),
    Breakpoint("$", DEFAULT_SIGNATURE, 2),
    Breakpoint("%", DEFAULT_SIGNATURE, 4),
    Breakpoint("&", DEFAULT_SIGNATURE, 8),
    Breakpoint("?", DEFAULT_SIGNATURE, 16),
)


def build_breakpoint_map(entries: Iterable[Breakpoint]) -> Mapping[str, Breakpoint]:
    """
    Index breakpoints by character.

    Raises:
        ValueError: If two entries share a character, a character is not
                    exactly one code point long, or a signature or length
                    is not positive.
    """
    table: dict[str, Breakpoint] = {}
    for entry in entries:
        if len(entry.character) != 1:
            raise ValueError(f"Breakpoint character must be a single character, got {entry.character!r}.")
        if entry.signature <= 0 or entry.length <= 0:
            raise ValueError(
                f"Breakpoint {entry.character!r} needs a positive signature and length, "
                f"got {entry.signature}/{entry.length}."
            )
        if entry.character in table:
            raise ValueError(f"Duplicate breakpoint character {entry.character!r}.")
        table[entry.character] = entry
    return MappingProxyType(table)


BREAKPOINT_MAP: Final[Mapping[str, Breakpoint]] = build_breakpoint_map(BREAKPOINTS)
