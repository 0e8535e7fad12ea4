"""Data models for parsed songs and the playback timeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Final

from lyricbeat.errors import InvalidTempoError

if TYPE_CHECKING:
    from lyricbeat.lyrics_scanner import LyricsScanner

MAX_BPM: Final[int] = 2**32 - 1  # unsigned 32-bit


def validate_bpm(bpm: Any) -> int:
    """
    Check that ``bpm`` is usable as a tempo and return it.

    Raises:
        InvalidTempoError: If bpm is not an int, is a bool, or is outside
                           1..MAX_BPM.
    """
    if isinstance(bpm, bool) or not isinstance(bpm, int):
        raise InvalidTempoError(f"Tempo must be an integer, got {bpm!r}.")
    if bpm <= 0:
        raise InvalidTempoError(f"Tempo must be positive, got {bpm}.")
    if bpm > MAX_BPM:
        raise InvalidTempoError(f"Tempo must not exceed {MAX_BPM}, got {bpm}.")
    return bpm


@dataclass(frozen=True)
class Print:
    """Show (or sing) one character."""

    character: str


@dataclass(frozen=True)
class Pause:
    """Wait ``seconds`` before the next operation."""

    seconds: float


Operation = Print | Pause


@dataclass(frozen=True)
class ScanContext:
    """
    Flags carried between characters of a lyrics scan.

    Attributes:
        escaped:       The previous character was an unconsumed escape marker.
        ignore_spaces: A pause was just emitted; literal spaces are dropped.
    """

    escaped: bool = False
    ignore_spaces: bool = False


@dataclass(frozen=True)
class Song:
    """
    A parsed song description.

    Attributes:
        name:   Title taken from the first line.
        bpm:    Tempo in beats per minute, always positive.
        lyrics: Markup-annotated lyrics body, possibly empty.
        audio:  Caller-owned audio handle. Carried, never opened or closed.
    """

    name: str
    bpm: int
    lyrics: str
    audio: Any = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Song name must not be empty.")
        validate_bpm(self.bpm)

    def timeline(self, scanner: LyricsScanner | None = None) -> list[Operation]:
        """Scan the lyrics from a fresh context and return the operations."""
        from lyricbeat.lyrics_scanner import LyricsScanner

        return (scanner or LyricsScanner()).scan(self.lyrics, self.bpm)
