"""lyricbeat: tempo-synchronised lyrics timelines from plain-text song files."""

from lyricbeat.breakpoints import BREAKPOINTS, Breakpoint
from lyricbeat.errors import (
    InvalidTempoError,
    ParseFailureReason,
    SongError,
    StructuralParseFailure,
)
from lyricbeat.lyrics_scanner import LyricsScanner, scan_lyrics
from lyricbeat.song_models import Operation, Pause, Print, ScanContext, Song
from lyricbeat.song_parser import SongParser, load_song, parse_song

__version__ = "0.1.0"

__all__ = [
    "BREAKPOINTS",
    "Breakpoint",
    "InvalidTempoError",
    "LyricsScanner",
    "Operation",
    "ParseFailureReason",
    "Pause",
    "Print",
    "ScanContext",
    "Song",
    "SongError",
    "SongParser",
    "StructuralParseFailure",
    "load_song",
    "parse_song",
    "scan_lyrics",
]
