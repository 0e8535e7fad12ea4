"""Exceptions raised by the song parser, the Song model and the scanner."""

from enum import Enum


class SongError(Exception):
    """Base class for every failure raised by lyricbeat."""


class ParseFailureReason(str, Enum):
    """Why a song description could not be turned into a Song."""

    EMPTY_NAME = "empty_name"
    MISSING_BPM = "missing_bpm"
    BPM_OVERFLOW = "bpm_overflow"
    INVALID_TEMPO = "invalid_tempo"
    UNREADABLE = "unreadable"


class StructuralParseFailure(SongError):
    """
    Raised when a song description does not follow the file grammar.

    The parser never returns a partially built Song; the reason code tells
    the caller which rule was broken.
    """

    def __init__(self, reason: ParseFailureReason, message: str) -> None:
        self.reason = reason
        self.message = message
        super().__init__(f"{message} ({reason.value})")


class InvalidTempoError(SongError, ValueError):
    """Raised when a tempo is not a positive integer number of beats per minute."""
