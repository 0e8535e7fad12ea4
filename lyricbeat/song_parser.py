"""SongParser: reads a song description file into a Song."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Final

from lyricbeat.errors import InvalidTempoError, ParseFailureReason, StructuralParseFailure
from lyricbeat.song_models import MAX_BPM, Song
from lyricbeat.state_machine import Handler, Step, drive

DEFAULT_ENCODING: Final[str] = "utf-8"
WHITESPACE: Final[frozenset[str]] = frozenset("\n \t")
DIGITS: Final[frozenset[str]] = frozenset("0123456789")


class ParserState(Enum):
    """Grammar positions, visited strictly in declaration order."""

    FINDING_NAME = "finding_name"
    FINDING_BPM = "finding_bpm"
    DISCARDING_REST_OF_LINE = "discarding_rest_of_line"
    SKIPPING_LEADING_WHITESPACE = "skipping_leading_whitespace"
    FINDING_LYRICS = "finding_lyrics"


@dataclass
class _Fields:
    name: list[str] = field(default_factory=list)
    digits: list[str] = field(default_factory=list)


class SongParser:
    """
    Parse the plain-text song description format::

        <Name line>
        <BPM digits><rest of line discarded>
        <lyrics body verbatim, to end of input>

    Whitespace (newline, space, tab) between the name line and the BPM
    digits, and between the BPM line and the lyrics, is skipped. Everything
    from the first non-whitespace lyrics character to the end of input is
    kept exactly, trailing whitespace included.

    Every failure raises StructuralParseFailure; no partial Song is built.
    """

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _build_policy(self, fields: _Fields) -> dict[ParserState, Handler[ParserState]]:
        def finding_name(char: str) -> Step[ParserState]:
            if char != "\n":
                fields.name.append(char)
                return Step(ParserState.FINDING_NAME)
            if not fields.name:
                raise StructuralParseFailure(
                    ParseFailureReason.EMPTY_NAME, "The first line (song name) is empty"
                )
            return Step(ParserState.FINDING_BPM)

        def finding_bpm(char: str) -> Step[ParserState]:
            if char in DIGITS:
                fields.digits.append(char)
                return Step(ParserState.FINDING_BPM)
            if not fields.digits:
                if char in WHITESPACE:
                    return Step(ParserState.FINDING_BPM)
                raise StructuralParseFailure(
                    ParseFailureReason.MISSING_BPM,
                    f"Expected BPM digits after the song name, found {char!r}",
                )
            return Step(ParserState.DISCARDING_REST_OF_LINE, consume=False)

        def discarding_rest_of_line(char: str) -> Step[ParserState]:
            if char == "\n":
                return Step(ParserState.SKIPPING_LEADING_WHITESPACE)
            return Step(ParserState.DISCARDING_REST_OF_LINE)

        def skipping_leading_whitespace(char: str) -> Step[ParserState]:
            if char in WHITESPACE:
                return Step(ParserState.SKIPPING_LEADING_WHITESPACE)
            return Step(ParserState.FINDING_LYRICS, consume=False)

        def finding_lyrics(char: str) -> Step[ParserState]:
            return Step(ParserState.FINDING_LYRICS, halt=True)

        return {
            ParserState.FINDING_NAME: finding_name,
            ParserState.FINDING_BPM: finding_bpm,
            ParserState.DISCARDING_REST_OF_LINE: discarding_rest_of_line,
            ParserState.SKIPPING_LEADING_WHITESPACE: skipping_leading_whitespace,
            ParserState.FINDING_LYRICS: finding_lyrics,
        }

    def _to_bpm(self, digits: list[str]) -> int:
        if not digits:
            raise StructuralParseFailure(
                ParseFailureReason.MISSING_BPM, "No BPM line follows the song name"
            )
        significant = "".join(digits).lstrip("0")
        # Length check first: int() caps the size of digit strings.
        if len(significant) > len(str(MAX_BPM)) or int(significant or "0") > MAX_BPM:
            raise StructuralParseFailure(
                ParseFailureReason.BPM_OVERFLOW,
                f"BPM {''.join(digits)} does not fit in 32 bits",
            )
        return int(significant or "0")

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def parse_fields(self, text: str) -> tuple[str, int, str]:
        """
        Run the grammar over ``text`` and return ``(name, bpm, lyrics)``.

        The BPM is only checked for presence and 32-bit range here; a zero
        tempo is rejected when the Song is built.

        Raises:
            StructuralParseFailure: If the name is empty or the BPM is
                                    missing, non-numeric or too large.
        """
        fields = _Fields()
        state, position = drive(text, ParserState.FINDING_NAME, self._build_policy(fields))

        if not fields.name:
            raise StructuralParseFailure(
                ParseFailureReason.EMPTY_NAME, "The first line (song name) is empty"
            )
        bpm = self._to_bpm(fields.digits)
        lyrics = text[position:] if state is ParserState.FINDING_LYRICS else ""
        return "".join(fields.name), bpm, lyrics

    def parse(self, text: str, audio: Any = None) -> Song:
        """
        Parse a song description into a Song carrying ``audio``.

        Raises:
            StructuralParseFailure: On any grammar violation or a zero tempo.
        """
        name, bpm, lyrics = self.parse_fields(text)
        try:
            return Song(name=name, bpm=bpm, lyrics=lyrics, audio=audio)
        except InvalidTempoError as exc:
            raise StructuralParseFailure(ParseFailureReason.INVALID_TEMPO, str(exc)) from exc

    def load(self, path: str | Path, audio: Any = None, encoding: str = DEFAULT_ENCODING) -> Song:
        """
        Read a song description file and parse it.

        Raises:
            StructuralParseFailure: If the file cannot be read or decoded, or
                                    its contents do not parse.
        """
        try:
            text = Path(path).read_text(encoding=encoding)
        except (OSError, UnicodeDecodeError) as exc:
            raise StructuralParseFailure(
                ParseFailureReason.UNREADABLE, f"Could not read '{path}': {exc}"
            ) from exc
        return self.parse(text, audio=audio)


_DEFAULT_PARSER = SongParser()


def parse_song(text: str, audio: Any = None) -> Song:
    """Parse ``text`` with the default SongParser."""
    return _DEFAULT_PARSER.parse(text, audio=audio)


def load_song(path: str | Path, audio: Any = None) -> Song:
    """Load and parse the file at ``path`` with the default SongParser."""
    return _DEFAULT_PARSER.load(path, audio=audio)
