"""LyricsScanner: turns markup-annotated lyrics into Print/Pause operations."""

from collections.abc import Iterable
from enum import Enum

from lyricbeat.breakpoints import BREAKPOINTS, ESCAPE_CHARACTER, Breakpoint, build_breakpoint_map
from lyricbeat.song_models import Operation, Pause, Print, ScanContext, validate_bpm
from lyricbeat.state_machine import Handler, Step, drive


class ScanState(Enum):
    """Where the scanner is between two characters."""

    LITERAL = "literal"
    ESCAPED = "escaped"
    SUPPRESSING_SPACES = "suppressing_spaces"
    ESCAPED_WHILE_SUPPRESSING = "escaped_while_suppressing"


_CONTEXT_TO_STATE: dict[ScanContext, ScanState] = {
    ScanContext(escaped=False, ignore_spaces=False): ScanState.LITERAL,
    ScanContext(escaped=True, ignore_spaces=False): ScanState.ESCAPED,
    ScanContext(escaped=False, ignore_spaces=True): ScanState.SUPPRESSING_SPACES,
    ScanContext(escaped=True, ignore_spaces=True): ScanState.ESCAPED_WHILE_SUPPRESSING,
}
_STATE_TO_CONTEXT: dict[ScanState, ScanContext] = {
    state: context for context, state in _CONTEXT_TO_STATE.items()
}


class LyricsScanner:
    """
    Single forward pass over a lyrics body, one character at a time.

    Rules, in priority order
    ------------------------
    1. After an escape marker, the next character is printed as-is, whatever
       it is. Escaping does not end space suppression.
    2. The escape marker itself (``\\``) prints nothing.
    3. A breakpoint character emits a Pause of
       ``60 * (length / signature) / bpm`` seconds and starts suppressing
       spaces.
    4. Any other character is printed, except literal spaces while
       suppression is on. Tabs and newlines are never suppressed; printing
       any character ends suppression.

    The scanner holds nothing but its breakpoint table, so ``scan`` is pure.
    Callers that feed lyrics in pieces use ``resume`` and pass the returned
    ScanContext to the next call.
    """

    def __init__(self, breakpoints: Iterable[Breakpoint] = BREAKPOINTS) -> None:
        self.breakpoints = build_breakpoint_map(breakpoints)

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _build_policy(
        self,
        bpm: int,
        operations: list[Operation],
    ) -> dict[ScanState, Handler[ScanState]]:
        pauses = {char: Pause(bp.seconds_at(bpm)) for char, bp in self.breakpoints.items()}

        def unescaped(char: str, suppressing: bool) -> Step[ScanState]:
            if char == ESCAPE_CHARACTER:
                if suppressing:
                    return Step(ScanState.ESCAPED_WHILE_SUPPRESSING)
                return Step(ScanState.ESCAPED)
            pause = pauses.get(char)
            if pause is not None:
                operations.append(pause)
                return Step(ScanState.SUPPRESSING_SPACES)
            if suppressing and char == " ":
                return Step(ScanState.SUPPRESSING_SPACES)
            operations.append(Print(char))
            return Step(ScanState.LITERAL)

        def escaped(char: str, resume_in: ScanState) -> Step[ScanState]:
            operations.append(Print(char))
            return Step(resume_in)

        return {
            ScanState.LITERAL: lambda char: unescaped(char, suppressing=False),
            ScanState.SUPPRESSING_SPACES: lambda char: unescaped(char, suppressing=True),
            ScanState.ESCAPED: lambda char: escaped(char, ScanState.LITERAL),
            ScanState.ESCAPED_WHILE_SUPPRESSING: lambda char: escaped(
                char, ScanState.SUPPRESSING_SPACES
            ),
        }

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def resume(
        self,
        lyrics: str,
        bpm: int,
        context: ScanContext,
    ) -> tuple[list[Operation], ScanContext]:
        """
        Scan ``lyrics`` starting from ``context``.

        Args:
            lyrics:  Markup-annotated text.
            bpm:     Tempo used to size pauses.
            context: Flags left by the previous piece (``ScanContext()`` to
                     start fresh).

        Returns:
            The operations for this piece and the context to continue with.
            A trailing escape marker shows up as ``escaped=True``.

        Raises:
            InvalidTempoError: If bpm is not a positive integer.
        """
        validate_bpm(bpm)
        operations: list[Operation] = []
        policy = self._build_policy(bpm, operations)
        final_state, _ = drive(lyrics, _CONTEXT_TO_STATE[context], policy)
        return operations, _STATE_TO_CONTEXT[final_state]

    def scan(self, lyrics: str, bpm: int) -> list[Operation]:
        """
        Scan a complete lyrics body from a fresh context.

        Raises:
            InvalidTempoError: If bpm is not a positive integer.
        """
        operations, _ = self.resume(lyrics, bpm, ScanContext())
        return operations


def scan_lyrics(
    lyrics: str,
    bpm: int,
    breakpoints: Iterable[Breakpoint] = BREAKPOINTS,
) -> list[Operation]:
    """Scan ``lyrics`` with a one-off scanner over ``breakpoints``."""
    return LyricsScanner(breakpoints).scan(lyrics, bpm)
