"""Timeline: timing summary over a sequence of Print/Pause operations."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np

from lyricbeat.song_models import Operation, Pause, Print


@dataclass(frozen=True, eq=False)
class Timeline:
    """
    An operation sequence with each operation's start offset.

    Printing is instantaneous; only pauses move the clock forward, so an
    operation starts at the sum of the pauses before it.

    Attributes:
        operations:  The operations, in playback order.
        start_times: Start offset of each operation in seconds, shape (n,).
    """

    operations: tuple[Operation, ...]
    start_times: np.ndarray

    @classmethod
    def from_operations(cls, operations: Sequence[Operation]) -> Timeline:
        ops = tuple(operations)
        durations = np.array(
            [op.seconds if isinstance(op, Pause) else 0.0 for op in ops],
            dtype=float,
        )
        # Exclusive prefix sum: the first operation starts at zero.
        starts = np.concatenate(([0.0], np.cumsum(durations)[:-1])) if ops else np.zeros(0)
        return cls(operations=ops, start_times=starts)

    @property
    def total_duration(self) -> float:
        """Sum of every pause, in seconds."""
        return float(sum(op.seconds for op in self.operations if isinstance(op, Pause)))

    @property
    def pause_count(self) -> int:
        return sum(1 for op in self.operations if isinstance(op, Pause))

    @property
    def text(self) -> str:
        """All printed characters, joined."""
        return "".join(op.character for op in self.operations if isinstance(op, Print))

    def lines(self) -> list[tuple[float, str]]:
        """
        Split the printed text on newlines.

        Returns:
            ``(start_seconds, line_text)`` for each line, where a line starts
            when its first character (or its terminating newline, for an
            empty line) is printed. A trailing newline does not open a new
            line.
        """
        result: list[tuple[float, str]] = []
        current: list[str] = []
        line_start: float | None = None

        for op, start in zip(self.operations, self.start_times):
            if not isinstance(op, Print):
                continue
            if line_start is None:
                line_start = float(start)
            if op.character == "\n":
                result.append((line_start, "".join(current)))
                current = []
                line_start = None
            else:
                current.append(op.character)

        if line_start is not None:
            result.append((line_start, "".join(current)))
        return result
