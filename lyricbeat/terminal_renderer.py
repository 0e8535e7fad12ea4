"""TerminalRenderer: plays a timeline by echoing characters and sleeping on pauses."""

import time
from collections.abc import Callable, Iterable

import click

from lyricbeat.song_models import Operation, Pause, Print


class TerminalRenderer:
    """
    Real-time sink for Print/Pause operations.

    ``echo`` and ``sleep`` are injectable so the renderer can be driven
    without a terminal or a real clock.
    """

    def __init__(
        self,
        echo: Callable[..., None] = click.echo,
        sleep: Callable[[float], None] = time.sleep,
        speed: float = 1.0,
    ) -> None:
        if speed <= 0:
            raise ValueError(f"Playback speed must be positive, got {speed}.")
        self.echo = echo
        self.sleep = sleep
        self.speed = speed

    def render(self, operations: Iterable[Operation]) -> float:
        """
        Play ``operations`` in order.

        Returns:
            Total time slept, in seconds.
        """
        slept = 0.0
        for op in operations:
            if isinstance(op, Print):
                self.echo(op.character, nl=False)
            elif isinstance(op, Pause):
                delay = op.seconds / self.speed
                self.sleep(delay)
                slept += delay
        self.echo()
        return slept
