"""Unit tests for TerminalRenderer with injected echo/sleep."""

import pytest

from lyricbeat.song_models import Pause, Print
from lyricbeat.terminal_renderer import TerminalRenderer


class _Recorder:
    def __init__(self) -> None:
        self.events: list[tuple[str, object]] = []

    def echo(self, message: str | None = None, nl: bool = True) -> None:
        self.events.append(("echo", message))

    def sleep(self, seconds: float) -> None:
        self.events.append(("sleep", seconds))


def test_render_plays_operations_in_order() -> None:
    recorder = _Recorder()
    renderer = TerminalRenderer(echo=recorder.echo, sleep=recorder.sleep)
    slept = renderer.render([Print("a"), Pause(0.5), Print("b")])
    assert recorder.events == [
        ("echo", "a"),
        ("sleep", 0.5),
        ("echo", "b"),
        ("echo", None),
    ]
    assert slept == pytest.approx(0.5)


def test_speed_divides_pauses() -> None:
    recorder = _Recorder()
    renderer = TerminalRenderer(echo=recorder.echo, sleep=recorder.sleep, speed=2.0)
    assert renderer.render([Pause(1.0)]) == pytest.approx(0.5)
    assert ("sleep", 0.5) in recorder.events


def test_non_positive_speed_is_rejected() -> None:
    with pytest.raises(ValueError):
        TerminalRenderer(speed=0)
