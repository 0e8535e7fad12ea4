"""Character-driven state machine shared by the song parser and the lyrics scanner."""

from collections.abc import Callable, Hashable, Mapping
from dataclasses import dataclass
from typing import Generic, TypeVar

S = TypeVar("S", bound=Hashable)


@dataclass(frozen=True)
class Step(Generic[S]):
    """
    What a state handler decided for the character under the cursor.

    Attributes:
        state:   State to be in for the next character.
        consume: Advance past the current character. A handler that hands the
                 character over to another state returns ``consume=False``.
        halt:    Stop walking; the cursor stays on the current character.
    """

    state: S
    consume: bool = True
    halt: bool = False


Handler = Callable[[str], Step[S]]


def drive(
    text: str,
    start_state: S,
    policy: Mapping[S, Handler[S]],
    start: int = 0,
) -> tuple[S, int]:
    """
    Walk ``text`` one character at a time, dispatching on the current state.

    Args:
        text:        Input characters.
        start_state: State the walk begins in.
        policy:      Handler for every state that can be reached.
        start:       Index of the first character to look at.

    Returns:
        ``(final_state, position)`` where position is ``len(text)`` unless a
        handler halted the walk early.

    Raises:
        KeyError:     If the walk reaches a state with no handler.
        RuntimeError: If a handler neither consumes nor changes state, which
                      would never terminate.
    """
    state = start_state
    position = start
    while position < len(text):
        step = policy[state](text[position])
        if step.halt:
            return step.state, position
        if not step.consume and step.state == state:
            raise RuntimeError(f"State {state!r} re-entered itself without consuming input.")
        state = step.state
        if step.consume:
            position += 1
    return state, position
