"""Mapping from raw input to session commands."""

from __future__ import annotations

from enum import Enum
from typing import Dict, Optional

from .session import Session


class Command(str, Enum):
    MOVE_LEFT = "move_left"
    MOVE_RIGHT = "move_right"
    SOFT_DROP = "soft_drop"
    ROTATE_CW = "rotate_cw"
    HARD_DROP = "hard_drop"
    PAUSE_TOGGLE = "pause_toggle"


# Keyed by the DOM ``KeyboardEvent.key`` value.
KEY_BINDINGS: Dict[str, Command] = {
    "ArrowLeft": Command.MOVE_LEFT,
    "ArrowRight": Command.MOVE_RIGHT,
    "ArrowDown": Command.SOFT_DROP,
    "ArrowUp": Command.ROTATE_CW,
    " ": Command.HARD_DROP,
    "p": Command.PAUSE_TOGGLE,
}

# Element ids of the on-screen touch buttons.
TOUCH_BINDINGS: Dict[str, Command] = {
    "leftTouch": Command.MOVE_LEFT,
    "rightTouch": Command.MOVE_RIGHT,
    "downTouch": Command.SOFT_DROP,
    "rotateTouch": Command.ROTATE_CW,
}


def command_for_key(key: str) -> Optional[Command]:
    """Return the command bound to ``key``, ignoring letter case."""

    command = KEY_BINDINGS.get(key)
    if command is None and len(key) == 1:
        command = KEY_BINDINGS.get(key.lower())
    return command


def dispatch(session: Session, command: Command) -> None:
    """Apply ``command`` to ``session``.

    The session itself ignores gameplay commands unless a game is running,
    so this can be called for every input event.
    """

    if command is Command.MOVE_LEFT:
        session.move_left()
    elif command is Command.MOVE_RIGHT:
        session.move_right()
    elif command is Command.SOFT_DROP:
        session.soft_drop()
    elif command is Command.ROTATE_CW:
        session.rotate(1)
    elif command is Command.HARD_DROP:
        session.hard_drop()
    elif command is Command.PAUSE_TOGGLE:
        session.pause_toggle()
