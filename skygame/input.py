"""Keyboard-driven player input: key state and mapped axes and buttons."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import List, NamedTuple, Optional, Sequence, Tuple

MAX_KEYCODES = 255


class AxisInput(enum.IntEnum):
    """Analog controls a player has."""

    MOVE_X = 0
    MOVE_Y = 1


class ButtonInput(enum.IntEnum):
    """Digital controls a player has."""

    JUMP = 0


class InputType(enum.IntEnum):
    """What a mapping drives; ``END`` stops a mapping list."""

    AXIS = 0
    BUTTON = 1
    END = 2


class KeyStatus(enum.IntEnum):
    """Whether a key is held."""

    UP = 0
    DOWN = 1


class MouseStatus(enum.IntEnum):
    """What happened to the mouse."""

    DOWN = 0
    UP = 1
    MOVE = 2


class MouseButton(enum.IntFlag):
    """Mouse buttons held during an event."""

    NONE = 0
    LEFT = 1 << 0
    RIGHT = 1 << 1
    MID = 1 << 2


class MouseState(NamedTuple):
    """The most recent mouse event."""

    x: int
    y: int
    button: MouseButton
    status: MouseStatus


@dataclass(frozen=True)
class InputMapping:
    """Binds a key, or a pair of opposing keys, to an axis or a button."""

    type: InputType
    input_map: int
    key_code: int = 0
    axis_other_key_code: int = 0
    invert: bool = False


def key_code_from_ascii(key: str) -> int:
    """The system key code of a letter or digit; letters ignore case."""
    if len(key) != 1:
        raise ValueError(f"expected a single character, got {key!r}")
    if "0" <= key <= "9" or "A" <= key <= "Z":
        return ord(key)
    if "a" <= key <= "z":
        return ord(key) - ord("a") + ord("A")
    raise ValueError(f"no key code for {key!r}")


def default_mappings() -> Tuple[InputMapping, ...]:
    """D/A move along X, W/S move along Y and C jumps."""
    return (
        InputMapping(
            InputType.AXIS, AxisInput.MOVE_X, key_code_from_ascii("d"), key_code_from_ascii("a")
        ),
        InputMapping(
            InputType.AXIS, AxisInput.MOVE_Y, key_code_from_ascii("w"), key_code_from_ascii("s")
        ),
        InputMapping(InputType.BUTTON, ButtonInput.JUMP, key_code_from_ascii("c")),
    )


def _check_code(code: int) -> None:
    if not 0 <= code < MAX_KEYCODES:
        raise ValueError(f"key code {code} outside 0..{MAX_KEYCODES - 1}")


class InputHandler:
    """Receives key and mouse events and remembers the key state."""

    def __init__(self) -> None:
        self._key_map: List[KeyStatus] = [KeyStatus.UP] * MAX_KEYCODES
        self.mouse: Optional[MouseState] = None

    def receive_key(self, code: int, status: KeyStatus) -> None:
        """Record that key ``code`` went up or down."""
        _check_code(code)
        self._key_map[code] = KeyStatus(status)

    def mouse_event(self, x: int, y: int, button: MouseButton, status: MouseStatus) -> None:
        """Record a mouse event."""
        self.mouse = MouseState(x, y, MouseButton(button), MouseStatus(status))

    def key_status(self, code: int) -> KeyStatus:
        """Whether key ``code`` is held."""
        _check_code(code)
        return self._key_map[code]

    def _is_down(self, code: int) -> bool:
        return self.key_status(code) == KeyStatus.DOWN


class PlayerInput:
    """Axis and button values of one player, computed from key state."""

    def __init__(self, mappings: Optional[Sequence[InputMapping]] = None) -> None:
        self.mappings: Tuple[InputMapping, ...] = tuple(
            default_mappings() if mappings is None else mappings
        )
        for mapping in self.mappings:
            if mapping.type == InputType.AXIS and not 0 <= mapping.input_map < len(AxisInput):
                raise ValueError(f"no axis {mapping.input_map}")
            if mapping.type == InputType.BUTTON and not 0 <= mapping.input_map < len(ButtonInput):
                raise ValueError(f"no button {mapping.input_map}")
        self._axis_values = [0.0] * len(AxisInput)
        self._button_values = [False] * len(ButtonInput)

    def update(self, handler: InputHandler) -> None:
        """Recompute the axis and button values from ``handler``'s keys."""
        for mapping in self.mappings:
            if mapping.type == InputType.END:
                break
            if mapping.type == InputType.AXIS:
                value = (1.0 if handler._is_down(mapping.key_code) else 0.0) - (
                    1.0 if handler._is_down(mapping.axis_other_key_code) else 0.0
                )
                self._axis_values[mapping.input_map] = -value if mapping.invert else value
            elif mapping.type == InputType.BUTTON:
                self._button_values[mapping.input_map] = handler._is_down(mapping.key_code)

    def button_state(self, button: ButtonInput) -> bool:
        """Whether ``button`` is pressed."""
        return self._button_values[ButtonInput(button)]

    def axis_state(self, axis: AxisInput) -> float:
        """The value of ``axis``, from -1 to 1."""
        return self._axis_values[AxisInput(axis)]


def create_player_inputs(count: int) -> List[PlayerInput]:
    """Make ``count`` players using the default mappings."""
    if count < 0:
        raise ValueError("count must not be negative")
    mappings = default_mappings()
    return [PlayerInput(mappings) for _ in range(count)]