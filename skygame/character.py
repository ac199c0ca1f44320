"""The player character: movement from input and its placement in the world."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Optional, Union

import numpy as np

from skygame.input import AxisInput, PlayerInput
from skygame.persist import persist_create_from_config
from skygame.reflect import Member, reflect_type

CHARACTER_CONFIG = os.path.join("data", "character.json")


def smooth_input(x: float) -> float:
    """Shape an axis value so small deflections move slowly, keeping its sign."""
    return 10 * x * x * (1 if x >= 0 else -1)


@reflect_type(Member(float, "speed", "Speed"), Member(float, "height", "Height"))
@dataclass(eq=False)
class Character:
    """A character moved by one player's input."""

    speed: float = 0.0
    height: float = 0.0
    location: np.ndarray = field(default_factory=lambda: np.zeros(3))
    input: Optional[PlayerInput] = None

    def _axis(self, axis: AxisInput) -> float:
        return self.input.axis_state(axis) if self.input is not None else 0.0

    def update(self, delta_time: float) -> None:
        """Move by the player's input over ``delta_time`` seconds."""
        direction = np.array(
            [
                smooth_input(self._axis(AxisInput.MOVE_X)),
                smooth_input(self._axis(AxisInput.MOVE_Y)),
                0.0,
            ]
        )
        self.location = self.location + self.speed * delta_time * direction

    def local_to_world(self, aspect: float) -> np.ndarray:
        """Placement of the unit sprite quad, for a sprite of width/height ``aspect``."""
        if aspect == 0:
            raise ValueError("aspect must not be zero")
        translation = np.identity(4)
        translation[:3, 3] = self.location
        scale = np.diag([self.height, self.height / aspect, 1.0, 1.0])
        return translation @ scale


def create_character(
    player_input: Optional[PlayerInput],
    path: Union[str, os.PathLike] = CHARACTER_CONFIG,
) -> Character:
    """Load a character's settings from ``path`` and attach ``player_input``."""
    character = persist_create_from_config(Character, path)
    character.location = np.zeros(3)
    character.input = player_input
    return character