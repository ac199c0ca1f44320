"""The layered parallax backdrop of a world and its light scattering settings."""

from __future__ import annotations

import math
import os
from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union

import numpy as np

from skygame.bitmap import Bitmap, load_bmp
from skygame.camera import Camera
from skygame.persist import persist_create_from_config
from skygame.reflect import Member, reflect_type

DATA_ROOT = "data"

Color = Tuple[float, float, float, float]


@reflect_type(Member(float, "x", "X"), Member(float, "y", "Y"), Member(float, "z", "Z"))
@dataclass
class _Vector3:
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def as_array(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z], dtype=np.float64)


@reflect_type(
    Member(_Vector3, "light_source", "LightLocation"),
    Member(_Vector3, "sun_color", "LightColor"),
    Member(float, "sun_power", "LightPower"),
    Member(float, "num_samples", "NumSamples"),
    Member(float, "weight", "Weight"),
    Member(float, "decay", "Decay"),
    Member(float, "extinction", "Extinction"),
    Member(float, "ambient", "Ambient"),
    Member(float, "angular", "Angular"),
    Member(float, "out_scattering", "Outscattering"),
    Member(float, "rayleigh", "Rayleigh"),
    Member(float, "mie", "Mie"),
    Member(float, "mie_eccentricity", "MieEccentricity"),
)
@dataclass
class Scattering:
    """Settings of the atmospheric light scattering pass."""

    light_source: _Vector3 = field(default_factory=_Vector3)
    sun_color: _Vector3 = field(default_factory=_Vector3)
    sun_power: float = 0.0
    num_samples: float = 0.0
    weight: float = 0.0
    decay: float = 0.0
    extinction: float = 0.0
    ambient: float = 0.0
    angular: float = 0.0
    out_scattering: float = 0.0
    rayleigh: float = 0.0
    mie: float = 0.0
    mie_eccentricity: float = 0.0


@reflect_type(Member(float, "parallax", "Depth"))
@dataclass(eq=False)
class EnvLayer:
    """One backdrop image and how far away it appears."""

    parallax: float = 0.0
    height: float = 0.0
    aspect: float = 1.0
    color_mask: Color = (1.0, 1.0, 1.0, 1.0)
    bitmap: Optional[Bitmap] = None


@reflect_type(
    Member(int, "num_layers", "NumLayers"),
    Member(float, "screen_height", "ScreenHeight"),
    Member(Scattering, "scattering", "Scattering"),
    Member(_Vector3, "bounds", "BoundsPx"),
)
@dataclass(eq=False)
class Environment:
    """A world's backdrop layers, scattering settings and camera bounds."""

    num_layers: int = 0
    screen_height: float = 0.0
    scattering: Scattering = field(default_factory=Scattering)
    bounds: _Vector3 = field(default_factory=_Vector3)
    layers: List[EnvLayer] = field(default_factory=list)

    def layers_back_to_front(self) -> List[EnvLayer]:
        """The layers in drawing order: the background first, drawn opaque, then nearer ones."""
        return list(reversed(self.layers))


def init_env_layer(
    texture_path: Union[str, os.PathLike], parallax: float, screen_height: float
) -> EnvLayer:
    """Load a layer image; its height is measured in screen heights."""
    if screen_height == 0:
        raise ValueError("screen_height must not be zero")
    img = load_bmp(texture_path)
    if img.height == 0:
        raise ValueError(f"{os.fspath(texture_path)} has no rows")
    return EnvLayer(
        parallax=parallax,
        height=img.height / screen_height,
        aspect=img.width / img.height,
        bitmap=img,
    )


def layer_transform(layer: EnvLayer, camera: Camera) -> np.ndarray:
    """Placement of the unit quad for ``layer`` as seen by ``camera``."""
    parallax_factor = (1.0 - layer.parallax) ** 2

    # The camera location is carried through as a direction (w = 0).
    projected = camera.world_to_projection()[:, :3] @ camera.location
    projected = projected / projected[3]
    camera_location = np.array([projected[0], projected[1], 0.0])

    height = layer.height
    aspect = layer.aspect / camera.aspect
    bg_offset = np.array([aspect * height - 1.0, height - 1.0, 0.0])

    translation = np.identity(4)
    translation[:3, 3] = bg_offset + camera_location * parallax_factor
    scale = np.diag([aspect * height, height, 1.0, 1.0])
    return translation @ scale


def init_environment(
    world: str, camera: Camera, data_root: Union[str, os.PathLike] = DATA_ROOT
) -> Environment:
    """Load the world ``world`` and bound ``camera`` to its extent."""
    path = os.path.join(os.fspath(data_root), "world", world)
    env = persist_create_from_config(Environment, os.path.join(path, "world.json"))

    if env.screen_height == 0:
        raise ValueError("ScreenHeight must not be zero")
    env.bounds = _Vector3(
        env.bounds.x / env.screen_height, env.bounds.y / env.screen_height, 0.0
    )
    camera.set_bounds(env.bounds.as_array())

    num_layers = env.num_layers
    denominator = num_layers - 1
    layers: List[EnvLayer] = []
    for i in range(num_layers):
        # A single layer divides zero by zero, giving no defined depth.
        parallax = i / denominator if denominator else math.nan
        layers.append(
            init_env_layer(os.path.join(path, f"{i + 1}.bmp"), parallax, env.screen_height)
        )

    background = init_env_layer(os.path.join(path, "BG.bmp"), 1.0, env.screen_height)
    background.color_mask = (1.0, 1.0, 1.0, 0.0)
    layers.append(background)

    env.layers = layers
    return env