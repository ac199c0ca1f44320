"""Shader program identifiers and their source files."""

from __future__ import annotations

import enum
import os
from typing import NamedTuple, Optional, Union

from skygame.files import load_entire_file


class ShaderId(enum.IntEnum):
    """The shader programs the game uses."""

    CONSTANT_COLOR = 0
    ENVIRONMENT = 1
    CHARACTER = 2
    ATMOSPHERICS = 3
    PARTICLE_GEN = 4
    PARTICLE_SIM = 5


class ShaderFiles(NamedTuple):
    """Source files of one program; ``geometry`` is ``None`` when there is no such stage."""

    vertex: str
    geometry: Optional[str]
    pixel: str


_SHADER_FILES = {
    ShaderId.CONSTANT_COLOR: ShaderFiles("standard.vsh", None, "constant_color.psh"),
    ShaderId.ENVIRONMENT: ShaderFiles("environment.vsh", None, "environment.psh"),
    ShaderId.CHARACTER: ShaderFiles("character.vsh", None, "character.psh"),
    ShaderId.ATMOSPHERICS: ShaderFiles("alignedquad.vsh", None, "atmospherics.psh"),
    ShaderId.PARTICLE_GEN: ShaderFiles("alignedquad.vsh", None, "particle_gen.psh"),
    ShaderId.PARTICLE_SIM: ShaderFiles(
        "particle_sim.vsh", "particle_sim.gsh", "particle_sim.psh"
    ),
}


def shader_files(shader_id: Union[ShaderId, int]) -> ShaderFiles:
    """The vertex, geometry and pixel shader files of ``shader_id``."""
    return _SHADER_FILES[ShaderId(shader_id)]


def read_shader_source(filename: Union[str, os.PathLike]) -> str:
    """Read the text of a shader source file."""
    return load_entire_file(filename, "r")