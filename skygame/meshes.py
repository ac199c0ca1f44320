"""Built-in meshes: the editor grid and the unit quad."""

from __future__ import annotations

from typing import Tuple

import numpy as np

from skygame.vertex import FLOAT_SIZE, GL_FLOAT, VertexAttributeKind, VertexDef

TexQuadVertex = Tuple[Tuple[float, float, float], Tuple[float, float]]

_QUAD: Tuple[TexQuadVertex, ...] = (
    ((-1.0, -1.0, 0.0), (0.0, 0.0)),
    ((1.0, -1.0, 0.0), (1.0, 0.0)),
    ((-1.0, 1.0, 0.0), (0.0, 1.0)),
    ((-1.0, 1.0, 0.0), (0.0, 1.0)),
    ((1.0, -1.0, 0.0), (1.0, 0.0)),
    ((1.0, 1.0, 0.0), (1.0, 1.0)),
)


def editor_vert_def() -> VertexDef:
    """Layout of editor vertices: a position only."""
    vd = VertexDef(3 * FLOAT_SIZE, 1)
    vd.add_attribute(0, VertexAttributeKind.POSITION, 0, 3, GL_FLOAT)
    return vd


def tex_quad_vert_def() -> VertexDef:
    """Layout of textured quad vertices: a position then a texture coordinate."""
    vd = VertexDef(5 * FLOAT_SIZE, 2)
    vd.add_attribute(0, VertexAttributeKind.POSITION, 0, 3, GL_FLOAT)
    vd.add_attribute(1, VertexAttributeKind.UV, 3 * FLOAT_SIZE, 2, GL_FLOAT)
    return vd


def unit_quad() -> Tuple[TexQuadVertex, ...]:
    """The two triangles covering -1..1 in X and Y, with texture coordinates."""
    return _QUAD


def create_grid_vertices(num_grid_lines: int, grid_spacing: float) -> np.ndarray:
    """Line-list vertices of a square grid in the XY plane centred on the origin.

    The result has shape ``(4 * num_grid_lines, 3)``: first the lines along
    X, then the lines along Y, each as a pair of end points.
    """
    if num_grid_lines < 0:
        raise ValueError("num_grid_lines must not be negative")
    if num_grid_lines == 0:
        return np.zeros((0, 3), dtype=np.float32)

    spacing = np.float32(grid_spacing)
    extent = np.float32(num_grid_lines - 1) * spacing / np.float32(2.0)
    steps = -extent + spacing * np.arange(num_grid_lines, dtype=np.float32)

    horizontal = np.zeros((num_grid_lines, 2, 3), dtype=np.float32)
    horizontal[:, 0, 0] = -extent
    horizontal[:, 1, 0] = extent
    horizontal[:, :, 1] = steps[:, None]

    vertical = np.zeros((num_grid_lines, 2, 3), dtype=np.float32)
    vertical[:, :, 0] = steps[:, None]
    vertical[:, 0, 1] = -extent
    vertical[:, 1, 1] = extent

    return np.concatenate((horizontal, vertical)).reshape(-1, 3)