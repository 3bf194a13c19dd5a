"""Point-sprite textures, textured quads and image placement transforms.

Matrices are 4x4 tuples of rows that act on column vectors: a point
``(x, y, z, 1)`` maps to ``M @ p``, so translations sit in the last column.
"""

from __future__ import annotations

import math
from typing import Sequence

from .image import Image

Vec3 = tuple[float, float, float]
Mat4 = tuple[
    tuple[float, float, float, float],
    tuple[float, float, float, float],
    tuple[float, float, float, float],
    tuple[float, float, float, float],
]

_BL: Vec3 = (-1.0, -1.0, 0.0)
_BR: Vec3 = (1.0, -1.0, 0.0)
_TL: Vec3 = (-1.0, 1.0, 0.0)
_TR: Vec3 = (1.0, 1.0, 0.0)
_ORIGIN: Vec3 = (0.0, 0.0, 0.0)


def point_sprite_disk(resolution: int = 64) -> Image:
    """White RGBA square whose alpha falls off linearly from the centre to a disk edge."""
    if resolution <= 0:
        raise ValueError("resolution must be positive")
    data = bytearray()
    for y in range(resolution):
        ny = 2.0 * y / resolution - 1.0
        for x in range(resolution):
            nx = 2.0 * x / resolution - 1.0
            alpha = max(0, int((1.0 - math.hypot(nx, ny)) * 255))
            data += bytes((255, 255, 255, alpha))
    return Image(resolution, resolution, 4, data)


def _point3(p: Sequence[float]) -> Vec3:
    if len(p) == 2:
        return (float(p[0]), float(p[1]), 0.0)
    if len(p) == 3:
        return (float(p[0]), float(p[1]), float(p[2]))
    raise ValueError(f"expected a 2D or 3D point, got {len(p)} components")


def image_quad(
    bl: Sequence[float] = _BL,
    br: Sequence[float] = _BR,
    tl: Sequence[float] = _TL,
    tr: Sequence[float] = _TR,
) -> list[float]:
    """Two textured triangles (x, y, z, u, v per vertex) covering a quad.

    Corners may be given as 2D points, which lie in the plane z = 0.
    """
    bl3, br3, tl3, tr3 = (_point3(p) for p in (bl, br, tl, tr))
    out: list[float] = []
    for pos, uv in (
        (tr3, (1.0, 1.0)),
        (br3, (1.0, 0.0)),
        (tl3, (0.0, 1.0)),
        (tl3, (0.0, 1.0)),
        (bl3, (0.0, 0.0)),
        (br3, (1.0, 0.0)),
    ):
        out += [*pos, *uv]
    return out


def _scaling(sx: float, sy: float, sz: float) -> Mat4:
    return (
        (sx, 0.0, 0.0, 0.0),
        (0.0, sy, 0.0, 0.0),
        (0.0, 0.0, sz, 0.0),
        (0.0, 0.0, 0.0, 1.0),
    )


def _translation(t: Sequence[float]) -> Mat4:
    return (
        (1.0, 0.0, 0.0, float(t[0])),
        (0.0, 1.0, 0.0, float(t[1])),
        (0.0, 0.0, 1.0, float(t[2])),
        (0.0, 0.0, 0.0, 1.0),
    )


def _matmul(a: Mat4, b: Mat4) -> Mat4:
    columns = list(zip(*b))
    return tuple(
        tuple(sum(x * y for x, y in zip(row, col)) for col in columns) for row in a
    )  # type: ignore[return-value]


def _relative_size(
    image_size: Sequence[int], window_size: Sequence[int]
) -> tuple[float, float]:
    width, height = window_size
    if width <= 0 or height <= 0:
        raise ValueError("window size must be positive")
    return image_size[0] / float(width), image_size[1] / float(height)


def image_transform(image_size: Sequence[int], window_size: Sequence[int]) -> Mat4:
    """Scaling that fits an image into the window while keeping its aspect ratio."""
    ax, ay = _relative_size(image_size, window_size)
    m = max(ax, ay)
    if m <= 0:
        raise ValueError("image size must be positive")
    return _scaling(ax / m, ay / m, 1.0)


def image_transform_fixed_height(
    image_size: Sequence[int],
    window_size: Sequence[int],
    height: float = 1.0,
    center: Sequence[float] = _ORIGIN,
) -> Mat4:
    """Place an image of the given height at a centre, width following its aspect."""
    ax, ay = _relative_size(image_size, window_size)
    if ay == 0:
        raise ValueError("image height must be positive")
    return _matmul(_translation(center), _scaling(height * ax / ay, height, 1.0))


def image_transform_fixed_width(
    image_size: Sequence[int],
    window_size: Sequence[int],
    width: float = 1.0,
    center: Sequence[float] = _ORIGIN,
) -> Mat4:
    """Place an image of the given width at a centre, height following its aspect."""
    ax, ay = _relative_size(image_size, window_size)
    if ax == 0:
        raise ValueError("image width must be positive")
    return _matmul(_translation(center), _scaling(width, width * ay / ax, 1.0))