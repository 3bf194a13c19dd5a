"""Wireframe edges from triangle data, and thick lines built from triangles.

Vertex data is a flat sequence of floats, ``comp_count`` floats per vertex.
Line vertices for thick lines use seven floats each: x, y, z, r, g, b, a.
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Sequence

Vec3 = tuple[float, float, float]

_LINE_COMPONENTS = 7


class LineDrawType(Enum):
    """How consecutive line vertices are joined."""

    LIST = "list"
    STRIP = "strip"
    LOOP = "loop"


class TrisDrawType(Enum):
    """How consecutive triangle vertices are joined."""

    LIST = "list"
    STRIP = "strip"
    FAN = "fan"


def _vertex(data: Sequence[float], index: int, comp_count: int) -> list[float]:
    start = index * comp_count
    return list(data[start : start + comp_count])


def _edges(v0: list[float], v1: list[float], v2: list[float]) -> list[float]:
    return v0 + v1 + v1 + v2 + v2 + v0


def _check_comp_count(comp_count: int) -> None:
    if comp_count <= 0:
        raise ValueError("comp_count must be positive")


def triangles_to_lines(data: Sequence[float], comp_count: int = 7) -> list[float]:
    """Edge pairs of independent triangles; empty if the data is not whole triangles."""
    _check_comp_count(comp_count)
    per_triangle = 3 * comp_count
    if len(data) % per_triangle != 0:
        return []
    out: list[float] = []
    for t in range(len(data) // per_triangle):
        base = 3 * t
        out += _edges(
            _vertex(data, base, comp_count),
            _vertex(data, base + 1, comp_count),
            _vertex(data, base + 2, comp_count),
        )
    return out


def triangle_strip_to_lines(data: Sequence[float], comp_count: int = 7) -> list[float]:
    """Edge pairs of a triangle strip, keeping the strip's alternating winding."""
    _check_comp_count(comp_count)
    total = len(data) // comp_count
    out: list[float] = []
    if total < 3:
        return out
    for i in range(2, total):
        if i % 2 == 0:
            a, b = i - 2, i - 1
        else:
            a, b = i - 1, i - 2
        out += _edges(
            _vertex(data, a, comp_count),
            _vertex(data, b, comp_count),
            _vertex(data, i, comp_count),
        )
    return out


def triangle_fan_to_lines(data: Sequence[float], comp_count: int = 7) -> list[float]:
    """Edge pairs of a triangle fan around its first vertex."""
    _check_comp_count(comp_count)
    total = len(data) // comp_count
    out: list[float] = []
    if total < 3:
        return out
    center = _vertex(data, 0, comp_count)
    for i in range(1, total - 1):
        out += _edges(
            center,
            _vertex(data, i, comp_count),
            _vertex(data, i + 1, comp_count),
        )
    return out


def wireframe_lines(
    data: Sequence[float], draw_type: TrisDrawType, comp_count: int = 7
) -> list[float]:
    """Line-list vertices outlining every triangle of the given layout."""
    converters = {
        TrisDrawType.LIST: triangles_to_lines,
        TrisDrawType.STRIP: triangle_strip_to_lines,
        TrisDrawType.FAN: triangle_fan_to_lines,
    }
    try:
        converter = converters[TrisDrawType(draw_type)]
    except ValueError as exc:
        raise ValueError(f"unknown triangle layout: {draw_type!r}") from exc
    return converter(data, comp_count)


def _sub(a: Sequence[float], b: Sequence[float]) -> Vec3:
    return (a[0] - b[0], a[1] - b[1], a[2] - b[2])


def _add(a: Sequence[float], b: Sequence[float]) -> Vec3:
    return (a[0] + b[0], a[1] + b[1], a[2] + b[2])


def _dot(a: Sequence[float], b: Sequence[float]) -> float:
    return a[0] * b[0] + a[1] * b[1] + a[2] * b[2]


def _cross(a: Sequence[float], b: Sequence[float]) -> Vec3:
    return (
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


def _normalize(v: Sequence[float]) -> Vec3:
    length = math.sqrt(_dot(v, v))
    if length == 0.0:
        return (0.0, 0.0, 0.0)
    return (v[0] / length, v[1] / length, v[2] / length)


def _position(data: Sequence[float], index: int) -> Vec3:
    start = index * _LINE_COMPONENTS
    return (data[start], data[start + 1], data[start + 2])


def _color(data: Sequence[float], index: int) -> list[float]:
    start = index * _LINE_COMPONENTS
    return list(data[start + 3 : start + 7])


def _segment_quad(
    p0: Vec3,
    p1: Vec3,
    c1: list[float],
    p2: Vec3,
    c2: list[float],
    p3: Vec3,
    scale: Vec3,
    view_dir: Vec3,
) -> list[float]:
    """Two triangles covering the segment p1-p2, mitred towards p0 and p3."""
    c_perp = _cross(_normalize(_sub(p2, p1)), view_dir)
    p_perp = _cross(_normalize(_sub(p1, p0)), view_dir)
    n_perp = _cross(_normalize(_sub(p3, p2)), view_dir)

    def separation(side: Vec3) -> Vec3:
        s = _add(side, c_perp)
        d = max(1.0, _dot(s, c_perp))
        return (s[0] / d * scale[0], s[1] / d * scale[1], s[2] / d * scale[2])

    p_sep = separation(p_perp)
    n_sep = separation(n_perp)
    p1_plus, p1_minus = _add(p1, p_sep), _sub(p1, p_sep)
    p2_plus, p2_minus = _add(p2, n_sep), _sub(p2, n_sep)

    out: list[float] = []
    for pos, col in (
        (p1_plus, c1),
        (p2_plus, c2),
        (p1_minus, c1),
        (p2_plus, c2),
        (p2_minus, c2),
        (p1_minus, c1),
    ):
        out += list(pos) + col
    return out


def thick_line_triangles(
    data: Sequence[float],
    draw_type: LineDrawType,
    line_thickness: float,
    framebuffer_size: tuple[int, int],
    view_dir: Sequence[float] = (0.0, 0.0, 1.0),
) -> list[float]:
    """Triangle-list vertices (x, y, z, r, g, b, a) drawing lines of a given pixel width.

    ``framebuffer_size`` is (width, height) in pixels and ``view_dir`` the
    viewing direction the lines are widened across.
    """
    width, height = framebuffer_size
    if width <= 0 or height <= 0:
        raise ValueError("framebuffer size must be positive")
    scale: Vec3 = (
        2.0 / width * line_thickness,
        2.0 / height * line_thickness,
        1.0 * line_thickness,
    )
    view = _normalize(view_dir)
    draw_type = LineDrawType(draw_type)
    n = len(data) // _LINE_COMPONENTS
    out: list[float] = []

    def emit(i0: int, i1: int, i2: int, i3: int) -> None:
        out.extend(
            _segment_quad(
                _position(data, i0),
                _position(data, i1),
                _color(data, i1),
                _position(data, i2),
                _color(data, i2),
                _position(data, i3),
                scale,
                view,
            )
        )

    if draw_type is LineDrawType.LIST:
        for i1 in range(0, n - 1, 2):
            i2 = i1 + 1
            p1, p2 = _position(data, i1), _position(data, i2)
            i0 = i1 - 2 if i1 >= 2 and p1 == _position(data, i1 - 1) else i1
            i3 = i1 + 2 if i2 + 2 < n and p2 == _position(data, i2 + 1) else i2
            emit(i0, i1, i2, i3)
    elif draw_type is LineDrawType.STRIP:
        for i in range(n - 1):
            i0 = 0 if i == 0 else i - 1
            i2 = i + 1
            i3 = i2 if i == n - 2 else i2 + 1
            emit(i0, i, i2, i3)
    else:
        for i in range(n):
            i0 = 0 if i == 0 else i - 1
            i2 = (i + 1) % n
            i3 = i2 if i == n - 1 else (i2 + 1) % n
            emit(i0, i, i2, i3)
    return out