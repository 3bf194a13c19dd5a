"""Reader for triangle meshes in the Wavefront OBJ text format."""

from __future__ import annotations

import math
import os
import re
from dataclasses import dataclass, field
from typing import Iterable

Vec3 = tuple[float, float, float]

_INT_RE = re.compile(r"[+-]?\d+")
_FLOAT_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


@dataclass
class ObjMesh:
    """Triangle indices (zero based), vertex positions and per-vertex normals."""

    indices: list[tuple[int, int, int]] = field(default_factory=list)
    vertices: list[Vec3] = field(default_factory=list)
    normals: list[Vec3] = field(default_factory=list)


def _leading_int(token: str) -> int:
    match = _INT_RE.match(token)
    return int(match.group()) if match else 0


def _leading_float(token: str) -> float:
    match = _FLOAT_RE.match(token)
    return float(match.group()) if match else 0.0


def _sub(a: Vec3, b: Vec3) -> Vec3:
    return (a[0] - b[0], a[1] - b[1], a[2] - b[2])


def _cross(a: Vec3, b: Vec3) -> Vec3:
    return (
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


def _unit(v: Vec3) -> Vec3:
    length = math.sqrt(v[0] * v[0] + v[1] * v[1] + v[2] * v[2])
    if length == 0.0:
        return (0.0, 0.0, 0.0)
    return (v[0] / length, v[1] / length, v[2] / length)


def parse_obj(lines: Iterable[str], normalize: bool = False) -> ObjMesh:
    """Parse OBJ lines: 'v', 'vn' and triangular 'f' records; others are ignored.

    With normalize, vertices are centred and scaled so the largest extent is 1.
    Normals are accumulated from face normals on top of any read from the file.
    """
    mesh = ObjMesh()
    for raw in lines:
        line = raw.strip()
        if len(line) < 2:
            continue
        kind = line[0]
        if kind == "f":
            tokens = line[1:].split()
            if len(tokens) != 3:
                continue
            face = tuple(_leading_int(t) - 1 for t in tokens)
            if any(i < 0 for i in face):
                raise ValueError(f"invalid face record: {line!r}")
            mesh.indices.append(face)
        elif kind == "v":
            if line[1] == "n":
                tokens = line[2:].split()
                if len(tokens) == 3:
                    mesh.normals.append(tuple(_leading_float(t) for t in tokens))
            elif line[1].isspace():
                tokens = line[1:].split()
                if len(tokens) == 3:
                    mesh.vertices.append(tuple(_leading_float(t) for t in tokens))

    if normalize and mesh.vertices:
        lo = tuple(min(v[i] for v in mesh.vertices) for i in range(3))
        hi = tuple(max(v[i] for v in mesh.vertices) for i in range(3))
        center = tuple((h + l) / 2.0 for h, l in zip(hi, lo))
        max_size = max(h - l for h, l in zip(hi, lo))
        scale = 1.0 / max_size if max_size else 1.0
        mesh.vertices = [
            tuple((c - m) * scale for c, m in zip(v, center)) for v in mesh.vertices
        ]

    count = len(mesh.vertices)
    normals = [tuple(n) for n in mesh.normals[:count]]
    normals += [(0.0, 0.0, 0.0)] * (count - len(normals))
    for a, b, c in mesh.indices:
        v0, v1, v2 = mesh.vertices[a], mesh.vertices[b], mesh.vertices[c]
        face_normal = _cross(_sub(v1, v0), _sub(v2, v0))
        # each face contributes its normal three times relative to file normals
        weighted = tuple(3.0 * n for n in face_normal)
        for i in (a, b, c):
            normals[i] = tuple(p + q for p, q in zip(normals[i], weighted))
    mesh.normals = [_unit(n) for n in normals]
    return mesh


def load_obj(path: str | os.PathLike, normalize: bool = False) -> ObjMesh:
    """Read an OBJ file from disk."""
    with open(path, encoding="utf-8") as handle:
        return parse_obj(handle, normalize)