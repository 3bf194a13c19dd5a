"""Two-dimensional scalar grid with sampling, arithmetic and distance fields."""

from __future__ import annotations

import math
import operator
import struct
from typing import BinaryIO, Callable, Iterable

from .rand import Random, static_rand

_FLOAT_MIN = 1.1754943508222875e-38
_FLOAT_MAX = 3.4028234663852886e38
_D1 = 1.0
_D2 = 1.4142135624
_HEADER = struct.Struct("<QQ")


class Grid2D:
    """A width x height grid of floats stored row by row."""

    def __init__(self, width: int, height: int, data: Iterable[float] | None = None) -> None:
        self._width = int(width)
        self._height = int(height)
        if data is None:
            self.data = [0.0] * (self._width * self._height)
        else:
            self.data = [float(v) for v in data]
            if len(self.data) != self._width * self._height:
                raise ValueError("size mismatch")

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @classmethod
    def from_image(cls, image) -> "Grid2D":
        """Build a grid from the first channel of an image, scaled to [0, 1]."""
        step = image.component_count
        values = [v / 255.0 for v in list(image.data)[::step]]
        return cls(image.width, image.height, values)

    @classmethod
    def load(cls, stream: BinaryIO) -> "Grid2D":
        """Read a grid written by save()."""
        header = stream.read(_HEADER.size)
        if len(header) != _HEADER.size:
            raise ValueError("truncated grid header")
        width, height = _HEADER.unpack(header)
        count = width * height
        payload = stream.read(4 * count)
        if len(payload) != 4 * count:
            raise ValueError("truncated grid data")
        return cls(width, height, struct.unpack(f"<{count}f", payload))

    def save(self, stream: BinaryIO) -> None:
        """Write width, height and float32 values in binary form."""
        stream.write(_HEADER.pack(self._width, self._height))
        stream.write(struct.pack(f"<{len(self.data)}f", *self.data))

    @classmethod
    def gen_random(cls, width: int, height: int, seed: int | None = None) -> "Grid2D":
        """Grid of uniform values in [0, 1)."""
        rng = static_rand if seed is None else Random(seed)
        return cls(width, height, (rng.rand01() for _ in range(width * height)))

    def to_byte_array(self) -> bytes:
        """Grey RGB bytes, three per cell."""
        out = bytearray()
        for v in self.data:
            b = int(v * 255) % 256
            out += bytes((b, b, b))
        return bytes(out)

    def _index(self, x: int, y: int) -> int:
        if not (0 <= x < self._width and 0 <= y < self._height):
            raise IndexError(f"position ({x}, {y}) outside {self._width}x{self._height} grid")
        return x + y * self._width

    def set_value(self, x: int, y: int, value: float) -> None:
        self.data[self._index(x, y)] = float(value)

    def get_value(self, x: int, y: int) -> float:
        return self.data[self._index(x, y)]

    def get_value_normalized(self, x: float, y: float) -> float:
        """Nearest cell at normalized coordinates, without interpolation."""
        return self.get_value(int(x * self._width), int(y * self._height))

    def _corners(self, x: float, y: float):
        x = max(min(x, 1.0), 0.0)
        y = max(min(y, 1.0), 0.0)
        sx = x * (self._width - 1)
        sy = y * (self._height - 1)
        fx, cx = math.floor(sx), math.ceil(sx)
        fy, cy = math.floor(sy), math.ceil(sy)
        va = self.get_value(fx, fy)
        vb = self.get_value(cx, fy)
        vc = self.get_value(fx, cy)
        vd = self.get_value(cx, cy)
        return sx - fx, sy - fy, va, vb, vc, vd

    def sample(self, x: float, y: float) -> float:
        """Bilinear sample at normalized coordinates, clamped to [0, 1]."""
        alpha, beta, va, vb, vc, vd = self._corners(x, y)
        return (va * (1.0 - alpha) + vb * alpha) * (1.0 - beta) + (
            vc * (1.0 - alpha) + vd * alpha
        ) * beta

    def normal(self, x: float, y: float) -> tuple[float, float, float]:
        """Unit surface normal of the grid seen as a height field."""
        _, _, va, vb, vc, vd = self._corners(x, y)
        w, h = self._width, self._height
        n1 = _cross((1.0 / w, vb - va, 0.0), (0.0, vc - va, 1.0 / h))
        n2 = _cross((-1.0 / w, vc - vd, 0.0), (0.0, vb - vd, -1.0 / h))
        avg = tuple((a + b) / 2.0 for a, b in zip(n1, n2))
        length = math.sqrt(sum(c * c for c in avg))
        return (avg[0] / length, avg[1] / length, avg[2] / length)

    def normalize(self, max_val: float = 1.0) -> None:
        """Rescale values in place so they span [0, max_val]."""
        if not self.data:
            return
        lo, hi = min(self.data), max(self.data)
        if hi == lo:
            self.data = [math.nan] * len(self.data)
            return
        scale = max_val / (hi - lo)
        self.data = [(v - lo) * scale for v in self.data]

    def max_value(self) -> tuple[int, int]:
        """Position of the first largest value."""
        best, pos = _FLOAT_MIN, (0, 0)
        for i, v in enumerate(self.data):
            if best < v:
                best, pos = v, (i % self._width, i // self._width)
        return pos

    def min_value(self) -> tuple[int, int]:
        """Position of the first smallest value."""
        best, pos = _FLOAT_MAX, (0, 0)
        for i, v in enumerate(self.data):
            if best > v:
                best, pos = v, (i % self._width, i // self._width)
        return pos

    def fill(self, value: float) -> None:
        self.data = [float(value)] * len(self.data)

    def to_signed_distance(self, threshold: float) -> "Grid2D":
        """Approximate signed distance to the threshold contour (positive inside)."""
        w, h = self._width, self._height
        inside = [v >= threshold for v in self.data]
        dist = [_FLOAT_MAX] * len(self.data)
        nearest: list[tuple[int, int] | None] = [None] * len(self.data)

        def idx(x: int, y: int) -> int:
            return x + y * w

        for y in range(1, h - 1):
            for x in range(1, w - 1):
                i = idx(x, y)
                if any(
                    inside[idx(nx, ny)] != inside[i]
                    for nx, ny in ((x - 1, y), (x + 1, y), (x, y + 1), (x, y - 1))
                ):
                    dist[i] = 0.0
                    nearest[i] = (x, y)

        def relax(x: int, y: int, steps) -> None:
            i = idx(x, y)
            for dx, dy, d in steps:
                j = idx(x + dx, y + dy)
                if dist[j] + d < dist[i]:
                    nearest[i] = nearest[j]
                    px, py = nearest[i]
                    dist[i] = math.hypot(x - px, y - py)

        forward = ((-1, -1, _D2), (0, -1, _D1), (1, -1, _D2), (-1, 0, _D1))
        backward = ((1, 0, _D1), (-1, 1, _D2), (0, 1, _D1), (1, 1, _D2))
        for y in range(1, h - 1):
            for x in range(1, w - 1):
                relax(x, y, forward)
        for y in range(h - 2, 0, -1):
            for x in range(w - 2, 0, -1):
                relax(x, y, backward)

        signed = [d if ins else -d for d, ins in zip(dist, inside)]
        return Grid2D(w, h, signed)

    def _scalar(self, op: Callable[[float, float], float], value: float) -> "Grid2D":
        return Grid2D(self._width, self._height, (op(v, value) for v in self.data))

    def _combine(self, other: "Grid2D", op: Callable[[float, float], float]) -> "Grid2D":
        mw = max(self._width, other._width)
        mh = max(self._height, other._height)
        if (self._width, self._height) == (other._width, other._height):
            return Grid2D(mw, mh, (op(a, b) for a, b in zip(self.data, other.data)))

        def norm(i: int, size: int) -> float:
            return i / (size - 1.0) if size > 1 else 0.0

        coords = [(norm(x, mw), norm(y, mh)) for y in range(mh) for x in range(mw)]
        if (mw, mh) == (self._width, self._height):
            values = (op(v, other.sample(nx, ny)) for v, (nx, ny) in zip(self.data, coords))
        elif (mw, mh) == (other._width, other._height):
            values = (op(v, self.sample(nx, ny)) for v, (nx, ny) in zip(other.data, coords))
        else:
            values = (op(other.sample(nx, ny), self.sample(nx, ny)) for nx, ny in coords)
        return Grid2D(mw, mh, values)

    def __add__(self, other):
        if isinstance(other, Grid2D):
            return self._combine(other, operator.add)
        return self._scalar(operator.add, other)

    def __sub__(self, other):
        if isinstance(other, Grid2D):
            return self._combine(other, operator.sub)
        return self._scalar(operator.sub, other)

    def __mul__(self, other):
        if isinstance(other, Grid2D):
            return self._combine(other, operator.mul)
        return self._scalar(operator.mul, other)

    def __truediv__(self, other):
        if isinstance(other, Grid2D):
            return self._combine(other, operator.truediv)
        return self * (1.0 / other)

    def __str__(self) -> str:
        parts = []
        for i, v in enumerate(self.data):
            parts.append(f"{v:g}")
            parts.append("\n" if i % self._width == self._width - 1 and i != 0 else ", ")
        return "".join(parts)


def _cross(a, b) -> tuple[float, float, float]:
    return (
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )