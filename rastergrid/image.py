"""Byte images with per-pixel access, resampling, filtering and text dumps."""

from __future__ import annotations

import math
from typing import Iterable, Sequence

_LUT_LARGE = "$@B%8&WM#*oahkbdpqwmZO0QLCJUYXzcvunxrjft/\\|()1{}[]?-_+~<>i!lI;:,\"^`'. "
_LUT_SMALL = "@%#*+=-:. "
_CODE_INDENT = " " * 14


def _u8(value: float) -> int:
    """Truncate toward zero and keep the low eight bits."""
    return int(value) & 0xFF


class Image:
    """An 8-bit image of width x height pixels with interleaved components."""

    def __init__(
        self,
        width: int = 100,
        height: int = 100,
        component_count: int = 4,
        data: Iterable[int] | None = None,
    ) -> None:
        self.width = int(width)
        self.height = int(height)
        self.component_count = int(component_count)
        if data is None:
            self.data = bytearray(self.width * self.height * self.component_count)
        else:
            self.data = bytearray(data)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Image):
            return NotImplemented
        return (
            self.width == other.width
            and self.height == other.height
            and self.component_count == other.component_count
            and self.data == other.data
        )

    def __repr__(self) -> str:
        return (
            f"Image(width={self.width}, height={self.height}, "
            f"component_count={self.component_count}, data=<{len(self.data)} bytes>)"
        )

    @classmethod
    def from_color(cls, color: Sequence[float]) -> "Image":
        """A single RGBA pixel from a colour with components in [0, 1]."""
        return cls(1, 1, 4, [_u8(c * 255) for c in color[:4]])

    @classmethod
    def gen_test_image(cls, width: int, height: int) -> "Image":
        """RGB bars, their inverse and a grey ramp, as an RGBA image."""
        part_y1 = height // 3
        part_y2 = height * 2 // 3
        part_x1 = width // 3
        part_x2 = width * 2 // 3

        result = cls(width, height, 4)
        for y in range(height):
            for x in range(width):
                if x < part_x2:
                    rgb = (y < part_y1, part_y1 <= y < part_y2, y >= part_y2)
                    if x >= part_x1:
                        rgb = tuple(not c for c in rgb)
                    values = [255 if c else 0 for c in rgb]
                else:
                    level = _u8(255 * ((y >= part_y1) * 0.5 + (y >= part_y2) * 0.5))
                    values = [level, level, level]
                for c, v in enumerate(values):
                    result.set_value(x, y, c, v)
                result.set_value(x, y, 3, 255)
        return result

    def _pixels(self, step: int):
        return range(len(self.data) // step)

    def multiply(self, color: Sequence[float]) -> None:
        """Scale each channel by a colour; RGB images become RGBA."""
        r, g, b, a = color
        if self.component_count == 4:
            for i in self._pixels(4):
                base = i * 4
                for offset, factor in enumerate((r, g, b, a)):
                    self.data[base + offset] = _u8(self.data[base + offset] * factor)
        elif self.component_count == 3:
            out = bytearray()
            for i in self._pixels(3):
                px = self.data[i * 3 : i * 3 + 3]
                out += bytes(
                    (_u8(px[0] * r), _u8(px[1] * g), _u8(px[2] * b), _u8(255 * a))
                )
            self.data = out
            self.component_count = 4

    def generate_alpha(self, alpha: int = 255) -> None:
        """Set every alpha value; RGB images become RGBA."""
        if self.component_count == 4:
            for i in self._pixels(4):
                self.data[i * 4 + 3] = alpha
        elif self.component_count == 3:
            out = bytearray()
            for i in self._pixels(3):
                out += self.data[i * 3 : i * 3 + 3]
                out.append(alpha)
            self.data = out
            self.component_count = 4

    def generate_alpha_from_luminance(self) -> None:
        """Set alpha to each pixel's luminance; RGB images become RGBA."""

        def lum(r: int, g: int, b: int) -> int:
            return _u8(0.299 * r + 0.587 * g + 0.114 * b)

        if self.component_count == 4:
            for i in self._pixels(4):
                base = i * 4
                self.data[base + 3] = lum(*self.data[base : base + 3])
        elif self.component_count == 3:
            out = bytearray()
            for i in self._pixels(3):
                px = self.data[i * 3 : i * 3 + 3]
                out += px
                out.append(lum(*px))
            self.data = out
            self.component_count = 4

    def compute_index(self, x: int, y: int, component: int) -> int:
        return component + (x + y * self.width) * self.component_count

    def _checked_index(self, x: int, y: int, component: int) -> int:
        index = self.compute_index(x, y, component)
        if not 0 <= index < len(self.data):
            raise IndexError(
                f"pixel ({x}, {y}, {component}) outside {self.width}x{self.height} image"
            )
        return index

    def get_value(self, x: int, y: int, component: int) -> int:
        return self.data[self._checked_index(x, y, component)]

    def set_value(self, x: int, y: int, component: int, value: int) -> None:
        self.data[self._checked_index(x, y, component)] = value

    def set_gray(self, x: int, y: int, value: int) -> None:
        """Set the first three components of a pixel to the same value."""
        index = self._checked_index(x, y, 0)
        self.data[index : index + 3] = bytes((value, value, value))

    def set_normalized_value(
        self, x: int, y: int, value: float, component: int | None = None
    ) -> None:
        """Store a value in [0, 1] (clamped) as a byte, in one channel or in RGB."""
        byte = _u8(max(0.0, min(1.0, value)) * 255)
        if component is None:
            self.set_gray(x, y, byte)
        else:
            self.set_value(x, y, component, byte)

    def get_lumi_value(self, x: int, y: int) -> int:
        """Luminance of a pixel; 0 for unsupported component counts."""
        count = self.component_count
        if count == 1:
            return self.get_value(x, y, 0)
        if count == 2:
            return _u8(self.get_value(x, y, 0) * 0.5 + self.get_value(x, y, 1) * 0.5)
        if count in (3, 4):
            return _u8(
                self.get_value(x, y, 0) * 0.299
                + self.get_value(x, y, 1) * 0.587
                + self.get_value(x, y, 2) * 0.114
            )
        return 0

    @staticmethod
    def _linear(a: int, b: int, alpha: float) -> int:
        return _u8(a * (1.0 - alpha) + b * alpha)

    def sample(self, x: float, y: float, component: int) -> int:
        """Bilinear sample at normalized coordinates."""
        sx = x * (self.width - 1)
        sy = y * (self.height - 1)
        fx, fy = int(math.floor(sx)), int(math.floor(sy))
        cx, cy = int(math.ceil(sx)), int(math.ceil(sy))
        alpha = sx - fx
        beta = sy - fy
        top = self._linear(
            self.get_value(fx, fy, component), self.get_value(cx, fy, component), alpha
        )
        bottom = self._linear(
            self.get_value(fx, cy, component), self.get_value(cx, cy, component), alpha
        )
        return self._linear(top, bottom, beta)

    def to_code(self, var_name: str = "myImage", padding: bool = False) -> str:
        """Source-code initialiser listing the image's bytes, thirty per line."""
        parts = [
            f"Image {var_name} {{{self.width},{self.height},{self.component_count},\n",
            f"{_CODE_INDENT}{{",
        ]
        last = len(self.data) - 1
        for i, value in enumerate(self.data):
            if i % 30 == 0:
                parts.append(f"\n{_CODE_INDENT}")
            parts.append(f"{value:3d}" if padding else str(value))
            parts.append("," if i < last else "\n")
        parts.append("          }};\n")
        return "".join(parts)

    def to_ascii_art(self, small_table: bool = True) -> str:
        """Coarse text rendering, one character pair per 4x4 block, top row first."""
        lut = _LUT_SMALL if small_table else _LUT_LARGE
        lines = []
        for y in range(0, self.height, 4):
            row = []
            for x in range(0, self.width, 4):
                v = self.get_lumi_value(x, self.height - 1 - y)
                ch = lut[min(v * len(lut) // 255, len(lut) - 1)]
                row.append(ch * 2)
            lines.append("".join(row) + "\n")
        return "".join(lines)

    def filter(self, kernel) -> "Image":
        """Convolve with a grid kernel; border pixels the kernel cannot cover stay 0."""
        result = Image(self.width, self.height, self.component_count)
        kw, kh = kernel.width, kernel.height
        hw, hh = kw // 2, kh // 2
        for y in range(hh, self.height - hh):
            for x in range(hw, self.width - hw):
                for c in range(self.component_count):
                    conv = 0.0
                    for u in range(kh):
                        for v in range(kw):
                            conv += self.get_value(x + u - hw, y + v - hh, c) * kernel.get_value(u, v)
                    result.set_value(x, y, c, _u8(abs(conv)))
        return result

    def to_grayscale(self) -> "Image":
        result = Image(self.width, self.height, 1)
        for y in range(self.height):
            for x in range(self.width):
                result.set_value(x, y, 0, self.get_lumi_value(x, y))
        return result

    def crop(self, bl_x: int, bl_y: int, tr_x: int, tr_y: int) -> "Image":
        """Sub-image from (bl_x, bl_y) inclusive to (tr_x, tr_y) exclusive."""
        data = bytearray()
        for y in range(bl_y, tr_y):
            for x in range(bl_x, tr_x):
                start = self._checked_index(x, y, 0)
                data += self.data[start : start + self.component_count]
        return Image(tr_x - bl_x, tr_y - bl_y, self.component_count, data)

    def resample(self, new_width: int) -> "Image":
        """Bilinear resize to a new width, keeping the aspect ratio."""
        new_height = int(new_width * self.height / self.width)
        result = Image(new_width, new_height, self.component_count)
        for y in range(new_height):
            for x in range(new_width):
                for c in range(self.component_count):
                    result.set_value(x, y, c, self.sample(x / new_width, y / new_height, c))
        return result

    def crop_to_aspect_and_resample(self, new_width: int, new_height: int) -> "Image":
        """Centre-crop to the target aspect ratio, then box-filter down to the size."""
        if new_width == self.width and new_height == self.height:
            return Image(self.width, self.height, self.component_count, self.data)

        aspect = self.width / self.height
        new_aspect = new_width / new_height
        start_x = int(self.width * ((1.0 - new_aspect / aspect) / 2.0)) if aspect > new_aspect else 0
        start_y = int(self.height * ((1.0 - aspect / new_aspect) / 2.0)) if aspect < new_aspect else 0
        span_x = self.width - 2 * start_x
        span_y = self.height - 2 * start_y

        reduction = span_x // new_width
        if reduction == 0:
            raise ValueError("target size is larger than the cropped source")

        result = Image(new_width, new_height, self.component_count)
        area = reduction * reduction
        for y in range(new_height):
            for x in range(new_width):
                sums = [0] * self.component_count
                for dy in range(reduction):
                    for dx in range(reduction):
                        sx = int(start_x + x / new_width * span_x + dx)
                        sy = int(start_y + y / new_height * span_y + dy)
                        for c in range(self.component_count):
                            sums[c] += self.get_value(sx, sy, c)
                for c, total in enumerate(sums):
                    result.set_value(x, y, c, _u8(total // area))
        return result

    def flip_horizontal(self) -> "Image":
        """Mirror the rows top to bottom."""
        result = Image(self.width, self.height, self.component_count)
        for y in range(self.height):
            for x in range(self.width):
                for c in range(self.component_count):
                    result.set_value(x, self.height - y - 1, c, self.get_value(x, y, c))
        return result

    def flip_vertical(self) -> "Image":
        """Mirror the columns left to right."""
        result = Image(self.width, self.height, self.component_count)
        for y in range(self.height):
            for x in range(self.width):
                for c in range(self.component_count):
                    result.set_value(self.width - x - 1, y, c, self.get_value(x, y, c))
        return result