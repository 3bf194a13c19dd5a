# rastergrid

Small, dependency-free building blocks for visualization code. Everything is pure
Python and works on plain lists, tuples and `bytearray`s.

## Modules

- `rastergrid.rand`
  - `Random(seed=None)`: a seedable random source with fixed-range helpers: `rand01`
    gives [0, 1), `rand005` gives [0, 0.5), `rand051` gives [0.5, 1), `rand11` gives
    [-1, 1) and `rand0pi` gives [0, 2π).
  - `rand(a, b)` returns a value between `a` (inclusive) and `b` (exclusive). When both
    bounds are integers, the result is an integer.
  - `shuffle(items)` shuffles a mutable sequence in place.
  - The module-level `static_rand` is a shared unseeded instance.
- `rastergrid.grid2d.Grid2D(width, height, data=None)`: a grid of floats stored row by row.
  Giving data of the wrong length raises `ValueError`.
  - `get_value`, `set_value` and `get_value_normalized` read and write single cells. A cell
    outside the grid raises `IndexError`.
  - `sample(x, y)` is a bilinear lookup at normalized coordinates, clamped to [0, 1].
  - `normal(x, y)` is the unit surface normal of the grid seen as a height field.
  - `+`, `-`, `*` and `/` work with a scalar or with another grid. When the two grids differ
    in size, the result takes the larger width and height, and the other grid is resampled.
  - `normalize(max_val=1.0)` rescales the values to [0, max_val]. A constant grid becomes NaN.
  - `max_value()` and `min_value()` return the `(x, y)` position of the first extreme value.
  - `fill(value)` sets every cell.
  - `to_byte_array()` returns grey RGB bytes, three per cell.
  - `to_signed_distance(threshold)` gives an approximate distance to the threshold contour,
    positive where the value is `>= threshold`.
  - `save(stream)` and `Grid2D.load(stream)` write and read a binary form: two little-endian
    64-bit sizes followed by float32 values.
  - `Grid2D.gen_random(width, height, seed=None)` fills a grid with random values.
  - `Grid2D.from_image(image)` takes the first channel of an `Image`.
- `rastergrid.image.Image(width=100, height=100, component_count=4, data=None)`: an 8-bit
  raster with interleaved components.
  - Pixel access: `get_value`, `set_value`, `set_gray`, `set_normalized_value`,
    `get_lumi_value` and the bilinear `sample`.
  - Conversions that return a new image: `crop`, `resample`, `crop_to_aspect_and_resample`,
    `flip_horizontal` (mirrors rows), `flip_vertical` (mirrors columns), `to_grayscale`, and
    `filter(kernel)`, which convolves with a `Grid2D` kernel.
  - Changes made in place: `multiply(color)`, `generate_alpha(alpha=255)` and
    `generate_alpha_from_luminance()`. Each of these turns an RGB image into RGBA.
  - Text output: `to_ascii_art(small_table=True)` and `to_code(var_name="myImage", padding=False)`.
  - Constructors: `Image.from_color(rgba)` makes a one-pixel image, and
    `Image.gen_test_image(width, height)` makes a colour-bar test pattern.
- `rastergrid.objfile`
  - `parse_obj(lines, normalize=False)` and `load_obj(path, normalize=False)` read `v`, `vn`
    and triangular `f` records into an `ObjMesh`, which has `indices`, `vertices` and
    `normals`.
  - Vertex normals are accumulated from the faces and then made unit length.
  - With `normalize=True`, the mesh is centred and scaled so that its largest extent is 1.
- `rastergrid.lines`
  - `triangles_to_lines`, `triangle_strip_to_lines`, `triangle_fan_to_lines` and
    `wireframe_lines(data, TrisDrawType.X, comp_count)` turn flat triangle vertex data into
    line-list vertex data.
  - `thick_line_triangles(data, LineDrawType.X, line_thickness, framebuffer_size, view_dir)`
    turns lines of `x, y, z, r, g, b, a` vertices into triangles that are `line_thickness`
    pixels wide.
- `rastergrid.sprites`
  - `point_sprite_disk(resolution=64)` returns a white RGBA `Image` whose alpha fades out to
    the edge of a disk.
  - `image_quad(bl, br, tl, tr)` returns two textured triangles (`x, y, z, u, v`).
  - `image_transform`, `image_transform_fixed_height` and `image_transform_fixed_width`
    return 4x4 matrices, as tuples of rows, that place an image in a window while keeping
    its aspect ratio.

## Example

```python
from rastergrid.grid2d import Grid2D
from rastergrid.image import Image

grid = Grid2D.gen_random(16, 16, 42)
grid.normalize(1.0)
print(grid.sample(0.5, 0.5))

img = Image.gen_test_image(64, 64)
print(img.to_grayscale().to_ascii_art(True))
```

## What it does not do

The package computes geometry and pixel data only:

- It opens no window and draws nothing.
- It does not talk to a GPU.
- It reads no image files such as BMP.

`lines`, `sprites` and `Image` produce vertex lists, matrices and byte buffers. Passing
these to a renderer is up to the caller.

## Install

```
pip install .
```

To also install the test dependencies:

```
pip install .[test]
```

## Tests

```
pytest
```