import io
import math
from types import SimpleNamespace

import pytest

from rastergrid.grid2d import Grid2D


def test_size_mismatch_raises():
    with pytest.raises(ValueError):
        Grid2D(2, 2, [1.0, 2.0, 3.0])


def test_default_is_zero_filled():
    g = Grid2D(3, 2)
    assert g.data == [0.0] * 6


def test_set_and_get_value():
    g = Grid2D(3, 2)
    g.set_value(2, 1, 0.75)
    assert g.get_value(2, 1) == 0.75
    assert g.data[5] == 0.75


def test_get_value_out_of_range():
    with pytest.raises(IndexError):
        Grid2D(2, 2).get_value(2, 0)


def test_get_value_normalized():
    g = Grid2D(2, 2, [0.1, 0.2, 0.3, 0.4])
    assert g.get_value_normalized(0.5, 0.5) == g.get_value(1, 1)


def test_sample_corners_match_cells():
    g = Grid2D(2, 2, [0.1, 0.2, 0.3, 0.4])
    assert g.sample(0.0, 0.0) == pytest.approx(0.1)
    assert g.sample(1.0, 0.0) == pytest.approx(0.2)
    assert g.sample(0.0, 1.0) == pytest.approx(0.3)
    assert g.sample(1.0, 1.0) == pytest.approx(0.4)


def test_sample_clamps():
    g = Grid2D(2, 2, [0.1, 0.2, 0.3, 0.4])
    assert g.sample(-3.0, 5.0) == g.sample(0.0, 1.0)


def test_sample_midpoint_between_zero_and_one():
    g = Grid2D(2, 1, [0.0, 1.0])
    assert g.sample(0.5, 0.0) == pytest.approx(0.5)


def test_normal_of_flat_grid():
    g = Grid2D(4, 4)
    g.fill(0.3)
    n = g.normal(0.4, 0.6)
    assert n == pytest.approx((0.0, -1.0, 0.0))


def test_normal_is_unit_length():
    g = Grid2D.gen_random(5, 5, seed=9)
    n = g.normal(0.3, 0.7)
    assert math.sqrt(sum(c * c for c in n)) == pytest.approx(1.0)


def test_save_load_round_trip():
    g = Grid2D(3, 2, [0.0, 0.5, 1.0, 0.25, 2.0, -1.5])
    buf = io.BytesIO()
    g.save(buf)
    assert len(buf.getvalue()) == 16 + 4 * 6
    buf.seek(0)
    h = Grid2D.load(buf)
    assert (h.width, h.height, h.data) == (3, 2, g.data)


def test_load_truncated_raises():
    with pytest.raises(ValueError):
        Grid2D.load(io.BytesIO(b"\x01\x00"))


def test_gen_random_seeded():
    a = Grid2D.gen_random(4, 3, seed=1)
    b = Grid2D.gen_random(4, 3, seed=1)
    assert a.data == b.data
    assert all(0.0 <= v < 1.0 for v in a.data)


def test_to_byte_array_full_white():
    g = Grid2D(1, 1, [1.0])
    assert g.to_byte_array() == bytes([255, 255, 255])


def test_from_image_uses_first_channel():
    image = SimpleNamespace(width=2, height=1, component_count=2, data=[255, 0, 0, 255])
    g = Grid2D.from_image(image)
    assert g.data == [1.0, 0.0]


def test_str_layout():
    g = Grid2D(2, 2, [1, 2, 3, 4])
    assert str(g) == "1, 2\n3, 4\n"


def test_scalar_round_trips():
    g = Grid2D(2, 2, [0.5, 1.5, 2.5, 3.5])
    assert ((g + 1.5) - 1.5).data == g.data
    assert ((g * 2.0) / 2.0).data == g.data


def test_same_size_grid_round_trips():
    g = Grid2D(2, 2, [0.5, 1.5, 2.5, 3.5])
    h = Grid2D(2, 2, [1.0, 2.0, 4.0, 8.0])
    assert ((g + h) - h).data == g.data
    assert ((g * h) / h).data == g.data


def test_mixed_size_result_has_max_dims():
    big = Grid2D(3, 3)
    big.fill(2.0)
    small = Grid2D(2, 2)
    small.fill(1.0)
    r = big + small
    assert (r.width, r.height) == (3, 3)
    assert r.data == [3.0] * 9


def test_mixed_size_larger_other_takes_lead():
    small = Grid2D(2, 2)
    small.fill(1.0)
    big = Grid2D(3, 3)
    big.fill(5.0)
    r = small - big
    assert r.data == [4.0] * 9


def test_normalize_spans_range():
    g = Grid2D(2, 2, [2.0, 4.0, 6.0, 10.0])
    g.normalize(3.0)
    assert min(g.data) == 0.0
    assert max(g.data) == pytest.approx(3.0)


def test_max_and_min_positions():
    g = Grid2D(3, 2, [0.2, 0.9, 0.4, 0.1, 0.5, 0.3])
    assert g.max_value() == (1, 0)
    assert g.min_value() == (0, 1)


def test_signed_distance_signs_and_contour():
    g = Grid2D(7, 7)
    for y in range(2, 5):
        for x in range(2, 5):
            g.set_value(x, y, 1.0)
    sd = g.to_signed_distance(0.5)
    assert sd.get_value(1, 3) == 0.0
    assert sd.get_value(2, 3) == 0.0
    assert sd.get_value(3, 3) > 0.0
    for (v, src) in zip(sd.data, g.data):
        if src < 0.5:
            assert v <= 0.0
        else:
            assert v >= 0.0


def test_fill_sets_all():
    g = Grid2D(3, 3)
    g.fill(0.25)
    assert set(g.data) == {0.25}