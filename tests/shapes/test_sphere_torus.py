from __future__ import annotations

import math

import numpy as np
import pytest

from shapes.sphere import sphere
from shapes.torus import torus


@pytest.mark.parametrize("h, v", [(1, 1), (3, 2), (40, 20), (7, 13)])
def test_vertex_count_is_horizontal_times_vertical(h: int, v: int) -> None:
    assert sphere(radius=1.0, horizontal_samples=h, vertical_samples=v).shape == (h * v, 3)
    assert torus(horizontal_samples=h, vertical_samples=v).shape == (h * v, 3)


def test_generation_is_deterministic() -> None:
    a = sphere(radius=50.0, horizontal_samples=12, vertical_samples=6)
    b = sphere(radius=50.0, horizontal_samples=12, vertical_samples=6)
    np.testing.assert_array_equal(a, b)
    c = torus(ring_radius=5.0, tube_radius=2.0, horizontal_samples=12, vertical_samples=6)
    d = torus(ring_radius=5.0, tube_radius=2.0, horizontal_samples=12, vertical_samples=6)
    np.testing.assert_array_equal(c, d)


def test_sphere_vertices_lie_on_radius() -> None:
    pts = sphere(radius=100.0, horizontal_samples=40, vertical_samples=20)
    np.testing.assert_allclose(np.linalg.norm(pts, axis=1), 100.0, rtol=1e-12)


def test_torus_vertices_satisfy_implicit_equation() -> None:
    R, r = 70.0, 30.0
    pts = torus(ring_radius=R, tube_radius=r, horizontal_samples=40, vertical_samples=20)
    rho = np.sqrt(pts[:, 0] ** 2 + pts[:, 1] ** 2)
    np.testing.assert_allclose((rho - R) ** 2 + pts[:, 2] ** 2, r * r, rtol=1e-9)


def test_row_major_order_vertical_outer_horizontal_inner() -> None:
    h, v, r = 8, 4, 2.0
    pts = sphere(radius=r, horizontal_samples=h, vertical_samples=v)
    for i in range(v):
        phi = i * (math.pi / v)
        for j in range(h):
            theta = j * (2 * math.pi / h)
            expected = (
                r * math.cos(theta) * math.sin(phi),
                r * math.sin(theta) * math.sin(phi),
                r * math.cos(phi),
            )
            np.testing.assert_allclose(pts[i * h + j], expected, atol=1e-12)


def test_torus_order_matches_sphere_order() -> None:
    h, v = 6, 4
    pts = torus(ring_radius=3.0, tube_radius=1.0, horizontal_samples=h, vertical_samples=v)
    # i=1 -> phi = π/2（管の真上）, j=0 -> theta = 0
    np.testing.assert_allclose(pts[1 * h + 0], (3.0, 0.0, 1.0), atol=1e-12)


def test_equator_vertex_of_default_sphere_is_exact() -> None:
    pts = sphere(radius=100.0, horizontal_samples=40, vertical_samples=20)
    x, y, z = pts[10 * 40 + 0]
    assert x == 100.0
    assert y == 0.0
    assert abs(z) < 1e-12


def test_zero_samples_yield_empty_array() -> None:
    assert sphere(horizontal_samples=0, vertical_samples=20).shape == (0, 3)
    assert torus(horizontal_samples=40, vertical_samples=0).shape == (0, 3)


def test_vertices_are_read_only() -> None:
    pts = sphere(radius=1.0, horizontal_samples=4, vertical_samples=2)
    with pytest.raises(ValueError):
        pts[0, 0] = 5.0
