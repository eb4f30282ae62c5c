"""Triangle の法線と面積のテスト。"""

from __future__ import annotations

import numpy as np
import pytest

from ppmdraw.core.triangle import Triangle
from ppmdraw.core.vector import DegenerateGeometryError, Vector


def _sample_triangle() -> Triangle:
    return Triangle(
        Vector(-1.75, -1.75, -3.0),
        Vector(1.75, -1.75, -3.0),
        Vector(0.0, 1.75, -3.0),
    )


def test_area_matches_base_times_height() -> None:
    base = 3.5
    height = 3.5
    assert _sample_triangle().area() == pytest.approx(0.5 * base * height)
    assert _sample_triangle().area() == pytest.approx(6.125)


def test_normal_is_parallel_to_z_axis() -> None:
    """全頂点が z=-3 上にあるので法線は z 軸と平行。"""
    normal = _sample_triangle().normal_vector()
    assert normal.length() == pytest.approx(1.0)
    np.testing.assert_allclose(
        normal.cross(Vector(0.0, 0.0, 1.0)).to_array(), [0.0, 0.0, 0.0], atol=1e-12
    )
    np.testing.assert_allclose(normal.to_array(), [0.0, 0.0, 1.0], atol=1e-12)


def test_edges_are_relative_to_v0() -> None:
    e0, e1 = _sample_triangle().edges()
    assert e0 == Vector(3.5, 0.0, 0.0)
    assert e1 == Vector(1.75, 3.5, 0.0)


def test_vertices_are_not_mutated() -> None:
    tri = _sample_triangle()
    tri.normal_vector()
    tri.area()
    assert tri == _sample_triangle()


def test_degenerate_triangle() -> None:
    tri = Triangle(Vector(0, 0, 0), Vector(1, 1, 1), Vector(2, 2, 2))
    assert tri.area() == pytest.approx(0.0)
    with pytest.raises(DegenerateGeometryError):
        tri.normal_vector()


def test_str_lists_vertices() -> None:
    assert str(_sample_triangle()) == (
        "Triangle(\n"
        "\tVector(-1.75, -1.75, -3),\n"
        "\tVector(1.75, -1.75, -3),\n"
        "\tVector(0, 1.75, -3)\n"
        ")"
    )
