from __future__ import annotations

import pytest

from ppmdraw.core.triangle import Triangle
from ppmdraw.core.vector import Vector
from ppmdraw.export.report import (
    format_triangle,
    format_vector,
    triangle_report_lines,
    vector_pair_report_lines,
    write_geometry_report,
)


def _triangle() -> Triangle:
    return Triangle(
        Vector(-1.75, -1.75, -3.0),
        Vector(1.75, -1.75, -3.0),
        Vector(0.0, 1.75, -3.0),
    )


def test_format_vector() -> None:
    assert format_vector(Vector(0.5, -2.0, 12.25)) == "Vector(0.5, -2, 12.25)"


def test_format_triangle_indents_vertices() -> None:
    text = format_triangle(_triangle())
    assert text.startswith("Triangle(\n\tVector(-1.75, -1.75, -3),\n")
    assert text.endswith("\tVector(0, 1.75, -3)\n)")


def test_vector_pair_report_lines() -> None:
    lines = vector_pair_report_lines(Vector(3.5, 0, 0), Vector(1.75, 3.5, 0))
    assert "A x B = Vector(0, 0, 12.25)" in lines
    assert "B x A = Vector(0, 0, -12.25)" in lines
    assert "Parallelogram area |A x B| = 12.25" in lines


def test_triangle_report_lines() -> None:
    lines = triangle_report_lines(_triangle())
    assert lines[0] == "Triangle("
    assert "Normal vector = Vector(0, 0, 1)" in lines
    assert lines[-1] == "Area = 6.125"


def test_triangle_report_lines_degenerate() -> None:
    tri = Triangle(Vector(0, 0, 0), Vector(1, 0, 0), Vector(2, 0, 0))
    lines = triangle_report_lines(tri)
    assert "Normal vector = undefined (degenerate triangle)" in lines
    assert lines[-1] == "Area = 0"


def test_write_geometry_report(tmp_path) -> None:
    out = write_geometry_report(tmp_path / "report.txt", ["a", "b"])
    assert out.read_text(encoding="utf-8") == "a\nb\n"


def test_write_geometry_report_raises_for_missing_directory(tmp_path) -> None:
    with pytest.raises(OSError):
        write_geometry_report(tmp_path / "missing" / "report.txt", ["a"])
