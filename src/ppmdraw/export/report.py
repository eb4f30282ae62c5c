"""
どこで: `src/ppmdraw/export/report.py`。
何を: ベクトル・三角形の幾何量を整形し、テキストレポートとして保存する関数を提供する。
なぜ: 計算結果を人が読める形で残し、比較・確認できるようにするため。
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from ppmdraw.core.triangle import Triangle
from ppmdraw.core.vector import DegenerateGeometryError, Vector, cross_product, find_parallelogram_area

_logger = logging.getLogger(__name__)


def format_vector(vector: Vector) -> str:
    """`Vector(x, y, z)` 形式の文字列を返す。"""
    return str(vector)


def format_triangle(triangle: Triangle) -> str:
    """3 頂点をタブ字下げで並べた `Triangle(...)` 形式の文字列を返す。"""
    return str(triangle)


def vector_pair_report_lines(a: Vector, b: Vector) -> list[str]:
    """2 ベクトルの外積と平行四辺形面積のレポート行を返す。"""
    return [
        f"A = {format_vector(a)}",
        f"B = {format_vector(b)}",
        f"A x B = {format_vector(cross_product(a, b))}",
        f"B x A = {format_vector(cross_product(b, a))}",
        f"Parallelogram area |A x B| = {find_parallelogram_area(a, b):g}",
    ]


def triangle_report_lines(triangle: Triangle) -> list[str]:
    """三角形の頂点・法線・面積のレポート行を返す。

    Notes
    -----
    退化三角形では法線の行に理由を書き、面積は 0 として出力する。
    """
    lines = format_triangle(triangle).split("\n")
    try:
        normal_text = format_vector(triangle.normal_vector())
    except DegenerateGeometryError:
        normal_text = "undefined (degenerate triangle)"
    lines.append(f"Normal vector = {normal_text}")
    lines.append(f"Area = {triangle.area():g}")
    return lines


def write_geometry_report(path: str | Path, lines: Iterable[str]) -> Path:
    """レポート行を改行区切りのテキストとして保存する。

    Raises
    ------
    OSError
        出力先を開けない場合。
    """
    _path = Path(path)
    with _path.open("w", encoding="utf-8", newline="\n") as f:
        for line in lines:
            f.write(f"{line}\n")
    _logger.info("Report written: %s", _path)
    return _path


__all__ = [
    "format_triangle",
    "format_vector",
    "triangle_report_lines",
    "vector_pair_report_lines",
    "write_geometry_report",
]
