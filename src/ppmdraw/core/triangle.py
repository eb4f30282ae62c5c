# src/ppmdraw/core/triangle.py
# 3 頂点で表す三角形と、その法線・面積の計算。

from __future__ import annotations

from dataclasses import dataclass, field

from ppmdraw.core.vector import Vector


@dataclass(slots=True)
class Triangle:
    """頂点 v0, v1, v2 で表す三角形。

    法線と面積は呼び出しごとに計算し、キャッシュしない。
    """

    v0: Vector = field(default_factory=Vector)
    v1: Vector = field(default_factory=Vector)
    v2: Vector = field(default_factory=Vector)

    def __str__(self) -> str:
        return f"Triangle(\n\t{self.v0},\n\t{self.v1},\n\t{self.v2}\n)"

    def edges(self) -> tuple[Vector, Vector]:
        """v0 を起点とする辺ベクトル (v1 - v0, v2 - v0) を返す。"""
        return self.v1 - self.v0, self.v2 - self.v0

    def normal_vector(self) -> Vector:
        """辺ベクトルの外積を正規化した法線を返す。

        Raises
        ------
        DegenerateGeometryError
            3 頂点が同一直線上にある場合。
        """
        e0, e1 = self.edges()
        normal = e0.cross(e1)
        normal.normalize()
        return normal

    def area(self) -> float:
        e0, e1 = self.edges()
        return e0.find_parallelogram_area(e1) * 0.5


__all__ = ["Triangle"]
