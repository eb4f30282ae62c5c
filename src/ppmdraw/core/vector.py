"""
どこで: `src/ppmdraw/core/vector.py`。
何を: 3 次元ベクトル `Vector` とレイ `Ray`、外積・平行四辺形面積の関数を定義する。
なぜ: レイ方向の計算と三角形の幾何量計算で同じベクトル演算を共有するため。
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np


class DegenerateGeometryError(ValueError):
    """長さ 0 のベクトルを正規化しようとした場合に送出する。"""


def _fmt(value: float) -> str:
    """ストリーム出力と同じ 6 桁有効数字表記に変換して返す。"""
    text = f"{float(value):g}"
    if text == "-0":
        return "0"
    return text


@dataclass(slots=True)
class Vector:
    """3 成分の float ベクトル。

    `normalize()` だけが自身を書き換え、他の演算は新しいベクトルを返す。
    """

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __post_init__(self) -> None:
        self.x = float(self.x)
        self.y = float(self.y)
        self.z = float(self.z)

    def __str__(self) -> str:
        return f"Vector({_fmt(self.x)}, {_fmt(self.y)}, {_fmt(self.z)})"

    def __add__(self, other: Vector) -> Vector:
        return Vector(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vector) -> Vector:
        return Vector(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, multiplier: float) -> Vector:
        m = float(multiplier)
        return Vector(self.x * m, self.y * m, self.z * m)

    __rmul__ = __mul__

    def __neg__(self) -> Vector:
        return Vector(-self.x, -self.y, -self.z)

    def length(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def normalize(self) -> None:
        """自身を長さ 1 に正規化する。

        Raises
        ------
        DegenerateGeometryError
            長さが 0 の場合。
        """
        vector_length = self.length()
        if vector_length == 0.0:
            raise DegenerateGeometryError(f"長さ 0 のベクトルは正規化できない: {self}")
        self.x /= vector_length
        self.y /= vector_length
        self.z /= vector_length

    def normalized(self) -> Vector:
        out = self.copy()
        out.normalize()
        return out

    def copy(self) -> Vector:
        return Vector(self.x, self.y, self.z)

    def dot(self, other: Vector) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vector) -> Vector:
        return Vector(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def absolute(self) -> Vector:
        return Vector(abs(self.x), abs(self.y), abs(self.z))

    def find_parallelogram_area(self, other: Vector) -> float:
        """self と other が張る平行四辺形の面積（外積の長さ）を返す。"""
        return self.cross(other).length()

    def to_array(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z], dtype=np.float64)

    @classmethod
    def from_array(cls, values: np.ndarray) -> Vector:
        return cls(float(values[0]), float(values[1]), float(values[2]))


@dataclass(frozen=True, slots=True)
class Ray:
    """原点 origin と方向 direction で表すレイ。"""

    origin: Vector
    direction: Vector


def cross_product(a: Vector, b: Vector) -> Vector:
    return a.cross(b)


def find_parallelogram_area(a: Vector, b: Vector) -> float:
    return a.find_parallelogram_area(b)


__all__ = [
    "DegenerateGeometryError",
    "Ray",
    "Vector",
    "cross_product",
    "find_parallelogram_area",
]
