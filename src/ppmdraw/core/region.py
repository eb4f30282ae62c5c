# src/ppmdraw/core/region.py
# 塗りつぶし対象セルを決める領域（円盤 / 軸平行矩形）の定義と所属判定。

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

import numpy as np

# 円盤判定の許容誤差。境界上のセルを含めるために使う。
DISK_EPSILON = 0.0001


@dataclass(frozen=True, slots=True)
class Disk:
    """中心 (center_x, center_y) と半径 radius で表す円盤領域。

    Notes
    -----
    セル (row i, col j) は `(j-cx)^2 + (i-cy)^2 - r^2 < DISK_EPSILON` のとき内側。
    """

    radius: int
    center_x: int
    center_y: int

    @classmethod
    def centered(cls, radius: int, width: int, height: int) -> Disk:
        """キャンバス中央 (width // 2, height // 2) を中心とする円盤を返す。"""
        return cls(radius=int(radius), center_x=int(width) // 2, center_y=int(height) // 2)

    def contains(self, row: int, col: int, width: int, height: int) -> bool:
        if not (0 <= row < height and 0 <= col < width):
            return False
        dx = float(col - self.center_x) ** 2
        dy = float(row - self.center_y) ** 2
        return (dx + dy - float(self.radius) ** 2) < DISK_EPSILON

    def mask(self, width: int, height: int) -> np.ndarray:
        """所属判定を bool 配列 shape (height, width) で返す。"""
        rows, cols = np.ogrid[0:height, 0:width]
        dx = (cols.astype(np.float64) - float(self.center_x)) ** 2
        dy = (rows.astype(np.float64) - float(self.center_y)) ** 2
        return (dx + dy - float(self.radius) ** 2) < DISK_EPSILON


@dataclass(frozen=True, slots=True)
class Rectangle:
    """原点 (from_x, from_y) と大きさ (size_x, size_y) で表す軸平行矩形領域。

    キャンバス外にはみ出した部分は切り捨てる。
    """

    from_x: int
    from_y: int
    size_x: int
    size_y: int

    def bounds(self, width: int, height: int) -> tuple[int, int, int, int]:
        """キャンバス内に clip した (x0, x1, y0, y1) の半開区間を返す。"""
        x0 = max(int(self.from_x), 0)
        y0 = max(int(self.from_y), 0)
        x1 = min(int(self.from_x) + int(self.size_x), int(width))
        y1 = min(int(self.from_y) + int(self.size_y), int(height))
        return x0, max(x0, x1), y0, max(y0, y1)

    def contains(self, row: int, col: int, width: int, height: int) -> bool:
        x0, x1, y0, y1 = self.bounds(width, height)
        return x0 <= col < x1 and y0 <= row < y1

    def mask(self, width: int, height: int) -> np.ndarray:
        out = np.zeros((height, width), dtype=bool)
        x0, x1, y0, y1 = self.bounds(width, height)
        out[y0:y1, x0:x1] = True
        return out


Region = Union[Disk, Rectangle]


__all__ = ["DISK_EPSILON", "Disk", "Rectangle", "Region"]
