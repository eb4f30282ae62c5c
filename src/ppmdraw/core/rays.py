"""
どこで: `src/ppmdraw/core/rays.py`。
何を: 画素ごとの視線レイを用意し、その方向を色へ写す `RayShader` を提供する。
なぜ: 正規化デバイス座標とレイ方向の対応を画像として確認できるようにするため。
"""

from __future__ import annotations

import numpy as np
from numba import njit  # type: ignore[import-untyped]

from ppmdraw.core.canvas import Canvas
from ppmdraw.core.color import MAX_CHANNEL
from ppmdraw.core.vector import DegenerateGeometryError, Ray, Vector


@njit(cache=True)
def _prepare_directions(
    width: int,
    height: int,
    cam_x: float,
    cam_y: float,
    cam_z: float,
) -> tuple[np.ndarray, int]:
    """正規化済み方向 shape (height, width, 3) と、長さ 0 の方向の個数を返す。"""
    out = np.zeros((height, width, 3), dtype=np.float64)
    degenerate = 0
    aspect = float(width) / float(height)
    for i in range(height):
        for j in range(width):
            # 画素中心 -> [0, 1] -> [-1, 1]（y は上向き）。
            x = (float(j) + 0.5) / float(width)
            y = (float(i) + 0.5) / float(height)
            x = 2.0 * x - 1.0
            y = 1.0 - 2.0 * y
            x *= aspect

            dx = x - cam_x
            dy = y - cam_y
            dz = -1.0 - cam_z
            length = np.sqrt(dx * dx + dy * dy + dz * dz)
            if length == 0.0:
                degenerate += 1
                continue
            out[i, j, 0] = dx / length
            out[i, j, 1] = dy / length
            out[i, j, 2] = dz / length
    return out, degenerate


def directions_to_pixels(directions: np.ndarray) -> np.ndarray:
    """方向成分の絶対値を 255 倍して切り捨てた uint8 配列を返す。"""
    scaled = np.abs(directions) * float(MAX_CHANNEL)
    return np.clip(np.trunc(scaled), 0, MAX_CHANNEL).astype(np.uint8)


class RayShader:
    """カメラ原点から各画素を通るレイを計算し、canvas を塗る。

    Parameters
    ----------
    canvas : Canvas
        塗りつぶし先。
    camera_position : Vector, optional
        カメラ位置。既定は原点。
    """

    def __init__(self, canvas: Canvas, camera_position: Vector | None = None) -> None:
        self.canvas = canvas
        self.camera_position = (
            Vector(0.0, 0.0, 0.0) if camera_position is None else camera_position.copy()
        )
        self._origins: np.ndarray | None = None
        self._directions: np.ndarray | None = None

    @property
    def origins(self) -> np.ndarray | None:
        return self._origins

    @property
    def directions(self) -> np.ndarray | None:
        return self._directions

    def prepare_rays(self) -> None:
        """全画素のレイ（原点・正規化済み方向）を計算して保持する。

        Raises
        ------
        DegenerateGeometryError
            カメラが画素の投影点 (x, y, -1) と重なり、方向の長さが 0 になる場合。
        """
        width, height = self.canvas.width, self.canvas.height
        cam = self.camera_position
        directions, degenerate = _prepare_directions(width, height, cam.x, cam.y, cam.z)
        if degenerate:
            raise DegenerateGeometryError(
                f"カメラ位置が画素の投影点と一致し、レイ方向を正規化できない: camera={cam}, count={degenerate}"
            )
        self._directions = directions
        self._origins = np.broadcast_to(cam.to_array(), (height, width, 3)).copy()

    def ray_at(self, row: int, col: int) -> Ray:
        if self._origins is None or self._directions is None:
            raise RuntimeError("prepare_rays() を先に呼ぶ必要がある")
        return Ray(
            origin=Vector.from_array(self._origins[row, col]),
            direction=Vector.from_array(self._directions[row, col]),
        )

    def fill_pixels_from_rays(self) -> None:
        """各画素の R/G/B を方向ベクトル x/y/z 成分の絶対値 * 255 にする。"""
        if self._directions is None:
            raise RuntimeError("prepare_rays() を先に呼ぶ必要がある")
        self.canvas.pixels[:, :, :] = directions_to_pixels(self._directions)


__all__ = ["RayShader", "directions_to_pixels"]
