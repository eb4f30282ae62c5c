"""
どこで: `src/ppmdraw/core/fill.py`。
何を: 画素バッファの mask 内だけを塗る 3 方式（単色 / 縦グラデーション / ノイズ）を提供する。
なぜ: 形状ごとのサブクラスを持たず、領域判定と塗り方を独立に組み合わせるため。
"""

from __future__ import annotations

from enum import Enum

import numpy as np

from ppmdraw.core.color import MAX_CHANNEL, Color, draw_noise_offsets


class FillMode(Enum):
    SOLID = "solid"
    GRADIENT = "gradient"
    NOISE = "noise"


def _check_buffer(pixels: np.ndarray, mask: np.ndarray) -> None:
    if pixels.ndim != 3 or pixels.shape[2] != 3:
        raise ValueError("pixels は shape (H,W,3) の配列である必要がある")
    if mask.shape != pixels.shape[:2]:
        raise ValueError(
            f"mask の shape が pixels と一致しない: mask={mask.shape}, pixels={pixels.shape[:2]}"
        )


def gradient_rows(color1: Color, color2: Color, height: int) -> np.ndarray:
    """行 i の色を `color1.interpolate(color2, i / height)` とした表を返す。

    Returns
    -------
    np.ndarray
        uint8 型 shape (height, 3)。
    """
    h = int(height)
    table = np.empty((h, 3), dtype=np.uint8)
    for i in range(h):
        table[i] = color1.interpolate(color2, float(i) / h).as_tuple()
    return table


def fill_solid(pixels: np.ndarray, mask: np.ndarray, color: Color) -> None:
    """mask 内の全セルを color にする。"""
    _check_buffer(pixels, mask)
    pixels[mask] = color.as_tuple()


def fill_gradient(pixels: np.ndarray, mask: np.ndarray, color1: Color, color2: Color) -> None:
    """mask 内のセルを行ごとの縦グラデーションで塗る。

    Notes
    -----
    補間の割合はキャンバス全高に対する行位置で決まる（領域の高さではない）。
    """
    _check_buffer(pixels, mask)
    height, width = mask.shape
    table = gradient_rows(color1, color2, height)
    rows = np.broadcast_to(table[:, None, :], (height, width, 3))
    pixels[mask] = rows[mask]


def fill_noise(
    pixels: np.ndarray,
    mask: np.ndarray,
    color: Color,
    rng: np.random.Generator,
) -> None:
    """mask 内の各セルを `color.add_noise()` 相当の色にする。

    セルごとに独立したオフセットを引き、3 チャネルへ同じ値を加える。
    """
    _check_buffer(pixels, mask)
    count = int(np.count_nonzero(mask))
    if count == 0:
        return
    offsets = draw_noise_offsets(rng, count)
    base = np.asarray(color.as_tuple(), dtype=np.int32)
    noisy = np.clip(base[None, :] + offsets[:, None], 0, MAX_CHANNEL)
    pixels[mask] = noisy.astype(np.uint8)


__all__ = ["FillMode", "fill_gradient", "fill_noise", "fill_solid", "gradient_rows"]
