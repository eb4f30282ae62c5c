"""
どこで: `src/ppmdraw/core/canvas.py`。
何を: width x height の画素グリッドを持つ `Canvas` と、背景・領域の塗りつぶし / PPM 出力を提供する。
なぜ: 描画セッションが 1 つの連続バッファを専有し、塗り方と領域を自由に重ねられるようにするため。
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

import numpy as np

from ppmdraw.core.color import Color
from ppmdraw.core.fill import FillMode, fill_gradient, fill_noise, fill_solid
from ppmdraw.core.region import Region
from ppmdraw.export.ppm import MAGIC_NUMBER, MAX_VALUE, format_ppm, write_ppm


class InvalidDimensionsError(ValueError):
    """キャンバス寸法が正の整数でない場合に送出する。"""


def _as_color(value: object) -> Color:
    """`Color` または `(r, g, b)` を `Color` にする。全メソッド共通の色引数の規則。"""
    return Color.coerce(value)


def _as_dimension(value: object, *, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise InvalidDimensionsError(f"{name} は整数である必要がある: got={value!r}")
    v = int(value)
    if v <= 0:
        raise InvalidDimensionsError(f"{name} は正の値である必要がある: got={v}")
    return v


class Canvas:
    """PPM に書き出す画素グリッド。

    Parameters
    ----------
    path : str or Path
        `draw()` の出力先パス。
    width, height : int
        画素数。構築後は変更できない。

    Notes
    -----
    画素は uint8 型 shape (height, width, 3) の C 連続配列 1 本で持つ。
    `flat[row * width + col]` が (row, col) の画素になる。

    Raises
    ------
    InvalidDimensionsError
        width / height が正の整数でない場合。
    """

    magic_number = MAGIC_NUMBER
    max_value = MAX_VALUE

    def __init__(self, path: str | Path, width: int, height: int) -> None:
        self._width = _as_dimension(width, name="width")
        self._height = _as_dimension(height, name="height")
        self.path = Path(path)
        self._pixels = np.zeros((self._height, self._width, 3), dtype=np.uint8)

    def __repr__(self) -> str:
        return f"Canvas(path={str(self.path)!r}, width={self._width}, height={self._height})"

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def pixels(self) -> np.ndarray:
        """画素バッファ shape (height, width, 3)。"""
        return self._pixels

    @property
    def flat(self) -> np.ndarray:
        """画素バッファの shape (width * height, 3) ビュー。"""
        return self._pixels.reshape(self._width * self._height, 3)

    def pixel_at(self, row: int, col: int) -> Color:
        r, g, b = (int(v) for v in self._pixels[row, col])
        return Color(r, g, b)

    def set_pixel(self, row: int, col: int, color: Color) -> None:
        self._pixels[row, col] = _as_color(color).as_tuple()

    # --- 背景 ---

    def _full_mask(self) -> np.ndarray:
        return np.ones((self._height, self._width), dtype=bool)

    def fill_solid_background(self, color: Color) -> None:
        """全セルを color で塗る。"""
        self._pixels[:, :] = _as_color(color).as_tuple()

    def fill_gradient_background(self, color1: Color, color2: Color) -> None:
        """行 i を `color1.interpolate(color2, i / height)` で塗る。"""
        fill_gradient(self._pixels, self._full_mask(), _as_color(color1), _as_color(color2))

    # --- 領域 ---

    def region_mask(self, region: Region) -> np.ndarray:
        return region.mask(self._width, self._height)

    def fill_region(
        self,
        region: Region,
        mode: FillMode | str,
        colors: Color | Sequence[Color],
        *,
        rng: np.random.Generator | None = None,
    ) -> None:
        """region 内のセルだけを mode で塗る。領域外のセルは変更しない。

        Parameters
        ----------
        region : Region
            `Disk` または `Rectangle`。
        mode : FillMode or str
            `"solid"` / `"gradient"` / `"noise"`。
        colors : Color or Sequence
            solid / noise では 1 色、gradient では (color1, color2)。
            各色は `Color` または `(r, g, b)`（背景塗り・`set_pixel` と同じ規則）。
        rng : numpy.random.Generator or None, optional
            noise 用の乱数源。None なら `numpy.random.default_rng()`。

        Raises
        ------
        ValueError
            mode が未対応、または colors の形が mode と合わない場合。
        """
        fill_mode = FillMode(mode)
        mask = self.region_mask(region)

        if fill_mode is FillMode.GRADIENT:
            try:
                color1, color2 = colors  # type: ignore[misc]
            except (TypeError, ValueError) as exc:
                raise ValueError("gradient には (color1, color2) が必要") from exc
            fill_gradient(self._pixels, mask, _as_color(color1), _as_color(color2))
            return

        try:
            color = _as_color(colors)
        except ValueError as exc:
            raise ValueError(f"{fill_mode.value} には色を 1 つ指定する: got={colors!r}") from exc
        if fill_mode is FillMode.SOLID:
            fill_solid(self._pixels, mask, color)
            return
        fill_noise(self._pixels, mask, color, rng if rng is not None else np.random.default_rng())

    def fill_solid_region(self, region: Region, color: Color) -> None:
        self.fill_region(region, FillMode.SOLID, color)

    def fill_gradient_region(self, region: Region, color1: Color, color2: Color) -> None:
        self.fill_region(region, FillMode.GRADIENT, (color1, color2))

    def fill_noise_region(
        self,
        region: Region,
        color: Color,
        rng: np.random.Generator | None = None,
    ) -> None:
        self.fill_region(region, FillMode.NOISE, color, rng=rng)

    # --- 出力 ---

    def to_ppm_text(self) -> str:
        return format_ppm(self._pixels)

    def draw(self) -> Path:
        """現在の画素を `path` へ PPM として保存する。

        Raises
        ------
        OSError
            出力先を開けない場合（再試行しない）。
        """
        return write_ppm(self._pixels, self.path)


__all__ = ["Canvas", "InvalidDimensionsError"]
