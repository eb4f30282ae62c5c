"""
どこで: `src/ppmdraw/core/color.py`。
何を: RGB255 の色値 `Color` と、その加減算・スカラー倍・反転・補間・ノイズ付加を定義する。
なぜ: 塗りつぶし処理が同じ整数演算規則を共有し、チャネル値の範囲を一箇所で保証するため。
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, cast

import numpy as np

MAX_CHANNEL = 255


def clamp_channel(value: int, lower: int = 0, upper: int = MAX_CHANNEL) -> int:
    """整数値を [lower, upper] に clamp して返す。"""

    return max(lower, min(int(value), upper))


@dataclass(frozen=True, slots=True)
class Color:
    """RGB 各チャネルを整数で持つ色。

    Parameters
    ----------
    r, g, b : int
        各チャネル値。`int()` 化して 0..255 に clamp して保持する。

    Notes
    -----
    構築時に clamp するため、どの演算の結果も常に 0..255 に収まる。
    補間の途中で生じる負の差分は `interpolate()` の内部でだけ扱う。
    """

    r: int = 0
    g: int = 0
    b: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "r", clamp_channel(self.r))
        object.__setattr__(self, "g", clamp_channel(self.g))
        object.__setattr__(self, "b", clamp_channel(self.b))

    @classmethod
    def coerce(cls, value: object) -> Color:
        """値を `Color` に正規化して返す。

        Parameters
        ----------
        value : object
            `Color` または `(r, g, b)` の 3 要素シーケンス。

        Returns
        -------
        Color
            `int()` 化 + 0..255 clamp 済みの色。

        Raises
        ------
        ValueError
            長さ 3 のシーケンスでない場合。
        """

        if isinstance(value, Color):
            return value
        try:
            r, g, b = value  # type: ignore[misc]
            channels = [int(cast(Any, v)) for v in (r, g, b)]
        except (TypeError, ValueError) as exc:
            raise ValueError(f"rgb value must be a length-3 sequence: {value!r}") from exc
        return cls(*channels)

    def as_tuple(self) -> tuple[int, int, int]:
        return self.r, self.g, self.b

    def __add__(self, other: Color) -> Color:
        if not isinstance(other, Color):
            return NotImplemented
        return Color(
            clamp_channel(self.r + other.r),
            clamp_channel(self.g + other.g),
            clamp_channel(self.b + other.b),
        )

    def __sub__(self, other: Color) -> Color:
        if not isinstance(other, Color):
            return NotImplemented
        return Color(self.r - other.r, self.g - other.g, self.b - other.b)

    def __mul__(self, multiplier: float) -> Color:
        if isinstance(multiplier, Color):
            return NotImplemented
        m = float(multiplier)
        if m < 0:
            return self
        return Color(
            int(min(self.r * m, float(MAX_CHANNEL))),
            int(min(self.g * m, float(MAX_CHANNEL))),
            int(min(self.b * m, float(MAX_CHANNEL))),
        )

    def invert(self) -> Color:
        """各チャネルを 255 からの距離に置き換えた色を返す。"""

        return Color(
            abs(MAX_CHANNEL - self.r),
            abs(MAX_CHANNEL - self.g),
            abs(MAX_CHANNEL - self.b),
        )

    def interpolate(self, other: Color, multiplier: float) -> Color:
        """self から other へ multiplier の割合で線形補間した色を返す。

        Notes
        -----
        チャネルごとに `(other - self) * multiplier + self` を評価する。
        差分は clamp せず負のまま倍率を掛け、最後の加算でだけ clamp する。
        倍率の扱いは `__mul__` と同じ（負なら差分そのまま、上限 255 で 0 方向へ切り捨て）。
        """

        m = float(multiplier)

        def _channel(start: int, end: int) -> int:
            diff = end - start
            scaled = diff if m < 0 else int(min(diff * m, float(MAX_CHANNEL)))
            return clamp_channel(scaled + start)

        return Color(
            _channel(self.r, other.r),
            _channel(self.g, other.g),
            _channel(self.b, other.b),
        )

    def add_noise(self, rng: np.random.Generator) -> Color:
        """3 チャネルに同じ乱数オフセットを加えた色を返す。

        Parameters
        ----------
        rng : numpy.random.Generator
            乱数源。

        Returns
        -------
        Color
            オフセットは [0, 255) の大きさを 1/2 の確率で負にしたもの。
            各チャネルは 0..255 に clamp される。
        """

        offset = draw_noise_offsets(rng, 1)[0]
        return Color(
            clamp_channel(self.r + offset),
            clamp_channel(self.g + offset),
            clamp_channel(self.b + offset),
        )


def draw_noise_offsets(rng: np.random.Generator, count: int) -> np.ndarray:
    """ノイズ用のグレー値オフセットを count 個引いて返す。

    Returns
    -------
    np.ndarray
        int32 型 shape (count,)。各要素は (-255, 255) の範囲。
    """

    n = int(count)
    negate = rng.integers(0, 2, size=n) == 1
    magnitude = rng.integers(0, MAX_CHANNEL, size=n).astype(np.int32)
    return np.where(negate, -magnitude, magnitude).astype(np.int32)


BLACK = Color(0, 0, 0)
WHITE = Color(MAX_CHANNEL, MAX_CHANNEL, MAX_CHANNEL)


__all__ = ["BLACK", "Color", "MAX_CHANNEL", "WHITE", "clamp_channel", "draw_noise_offsets"]
