"""
どこで: `src/ppmdraw/export/ppm.py`。
何を: 画素バッファを PPM（P3, テキスト形式）として保存・再読込する関数を提供する。
なぜ: 外部ビューアで開ける最小の画像形式として、書式を一箇所で固定するため。
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

import numpy as np

MAGIC_NUMBER = "P3"
MAX_VALUE = 255

_logger = logging.getLogger(__name__)


def _check_pixels(pixels: np.ndarray) -> tuple[int, int]:
    if pixels.ndim != 3 or pixels.shape[2] != 3:
        raise ValueError("pixels は shape (H,W,3) の配列である必要がある")
    height, width = int(pixels.shape[0]), int(pixels.shape[1])
    return width, height


def _iter_ppm_lines(pixels: np.ndarray) -> Iterator[str]:
    """PPM の各行（改行なし）を列挙する。"""
    width, height = _check_pixels(pixels)
    yield MAGIC_NUMBER
    yield f"{width} {height}"
    yield str(MAX_VALUE)
    for row in pixels:
        # 各 triple の後ろにタブを置く（行末にも 1 つ残る）。
        yield "".join(f"{int(r)} {int(g)} {int(b)}\t" for r, g, b in row)


def format_ppm(pixels: np.ndarray) -> str:
    """画素バッファ shape (H,W,3) を PPM テキストに変換して返す。"""
    return "".join(line + "\n" for line in _iter_ppm_lines(pixels))


def write_ppm(pixels: np.ndarray, path: str | Path) -> Path:
    """画素バッファを PPM として保存する。

    Parameters
    ----------
    pixels : np.ndarray
        shape (H,W,3) の整数配列。各値は 0..255。
    path : str or Path
        出力先パス。親ディレクトリは作成しない。

    Returns
    -------
    Path
        保存先パス。

    Raises
    ------
    OSError
        出力先を開けない場合。
    """
    _path = Path(path)
    _check_pixels(pixels)
    with _path.open("w", encoding="ascii", newline="\n") as f:
        for line in _iter_ppm_lines(pixels):
            f.write(line)
            f.write("\n")
    _logger.info("Image drawn: %s", _path)
    return _path


def parse_ppm(text: str) -> np.ndarray:
    """PPM（P3）テキストを解析し、uint8 型 shape (H,W,3) の配列を返す。

    Raises
    ------
    ValueError
        マジックナンバー・寸法・最大値・画素数が不正な場合。
    """
    tokens = text.split()
    if len(tokens) < 4:
        raise ValueError("PPM ヘッダが不足している")
    if tokens[0] != MAGIC_NUMBER:
        raise ValueError(f"未対応のマジックナンバー: {tokens[0]!r}")
    try:
        width = int(tokens[1])
        height = int(tokens[2])
        max_value = int(tokens[3])
    except ValueError as exc:
        raise ValueError(f"PPM ヘッダが整数でない: {tokens[1:4]!r}") from exc
    if width <= 0 or height <= 0:
        raise ValueError(f"PPM の寸法は正である必要がある: {width}x{height}")
    if max_value != MAX_VALUE:
        raise ValueError(f"未対応の最大値: {max_value}")

    body = tokens[4:]
    expected = width * height * 3
    if len(body) != expected:
        raise ValueError(f"画素値の個数が一致しない: expected={expected}, got={len(body)}")
    try:
        values = np.asarray([int(v) for v in body], dtype=np.int64)
    except ValueError as exc:
        raise ValueError("画素値が整数でない") from exc
    if values.size and (values.min() < 0 or values.max() > max_value):
        raise ValueError(f"画素値が 0..{max_value} の範囲外")
    return values.astype(np.uint8).reshape(height, width, 3)


def read_ppm(path: str | Path) -> np.ndarray:
    """PPM ファイルを読み込み、uint8 型 shape (H,W,3) の配列を返す。"""
    return parse_ppm(Path(path).read_text(encoding="ascii"))


__all__ = ["MAGIC_NUMBER", "MAX_VALUE", "format_ppm", "parse_ppm", "read_ppm", "write_ppm"]
