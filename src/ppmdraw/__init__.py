# どこで: `src/ppmdraw/__init__.py`。
# 何を: ルート `ppmdraw` パッケージを定義し、主要な型を再公開する。
# なぜ: import 起点を `ppmdraw` に統一するため。

from __future__ import annotations

from ppmdraw.core.canvas import Canvas, InvalidDimensionsError
from ppmdraw.core.color import Color
from ppmdraw.core.fill import FillMode
from ppmdraw.core.rays import RayShader
from ppmdraw.core.region import Disk, Rectangle
from ppmdraw.core.triangle import Triangle
from ppmdraw.core.vector import DegenerateGeometryError, Ray, Vector

__all__ = [
    "Canvas",
    "Color",
    "DegenerateGeometryError",
    "Disk",
    "FillMode",
    "InvalidDimensionsError",
    "Ray",
    "RayShader",
    "Rectangle",
    "Triangle",
    "Vector",
]
