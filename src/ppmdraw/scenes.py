"""
どこで: `src/ppmdraw/scenes.py`。
何を: 太陽・ノイズグリッド・レイ方向の画像と、三角形の幾何レポートを生成するシナリオ群を提供する。
なぜ: Canvas / RayShader / 幾何演算の典型的な組み合わせを、そのまま実行できる形で残すため。
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

import numpy as np

from ppmdraw.core.canvas import Canvas
from ppmdraw.core.color import Color
from ppmdraw.core.output_paths import output_path_for
from ppmdraw.core.rays import RayShader
from ppmdraw.core.region import Disk, Rectangle
from ppmdraw.core.triangle import Triangle
from ppmdraw.core.vector import Vector
from ppmdraw.export.report import (
    triangle_report_lines,
    vector_pair_report_lines,
    write_geometry_report,
)

_logger = logging.getLogger(__name__)

SKY_COLOR_TOP = Color(173, 216, 230)
SKY_COLOR_BOTTOM = Color(250, 218, 221)
SUN_COLOR_TOP = Color(255, 219, 111)
SUN_COLOR_BOTTOM = Color(255, 127, 127)

NOISE_GRID_CELLS = 4

SAMPLE_TRIANGLE = Triangle(
    Vector(-1.75, -1.75, -3.0),
    Vector(1.75, -1.75, -3.0),
    Vector(0.0, 1.75, -3.0),
)
SAMPLE_VECTOR_PAIRS: tuple[tuple[Vector, Vector], ...] = (
    (Vector(3.5, 0.0, 0.0), Vector(1.75, 3.5, 0.0)),
    (Vector(1.0, 2.0, 3.0), Vector(-2.0, 0.5, 4.0)),
)


def draw_sun(path: str | Path, width: int, height: int) -> Path:
    """グラデーションの空に、グラデーションの円（太陽）を重ねた画像を保存する。"""
    sun_radius = min(width // 2, height // 2)
    offset = sun_radius // 10
    canvas = Canvas(path, width, height)
    canvas.fill_gradient_background(SKY_COLOR_TOP, SKY_COLOR_BOTTOM)
    sun = Disk.centered(sun_radius - offset, width, height)
    canvas.fill_gradient_region(sun, SUN_COLOR_TOP, SUN_COLOR_BOTTOM)
    return canvas.draw()


def draw_noise_grid(
    path: str | Path,
    width: int,
    height: int,
    rng: np.random.Generator,
) -> Path:
    """4x4 の矩形それぞれを、ランダムな基準色のノイズで塗った画像を保存する。"""
    canvas = Canvas(path, width, height)
    cell_w = width // NOISE_GRID_CELLS
    cell_h = height // NOISE_GRID_CELLS
    for i in range(NOISE_GRID_CELLS):
        from_y = i * cell_h
        for j in range(NOISE_GRID_CELLS):
            from_x = j * cell_w
            r, g, b = (int(v) for v in rng.integers(0, 255, size=3))
            cell = Rectangle(from_x, from_y, cell_w, cell_h)
            canvas.fill_noise_region(cell, Color(r, g, b), rng)
    return canvas.draw()


def draw_ray_directions(path: str | Path, width: int, height: int) -> Path:
    """各画素のレイ方向を RGB に写した画像を保存する。"""
    canvas = Canvas(path, width, height)
    shader = RayShader(canvas)
    shader.prepare_rays()
    shader.fill_pixels_from_rays()
    return canvas.draw()


def write_triangle_report(path: str | Path, triangle: Triangle = SAMPLE_TRIANGLE) -> Path:
    """サンプルベクトル対と三角形の幾何量をレポートとして保存する。"""
    lines: list[str] = []
    for a, b in SAMPLE_VECTOR_PAIRS:
        lines.extend(vector_pair_report_lines(a, b))
        lines.append("")
    lines.extend(triangle_report_lines(triangle))
    return write_geometry_report(path, lines)


@dataclass(frozen=True, slots=True)
class SceneJob:
    """1 つのシナリオの出力先と実行関数。"""

    name: str
    path: Path
    run: Callable[[Path], Path]


def build_jobs(
    *,
    image_size: tuple[int, int],
    rng: np.random.Generator,
    output_root: Path | None = None,
    run_id: str | None = None,
) -> list[SceneJob]:
    """既定のシナリオ一覧を返す。"""
    width, height = image_size

    def _image(name: str) -> Path:
        return output_path_for(kind="ppm", name=name, ext="ppm", run_id=run_id, root=output_root)

    report_path = output_path_for(
        kind="txt", name="triangle_report", ext="txt", run_id=run_id, root=output_root
    )
    return [
        SceneJob("sun", _image("sun"), lambda p: draw_sun(p, width, height)),
        SceneJob("noise_grid", _image("noise_grid"), lambda p: draw_noise_grid(p, width, height, rng)),
        SceneJob("rays", _image("rays"), lambda p: draw_ray_directions(p, width, height)),
        SceneJob("triangle_report", report_path, write_triangle_report),
    ]


def run_jobs(jobs: list[SceneJob]) -> list[Path]:
    """シナリオを順に実行し、保存できたパスを返す。

    Notes
    -----
    保存に失敗したシナリオはログに記録して次へ進む（再試行しない）。
    """
    written: list[Path] = []
    for job in jobs:
        try:
            job.path.parent.mkdir(parents=True, exist_ok=True)
            written.append(job.run(job.path))
        except OSError:
            _logger.exception("Failed to save %s: %s", job.name, job.path)
    return written


__all__ = [
    "SceneJob",
    "build_jobs",
    "draw_noise_grid",
    "draw_ray_directions",
    "draw_sun",
    "run_jobs",
    "write_triangle_report",
]
