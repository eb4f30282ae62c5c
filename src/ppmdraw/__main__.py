"""
どこで: `src/ppmdraw/__main__.py`。
何を: `python -m ppmdraw` / `ppmdraw` で既定シナリオを実行するエントリポイント。
なぜ: 画像とレポートをまとめて再生成する導線を用意するため。
"""

from __future__ import annotations

import argparse
import logging
import sys

import numpy as np

from ppmdraw.core.runtime_config import output_root_dir, runtime_config, set_config_path
from ppmdraw.scenes import build_jobs, run_jobs

_logger = logging.getLogger(__name__)


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="ppmdraw")
    p.add_argument("--config", default=None, help="config.yaml のパス（省略時は既定の探索）")
    p.add_argument("--seed", type=int, default=None, help="ノイズ用 seed（config の random.seed より優先）")
    p.add_argument(
        "--size",
        type=int,
        nargs=2,
        metavar=("WIDTH", "HEIGHT"),
        default=None,
        help="画像サイズ（config の image.size より優先）",
    )
    p.add_argument("--run-id", default=None, help="出力ファイル名の接尾辞")
    p.add_argument(
        "--only",
        default="",
        help="実行するシナリオをカンマ区切りで指定（例: sun,rays）",
    )
    return p.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    if args.config is not None:
        set_config_path(args.config)

    cfg = runtime_config()
    logging.basicConfig(level=cfg.log_level)

    if args.size is not None and (args.size[0] <= 0 or args.size[1] <= 0):
        _logger.error("--size は正の値である必要がある: got=%s", args.size)
        return 2

    image_size = tuple(args.size) if args.size is not None else cfg.image_size
    seed = args.seed if args.seed is not None else cfg.random_seed
    rng = np.random.default_rng(seed)

    jobs = build_jobs(
        image_size=(int(image_size[0]), int(image_size[1])),
        rng=rng,
        output_root=output_root_dir(),
        run_id=args.run_id,
    )
    only = {s.strip() for s in str(args.only).split(",") if s.strip()}
    if only:
        unknown = only - {job.name for job in jobs}
        if unknown:
            _logger.error("Unknown scenario: %s", ", ".join(sorted(unknown)))
            return 2
        jobs = [job for job in jobs if job.name in only]

    written = run_jobs(jobs)
    _logger.info("%d/%d outputs written under %s", len(written), len(jobs), output_root_dir())
    return 0 if len(written) == len(jobs) else 1


if __name__ == "__main__":
    sys.exit(main())
