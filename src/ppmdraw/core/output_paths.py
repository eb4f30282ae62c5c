# どこで: `src/ppmdraw/core/output_paths.py`。
# 何を: シナリオ名に基づき、出力ファイルの保存先パスを決める。
# なぜ: `output/{kind}/` 配下に種類別で整理し、呼び出し側がパスを直書きしないようにするため。

from __future__ import annotations

import re
from pathlib import Path

from ppmdraw.core.runtime_config import output_root_dir


def _sanitize_name(name: str) -> str:
    """name をファイル名の一部として使える形に正規化して返す。"""

    return re.sub(r"[^A-Za-z0-9._-]+", "_", str(name))


def _run_id_suffix(run_id: str | None) -> str:
    """run_id の接尾辞（例: `_v1`）を返す。未指定なら空文字を返す。"""

    if run_id is None:
        return ""
    s = str(run_id).strip()
    if not s:
        return ""
    sanitized = _sanitize_name(s)
    if not sanitized:
        return ""
    return f"_{sanitized}"


def output_path_for(
    *,
    kind: str,
    name: str,
    ext: str,
    run_id: str | None = None,
    root: Path | None = None,
) -> Path:
    """シナリオ名に基づく出力ファイルの保存先パスを返す。

    Notes
    -----
    パスは `{root}/{kind}/{name}[_run_id].{ext}`。
    root 未指定なら `output_root_dir()` を使う。
    """

    ext_norm = str(ext).lstrip(".").strip()
    if not ext_norm:
        raise ValueError("ext は空でない必要がある")

    stem = _sanitize_name(str(name).strip())
    if not stem:
        raise ValueError("name は空でない必要がある")

    base_dir = (output_root_dir() if root is None else Path(root)) / str(kind)
    return base_dir / f"{stem}{_run_id_suffix(run_id)}.{ext_norm}"


__all__ = ["output_path_for"]
