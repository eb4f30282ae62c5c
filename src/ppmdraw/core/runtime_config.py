# どこで: `src/ppmdraw/core/runtime_config.py`。
# 何を: config.yaml による実行時設定（探索・ロード・キャッシュ）を提供する。
# なぜ: 出力先・画像サイズ・乱数 seed・ログレベルをコードに直書きせず、ユーザーが指定できるようにするため。

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import Any

import yaml

_PACKAGED_SOURCE = "ppmdraw/resource/default_config.yaml"
_SUPPORTED_VERSION = 1


@dataclass(frozen=True, slots=True)
class RuntimeConfig:
    """ppmdraw の実行時設定。

    Attributes
    ----------
    config_path : Path or None
        最後に重ねたユーザー config のパス。同梱既定値だけなら None。
    output_dir : Path
        画像とレポートの出力ルート。
    image_size : tuple[int, int]
        既定シナリオの (width, height)。
    random_seed : int or None
        ノイズ用 seed。None なら毎回異なる乱数。
    log_level : int
        `logging.basicConfig` に渡すレベル。
    """

    config_path: Path | None
    output_dir: Path
    image_size: tuple[int, int]
    random_seed: int | None
    log_level: int


_EXPLICIT_CONFIG_PATH: Path | None = None
_CONFIG_CACHE: RuntimeConfig | None = None


def set_config_path(path: str | Path | None) -> None:
    """明示 config パスを設定し、キャッシュを破棄する。None で明示指定を解除する。"""

    global _EXPLICIT_CONFIG_PATH, _CONFIG_CACHE
    _EXPLICIT_CONFIG_PATH = None if path is None else Path(str(path)).expanduser()
    _CONFIG_CACHE = None


def _discover_user_config() -> Path | None:
    """`./.ppmdraw/config.yaml`、`~/.config/ppmdraw/config.yaml` の順で最初に見つかったものを返す。"""
    for candidate in (
        Path.cwd() / ".ppmdraw" / "config.yaml",
        Path.home() / ".config" / "ppmdraw" / "config.yaml",
    ):
        if candidate.is_file():
            return candidate
    return None


def _parse_yaml(text: str, *, source: str) -> dict[str, Any]:
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise RuntimeError(f"config.yaml の読み込みに失敗しました: source={source}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise RuntimeError(f"config.yaml は mapping である必要があります: source={source}")
    return dict(data)


def _read_packaged_defaults() -> dict[str, Any]:
    try:
        text = resources.files("ppmdraw").joinpath("resource", "default_config.yaml").read_text(
            encoding="utf-8"
        )
    except OSError as exc:  # pragma: no cover
        raise RuntimeError(
            "同梱 default_config.yaml の読み込みに失敗しました"
            "（パッケージ配布物の package-data を確認してください）"
        ) from exc
    return _parse_yaml(text, source=_PACKAGED_SOURCE)


def _overlay(payload: dict[str, Any], override: dict[str, Any]) -> None:
    """トップレベルのセクション単位で override を payload に重ねる（セクション内は後勝ち）。"""
    for key, value in override.items():
        base = payload.get(key)
        if isinstance(base, dict) and isinstance(value, dict):
            payload[key] = {**base, **value}
        else:
            payload[key] = value


def _section(payload: dict[str, Any], name: str) -> dict[str, Any]:
    value = payload.get(name)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise RuntimeError(f"{name} は mapping である必要があります: got={value!r}")
    return value


def _check_version(payload: dict[str, Any]) -> None:
    version = payload.get("version")
    if version is None:
        raise RuntimeError(f"config.yaml の version が未設定です（{_PACKAGED_SOURCE} を確認してください）")
    try:
        version_i = int(version)
    except (TypeError, ValueError) as exc:
        raise RuntimeError(f"config.yaml の version は整数である必要があります: got={version!r}") from exc
    if version_i != _SUPPORTED_VERSION:
        raise RuntimeError(f"未対応の config.yaml version です: got={version_i}")


def _output_dir(paths: dict[str, Any]) -> Path:
    text = str(paths.get("output_dir") or "").strip()
    if not text:
        raise RuntimeError(f"paths.output_dir が未設定です（{_PACKAGED_SOURCE} を確認してください）")
    return Path(os.path.expandvars(os.path.expanduser(text)))


def _image_size(image: dict[str, Any]) -> tuple[int, int]:
    value = image.get("size")
    if not isinstance(value, (list, tuple)) or len(value) != 2:
        raise RuntimeError(f"image.size は [width, height] の配列である必要があります: got={value!r}")
    try:
        width, height = int(value[0]), int(value[1])
    except (TypeError, ValueError) as exc:
        raise RuntimeError(f"image.size は整数の配列である必要があります: got={value!r}") from exc
    if width <= 0 or height <= 0:
        raise ValueError(f"image.size は正の値である必要があります: got={(width, height)}")
    return width, height


def _random_seed(rand: dict[str, Any]) -> int | None:
    value = rand.get("seed")
    if value is None:
        return None
    if isinstance(value, bool):
        raise RuntimeError(f"random.seed は整数である必要があります: got={value!r}")
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise RuntimeError(f"random.seed は整数である必要があります: got={value!r}") from exc


def _log_level(log: dict[str, Any]) -> int:
    value = log.get("level", "INFO")
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    level = logging.getLevelName(str(value).strip().upper())
    if not isinstance(level, int):
        raise RuntimeError(f"logging.level は logging レベル名である必要があります: got={value!r}")
    return level


def runtime_config() -> RuntimeConfig:
    """実行時設定をロードして返す（キャッシュ）。

    上書き順（後勝ち）:
    1) 同梱 default_config.yaml
    2) `./.ppmdraw/config.yaml` / `~/.config/ppmdraw/config.yaml`（先に見つかった方のみ）
    3) `set_config_path(...)` で指定した config

    Raises
    ------
    FileNotFoundError
        明示パスのファイルが存在しない場合。
    RuntimeError
        YAML が壊れている、またはキーの型・値が不正な場合。
    ValueError
        image.size が正でない場合。
    """

    global _CONFIG_CACHE
    if _CONFIG_CACHE is not None:
        return _CONFIG_CACHE

    explicit_path = _EXPLICIT_CONFIG_PATH
    if explicit_path is not None and not explicit_path.is_file():
        raise FileNotFoundError(f"config.yaml が見つかりません: {explicit_path}")
    discovered_path = _discover_user_config()

    payload = _read_packaged_defaults()
    for layer in (discovered_path, explicit_path):
        if layer is not None:
            _overlay(payload, _parse_yaml(layer.read_text(encoding="utf-8"), source=str(layer)))

    _check_version(payload)
    cfg = RuntimeConfig(
        config_path=explicit_path or discovered_path,
        output_dir=_output_dir(_section(payload, "paths")),
        image_size=_image_size(_section(payload, "image")),
        random_seed=_random_seed(_section(payload, "random")),
        log_level=_log_level(_section(payload, "logging")),
    )
    _CONFIG_CACHE = cfg
    return cfg


def output_root_dir() -> Path:
    """出力ファイルを保存する既定ルートディレクトリを返す。"""
    return runtime_config().output_dir


__all__ = ["RuntimeConfig", "output_root_dir", "runtime_config", "set_config_path"]
