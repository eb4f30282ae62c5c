import logging
from pathlib import Path

import pytest

from ppmdraw.core.runtime_config import output_root_dir, runtime_config, set_config_path


@pytest.fixture(autouse=True)
def _reset_runtime_config() -> None:
    set_config_path(None)
    yield
    set_config_path(None)


def _isolate_config_discovery(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))


def _write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def test_output_root_dir_uses_packaged_defaults(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    _isolate_config_discovery(tmp_path, monkeypatch)

    assert output_root_dir() == Path("data") / "output"
    cfg = runtime_config()
    assert cfg.config_path is None
    assert cfg.output_dir == Path("data") / "output"
    assert cfg.image_size == (1920, 1080)
    assert cfg.random_seed is None
    assert cfg.log_level == logging.INFO


def test_discovered_config_overrides_packaged_defaults(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    _isolate_config_discovery(tmp_path, monkeypatch)

    discovered = _write(
        tmp_path / ".ppmdraw" / "config.yaml",
        'paths:\n  output_dir: "./out_discovered"\nrandom:\n  seed: 3\n',
    )

    assert output_root_dir() == Path("out_discovered")
    cfg = runtime_config()
    assert cfg.config_path == discovered
    assert cfg.random_seed == 3
    assert cfg.image_size == (1920, 1080)


def test_explicit_config_overrides_discovered_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    _isolate_config_discovery(tmp_path, monkeypatch)

    _write(tmp_path / ".ppmdraw" / "config.yaml", 'paths:\n  output_dir: "./out_discovered"\n')
    explicit = _write(
        tmp_path / "explicit.yaml",
        'paths:\n  output_dir: "./out_explicit"\nimage:\n  size: [64, 32]\nlogging:\n  level: debug\n',
    )

    set_config_path(explicit)
    cfg = runtime_config()
    assert cfg.config_path == explicit
    assert cfg.output_dir == Path("out_explicit")
    assert cfg.image_size == (64, 32)
    assert cfg.log_level == logging.DEBUG


def test_runtime_config_is_cached_until_path_changes(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    _isolate_config_discovery(tmp_path, monkeypatch)

    first = runtime_config()
    assert runtime_config() is first

    set_config_path(_write(tmp_path / "c.yaml", "random:\n  seed: 1\n"))
    assert runtime_config() is not first


def test_missing_explicit_config_raises(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    _isolate_config_discovery(tmp_path, monkeypatch)

    set_config_path(tmp_path / "missing.yaml")
    with pytest.raises(FileNotFoundError):
        runtime_config()


@pytest.mark.parametrize(
    "text",
    [
        "version: 2\n",
        "- a\n- b\n",
        "image:\n  size: [1, 2, 3]\n",
        "image:\n  size: [a, b]\n",
        "random:\n  seed: abc\n",
        "logging:\n  level: LOUD\n",
        "paths: 3\n",
    ],
)
def test_invalid_config_raises_runtime_error(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, text: str
):
    _isolate_config_discovery(tmp_path, monkeypatch)

    set_config_path(_write(tmp_path / "bad.yaml", text))
    with pytest.raises(RuntimeError):
        runtime_config()


def test_non_positive_image_size_raises_value_error(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    _isolate_config_discovery(tmp_path, monkeypatch)

    set_config_path(_write(tmp_path / "bad.yaml", "image:\n  size: [0, 10]\n"))
    with pytest.raises(ValueError):
        runtime_config()


def test_layers_merge_per_section(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """明示 config に無いセクション・キーは探索 config と同梱既定値から引き継ぐ。"""
    _isolate_config_discovery(tmp_path, monkeypatch)

    _write(tmp_path / ".ppmdraw" / "config.yaml", "random:\n  seed: 9\nlogging:\n  level: WARNING\n")
    set_config_path(_write(tmp_path / "explicit.yaml", "logging:\n  level: 10\n"))

    cfg = runtime_config()
    assert cfg.random_seed == 9
    assert cfg.log_level == logging.DEBUG
    assert cfg.image_size == (1920, 1080)
    assert cfg.output_dir == Path("data") / "output"
