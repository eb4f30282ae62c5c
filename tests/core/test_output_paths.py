from pathlib import Path

import pytest

from ppmdraw.core.output_paths import output_path_for
from ppmdraw.core.runtime_config import set_config_path


@pytest.fixture(autouse=True)
def _isolate(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    set_config_path(None)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    yield
    set_config_path(None)


def test_output_path_uses_runtime_output_dir() -> None:
    path = output_path_for(kind="ppm", name="sun", ext="ppm")
    assert path == Path("data") / "output" / "ppm" / "sun.ppm"


def test_output_path_with_explicit_root_and_run_id(tmp_path: Path) -> None:
    path = output_path_for(kind="txt", name="triangle report", ext=".txt", run_id="v 1", root=tmp_path)
    assert path == tmp_path / "txt" / "triangle_report_v_1.txt"


def test_blank_run_id_adds_no_suffix(tmp_path: Path) -> None:
    path = output_path_for(kind="ppm", name="rays", ext="ppm", run_id="  ", root=tmp_path)
    assert path.name == "rays.ppm"


@pytest.mark.parametrize("name,ext", [("sun", ""), ("sun", "."), ("", "ppm")])
def test_empty_name_or_ext_raises(tmp_path: Path, name: str, ext: str) -> None:
    with pytest.raises(ValueError):
        output_path_for(kind="ppm", name=name, ext=ext, root=tmp_path)
