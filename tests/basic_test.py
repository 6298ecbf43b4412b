import importlib
import importlib.metadata as metadata
import builtins
import io
from pathlib import Path

import pytest


def test_version_fallback(monkeypatch):
    # Force PackageNotFoundError
    monkeypatch.setattr(metadata, "version", lambda _: (_ for _ in ()).throw(metadata.PackageNotFoundError))

    # Fake pyproject.toml content
    fake_toml = b"[project]\nversion = '0.1.0'\n"
    monkeypatch.setattr(builtins, "open", lambda *_: io.BytesIO(fake_toml))

    # Reload the module so the fallback branch executes
    import unitproduct
    importlib.reload(unitproduct)

    assert unitproduct.__version__ == "0.1.0"


@pytest.mark.regression(reason="Version fallback read pyproject.toml from the working directory")
def test_version_fallback_reads_project_file_next_to_sources(monkeypatch, tmp_path):
    monkeypatch.setattr(metadata, "version", lambda _: (_ for _ in ()).throw(metadata.PackageNotFoundError))
    opened = []

    def fake_open(path, *_):
        opened.append(Path(path))
        return io.BytesIO(b"[project]\nversion = '0.1.0'\n")

    monkeypatch.setattr(builtins, "open", fake_open)
    monkeypatch.chdir(tmp_path)

    import unitproduct
    importlib.reload(unitproduct)

    assert Path(unitproduct.__file__).resolve().parents[2] / "pyproject.toml" in opened
    assert tmp_path / "pyproject.toml" not in opened
    assert unitproduct.__version__ == "0.1.0"


def test_public_api_resolves_lazily():
    import unitproduct
    from unitproduct.engine import DEFAULT_ENGINE, ArithmeticEngine, multiply
    from unitproduct.relations.registry import DEFAULT_RELATIONS

    assert unitproduct.DEFAULT_ENGINE is DEFAULT_ENGINE
    assert unitproduct.ArithmeticEngine is ArithmeticEngine
    assert unitproduct.multiply is multiply
    assert unitproduct.DEFAULT_RELATIONS is DEFAULT_RELATIONS


def test_namespace_u_reads_default_catalog():
    import unitproduct
    from unitproduct.units.catalog import DEFAULT_CATALOG

    assert unitproduct.u.km is DEFAULT_CATALOG.get("km")
    assert unitproduct.u("km/h") is DEFAULT_CATALOG.get("km/h")


def test_unknown_module_attribute_raises_attributeerror():
    import unitproduct
    import pytest

    with pytest.raises(AttributeError):
        _ = unitproduct.definitely_not_a_public_attr


def test_dir_includes_u_and_is_sorted():
    import unitproduct
    names = dir(unitproduct)
    assert "u" in names
    assert "DEFAULT_ENGINE" in names
    assert names == sorted(names)
