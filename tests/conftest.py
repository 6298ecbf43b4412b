# tests/conftest.py
import pytest

from unitproduct.relations.registry import RelationRegistry, _default_declarations
from unitproduct.units.catalog import DEFAULT_CATALOG as _catalog
from unitproduct.units.catalog import _bootstrap_default_catalog
from unitproduct.engine import ArithmeticEngine


@pytest.fixture(scope="session")
def u():
    return _catalog.as_namespace()


@pytest.fixture()
def catalog():
    """Fresh, fully-bootstrapped catalog so tests can register freely."""
    return _bootstrap_default_catalog()


@pytest.fixture()
def registry(catalog):
    """Fresh, frozen registry built from the shipped declarations."""
    return RelationRegistry.from_declarations(_default_declarations(catalog))


@pytest.fixture()
def engine(registry, catalog):
    return ArithmeticEngine(registry, catalog)
