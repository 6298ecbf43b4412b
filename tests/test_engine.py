# pytest tests for unitproduct.engine
#
# Covers the exact and canonical paths for multiply/divide, operand swapping,
# the error taxonomy, and the worked scenarios (60 km/h × 2 h = 120 km, ...).

import math
import threading

import pytest

from unitproduct.core.dimensions import LENGTH, MASS, SPEED, TIME
from unitproduct.core.measurement import Measurement
from unitproduct.core.unit import Unit
from unitproduct.engine import DEFAULT_ENGINE, ArithmeticEngine, divide, multiply
from unitproduct.errors import (
    DivisionByZero,
    InexactPreferredMapping,
    NoRelationRegistered,
    RegistryNotFrozen,
)
from unitproduct.relations.mapping import Relation, UnitMapping
from unitproduct.relations.registry import RelationRegistry


class _NoConversionCatalog:
    """Catalog stand-in that fails the test if the engine converts anything."""

    def convert(self, value, from_unit, to_unit):
        raise AssertionError(f"unexpected conversion {from_unit} -> {to_unit}")


@pytest.fixture()
def exact_only(registry):
    return ArithmeticEngine(registry, _NoConversionCatalog())


def _preferred_pairs():
    from unitproduct.relations.registry import DEFAULT_RELATIONS

    for rel in DEFAULT_RELATIONS:
        for mapping in rel.preferred:
            yield pytest.param(mapping, id=str(mapping))

# ---------------------------------------------------------------------------
# Worked scenarios
# ---------------------------------------------------------------------------

def test_speed_times_duration_uses_preferred_mapping(engine, u):
    d = engine.multiply(60 * u("km/h"), 2 * u.h)
    assert d.value == 120.0
    assert d.unit.name == "km"

def test_si_speed_times_duration_uses_default_mapping(engine, u):
    d = engine.multiply(5 * u("m/s"), 10 * u.s)
    assert d.value == 50.0
    assert d.unit.name == "m"

def test_distance_divided_by_duration_is_exact(engine, u):
    v = engine.divide(120 * u.km, 2 * u.h)
    assert v.value == 60.0
    assert v.unit.name == "km/h"

def test_knots_times_hours_gives_nautical_miles(exact_only, u):
    d = exact_only.multiply(12.5 * u.kn, 3 * u.h)
    assert d.value == 12.5 * 3
    assert d.unit.name == "nmi"

def test_area_times_length_falls_back_to_cubic_metres(engine, u):
    v = engine.multiply(2 * u("m²"), 3 * u.m)
    assert v.value == 6.0
    assert v.unit.name == "m³"

    v = engine.multiply(1 * u.ha, 2 * u.m)
    assert v.value == pytest.approx(20000.0)
    assert v.unit.name == "m³"

def test_latest_registration_wins(u):
    reg = RelationRegistry()
    reg.register(Relation.between(
        UnitMapping(u("m/s"), u.s, u.m),
        preferred=[UnitMapping(u("km/h"), u.h, u.km)],
    ))
    reg.register(Relation.between(UnitMapping(u("m/s"), u.s, u.m)))
    reg.freeze()
    engine = ArithmeticEngine(reg)

    d = engine.multiply(60 * u("km/h"), 2 * u.h)
    assert d.unit.name == "m"
    assert d.value == pytest.approx(120000.0)

# ---------------------------------------------------------------------------
# Exact path
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("mapping", list(_preferred_pairs()))
@pytest.mark.parametrize("x,y", [(60, 2), (0.1, 0.7), (1e-3, 12345.678), (-3.3, 7)])
def test_exact_path_is_bit_for_bit_product(exact_only, mapping, x, y):
    result = exact_only.multiply(Measurement(x, mapping.factor1), Measurement(y, mapping.factor2))
    assert result.value == float(x) * float(y)
    assert result.unit == mapping.product
    assert result.unit.name == mapping.product.name

@pytest.mark.parametrize("mapping", list(_preferred_pairs()))
def test_round_trip_through_division(exact_only, mapping):
    a = Measurement(3.7, mapping.factor1)
    b = Measurement(0.45, mapping.factor2)
    product = exact_only.multiply(a, b)

    back_b = exact_only.divide(product, a)
    assert back_b.value == pytest.approx(b.value, rel=1e-12)
    assert back_b.unit == b.unit

def test_round_trip_recovers_factor1_too(exact_only, u):
    product = exact_only.multiply(60 * u("km/h"), 2 * u.h)
    t = exact_only.divide(product, 60 * u("km/h"))
    assert t.value == 2.0
    assert t.unit.name == "h"

def test_first_matching_preferred_mapping_wins(u):
    sq_km = Unit("sq km", 1e6, u.m.dim ** 2)
    reg = RelationRegistry.from_declarations([
        Relation.between(
            UnitMapping(u.m, u.m, u("m²")),
            preferred=[
                UnitMapping(u.km, u.km, u("km²")),
                UnitMapping(u.km, u.km, sq_km),
            ],
        ),
    ])
    area = ArithmeticEngine(reg).multiply(2 * u.km, 3 * u.km)
    assert area.unit.name == "km²"
    assert area.value == 6.0

def test_partial_unit_match_does_not_take_exact_path(engine, u):
    # km/h × min matches no preferred mapping: canonical path in metres
    d = engine.multiply(60 * u("km/h"), 30 * u.min)
    assert d.unit.name == "m"
    assert d.value == pytest.approx(30000.0)

# ---------------------------------------------------------------------------
# Operand order
# ---------------------------------------------------------------------------

def test_swapped_operands_are_accepted(exact_only, u):
    d = exact_only.multiply(2 * u.h, 60 * u("km/h"))
    assert d.value == 120.0
    assert d.unit.name == "km"

def test_registered_order_takes_precedence_over_swap(u):
    # with both orders registered, the (a, b) entry is used as declared
    reg = RelationRegistry()
    reg.register(Relation.between(UnitMapping(u("m/s"), u.s, u.m)))
    kilo = Relation(TIME, SPEED, LENGTH, UnitMapping(u.h, u("km/h"), u.km))
    reg.register(kilo)
    reg.freeze()
    engine = ArithmeticEngine(reg)
    d = engine.multiply(1 * u.h, 10 * u("m/s"))
    assert d.unit.name == "km"
    assert d.value == pytest.approx(36.0)

# ---------------------------------------------------------------------------
# Canonical path
# ---------------------------------------------------------------------------

def test_fallback_multiply_matches_hand_computation(engine, u):
    d = engine.multiply(10 * u("ft/s"), 1 * u.min)
    assert d.unit.name == "m"
    assert d.value == pytest.approx(10 * 0.3048 * 60)
    assert d.to("ft").value == pytest.approx(600.0)

def test_fallback_divide_matches_hand_computation(engine, u):
    v = engine.divide(1 * u.km, 1 * u.min)
    assert v.unit.name == "m/s"
    assert v.value == pytest.approx(1000 / 60)
    assert v.to("km/h").value == pytest.approx(60.0)

def test_mass_from_concentration_and_volume(engine, u):
    m = engine.multiply(0.9 * u("g/L"), 500 * u.mL)
    assert m.unit.name == "g"
    assert m.value == pytest.approx(0.45)

def test_exact_preferred_charge_and_energy(exact_only, u):
    q = exact_only.multiply(250 * u.mA, 4 * u.h)
    assert (q.value, q.unit.name) == (1000.0, "mAh")
    e = exact_only.multiply(2.5 * u.kW, 3 * u.h)
    assert (e.value, e.unit.name) == (7.5, "kWh")

def test_divide_energy_by_duration_gives_power(exact_only, u):
    p = exact_only.divide(3 * u.kWh, 1.5 * u.h)
    assert (p.value, p.unit.name) == (2.0, "kW")

def test_ohms_law(engine, u):
    v = engine.multiply(4.7 * u.kΩ, 2 * u.mA)
    assert v.unit.name == "V"
    assert v.value == pytest.approx(9.4)
    i = engine.divide(12 * u.V, 4 * u.Ω)
    assert i.unit.name == "A"
    assert i.value == 3.0

def test_acceleration_times_duration(engine, u):
    v = engine.multiply(1 * u("ɡₙ"), 2 * u.s)
    assert v.unit.name == "m/s"
    assert v.value == pytest.approx(19.6133)

# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

def test_unregistered_pair_raises(engine, u):
    with pytest.raises(NoRelationRegistered) as exc:
        engine.multiply(1 * u.kg, 1 * u.m)
    assert exc.value.dims == (MASS, LENGTH)
    assert isinstance(exc.value, LookupError)

def test_unregistered_division_raises(engine, u):
    with pytest.raises(NoRelationRegistered):
        engine.divide(1 * u.kg, 1 * u.s)
    # a relation produces length, but not from mass
    with pytest.raises(NoRelationRegistered):
        engine.divide(1 * u.km, 1 * u.kg)

def test_division_by_zero(engine, u):
    with pytest.raises(DivisionByZero):
        engine.divide(120 * u.km, 0 * u.h)
    with pytest.raises(ZeroDivisionError):
        engine.divide(120 * u.km, 0.0 * u.s)

def test_empty_registry_raises(u):
    reg = RelationRegistry()
    reg.freeze()
    engine = ArithmeticEngine(reg)
    with pytest.raises(NoRelationRegistered):
        engine.multiply(60 * u("km/h"), 2 * u.h)

@pytest.mark.regression(reason="Unvalidated registry let an inexact preferred mapping reach the exact path")
def test_engine_rejects_unfrozen_registry(u):
    reg = RelationRegistry()
    reg.register(Relation.between(
        UnitMapping(u("m/s"), u.s, u.m),
        preferred=[UnitMapping(u("km/h"), u.s, u.km)],
    ))
    with pytest.raises(RegistryNotFrozen):
        ArithmeticEngine(reg)
    with pytest.raises(InexactPreferredMapping):
        reg.freeze()
    assert not reg.frozen
    with pytest.raises(RegistryNotFrozen):
        ArithmeticEngine(reg)

def test_engine_accepts_registry_once_frozen(u):
    reg = RelationRegistry()
    reg.register(Relation.between(UnitMapping(u("m/s"), u.s, u.m)))
    reg.freeze()
    d = ArithmeticEngine(reg).multiply(60 * u("km/h"), 2 * u.s)
    assert d.unit.name == "m"
    assert d.value == pytest.approx(100 / 3)

# ---------------------------------------------------------------------------
# Module-level helpers & concurrency
# ---------------------------------------------------------------------------

def test_module_functions_use_default_engine(u):
    assert multiply(60 * u.kph, 2 * u.h) == DEFAULT_ENGINE.multiply(60 * u.kph, 2 * u.h)
    assert divide(120 * u.km, 2 * u.h).value == 60.0
    assert DEFAULT_ENGINE.registry.frozen

def test_concurrent_multiply_is_consistent(u):
    results = []
    lock = threading.Lock()

    def worker():
        local = [multiply(60 * u.kph, 2 * u.h) for _ in range(100)]
        with lock:
            results.extend(local)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(results) == 800
    assert all(r.value == 120.0 and r.unit.name == "km" for r in results)
    assert math.isclose(results[0].si_value, 120000.0)
