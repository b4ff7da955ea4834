# tests/test_engine.py
"""
Orchestrator behaviour on a fake celestial model with linear motion, so that
skipped and repeated units happen at known instants.
"""

from dataclasses import dataclass
from typing import Optional

import pytest
from unittest.mock import patch

from panchanga.core.errors import BoundarySearchError
from panchanga.core.time import local_midnight_jd, to_jdn
from panchanga.core.types import CivilDate, ClockTime, EngineId, GeoLocation
from panchanga.engines.interfaces import RiseSet
from panchanga.engines import panchanga as panchanga_module
from panchanga.engines.panchanga import SIDEREAL_ELEMENTS, PanchangaEngine
from panchanga.names import NameTable
from panchanga.reference.astro_args import MEAN_PHASE_RATE, wrap_deg

DAY = CivilDate(2024, 1, 15)
UTC = GeoLocation(0.0, 0.0, 0.0, "test")
NAMES = NameTable.default()


def anchor_of(d: CivilDate) -> float:
    """06:00 UT on d, the fixed sunrise of the fake horizon."""
    return local_midnight_jd(to_jdn(d), 0.0) + 0.25


@dataclass(frozen=True)
class LinearModel:
    """Sun fixed at sun_deg; Moon moving at rate deg/day, at moon0 on DAY's sunrise."""
    moon0: float
    rate: float
    sun_deg: float = 0.0
    ayanamsa_deg: float = 0.0

    def solar_longitude(self, jd: float) -> float:
        return self.sun_deg

    def lunar_longitude(self, jd: float) -> float:
        return wrap_deg(self.moon0 + self.rate * (jd - anchor_of(DAY)))

    def lunar_latitude(self, jd: float) -> float:
        return 0.0

    def lunar_phase(self, jd: float) -> float:
        return wrap_deg(self.lunar_longitude(jd) - self.solar_longitude(jd))

    def ayanamsa(self, jd: float) -> float:
        return self.ayanamsa_deg


class SixOClock:
    """Sun rises at 06:00 and sets at 18:00 local time, every day, everywhere."""
    def _at(self, jdn: int, loc: GeoLocation, hours: float) -> RiseSet:
        jd = local_midnight_jd(jdn, loc.utc_offset_hours) + hours / 24.0
        return RiseSet(jd=jd, local_hours=hours, local=ClockTime.from_decimal_hours(hours))

    def sunrise(self, jdn: int, loc: GeoLocation) -> Optional[RiseSet]:
        return self._at(jdn, loc, 6.0)

    def sunset(self, jdn: int, loc: GeoLocation) -> Optional[RiseSet]:
        return self._at(jdn, loc, 18.0)

    def moonrise(self, jdn, loc):
        return None

    def moonset(self, jdn, loc):
        return None


def engine(model, zodiac="tropical") -> PanchangaEngine:
    return PanchangaEngine(EngineId("custom", "linear", "test"), model, SixOClock(), zodiac=zodiac)


def hours(ct: ClockTime) -> float:
    return ct.to_decimal_hours()


def test_unit_ending_within_the_day():
    # 10 deg at sunrise, 20 deg/day: tithi 1 ends at 12 deg, 2.4 h later
    r = engine(LinearModel(moon0=10.0, rate=20.0)).tithi(DAY, UTC, NAMES)
    assert r.unit.number == 1
    assert r.unit.name == "Śukla Pratipadā"
    assert hours(r.unit.end_time) == pytest.approx(8.4, abs=1 / 3600)
    # next sunrise at 30 deg is tithi 3: tithi 2 never sees a sunrise
    assert r.additional is not None
    assert r.additional.number == 2
    assert r.additional.is_skipped
    assert hours(r.additional.end_time) == pytest.approx(6.0 + 24.0 * 14.0 / 20.0, abs=1 / 3600)
    assert not r.unit.is_skipped


def test_unit_spanning_the_whole_day_has_no_end_time():
    r = engine(LinearModel(moon0=1.0, rate=10.0)).tithi(DAY, UTC, NAMES)
    assert r.unit.number == 1
    assert r.unit.end_time is None
    assert r.additional is None


def test_repeated_unit_on_consecutive_days():
    eng = engine(LinearModel(moon0=1.0, rate=10.0))
    first = eng.tithi(DAY, UTC, NAMES)
    second = eng.tithi(CivilDate(2024, 1, 16), UTC, NAMES)
    assert first.unit.number == second.unit.number == 1
    # 11 deg at the second sunrise, 1 deg left at 10 deg/day
    assert hours(second.unit.end_time) == pytest.approx(6.0 + 2.4, abs=1 / 3600)
    assert second.additional is None


def test_end_after_midnight_reads_past_24h():
    # 6 deg left at 8 deg/day: 18 h after sunrise
    r = engine(LinearModel(moon0=6.0, rate=8.0)).tithi(DAY, UTC, NAMES)
    assert r.unit.end_time is not None
    assert hours(r.unit.end_time) == pytest.approx(24.0, abs=1 / 3600)

    r = engine(LinearModel(moon0=3.0, rate=10.0)).tithi(DAY, UTC, NAMES)
    assert hours(r.unit.end_time) == pytest.approx(6.0 + 21.6, abs=1 / 3600)
    assert str(r.unit.end_time) == "27:36:00"


def test_end_time_uses_location_offset():
    ist = GeoLocation(0.0, 0.0, 5.5)
    r = engine(LinearModel(moon0=10.0, rate=20.0)).tithi(DAY, ist, NAMES)
    # anchors follow the fake 06:00 local sunrise; model time is absolute
    assert r.unit.end_time is not None


def test_wraparound_from_amavasya_to_pratipada():
    r = engine(LinearModel(moon0=355.0, rate=12.0)).tithi(DAY, UTC, NAMES)
    assert r.unit.number == 30
    assert r.unit.name == "Amāvāsyā"
    assert hours(r.unit.end_time) == pytest.approx(6.0 + 24.0 * 5.0 / 12.0, abs=1 / 3600)


def test_more_than_one_skipped_unit_is_an_error():
    with pytest.raises(BoundarySearchError):
        engine(LinearModel(moon0=10.0, rate=40.0)).tithi(DAY, UTC, NAMES)


def test_nakshatra_skip_in_sidereal_frame():
    # ayanamsa 20: tropical moon 30 -> sidereal 10, nakshatra 1
    model = LinearModel(moon0=30.0, rate=22.0, ayanamsa_deg=20.0)
    r = engine(model, zodiac="sidereal").nakshatra(DAY, UTC, NAMES)
    assert r.unit.number == 1
    assert r.unit.name == "Aśvinī"
    # 10 -> 32 deg: nakshatra 2 (13.33..26.67) is skipped, 3 prevails next sunrise
    assert r.additional is not None and r.additional.number == 2
    assert hours(r.unit.end_time) == pytest.approx(6.0 + 24.0 * (40.0 / 3.0 - 10.0) / 22.0, abs=1 / 3600)


def test_tropical_engine_ignores_ayanamsa():
    model = LinearModel(moon0=30.0, rate=1.0, ayanamsa_deg=20.0)
    assert engine(model, zodiac="tropical").nakshatra(DAY, UTC, NAMES).unit.number == 3
    assert engine(model, zodiac="sidereal").nakshatra(DAY, UTC, NAMES).unit.number == 1
    # tithi is frame-independent
    assert engine(model, zodiac="tropical").tithi(DAY, UTC, NAMES).unit.number == \
        engine(model, zodiac="sidereal").tithi(DAY, UTC, NAMES).unit.number == 3


def test_sidereal_elements():
    assert SIDEREAL_ELEMENTS == {"nakshatra", "yoga", "masa"}


def test_masa_frame_follows_sidereal_elements(monkeypatch):
    # Sun at 15 tropical is 355 sidereal: Mesha vs Mina at both new moons
    model = LinearModel(moon0=110.0, rate=MEAN_PHASE_RATE, sun_deg=15.0, ayanamsa_deg=20.0)
    eng = engine(model, zodiac="sidereal")
    assert eng.masa(DAY, UTC, NAMES).number == 1

    monkeypatch.setattr(panchanga_module, "SIDEREAL_ELEMENTS", frozenset({"nakshatra", "yoga"}))
    assert eng.masa(DAY, UTC, NAMES).number == 2
    # nakshatra still sidereal: 110 - 20 = 90
    assert eng.nakshatra(DAY, UTC, NAMES).unit.number == 7


def test_nakshatra_frame_follows_sidereal_elements(monkeypatch):
    model = LinearModel(moon0=30.0, rate=1.0, ayanamsa_deg=20.0)
    monkeypatch.setattr(panchanga_module, "SIDEREAL_ELEMENTS", frozenset({"masa"}))
    assert engine(model, zodiac="sidereal").nakshatra(DAY, UTC, NAMES).unit.number == 3


def test_yoga_uses_sun_plus_moon():
    model = LinearModel(moon0=5.0, rate=1.0, sun_deg=350.0)
    r = engine(model).yoga(DAY, UTC, NAMES)
    # 350 + 5 = 355 -> yoga 27
    assert r.unit.number == 27
    assert r.unit.name == "Vaidhṛti"


def test_karana_and_vara():
    eng = engine(LinearModel(moon0=9.0, rate=1.0))
    k = eng.karana(DAY, UTC, NAMES)
    assert (k.number, k.name) == (2, "Bava")
    v = eng.vara(DAY, NAMES)
    assert (v.number, v.name) == (1, "Somavāra")


def test_unknown_zodiac_rejected():
    with pytest.raises(ValueError):
        PanchangaEngine(EngineId("custom", "x", "0"), LinearModel(0.0, 1.0), SixOClock(), zodiac="galactic")


def test_composite_isolates_failing_element(caplog):
    eng = engine(LinearModel(moon0=10.0, rate=20.0))
    with patch.object(PanchangaEngine, "_masa", side_effect=BoundarySearchError("no bracket")):
        with caplog.at_level("ERROR", logger="panchanga.engines.panchanga"):
            res = eng.panchanga(DAY, UTC, NAMES)

    assert res.masa is None and res.samvatsara is None and res.ritu is None
    assert {"masa", "samvatsara", "ritu"} <= set(res.unavailable)
    assert "masa unavailable" in caplog.text
    # the rest is still there
    assert res.tithi.number == 1
    assert res.additional_tithi.number == 2
    assert res.vara.number == 1
    assert res.karana.number == 2
    assert res.sunrise == ClockTime(6, 0, 0)
    assert res.day_duration_hours == pytest.approx(12.0)
    assert "moonrise" in res.unavailable and res.moonrise is None


def test_per_element_entry_point_propagates():
    eng = engine(LinearModel(moon0=10.0, rate=20.0))
    with patch.object(PanchangaEngine, "_masa", side_effect=BoundarySearchError("no bracket")):
        with pytest.raises(BoundarySearchError):
            eng.masa(DAY, UTC, NAMES)


def test_polar_fallback_anchor_is_six_local(caplog):
    class NoSun(SixOClock):
        def sunrise(self, jdn, loc):
            return None

        def sunset(self, jdn, loc):
            return None

    eng = PanchangaEngine(EngineId("custom", "polar", "test"), LinearModel(10.0, 20.0), NoSun(), zodiac="tropical")
    with caplog.at_level("WARNING", logger="panchanga.engines.panchanga"):
        ctx = eng.day_context(DAY, UTC)
    assert ctx.sunrise is None
    assert ctx.anchor == pytest.approx(anchor_of(DAY))
    assert ctx.next_anchor == pytest.approx(anchor_of(DAY) + 1.0)
    assert "No sunrise" in caplog.text

    r = eng.tithi(DAY, UTC, NAMES)
    assert r.unit.number == 1
    assert hours(r.unit.end_time) == pytest.approx(8.4, abs=1 / 3600)
