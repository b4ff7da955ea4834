# tests/test_api.py

from datetime import date

import pytest
from unittest.mock import patch

import panchanga
from panchanga import (
    CivilDate,
    GeoLocation,
    InvalidDateError,
    InvalidLocationError,
    PreconditionError,
)
from panchanga.core.errors import BoundarySearchError, EngineUnavailableError
from panchanga.engines.astro.model import SimplifiedModel
from panchanga.engines.specs import ALL_SPECS
from panchanga.names import NameTable

BANGALORE = GeoLocation(12.9716, 77.5946, 5.5, "Bangalore")
LONGYEARBYEN = GeoLocation(78.2232, 15.6267, 1.0, "Longyearbyen")


# ------------------------------------------------------------
# Validation
# ------------------------------------------------------------

@pytest.mark.parametrize("bad", [(2024, 13, 32), (2023, 2, 29), CivilDate(2024, 0, 1), "2024-01-15", None])
def test_invalid_date_rejected(bad):
    with pytest.raises(InvalidDateError):
        panchanga.compute_panchanga(bad, BANGALORE)


@pytest.mark.parametrize(
    "loc",
    [
        GeoLocation(91.0, 181.0, 25.0),
        GeoLocation(12.0, 77.0, 15.0),
        GeoLocation(-90.5, 0.0, 0.0),
        GeoLocation(float("nan"), 0.0, 0.0),
        None,
    ],
)
def test_invalid_location_rejected(loc):
    with pytest.raises(InvalidLocationError):
        panchanga.compute_panchanga(date(2024, 1, 15), loc)


def test_precondition_errors_are_value_errors():
    assert issubclass(InvalidDateError, PreconditionError)
    assert issubclass(InvalidLocationError, ValueError)


def test_validation_happens_before_any_astronomy():
    with patch.object(SimplifiedModel, "solar_longitude") as sol, \
         patch.object(SimplifiedModel, "lunar_longitude") as lun:
        with pytest.raises(PreconditionError):
            panchanga.compute_tithi((2024, 13, 32), BANGALORE)
        with pytest.raises(PreconditionError):
            panchanga.compute_panchanga(date(2024, 1, 15), GeoLocation(91.0, 181.0, 25.0))
    sol.assert_not_called()
    lun.assert_not_called()


def test_validate_helpers_normalize():
    assert panchanga.validate_date(date(2024, 1, 15)) == CivilDate(2024, 1, 15)
    assert panchanga.validate_date((2024, 2, 29)) == CivilDate(2024, 2, 29)
    assert panchanga.validate_location(BANGALORE) is BANGALORE


def test_vara_needs_no_location():
    v = panchanga.compute_vara(date(2024, 1, 15))
    assert (v.number, v.name) == (1, "Somavāra")
    with pytest.raises(InvalidLocationError):
        panchanga.compute_vara(date(2024, 1, 15), GeoLocation(0.0, 200.0, 0.0))


# ------------------------------------------------------------
# End to end
# ------------------------------------------------------------

def test_bangalore_2024_01_15():
    res = panchanga.compute_panchanga(date(2024, 1, 15), BANGALORE)

    assert res.date == CivilDate(2024, 1, 15)
    assert res.location is BANGALORE
    assert (res.vara.number, res.vara.name) == (1, "Somavāra")

    # Sukla Caturthi ends around sunrise that day
    assert res.tithi.number in (4, 5)
    assert res.tithi.name.startswith("Śukla")
    assert res.tithi.end_time is not None

    assert 1 <= res.nakshatra.number <= 27
    assert 1 <= res.yoga.number <= 27
    assert res.karana.number in (7, 8, 9, 10)

    assert (res.masa.number, res.masa.name, res.masa.is_leap_month) == (10, "Puṣya", False)
    assert (res.samvatsara.number, res.samvatsara.name) == (37, "Śobhakṛt")
    assert (res.ritu.number, res.ritu.name) == (5, "Hemanta")

    assert res.sunrise.hours == 6 and 40 <= res.sunrise.minutes <= 55
    assert 18.0 < res.sunset.to_decimal_hours() < 18.35
    assert 11.0 < res.day_duration_hours < 11.8
    assert res.moonrise is not None and res.moonset is not None
    assert res.unavailable == ()


def test_result_is_immutable():
    res = panchanga.compute_panchanga(date(2024, 1, 15), BANGALORE)
    with pytest.raises(AttributeError):
        res.tithi = None


def test_per_element_calls_agree_with_composite():
    d = date(2024, 1, 15)
    res = panchanga.compute_panchanga(d, BANGALORE)
    assert panchanga.compute_tithi(d, BANGALORE).unit == res.tithi
    assert panchanga.compute_nakshatra(d, BANGALORE).unit == res.nakshatra
    assert panchanga.compute_yoga(d, BANGALORE).unit == res.yoga
    assert panchanga.compute_karana(d, BANGALORE) == res.karana
    assert panchanga.compute_masa(d, BANGALORE) == res.masa
    assert panchanga.sunrise_sunset(d, BANGALORE) == (res.sunrise, res.sunset)


def test_adhika_sravana_2023():
    m = panchanga.compute_masa(date(2023, 8, 1), BANGALORE)
    assert (m.number, m.name, m.is_leap_month) == (5, "Śrāvaṇa", True)
    m = panchanga.compute_masa(date(2023, 8, 20), BANGALORE)
    assert (m.number, m.is_leap_month) == (5, False)


def test_new_year_changes_samvatsara():
    # Caitra opens after the new moon of 2024-04-08
    before = panchanga.compute_panchanga(date(2024, 4, 5), BANGALORE)
    after = panchanga.compute_panchanga(date(2024, 4, 12), BANGALORE)
    assert before.masa.number == 12 and before.samvatsara.number == 37
    assert after.masa.number == 1 and after.samvatsara.name == "Krodhin"
    assert after.ritu.name == "Vasanta"


def test_custom_names():
    res = panchanga.compute_panchanga(date(2024, 1, 15), BANGALORE, names=NameTable.empty())
    assert res.tithi.name == f"Tithi-{res.tithi.number}"
    assert res.vara.name == "Vara-1"


def test_polar_night_still_yields_elements():
    res = panchanga.compute_panchanga(date(2024, 1, 15), LONGYEARBYEN)
    assert res.sunrise is None and res.sunset is None
    assert res.day_duration_hours is None
    assert {"sunrise", "sunset"} <= set(res.unavailable)
    assert res.tithi is not None
    assert res.masa.number == 10
    assert panchanga.sunrise_sunset(date(2024, 1, 15), LONGYEARBYEN) == (None, None)


def test_elements_follow_the_local_civil_day():
    # 157 W under UTC+14 and UTC-10: Jan 15 and Jan 14 are the same local day
    east = panchanga.compute_panchanga(date(2024, 1, 15), GeoLocation(1.87, -157.4, 14.0, "Kiritimati"))
    west = panchanga.compute_panchanga(date(2024, 1, 14), GeoLocation(1.87, -157.4, -10.0))
    assert east.sunrise == west.sunrise
    assert east.tithi == west.tithi
    assert east.nakshatra == west.nakshatra
    assert east.yoga == west.yoga
    assert east.karana == west.karana
    assert east.masa == west.masa
    assert (east.vara.number, west.vara.number) == (1, 0)
    if east.tithi.end_time is not None:
        assert east.tithi.end_time.hours < 31


def test_sayana_engine_shifts_sidereal_elements():
    d = date(2024, 1, 15)
    sid = panchanga.compute_panchanga(d, BANGALORE)
    trop = panchanga.compute_panchanga(d, BANGALORE, engine="sayana")
    assert trop.tithi.number == sid.tithi.number
    assert trop.karana == sid.karana
    # ~24 deg of ayanamsa is nearly two nakshatras
    assert (trop.nakshatra.number - sid.nakshatra.number) % 27 in (1, 2)


def test_boundary_failure_is_isolated(caplog):
    with patch("panchanga.engines.panchanga.find_crossing", side_effect=BoundarySearchError("stuck")):
        with caplog.at_level("ERROR"):
            res = panchanga.compute_panchanga(date(2024, 1, 15), BANGALORE)
    assert res.tithi is None and res.nakshatra is None and res.yoga is None
    assert {"tithi", "nakshatra", "yoga"} <= set(res.unavailable)
    assert res.masa is not None and res.karana is not None
    assert "tithi unavailable" in caplog.text


def test_boundary_failure_propagates_from_element_call():
    with patch("panchanga.engines.panchanga.find_crossing", side_effect=BoundarySearchError("stuck")):
        with pytest.raises(BoundarySearchError):
            panchanga.compute_tithi(date(2024, 1, 15), BANGALORE)


# ------------------------------------------------------------
# Registry
# ------------------------------------------------------------

def test_list_engines():
    names = panchanga.list_engines()
    for n in ("lahiri", "sayana", "lahiri-ephemeris"):
        assert n in names


def test_engine_info():
    info = panchanga.engine_info("lahiri")
    assert info["zodiac"] == "sidereal"
    assert info["id"]["name"] == "lahiri"
    assert panchanga.engine_info("sayana")["zodiac"] == "tropical"


def test_unknown_engine():
    with pytest.raises(KeyError):
        panchanga.compute_tithi(date(2024, 1, 15), BANGALORE, engine="no-such-engine")


def test_register_custom_engine():
    spec = ALL_SPECS["lahiri"].tweak(samvatsara_epoch_year=1927)
    eng = panchanga.make_engine(spec)
    panchanga.register_engine("lahiri-1927", eng, overwrite=True)
    with pytest.raises(KeyError):
        panchanga.register_engine("lahiri-1927", eng)

    res = panchanga.compute_panchanga(date(2024, 1, 15), BANGALORE, engine="lahiri-1927")
    # same cycle position, 60 years apart
    assert res.samvatsara.number == 37
    assert panchanga.get_engine("lahiri-1927") is eng


def test_ephemeris_engine_unavailable_without_extras():
    with patch("panchanga.ephemeris.skyfield_model.require_ephemeris",
               side_effect=EngineUnavailableError("missing")):
        with pytest.raises(EngineUnavailableError):
            panchanga.make_engine(ALL_SPECS["lahiri-ephemeris"])


def test_spec_tweak_keeps_original():
    base = ALL_SPECS["lahiri"]
    t = base.tweak(zodiac="tropical")
    assert t.zodiac == "tropical" and base.zodiac == "sidereal"
    assert t.ayanamsa == base.ayanamsa
