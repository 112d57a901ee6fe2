from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from tzlab.errors import NonexistentLocalTime, ZoneNotFound
from tzlab.zones import (
    convert_between,
    convert_to_local,
    convert_to_utc,
    describe_all_zones,
    describe_zone,
    display_time_zone,
    find_transitions,
    format_offset,
    load_zone,
    localize,
)
from tzlab.zones import conversions as conversions_module
from tzlab.zones import descriptors as descriptors_module

DENVER = "America/Denver"
CHICAGO = "America/Chicago"


@pytest.fixture
def fresh_descriptors():
    describe_zone.cache_clear()
    yield
    describe_zone.cache_clear()


def test_describe_zone_uses_windows_names():
    descriptor = describe_zone(DENVER, 2014)
    assert descriptor.standard_name == "Mountain Standard Time"
    assert descriptor.daylight_name == "Mountain Daylight Time"
    assert descriptor.standard_abbreviation == "MST"
    assert descriptor.daylight_abbreviation == "MDT"
    assert descriptor.base_utc_offset == timedelta(hours=-7)
    assert descriptor.base_offset_minutes == -420
    assert descriptor.supports_dst
    assert descriptor.display_name == "(UTC-07:00) America/Denver"
    assert descriptor.display_base_utc_offset == "-07:00:00"
    assert descriptor.sort_key == "N300America/Denver"
    assert descriptor.display_abbreviation == "(U-07:00) America/Denver"


def test_describe_zone_falls_back_to_database_abbreviations(monkeypatch, fresh_descriptors):
    monkeypatch.setattr(descriptors_module, "tz_win", {})
    descriptor = describe_zone(DENVER, 2014)
    assert descriptor.standard_name == "MST"
    assert descriptor.daylight_name == "MDT"


def test_zone_without_daylight_saving():
    descriptor = describe_zone("Asia/Kolkata", 2014)
    assert not descriptor.supports_dst
    assert descriptor.base_offset_minutes == 330
    assert descriptor.daylight_name == descriptor.standard_name
    assert descriptor.sort_key == "P330Asia/Kolkata"


@pytest.mark.parametrize("zone_id", ["", None, "Mars/Olympus_Mons", "../etc/passwd"])
def test_unknown_zone_ids_raise_zone_not_found(zone_id):
    with pytest.raises(ZoneNotFound):
        load_zone(zone_id)


def test_zone_not_found_is_a_lookup_error():
    with pytest.raises(LookupError, match="Mars/Olympus_Mons"):
        describe_zone("Mars/Olympus_Mons")


def test_describe_all_zones_is_sorted_west_to_east():
    descriptors = describe_all_zones(2014)
    keys = [descriptor.sort_key for descriptor in descriptors]
    assert keys == sorted(keys)
    assert "P000UTC" in keys
    assert keys.index("N300America/Denver") < keys.index("P000UTC") < keys.index("P330Asia/Kolkata")


def test_display_time_zone_follows_daylight_saving():
    assert display_time_zone(datetime(2014, 8, 27, 10, 15, 42), DENVER) == "Mountain Daylight Time"
    assert display_time_zone(datetime(2014, 1, 15, 12), DENVER) == "Mountain Standard Time"
    aware = datetime(2014, 8, 27, 16, 15, 42, tzinfo=timezone.utc)
    assert display_time_zone(aware, DENVER) == "Mountain Daylight Time"


@pytest.mark.parametrize(
    "moment, zone_id",
    [
        (None, DENVER),
        (datetime.min, DENVER),
        (datetime.max, DENVER),
        (datetime(2014, 1, 1), ""),
        (datetime(2014, 1, 1), None),
    ],
)
def test_display_time_zone_is_empty_without_a_moment_or_zone(moment, zone_id):
    assert display_time_zone(moment, zone_id) == ""


@pytest.mark.parametrize(
    "offset, kwargs, expected",
    [
        (timedelta(hours=-7), {}, "-07:00"),
        (timedelta(hours=5, minutes=30), {}, "+05:30"),
        (timedelta(0), {}, "+00:00"),
        (timedelta(hours=5, minutes=45), {"seconds": True, "plus_sign": False}, "05:45:00"),
        (timedelta(hours=-3, minutes=-30), {"seconds": True}, "-03:30:00"),
    ],
)
def test_format_offset(offset, kwargs, expected):
    assert format_offset(offset, **kwargs) == expected


def test_convert_between_zones():
    assert convert_between(datetime(2014, 8, 27, 10, 15, 42), DENVER, CHICAGO) == datetime(2014, 8, 27, 11, 15, 42)
    assert convert_to_utc(datetime(2014, 1, 15, 12), DENVER) == datetime(2014, 1, 15, 19)
    assert convert_to_utc(datetime(2014, 7, 15, 12), DENVER) == datetime(2014, 7, 15, 18)


def test_converted_times_are_naive():
    converted = convert_between(datetime(2014, 12, 31, 23, 59, 59), DENVER, "Asia/Tokyo")
    assert converted.tzinfo is None
    assert converted == datetime(2015, 1, 1, 15, 59, 59)


def test_time_in_spring_gap_is_rejected():
    with pytest.raises(NonexistentLocalTime) as excinfo:
        convert_to_utc(datetime(2014, 3, 9, 2, 30), DENVER)
    assert excinfo.value.zone_id == DENVER
    assert isinstance(excinfo.value, ValueError)


def test_ambiguous_time_resolves_to_first_occurrence():
    assert convert_to_utc(datetime(2014, 11, 2, 1, 30), DENVER) == datetime(2014, 11, 2, 7, 30)


def test_localize_converts_aware_times():
    aware = datetime(2014, 1, 15, 19, tzinfo=timezone.utc)
    assert localize(aware, DENVER).replace(tzinfo=None) == datetime(2014, 1, 15, 12)


def test_find_transitions_for_a_dst_zone():
    transitions = find_transitions(DENVER, 2014)
    assert [t.utc_instant for t in transitions] == [datetime(2014, 3, 9, 9), datetime(2014, 11, 2, 8)]

    spring, fall = transitions
    assert spring.number == 1
    assert spring.is_dst
    assert spring.abbreviation == "MDT"
    assert spring.offset_before == timedelta(hours=-7)
    assert spring.offset_after == timedelta(hours=-6)
    assert spring.display_local_before == "2014/03/09 02:00:00"
    assert spring.display_local_after == "2014/03/09 03:00:00"
    assert spring.display_delta == "+01:00"

    assert fall.number == 2
    assert not fall.is_dst
    assert fall.abbreviation == "MST"
    assert fall.display_offset == "-07:00"
    assert fall.display_delta == "-01:00"


def test_find_transitions_spans_years():
    transitions = find_transitions(DENVER, 2014, 2015)
    assert len(transitions) == 4
    assert [t.number for t in transitions] == [1, 2, 3, 4]
    assert transitions[2].utc_instant == datetime(2015, 3, 8, 9)


def test_find_transitions_for_fixed_zone_is_empty():
    assert find_transitions("UTC", 2014) == []


def test_find_transitions_rejects_reversed_years():
    with pytest.raises(ValueError):
        find_transitions(DENVER, 2015, 2014)


def test_convert_to_local_uses_the_local_zone(monkeypatch):
    monkeypatch.setattr(conversions_module, "local_zone_id", lambda: "Asia/Tokyo")
    assert convert_to_local(datetime(2014, 1, 15, 12), DENVER) == datetime(2014, 1, 16, 4)


def test_negative_dst_zone_keeps_its_winter_base_offset():
    descriptor = describe_zone("Europe/Dublin", 2024)
    assert descriptor.base_utc_offset == timedelta(0)
    assert descriptor.supports_dst
    assert descriptor.display_name == "(UTC+00:00) Europe/Dublin"
    assert descriptor.sort_key == "P000Europe/Dublin"
    assert descriptor.standard_name == "GMT Standard Time"
    assert descriptor.daylight_name == "GMT Daylight Time"


def test_negative_dst_zone_names_follow_the_season():
    assert display_time_zone(datetime(2024, 1, 15, 12), "Europe/Dublin") == "GMT Standard Time"
    assert display_time_zone(datetime(2024, 7, 15, 12), "Europe/Dublin") == "GMT Daylight Time"


def test_negative_dst_zone_falls_back_to_database_abbreviations(monkeypatch, fresh_descriptors):
    monkeypatch.setattr(descriptors_module, "tz_win", {})
    descriptor = describe_zone("Europe/Dublin", 2024)
    assert descriptor.standard_name == "GMT"
    assert descriptor.daylight_name == "IST"


def test_negative_dst_zone_transitions():
    spring, fall = find_transitions("Europe/Dublin", 2024)
    assert spring.utc_instant == datetime(2024, 3, 31, 1)
    assert spring.is_dst
    assert spring.display_delta == "+01:00"
    assert fall.utc_instant == datetime(2024, 10, 27, 1)
    assert not fall.is_dst
    assert fall.display_offset == "+00:00"
