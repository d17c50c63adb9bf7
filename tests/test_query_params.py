from datetime import datetime, timedelta, timezone

import pytest
from starlette.datastructures import QueryParams as RequestQuery

from flapmyport.services.query_params import Action, parse_filter, parse_query_params

NOW = datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)


def test_defaults_to_last_hour_and_index():
    q = parse_query_params({}, now=NOW)

    assert q.action is Action.INDEX
    assert q.start == NOW - timedelta(hours=1)
    assert q.end == NOW
    assert q.host == ""
    assert q.if_index == 0
    assert q.filter.include == [] and q.filter.exclude == []


@pytest.mark.parametrize("keys, expected", [
    (["check"], Action.CHECK),
    (["review"], Action.REVIEW),
    (["flaphistory"], Action.FLAP_HISTORY),
    (["flapchart"], Action.FLAP_CHART),
    (["flapchart", "check", "review"], Action.FLAP_CHART),
    (["review", "check"], Action.REVIEW),
])
def test_action_selection(keys, expected):
    q = parse_query_params({k: "" for k in keys}, now=NOW)

    assert q.action is expected


def test_explicit_window_is_parsed_as_utc():
    q = parse_query_params(
        {"start": "2024-04-30 08:00:00", "end": "2024-04-30 09:30:00"},
        now=NOW,
    )

    assert q.start == datetime(2024, 4, 30, 8, 0, tzinfo=timezone.utc)
    assert q.end == datetime(2024, 4, 30, 9, 30, tzinfo=timezone.utc)


def test_empty_start_keeps_default():
    q = parse_query_params({"start": "", "end": ""}, now=NOW)

    assert q.start == NOW - timedelta(hours=1)
    assert q.end == NOW


@pytest.mark.parametrize("key", ["start", "end"])
def test_bad_time_raises(key):
    with pytest.raises(ValueError, match=f"invalid {key} time"):
        parse_query_params({key: "yesterday"}, now=NOW)


def test_interval_overrides_start_and_end():
    q = parse_query_params(
        {"start": "2024-04-30 08:00:00", "end": "2024-04-30 09:30:00", "interval": "600"},
        now=NOW,
    )

    assert q.end == NOW
    assert q.start == NOW - timedelta(seconds=600)


def test_non_numeric_interval_is_ignored():
    q = parse_query_params({"interval": "soon"}, now=NOW)

    assert q.start == NOW - timedelta(hours=1)


def test_port_identity():
    q = parse_query_params({"flapchart": "", "host": "10.0.0.1", "ifindex": "12"}, now=NOW)

    assert q.host == "10.0.0.1"
    assert q.if_index == 12


def test_non_numeric_ifindex_is_zero():
    assert parse_query_params({"ifindex": "ge-0/0/1"}, now=NOW).if_index == 0


def test_filter_keywords():
    f = parse_filter("core  !lab ! uplink !")

    assert f.include == ["core", "uplink"]
    assert f.exclude == ["lab"]


def test_filter_is_read_from_query():
    q = parse_query_params({"review": "", "filter": "!test"}, now=NOW)

    assert q.filter.exclude == ["test"]


def test_repeated_keys_use_first_value():
    query = RequestQuery("flapchart&host=10.0.0.1&host=10.0.0.2&ifindex=3&ifindex=4")

    q = parse_query_params(query, now=NOW)

    assert q.host == "10.0.0.1"
    assert q.if_index == 3
