import pytest

from cloudant_client import ASC, DESC, GREATER_THAN, LESS_THAN, Query, to_query_string
from cloudant_client.query import as_request_body


@pytest.mark.parametrize(
    "params, expected",
    [
        (None, ""),
        ({}, ""),
        ({"rev": "1-abc"}, "rev=1-abc"),
        ({"q": "title:the thing"}, "q=title%3Athe+thing"),
        ({"q": "a&b=c/d"}, "q=a%26b%3Dc%2Fd"),
        ({"limit": 10}, "limit=10"),
        ({"skip": -3}, "skip=-3"),
        ({"include_docs": True}, "include_docs=true"),
        ({"descending": False}, "descending=false"),
        ({"stale": ""}, ""),
        ({"stale": None}, ""),
        ({"key": ["a", 1]}, "key=%5B%22a%22%2C1%5D"),
        ({"keys": {"a": 1}}, "keys=%7B%22a%22%3A1%7D"),
        ({"ratio": 0.5}, "ratio=0.5"),
        ({"a b&c": 1}, "a+b%26c=1"),
    ],
)
def test_to_query_string_values(params, expected):
    assert to_query_string(params) == expected


def test_to_query_string_joins_in_order_and_drops_empty():
    params = {"q": "name:x", "empty": "", "limit": 5, "include_docs": True, "missing": None}
    qs = to_query_string(params)
    assert qs == "q=name%3Ax&limit=5&include_docs=true"
    assert not qs.startswith("&") and not qs.endswith("&")


def test_to_query_string_all_skipped():
    assert to_query_string({"a": "", "b": None}) == ""


def test_query_to_json_omits_unset_members():
    assert Query(selector={"year": {GREATER_THAN: 2000}}).to_json() == {
        "selector": {"year": {"$gt": 2000}}
    }


def test_query_to_json_full():
    q = Query(
        selector={"year": {LESS_THAN: 2000}},
        fields=["_id", "title"],
        sort=[{"year": ASC}, {"title": DESC}],
        limit=10,
        skip=5,
    )
    assert q.to_json() == {
        "selector": {"year": {"$lt": 2000}},
        "fields": ["_id", "title"],
        "sort": [{"year": "asc"}, {"title": "desc"}],
        "limit": 10,
        "skip": 5,
    }


def test_query_from_dict():
    q = Query.from_dict({"selector": {"type": "movie"}, "limit": 2})
    assert q == Query(selector={"type": "movie"}, limit=2)


@pytest.mark.parametrize(
    "d, match",
    [
        ({"fields": ["a"]}, "selector"),
        ({"selector": {}, "fields": "title"}, "fields"),
        ({"selector": {}, "sort": "year"}, "sort"),
    ],
)
def test_query_from_dict_invalid(d, match):
    with pytest.raises(ValueError, match=match):
        Query.from_dict(d)


def test_as_request_body_accepts_query_or_mapping():
    body = {"selector": {"type": "movie"}, "fields": ["_id"]}
    assert as_request_body(body) == body
    assert as_request_body(Query.from_dict(body)) == body


def test_query_sort_by_field_name():
    q = Query(selector={}, sort=["year", {"title": DESC}])
    assert q.to_json()["sort"] == ["year", {"title": "desc"}]


def test_query_fields_must_be_a_list():
    with pytest.raises(ValueError, match="fields"):
        Query(selector={}, fields="title")


def test_query_from_dict_keeps_other_members():
    d = {
        "selector": {"type": "movie"},
        "bookmark": "g1AAAA",
        "use_index": ["_design/idx", "by_year"],
        "execution_stats": True,
        "r": 1,
    }
    q = Query.from_dict(d)
    assert q.bookmark == "g1AAAA"
    assert q.use_index == ["_design/idx", "by_year"]
    assert q.extra == {"execution_stats": True, "r": 1}
    assert q.to_json() == d
