import asyncio
import json

import httpx
import pytest

from services.errors import FetchFailure
from services.goldfeed import GRAMS_PER_OUNCE, fetch_gold_series, parse_klines


def _kline(price, ts):
    return {"close_price": str(price), "timestamp": str(ts), "open_price": "0"}


def _fetch(handler, **kw):
    async def go():
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            return await fetch_gold_series(client=client, **kw)
    return asyncio.run(go())


def test_fetch_posts_expected_payload_and_converts_to_grams():
    seen = {}

    def handler(request: httpx.Request):
        seen["body"] = json.loads(request.content)
        seen["headers"] = request.headers
        return httpx.Response(200, json={"ret": 200, "data": {"kline_list": [
            _kline(GRAMS_PER_OUNCE * 550, 1_700_000_000),
            _kline(GRAMS_PER_OUNCE * 551, 1_700_000_060),
        ]}})

    out = _fetch(handler, num_points=50, kline_type=1)
    assert [round(s.price, 6) for s in out] == [550.0, 551.0]
    assert [s.timestamp for s in out] == [1_700_000_000, 1_700_000_060]
    data = seen["body"]["data"]
    assert data["code"] == "XAUCNH"
    assert data["query_kline_num"] == "50"
    assert data["kline_type"] == "1"
    assert data["isStock"] is False
    assert seen["headers"]["referer"] == "https://alltick.co/"


def test_newest_first_payload_is_reordered():
    js = {"ret": 200, "data": {"kline_list": [_kline(3, 300), _kline(2, 200), _kline(1, 100)]}}
    assert [s.timestamp for s in parse_klines(js)] == [100, 200, 300]


def test_unparseable_timestamp_keeps_upstream_order():
    js = {"ret": 200, "data": {"kline_list": [_kline(3, 300), {"close_price": "1", "timestamp": "soon"}]}}
    out = parse_klines(js)
    assert [s.timestamp for s in out] == [300, None]


@pytest.mark.parametrize("js", [
    {"ret": 500, "data": {"kline_list": [_kline(1, 1)]}},
    {"ret": 200, "data": {"kline_list": []}},
    {"ret": 200, "data": None},
    {"ret": 200},
    [],
    {"ret": 200, "data": {"kline_list": [{"timestamp": "1"}]}},
    {"ret": 200, "data": {"kline_list": [{"close_price": "n/a", "timestamp": "1"}]}},
    {"ret": 200, "data": ["x"]},
    {"ret": 200, "data": "kline"},
    {"ret": 200, "data": {"kline_list": {"close_price": "1"}}},
    {"ret": 200, "data": {"kline_list": "abc"}},
    {"ret": 200, "data": {"kline_list": ["x"]}},
    {"ret": 200, "data": {"kline_list": [{"close_price": "inf", "timestamp": "1"}]}},
    {"ret": 200, "data": {"kline_list": [{"close_price": "NaN", "timestamp": "1"}]}},
    {"ret": 200, "data": {"kline_list": [_kline(1, 1), {"close_price": "-Infinity", "timestamp": "2"}]}},
])
def test_bad_payloads_fail(js):
    with pytest.raises(FetchFailure):
        parse_klines(js)


def test_network_error_is_fetch_failure():
    def handler(request):
        raise httpx.ConnectError("boom", request=request)

    with pytest.raises(FetchFailure) as exc:
        _fetch(handler)
    assert "boom" in exc.value.reason


def test_http_error_status_is_fetch_failure():
    with pytest.raises(FetchFailure):
        _fetch(lambda request: httpx.Response(503, text="unavailable"))


def test_non_json_body_is_fetch_failure():
    with pytest.raises(FetchFailure):
        _fetch(lambda request: httpx.Response(200, text="<html>"))


def test_non_finite_timestamp_is_treated_as_missing():
    js = {"ret": 200, "data": {"kline_list": [_kline(2, 200), {"close_price": "1", "timestamp": float("inf")}]}}
    assert [s.timestamp for s in parse_klines(js)] == [200, None]


def test_malformed_payload_over_http_is_fetch_failure():
    body = {"ret": 200, "data": ["x"]}
    with pytest.raises(FetchFailure) as exc:
        _fetch(lambda request: httpx.Response(200, json=body))
    assert "malformed payload" in exc.value.reason
