"""Nominatimジオコーダーのテスト"""

import httpx
import pytest

from src.features.geocoding.domain.models import Coordinate
from src.features.geocoding.providers.nominatim_geocoder import NominatimGeocoder

BASE_URL = "https://nominatim.test"

SEARCH_HIT = [
    {
        "lat": "3.5667",
        "lon": "101.6500",
        "display_name": "Kuala Kubu Bharu, Hulu Selangor, Selangor, Malaysia",
        "address": {
            "town": "Kuala Kubu Bharu",
            "county": "Hulu Selangor",
            "state": "Selangor",
            "place_rank": 16,
        },
    }
]


class RecordingHandler:
    """受け取ったリクエストを記録して固定レスポンスを返す"""

    def __init__(self, response: httpx.Response) -> None:
        self.response = response
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.response


def make_geocoder(make_http_client, handler) -> NominatimGeocoder:
    return NominatimGeocoder(make_http_client(handler), base_url=BASE_URL)


@pytest.mark.asyncio
@pytest.mark.parametrize("query", ["", "ab", "  ab  ", "   "])
async def test_short_query_makes_no_request(make_http_client, query: str) -> None:
    """前後空白を除いて3文字未満ならリクエストしない"""
    handler = RecordingHandler(httpx.Response(200, json=SEARCH_HIT))
    geocoder = make_geocoder(make_http_client, handler)

    assert await geocoder.forward_geocode(query) is None
    assert handler.requests == []


@pytest.mark.asyncio
async def test_forward_request_parameters(make_http_client) -> None:
    handler = RecordingHandler(httpx.Response(200, json=SEARCH_HIT))
    geocoder = make_geocoder(make_http_client, handler)

    result = await geocoder.forward_geocode("Kuala Kubu Bharu")

    assert len(handler.requests) == 1
    request = handler.requests[0]
    assert request.url.path == "/search"
    assert dict(request.url.params) == {
        "q": "Kuala Kubu Bharu",
        "format": "json",
        "addressdetails": "1",
        "limit": "1",
    }
    assert request.headers["Accept"] == "application/json"
    assert request.headers["User-Agent"] == "mphs-oku-sticker/1.0 (geocode)"

    assert result is not None
    assert result.coordinate == Coordinate(lat=3.5667, lon=101.65)
    assert result.display_name.startswith("Kuala Kubu Bharu")
    # 文字列以外の値は落とす
    assert result.address == {
        "town": "Kuala Kubu Bharu",
        "county": "Hulu Selangor",
        "state": "Selangor",
    }


@pytest.mark.asyncio
async def test_forward_empty_array_is_none(make_http_client) -> None:
    handler = RecordingHandler(httpx.Response(200, json=[]))
    geocoder = make_geocoder(make_http_client, handler)

    assert await geocoder.forward_geocode("nowhere at all") is None
    assert len(handler.requests) == 1


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(500),
        httpx.Response(429, json={"error": "rate limited"}),
        httpx.Response(200, text="<html>not json</html>"),
        httpx.Response(200, json={"unexpected": "object"}),
        httpx.Response(200, json=[{"lat": "abc", "lon": "101"}]),
        httpx.Response(200, json=[{"display_name": "no coordinates"}]),
    ],
)
async def test_forward_failures_are_none(make_http_client, response: httpx.Response) -> None:
    """通信失敗・不正な応答は None"""
    geocoder = make_geocoder(make_http_client, RecordingHandler(response))

    assert await geocoder.forward_geocode("Rasa, Hulu Selangor") is None


@pytest.mark.asyncio
async def test_forward_transport_error_is_none(make_http_client) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    geocoder = make_geocoder(make_http_client, handler)

    assert await geocoder.forward_geocode("Batang Kali") is None


@pytest.mark.asyncio
async def test_reverse_request_parameters(make_http_client) -> None:
    handler = RecordingHandler(
        httpx.Response(
            200,
            json={
                "display_name": "Jalan Dato Muda Jaafar, Kuala Kubu Bharu",
                "address": {"road": "Jalan Dato Muda Jaafar", "county": "Hulu Selangor"},
            },
        )
    )
    geocoder = make_geocoder(make_http_client, handler)

    result = await geocoder.reverse_geocode(Coordinate(lat=3.5547, lon=101.6463))

    request = handler.requests[0]
    assert request.url.path == "/reverse"
    assert dict(request.url.params) == {
        "lat": "3.5547",
        "lon": "101.6463",
        "format": "json",
        "addressdetails": "1",
    }
    assert request.headers["User-Agent"] == "mphs-oku-sticker/1.0 (reverse)"
    assert request.headers["Accept"] == "application/json"

    assert result is not None
    assert result.display_name == "Jalan Dato Muda Jaafar, Kuala Kubu Bharu"
    assert result.address["county"] == "Hulu Selangor"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(200, json={"error": "Unable to geocode"}),
        httpx.Response(503),
        httpx.Response(200, json=["not", "an", "object"]),
    ],
)
async def test_reverse_failures_are_none(make_http_client, response: httpx.Response) -> None:
    geocoder = make_geocoder(make_http_client, RecordingHandler(response))

    assert await geocoder.reverse_geocode(Coordinate(lat=2.5, lon=100.0)) is None


@pytest.mark.asyncio
async def test_reverse_without_address_object(make_http_client) -> None:
    handler = RecordingHandler(httpx.Response(200, json={"display_name": "Somewhere"}))
    geocoder = make_geocoder(make_http_client, handler)

    result = await geocoder.reverse_geocode(Coordinate(lat=3.5, lon=101.5))

    assert result is not None
    assert result.address == {}
