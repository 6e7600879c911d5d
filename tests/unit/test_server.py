"""HTTPサーバーとCLIのテスト"""

import json
from pathlib import Path

import httpx
import pytest
from fastapi.testclient import TestClient

from src.entrypoint import build_parser, main
from src.features.batch.orchestrator import LocationOrchestrator
from src.infrastructure.config.settings import Settings
from src.server import create_app
from src.shared.http.client import AsyncHTTPClient

SEARCH_HIT = [
    {
        "lat": "3.5667",
        "lon": "101.65",
        "display_name": "Kuala Kubu Bharu, Hulu Selangor",
        "address": {"county": "Hulu Selangor", "town": "Kuala Kubu Bharu"},
    }
]


def nominatim_handler(request: httpx.Request) -> httpx.Response:
    if request.url.path == "/search":
        return httpx.Response(200, json=SEARCH_HIT)
    if request.url.path == "/reverse":
        return httpx.Response(200, json={"error": "Unable to geocode"})
    return httpx.Response(404)


@pytest.fixture
def client(settings: Settings):
    http_client = AsyncHTTPClient(transport=httpx.MockTransport(nominatim_handler))
    orchestrator = LocationOrchestrator(settings, http_client=http_client)
    with TestClient(create_app(settings, orchestrator=orchestrator)) as test_client:
        yield test_client


def test_health(client: TestClient) -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


def test_root(client: TestClient) -> None:
    assert client.get("/").json()["service"] == "mphs-location-resolver"


def test_geocode(client: TestClient) -> None:
    body = client.get("/geocode", params={"q": "Kuala Kubu Bharu"}).json()

    assert body == {
        "query": "Kuala Kubu Bharu",
        "result": {
            "lat": 3.5667,
            "lon": 101.65,
            "address": "Kuala Kubu Bharu, Hulu Selangor",
            "district": "Hulu Selangor",
            "sub_district": "Kuala Kubu Bharu",
        },
    }


def test_geocode_short_query(client: TestClient) -> None:
    assert client.get("/geocode", params={"q": "ab"}).json() == {"query": "ab", "result": None}


def test_reverse_falls_back_to_coordinate(client: TestClient) -> None:
    body = client.get("/reverse", params={"lat": 3.55, "lon": 101.64}).json()

    assert body == {"lat": 3.55, "lon": 101.64}


def test_reverse_rejects_out_of_range(client: TestClient) -> None:
    assert client.get("/reverse", params={"lat": 95, "lon": 101.64}).status_code == 422


@pytest.mark.parametrize(
    "lat,lon,verdict,inside",
    [(0.5, 0.5, "inside", True), (2.0, 2.0, "outside", False), (10.0, 10.0, "outside", False)],
)
def test_boundary_check(client: TestClient, lat: float, lon: float, verdict: str, inside: bool) -> None:
    body = client.get("/boundary/check", params={"lat": lat, "lon": lon}).json()

    assert body["verdict"] == verdict
    assert body["inside"] is inside
    if inside:
        assert "message" not in body
    else:
        assert body["message"] == "Lokasi di luar kawasan Hulu Selangor."


def test_boundary_check_unavailable(tmp_path: Path) -> None:
    settings = Settings(_env_file=None, boundary_geojson_url=str(tmp_path / "missing.geojson"))
    http_client = AsyncHTTPClient(transport=httpx.MockTransport(nominatim_handler))
    app = create_app(settings, orchestrator=LocationOrchestrator(settings, http_client=http_client))

    with TestClient(app) as test_client:
        body = test_client.get("/boundary/check", params={"lat": 0.5, "lon": 0.5}).json()

    assert body["verdict"] == "unavailable"
    assert body["inside"] is False
    assert "message" not in body


def test_parser_subcommands() -> None:
    parser = build_parser()

    args = parser.parse_args(["check", "3.5", "101.6"])
    assert (args.command, args.lat, args.lon) == ("check", 3.5, 101.6)

    args = parser.parse_args(["batch", "in.csv", "--kml", "out.kml", "--no-progress"])
    assert (args.csv, args.kml, args.no_progress) == ("in.csv", "out.kml", True)

    with pytest.raises(SystemExit):
        parser.parse_args([])


def test_main_check(boundary_file: str, tmp_path: Path, capsys) -> None:
    env_file = tmp_path / "test.env"
    env_file.write_text(f"BOUNDARY_GEOJSON_URL={boundary_file}\n", encoding="utf-8")

    exit_code = main(["--env-file", str(env_file), "--log-level", "ERROR", "check", "0.5", "0.5"])

    assert exit_code == 0
    assert json.loads(capsys.readouterr().out) == {"lat": 0.5, "lon": 0.5, "verdict": "inside"}


def test_main_rejects_invalid_coordinate(tmp_path: Path) -> None:
    env_file = tmp_path / "test.env"
    env_file.write_text("", encoding="utf-8")

    assert main(["--env-file", str(env_file), "--log-level", "ERROR", "check", "91", "0"]) == 2


def test_main_reports_invalid_configuration(tmp_path: Path) -> None:
    env_file = tmp_path / "bad.env"
    env_file.write_text("HTTP_TIMEOUT=-1\n", encoding="utf-8")

    assert main(["--env-file", str(env_file), "--log-level", "ERROR", "check", "0.5", "0.5"]) == 1


@pytest.mark.parametrize(
    "environment,expected",
    [
        ("production", {"message": "Internal server error"}),
        ("development", {"message": "Internal server error", "detail": "boundary exploded"}),
    ],
)
def test_unhandled_error_detail_hidden_in_production(environment: str, expected: dict) -> None:
    settings = Settings(_env_file=None, environment=environment)
    http_client = AsyncHTTPClient(transport=httpx.MockTransport(nominatim_handler))
    app = create_app(settings, orchestrator=LocationOrchestrator(settings, http_client=http_client))

    @app.get("/broken")
    async def broken() -> None:
        raise RuntimeError("boundary exploded")

    with TestClient(app, raise_server_exceptions=False) as test_client:
        response = test_client.get("/broken")

    assert response.status_code == 500
    assert response.json() == expected
