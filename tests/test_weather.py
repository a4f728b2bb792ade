"""
Tests for the weather endpoints in mock mode, and the search history.
"""

import pytest
from sqlalchemy.exc import OperationalError


def test_current_weather_by_city(client, auth_headers):
    response = client.post("/api/weather/current", headers=auth_headers, json={"city": "london"})
    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "London"
    assert data["cod"] == 200
    assert {"temp", "feels_like", "humidity", "pressure"} <= set(data["main"])
    assert data["weather"][0]["main"]
    assert -5.0 <= data["main"]["temp"] <= 35.0


def test_mock_weather_is_deterministic(client, auth_headers):
    first = client.post("/api/weather/current", headers=auth_headers, json={"city": "Paris"}).json()
    second = client.post("/api/weather/current", headers=auth_headers, json={"city": "paris"}).json()

    for key in ("coord", "weather", "wind", "clouds", "sys", "id", "name"):
        assert first[key] == second[key]
    assert first["main"]["temp"] == second["main"]["temp"]


def test_mock_weather_differs_between_cities(client, auth_headers):
    paris = client.post("/api/weather/current", headers=auth_headers, json={"city": "Paris"}).json()
    tokyo = client.post("/api/weather/current", headers=auth_headers, json={"city": "Tokyo"}).json()
    assert (paris["coord"], paris["id"]) != (tokyo["coord"], tokyo["id"])


def test_current_weather_by_coordinates(client, auth_headers):
    response = client.post("/api/weather/current", headers=auth_headers, json={"lat": 0, "lon": 0})
    assert response.status_code == 200
    assert response.json()["coord"] == {"lon": 0, "lat": 0}


@pytest.mark.parametrize("body", [{}, {"city": ""}, {"city": "   "}, {"lat": 51.5}, {"lon": -0.1}])
def test_current_weather_requires_city_or_coordinates(client, auth_headers, body):
    response = client.post("/api/weather/current", headers=auth_headers, json=body)
    assert response.status_code == 400
    assert response.json()["message"] == "City or latitude and longitude are required"


def test_out_of_range_coordinates(client, auth_headers):
    response = client.post("/api/weather/current", headers=auth_headers, json={"lat": 95, "lon": 0})
    assert response.status_code == 400
    assert response.json()["message"] == "Validation error"


def test_forecast(client, auth_headers):
    response = client.post("/api/weather/forecast", headers=auth_headers, json={"lat": 5.6, "lon": -0.19})
    assert response.status_code == 200
    data = response.json()
    assert data["cnt"] == 40
    assert len(data["list"]) == 40
    timestamps = [entry["dt"] for entry in data["list"]]
    assert timestamps == sorted(timestamps)
    assert all(b - a == 3 * 3600 for a, b in zip(timestamps, timestamps[1:]))


def test_air_quality(client, auth_headers):
    response = client.post("/api/weather/air-quality", headers=auth_headers, json={"lat": 5.6, "lon": -0.19})
    assert response.status_code == 200
    entry = response.json()["list"][0]
    assert 1 <= entry["main"]["aqi"] <= 5
    assert "pm2_5" in entry["components"]


@pytest.mark.parametrize("path", ["/api/weather/forecast", "/api/weather/air-quality"])
def test_coordinates_required(client, auth_headers, path):
    response = client.post(path, headers=auth_headers, json={"lat": 5.6})
    assert response.status_code == 400
    assert response.json()["message"] == "Latitude and longitude required"


def test_weather_requires_auth(client):
    response = client.post("/api/weather/current", json={"city": "London"})
    assert response.status_code == 401


class TestHistory:
    """Search history recorded from city lookups."""

    def test_empty_history(self, client, auth_headers):
        response = client.get("/api/weather/history", headers=auth_headers)
        assert response.status_code == 200
        assert response.json() == []

    def test_city_lookups_are_recorded_newest_first(self, client, auth_headers):
        for city in ("accra", "Kumasi", "tamale"):
            client.post("/api/weather/current", headers=auth_headers, json={"city": city})

        records = client.get("/api/weather/history", headers=auth_headers).json()
        assert [r["city"] for r in records] == ["Tamale", "Kumasi", "Accra"]
        first = records[0]
        assert {"id", "userId", "city", "weather", "date"} <= set(first)
        assert first["weather"]["name"] == "Tamale"

    def test_coordinate_lookup_is_not_recorded(self, client, auth_headers):
        client.post("/api/weather/current", headers=auth_headers, json={"lat": 5.6, "lon": -0.19})
        assert client.get("/api/weather/history", headers=auth_headers).json() == []

    def test_history_is_capped(self, client, auth_headers):
        cities = [f"City {i}" for i in range(12)]
        for city in cities:
            client.post("/api/weather/current", headers=auth_headers, json={"city": city})

        records = client.get("/api/weather/history", headers=auth_headers).json()
        assert len(records) == 10
        assert records[0]["city"] == "City 11"
        assert records[-1]["city"] == "City 2"

    def test_history_is_per_user(self, client, auth_headers, register_user, login):
        client.post("/api/weather/current", headers=auth_headers, json={"city": "Accra"})

        register_user(username="bob", email="bob@example.com")
        token = login(email="bob@example.com").json()["token"]
        bob = {"Authorization": f"Bearer {token}"}

        assert client.get("/api/weather/history", headers=bob).json() == []

    def test_storage_failure_does_not_fail_lookup(self, client, app, auth_headers):
        def broken_session_factory():
            raise OperationalError("INSERT", {}, Exception("disk I/O error"))

        app.state.history_recorder.session_factory = broken_session_factory

        response = client.post("/api/weather/current", headers=auth_headers, json={"city": "Accra"})
        assert response.status_code == 200
        assert response.json()["name"] == "Accra"
