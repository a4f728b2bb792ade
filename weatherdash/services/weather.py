"""
Weather gateway.

This module translates a city name or a coordinate pair into a weather
payload. ``OpenWeatherGateway`` proxies OpenWeatherMap; ``MockWeatherGateway``
synthesizes payloads of the same shape when no provider key is configured.
The implementation is chosen once at startup by ``build_weather_gateway``.
"""

import hashlib
import math
import random
import string
from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import httpx

from weatherdash.config import Settings
from weatherdash.errors import BadRequestError, NotFoundError, UpstreamError, UpstreamTimeoutError
from weatherdash.utils.logging_config import get_logger

logger = get_logger(__name__)

CURRENT_REQUIRED_MESSAGE = "City or latitude and longitude are required"
COORDINATES_REQUIRED_MESSAGE = "Latitude and longitude required"


class WeatherGateway(ABC):
    """
    Common interface of the real and the synthesized weather sources.

    Input validation lives here so both implementations reject the same
    requests with the same errors.
    """

    async def current(
        self,
        city: Optional[str] = None,
        lat: Optional[float] = None,
        lon: Optional[float] = None,
    ) -> Dict[str, Any]:
        """
        Current conditions for a city, or for coordinates when no city is given.

        Raises:
            BadRequestError: If neither a city nor both coordinates are given
        """
        city = (city or "").strip() or None
        if city is None and (lat is None or lon is None):
            raise BadRequestError(CURRENT_REQUIRED_MESSAGE)
        return await self._current(city, lat, lon)

    async def forecast(self, lat: Optional[float], lon: Optional[float]) -> Dict[str, Any]:
        """5 day / 3 hour forecast for a coordinate pair."""
        _require_coordinates(lat, lon)
        return await self._forecast(lat, lon)

    async def air_quality(self, lat: Optional[float], lon: Optional[float]) -> Dict[str, Any]:
        """Current air pollution data for a coordinate pair."""
        _require_coordinates(lat, lon)
        return await self._air_quality(lat, lon)

    async def aclose(self) -> None:
        """Release any held resources."""

    @abstractmethod
    async def _current(self, city: Optional[str], lat: Optional[float], lon: Optional[float]) -> Dict[str, Any]:
        ...

    @abstractmethod
    async def _forecast(self, lat: float, lon: float) -> Dict[str, Any]:
        ...

    @abstractmethod
    async def _air_quality(self, lat: float, lon: float) -> Dict[str, Any]:
        ...


def _require_coordinates(lat: Optional[float], lon: Optional[float]) -> None:
    if lat is None or lon is None:
        raise BadRequestError(COORDINATES_REQUIRED_MESSAGE)


class OpenWeatherGateway(WeatherGateway):
    """
    Proxy to the OpenWeatherMap 2.5 API.

    Every call is bounded by ``UPSTREAM_TIMEOUT_SECONDS`` and never retried.
    """

    def __init__(self, settings: Settings, client: Optional[httpx.AsyncClient] = None):
        self._api_key = settings.OPENWEATHER_API_KEY
        self._base_url = settings.OPENWEATHER_BASE_URL.rstrip("/")
        self._timeout = httpx.Timeout(settings.UPSTREAM_TIMEOUT_SECONDS)
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=self._timeout)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def _current(self, city, lat, lon):
        if city:
            params = {"q": city, "units": "metric"}
            not_found = "City not found"
        else:
            params = {"lat": lat, "lon": lon, "units": "metric"}
            not_found = "Location not found"
        return await self._get("weather", params, not_found, "Error fetching weather data")

    async def _forecast(self, lat, lon):
        params = {"lat": lat, "lon": lon, "units": "metric"}
        return await self._get("forecast", params, "Location not found", "Error fetching forecast")

    async def _air_quality(self, lat, lon):
        params = {"lat": lat, "lon": lon}
        return await self._get("air_pollution", params, "Location not found", "Error fetching air quality data")

    async def _get(
        self,
        path: str,
        params: Dict[str, Any],
        not_found_message: str,
        error_message: str,
    ) -> Dict[str, Any]:
        """
        Issue one GET against the provider and map failures to app errors.

        Raises:
            NotFoundError: Provider answered 404
            UpstreamTimeoutError: Provider did not answer in time
            UpstreamError: Any other failure
        """
        url = f"{self._base_url}/{path}"
        try:
            response = await self._client.get(
                url,
                params={**params, "appid": self._api_key},
                timeout=self._timeout,
            )
            response.raise_for_status()
        except httpx.TimeoutException:
            logger.warning(f"Weather provider timed out on /{path}")
            raise UpstreamTimeoutError()
        except httpx.HTTPStatusError as e:
            if e.response.status_code == 404:
                raise NotFoundError(not_found_message)
            # Query string carries the API key, log path and status only
            logger.error(f"Weather provider returned {e.response.status_code} on /{path}")
            raise UpstreamError(error_message)
        except httpx.HTTPError as e:
            logger.error(f"Weather provider request failed on /{path}: {type(e).__name__}")
            raise UpstreamError(error_message)

        try:
            return response.json()
        except ValueError:
            logger.error(f"Weather provider sent a non-JSON body on /{path}")
            raise UpstreamError(error_message)


# (id, main, description, icon)
MOCK_CONDITIONS = [
    (800, "Clear", "clear sky", "01d"),
    (801, "Clouds", "few clouds", "02d"),
    (802, "Clouds", "scattered clouds", "03d"),
    (803, "Clouds", "broken clouds", "04d"),
    (300, "Drizzle", "light intensity drizzle", "09d"),
    (500, "Rain", "light rain", "10d"),
    (501, "Rain", "moderate rain", "10d"),
    (211, "Thunderstorm", "thunderstorm", "11d"),
    (600, "Snow", "light snow", "13d"),
    (701, "Mist", "mist", "50d"),
]
MOCK_COUNTRIES = ["US", "GB", "FR", "DE", "ES", "IT", "JP", "IN", "BR", "AU", "CA", "ZA", "GH", "NG"]
FORECAST_STEPS = 40
FORECAST_STEP_HOURS = 3


def _seeded(key: str) -> random.Random:
    """Random generator whose sequence depends only on ``key``."""
    digest = hashlib.sha256(key.encode("utf-8")).digest()
    return random.Random(int.from_bytes(digest, "big"))


def _condition(rng: random.Random, temp: float) -> Dict[str, Any]:
    cond_id, main, description, icon = rng.choice(MOCK_CONDITIONS)
    if main == "Snow" and temp > 2:
        cond_id, main, description, icon = 500, "Rain", "light rain", "10d"
    return {"id": cond_id, "main": main, "description": description, "icon": icon}


def _utc_day_start(now: datetime) -> datetime:
    return now.replace(hour=0, minute=0, second=0, microsecond=0)


class MockWeatherGateway(WeatherGateway):
    """
    Deterministic stand-in for the provider.

    Values derive from a hash of the lowercased city name (or the rounded
    coordinates), so the same place always gets the same weather.
    """

    def __init__(self, clock=None):
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    async def _current(self, city, lat, lon):
        if city:
            key = f"city:{city.lower()}"
            name = string.capwords(city)
        else:
            key = f"coord:{lat:.2f},{lon:.2f}"
            name = "Demo City"

        rng = _seeded(key)
        place = self._place(rng, None, None) if city else self._place(rng, lat, lon)
        now = self._clock()

        temp = round(rng.uniform(-5.0, 35.0), 1)
        wind_speed = round(rng.uniform(0.5, 12.0), 1)
        humidity = rng.randint(25, 95)
        daylight_start = _utc_day_start(now) + timedelta(minutes=rng.randint(300, 420)) - timedelta(seconds=place["timezone"])

        return {
            "coord": place["coord"],
            "weather": [_condition(rng, temp)],
            "base": "stations",
            "main": {
                "temp": temp,
                "feels_like": round(temp - wind_speed * 0.3 + (humidity - 50) * 0.02, 1),
                "temp_min": round(temp - rng.uniform(0.5, 4.0), 1),
                "temp_max": round(temp + rng.uniform(0.5, 4.0), 1),
                "pressure": rng.randint(990, 1035),
                "humidity": humidity,
            },
            "visibility": rng.randrange(2000, 10001, 100),
            "wind": {"speed": wind_speed, "deg": rng.randint(0, 359)},
            "clouds": {"all": rng.randint(0, 100)},
            "dt": int(now.replace(minute=0, second=0, microsecond=0).timestamp()),
            "sys": {
                "country": place["country"],
                "sunrise": int(daylight_start.timestamp()),
                "sunset": int((daylight_start + timedelta(hours=rng.randint(10, 14))).timestamp()),
            },
            "timezone": place["timezone"],
            "id": rng.randint(100000, 9999999),
            "name": name,
            "cod": 200,
        }

    async def _forecast(self, lat, lon):
        rng = _seeded(f"forecast:{lat:.2f},{lon:.2f}")
        place = self._place(rng, lat, lon)
        base_temp = rng.uniform(-5.0, 30.0)
        now = self._clock()
        start = now.replace(minute=0, second=0, microsecond=0)
        start += timedelta(hours=FORECAST_STEP_HOURS - start.hour % FORECAST_STEP_HOURS)

        entries = []
        for step in range(FORECAST_STEPS):
            at = start + timedelta(hours=step * FORECAST_STEP_HOURS)
            step_rng = _seeded(f"forecast:{lat:.2f},{lon:.2f}:{at:%Y-%m-%d %H}")
            # Warmest mid-afternoon local time
            local_hour = (at.hour + place["timezone"] // 3600) % 24
            temp = round(base_temp + 5 * math.sin((local_hour - 9) / 24 * 2 * math.pi) + step_rng.uniform(-1.5, 1.5), 1)
            entries.append({
                "dt": int(at.timestamp()),
                "main": {
                    "temp": temp,
                    "feels_like": round(temp - step_rng.uniform(0, 3), 1),
                    "temp_min": round(temp - step_rng.uniform(0, 2), 1),
                    "temp_max": round(temp + step_rng.uniform(0, 2), 1),
                    "pressure": step_rng.randint(990, 1035),
                    "humidity": step_rng.randint(25, 95),
                },
                "weather": [_condition(step_rng, temp)],
                "clouds": {"all": step_rng.randint(0, 100)},
                "wind": {"speed": round(step_rng.uniform(0.5, 12.0), 1), "deg": step_rng.randint(0, 359)},
                "pop": round(step_rng.random(), 2),
                "dt_txt": at.strftime("%Y-%m-%d %H:%M:%S"),
            })

        return {
            "cod": "200",
            "message": 0,
            "cnt": len(entries),
            "list": entries,
            "city": {
                "name": "Demo City",
                "coord": place["coord"],
                "country": place["country"],
                "timezone": place["timezone"],
            },
        }

    async def _air_quality(self, lat, lon):
        rng = _seeded(f"air:{lat:.2f},{lon:.2f}")
        now = self._clock()
        return {
            "coord": {"lon": lon, "lat": lat},
            "list": [{
                "main": {"aqi": rng.randint(1, 5)},
                "components": {
                    "co": round(rng.uniform(150, 700), 2),
                    "no": round(rng.uniform(0, 20), 2),
                    "no2": round(rng.uniform(1, 60), 2),
                    "o3": round(rng.uniform(10, 120), 2),
                    "so2": round(rng.uniform(0.5, 20), 2),
                    "pm2_5": round(rng.uniform(1, 75), 2),
                    "pm10": round(rng.uniform(2, 120), 2),
                    "nh3": round(rng.uniform(0, 10), 2),
                },
                "dt": int(now.replace(minute=0, second=0, microsecond=0).timestamp()),
            }],
        }

    @staticmethod
    def _place(rng: random.Random, lat: Optional[float], lon: Optional[float]) -> Dict[str, Any]:
        """Coordinates, country and UTC offset for a synthesized location."""
        if lat is None or lon is None:
            lat = round(rng.uniform(-55.0, 70.0), 4)
            lon = round(rng.uniform(-180.0, 180.0), 4)
        return {
            "coord": {"lon": lon, "lat": lat},
            "country": rng.choice(MOCK_COUNTRIES),
            "timezone": int(round(lon / 15)) * 3600,
        }


def build_weather_gateway(settings: Settings, client: Optional[httpx.AsyncClient] = None) -> WeatherGateway:
    """
    Select the weather source for this process.

    Args:
        settings: Application settings
        client: Optional HTTP client for the provider (tests inject one)

    Returns:
        OpenWeatherGateway when a provider key is configured, otherwise
        MockWeatherGateway
    """
    if settings.mock_weather:
        logger.warning("OpenWeatherMap API key not configured. Using mock weather data.")
        return MockWeatherGateway()
    logger.info("Using OpenWeatherMap provider")
    return OpenWeatherGateway(settings, client=client)
