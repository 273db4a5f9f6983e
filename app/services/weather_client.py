"""
OpenWeatherMap current-weather client.

One GET per call, metric units, no caching and no retries. Failures come back
as ServiceResult errors:
- UPSTREAM_UNAVAILABLE: transport failure, timeout, or a body that is not JSON
- UPSTREAM_INVALID: JSON without a usable "main" block (this includes
  provider error bodies such as {"cod": 401, "message": "..."})
"""

import logging
from dataclasses import dataclass
from numbers import Real
from typing import Any, Optional

import httpx

from app.core.errors import ErrorKind, ServiceResult

logger = logging.getLogger(__name__)

DEFAULT_WEATHER_API_URL = "https://api.openweathermap.org/data/2.5/weather"


@dataclass(frozen=True)
class WeatherSnapshot:
    """Current conditions at a location."""
    temperature: float  # °C
    humidity: float  # %


def parse_current_conditions(payload: Any) -> Optional[WeatherSnapshot]:
    """Extract temperature and humidity from an OpenWeatherMap body."""
    if not isinstance(payload, dict):
        return None
    main = payload.get("main")
    if not isinstance(main, dict):
        return None

    temp = main.get("temp")
    humidity = main.get("humidity")
    for value in (temp, humidity):
        if isinstance(value, bool) or not isinstance(value, Real):
            return None

    return WeatherSnapshot(temperature=float(temp), humidity=float(humidity))


class OpenWeatherClient:
    """
    Async client for the OpenWeatherMap current-weather endpoint.

    Usage:
        client = OpenWeatherClient(api_key="...")
        result = await client.fetch_current(lat=52.5, lon=13.4)
        if result.is_ok:
            result.value.temperature
    """

    def __init__(
        self,
        api_key: Optional[str],
        base_url: str = DEFAULT_WEATHER_API_URL,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """
        Args:
            api_key: OpenWeatherMap API key
            base_url: Current-weather endpoint URL
            timeout: Request timeout in seconds
            transport: Optional httpx transport (used to stub the provider)
        """
        self.api_key = api_key
        self.base_url = base_url
        self.timeout = timeout
        self._transport = transport

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    async def fetch_current(self, lat: float, lon: float) -> ServiceResult[WeatherSnapshot]:
        """Fetch current temperature and humidity for a coordinate."""
        params = {
            "lat": lat,
            "lon": lon,
            "appid": self.api_key or "",
            "units": "metric",
        }

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                transport=self._transport
            ) as client:
                response = await client.get(self.base_url, params=params)
            payload = response.json()
        except httpx.TimeoutException as e:
            logger.error(f"Weather API timeout: {e}")
            return ServiceResult.fail(ErrorKind.UPSTREAM_UNAVAILABLE)
        except httpx.HTTPError as e:
            logger.error(f"Weather API error: {e}")
            return ServiceResult.fail(ErrorKind.UPSTREAM_UNAVAILABLE)
        except ValueError as e:
            logger.error(f"Weather API returned a non-JSON body: {e}")
            return ServiceResult.fail(ErrorKind.UPSTREAM_UNAVAILABLE)

        snapshot = parse_current_conditions(payload)
        if snapshot is None:
            logger.warning(
                f"Weather API returned no current conditions "
                f"(status={response.status_code})"
            )
            return ServiceResult.fail(ErrorKind.UPSTREAM_INVALID)

        return ServiceResult.ok(snapshot)
