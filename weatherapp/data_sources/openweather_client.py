"""Helper for fetching the current weather document from OpenWeatherMap."""
from __future__ import annotations

from typing import Optional

import requests

from weatherapp import config
from weatherapp.app_types import FetchResult
from weatherapp.data_sources.base import RemoteSource
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="openweather_client")


class OpenWeatherClient(RemoteSource):
    """Fetches `GET {base_url}?q=<location>&units=<units>&appid=<key>` once per call.

    No retries: the repository makes a single attempt per triggering request.
    """

    def __init__(
        self,
        base_url: str,
        location: str,
        *,
        units: str = "metric",
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.location = location
        self.units = units
        self.timeout = timeout
        self.session = session or requests.Session()

    @classmethod
    def from_settings(cls, settings: config.Settings | None = None) -> "OpenWeatherClient":
        settings = settings or config.settings
        return cls(
            settings.base_url,
            settings.location,
            units=settings.units,
            timeout=settings.request_timeout_seconds,
        )

    def fetch(self, api_key: Optional[str]) -> FetchResult:
        """Fetch the raw JSON body; transport problems become a failed FetchResult."""
        params = {"q": self.location, "units": self.units}
        if api_key:
            params["appid"] = api_key
        else:
            logger.warning("No OpenWeatherMap API key configured; request will likely be rejected")

        logger.debug("Requesting current weather", extra={"location": self.location})
        try:
            resp = self.session.get(self.base_url, params=params, timeout=self.timeout)
            resp.raise_for_status()
        except requests.RequestException as exc:
            # Never log the request URL: it carries the API key.
            status = getattr(getattr(exc, "response", None), "status_code", None)
            logger.error(
                "Weather request failed",
                extra={"error_type": type(exc).__name__, "status_code": status},
            )
            return FetchResult.transport_failure(f"{type(exc).__name__} (status={status})")

        return FetchResult.ok(resp.text)
