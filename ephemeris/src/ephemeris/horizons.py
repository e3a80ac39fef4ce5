"""JPL Horizons text client - one GET per body per date."""

from __future__ import annotations

import logging
from datetime import date, timedelta
from types import TracebackType

import httpx

logger = logging.getLogger(__name__)

DEFAULT_API_BASE = "https://ssd.jpl.nasa.gov/api/horizons.api"
DEFAULT_TIMEOUT = 15.0
DEFAULT_USER_AGENT = "IncidentHoroscopeApp/1.0"
GEOCENTER = "500@399"


class EphemerisClientError(Exception):
    """The ephemeris source could not provide a response."""

    def __init__(self, body_code: str, message: str) -> None:
        super().__init__(f"Horizons request for body {body_code} failed: {message}")
        self.body_code = body_code


class EphemerisTimeout(EphemerisClientError):
    pass


class EphemerisUnreachable(EphemerisClientError):
    pass


class EphemerisBadStatus(EphemerisClientError):
    def __init__(self, body_code: str, status_code: int) -> None:
        super().__init__(body_code, f"HTTP {status_code}")
        self.status_code = status_code


def build_query(body_code: str, target_date: date, center: str = GEOCENTER) -> dict[str, str]:
    """Parameters for a one-day, one-step, RA/DEC-only observer table."""
    return {
        "format": "text",
        "COMMAND": body_code,
        "OBJ_DATA": "YES",
        "MAKE_EPHEM": "YES",
        "EPHEM_TYPE": "OBSERVER",
        "CENTER": center,
        "START_TIME": target_date.isoformat(),
        "STOP_TIME": (target_date + timedelta(days=1)).isoformat(),
        "STEP_SIZE": "1d",
        # Astrometric RA/DEC only; more quantities trip the "too many constants" error
        "QUANTITIES": "1",
        "TIME_DIGITS": "MINUTES",
        "CAL_FORMAT": "CAL",
        "ANG_FORMAT": "DEG",
        "EXTRA_PREC": "YES",
        "CSV_FORMAT": "NO",
    }


class HorizonsClient:
    """Thin async wrapper around the Horizons API. Never retries."""

    def __init__(
        self,
        api_base: str = DEFAULT_API_BASE,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        user_agent: str = DEFAULT_USER_AGENT,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.api_base = api_base
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(timeout=timeout)
        self._timeout = timeout
        self._headers = {"User-Agent": user_agent, "Accept": "text/plain"}

    async def fetch_text(self, body_code: str, target_date: date, center: str = GEOCENTER) -> str:
        """Return the raw response text or raise an EphemerisClientError."""
        params = build_query(body_code, target_date, center)
        logger.debug("Fetching Horizons data for body %s on %s", body_code, target_date)
        try:
            response = await self._client.get(
                self.api_base,
                params=params,
                headers=self._headers,
                timeout=self._timeout,
            )
        except httpx.TimeoutException as exc:
            raise EphemerisTimeout(body_code, f"timed out after {self._timeout}s") from exc
        except httpx.TransportError as exc:
            raise EphemerisUnreachable(body_code, str(exc) or type(exc).__name__) from exc

        if not response.is_success:
            raise EphemerisBadStatus(body_code, response.status_code)
        logger.debug("Horizons responded %s for body %s", response.status_code, body_code)
        return response.text

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> HorizonsClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()
