from __future__ import annotations

import logging
from typing import Optional, Union

import requests

from ..core.constants import DEFAULT_IPINFO_TIMEOUT_SECONDS, DEFAULT_IPINFO_URL
from ..core.result import Unavailable

logger = logging.getLogger(__name__)


class IpInfoClient:
    """Best-effort ipinfo.io lookup.

    ``lookup`` never raises: any transport, HTTP or payload problem comes back
    as ``Unavailable`` so callers can carry on without the metadata.
    """

    def __init__(
        self,
        *,
        base_url: str = DEFAULT_IPINFO_URL,
        token: Optional[str] = None,
        timeout: float = DEFAULT_IPINFO_TIMEOUT_SECONDS,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.timeout = float(timeout)
        self._session = session or requests.Session()

    def lookup(self, ip: str) -> Union[dict, Unavailable]:
        params = {"token": self.token} if self.token else None
        try:
            resp = self._session.get(f"{self.base_url}/{ip}", params=params, timeout=self.timeout)
        except requests.RequestException as e:
            logger.warning("IP lookup failed for %s: %s", ip, e)
            return Unavailable(f"request failed: {type(e).__name__}")

        if not resp.ok:
            logger.warning("IP lookup for %s returned HTTP %s", ip, resp.status_code)
            return Unavailable(f"http {resp.status_code}")

        try:
            payload = resp.json()
        except ValueError:
            logger.warning("IP lookup for %s returned a non-JSON body", ip)
            return Unavailable("invalid json")

        if not isinstance(payload, dict):
            return Unavailable("unexpected payload")
        return payload
