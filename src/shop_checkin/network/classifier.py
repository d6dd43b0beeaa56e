from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Protocol, Union

from ..core.constants import DEFAULT_SHOP_ASNS, DEFAULT_SHOP_ISP_NAMES
from ..core.result import Unavailable

DENY_FLAGS = ("hosting", "proxy", "vpn", "tor")


class IpLookup(Protocol):
    def lookup(self, ip: str) -> Union[dict, Unavailable]:
        raise NotImplementedError


@dataclass(frozen=True)
class NetworkAssessment:
    """``is_trusted`` and ``network_info`` are None when the lookup was unavailable."""

    is_trusted: Optional[bool]
    network_info: Optional[dict]

    @property
    def available(self) -> bool:
        return self.network_info is not None


class NetworkTrustClassifier:
    """Decide whether a check-in came from the shop's own network.

    Allow-list (ISP/organisation name or AS number) intersected with a
    deny-list veto: a mobile carrier or any hosting/proxy/VPN/Tor flag always
    wins over an allow-list match.
    """

    def __init__(
        self,
        lookup_client: IpLookup,
        *,
        isp_names: Iterable[str] = DEFAULT_SHOP_ISP_NAMES,
        asns: Iterable[str] = DEFAULT_SHOP_ASNS,
    ):
        self._lookup = lookup_client
        self._isp_names = tuple(n for n in isp_names if n)
        self._asns = frozenset(a.strip().upper() for a in asns if a)

    def assess(self, ip: str) -> NetworkAssessment:
        info = self._lookup.lookup(ip)
        if isinstance(info, Unavailable):
            return NetworkAssessment(is_trusted=None, network_info=None)
        return NetworkAssessment(is_trusted=self.is_trusted(info), network_info=info)

    def is_trusted(self, info: dict) -> bool:
        if self._is_mobile(info) or self._is_anonymized(info):
            return False
        return self._matches_isp(info) or self._matches_asn(info)

    @staticmethod
    def _is_mobile(info: dict) -> bool:
        carrier = info.get("carrier")
        return isinstance(carrier, dict) and bool(carrier.get("name"))

    @staticmethod
    def _is_anonymized(info: dict) -> bool:
        privacy = info.get("privacy")
        if not isinstance(privacy, dict):
            return False
        return any(bool(privacy.get(flag)) for flag in DENY_FLAGS)

    def _matches_isp(self, info: dict) -> bool:
        names = []
        for key in ("asn", "company"):
            section = info.get(key)
            if isinstance(section, dict) and section.get("name"):
                names.append(str(section["name"]))
        return any(isp in name for name in names for isp in self._isp_names)

    def _matches_asn(self, info: dict) -> bool:
        asn = info.get("asn")
        if not isinstance(asn, dict) or not asn.get("asn"):
            return False
        return str(asn["asn"]).strip().upper() in self._asns
