"""Adapter fetching registry data for an address from an RDAP service."""
from __future__ import annotations

import logging
from typing import Any, Dict

import httpx

from myip.domain.entities import RegistryEvent, RegistryRecord
from myip.domain.errors import RegistryLookupError

logger = logging.getLogger(__name__)

ADDRESS_PLACEHOLDER = "{REMOTE_IP}"
DEFAULT_TIMEOUT = 5.0


class RdapClient:
    """Looks up addresses against an RDAP endpoint given as a URL template."""

    def __init__(
        self,
        url_template: str,
        timeout: float = DEFAULT_TIMEOUT,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Args:
            url_template: RDAP URL containing ``{REMOTE_IP}``,
                e.g. ``https://rdap.db.ripe.net/ip/{REMOTE_IP}``
            timeout: Per-request timeout in seconds
            client: Shared HTTP client; one is created (and owned) when omitted
        """
        self.url_template = url_template
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout, follow_redirects=True, max_redirects=10)

    def build_url(self, address: str) -> str:
        url = self.url_template.replace(ADDRESS_PLACEHOLDER, address)
        if url == self.url_template:
            raise RegistryLookupError(f"RDAP API template missing {ADDRESS_PLACEHOLDER}")
        return url

    async def lookup(self, address: str) -> RegistryRecord:
        """
        Fetch registry data for the address.

        Raises:
            RegistryLookupError: template, transport, status or decode failure
        """
        url = self.build_url(address)

        try:
            # bootstrap services answer with a redirect to the owning registry
            response = await self._client.get(
                url,
                headers={"Accept": "application/rdap+json, application/json"},
                follow_redirects=True,
            )
        except httpx.HTTPError as exc:
            raise RegistryLookupError(f"do request: {exc}") from exc

        if not response.is_success:
            raise RegistryLookupError(f"unexpected status: {response.status_code} {response.reason_phrase}")

        try:
            payload = response.json()
        except ValueError as exc:
            raise RegistryLookupError(f"decode response: {exc}") from exc
        if not isinstance(payload, dict):
            raise RegistryLookupError("decode response: expected a JSON object")

        record = parse_rdap_payload(payload)
        logger.debug(f"RDAP lookup for {address} returned handle {record.handle!r}")
        return record

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()


def parse_rdap_payload(payload: Dict[str, Any]) -> RegistryRecord:
    """Map an RDAP IP network object to a RegistryRecord."""
    events = []
    for event in payload.get("events") or []:
        if not isinstance(event, dict):
            continue
        events.append(RegistryEvent(
            action=str(event.get("eventAction") or ""),
            date=str(event.get("eventDate") or ""),
        ))

    return RegistryRecord(
        country=str(payload.get("country") or ""),
        handle=str(payload.get("handle") or ""),
        ip_version=str(payload.get("ipVersion") or ""),
        name=str(payload.get("name") or ""),
        type=str(payload.get("type") or ""),
        events=tuple(events),
    )
