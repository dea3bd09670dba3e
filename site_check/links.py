"""Reachability probes for external domains linked from the site."""

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass

import aiohttp
from yarl import URL

log = logging.getLogger(__name__)


@dataclass(frozen=True, kw_only=True)
class DomainProbe:
    """Result of probing one domain."""

    domain: str
    status: int | None = None
    error: str | None = None

    @property
    def reachable(self) -> bool:
        """True when the domain answered with a non-error status."""
        return self.status is not None and self.status < 400


async def probe_domains(
    domains: Sequence[str], *, timeout_s: float = 10.0
) -> Sequence[DomainProbe]:
    """Send one HEAD request per domain, in order.

    Network errors are captured on the probe rather than raised.
    """
    timeout = aiohttp.ClientTimeout(total=timeout_s)
    probes: list[DomainProbe] = []
    async with aiohttp.ClientSession(timeout=timeout) as session:
        for domain in domains:
            probes.append(await _probe(session, domain))
    return probes


async def _probe(session: aiohttp.ClientSession, domain: str) -> DomainProbe:
    url = URL.build(scheme="https", host=domain, path="/")
    try:
        async with session.head(url, allow_redirects=True) as response:
            log.debug("HEAD %s -> %d", url, response.status)
            return DomainProbe(domain=domain, status=response.status)
    except (aiohttp.ClientError, asyncio.TimeoutError) as e:
        log.debug("HEAD %s failed: %s", url, e)
        return DomainProbe(domain=domain, error=str(e) or type(e).__name__)
