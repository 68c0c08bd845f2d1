from __future__ import annotations

import ipaddress
import logging

from fastapi import HTTPException, Request

from app.config import settings
from app.services.range_provider import RangeProvider

logger = logging.getLogger(__name__)


def get_range_provider(request: Request) -> RangeProvider:
    """Return the range-query provider created by the app lifespan.

    Raises:
        HTTPException 503: If the provider has not been initialized.
    """
    provider = getattr(request.app.state, "range_provider", None)
    if provider is None:
        raise HTTPException(status_code=503, detail="Breach lookup is not available")
    return provider


def _is_trusted_proxy(addr: str, trusted: list[str]) -> bool:
    """Check if *addr* matches any entry in the trusted proxy list.

    Each entry can be an individual IP or a CIDR network (e.g. "10.0.0.0/8").
    """
    try:
        ip = ipaddress.ip_address(addr)
    except ValueError:
        return False

    for entry in trusted:
        try:
            if "/" in entry:
                if ip in ipaddress.ip_network(entry, strict=False):
                    return True
            else:
                if ip == ipaddress.ip_address(entry):
                    return True
        except ValueError:
            logger.warning("Invalid trusted proxy entry: %s", entry)
    return False


def resolve_client_ip(request: Request) -> str:
    """Determine the real client IP, respecting trusted proxy configuration.

    * No trusted proxies configured → always use ``request.client.host``.
    * Request from a trusted proxy → use the first IP in X-Forwarded-For.
    * Request from an untrusted source → use ``request.client.host``.
    """
    direct_ip = request.client.host if request.client else "unknown"
    trusted = settings.trusted_proxies_list

    if not trusted or not _is_trusted_proxy(direct_ip, trusted):
        return direct_ip

    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()

    return direct_ip
