"""Client address handling and IP-to-country lookup for visit analytics."""

from __future__ import annotations

import ipaddress
import logging

import httpx

from portfolio_cms.config import get_settings

logger = logging.getLogger(__name__)


def _is_loopback(ip: str) -> bool:
    try:
        address = ipaddress.ip_address(ip)
    except ValueError:
        return False
    mapped = getattr(address, "ipv4_mapped", None)
    return address.is_loopback or (mapped is not None and mapped.is_loopback)


def resolve_client_ip(forwarded_for: str | None, peer: str | None) -> str:
    """Return the caller's address.

    The first ``X-Forwarded-For`` entry wins over the socket peer. Loopback
    addresses are replaced by ``Settings.loopback_placeholder_ip`` when one is
    configured, so local development still produces a resolvable address.
    """
    ip = ""
    if forwarded_for:
        ip = forwarded_for.split(",")[0].strip()
    if not ip:
        ip = (peer or "").strip() or "unknown"

    placeholder = get_settings().loopback_placeholder_ip
    if placeholder and _is_loopback(ip):
        return placeholder
    return ip


def lookup_country(ip: str) -> str | None:
    """Resolve ``ip`` to a country name.

    Returns:
        The country name, or None when the lookup fails or has no answer.
    """
    settings = get_settings()
    url = settings.geoip_url.format(ip=ip)
    try:
        with httpx.Client(timeout=settings.geoip_timeout) as client:
            response = client.get(url)
            response.raise_for_status()
            payload = response.json()
    except (httpx.HTTPError, ValueError) as exc:
        logger.warning("GeoIP lookup failed for %s: %s", ip, exc)
        return None

    if not isinstance(payload, dict):
        return None
    country = payload.get("country_name")
    if isinstance(country, str) and country.strip():
        return country.strip()
    return None
