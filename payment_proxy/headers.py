"""
Upstream Request Headers

Builds the headers sent with every forwarded call from the inbound request
headers and the immutable upstream configuration.
"""

from typing import Dict, Mapping

from payment_proxy.config import UpstreamConfig

API_KEY_HEADER = "X-STUDIO-API-KEY"
CLIENT_ID_HEADER = "X-Client-ID"
ACCEPT = "application/json, text/plain, */*"


def build_upstream_headers(
    inbound_headers: Mapping[str, str],
    config: UpstreamConfig,
) -> Dict[str, str]:
    """
    Headers for an upstream call.

    Origin and Referer are passed through from the inbound request when set,
    otherwise the configured fallbacks are used. Starlette ``Headers`` are
    case-insensitive; plain mappings must use lowercase keys.
    """
    return {
        API_KEY_HEADER: config.credentials.api_key,
        "Accept": ACCEPT,
        "Origin": inbound_headers.get("origin") or config.default_origin,
        "Referer": inbound_headers.get("referer") or config.default_referer,
        "Content-Type": "application/json",
        CLIENT_ID_HEADER: config.credentials.client_id,
    }
