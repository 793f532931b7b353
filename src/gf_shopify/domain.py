"""Shopify store domain validation."""

import re
from typing import Optional

from gf_shopify.errors import InvalidDomain

_PROTOCOL_RE = re.compile(r"^https?://")
_MYSHOPIFY_RE = re.compile(r"^[a-zA-Z0-9\-]+\.myshopify\.com$")


def normalize_domain(raw: Optional[str]) -> str:
    """
    Reduce a configured store domain to the bare host used in API URLs.
    Strips one leading http(s):// and one trailing slash; the rest must be
    exactly <handle>.myshopify.com. Case is preserved.
    """
    if not raw:
        raise InvalidDomain("Shopify domain is empty")
    domain = _PROTOCOL_RE.sub("", raw, count=1)
    if domain.endswith("/"):
        domain = domain[:-1]
    if not _MYSHOPIFY_RE.fullmatch(domain):
        raise InvalidDomain(f"Invalid Shopify domain format: {raw}")
    return domain
