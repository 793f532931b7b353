"""Thin httpx client for the Shopify Admin REST customer endpoints."""

from typing import Any, Optional

import httpx

from gf_shopify.errors import RemoteTransportError
from gf_shopify.models.config import DEFAULT_API_VERSION

CUSTOMERS_PATH = "/customers.json"
SEARCH_PATH = "/customers/search.json"


class ShopifyCustomerClient:
    """
    Issues requests against https://{domain}/admin/api/{version}.
    The domain must already be normalized; TLS is always used.
    Transport failures surface as RemoteTransportError; status codes are
    left to the caller. Pass follow_redirects=False where a redirect must
    not carry the access token to another host.
    """

    TIMEOUT = 30.0
    MAX_REDIRECTS = 3

    def __init__(
        self,
        domain: str,
        token: str,
        *,
        api_version: str = DEFAULT_API_VERSION,
        client: Optional[httpx.Client] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.base_url = f"https://{domain}/admin/api/{api_version}"
        self._token = token
        self._owns_client = client is None
        self._client = client or httpx.Client(
            timeout=self.TIMEOUT,
            follow_redirects=True,
            max_redirects=self.MAX_REDIRECTS,
            transport=transport,
        )

    def url_for(self, path: str) -> str:
        return self.base_url + path

    def request(
        self,
        method: str,
        path: str,
        *,
        json: Optional[dict[str, Any]] = None,
        params: Optional[dict[str, str]] = None,
        follow_redirects: bool = True,
    ) -> httpx.Response:
        url = self.url_for(path)
        headers = {"X-Shopify-Access-Token": self._token}
        if json is not None:
            headers["Content-Type"] = "application/json"
        try:
            return self._client.request(
                method,
                url,
                json=json,
                params=params,
                headers=headers,
                follow_redirects=follow_redirects,
            )
        except httpx.RequestError as e:
            raise RemoteTransportError(f"{method} {url} failed: {e}") from e

    @staticmethod
    def redirect_origin(response: httpx.Response) -> Optional[str]:
        """Originally requested URL when redirects moved the request elsewhere, else None."""
        if not response.history:
            return None
        original = str(response.history[0].request.url)
        return original if original != str(response.url) else None

    def close(self) -> None:
        """Close the underlying client if this instance created it."""
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "ShopifyCustomerClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
