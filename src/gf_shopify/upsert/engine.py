"""Customer upsert: create first, fall back to search + update on 422.

Protocol against the Shopify Admin REST API:
1. POST /customers.json with email, names, tags and the policy's attributes
2. 201 -> done; 422 -> the customer most likely exists, continue with 3
3. GET /customers/search.json?query=email:{email}, take the first match
4. Apply the policy's update request (PUT customer or POST metafield)

Only the create request follows redirects; a 3xx on search or update is an
unexpected status.

Every step is a single attempt; there are no retries.
"""

import json
import logging
from typing import Any, Optional

import httpx

from gf_shopify.domain import normalize_domain
from gf_shopify.errors import (
    ConfigurationMissing,
    RemoteAPIError,
    RemoteConflict,
    RemoteNotFound,
)
from gf_shopify.models.config import RelayConfig
from gf_shopify.models.submission import ExtractedIdentity
from gf_shopify.store.activity_log import ActivityLog

from .base import ExtraAttributePolicy
from .client import CUSTOMERS_PATH, SEARCH_PATH, ShopifyCustomerClient
from .registry import PolicyRegistry

logger = logging.getLogger(__name__)

_BODY_PREVIEW_CHARS = 500


def _preview(body: str) -> str:
    if len(body) > _BODY_PREVIEW_CHARS:
        return body[:_BODY_PREVIEW_CHARS] + "..."
    return body


def _json_body(response: httpx.Response) -> dict[str, Any]:
    try:
        data = response.json()
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {}


class CustomerUpsertEngine:
    """
    Creates or updates one Shopify customer per call.
    upsert() returns True on success and raises an UpsertError subclass on
    any failure; RemoteConflict is handled internally by the update path.
    """

    def __init__(
        self,
        config: RelayConfig,
        *,
        policy: Optional[ExtraAttributePolicy] = None,
        activity_log: Optional[ActivityLog] = None,
        http_client: Optional[httpx.Client] = None,
    ):
        self.config = config
        self.policy = policy or PolicyRegistry.for_config(config)
        self._activity_log = activity_log
        self._http_client = http_client

    def _log(self, message: str, level: str = "info") -> None:
        if self._activity_log is not None:
            self._activity_log.log(message, level)
        elif level == "error":
            logger.error(message)
        else:
            logger.debug(message)

    def _open_client(self) -> ShopifyCustomerClient:
        """Check preconditions and build the API client. No network traffic."""
        if not self.config.store_domain or not self.config.api_token:
            raise ConfigurationMissing(
                "Missing Shopify configuration - Domain: "
                + ("OK" if self.config.store_domain else "MISSING")
                + ", Token: "
                + ("OK" if self.config.api_token else "MISSING")
            )
        domain = normalize_domain(self.config.store_domain)
        return ShopifyCustomerClient(
            domain,
            self.config.api_token,
            api_version=self.config.api_version,
            client=self._http_client,
        )

    def build_payload(self, identity: ExtractedIdentity) -> dict[str, Any]:
        """Create-request body for the identity."""
        customer: dict[str, Any] = {
            "email": identity.email,
            "first_name": identity.first_name,
            "last_name": identity.last_name,
            "tags": ", ".join(self.config.tags),
        }
        customer.update(self.policy.create_attributes())
        return {"customer": customer}

    def upsert(self, identity: ExtractedIdentity) -> bool:
        """Create the customer, or update it when Shopify reports a conflict."""
        with self._open_client() as client:
            try:
                return self._create(client, identity)
            except RemoteConflict:
                self._log("Customer might already exist (422), trying to update")
                return self._update_existing(client, identity.email)

    def _send(
        self,
        client: ShopifyCustomerClient,
        method: str,
        path: str,
        **kwargs: Any,
    ) -> httpx.Response:
        response = client.request(method, path, **kwargs)
        self._log(f"API Response - HTTP Code: {response.status_code}")
        origin = client.redirect_origin(response)
        if origin:
            # Advisory; does not fail the request.
            self._log(f"URL Redirect detected - Original: {origin}, Final: {response.url}", "error")
        return response

    def _create(self, client: ShopifyCustomerClient, identity: ExtractedIdentity) -> bool:
        self._log(f"Creating Shopify customer for: {identity.email}")
        self._log(f"Tags to apply: {', '.join(self.config.tags)}")
        payload = self.build_payload(identity)
        self._log(f"Customer data prepared: {json.dumps(payload)}")
        self._log(f"Sending API request to: {client.url_for(CUSTOMERS_PATH)}")

        response = self._send(client, "POST", CUSTOMERS_PATH, json=payload)
        body = response.text
        if body:
            self._log(f"API Response Body: {_preview(body)}")

        if response.status_code == 201:
            self._log("Customer created successfully", "success")
            summary = self.policy.describe_created(_json_body(response).get("customer") or {})
            if summary:
                self._log(summary)
            return True
        if response.status_code == 422:
            raise RemoteConflict("Customer might already exist (HTTP 422)", 422, body)
        raise RemoteAPIError(
            f"API Error - HTTP {response.status_code}: {_preview(body)}",
            response.status_code,
            body,
        )

    def _update_existing(self, client: ShopifyCustomerClient, email: str) -> bool:
        self._log(f"Searching for existing customer: {email}")
        response = self._send(
            client,
            "GET",
            SEARCH_PATH,
            params={"query": f"email:{email}"},
            follow_redirects=False,
        )
        if response.status_code != 200:
            raise RemoteAPIError(
                f"Failed to search for customer - HTTP {response.status_code}: {_preview(response.text)}",
                response.status_code,
                response.text,
            )

        customers = _json_body(response).get("customers")
        first = customers[0] if isinstance(customers, list) and customers else None
        customer_id = first.get("id") if isinstance(first, dict) else None
        if customer_id is None:
            raise RemoteNotFound(f"Customer not found in search results: {email}")
        self._log(f"Found existing customer with ID: {customer_id}")

        update = self.policy.build_update(customer_id)
        response = self._send(
            client,
            update.method,
            update.path,
            json=update.payload,
            follow_redirects=False,
        )
        if response.status_code == update.expected_status:
            self._log(f"Updated existing customer {update.description}", "success")
            return True
        raise RemoteAPIError(
            f"Failed to update customer {update.description} - HTTP {response.status_code}: "
            f"{_preview(response.text)}",
            response.status_code,
            response.text,
        )


def upsert_customer(
    config: RelayConfig,
    identity: ExtractedIdentity,
    *,
    policy: Optional[ExtraAttributePolicy] = None,
    activity_log: Optional[ActivityLog] = None,
    http_client: Optional[httpx.Client] = None,
) -> bool:
    """Create-or-update one customer. Raises UpsertError subclasses on failure."""
    engine = CustomerUpsertEngine(
        config,
        policy=policy,
        activity_log=activity_log,
        http_client=http_client,
    )
    return engine.upsert(identity)
