"""Waitlist variant: record a waitlist count as an integer customer metafield."""

from typing import Any, Optional

from gf_shopify.models.config import RelayConfig
from gf_shopify.upsert.base import ExtraAttributePolicy, UpdateRequest


class WaitlistCountPolicy(ExtraAttributePolicy):
    """Attaches custom.waitlist_count (number_integer) to the customer."""

    variant = "waitlist"

    NAMESPACE = "custom"
    KEY = "waitlist_count"
    TYPE = "number_integer"

    def __init__(self, count: int = 0):
        if count < 0:
            raise ValueError("waitlist count must be >= 0")
        self.count = count

    @classmethod
    def from_config(cls, config: RelayConfig) -> "WaitlistCountPolicy":
        return cls(count=config.waitlist_count)

    def _metafield(self) -> dict[str, Any]:
        return {
            "namespace": self.NAMESPACE,
            "key": self.KEY,
            "value": self.count,
            "type": self.TYPE,
        }

    def create_attributes(self) -> dict[str, Any]:
        return {"metafields": [self._metafield()]}

    def build_update(self, customer_id: int) -> UpdateRequest:
        return UpdateRequest(
            method="POST",
            path=f"/customers/{customer_id}/metafields.json",
            payload={"metafield": self._metafield()},
            expected_status=201,
            description="waitlist count",
        )

    def describe_created(self, customer: dict[str, Any]) -> Optional[str]:
        return f"Waitlist count set to {self.count}"
