"""Marketing-consent variant: subscribe the customer to email marketing."""

from datetime import datetime
from typing import Any, Callable, Optional

from gf_shopify.models.config import RelayConfig
from gf_shopify.upsert.base import ExtraAttributePolicy, UpdateRequest


class MarketingConsentPolicy(ExtraAttributePolicy):
    """Sets accepts_marketing plus an email consent block stamped with the current time."""

    variant = "marketing"

    OPT_IN_LEVEL = "confirmed_opt_in"

    def __init__(self, consent: bool = True, clock: Optional[Callable[[], datetime]] = None):
        self.consent = consent
        self._clock = clock or (lambda: datetime.now().astimezone())

    @classmethod
    def from_config(cls, config: RelayConfig) -> "MarketingConsentPolicy":
        return cls(consent=config.marketing_consent)

    def _now_iso(self) -> str:
        return self._clock().isoformat(timespec="seconds")

    def create_attributes(self) -> dict[str, Any]:
        now = self._now_iso()
        return {
            "accepts_marketing": self.consent,
            "accepts_marketing_updated_at": now,
            "email_marketing_consent": {
                "state": "subscribed" if self.consent else "not_subscribed",
                "opt_in_level": self.OPT_IN_LEVEL,
                "consent_updated_at": now,
            },
        }

    def build_update(self, customer_id: int) -> UpdateRequest:
        return UpdateRequest(
            method="PUT",
            path=f"/customers/{customer_id}.json",
            payload={
                "customer": {
                    "id": customer_id,
                    "accepts_marketing": self.consent,
                    "marketing_opt_in_level": self.OPT_IN_LEVEL,
                }
            },
            expected_status=200,
            description="marketing preferences",
        )

    def describe_created(self, customer: dict[str, Any]) -> Optional[str]:
        if "accepts_marketing" not in customer:
            return None
        status = "subscribed" if customer["accepts_marketing"] else "not subscribed"
        return f"Customer marketing status: {status}"
