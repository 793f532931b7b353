"""Abstract base class for the variant-specific customer attributes."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Optional

from gf_shopify.models.config import RelayConfig


@dataclass(frozen=True)
class UpdateRequest:
    """Request that applies the extra attribute to an existing customer."""

    method: str
    path: str
    payload: dict[str, Any] = field(default_factory=dict)
    expected_status: int = 200
    description: str = ""


class ExtraAttributePolicy(ABC):
    """
    What, besides email/names/tags, a relayed customer carries.
    The upsert engine merges create_attributes() into the create payload and
    issues build_update() when the customer already exists.
    """

    variant: str = ""

    @classmethod
    @abstractmethod
    def from_config(cls, config: RelayConfig) -> "ExtraAttributePolicy":
        """Build the policy from relay settings."""
        pass

    @abstractmethod
    def create_attributes(self) -> dict[str, Any]:
        """
        Attributes merged into the "customer" object of the create request.
        """
        pass

    @abstractmethod
    def build_update(self, customer_id: int) -> UpdateRequest:
        """
        Request applying the attribute to an existing customer found by search.
        """
        pass

    def describe_created(self, customer: dict[str, Any]) -> Optional[str]:
        """
        Optional log line summarising the customer returned by a successful create.
        """
        return None
