"""Registry for selecting the extra-attribute policy of a relay."""

from typing import Type

from gf_shopify.models.config import RelayConfig
from gf_shopify.upsert.base import ExtraAttributePolicy
from gf_shopify.upsert.marketing import MarketingConsentPolicy
from gf_shopify.upsert.waitlist import WaitlistCountPolicy


class PolicyRegistry:
    """Maps config variants to policy classes."""

    _policies: dict[str, Type[ExtraAttributePolicy]] = {
        "marketing": MarketingConsentPolicy,
        "waitlist": WaitlistCountPolicy,
    }

    @classmethod
    def get(cls, variant: str, **kwargs) -> ExtraAttributePolicy:
        """Get a policy instance for the given variant. kwargs passed to policy __init__."""
        policy_cls = cls._policies.get(variant.lower())
        if not policy_cls:
            raise ValueError(f"Unknown variant: {variant}. Available: {list(cls._policies.keys())}")
        return policy_cls(**kwargs)

    @classmethod
    def for_config(cls, config: RelayConfig) -> ExtraAttributePolicy:
        """Policy configured by config.variant."""
        policy_cls = cls._policies.get(config.variant)
        if not policy_cls:
            raise ValueError(f"Unknown variant: {config.variant}. Available: {list(cls._policies.keys())}")
        return policy_cls.from_config(config)

    @classmethod
    def available_variants(cls) -> list[str]:
        """Return list of available variant identifiers."""
        return list(cls._policies.keys())
