"""Customer create-or-update against the Shopify Admin API."""

from gf_shopify.upsert.base import ExtraAttributePolicy, UpdateRequest
from gf_shopify.upsert.client import ShopifyCustomerClient
from gf_shopify.upsert.engine import CustomerUpsertEngine, upsert_customer
from gf_shopify.upsert.marketing import MarketingConsentPolicy
from gf_shopify.upsert.registry import PolicyRegistry
from gf_shopify.upsert.waitlist import WaitlistCountPolicy

__all__ = [
    "CustomerUpsertEngine",
    "ExtraAttributePolicy",
    "MarketingConsentPolicy",
    "PolicyRegistry",
    "ShopifyCustomerClient",
    "UpdateRequest",
    "WaitlistCountPolicy",
    "upsert_customer",
]
