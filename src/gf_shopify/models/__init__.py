"""Data models for configuration and form submissions."""

from gf_shopify.models.config import RelayConfig
from gf_shopify.models.submission import ExtractedIdentity, FieldType, FormField, FormSchema

__all__ = ["ExtractedIdentity", "FieldType", "FormField", "FormSchema", "RelayConfig"]
