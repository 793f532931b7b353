"""Relay configuration: Shopify credentials, target form, tags, and logging."""

import os
from pathlib import Path
from typing import Literal, Optional

try:
    import yaml
except ModuleNotFoundError as e:
    raise ModuleNotFoundError(
        "PyYAML is required for config loading. Run: poetry install"
    ) from e
from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_API_VERSION = "2023-10"

# Environment variable -> config field
_ENV_FIELDS: list[tuple[str, str]] = [
    ("GF_SHOPIFY_DOMAIN", "store_domain"),
    ("GF_SHOPIFY_TOKEN", "api_token"),
    ("GF_SHOPIFY_API_VERSION", "api_version"),
    ("GF_SHOPIFY_FORM_ID", "target_form_id"),
    ("GF_SHOPIFY_TAGS", "tags"),
    ("GF_SHOPIFY_VARIANT", "variant"),
    ("GF_SHOPIFY_MARKETING_CONSENT", "marketing_consent"),
    ("GF_SHOPIFY_WAITLIST_COUNT", "waitlist_count"),
    ("GF_SHOPIFY_ENABLE_LOGGING", "logging_enabled"),
    ("GF_SHOPIFY_LOG_RETENTION_DAYS", "log_retention_days"),
    ("GF_SHOPIFY_LOG_DB", "log_db"),
]


class RelayConfig(BaseModel):
    """Settings for one relay invocation. Missing domain/token is valid but non-functional."""

    model_config = ConfigDict(frozen=True)

    store_domain: str = Field(default="", description="e.g. your-store.myshopify.com")
    api_token: str = Field(default="", repr=False, description="Admin API access token")
    api_version: str = DEFAULT_API_VERSION

    target_form_id: int = Field(default=1, description="Only submissions of this form are relayed")
    tags: list[str] = Field(default_factory=lambda: ["newsletter"])

    variant: Literal["marketing", "waitlist"] = "marketing"
    marketing_consent: bool = True
    waitlist_count: int = Field(default=0, ge=0)

    logging_enabled: bool = True
    log_retention_days: int = Field(default=7, ge=1, le=30)
    log_db: Path = Path("gf_shopify.db")

    @field_validator("tags", mode="before")
    @classmethod
    def _split_tags(cls, value):
        """Accept 'newsletter, subscriber' as well as a list; trim and drop empties."""
        if value is None:
            return []
        if isinstance(value, str):
            value = value.split(",")
        return [str(t).strip() for t in value if str(t).strip()]

    @classmethod
    def from_yaml(cls, path: str | Path) -> "RelayConfig":
        """Load config from YAML. Supports nested (shopify/form/logging) or flat structure."""
        data = yaml.safe_load(Path(path).read_text()) or {}
        shopify = data.get("shopify", {})
        form = data.get("form", {})
        logging_ = data.get("logging", {})

        def _get(key: str, nested: dict, flat_key: str):
            return nested.get(key, data.get(flat_key))

        raw = {
            "store_domain": _get("domain", shopify, "store_domain"),
            "api_token": _get("token", shopify, "api_token"),
            "api_version": _get("api_version", shopify, "api_version"),
            "target_form_id": _get("id", form, "target_form_id"),
            "tags": _get("tags", form, "tags"),
            "variant": _get("variant", form, "variant"),
            "marketing_consent": _get("marketing_consent", form, "marketing_consent"),
            "waitlist_count": _get("waitlist_count", form, "waitlist_count"),
            "logging_enabled": _get("enabled", logging_, "logging_enabled"),
            "log_retention_days": _get("retention_days", logging_, "log_retention_days"),
            "log_db": _get("db", logging_, "log_db"),
        }
        return cls.model_validate({k: v for k, v in raw.items() if v is not None})

    @classmethod
    def from_env(cls, base: Optional["RelayConfig"] = None) -> "RelayConfig":
        """Overlay GF_SHOPIFY_* environment variables onto base (or defaults)."""
        data = base.model_dump() if base else {}
        for env_name, field_name in _ENV_FIELDS:
            value = os.environ.get(env_name)
            if value is not None and value.strip():
                data[field_name] = value.strip()
        return cls.model_validate(data)

    def status(self) -> dict[str, str]:
        """Human-readable configuration status. Never includes the token itself."""
        return {
            "Shopify Domain": f"Set ({self.store_domain})" if self.store_domain else "Missing",
            "API Token": "Set" if self.api_token else "Missing",
            "Form ID": str(self.target_form_id),
            "Customer Tags": ", ".join(self.tags) or "(none)",
            "Variant": self.variant,
            "Debug Logging": "Enabled" if self.logging_enabled else "Disabled",
            "Log Retention (Days)": str(self.log_retention_days),
        }
