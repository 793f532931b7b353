"""Identity extraction from form submissions."""

from .extractor import extract_identity
from .rules import IDENTITY_RULES, ExtractionRule, apply_rule

__all__ = ["ExtractionRule", "IDENTITY_RULES", "apply_rule", "extract_identity"]
