"""Resolve email and names from a submission using the identity rule table."""

from typing import Mapping, Optional

from gf_shopify.models.submission import ExtractedIdentity, FormSchema, Submission

from .rules import IDENTITY_RULES, ExtractionRule, apply_rule


def extract_identity(
    submission: Submission,
    schema: FormSchema,
    rules: Optional[Mapping[str, tuple[ExtractionRule, ...]]] = None,
) -> ExtractedIdentity:
    """
    Apply each attribute's rules in order; the first non-empty value wins.
    An empty email on the result means no email field could be resolved.
    """
    values: dict[str, str] = {}
    for attribute, attribute_rules in (rules or IDENTITY_RULES).items():
        for rule in attribute_rules:
            value = apply_rule(rule, submission, schema)
            if value:
                values[attribute] = value
                break
    return ExtractedIdentity(**values)
