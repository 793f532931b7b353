"""Field-matching rules: which form field supplies which identity attribute."""

from dataclasses import dataclass

from gf_shopify.models.submission import FieldType, FormSchema, Submission

# Composite name field sub-keys
FIRST_NAME_SUFFIX = ".3"
LAST_NAME_SUFFIX = ".6"


@dataclass(frozen=True)
class ExtractionRule:
    """
    Take the value of the first field of `field_type`.
    With a suffix the submission key is "{field_id}{suffix}"; when
    require_key is set, fields whose key is absent from the submission
    are skipped.
    """

    field_type: FieldType
    suffix: str = ""
    require_key: bool = False

    def key_for(self, field_id: str) -> str:
        return f"{field_id}{self.suffix}"


# Identity attribute -> rules tried in order; first non-empty value wins.
IDENTITY_RULES: dict[str, tuple[ExtractionRule, ...]] = {
    "email": (
        ExtractionRule(FieldType.EMAIL),
    ),
    "first_name": (
        ExtractionRule(FieldType.NAME, FIRST_NAME_SUFFIX, require_key=True),
        ExtractionRule(FieldType.TEXT),
    ),
    "last_name": (
        ExtractionRule(FieldType.NAME, LAST_NAME_SUFFIX, require_key=True),
    ),
}


def apply_rule(rule: ExtractionRule, submission: Submission, schema: FormSchema) -> str:
    """Value from the first field matching the rule; empty string if none matches."""
    for field in schema.fields:
        if field.type is not rule.field_type:
            continue
        key = rule.key_for(field.id)
        if rule.require_key and key not in submission:
            continue
        value = submission.get(key)
        return "" if value is None else str(value)
    return ""
