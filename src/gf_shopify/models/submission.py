"""Form schema, submission, and extracted identity models."""

from enum import Enum
from typing import Any, Mapping

from pydantic import BaseModel, Field, field_validator

# A submission maps field keys ("3", "1.3", "1.6", ...) to submitted values.
Submission = Mapping[str, Any]


class FieldType(str, Enum):
    """Field types the extractor understands; everything else is OTHER."""

    EMAIL = "email"
    NAME = "name"
    TEXT = "text"
    OTHER = "other"


class FormField(BaseModel):
    """One field definition of a form."""

    id: str
    type: FieldType = FieldType.OTHER

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_str(cls, value: Any) -> str:
        return str(value)

    @field_validator("type", mode="before")
    @classmethod
    def _coerce_type(cls, value: Any) -> FieldType:
        try:
            return FieldType(value)
        except ValueError:
            return FieldType.OTHER


class FormSchema(BaseModel):
    """Ordered field definitions of one form, as supplied with each submission."""

    id: int
    title: str = ""
    fields: list[FormField] = Field(default_factory=list)

    @classmethod
    def from_payload(cls, form: Mapping[str, Any]) -> "FormSchema":
        """Build from the form-system payload {id, title?, fields: [{id, type}, ...]}."""
        fields = [
            {"id": f.get("id"), "type": f.get("type")}
            for f in form.get("fields") or []
        ]
        return cls(id=form["id"], title=form.get("title") or "", fields=fields)


class ExtractedIdentity(BaseModel):
    """Customer identity pulled from a submission. Empty email means extraction failed."""

    email: str = ""
    first_name: str = ""
    last_name: str = ""

    @property
    def has_email(self) -> bool:
        return bool(self.email)
