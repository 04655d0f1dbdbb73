"""Pydantic validation for record names accepted by the store."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from packages.records_shared.errors import ErrorDetail, codes, validation_error
from services.state.record_store.domain import MAX_NAME_LENGTH


class NewRecordRequest(BaseModel):
    """Validated shape of one record insertion."""

    model_config = ConfigDict(frozen=True, extra="forbid", strict=True)

    name: str = Field(max_length=MAX_NAME_LENGTH)

    @field_validator("name")
    @classmethod
    def _reject_blank(cls, value: str) -> str:
        """Reject empty and whitespace-only names; keep the value untouched."""
        if value.strip() == "":
            raise ValueError("name cannot be empty or whitespace")
        return value


def validate_record_name(name: object) -> ErrorDetail | None:
    """Return a validation error for an unacceptable name, else ``None``."""
    try:
        NewRecordRequest(name=name)
    except ValidationError as exc:
        return validation_error(
            _first_message(exc),
            code=codes.INVALID_ARGUMENT,
            metadata={"field": "name"},
        )
    return None


def _first_message(exc: ValidationError) -> str:
    details = exc.errors()
    if not details:
        return "name is invalid"
    detail = details[0]
    if detail.get("type") == "string_too_long":
        return f"name cannot exceed {MAX_NAME_LENGTH} characters"
    if detail.get("type") == "value_error":
        return "name cannot be empty or whitespace"
    return f"name is invalid: {detail.get('msg', 'unknown error')}"
