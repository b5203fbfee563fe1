"""Validation Error Report

Field-scoped errors for one validation run. Only one error is kept per
field: a later failure for the same field replaces the earlier one while
keeping the field's original position.

Serialized shape:
{
    "error_message": "Invalid Data Provided",
    "errors": {
        "name": "This field is required.",
        "color": "Invalid hexadecimal color value"
    }
}
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from core.errors import AppError, ErrorCode, validation_error


@dataclass(frozen=True, slots=True)
class FieldError:
    """Error recorded for a single field.

    - field: field name as it appears in the payload
    - constraint: rule name that failed (e.g. "varchar", "after")
    - message: human-readable message from the rule settings
    - code: ErrorCode for the failure kind
    """
    field: str
    constraint: str
    message: str
    code: ErrorCode = ErrorCode.E2000_VALIDATION_GENERIC

    def to_dict(self) -> dict[str, Any]:
        return {"field": self.field, "constraint": self.constraint, "message": self.message, "code": self.code.name}


@dataclass
class ErrorReport:
    """Accumulated errors plus the overall message for one run."""
    error_message: str = "Invalid Data Provided"
    _errors: dict[str, FieldError] = field(default_factory=dict)

    def add(self, error: FieldError, overall_message: str | None = None) -> None:
        """Record a field error. A non-empty overall message replaces the current one."""
        if overall_message:
            self.error_message = overall_message
        self._errors[error.field] = error

    def __bool__(self) -> bool:
        return bool(self._errors)

    def __len__(self) -> int:
        return len(self._errors)

    def __contains__(self, field_name: str) -> bool:
        return field_name in self._errors

    @property
    def fields(self) -> dict[str, str]:
        """Field name to message, in first-failure order."""
        return {name: err.message for name, err in self._errors.items()}

    @property
    def details(self) -> list[FieldError]:
        return list(self._errors.values())

    def get(self, field_name: str) -> FieldError | None:
        return self._errors.get(field_name)

    def to_dict(self) -> dict[str, Any]:
        return {"error_message": self.error_message, "errors": self.fields}

    def to_app_error(self, origin: str = "") -> AppError:
        """Convert to AppError for callers using Result."""
        return validation_error(
            self.error_message,
            code=ErrorCode.E2000_VALIDATION_GENERIC,
            origin=origin,
            error_count=len(self._errors),
            errors=[err.to_dict() for err in self.details],
            report=self.to_dict(),
        ).unwrap_err()
