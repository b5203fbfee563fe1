"""Validation Run State

All mutable state of one validation run: the validated data store, the
error report and the validity flag. A run is created fresh for every
validation call and never shared, so concurrent validations cannot see
each other's data. Within a run the store is shared by every check, which
is how ``after`` reads a sibling field's already-normalized value.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from core.errors import ErrorCode
from .errors import ErrorReport, FieldError

RESERVED_KEYS = frozenset({"rules"})


@dataclass
class ValidationRun:
    """Validated data, errors and outcome for a single run."""
    data: dict[str, Any] = field(default_factory=dict)
    report: ErrorReport = field(default_factory=ErrorReport)
    run_id: str = ""
    _is_valid: bool = True

    @classmethod
    def load(cls, payload: Mapping[str, Any], *, error_message: str, run_id: str = "") -> ValidationRun:
        """Start a run from a caller payload. The payload itself is never mutated."""
        data = {k: v for k, v in payload.items() if k not in RESERVED_KEYS}
        return cls(data=data, report=ErrorReport(error_message=error_message), run_id=run_id)

    @property
    def is_valid(self) -> bool:
        return self._is_valid

    def store(self, field_name: str, value: Any) -> None:
        self.data[field_name] = value

    def lookup(self, field_name: str) -> Any:
        """Value of another field in the store, None when absent or nulled."""
        return self.data.get(field_name)

    def fail(
        self,
        field_name: str,
        message: str,
        *,
        constraint: str,
        code: ErrorCode = ErrorCode.E2000_VALIDATION_GENERIC,
        overall_message: str | None = None,
    ) -> bool:
        """Record a failing check: invalidate the run, null the field, keep the message.

        Always returns False so checks can ``return run.fail(...)``.
        """
        self._is_valid = False
        self.data[field_name] = None
        self.report.add(FieldError(field=field_name, constraint=constraint, message=message, code=code),
            overall_message=overall_message)
        return False

    def get_validated(self) -> dict[str, Any]:
        return dict(self.data)

    def get_errors(self) -> dict[str, Any]:
        """Error report while invalid, an empty dict otherwise."""
        return {} if self._is_valid else self.report.to_dict()
