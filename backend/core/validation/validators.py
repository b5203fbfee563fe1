"""Atomic Validators

Pure value checks used by the rule check routines. Validators never touch
run state: they answer "is this string acceptable" and describe why not.
Check routines decide what to store and which message to record.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any
import re

from core.errors import ErrorCode

# ASCII whitespace trimmed from values. Unicode spaces such as NBSP are content
TRIM_CHARS = " \t\n\r\0\x0b"


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """Result of a validation check."""
    is_valid: bool
    error_message: str | None = None
    error_code: ErrorCode | None = None
    constraint: str | None = None
    parsed: Any = None

    @classmethod
    def valid(cls, parsed: Any = None) -> ValidationResult: return cls(is_valid=True, parsed=parsed)

    @classmethod
    def invalid(cls, message: str, code: ErrorCode = ErrorCode.E2000_VALIDATION_GENERIC, *,
                constraint: str | None = None) -> ValidationResult:
        return cls(is_valid=False, error_message=message, error_code=code, constraint=constraint)


class AtomicValidator(ABC):
    """Base class for atomic validators."""

    @abstractmethod
    def validate(self, value: str) -> ValidationResult:
        """Validate a value. Returns ValidationResult."""

    @property
    @abstractmethod
    def constraint_name(self) -> str:
        """Constraint name for error details."""

    def __call__(self, value: str) -> ValidationResult: return self.validate(value)


@dataclass(frozen=True, slots=True)
class NonEmpty(AtomicValidator):
    """At least one character besides ASCII whitespace."""

    @property
    def constraint_name(self) -> str:
        return "non_empty"

    def validate(self, value: str) -> ValidationResult:
        if not value.strip(TRIM_CHARS):
            return ValidationResult.invalid("String cannot be empty", ErrorCode.E2001_REQUIRED_FIELD_MISSING,
                constraint=self.constraint_name)
        return ValidationResult.valid()


@dataclass(frozen=True, slots=True)
class RegexPattern(AtomicValidator):
    """Match a string against a regex.

    Anchored patterns (``^...$``) express whole-value formats; with
    ``search=True`` the pattern may match anywhere in the value. The
    pattern is compiled on construction, so a bad pattern raises
    ``re.error`` there and never during validation.
    """
    pattern: str
    flags: int = re.ASCII
    search: bool = False
    _compiled: re.Pattern = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "_compiled", re.compile(self.pattern, self.flags))

    @property
    def constraint_name(self) -> str:
        return f"pattern[{self.pattern}]"

    def validate(self, value: str) -> ValidationResult:
        matcher = self._compiled.search if self.search else self._compiled.match
        if not matcher(value):
            return ValidationResult.invalid(f"Value does not match pattern: {self.pattern}",
                ErrorCode.E2002_INVALID_FORMAT, constraint=self.constraint_name)
        return ValidationResult.valid()


@dataclass(frozen=True, slots=True)
class DateTimeFormat(AtomicValidator):
    """Strict strftime-format datetime.

    The value must parse under ``fmt`` and format back to exactly the same
    string, which rejects non-padded fields such as ``2024-1-5 9:00``.
    Years render as four digits on every platform (``0999``), not through
    the C library's ``%Y``.
    """
    fmt: str = "%Y-%m-%d %H:%M"

    @property
    def constraint_name(self) -> str:
        return f"datetime[{self.fmt}]"

    def format(self, moment: datetime) -> str:
        return moment.strftime(self.fmt.replace("%Y", f"{moment.year:04d}"))

    def parse(self, value: str) -> datetime | None:
        try:
            parsed = datetime.strptime(value, self.fmt)
        except ValueError:
            return None
        return parsed if self.format(parsed) == value else None

    def validate(self, value: str) -> ValidationResult:
        parsed = self.parse(value)
        if parsed is None:
            return ValidationResult.invalid(f"Invalid datetime, expected format {self.fmt}",
                ErrorCode.E2012_INVALID_DATE, constraint=self.constraint_name)
        return ValidationResult.valid(parsed)


@dataclass(frozen=True, slots=True)
class OneOf(AtomicValidator):
    """Exact, case-sensitive membership in a set of options."""
    options: tuple[str, ...]

    @property
    def constraint_name(self) -> str:
        return f"one_of[{', '.join(self.options)}]"

    def validate(self, value: str) -> ValidationResult:
        if value not in self.options:
            return ValidationResult.invalid(f"Value '{value}' is not one of: {', '.join(self.options)}",
                ErrorCode.E2005_CONSTRAINT_VIOLATION, constraint=self.constraint_name)
        return ValidationResult.valid()
