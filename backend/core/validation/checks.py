"""Rule Check Routines

One routine per rule kind. Every routine has the same shape::

    check(run, settings, field_name, value, params) -> bool

``value`` is the trimmed raw value and ``params`` the raw interior of the
rule's parenthesized group (empty when there is none). A routine writes
the field's normalized value into the run on success. On failure it calls
``run.fail``, which invalidates the run, nulls the field and records the
message from the rule settings. Routines never raise for bad input.

All rules except ``required`` are optional: an empty value is stored as
None and passes without being checked.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from functools import wraps
from typing import Callable, Mapping
import re

from core.config import Settings
from core.errors import ErrorCode
from .context import ValidationRun
from .validators import AtomicValidator, DateTimeFormat, NonEmpty, OneOf, RegexPattern

CONFIG_ERROR_MESSAGE = "Invalid validator configuration."
DEFAULT_DECLARATION = "default"


class RuleKind(str, Enum):
    """Built-in rule names."""
    REQUIRED = "required"
    VARCHAR = "varchar"
    INTEGER = "integer"
    DATETIME = "datetime"
    AFTER = "after"
    ENUM = "enum"
    HEXCOLOR = "hexcolor"
    DEFAULT = "default"


@dataclass(frozen=True, slots=True)
class RuleSettings:
    """Pattern and message for one rule.

    ``pattern`` is a regex for pattern rules and a strftime format for
    ``datetime``. Rules without a pattern leave it empty. ``matcher`` is
    the validator built from the pattern by ``compile_rule_settings``;
    a rule without one accepts every value.
    """
    message: str
    pattern: str = ""
    code: ErrorCode = ErrorCode.E2000_VALIDATION_GENERIC
    matcher: AtomicValidator | None = field(default=None, repr=False, compare=False)

    def accepts(self, value: str) -> bool:
        return self.matcher is None or self.matcher(value).is_valid


RuleTable = Mapping[str, RuleSettings]
Check = Callable[[ValidationRun, RuleTable, str, str, str], bool]


def _match(pattern: str) -> AtomicValidator | None:
    return RegexPattern(pattern) if pattern else None


def _search(pattern: str) -> AtomicValidator | None:
    return RegexPattern(pattern, search=True) if pattern else None


def _datetime(pattern: str) -> AtomicValidator:
    return DateTimeFormat(pattern) if pattern else DateTimeFormat()


# Matcher factory per rule name; rules missing here take no pattern
MATCHERS: Mapping[str, Callable[[str], AtomicValidator | None]] = {
    RuleKind.VARCHAR.value: _match,
    RuleKind.INTEGER.value: _match,
    RuleKind.HEXCOLOR.value: _match,
    RuleKind.DATETIME.value: _datetime,
    RuleKind.DEFAULT.value: _search,
}


def compile_rule_settings(table: RuleTable) -> dict[str, RuleSettings]:
    """Attach a compiled matcher to every rule that takes a pattern.

    Raises ValueError for a pattern that does not compile, so a bad
    configuration fails when the validator is built.
    """
    compiled: dict[str, RuleSettings] = {}
    for name, rule_settings in table.items():
        factory = MATCHERS.get(name)
        if factory is None or rule_settings.matcher is not None:
            compiled[name] = rule_settings
            continue
        try:
            compiled[name] = replace(rule_settings, matcher=factory(rule_settings.pattern))
        except re.error as e:
            raise ValueError(f"Invalid pattern for rule '{name}': {e}") from e
    return compiled


def build_rule_settings(cfg: Settings) -> dict[str, RuleSettings]:
    """Rule settings table from application settings."""
    return {
        RuleKind.REQUIRED.value: RuleSettings(
            message="This field is required.",
            code=ErrorCode.E2001_REQUIRED_FIELD_MISSING,
        ),
        RuleKind.VARCHAR.value: RuleSettings(
            message="Incorrect varchar field value.",
            pattern=r"^[a-zA-Z0-9_\-.\s()/]{1,255}$",
            code=ErrorCode.E2002_INVALID_FORMAT,
        ),
        RuleKind.INTEGER.value: RuleSettings(
            message="Incorrect integer field value.",
            pattern=r"^[0-9]+$",
            code=ErrorCode.E2002_INVALID_FORMAT,
        ),
        RuleKind.DATETIME.value: RuleSettings(
            message="Incorrect Date Time field value. Please use <YYYY-MM-DD HH:MM> format.",
            pattern=cfg.VALIDATION_DATETIME_FORMAT,
            code=ErrorCode.E2012_INVALID_DATE,
        ),
        RuleKind.AFTER.value: RuleSettings(
            message="Incorrect After Date Time field value must be in future.",
            code=ErrorCode.E2012_INVALID_DATE,
        ),
        RuleKind.ENUM.value: RuleSettings(
            message="Incorrect Enum field value.",
            code=ErrorCode.E2005_CONSTRAINT_VIOLATION,
        ),
        RuleKind.HEXCOLOR.value: RuleSettings(
            message="Invalid hexadecimal color value",
            pattern=r"^#(?:[0-9a-fA-F]{3}){1,2}$",
            code=ErrorCode.E2002_INVALID_FORMAT,
        ),
        RuleKind.DEFAULT.value: RuleSettings(
            message=cfg.VALIDATION_DEFAULT_MESSAGE,
            pattern=cfg.VALIDATION_DEFAULT_PATTERN,
            code=ErrorCode.E2002_INVALID_FORMAT,
        ),
    }


def optional(check: Check) -> Check:
    """Store None for empty values and skip the check."""

    @wraps(check)
    def wrapper(run: ValidationRun, settings: RuleTable, field_name: str, value: str, params: str = "") -> bool:
        if not value:
            run.store(field_name, None)
            return True
        return check(run, settings, field_name, value, params)

    return wrapper


def _reject(run: ValidationRun, settings: RuleTable, rule: RuleKind, field_name: str) -> bool:
    rule_settings = settings[rule.value]
    return run.fail(field_name, rule_settings.message, constraint=rule.value, code=rule_settings.code)


def _reject_configuration(run: ValidationRun, rule: RuleKind, field_name: str) -> bool:
    return run.fail(field_name, CONFIG_ERROR_MESSAGE, constraint=rule.value,
        code=ErrorCode.E2030_RULE_CONFIGURATION)


def _pattern_gate(run: ValidationRun, settings: RuleTable, rule: RuleKind, field_name: str, value: str) -> bool:
    if not settings[rule.value].accepts(value):
        return _reject(run, settings, rule, field_name)
    run.store(field_name, value)
    return True


def _parse_datetime(run: ValidationRun, settings: RuleTable, field_name: str, value: str) -> datetime | None:
    """Datetime check that also hands back the parsed moment, None on failure."""
    rule_settings = settings[RuleKind.DATETIME.value]
    result = (rule_settings.matcher or DateTimeFormat())(value)
    if not result.is_valid:
        _reject(run, settings, RuleKind.DATETIME, field_name)
        return None
    run.store(field_name, value)
    return result.parsed


def check_required(run: ValidationRun, settings: RuleTable, field_name: str, value: str, params: str = "") -> bool:
    if not NonEmpty()(value).is_valid:
        return _reject(run, settings, RuleKind.REQUIRED, field_name)
    run.store(field_name, value)
    return True


@optional
def check_varchar(run: ValidationRun, settings: RuleTable, field_name: str, value: str, params: str = "") -> bool:
    return _pattern_gate(run, settings, RuleKind.VARCHAR, field_name, value)


@optional
def check_integer(run: ValidationRun, settings: RuleTable, field_name: str, value: str, params: str = "") -> bool:
    return _pattern_gate(run, settings, RuleKind.INTEGER, field_name, value)


@optional
def check_hexcolor(run: ValidationRun, settings: RuleTable, field_name: str, value: str, params: str = "") -> bool:
    return _pattern_gate(run, settings, RuleKind.HEXCOLOR, field_name, value)


@optional
def check_datetime(run: ValidationRun, settings: RuleTable, field_name: str, value: str, params: str = "") -> bool:
    return _parse_datetime(run, settings, field_name, value) is not None


@optional
def check_after(run: ValidationRun, settings: RuleTable, field_name: str, value: str, params: str = "") -> bool:
    """Value must be a datetime strictly later than the reference.

    ``params`` names another field in the run, or is a literal datetime
    when no such field holds a value. Both sides go through the datetime
    check, so an invalid reference is reported on this field with the
    datetime message.
    """
    if not params:
        return _reject_configuration(run, RuleKind.AFTER, field_name)

    current = _parse_datetime(run, settings, field_name, value)
    if current is None:
        return False

    reference = str(run.lookup(params) or params)
    earliest = _parse_datetime(run, settings, field_name, reference)
    if earliest is None:
        return False

    if current <= earliest:
        return _reject(run, settings, RuleKind.AFTER, field_name)

    run.store(field_name, value)
    return True


def parse_enum_params(params: str) -> tuple[tuple[str, ...], str | None]:
    """Split enum params into allowed values and the default value.

    Any item containing ``default`` is a default declaration
    (``default:VALUE``); the last declaration wins. The rest are allowed
    values, kept exactly as written.
    """
    items = params.split("|")
    declarations = [item for item in items if DEFAULT_DECLARATION in item]
    allowed = tuple(item for item in items if DEFAULT_DECLARATION not in item)

    default = None
    if declarations:
        parts = declarations[-1].split(":")
        default = parts[1] if len(parts) > 1 else None
    return allowed, default


@optional
def check_enum(run: ValidationRun, settings: RuleTable, field_name: str, value: str, params: str = "") -> bool:
    """Value must be one of the allowed values, or is replaced by the default."""
    if not params:
        return _reject_configuration(run, RuleKind.ENUM, field_name)

    allowed, default = parse_enum_params(params)
    if not OneOf(allowed)(value).is_valid:
        if default:
            run.store(field_name, default)
            return True
        return _reject(run, settings, RuleKind.ENUM, field_name)

    run.store(field_name, value)
    return True


@optional
def check_default(run: ValidationRun, settings: RuleTable, field_name: str, value: str, params: str = "") -> bool:
    """Fallback for rule names without a routine.

    Applies the ``default`` settings pattern as a search gate when one is
    configured, otherwise stores the value unchanged.
    """
    rule_settings = settings.get(RuleKind.DEFAULT.value)
    if rule_settings and not rule_settings.accepts(value):
        return _reject(run, settings, RuleKind.DEFAULT, field_name)
    run.store(field_name, value)
    return True


CHECKS: Mapping[str, Check] = {
    RuleKind.REQUIRED.value: check_required,
    RuleKind.VARCHAR.value: check_varchar,
    RuleKind.INTEGER.value: check_integer,
    RuleKind.DATETIME.value: check_datetime,
    RuleKind.AFTER.value: check_after,
    RuleKind.ENUM.value: check_enum,
    RuleKind.HEXCOLOR.value: check_hexcolor,
}
