"""Rule Validation Engine

Validates flat field-name to string mappings against per-field rule
strings such as ``required|varchar``, ``after(startDate)`` or
``enum(HOURS|DAYS|WEEKS|default:DAYS)``. Values are normalized in place:
empty optional fields become None and enum values may be replaced by
their declared default.

Key Features:
- Paren-aware rule string parser (pipes inside parameters are not separators)
- Static dispatch table with a pass-through fallback for unknown rules
- Per-run state: no data or errors leak between validations
- Short-circuit per field, one error message per field
- Result-returning boundary helpers

Usage:
    from core.validation import RuleValidator, parse_ingress

    run = RuleValidator().validate_all(payload, rules)
    if not run.is_valid:
        return run.get_errors()
    data = run.get_validated()

    # Or at a boundary
    result = parse_ingress(payload, rules)
"""

from .rules import RuleToken, split_rules, parse_token, parse_rules

from .validators import (
    ValidationResult,
    AtomicValidator,
    NonEmpty,
    RegexPattern,
    DateTimeFormat,
    OneOf,
    TRIM_CHARS,
)

from .errors import FieldError, ErrorReport

from .context import ValidationRun, RESERVED_KEYS

from .checks import (
    RuleKind,
    RuleSettings,
    RuleTable,
    Check,
    CHECKS,
    CONFIG_ERROR_MESSAGE,
    MATCHERS,
    build_rule_settings,
    compile_rule_settings,
    optional,
    parse_enum_params,
    check_required,
    check_varchar,
    check_integer,
    check_hexcolor,
    check_datetime,
    check_after,
    check_enum,
    check_default,
)

from .engine import RuleSet, RuleValidator, validate

from .boundaries import BoundaryValidator, parse_ingress, parse_batch

__all__ = [
    # Parser
    "RuleToken",
    "split_rules",
    "parse_token",
    "parse_rules",
    # Atomic validators
    "ValidationResult",
    "AtomicValidator",
    "NonEmpty",
    "RegexPattern",
    "DateTimeFormat",
    "OneOf",
    "TRIM_CHARS",
    # Errors and run state
    "FieldError",
    "ErrorReport",
    "ValidationRun",
    "RESERVED_KEYS",
    # Checks
    "RuleKind",
    "RuleSettings",
    "RuleTable",
    "Check",
    "CHECKS",
    "CONFIG_ERROR_MESSAGE",
    "MATCHERS",
    "build_rule_settings",
    "compile_rule_settings",
    "optional",
    "parse_enum_params",
    "check_required",
    "check_varchar",
    "check_integer",
    "check_hexcolor",
    "check_datetime",
    "check_after",
    "check_enum",
    "check_default",
    # Engine
    "RuleSet",
    "RuleValidator",
    "validate",
    # Boundaries
    "BoundaryValidator",
    "parse_ingress",
    "parse_batch",
]
