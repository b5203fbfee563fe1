"""Rule Validator

Orchestrates a validation run: loads the payload into a fresh
ValidationRun, parses each field's rule string and dispatches every rule
token to its check routine, left to right. The first failing rule stops
evaluation for that field.

Usage:
    validator = RuleValidator()
    run = validator.validate_all(payload, {"name": "required|varchar"})
    if not run.is_valid:
        return run.get_errors()
    data = run.get_validated()
"""
from __future__ import annotations

from typing import Any, Mapping

from core.config import Settings, get_settings
from core.logging import generate_correlation_id, validation_logger
from .checks import CHECKS, Check, RuleSettings, build_rule_settings, check_default, compile_rule_settings
from .context import ValidationRun
from .rules import parse_rules
from .validators import TRIM_CHARS

log = validation_logger()

RuleSet = Mapping[str, str]


class RuleValidator:
    """Validates flat payloads against per-field rule strings.

    The validator holds only configuration (rule settings and the dispatch
    table) and is safe to share. All per-run state lives in the
    ValidationRun returned by ``validate_all``.

    Patterns are compiled here: a pattern that does not compile raises
    ValueError on construction, never during a run.
    """

    def __init__(
        self,
        rule_settings: Mapping[str, RuleSettings] | None = None,
        *,
        error_message: str | None = None,
        check_missing: bool | None = None,
        config: Settings | None = None,
    ):
        cfg = config or get_settings()
        # Overrides are merged onto the defaults so every built-in rule has settings
        self.rule_settings: dict[str, RuleSettings] = compile_rule_settings(
            {**build_rule_settings(cfg), **(rule_settings or {})}
        )
        self.error_message = error_message or cfg.VALIDATION_ERROR_MESSAGE
        self.check_missing = cfg.VALIDATION_CHECK_MISSING_FIELDS if check_missing is None else check_missing
        self._checks: dict[str, Check] = dict(CHECKS)

    def register(self, name: str, check: Check) -> None:
        """Add or replace the check routine for a rule name on this validator."""
        self._checks[name] = check

    def resolve(self, name: str) -> Check:
        """Check routine for a rule name; unknown names get the default check."""
        check = self._checks.get(name)
        if check is None:
            log.debug("unknown_rule", rule=name)
            return check_default
        return check

    def start(self, payload: Mapping[str, Any]) -> ValidationRun:
        """Create a fresh run for a payload."""
        return ValidationRun.load(payload, error_message=self.error_message, run_id=generate_correlation_id())

    def validate_all(
        self,
        payload: Mapping[str, Any],
        rules: RuleSet,
        *,
        check_missing: bool | None = None,
    ) -> ValidationRun:
        """Validate every payload field that has a rule string.

        Fields without rules pass through untouched. Fields with rules but
        absent from the payload are skipped unless ``check_missing`` is on,
        in which case they are validated as empty after the payload fields.
        """
        run = self.start(payload)
        check_missing = self.check_missing if check_missing is None else check_missing
        missing = [name for name in rules if name not in run.data] if check_missing else []

        # Iterate a snapshot: checks replace values in run.data as they go
        for name, value in list(run.data.items()):
            if name in rules:
                self.validate_field(run, name, value, rules[name])
        for name in missing:
            self.validate_field(run, name, None, rules[name])

        log.info(
            "validation_completed",
            run_id=run.run_id,
            field_count=len(run.data),
            valid=run.is_valid,
            error_count=len(run.report),
        )
        return run

    def validate_field(self, run: ValidationRun, name: str, raw_value: Any, rule_string: str) -> bool:
        """Run one field's rules in order, stopping at the first failure."""
        value = "" if raw_value is None else str(raw_value).strip(TRIM_CHARS)
        tokens = parse_rules(rule_string)
        if not tokens:
            run.store(name, value)
            return True

        for token in tokens:
            if not self.resolve(token.name)(run, self.rule_settings, name, value, token.params):
                error = run.report.get(name)
                log.debug(
                    "field_rejected",
                    run_id=run.run_id,
                    field=name,
                    rule=token.name,
                    message=error.message if error else None,
                )
                return False
        return True


def validate(payload: Mapping[str, Any], rules: RuleSet, **kwargs) -> ValidationRun:
    """Validate a payload with a default-configured RuleValidator."""
    return RuleValidator().validate_all(payload, rules, **kwargs)
