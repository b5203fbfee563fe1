"""Validation at System Boundaries

Entry points for callers that want "normalized data or an error" as a
Result instead of inspecting a ValidationRun:
- Single payloads (request bodies, CLI input)
- Batches of payloads, each validated in its own run
"""
from __future__ import annotations

from typing import Any, Mapping, Sequence

from core.errors import AppError, Err, Ok, Result
from .engine import RuleSet, RuleValidator


class BoundaryValidator:
    """Boundary validator bound to one resource's rule set.

    Usage:
        stages = BoundaryValidator(STAGE_RULES)
        result = stages.parse_ingress(request_data)
    """

    __slots__ = ("rules", "validator")

    def __init__(self, rules: RuleSet, validator: RuleValidator | None = None):
        self.rules, self.validator = dict(rules), validator or RuleValidator()

    def parse_ingress(self, data: Mapping[str, Any], *, check_missing: bool | None = None) -> Result[dict, AppError]:
        """Validate incoming data. Ok carries the normalized mapping."""
        run = self.validator.validate_all(data, self.rules, check_missing=check_missing)
        if run.is_valid:
            return Ok(run.get_validated())
        return Err(run.report.to_app_error(origin="ingress").with_context(correlation_id=run.run_id))

    def parse_batch(
        self,
        items: Sequence[Mapping[str, Any]],
        *,
        max_errors: int = 50,
        check_missing: bool | None = None,
    ) -> Result[list[dict], list[tuple[int, AppError]]]:
        """Validate a batch. Err carries (index, error) pairs, at most ``max_errors``."""
        valid: list[dict] = []
        errors: list[tuple[int, AppError]] = []

        for idx, item in enumerate(items):
            if len(errors) >= max_errors:
                break
            result = self.parse_ingress(item, check_missing=check_missing)
            if result.is_ok():
                valid.append(result.unwrap())
            else:
                errors.append((idx, result.unwrap_err().with_metadata(batch_index=idx)))

        if errors:
            return Err(errors)
        return Ok(valid)


def parse_ingress(
    data: Mapping[str, Any],
    rules: RuleSet,
    *,
    validator: RuleValidator | None = None,
    check_missing: bool | None = None,
) -> Result[dict, AppError]:
    """Validate one payload against a rule set.

    Usage:
        match parse_ingress(body, rules):
            case Ok(data):
                save(data)
            case Err(error):
                return error.to_dict()
    """
    return BoundaryValidator(rules, validator).parse_ingress(data, check_missing=check_missing)


def parse_batch(
    items: Sequence[Mapping[str, Any]],
    rules: RuleSet,
    *,
    validator: RuleValidator | None = None,
    max_errors: int = 50,
    check_missing: bool | None = None,
) -> Result[list[dict], list[tuple[int, AppError]]]:
    """Validate a batch of payloads against one rule set."""
    return BoundaryValidator(rules, validator).parse_batch(items, max_errors=max_errors, check_missing=check_missing)
