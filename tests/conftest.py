import pytest

from core.config import Settings
from core.logging import configure_logging
from core.validation import RuleValidator

configure_logging(level="WARNING")


@pytest.fixture
def validator() -> RuleValidator:
    return RuleValidator(config=Settings())


@pytest.fixture
def stage_payload() -> dict[str, str]:
    return {
        "name": "Foundation (phase 1)",
        "startDate": "2024-01-10 08:00",
        "endDate": "2024-01-20 17:00",
        "durationUnit": "MONTHS",
        "color": "#FF0000",
        "externalId": "EXT-001",
        "status": "PLANNED",
    }


@pytest.fixture
def run_field(validator: RuleValidator):
    """Validate one field inside a fresh run. Returns (passed, run)."""

    def _run(value, rules: str, name: str = "field", data: dict | None = None):
        run = validator.start(data if data is not None else {name: value})
        return validator.validate_field(run, name, value, rules), run

    return _run
