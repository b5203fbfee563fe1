"""Construction Stage Resource

Request body and validation rules for construction stages. Persistence,
routing and duration calculation live with the caller; this module only
declares what a valid stage payload looks like.
"""
from typing import Any

from pydantic import BaseModel, ValidationError

from core.errors import AppError, ErrorCode, Result, validation_error
from core.validation import BoundaryValidator, RuleValidator

CONSTRUCTION_STAGE_RULES: dict[str, str] = {
    "name": "required|varchar",
    "startDate": "required|datetime",
    "endDate": "after(startDate)",
    "durationUnit": "enum(HOURS|DAYS|WEEKS|default:DAYS)",
    "color": "hexcolor",
    "externalId": "varchar",
    "status": "required|enum(NEW|PLANNED|DELETED|default:NEW)",
}


class ConstructionStageCreate(BaseModel):
    name: str | None = None
    startDate: str | None = None
    endDate: str | None = None
    durationUnit: str | None = None
    color: str | None = None
    externalId: str | None = None
    status: str | None = None

    class Config:
        extra = "ignore"

    def to_payload(self, *, partial: bool = False) -> dict[str, Any]:
        """Flat field mapping. Partial payloads carry only the fields that were sent."""
        return self.model_dump(exclude_unset=partial)


def validate_construction_stage(
    body: ConstructionStageCreate | dict[str, Any],
    *,
    partial: bool = False,
    validator: RuleValidator | None = None,
) -> Result[dict, AppError]:
    """Validate a create (full) or update (partial) construction stage body."""
    if not isinstance(body, ConstructionStageCreate):
        try:
            body = ConstructionStageCreate.model_validate(body)
        except ValidationError as e:
            return validation_error(
                "Invalid construction stage body",
                code=ErrorCode.E2021_INVALID_JSON,
                origin="ingress",
                errors={".".join(str(p) for p in err["loc"]): err["msg"] for err in e.errors()},
            )
    return BoundaryValidator(CONSTRUCTION_STAGE_RULES, validator).parse_ingress(body.to_payload(partial=partial))
