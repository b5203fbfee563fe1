from models.construction_stage import (
    CONSTRUCTION_STAGE_RULES,
    ConstructionStageCreate,
    validate_construction_stage,
)

RESOURCES: dict[str, dict[str, str]] = {
    "construction_stages": CONSTRUCTION_STAGE_RULES,
}
