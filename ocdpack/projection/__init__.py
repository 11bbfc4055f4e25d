"""Per-entry record projection."""

from ocdpack.projection.projector import (
    BOARD_MAPPING,
    TARGET_MAPPING,
    FieldKind,
    FieldMapping,
    FieldSpec,
    ProjectionOutcome,
    project,
    project_one,
    project_outcomes,
)

__all__ = [
    "BOARD_MAPPING",
    "TARGET_MAPPING",
    "FieldKind",
    "FieldMapping",
    "FieldSpec",
    "ProjectionOutcome",
    "project",
    "project_one",
    "project_outcomes",
]
