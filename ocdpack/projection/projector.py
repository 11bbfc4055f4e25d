"""Project raw listing entries into typed records."""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Any, Callable, Generic, Literal, Sequence, TypeVar

from jsonschema import Draft202012Validator

from ocdpack.core import types as keys
from ocdpack.core.models import Board, Target
from ocdpack.protocol.schema import build_entry_schema, entry_validator, first_schema_error

logger = logging.getLogger(__name__)

T = TypeVar("T")
FieldKind = Literal["string", "string_list"]


@dataclass(frozen=True, slots=True)
class FieldSpec:
    """Maps one wire key onto one record attribute."""

    attribute: str
    key: str
    kind: FieldKind = "string"


@dataclass(frozen=True)
class FieldMapping(Generic[T]):
    """How to build a record of type ``T`` from one JSON object."""

    name: str
    factory: Callable[..., T]
    fields: tuple[FieldSpec, ...]
    validator: Draft202012Validator = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        schema = build_entry_schema(
            string_keys=[spec.key for spec in self.fields if spec.kind == "string"],
            string_list_keys=[spec.key for spec in self.fields if spec.kind == "string_list"],
            title=self.name,
        )
        object.__setattr__(self, "validator", entry_validator(schema))

    def build(self, entry: dict[str, Any]) -> T:
        values: dict[str, Any] = {}
        for spec in self.fields:
            raw = entry.get(spec.key)
            if spec.kind == "string_list":
                values[spec.attribute] = tuple(raw) if raw is not None else ()
            else:
                values[spec.attribute] = raw
        return self.factory(**values)


@dataclass(frozen=True, slots=True)
class ProjectionOutcome(Generic[T]):
    """Result of projecting one entry: a record or the reason it was dropped."""

    index: int
    record: T | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def project_one(index: int, entry: Any, mapping: FieldMapping[T]) -> ProjectionOutcome[T]:
    error = first_schema_error(mapping.validator, entry)
    if error is not None:
        return ProjectionOutcome(index=index, error=error)
    try:
        record = mapping.build(entry)
    except (TypeError, ValueError) as exc:
        return ProjectionOutcome(index=index, error=f"{type(exc).__name__}: {exc}")
    return ProjectionOutcome(index=index, record=record)


def project_outcomes(
    items: Sequence[Any],
    mapping: FieldMapping[T],
) -> list[ProjectionOutcome[T]]:
    return [project_one(index, entry, mapping) for index, entry in enumerate(items)]


def project(items: Sequence[Any], mapping: FieldMapping[T]) -> list[T]:
    """Project every well-formed entry, in source order.

    Malformed entries are dropped one at a time and never fail the batch.
    """
    records: list[T] = []
    for outcome in project_outcomes(items, mapping):
        if not outcome.ok:
            logger.debug(
                "skipping %s entry %d: %s",
                mapping.name,
                outcome.index,
                outcome.error,
            )
            continue
        records.append(outcome.record)  # type: ignore[arg-type]
    return records


BOARD_MAPPING: FieldMapping[Board] = FieldMapping(
    name="board",
    factory=Board,
    fields=(
        FieldSpec("description", keys.BOARD_INFO_KEY),
        FieldSpec("name", keys.BOARD_NAME_KEY),
        FieldSpec("vendor_name", keys.BOARD_VENDOR_NAME_KEY),
        FieldSpec("product_name", keys.BOARD_PRODUCT_NAME_KEY),
        FieldSpec("target_name", keys.BOARD_TARGET_KEY),
        FieldSpec("unique_id", keys.BOARD_UNIQUE_ID_KEY),
    ),
)

TARGET_MAPPING: FieldMapping[Target] = FieldMapping(
    name="target",
    factory=Target,
    fields=(
        FieldSpec("name", keys.TARGET_NAME_KEY),
        FieldSpec("vendor", keys.TARGET_VENDOR_KEY),
        FieldSpec("part_number", keys.TARGET_PART_NUMBER_KEY),
        FieldSpec("part_families", keys.TARGET_PART_FAMILIES_KEY, "string_list"),
        FieldSpec("svd_path", keys.TARGET_SVD_PATH_KEY),
    ),
)
