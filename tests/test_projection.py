from __future__ import annotations

import json
import logging

import pytest

from ocdpack.core import Board, Target
from ocdpack.projection import (
    BOARD_MAPPING,
    TARGET_MAPPING,
    FieldMapping,
    FieldSpec,
    project,
    project_outcomes,
)
from ocdpack.protocol import decode, extract_array


def _board_entry(index: int) -> dict[str, str]:
    return {
        "info": f"Board {index}",
        "board_name": f"BOARD-{index}",
        "vendor_name": "Vendor",
        "product_name": "CMSIS-DAP",
        "target": f"target{index}",
        "unique_id": f"uid-{index}",
    }


def test_board_projection_maps_every_wire_key() -> None:
    boards = project([_board_entry(1)], BOARD_MAPPING)

    assert boards == [
        Board(
            name="BOARD-1",
            vendor_name="Vendor",
            product_name="CMSIS-DAP",
            target_name="target1",
            description="Board 1",
            unique_id="uid-1",
        )
    ]
    assert str(boards[0]) == "<Board: BOARD-1 [target1] uid-1>"


def test_projection_preserves_source_order() -> None:
    entries = [_board_entry(index) for index in (3, 1, 2)]

    names = [board.name for board in project(entries, BOARD_MAPPING)]

    assert names == ["BOARD-3", "BOARD-1", "BOARD-2"]


def test_single_malformed_board_is_skipped_not_fatal() -> None:
    entries: list[object] = [_board_entry(index) for index in range(5)]
    entries[2] = {"board_name": ["not", "a", "string"], "unique_id": "uid-2"}

    boards = project(entries, BOARD_MAPPING)

    assert len(boards) == 4
    assert [board.unique_id for board in boards] == ["uid-0", "uid-1", "uid-3", "uid-4"]


def test_non_object_entries_are_skipped() -> None:
    entries = ["BOARD-0", None, 7, [_board_entry(0)], _board_entry(1)]

    boards = project(entries, BOARD_MAPPING)

    assert [board.name for board in boards] == ["BOARD-1"]


def test_projection_never_grows_the_sequence() -> None:
    entries: list[object] = [_board_entry(0), {"unique_id": 5}, _board_entry(2), "x"]

    assert len(project(entries, BOARD_MAPPING)) <= len(entries)
    well_formed = [_board_entry(index) for index in range(4)]
    assert len(project(well_formed, BOARD_MAPPING)) == len(well_formed)


def test_projection_returns_fresh_list() -> None:
    entries = [_board_entry(0)]

    first = project(entries, BOARD_MAPPING)
    first.clear()

    assert len(project(entries, BOARD_MAPPING)) == 1


def test_outcomes_report_reason_for_dropped_entries() -> None:
    outcomes = project_outcomes([_board_entry(0), {"target": 12}], BOARD_MAPPING)

    assert outcomes[0].ok
    assert outcomes[0].record is not None
    assert not outcomes[1].ok
    assert outcomes[1].record is None
    assert outcomes[1].index == 1
    assert outcomes[1].error is not None
    assert outcomes[1].error.startswith("target:")


def test_absent_and_null_board_fields_stay_unset() -> None:
    boards = project([{"board_name": "X", "unique_id": "1", "info": None}], BOARD_MAPPING)

    assert boards == [Board(name="X", unique_id="1")]
    assert boards[0].vendor_name is None
    assert boards[0].description is None


def test_unknown_keys_are_ignored() -> None:
    boards = project([{"board_name": "X", "future_field": {"nested": True}}], BOARD_MAPPING)

    assert boards == [Board(name="X")]


def test_target_projection_with_families() -> None:
    entry = {
        "name": "k64f",
        "vendor": "NXP",
        "part_number": "MK64FN1M0VLL12",
        "part_families": ["Kinetis", "K6x"],
        "svd_path": "/svd/MK64F12.svd",
    }

    targets = project([entry], TARGET_MAPPING)

    assert targets == [
        Target(
            name="k64f",
            vendor="NXP",
            part_number="MK64FN1M0VLL12",
            part_families=("Kinetis", "K6x"),
            svd_path="/svd/MK64F12.svd",
        )
    ]
    assert str(targets[0]) == "<Target: k64f [MK64FN1M0VLL12]>"
    assert targets[0].to_dict()["part_families"] == ["Kinetis", "K6x"]


def test_target_families_default_to_empty() -> None:
    targets = project(
        [{"name": "a"}, {"name": "b", "part_families": None}],
        TARGET_MAPPING,
    )

    assert [target.part_families for target in targets] == [(), ()]


def test_target_with_non_string_family_is_skipped() -> None:
    targets = project(
        [{"name": "a", "part_families": ["ok", 3]}, {"name": "b", "part_families": "K6x"}],
        TARGET_MAPPING,
    )

    assert targets == []


def test_custom_mapping_builds_any_record_type() -> None:
    mapping: FieldMapping[dict[str, object]] = FieldMapping(
        name="probe-summary",
        factory=dict,
        fields=(FieldSpec("uid", "unique_id"), FieldSpec("tags", "tags", "string_list")),
    )

    records = project([{"unique_id": "7", "tags": ["a"]}, {"tags": "a"}], mapping)

    assert records == [{"uid": "7", "tags": ("a",)}]


def test_end_to_end_decode_and_project_single_board() -> None:
    text = '{"version":{"major":1,"minor":0},"status":0,"boards":[{"board_name":"X","unique_id":"1"}]}'

    boards = project(extract_array(decode(text), "boards"), BOARD_MAPPING)

    assert boards == [Board(name="X", unique_id="1")]
    assert boards[0].to_dict() == {
        "name": "X",
        "vendor_name": None,
        "product_name": None,
        "target_name": None,
        "description": None,
        "unique_id": "1",
    }


def test_five_board_envelope_with_one_bad_entry_yields_four_records() -> None:
    entries: list[object] = [_board_entry(index) for index in range(5)]
    entries[4] = {"board_name": "BOARD-4", "unique_id": {"bad": "id"}}
    text = json.dumps({"version": {"major": 1, "minor": 0}, "status": 0, "boards": entries})

    boards = project(extract_array(decode(text), "boards"), BOARD_MAPPING)

    assert len(boards) == 4


def test_skipped_entries_are_logged_at_debug(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.DEBUG, logger="ocdpack.projection.projector"):
        project([{"board_name": 1}, _board_entry(1)], BOARD_MAPPING)

    assert "skipping board entry 0" in caplog.text
