"""Tests for planogram document schema, loading, saving and adaptation."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from planogram.application.config import (
    ArrangementConfigSchema,
    ConfigError,
    config_to_arrangement,
    config_to_plan_entries,
    config_to_planogram,
    config_to_scale,
    load_arrangement_plan,
    load_planogram,
    load_planogram_from_dict,
    planogram_to_config,
    save_planogram,
)
from planogram.application.config.loader import _format_json_path
from planogram.domain.value_objects import ArrangementConfig, LengthScale


@pytest.fixture
def document_data() -> dict[str, Any]:
    return {
        "schema_version": "1.0",
        "scale": 5,
        "shelf": {"width": 120, "rows": [{"height": 40, "depth": 50}, {"height": 60, "depth": 40}]},
        "types": [{"id": "box", "name": "Box", "w": 20, "h": 30, "d": 10}],
        "items": [
            {"id": "a", "type_id": "box", "row": 1, "x": 10, "z": 0, "group": "g"},
            {"id": "b", "type_id": "box"},
        ],
    }


class TestFormatJsonPath:
    """Tests for the JSON path formatter."""

    def test_nested_path(self) -> None:
        assert _format_json_path(("items", 3, "stack_layer")) == "items[3].stack_layer"

    def test_plain_path(self) -> None:
        assert _format_json_path(("shelf", "width")) == "shelf.width"

    def test_leading_index(self) -> None:
        assert _format_json_path((0, "facing")) == "[0].facing"


class TestLoadFromDict:
    """Tests for schema validation."""

    def test_valid_document(self, document_data: dict[str, Any]) -> None:
        document = load_planogram_from_dict(document_data)
        assert document.scale == 5
        assert len(document.shelf.rows) == 2
        assert document.items[1].row is None
        assert document.types[0].color == "#6aa8ff"

    def test_minimal_document(self) -> None:
        document = load_planogram_from_dict({"shelf": {"width": 100, "rows": [{"height": 40, "depth": 50}]}})
        assert document.schema_version == "1.0"
        assert document.scale == 4.0
        assert document.items == []

    def test_unknown_field_rejected(self, document_data: dict[str, Any]) -> None:
        document_data["shelf"]["color"] = "oak"
        with pytest.raises(ConfigError) as exc_info:
            load_planogram_from_dict(document_data)
        assert exc_info.value.error_type == "validation"
        assert exc_info.value.details[0]["path"] == "shelf.color"

    def test_negative_stack_layer_path(self, document_data: dict[str, Any]) -> None:
        document_data["items"][0]["stack_layer"] = -1
        with pytest.raises(ConfigError) as exc_info:
            load_planogram_from_dict(document_data)
        assert exc_info.value.details[0]["path"] == "items[0].stack_layer"
        assert "items[0].stack_layer" in str(exc_info.value)

    def test_unsupported_version(self, document_data: dict[str, Any]) -> None:
        document_data["schema_version"] = "2.0"
        with pytest.raises(ConfigError, match="Unsupported schema version"):
            load_planogram_from_dict(document_data)

    def test_duplicate_item_ids(self, document_data: dict[str, Any]) -> None:
        document_data["items"][1]["id"] = "a"
        with pytest.raises(ConfigError) as exc_info:
            load_planogram_from_dict(document_data)
        assert exc_info.value.details[0]["path"] == "(root)"
        assert "Duplicate item ids: a" in exc_info.value.details[0]["message"]

    def test_duplicate_type_ids(self, document_data: dict[str, Any]) -> None:
        document_data["types"].append(dict(document_data["types"][0]))
        with pytest.raises(ConfigError, match="Duplicate product type ids"):
            load_planogram_from_dict(document_data)

    def test_scale_below_minimum(self, document_data: dict[str, Any]) -> None:
        document_data["scale"] = 0.1
        with pytest.raises(ConfigError):
            load_planogram_from_dict(document_data)

    def test_shelf_needs_a_row(self, document_data: dict[str, Any]) -> None:
        document_data["shelf"]["rows"] = []
        with pytest.raises(ConfigError):
            load_planogram_from_dict(document_data)

    def test_dangling_type_reference_allowed(self, document_data: dict[str, Any]) -> None:
        document_data["items"][0]["type_id"] = "gone"
        assert load_planogram_from_dict(document_data).items[0].type_id == "gone"


class TestLoadFromFile:
    """Tests for file handling errors."""

    def test_file_not_found(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError) as exc_info:
            load_planogram(tmp_path / "missing.json")
        assert exc_info.value.error_type == "file_not_found"

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "broken.json"
        path.write_text('{"shelf": {\n  "width": 100,\n}', encoding="utf-8")
        with pytest.raises(ConfigError) as exc_info:
            load_planogram(path)
        assert exc_info.value.error_type == "json_parse"
        assert exc_info.value.details[0]["line"] == 3

    def test_save_and_load(self, tmp_path: Path, document_data: dict[str, Any]) -> None:
        planogram = config_to_planogram(load_planogram_from_dict(document_data))
        path = tmp_path / "out.json"
        save_planogram(path, planogram, LengthScale(5))

        saved = json.loads(path.read_text(encoding="utf-8"))
        assert saved["schema_version"] == "1.0"
        assert saved["items"][0]["group"] == "g"
        assert config_to_planogram(load_planogram(path)) == planogram

    def test_save_to_missing_directory(self, tmp_path: Path, document_data: dict[str, Any]) -> None:
        planogram = config_to_planogram(load_planogram_from_dict(document_data))
        with pytest.raises(ConfigError) as exc_info:
            save_planogram(tmp_path / "nope" / "out.json", planogram)
        assert exc_info.value.error_type == "file_write_error"


class TestAdapter:
    """Tests for schema to domain conversion."""

    def test_config_to_planogram(self, document_data: dict[str, Any]) -> None:
        planogram = config_to_planogram(load_planogram_from_dict(document_data))
        assert planogram.shelf.width == 120
        assert planogram.shelf.rows[1].height == 60
        item = planogram.get_item("a")
        assert (item.row, item.x, item.group) == (1, 10, "g")
        assert planogram.type_of(item).name == "Box"

    def test_config_to_scale(self, document_data: dict[str, Any]) -> None:
        assert config_to_scale(load_planogram_from_dict(document_data)) == LengthScale(5)

    def test_planogram_to_config(self, document_data: dict[str, Any]) -> None:
        planogram = config_to_planogram(load_planogram_from_dict(document_data))
        document = planogram_to_config(planogram)
        assert document.scale == 4.0
        assert [i.id for i in document.items] == ["a", "b"]

    def test_config_to_arrangement(self) -> None:
        schema = ArrangementConfigSchema(facing=2, gap_display=4, capacity=3)
        assert config_to_arrangement(schema) == ArrangementConfig(
            facing=2, gap_display=4, capacity=3, stack=1
        )


class TestArrangementPlan:
    """Tests for loading and adapting arrangement plans."""

    def test_load_plan(self, tmp_path: Path) -> None:
        path = tmp_path / "plan.json"
        path.write_text(
            json.dumps(
                {
                    "entries": [
                        {"type_id": "box", "facing": 2, "capacity": 3},
                        {"type_id": "wall", "gap_display": 8},
                    ]
                }
            ),
            encoding="utf-8",
        )
        entries = config_to_plan_entries(load_arrangement_plan(path))
        assert entries == [
            ("box", ArrangementConfig(facing=2, capacity=3)),
            ("wall", ArrangementConfig(gap_display=8)),
        ]

    def test_plan_needs_entries(self, tmp_path: Path) -> None:
        path = tmp_path / "plan.json"
        path.write_text('{"entries": []}', encoding="utf-8")
        with pytest.raises(ConfigError) as exc_info:
            load_arrangement_plan(path)
        assert exc_info.value.error_type == "validation"
        assert exc_info.value.details[0]["path"] == "entries"
        assert str(exc_info.value).startswith("Plan validation failed:")

    def test_plan_entry_path_in_error(self, tmp_path: Path) -> None:
        path = tmp_path / "plan.json"
        path.write_text('{"entries": [{"type_id": "box", "facing": 0}]}', encoding="utf-8")
        with pytest.raises(ConfigError) as exc_info:
            load_arrangement_plan(path)
        assert exc_info.value.details[0]["path"] == "entries[0].facing"

    def test_missing_plan_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError) as exc_info:
            load_arrangement_plan(tmp_path / "missing.json")
        assert exc_info.value.error_type == "file_not_found"
        assert "Plan file not found" in str(exc_info.value)
