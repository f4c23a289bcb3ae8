"""Unit tests for Schema (gutenberg.models.schema): validation and file I/O."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from gutenberg.errors import SchemaLoadError
from gutenberg.models import Schema, Supply


class TestSchemaValidation:
    @pytest.mark.unit
    def test_suimarines_loads(self, suimarines: Schema):
        assert suimarines.package_name_normalized() == "suimarines"
        assert suimarines.nft.module_name() == "submarine"
        assert suimarines.requires_collection()

    @pytest.mark.unit
    def test_minimal_defaults(self, minimal_schema: Schema):
        assert not minimal_schema.requires_collection()
        assert minimal_schema.collection.royalties is None
        assert minimal_schema.nft.mint_policies.airdrop

    @pytest.mark.unit
    def test_package_name_is_lowercased(self, minimal_dict):
        minimal_dict["packageName"] = "My Package"
        assert Schema.model_validate(minimal_dict).package_name_normalized() == "my_package"

    @pytest.mark.unit
    def test_empty_package_name_rejected(self, minimal_dict):
        minimal_dict["packageName"] = "???"
        with pytest.raises(ValidationError):
            Schema.model_validate(minimal_dict)

    @pytest.mark.unit
    def test_snake_case_keys_accepted(self):
        schema = Schema.model_validate(
            {
                "package_name": "plain",
                "collection": {"name": "Plain"},
                "nft": {"type_name": "Token", "mint_cap": 5},
            }
        )
        assert schema.nft.mint_cap.supply == 5

    @pytest.mark.unit
    def test_enforce_demo_clamps_both_halves(self, suimarines: Schema):
        suimarines.enforce_demo()
        assert suimarines.collection.supply == Supply.untracked()
        assert suimarines.collection.royalties is None
        assert suimarines.nft.burn is None
        assert not suimarines.requires_collection()


class TestSchemaSerialisation:
    @pytest.mark.unit
    def test_dict_round_trip(self, suimarines: Schema):
        assert Schema.model_validate(suimarines.to_dict()) == suimarines

    @pytest.mark.unit
    def test_json_round_trip(self, suimarines: Schema):
        assert Schema.from_json(suimarines.to_json()) == suimarines

    @pytest.mark.unit
    def test_yaml_round_trip(self, suimarines: Schema):
        assert Schema.from_yaml(suimarines.to_yaml()) == suimarines

    @pytest.mark.unit
    def test_wire_keys_are_camel_case(self, suimarines: Schema):
        data = suimarines.to_dict()
        assert "packageName" in data
        assert data["nft"]["typeName"] == "Submarine"
        assert data["nft"]["fields"][0] == ["name", "string"]
        assert data["collection"]["supply"] == {"enforced": 600}


class TestSchemaLoad:
    @pytest.mark.unit
    def test_load_json_with_comments(self, tmp_path: Path, suimarines_dict):
        path = tmp_path / "schema.json"
        body = json.dumps(suimarines_dict, indent=4)
        path.write_text("// collection schema\n" + body, encoding="utf-8")
        assert Schema.load(path).nft.type_name == "Submarine"

    @pytest.mark.unit
    def test_load_yaml(self, tmp_path: Path, suimarines_dict):
        path = tmp_path / "schema.yaml"
        path.write_text(yaml.safe_dump(suimarines_dict), encoding="utf-8")
        assert Schema.load(path).collection.symbol == "SUIM"

    @pytest.mark.unit
    def test_save_then_load(self, tmp_path: Path, suimarines: Schema):
        path = suimarines.save(tmp_path / "out" / "schema.yml")
        assert Schema.load(path) == suimarines

    @pytest.mark.unit
    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(SchemaLoadError, match="file not found"):
            Schema.load(tmp_path / "missing.json")

    @pytest.mark.unit
    def test_unknown_extension(self, tmp_path: Path):
        path = tmp_path / "schema.toml"
        path.write_text("x = 1", encoding="utf-8")
        with pytest.raises(SchemaLoadError, match="unsupported file extension"):
            Schema.load(path)

    @pytest.mark.unit
    def test_invalid_json(self, tmp_path: Path):
        path = tmp_path / "schema.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(SchemaLoadError, match="invalid JSON"):
            Schema.load(path)

    @pytest.mark.unit
    def test_validation_failure_names_location(self, tmp_path: Path, suimarines_dict):
        suimarines_dict["collection"]["symbol"] = "WAYTOOLONGSYMBOL"
        path = tmp_path / "schema.json"
        path.write_text(json.dumps(suimarines_dict), encoding="utf-8")
        with pytest.raises(SchemaLoadError) as exc_info:
            Schema.load(path)
        assert "collection.symbol" in str(exc_info.value)
        assert exc_info.value.path == path

    @pytest.mark.unit
    def test_bundled_template_is_valid(self):
        from gutenberg.cli import TEMPLATE_PATH

        schema = Schema.load(TEMPLATE_PATH)
        assert schema.package_name == "suimarines"
