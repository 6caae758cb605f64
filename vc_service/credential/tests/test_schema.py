import json

import pytest

from ..error import CredentialSchemaError
from ..schema import CredentialSchemaRegistry

SCHEMA_ID = "https://example.org/schemas/person.json"
PERSON_SCHEMA = {
    "$schema": "https://json-schema.org/draft/2019-09/schema",
    "$id": SCHEMA_ID,
    "type": "object",
    "properties": {
        "name": {"type": "string"},
        "age": {"type": "integer", "minimum": 0},
    },
    "required": ["name"],
}


@pytest.fixture()
def registry():
    yield CredentialSchemaRegistry()


class TestCredentialSchemaRegistry:
    def test_register_and_validate(self, registry):
        assert registry.register(PERSON_SCHEMA) == SCHEMA_ID
        assert registry.schema_ids == [SCHEMA_ID]
        registry.validate(SCHEMA_ID, {"name": "Cai", "age": 42})

    def test_register_uses_id(self, registry):
        schema = {"id": "urn:schema:plain", "type": "object"}
        assert registry.register(schema) == "urn:schema:plain"

    def test_register_rejects(self, registry):
        with pytest.raises(CredentialSchemaError):
            registry.register({"type": "object"})
        with pytest.raises(CredentialSchemaError):
            registry.register({"$id": SCHEMA_ID, "type": 12})
        with pytest.raises(CredentialSchemaError):
            registry.register(["not", "an", "object"])

    def test_validate_failures(self, registry):
        registry.register(PERSON_SCHEMA)
        with pytest.raises(CredentialSchemaError) as exc:
            registry.validate(SCHEMA_ID, {"age": -1})
        assert "name" in exc.value.message
        assert "$.age" in exc.value.message

        with pytest.raises(CredentialSchemaError):
            registry.validate("https://example.org/unknown.json", {"name": "Cai"})

    def test_load_files(self, registry, tmp_path):
        json_file = tmp_path / "person.json"
        json_file.write_text(json.dumps(PERSON_SCHEMA))
        yaml_file = tmp_path / "degree.yml"
        yaml_file.write_text(
            "$id: https://example.org/schemas/degree.json\n"
            "type: object\n"
            "required: [degree]\n"
        )
        ids = registry.load_files([str(json_file), str(yaml_file)])
        assert ids == [SCHEMA_ID, "https://example.org/schemas/degree.json"]

        with pytest.raises(CredentialSchemaError):
            registry.load_file(str(tmp_path / "missing.json"))
