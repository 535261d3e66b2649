"""Integration tests: generated schemas accept generated samples."""

import json

import pytest

from fieldschema import create_sample, generate_schema, validate
from fieldschema.annotations import create_model_sample, generate_model_schema
from fieldschema.documents import load_json, write_json
from fieldschema.models import FieldDescriptor, FieldKind, SchemaVersion, TypeDescriptor
from fieldschema.schemas import SchemaValidator, format_errors
from webapp_models import WebAppConfiguration


class TestRoundTrip:
    """Test validate(create_sample(T), generate_schema(T))."""

    def test_web_app_round_trip(self, web_app, web_app_types):
        sample = create_sample(web_app, web_app_types)
        schema = generate_schema(web_app, web_app_types)
        assert validate(sample, schema) == set()

    def test_servlet_round_trip(self, servlet_definition):
        root = servlet_definition.model_copy(update={"version": SchemaVersion.DRAFT_07, "title": "Servlet"})
        assert validate(create_sample(root), generate_schema(root)) == set()

    def test_recursive_type_round_trip(self, tree_node):
        assert validate(create_sample(tree_node), generate_schema(tree_node)) == set()

    def test_model_round_trip(self):
        sample = create_model_sample(WebAppConfiguration)
        assert validate(sample, generate_model_schema(WebAppConfiguration)) == set()

    def test_round_trip_through_files(self, tmp_path, web_app, web_app_types):
        """Test the file workflow: schema file, sample bound via $schema."""
        schema_path = write_json(generate_schema(web_app, web_app_types), tmp_path / "web.schema.json")
        sample = {"$schema": schema_path.name, **create_sample(web_app, web_app_types)}
        instance_path = write_json(sample, tmp_path / "web.json", pretty=False)

        assert SchemaValidator().validate_file(instance_path) == set()
        assert load_json(instance_path)["$schema"] == "web.schema.json"


class TestViolations:
    """Test violations found against generated schemas."""

    @pytest.fixture
    def schema(self, servlet_mapping):
        root = TypeDescriptor(
            name="Routes",
            version=SchemaVersion.DRAFT_07,
            title="Routes",
            fields=(
                FieldDescriptor(name="name", required=True),
                FieldDescriptor(name="port", kind=FieldKind.NUMBER, required=True),
                FieldDescriptor(name="mapping", kind=FieldKind.OBJECT, item_type="ServletMapping"),
                FieldDescriptor(name="url", pattern="^/.*"),
            ),
        )
        return generate_schema(root, {"ServletMapping": servlet_mapping})

    def test_two_missing_required(self, schema):
        errors = validate({}, schema)
        assert format_errors(errors) == [
            "'#': required property 'name' is missing",
            "'#': required property 'port' is missing",
        ]

    def test_mixed_violations(self, schema):
        instance = json.loads('{"name": "api", "port": "80", "url": "api", "mapping": []}')
        assert format_errors(validate(instance, schema)) == [
            "'mapping': invalid type. Expected 'object' but found 'array'",
            "'port': invalid type. Expected 'number' but found 'string'",
            "'url': string value 'api' does not match pattern '^/.*'",
        ]

    def test_valid_instance(self, schema):
        instance = {"name": "api", "port": 80, "url": "/api", "mapping": {"anything": True}}
        assert validate(instance, schema) == set()
