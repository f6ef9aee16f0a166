import pytest

from eventstream.errors import MofkaError
from eventstream.jsonutil import JsonSchemaValidator, validate_is_json

SCHEMA = {
    "type": "object",
    "properties": {"x": {"type": "integer"}, "a/b": {"type": "string"}},
    "required": ["x"],
}


@pytest.mark.parametrize(
    "text",
    [
        '{"a":[1,2]}',
        '{"a":"}"}',
        r'{"a":"\"}"}',
        '[{"b":"[["}]',
        "",
    ],
)
def test_balanced_documents(text):
    assert validate_is_json(text) is True


@pytest.mark.parametrize("text", ['{"a":[1,2}', "}", "{", "[}", '{"a":"x"]'])
def test_unbalanced_documents(text):
    assert validate_is_json(text) is False


def test_valid_instance_has_no_errors():
    validator = JsonSchemaValidator(SCHEMA)
    assert validator.validate({"x": 3}) == []


def test_string_instance_is_parsed():
    validator = JsonSchemaValidator(SCHEMA)
    assert validator.validate('{"x": 3}') == []
    assert len(validator.validate('{"x": "a"}')) == 1


def test_error_message_format():
    validator = JsonSchemaValidator(SCHEMA)
    errors = validator.validate({"x": "a"})
    assert len(errors) == 1
    assert errors[0].startswith("'/x' - '\"a\"': ")


def test_pointer_escapes_slash():
    validator = JsonSchemaValidator(SCHEMA)
    errors = validator.validate({"x": 1, "a/b": 5})
    assert len(errors) == 1
    assert errors[0].startswith("'/a~1b' - '5': ")


def test_missing_required_reports_root():
    validator = JsonSchemaValidator(SCHEMA)
    errors = validator.validate({})
    assert len(errors) == 1
    assert errors[0].startswith("'' - '{}': ")


def test_schema_from_string():
    validator = JsonSchemaValidator('{"type": "array"}')
    assert validator.validate([1, 2]) == []
    assert len(validator.validate({"x": 1})) == 1


def test_invalid_schema_raises():
    with pytest.raises(MofkaError):
        JsonSchemaValidator({"type": 12})