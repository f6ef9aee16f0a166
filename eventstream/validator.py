"""Validators deciding whether the metadata of an event is acceptable."""

from __future__ import annotations

import abc
import copy
import json
from typing import Any, Callable, Optional

from .errors import InvalidMetadata, MofkaError
from .eventbridge import EventbridgeValidator
from .jsonutil import JsonSchemaValidator


def _as_json(metadata: Any) -> Any:
    if isinstance(metadata, (str, bytes, bytearray)):
        try:
            return json.loads(metadata)
        except ValueError as ex:
            raise MofkaError(f"Could not parse metadata: {ex}") from ex
    return metadata


class Validator(abc.ABC):
    """Interface of objects that check the metadata and data of events."""

    @abc.abstractmethod
    def validate(self, metadata: Any, data: Optional[Any] = None) -> None:
        """Raise ``InvalidMetadata`` if the event is not acceptable."""

    @abc.abstractmethod
    def metadata(self) -> dict:
        """Configuration from which an identical validator can be created."""


Validator.register(EventbridgeValidator)


class DefaultValidator(Validator):
    """Validator that accepts everything."""

    def validate(self, metadata: Any, data: Optional[Any] = None) -> None:
        return None

    def metadata(self) -> dict:
        return {"type": "default"}

    @classmethod
    def create(cls, metadata: Any) -> "DefaultValidator":
        return cls()


class SchemaValidator(Validator):
    """Validator checking metadata against a JSON schema."""

    def __init__(self, schema: Any):
        self._schema = copy.deepcopy(schema)
        self._validator = JsonSchemaValidator(self._schema)

    def validate(self, metadata: Any, data: Optional[Any] = None) -> None:
        errors = self._validator.validate(_as_json(metadata))
        if errors:
            raise InvalidMetadata(
                "Metadata does not comply to required schema:\n" + "".join(errors)
            )

    def metadata(self) -> dict:
        return {"type": "schema", "schema": copy.deepcopy(self._schema)}

    @classmethod
    def create(cls, metadata: Any) -> "SchemaValidator":
        config = _as_json(metadata)
        if not isinstance(config, dict):
            raise MofkaError("Provided Metadata is not a JSON object")
        if "schema" not in config:
            raise MofkaError(
                'SchemaValidator is expecting a "schema" entry in its configuration'
            )
        return cls(config["schema"])


_FACTORIES: dict[str, Callable[[Any], Any]] = {}


def register_validator(name: str, factory: Callable[[Any], Any]) -> None:
    """Make ``factory`` build validators whose configuration has ``"type": name``."""
    if not callable(factory):
        raise TypeError("factory must be callable")
    _FACTORIES[name] = factory


def validator_from_metadata(metadata: Any):
    """Build a validator from its configuration; a missing "type" means default."""
    config = _as_json(metadata)
    if not isinstance(config, dict):
        raise MofkaError(
            "Cannot create Validator from Metadata: "
            "invalid Metadata (expected JSON object)"
        )
    if "type" not in config:
        return DefaultValidator()
    kind = config["type"]
    if not isinstance(kind, str):
        raise MofkaError(
            "Cannot create Validator from Metadata: "
            'invalid "type" field in Metadata (expected string)'
        )
    factory = _FACTORIES.get(kind)
    if factory is None:
        raise MofkaError(f'Unknown Validator type "{kind}"')
    return factory(config)


register_validator("default", DefaultValidator.create)
register_validator("schema", SchemaValidator.create)
register_validator("eventbridge", EventbridgeValidator.create)