"""Metadata validation against event patterns in the Eventbridge format."""

from __future__ import annotations

import copy
import json
import re
import string
from typing import Any, Callable, Iterable, Optional

from .errors import InvalidMetadata, MofkaError

Matcher = Callable[[Any], bool]

_ASCII_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)
_MISSING = object()


def _lower(text: str) -> str:
    return text.translate(_ASCII_LOWER)


def _is_primitive(value: Any) -> bool:
    return value is None or isinstance(value, (str, bool, int, float))


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _json_equal(a: Any, b: Any) -> bool:
    """Compare two JSON values, keeping booleans distinct from numbers."""
    if isinstance(a, bool) or isinstance(b, bool):
        return isinstance(a, bool) and isinstance(b, bool) and a == b
    if _is_number(a) and _is_number(b):
        return a == b
    if isinstance(a, list) and isinstance(b, list):
        return len(a) == len(b) and all(_json_equal(x, y) for x, y in zip(a, b))
    if isinstance(a, dict) and isinstance(b, dict):
        return a.keys() == b.keys() and all(_json_equal(a[k], b[k]) for k in a)
    if type(a) is not type(b):
        return False
    return a == b


def _dump(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"), sort_keys=True, ensure_ascii=False)


def _any_of(conditions: Iterable[Matcher]) -> Matcher:
    conditions = tuple(conditions)
    return lambda value: any(cond(value) for cond in conditions)


def _all_of(conditions: Iterable[Matcher]) -> Matcher:
    conditions = tuple(conditions)
    return lambda value: all(cond(value) for cond in conditions)


def _nested_value(data: Any, key: str) -> Any:
    """Follow a dot-separated path of keys; return ``_MISSING`` if absent."""
    tokens = key.split(".")
    if tokens[-1] == "":
        tokens.pop()
    current = data
    for token in tokens:
        if not isinstance(current, dict) or token not in current:
            return _MISSING
        current = current[token]
    return current


def _on_key(key: str, func: Matcher) -> Matcher:
    def check(data: Any) -> bool:
        value = _nested_value(data, key)
        return value is not _MISSING and func(value)

    return check


def _match_key_value(key: str, expected: Any) -> Matcher:
    return _on_key(key, lambda value: _json_equal(value, expected))


def _match_anything_but(pattern: Any) -> Matcher:
    if _is_primitive(pattern):
        return lambda value: not _json_equal(value, pattern)
    if isinstance(pattern, list):
        if not all(_is_primitive(p) for p in pattern):
            raise MofkaError(
                'Invalid Eventbridge "anything-but" rule: '
                "list should contain only primitive types"
            )
        excluded = tuple(pattern)
        return lambda value: not any(_json_equal(value, p) for p in excluded)
    func = _match_rule(pattern)
    return lambda value: not func(value)


def _extract_affixes(pattern: Any, rule_name: str) -> tuple[bool, list[str]]:
    prefix = f'Invalid Eventbridge "{rule_name}" rule: '
    if isinstance(pattern, str):
        return False, [pattern]
    if isinstance(pattern, list):
        if not all(isinstance(p, str) for p in pattern):
            raise MofkaError(prefix + "list of prefixes should contain only strings")
        return False, list(pattern)
    if isinstance(pattern, dict):
        if len(pattern) != 1 or "equals-ignore-case" not in pattern:
            raise MofkaError(
                prefix + 'only "equals-ignore-case" is allowed as sub-pattern'
            )
        inner = pattern["equals-ignore-case"]
        if isinstance(inner, str):
            return True, [_lower(inner)]
        affixes = []
        if isinstance(inner, list):
            for item in inner:
                if not isinstance(item, str):
                    raise MofkaError(
                        prefix
                        + 'list in "equals-ignore-case" should contain only strings'
                    )
                affixes.append(_lower(item))
        return True, affixes
    raise MofkaError(prefix + "pattern should be a string, a list, or an object")


def _match_affix(pattern: Any, rule_name: str, at_start: bool) -> Matcher:
    ignore_case, affixes = _extract_affixes(pattern, rule_name)
    affixes = tuple(affixes)

    def check(value: Any) -> bool:
        if not isinstance(value, str):
            return False
        if ignore_case:
            value = _lower(value)
        if at_start:
            return any(value.startswith(a) for a in affixes)
        return any(value.endswith(a) for a in affixes)

    return check


def _match_equals_ignore_case(pattern: Any) -> Matcher:
    if isinstance(pattern, str):
        expected = _lower(pattern)
        return lambda value: isinstance(value, str) and _lower(value) == expected
    if isinstance(pattern, list):
        if not all(isinstance(p, str) for p in pattern):
            raise MofkaError(
                'Invalid Eventbridge "equals-ignore-case" rule: '
                "list should contain only strings"
            )
        possible = frozenset(_lower(p) for p in pattern)
        return lambda value: isinstance(value, str) and _lower(value) in possible
    raise MofkaError(
        'Invalid Eventbridge "equals-ignore-case" rule: '
        "pattern should be a string or a list of strings"
    )


_NUMERIC_OPERATORS: dict[str, Callable[[float, float], bool]] = {
    "=": lambda a, b: a == b,
    ">": lambda a, b: a > b,
    ">=": lambda a, b: a >= b,
    "<": lambda a, b: a < b,
    "<=": lambda a, b: a <= b,
}


def _match_numeric(pattern: Any) -> Matcher:
    if not isinstance(pattern, list) or len(pattern) % 2 != 0:
        raise MofkaError(
            'Invalid Eventbridge "numeric" rule: '
            "pattern should be a list of even number of elements"
        )
    conditions = []
    for op, operand in zip(pattern[::2], pattern[1::2]):
        if not isinstance(op, str):
            raise MofkaError(
                'Invalid Eventbridge "numeric" rule: operator should be a string'
            )
        if not _is_number(operand):
            raise MofkaError(
                'Invalid Eventbridge "numeric" rule: operand should be a number'
            )
        compare = _NUMERIC_OPERATORS.get(op)
        if compare is None:
            raise MofkaError(
                f'Invalid Eventbridge "numeric" rule: unknown operator "{op}"'
            )
        bound = float(operand)
        conditions.append(
            lambda value, compare=compare, bound=bound: _is_number(value)
            and compare(float(value), bound)
        )
    return _all_of(conditions)


def _match_or(pattern: Any) -> Matcher:
    if not isinstance(pattern, list) or not all(isinstance(c, dict) for c in pattern):
        raise MofkaError(
            'Invalid Eventbridge "$or" rule: pattern should be a list of objects'
        )
    return _any_of(compile_pattern(condition) for condition in pattern)


def _match_wildcard(pattern: Any) -> Matcher:
    if not isinstance(pattern, str):
        raise MofkaError('Invalid Eventbridge "wildcard" rule: pattern should be a string')
    segments = [segment.replace("*", ".*") for segment in pattern.split("\\\\")]
    try:
        regex = re.compile("\\\\".join(segments))
    except re.error as ex:
        raise MofkaError(f'Invalid Eventbridge "wildcard" rule: {ex}') from ex
    return lambda value: isinstance(value, str) and regex.fullmatch(value) is not None


_RULES: tuple[tuple[str, Callable[[Any], Matcher]], ...] = (
    ("anything-but", _match_anything_but),
    ("prefix", lambda p: _match_affix(p, "prefix", at_start=True)),
    ("suffix", lambda p: _match_affix(p, "suffix", at_start=False)),
    ("equals-ignore-case", _match_equals_ignore_case),
    ("numeric", _match_numeric),
    ("$or", _match_or),
    ("wildcard", _match_wildcard),
)


def _match_rule(rule: Any) -> Matcher:
    if isinstance(rule, dict):
        for name, build in _RULES:
            if name in rule:
                return build(rule[name])
    raise MofkaError(f"Invalid Eventbridge pattern: unexpected rule: {_dump(rule)}")


def _match_exists(key: str, should_exist: Any) -> Matcher:
    if not isinstance(should_exist, bool):
        raise MofkaError('Invalid Eventbridge "exists" rule: expected boolean value')
    return lambda data: should_exist == (_nested_value(data, key) is not _MISSING)


def _match_list(key: str, items: list) -> Matcher:
    has_primitives = False
    has_objects = False
    for item in items:
        if _is_primitive(item):
            has_primitives = True
            if has_objects:
                raise MofkaError(
                    "Invalid Eventbridge pattern: "
                    "cannot mix primitives with complex conditions"
                )
        elif isinstance(item, dict):
            has_objects = True
            if has_primitives:
                raise MofkaError(
                    "Invalid Eventbridge pattern: "
                    "cannot mix primitives with complex conditions"
                )
            if len(item) != 1:
                raise MofkaError(
                    "Invalid Eventbridge pattern: each rule can only have one statement"
                )
        else:
            raise MofkaError("Invalid Eventbridge pattern: expected object or primitive")
    if has_primitives:
        return _any_of(_match_key_value(key, item) for item in items)
    return _any_of(
        _match_exists(key, rule["exists"])
        if "exists" in rule
        else _on_key(key, _match_rule(rule))
        for rule in items
    )


def compile_pattern(pattern: Any) -> Matcher:
    """Turn an Eventbridge pattern into a predicate over JSON values."""
    if not isinstance(pattern, dict):
        raise MofkaError("Invalid Eventbridge pattern: expected object")
    conditions = []
    for key, value in pattern.items():
        if _is_primitive(value):
            conditions.append(_match_key_value(key, value))
        elif isinstance(value, dict):
            conditions.append(_on_key(key, compile_pattern(value)))
        else:
            conditions.append(_match_list(key, value))
    return _all_of(conditions)


def _as_json(metadata: Any) -> Any:
    if isinstance(metadata, (str, bytes, bytearray)):
        try:
            return json.loads(metadata)
        except ValueError as ex:
            raise MofkaError(f"Could not parse metadata: {ex}") from ex
    return metadata


class EventbridgeValidator:
    """Validator accepting only metadata that matches an Eventbridge pattern."""

    def __init__(self, schema: dict):
        self._schema = copy.deepcopy(schema)
        self._matcher = compile_pattern(self._schema)

    def validate(self, metadata: Any, data: Optional[Any] = None) -> None:
        """Raise ``InvalidMetadata`` unless the metadata matches the pattern."""
        if not self._matcher(_as_json(metadata)):
            raise InvalidMetadata("Metadata object does not satisfy eventbridge pattern")

    def metadata(self) -> dict:
        """Configuration from which an identical validator can be created."""
        return {"type": "eventbridge", "schema": copy.deepcopy(self._schema)}

    @classmethod
    def create(cls, metadata: Any) -> "EventbridgeValidator":
        config = _as_json(metadata)
        if not isinstance(config, dict) or "schema" not in config:
            raise InvalidMetadata(
                'Metadata object does not contain a "schema" field for EventbridgeValidator'
            )
        schema = config["schema"]
        if not isinstance(schema, dict):
            raise InvalidMetadata(
                '"schema" field in EventbridgeValidator configuration should be an object'
            )
        return cls(schema)