# eventstream

Building blocks for an event streaming client. The package checks event
metadata, writes it to a byte stream and reads it back, picks the partition
an event goes to, and reads and writes event data that is spread over
several memory segments.

## Installation

```
pip install eventstream
```

To run the test suite:

```
pip install "eventstream[test]"
pytest
```

## Validating metadata

`eventstream.validator.validator_from_metadata` builds a validator from a
configuration dictionary (a JSON string is parsed first). The `type` field
picks the implementation:

- `default` (also used when `type` is missing): `DefaultValidator`, which
  accepts everything;
- `schema`: `SchemaValidator`, which checks the metadata against the JSON
  Schema found under `schema`;
- `eventbridge`: `eventstream.eventbridge.EventbridgeValidator`, which
  matches the metadata against the EventBridge-style pattern under `schema`.

An unknown `type` raises `eventstream.errors.MofkaError`. Metadata that does
not pass raises `eventstream.errors.InvalidMetadata`, a subclass of
`MofkaError`.

```python
from eventstream.validator import validator_from_metadata
from eventstream.errors import InvalidMetadata

validator = validator_from_metadata({
    "type": "eventbridge",
    "schema": {
        "source": ["sensor-a", "sensor-b"],
        "reading": [{"numeric": [">", 0, "<=", 100]}],
        "name": [{"prefix": {"equals-ignore-case": "temp"}}],
    },
})

validator.validate({"source": "sensor-a", "reading": 42, "name": "Temperature"}, None)

try:
    validator.validate({"source": "sensor-c", "reading": 42, "name": "temp"}, None)
except InvalidMetadata as err:
    print(err)  # Metadata object does not satisfy eventbridge pattern
```

Pattern rules: `anything-but`, `prefix`, `suffix`, `equals-ignore-case`,
`numeric` (operators `=`, `>`, `>=`, `<`, `<=`), `exists`, `wildcard` and
`$or`. A list of plain values matches any of them, a nested object matches
a nested object, and dotted keys such as `"a.b"` reach into nested objects.
A malformed pattern raises `MofkaError` when the validator is built.
`eventstream.eventbridge.compile_pattern` turns a pattern into a plain
predicate over JSON values.

Each validator's `metadata()` returns the configuration from which the same
validator can be built again.

## Serializing metadata

`DefaultSerializer` writes metadata as compact JSON (keys sorted) preceded
by its length as a little-endian 64-bit integer, and reads it back.

```python
import io
from eventstream.serializer import serializer_from_metadata

serializer = serializer_from_metadata({"type": "default"})
buffer = io.BytesIO()
serializer.serialize(buffer, {"x": 1, "y": 2.3})
buffer.seek(0)
print(serializer.deserialize(buffer))  # {'x': 1, 'y': 2.3}
```

Truncated or malformed input raises `MofkaError`.

## Selecting partitions

`DefaultPartitionSelector` cycles through the partitions in turn; a
requested partition index is taken modulo the number of partitions.
Selecting with no partitions set raises `MofkaError`.

```python
from eventstream.partition_selector import partition_selector_from_metadata

selector = partition_selector_from_metadata({})
selector.set_partitions([{}, {}, {}])
print([selector.select_partition_for({}, None) for _ in range(4)])  # [0, 1, 2, 0]
print(selector.select_partition_for({}, 7))                         # 1
```

## Custom implementations

`register_validator`, `register_serializer` and
`register_partition_selector` register a factory under a `type` name. The
factory receives the configuration dictionary and returns an instance. The
abstract base classes `Validator`, `Serializer` and `PartitionSelector` give
the methods an implementation must provide. Out of the box, serializers and
partition selectors only have the `default` type.

## Other pieces

- `eventstream.dataview.DataView` reads across a list of buffers and writes
  into them when they are writable. Closing it, directly or by leaving a
  `with` block, calls the optional free callback once with the view's
  context.
- `eventstream.future.Future` wraps a wait function and a completion test.
  A future without them is false, and calling either method on it raises
  `MofkaError`.
- `eventstream.event.Event` wraps an event implementation and gives its
  metadata, data, partition, id and acknowledgement.
- `eventstream.params` holds `BatchSize`, `MaxNumBatches`, `NumEvents` and
  the `Ordering` enum (`STRICT`, `LOOSE`).
- `eventstream.jsonutil` offers `validate_is_json`, a quick check that
  brackets and braces outside strings are balanced, and
  `JsonSchemaValidator`, which returns a list of error messages.

## What this package does not do

There is no connection to any server or storage. The package has no
drivers, topics, producers, consumers or thread pools. It provides the
pieces such a client is built from, and `Event` only wraps an event
implementation that some other code supplies.