"""Record schemas: named fields on top of the field list codec.

A schema is an ordered tuple of field descriptors. A descriptor is either a
Leaf (a named bounded integer) or a Composite (a fixed number of repeated
sub-records described by a nested schema).

Schemas with only leaves run in simple mode: bit widths are derived once from
each leaf's max_value and records are encoded with encode_fields().

Schemas with at least one composite run in complex mode: the record is
flattened depth-first and each value is stored with a dynamic width next to
it, inside a 'C' envelope:

    C<element count>:<encode_fields(width, value, width, value, ...)>

Width fields are complex_width_bits wide and value fields complex_value_bits
wide (5 and 16 by default). A complex schema whose leaves allow values wider
than the value field is rejected when it is built.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import (
    Any,
    Iterator,
    List,
    Mapping,
    Optional,
    Sequence,
    Type,
    Union,
    get_args,
    get_origin,
)

from pydantic import BaseModel, ValidationError
from pydantic.fields import FieldInfo

from ..config import DEFAULT_CONFIG, CodecConfig
from ..exceptions import (
    DecodeError,
    EncodeError,
    InvalidGlyph,
    PayloadOverflow,
    SchemaError,
    TruncatedInput,
    UnknownFormatDiscriminator,
    UnparsableFieldCount,
    ValueOutOfRange,
    WidthMismatch,
)
from ..tracing import TraceLogger, trace
from .alphabet import METADATA_SEPARATOR
from .base_n import decode_integer, encode_integer
from .decoder import decode_fields
from .encoder import encode_fields
from .selector import FormatTag, resolve_format


def bits_required(max_value: int) -> int:
    """Calculate the minimum number of bits needed to represent max_value.

    This is max(1, ceil(log2(max_value + 1))), computed exactly.

    Raises:
        SchemaError: If max_value is negative
    """
    if max_value < 0:
        raise SchemaError(f"max_value must be >= 0, got {max_value}")
    return max(1, int(max_value).bit_length())


@dataclass(frozen=True)
class Leaf:
    """A named non-negative integer field bounded by max_value.

    Attributes:
        name: Field name
        max_value: Largest value the field may hold (inclusive)
    """

    name: str
    max_value: int

    def __post_init__(self) -> None:
        if not self.name:
            raise SchemaError("Field name must not be empty")
        if isinstance(self.max_value, bool) or not isinstance(self.max_value, int):
            raise SchemaError(
                f"Field {self.name}: max_value must be an int, got {self.max_value!r}"
            )
        if self.max_value < 0:
            raise SchemaError(f"Field {self.name}: max_value must be >= 0, got {self.max_value}")

    @property
    def bit_width(self) -> int:
        return bits_required(self.max_value)


@dataclass(frozen=True)
class Composite:
    """A fixed number of repeated sub-records.

    Attributes:
        name: Field name
        count: Number of sub-records (part of the schema, not the payload)
        fields: Nested descriptors of each sub-record
    """

    name: str
    count: int
    fields: Sequence["FieldDescriptor"]

    def __post_init__(self) -> None:
        if not self.name:
            raise SchemaError("Field name must not be empty")
        if isinstance(self.count, bool) or not isinstance(self.count, int) or self.count < 1:
            raise SchemaError(f"Field {self.name}: count must be an int >= 1, got {self.count!r}")
        object.__setattr__(self, "fields", normalize_descriptors(self.fields))

    @property
    def flat_size(self) -> int:
        """Number of leaf values this composite contributes."""
        return self.count * _flat_size(self.fields)


FieldDescriptor = Union[Leaf, Composite]


def normalize_descriptor(descriptor: Any) -> FieldDescriptor:
    """Turn a descriptor or a descriptor mapping into a Leaf or Composite.

    Mappings follow the table layout used by existing callers::

        {"name": "race", "maxValue": 10}
        {"name": "gear", "type": "table", "count": 14, "schema": [...]}

    "max_value" and "fields" are accepted as aliases. A missing "type" means
    "number"; a table without "count" repeats once.

    Raises:
        SchemaError: If the descriptor is malformed
    """
    if isinstance(descriptor, (Leaf, Composite)):
        return descriptor
    if not isinstance(descriptor, Mapping):
        raise SchemaError(f"Unsupported field descriptor {descriptor!r}")

    name = descriptor.get("name")
    if not isinstance(name, str):
        raise SchemaError(f"Field descriptor needs a string name, got {descriptor!r}")

    kind = descriptor.get("type", "number")
    if kind == "number":
        max_value = descriptor.get("maxValue", descriptor.get("max_value"))
        if max_value is None:
            raise SchemaError(f"Field {name}: number fields require maxValue")
        return Leaf(name, max_value)

    if kind == "table":
        nested = descriptor.get("schema", descriptor.get("fields"))
        if nested is None:
            raise SchemaError(f"Field {name}: table fields require a nested schema")
        return Composite(name, descriptor.get("count", 1), nested)

    raise SchemaError(f"Field {name}: unknown field type {kind!r}")


def normalize_descriptors(descriptors: Sequence[Any]) -> tuple[FieldDescriptor, ...]:
    """Normalize a descriptor list and check names are unique at this level."""
    if isinstance(descriptors, (str, bytes, Mapping)):
        raise SchemaError(f"Expected a sequence of field descriptors, got {descriptors!r}")

    fields = tuple(normalize_descriptor(descriptor) for descriptor in descriptors)
    if not fields:
        raise SchemaError("A schema needs at least one field")

    seen: set[str] = set()
    for field in fields:
        if field.name in seen:
            raise SchemaError(f"Duplicate field name {field.name!r}")
        seen.add(field.name)
    return fields


def _flat_size(fields: Sequence[FieldDescriptor]) -> int:
    return sum(1 if isinstance(field, Leaf) else field.flat_size for field in fields)


def _flat_leaves(fields: Sequence[FieldDescriptor]) -> Iterator[Leaf]:
    """Yield leaves in flattened order, repeating composites count times."""
    for field in fields:
        if isinstance(field, Leaf):
            yield field
        else:
            for _ in range(field.count):
                yield from _flat_leaves(field.fields)


def _lookup(record: Any, name: str, path: str) -> Any:
    if isinstance(record, BaseModel):
        if name not in type(record).model_fields:
            raise EncodeError(f"Field {path} is required but missing")
        value = getattr(record, name)
    elif isinstance(record, Mapping):
        if name not in record:
            raise EncodeError(f"Field {path} is required but missing")
        value = record[name]
    else:
        raise EncodeError(
            f"Expected a mapping or pydantic model for {path}, got {type(record).__name__}"
        )

    if value is None:
        raise EncodeError(f"Field {path} is required but got None")
    return value


def _flatten(
    record: Any, fields: Sequence[FieldDescriptor], prefix: str, out: List[int]
) -> None:
    """Append record's leaf values to out, depth-first in schema order."""
    for field in fields:
        path = prefix + field.name
        value = _lookup(record, field.name, path)

        if isinstance(field, Leaf):
            if not isinstance(value, int):
                raise EncodeError(f"Field {path}: expected int, got {type(value).__name__}")
            if value < 0 or value > field.max_value:
                raise ValueOutOfRange(
                    f"Field {path}: value {value} out of bounds [0, {field.max_value}]"
                )
            out.append(int(value))
            continue

        if isinstance(value, (str, bytes, Mapping)) or not isinstance(value, Sequence):
            raise EncodeError(f"Field {path}: expected a list of {field.count} records")
        if len(value) != field.count:
            raise EncodeError(
                f"Field {path}: expected {field.count} records, got {len(value)}"
            )
        for index, item in enumerate(value):
            _flatten(item, field.fields, f"{path}[{index}].", out)


def _expand(values: Iterator[int], fields: Sequence[FieldDescriptor]) -> dict[str, Any]:
    """Rebuild a nested record from flattened values, depth-first."""
    result: dict[str, Any] = {}
    for field in fields:
        if isinstance(field, Leaf):
            result[field.name] = next(values)
        else:
            result[field.name] = [_expand(values, field.fields) for _ in range(field.count)]
    return result


class RecordSchema:
    """Encoder/decoder for named records.

    Example:
        >>> schema = create_schema([
        ...     Leaf("alliance", 3),
        ...     Leaf("race", 10),
        ...     Leaf("cpLevel", 3600),
        ... ])
        >>> schema.bit_widths
        [2, 4, 12]
        >>> schema.decode(schema.encode({"alliance": 2, "race": 7, "cpLevel": 455}))
        {'alliance': 2, 'race': 7, 'cpLevel': 455}
    """

    def __init__(
        self,
        fields: Sequence[Any],
        *,
        config: CodecConfig | None = None,
        logger: TraceLogger = None,
        model_class: Optional[Type[BaseModel]] = None,
        max_length: Optional[int] = None,
    ) -> None:
        """Initialize a schema.

        Args:
            fields: Leaf/Composite descriptors or descriptor mappings
            config: Alphabet and codec thresholds (default: DEFAULT_CONFIG)
            logger: Optional logger receiving DEBUG traces for every call
            model_class: Pydantic model that decode() should return
            max_length: Longest payload encode() may produce, in glyphs

        Raises:
            SchemaError: If a descriptor is malformed, or a complex schema has a
                leaf whose max_value exceeds the envelope value field
        """
        self.fields: tuple[FieldDescriptor, ...] = normalize_descriptors(fields)
        self.config = config or DEFAULT_CONFIG
        self.model_class = model_class
        self.max_length = max_length
        self._logger = logger

        self.is_complex = any(isinstance(field, Composite) for field in self.fields)
        # Declared widths of every flattened leaf, derived once
        self._leaves: tuple[Leaf, ...] = tuple(_flat_leaves(self.fields))
        self.bit_widths: list[int] = [leaf.bit_width for leaf in self._leaves]

        if self.is_complex:
            limit = self.config.complex_max_value
            for leaf in self._leaves:
                if leaf.max_value > limit:
                    raise SchemaError(
                        f"Field {leaf.name}: max_value {leaf.max_value} exceeds the "
                        f"{self.config.complex_value_bits}-bit envelope limit {limit}"
                    )

    @classmethod
    def from_model(
        cls,
        model_class: Type[BaseModel],
        *,
        config: CodecConfig | None = None,
        logger: TraceLogger = None,
    ) -> RecordSchema:
        """Create a schema from a pydantic model.

        Supported fields are bool, int with ge=0 and le=, and list[SubModel]
        with min_length == max_length. decode() returns model instances.

        Raises:
            SchemaError: If a field cannot be expressed as a descriptor
        """
        return cls(
            descriptors_from_model(model_class),
            config=config,
            logger=logger,
            model_class=model_class,
            max_length=getattr(model_class, "datalink_max_length", None),
        )

    @property
    def mode(self) -> str:
        return "complex" if self.is_complex else "simple"

    @property
    def flat_size(self) -> int:
        """Number of values a record flattens to."""
        return len(self._leaves)

    def flatten(self, record: Any) -> list[int]:
        """Flatten a record into its ordered value list.

        Raises:
            EncodeError: If a field is missing or a composite has the wrong length
            ValueOutOfRange: If a value exceeds its leaf's max_value
        """
        values: list[int] = []
        _flatten(record, self.fields, "", values)
        return values

    def expand(self, values: Sequence[int]) -> dict[str, Any]:
        """Re-nest a flat value list into a record dict.

        Raises:
            WidthMismatch: If len(values) differs from flat_size
            PayloadOverflow: If a value exceeds its leaf's max_value
        """
        if len(values) != self.flat_size:
            raise WidthMismatch(f"Expected {self.flat_size} values, got {len(values)}")
        for index, (leaf, value) in enumerate(zip(self._leaves, values)):
            if value > leaf.max_value:
                raise PayloadOverflow(
                    f"Value {index} ({leaf.name}): decoded {value} exceeds max {leaf.max_value}"
                )
        return _expand(iter(values), self.fields)

    def encode(self, record: Any, *, logger: TraceLogger = None) -> str:
        """Encode a record (mapping or pydantic model) to a payload.

        Raises:
            EncodeError: If the record is missing fields, has the wrong shape,
                or the payload exceeds max_length
            ValueOutOfRange: If a value exceeds its leaf's max_value
        """
        logger = logger or self._logger
        values = self.flatten(record)
        trace(logger, "Schema: flattened %d values (%s mode)", len(values), self.mode)

        if self.is_complex:
            payload = self._encode_complex(values, logger)
        else:
            payload = encode_fields(values, self.bit_widths, config=self.config, logger=logger)

        if self.max_length is not None and len(payload) > self.max_length:
            raise EncodeError(
                f"Encoded payload ({len(payload)} glyphs) exceeds max_length={self.max_length}"
            )
        return payload

    def decode(self, payload: str, *, logger: TraceLogger = None) -> Any:
        """Decode a payload back to a record.

        Returns:
            A dict (composites as lists of dicts), or a model_class instance
            when the schema was built from a pydantic model

        Raises:
            DecodeError: If the payload is malformed or doesn't fit the schema
        """
        logger = logger or self._logger
        if self.is_complex:
            values = self._decode_complex(payload, logger)
        else:
            values = decode_fields(payload, self.bit_widths, config=self.config, logger=logger)

        record = self.expand(values)
        if self.model_class is None:
            return record

        try:
            return self.model_class.model_validate(record)
        except ValidationError as e:
            raise DecodeError(f"Failed to construct {self.model_class.__name__}: {e}") from e

    def _encode_complex(self, values: Sequence[int], logger: TraceLogger) -> str:
        config = self.config
        interleaved: list[int] = []
        widths: list[int] = []

        for value in values:
            width = max(config.complex_min_width, bits_required(value))
            interleaved.extend((width, value))
            widths.extend((config.complex_width_bits, config.complex_value_bits))

        body = encode_fields(interleaved, widths, config=config, logger=logger)
        header = FormatTag.COMPLEX.value + encode_integer(len(values), config.alphabet)
        trace(logger, "Schema: complex envelope %s, body %d glyphs", header, len(body))
        return header + METADATA_SEPARATOR + body

    def _decode_complex(self, payload: str, logger: TraceLogger) -> list[int]:
        config = self.config

        if resolve_format(payload) is not FormatTag.COMPLEX:
            raise UnknownFormatDiscriminator(
                f"Complex schema payload must start with {FormatTag.COMPLEX.value!r} "
                f"and carry a {METADATA_SEPARATOR!r} separator"
            )

        separator = payload.index(METADATA_SEPARATOR)
        count_text = payload[1:separator]
        if not count_text:
            raise UnparsableFieldCount("Complex envelope has no element count")
        try:
            count = decode_integer(count_text, config.alphabet)
        except InvalidGlyph as e:
            raise UnparsableFieldCount(f"Unreadable element count {count_text!r}") from e

        if count != self.flat_size:
            raise WidthMismatch(
                f"Envelope holds {count} values, schema expects {self.flat_size}"
            )

        body = payload[separator + 1:]
        if not body:
            raise TruncatedInput("Complex envelope has no data")
        trace(logger, "Schema: decoding %d values from complex envelope", count)

        # Even positions hold widths, odd positions hold values
        widths = [
            config.complex_value_bits if index % 2 else config.complex_width_bits
            for index in range(count * 2)
        ]
        decoded = decode_fields(body, widths, config=config, logger=logger)

        values: list[int] = []
        for index in range(count):
            width, value = decoded[2 * index], decoded[2 * index + 1]
            if value.bit_length() > width:
                raise PayloadOverflow(
                    f"Value {index}: {value} is wider than its recorded {width} bits"
                )
            values.append(value)
        return values

    def __repr__(self) -> str:
        names = ", ".join(field.name for field in self.fields)
        return f"RecordSchema({names}; {self.mode})"


def create_schema(
    descriptors: Sequence[Any],
    *,
    config: CodecConfig | None = None,
    logger: TraceLogger = None,
    max_length: Optional[int] = None,
) -> RecordSchema:
    """Create a record schema from descriptors.

    Args:
        descriptors: Leaf/Composite instances or descriptor mappings
        config: Alphabet and codec thresholds
        logger: Optional logger receiving DEBUG traces
        max_length: Longest payload encode() may produce, in glyphs

    Returns:
        RecordSchema with encode() and decode()

    Examples:
        ```python
        from datalink import Composite, Leaf, create_schema

        gear = create_schema([
            Composite("gear", 14, [
                Leaf("id", 65535),
                Leaf("glyph", 255),
                Leaf("param1", 4095),
                Leaf("param2", 4095),
            ])
        ])
        payload = gear.encode({"gear": items})
        ```
    """
    return RecordSchema(descriptors, config=config, logger=logger, max_length=max_length)


def descriptors_from_model(model_class: Type[BaseModel]) -> tuple[FieldDescriptor, ...]:
    """Introspect a pydantic model into field descriptors.

    Raises:
        SchemaError: If a field type or constraint is unsupported
    """
    return normalize_descriptors(
        [
            _descriptor_from_field(name, field_info)
            for name, field_info in model_class.model_fields.items()
        ]
    )


def _constraints(field_info: FieldInfo) -> dict[str, Any]:
    """Collect ge/le/min_length/max_length from pydantic v2 metadata."""
    found: dict[str, Any] = {}
    for constraint in field_info.metadata:
        for key in ("ge", "le", "min_length", "max_length"):
            if hasattr(constraint, key):
                found[key] = getattr(constraint, key)
    return found


def _descriptor_from_field(name: str, field_info: FieldInfo) -> FieldDescriptor:
    annotation = field_info.annotation
    if annotation is None:
        raise SchemaError(f"Field {name} has no type annotation")

    constraints = _constraints(field_info)

    if annotation is bool:
        return Leaf(name, 1)

    if annotation is int:
        if constraints.get("ge", 0) != 0 or constraints.get("le") is None:
            raise SchemaError(
                f"Field {name}: integer fields require le= (and ge=0 if set) "
                f"for compact encoding."
            )
        return Leaf(name, int(constraints["le"]))

    if get_origin(annotation) is list:
        args = get_args(annotation)
        item_type = args[0] if args else None
        if not (isinstance(item_type, type) and issubclass(item_type, BaseModel)):
            raise SchemaError(f"Field {name}: lists must hold pydantic models, got {item_type}")

        min_length = constraints.get("min_length")
        max_length = constraints.get("max_length")
        if max_length is None or min_length != max_length:
            raise SchemaError(
                f"Field {name}: variable-length lists not supported. "
                f"Use a fixed length (min_length == max_length)."
            )
        return Composite(name, max_length, descriptors_from_model(item_type))

    raise SchemaError(
        f"Field {name}: unsupported type {annotation}. "
        f"Supported: bool, bounded int, fixed-length list of models."
    )
