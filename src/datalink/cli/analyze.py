"""Record analysis CLI command."""

from __future__ import annotations

import importlib.util
import inspect
import sys
from pathlib import Path

from ..codec.schema import Leaf, RecordSchema
from ..models.base import BaseRecord
from ..utils.sizing import compact_length, direct_length, encoded_bits, field_sizes


def analyze_file(file_path: Path) -> None:
    """Analyze all BaseRecord classes in a Python file.

    Args:
        file_path: Path to Python file containing record definitions
    """
    # Load the Python module
    spec = importlib.util.spec_from_file_location("user_module", file_path)
    if spec is None or spec.loader is None:
        raise ValueError(f"Could not load module from {file_path}")

    module = importlib.util.module_from_spec(spec)
    sys.modules["user_module"] = module
    spec.loader.exec_module(module)

    # Only include classes defined in this file (not imported)
    record_classes = [
        obj
        for _name, obj in inspect.getmembers(module, inspect.isclass)
        if obj is not BaseRecord
        and issubclass(obj, BaseRecord)
        and obj.__module__ == "user_module"
    ]

    if not record_classes:
        print(f"No BaseRecord classes found in {file_path}")
        return

    print("|" * 7, "datalink: Text-Safe Bit-Packing Codec", "|" * 7)
    print(f"{len(record_classes)} record{'s' if len(record_classes) != 1 else ''} loaded.")
    print("Field sizes are in bits unless otherwise noted.")
    print()

    for record_class in record_classes:
        analyze_record_class(record_class)


def analyze_record_class(record_class: type[BaseRecord]) -> None:
    """Analyze a single record class and print a breakdown.

    Args:
        record_class: Record class to analyze
    """
    schema = RecordSchema.from_model(record_class)
    sizes = field_sizes(schema)
    total_bits = encoded_bits(schema)

    print(f"{'=' * 19} {record_class.__name__} ({schema.mode} mode) {'=' * 19}")
    print(f"Declared size of record: {total_bits} bits in {schema.flat_size} values")

    if schema.is_complex:
        config = schema.config
        envelope_bits = schema.flat_size * (config.complex_width_bits + config.complex_value_bits)
        print(f"        envelope{'.' * 30}{envelope_bits} bits")
    else:
        print(f"        compact payload{'.' * 23}{compact_length(schema)} glyphs max")
        print(f"        direct payload{'.' * 24}{direct_length(schema)} glyphs")
    if schema.max_length is not None:
        print(f"Allowed maximum length of payload: {schema.max_length} glyphs")
    print()

    print(f"{'-' * 28} Body {'-' * 28}")
    for i, field in enumerate(schema.fields, 1):
        field_desc = f"{i}. {field.name}"
        bits = sizes[field.name]
        if isinstance(field, Leaf):
            info = f"[0-{field.max_value}]"
        else:
            info = f"(x{field.count})"
        dots_needed = 54 - len(field_desc) - len(str(bits)) - len(" bits") - len(info) - 1
        print(f"        {field_desc}{'.' * max(1, dots_needed)}{bits} bits {info}")

    print()
