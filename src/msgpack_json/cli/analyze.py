"""Document analysis CLI command."""

from __future__ import annotations

from pathlib import Path

from ..codec.msgpack_json import MsgpackJson
from ..utils.sizing import size_report
from ..values import JsonArray, JsonObject, JsonValue, ValueType, loads


def analyze_file(file_path: Path, codec: MsgpackJson | None = None) -> None:
    """Analyze a JSON document and print its MessagePack size breakdown.

    Args:
        file_path: Path to a JSON file
        codec: Codec to measure with (default configuration if None)
    """
    value = loads(file_path.read_text(encoding="utf-8"))
    codec = codec if codec is not None else MsgpackJson()

    print("|" * 7, "msgpack-json: MessagePack codec for JSON", "|" * 7)
    print(f"Document: {file_path}")
    print()

    analyze_value(value, codec)


def analyze_value(value: JsonValue, codec: MsgpackJson) -> None:
    """Print size totals, per-member sizes and value counts for one document.

    Args:
        value: Document to analyze
        codec: Codec used to measure encoded sizes
    """
    report = size_report(value, codec)

    print(f"{'=' * 24} Sizes {'=' * 24}")
    print(f"MessagePack{'.' * 32}{report.msgpack_bytes} bytes")
    print(f"JSON (compact){'.' * 29}{report.json_bytes} bytes")
    print()

    # Member breakdown for top-level containers
    if isinstance(value, (JsonObject, JsonArray)) and len(value) > 0:
        print(f"{'-' * 24} Members {'-' * 23}")
        items: list[tuple[str, JsonValue]]
        if isinstance(value, JsonObject):
            items = list(value.items())
        else:
            items = [(f"[{index}]", item) for index, item in enumerate(value)]

        for i, (name, member) in enumerate(items, 1):
            member_size = len(codec.packb(member))
            field_desc = f"{i}. {name}"
            info = member.value_type.value
            dots_needed = 54 - len(field_desc) - len(str(member_size)) - len(" bytes") - len(info) - 1
            dots = "." * max(1, dots_needed)
            print(f"        {field_desc}{dots}{member_size} bytes {info}")
        print()

    counts = _count_values(value)
    print(f"{'=' * 23} Summary {'=' * 23}")
    print("Values: " + ", ".join(f"{kind.value}={count}" for kind, count in counts.items() if count))
    print(f"Compression vs JSON: {report.ratio:.1f}x smaller")
    print()


def _count_values(value: JsonValue) -> dict[ValueType, int]:
    counts: dict[ValueType, int] = {kind: 0 for kind in ValueType}
    stack = [value]
    while stack:
        current = stack.pop()
        counts[current.value_type] += 1
        if isinstance(current, JsonObject):
            stack.extend(current.values())
        elif isinstance(current, JsonArray):
            stack.extend(current)
    return counts
