#!/usr/bin/env python3
"""Basic usage example for msgpack-json.

Walks a small document through the codec: build a value tree, encode it,
decode it with caches configured, and stream several values through a file.
"""

from __future__ import annotations

import tempfile
from pathlib import Path

from msgpack_json import (
    MessagePacker,
    MessageUnpacker,
    MsgpackJson,
    SmallIntCache,
    dumps,
    from_python,
    size_report,
)


def main() -> None:
    """Run the basic usage example."""
    print("=" * 60)
    print("msgpack-json Basic Usage Example")
    print("=" * 60)
    print()

    print("1. Building a value tree...")
    doc = from_python(
        {
            "vehicle": "AUV-12",
            "state": "SURVEY",
            "depth_m": 42.5,
            "battery": 87,
            "serial": 2**63,
            "tags": ["sonar", "ctd"],
        }
    )
    print(f"   {dumps(doc)}")
    print()

    print("2. Encoding to MessagePack...")
    codec = (
        MsgpackJson.builder()
        .cached_strings({"SURVEY", "TRANSIT", "sonar", "ctd"})
        .int_cache(SmallIntCache())
        .max_depth(16)
        .build()
    )
    data = codec.packb(doc)
    print(f"   Encoded size: {len(data)} bytes")
    print(f"   Hex: {data.hex()}")
    print()

    print("3. Decoding twice...")
    first = codec.unpackb(data)
    second = codec.unpackb(data)
    print(f"   Equal to original: {first == doc}")
    print(f"   'state' shared between decodes: {first['state'] is second['state']}")  # type: ignore[index]
    print(f"   'battery' shared between decodes: {first['battery'] is second['battery']}")  # type: ignore[index]
    print()

    print("4. Streaming values through a file...")
    with tempfile.TemporaryDirectory() as tmp:
        path = Path(tmp) / "events.mp"
        with open(path, "wb") as sink:
            packer = MessagePacker(sink)
            codec.encode_list(packer, [{"seq": i, "depth_m": i * 2.5} for i in range(3)])
            packer.flush()
        with open(path, "rb") as source:
            for value in codec.decode_list(MessageUnpacker(source)):
                print(f"   {dumps(value)}")
    print()

    print("5. Comparing to JSON...")
    report = size_report(doc, codec)
    print(f"   MessagePack size: {report.msgpack_bytes} bytes")
    print(f"   JSON size: {report.json_bytes} bytes")
    print(f"   Compression ratio: {report.ratio:.1f}x")
    print()

    print("=" * 60)
    print("Example complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()
