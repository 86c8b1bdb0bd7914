"""Command-line interface for msgpack_json."""
