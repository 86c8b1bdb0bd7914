"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from msgpack_json import CodecConfig, JsonValue, MsgpackJson, SmallIntCache, loads

DATA_DIR = Path(__file__).parent / "data"


def load_json(name: str) -> JsonValue:
    """Load a JSON document from tests/data."""
    return loads((DATA_DIR / name).read_text(encoding="utf-8"))


@pytest.fixture
def int_cache() -> SmallIntCache:
    """Fresh small-integer cache, isolated from the process-wide one."""
    return SmallIntCache()


@pytest.fixture
def codec(int_cache: SmallIntCache) -> MsgpackJson:
    """Codec with default settings and an isolated integer cache."""
    return MsgpackJson(CodecConfig(int_cache=int_cache))


@pytest.fixture
def sample_json() -> JsonValue:
    """Nested document covering every value kind."""
    return load_json("sample.json")


@pytest.fixture
def number_json() -> JsonValue:
    """Document with cacheable and non-cacheable integers."""
    return load_json("number.json")


@pytest.fixture
def string_json() -> JsonValue:
    """Document with configured and unconfigured strings."""
    return load_json("string.json")


@pytest.fixture
def data_dir() -> Path:
    return DATA_DIR
