"""Tests for CLI tool."""

from __future__ import annotations

import json
import subprocess
import sys
from pathlib import Path

import msgpack


def run_cli(*args: str, stdin: bytes | None = None) -> subprocess.CompletedProcess[bytes]:
    return subprocess.run(
        [sys.executable, "-m", "msgpack_json.cli.main", *args],
        capture_output=True,
        input=stdin,
    )


def test_cli_help() -> None:
    """Test CLI --help flag."""
    result = run_cli("--help")
    assert result.returncode == 0
    assert b"msgpack-json: MessagePack codec for JSON" in result.stdout
    assert b"encode" in result.stdout


def test_cli_version() -> None:
    """Test CLI --version flag."""
    result = run_cli("--version")
    assert result.returncode == 0
    assert b"msgpack-json 0.1.0" in result.stdout


def test_cli_no_args() -> None:
    """Test CLI with no arguments (should show help)."""
    result = run_cli()
    assert result.returncode == 0
    assert b"msgpack-json: MessagePack codec for JSON" in result.stdout


def test_cli_encode_decode(tmp_path: Path, data_dir: Path) -> None:
    """Test encoding a file and decoding it back."""
    source = data_dir / "sample.json"
    encoded = tmp_path / "sample.msgpack"

    result = run_cli("encode", str(source), "-o", str(encoded))
    assert result.returncode == 0
    assert msgpack.unpackb(encoded.read_bytes()) == json.loads(source.read_text(encoding="utf-8"))

    result = run_cli("decode", str(encoded))
    assert result.returncode == 0
    assert json.loads(result.stdout) == json.loads(source.read_text(encoding="utf-8"))


def test_cli_encode_stdout() -> None:
    """Test encoding from stdin to stdout."""
    result = run_cli("encode", "-", stdin=b'{"a": [1, true]}')
    assert result.returncode == 0
    assert result.stdout == b"\x81\xa1a\x92\x01\xc3"


def test_cli_lines(tmp_path: Path) -> None:
    """Test JSON Lines in, one JSON line per value out."""
    source = tmp_path / "events.jsonl"
    source.write_text('{"n": 1}\n\n{"n": 2}\n[3]\n', encoding="utf-8")
    encoded = tmp_path / "events.mp"

    assert run_cli("encode", str(source), "--lines", "-o", str(encoded)).returncode == 0

    result = run_cli("decode", str(encoded), "--list")
    assert result.returncode == 0
    assert result.stdout.decode("utf-8").splitlines() == ['{"n":1}', '{"n":2}', "[3]"]


def test_cli_decode_indent(tmp_path: Path) -> None:
    """Test pretty-printed output to a file."""
    encoded = tmp_path / "doc.mp"
    encoded.write_bytes(msgpack.packb({"k": "v"}))
    output = tmp_path / "doc.json"

    result = run_cli("decode", str(encoded), "--indent", "2", "--cache-string", "v", "-o", str(output))
    assert result.returncode == 0
    assert output.read_text(encoding="utf-8") == '{\n  "k": "v"\n}\n'


def test_cli_decode_invalid(tmp_path: Path) -> None:
    """Test malformed MessagePack input."""
    encoded = tmp_path / "bad.mp"
    encoded.write_bytes(msgpack.packb(msgpack.ExtType(1, b"x")))

    result = run_cli("decode", str(encoded))
    assert result.returncode == 1
    assert b"Extension types are not supported" in result.stderr


def test_cli_encode_invalid_json(tmp_path: Path) -> None:
    """Test malformed JSON input."""
    source = tmp_path / "bad.json"
    source.write_text("{not json", encoding="utf-8")

    result = run_cli("encode", str(source))
    assert result.returncode == 1
    assert b"Invalid JSON" in result.stderr


def test_cli_analyze(data_dir: Path) -> None:
    """Test CLI analyze with a sample document."""
    result = run_cli("analyze", str(data_dir / "sample.json"))
    assert result.returncode == 0
    output = result.stdout.decode("utf-8")
    assert "msgpack-json: MessagePack codec for JSON" in output
    assert "MessagePack" in output
    assert "vehicle" in output
    assert "Compression vs JSON" in output


def test_cli_analyze_missing_file() -> None:
    """Test CLI analyze with missing file."""
    result = run_cli("analyze", "nonexistent.json")
    assert result.returncode == 1
    assert b"not found" in result.stderr.lower()


def test_cli_verbose_logging(data_dir: Path, tmp_path: Path) -> None:
    """Test --verbose logs progress to stderr."""
    result = run_cli("-v", "encode", str(data_dir / "number.json"), "-o", str(tmp_path / "n.mp"))
    assert result.returncode == 0
    assert b"Encoded 1 value(s)" in result.stderr
