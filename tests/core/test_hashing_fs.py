from __future__ import annotations

from pathlib import Path

import pytest

from tsv_registry.core import fs, hashing, json


def test_sha256_helpers(tmp_path: Path) -> None:
    assert (
        hashing.sha256_bytes(b"abc")
        == "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"
    )
    assert hashing.short_digest(b"abc") == "ba7816bf8f01cfea"

    f = tmp_path / "data.bin"
    f.write_bytes(b"abc")
    digest = hashing.sha256_file(f)
    assert digest.sha256 == hashing.sha256_bytes(b"abc")
    assert digest.bytes == 3


def test_short_digest_rejects_bad_length() -> None:
    with pytest.raises(ValueError):
        hashing.short_digest(b"abc", length=0)
    with pytest.raises(ValueError):
        hashing.short_digest(b"abc", length=65)


def test_atomic_write_bytes_creates_parents_and_replaces(tmp_path: Path) -> None:
    target = tmp_path / "a" / "b" / "sample.bin"
    fs.atomic_write_bytes(target, b"\x00\x01")
    assert target.read_bytes() == b"\x00\x01"

    fs.atomic_write_bytes(target, b"updated")
    assert target.read_bytes() == b"updated"

    leftovers = [p.name for p in target.parent.iterdir() if p.name.endswith(".tmp")]
    assert leftovers == []


def test_ensure_dir_is_idempotent(tmp_path: Path) -> None:
    d = tmp_path / "dist" / "nested"
    assert fs.ensure_dir(d) == d
    assert fs.ensure_dir(d) == d
    assert d.is_dir()
    assert fs.relpath_posix(d, tmp_path) == "dist/nested"


def test_json_helpers(tmp_path: Path) -> None:
    out = tmp_path / "sample.json"
    json.atomic_write_json(out, {"b": 1, "a": "é"})
    assert json.read_json(out) == {"a": "é", "b": 1}
    assert out.read_text(encoding="utf-8").endswith("\n")
