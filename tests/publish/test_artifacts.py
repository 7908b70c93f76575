from __future__ import annotations

import hashlib
from pathlib import Path

import pytest

from tsv_registry.core import PublishError
from tsv_registry.stages.publish import (
    build_tsv_body,
    content_version,
    hashed_name,
    normalize_tags,
    render_artifact,
    sanitize_field,
    write_registry_artifacts,
)
from tsv_registry.stages.validate import RegistryRow

ROWS = [
    RegistryRow(slug="alpha", title="Alpha", url="https://alpha.example", tags="a, b"),
    RegistryRow(slug="beta", title="Beta Tool", url="http://beta.example/x", tags=""),
]


def test_body_layout() -> None:
    body = build_tsv_body(ROWS)
    assert body == (
        "slug\ttitle\turl\ttags\n"
        "alpha\tAlpha\thttps://alpha.example\ta,b\n"
        "beta\tBeta Tool\thttp://beta.example/x\t\n"
    )


def test_empty_row_set_still_has_header() -> None:
    assert build_tsv_body([]) == "slug\ttitle\turl\ttags\n"


def test_tags_are_trimmed_and_empties_dropped() -> None:
    assert normalize_tags("a, ,b,,c") == "a,b,c"
    assert normalize_tags(" x , x ") == "x,x"
    assert normalize_tags("") == ""


def test_sanitize_replaces_record_and_field_separators() -> None:
    assert sanitize_field("a\tb\r\nc") == "a b  c"
    assert sanitize_field(None) == ""


def test_embedded_separators_never_break_records() -> None:
    row = RegistryRow(slug="s", title="multi\nline\ttitle", url="https://x.example", tags="t")
    lines = build_tsv_body([row]).split("\n")
    assert lines[1] == "s\tmulti line title\thttps://x.example\tt"
    assert lines[2] == ""


def test_body_round_trips_through_tsv_split() -> None:
    body = build_tsv_body(ROWS)
    records = [line.split("\t") for line in body.rstrip("\n").split("\n")]
    assert records[0] == ["slug", "title", "url", "tags"]
    assert records[1:] == [
        ["alpha", "Alpha", "https://alpha.example", "a,b"],
        ["beta", "Beta Tool", "http://beta.example/x", ""],
    ]


def test_version_is_truncated_sha256_of_body_only() -> None:
    body = build_tsv_body(ROWS)
    expected = hashlib.sha256(body.encode("utf-8")).hexdigest()[:16]
    assert content_version(body) == expected
    assert render_artifact(body, expected) == f"#v={expected}\n{body}".encode("utf-8")


def test_version_changes_with_any_field() -> None:
    changed = [ROWS[0], RegistryRow(slug="beta", title="Beta Tool!", url=ROWS[1].url)]
    assert content_version(build_tsv_body(ROWS)) != content_version(build_tsv_body(changed))


def test_write_registry_artifacts(tmp_path: Path) -> None:
    out_dir = tmp_path / "dist"
    body = build_tsv_body(ROWS)
    out = write_registry_artifacts(out_dir=out_dir, body=body, entries=len(ROWS))

    assert out.stable_path == out_dir / "registry.tsv"
    assert out.hashed_path == out_dir / hashed_name(out.version)
    assert out.stable_path.read_bytes() == out.hashed_path.read_bytes()
    assert out.stable_path.read_bytes() == render_artifact(body, out.version)
    assert out.bytes == len(out.stable_path.read_bytes())


def test_rewriting_is_idempotent(tmp_path: Path) -> None:
    out_dir = tmp_path / "dist"
    body = build_tsv_body(ROWS)
    first = write_registry_artifacts(out_dir=out_dir, body=body, entries=2)
    second = write_registry_artifacts(out_dir=out_dir, body=body, entries=2)

    assert first.version == second.version
    assert sorted(p.name for p in out_dir.iterdir()) == [
        hashed_name(first.version),
        "registry.tsv",
    ]


def test_write_failure_raises_publish_error(tmp_path: Path) -> None:
    blocker = tmp_path / "dist"
    blocker.write_text("a file where the directory should be")
    with pytest.raises(PublishError):
        write_registry_artifacts(out_dir=blocker, body="slug\ttitle\turl\ttags\n", entries=0)
