from __future__ import annotations

from pathlib import Path

import pytest

from tsv_registry import cli
from tsv_registry.core import ServeConfigError, load_settings
from tsv_registry.serve import (
    IMMUTABLE_CACHE_CONTROL,
    STABLE_CACHE_CONTROL,
    ServeConfig,
    cache_control_for,
    parse_addr,
)


@pytest.mark.parametrize(
    ("addr", "expected"),
    [
        ("127.0.0.1:8787", ("127.0.0.1", 8787)),
        (":9000", ("0.0.0.0", 9000)),
        ("localhost:80", ("localhost", 80)),
        ("[::1]:8080", ("::1", 8080)),
    ],
)
def test_parse_addr(addr: str, expected: tuple[str, int]) -> None:
    assert parse_addr(addr) == expected


@pytest.mark.parametrize("addr", ["8787", "host:port", "host:70000", ""])
def test_parse_addr_rejects_bad_values(addr: str) -> None:
    with pytest.raises(ServeConfigError):
        parse_addr(addr)


def test_addr_round_trip() -> None:
    assert ServeConfig.from_args(directory="d", addr="[::1]:8080").addr == "[::1]:8080"
    assert ServeConfig.from_args(directory="d", addr="127.0.0.1:1").addr == "127.0.0.1:1"


@pytest.mark.parametrize(
    ("path", "expected"),
    [
        ("/registry.tsv", STABLE_CACHE_CONTROL),
        ("/registry.0123456789abcdef.tsv", IMMUTABLE_CACHE_CONTROL),
        ("/registry.anything.tsv", IMMUTABLE_CACHE_CONTROL),
        ("/other.tsv", None),
        ("/sub/registry.tsv", None),
        ("/registry.tsv.bak", None),
    ],
)
def test_cache_control_for(path: str, expected: str | None) -> None:
    assert cache_control_for(path) == expected


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv("TSV_REGISTRY_SERVE_DIR", raising=False)
    monkeypatch.delenv("TSV_REGISTRY_SERVE_ADDR", raising=False)
    load_settings.cache_clear()
    yield
    load_settings.cache_clear()


def test_serve_main_starts_uvicorn(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    calls: list[dict[str, object]] = []

    def fake_run(app: object, **kwargs: object) -> None:
        calls.append({"app": app, **kwargs})

    monkeypatch.setattr(cli.uvicorn, "run", fake_run)

    assert cli.serve_main(["-dir", str(tmp_path), "-addr", "127.0.0.1:9999"]) == 0

    assert len(calls) == 1
    assert calls[0]["host"] == "127.0.0.1"
    assert calls[0]["port"] == 9999
    assert calls[0]["log_config"] is None
    assert "127.0.0.1:9999" in capsys.readouterr().out


def test_serve_main_missing_directory(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setattr(cli.uvicorn, "run", lambda *a, **k: pytest.fail("must not start"))

    assert cli.serve_main(["--dir", str(tmp_path / "nope")]) == 1
    assert "does not exist" in capsys.readouterr().err


def test_serve_main_bad_addr(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(cli.uvicorn, "run", lambda *a, **k: pytest.fail("must not start"))

    assert cli.serve_main(["-dir", str(tmp_path), "-addr", "nope"]) == 2
