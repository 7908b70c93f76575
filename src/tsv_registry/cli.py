from __future__ import annotations

import argparse
from pathlib import Path
from typing import Callable

import uvicorn
from rich.console import Console

from tsv_registry.core import (
    RegistryError,
    Settings,
    bind,
    configure_logging,
    get_logger,
    load_settings,
    new_run_id,
)
from tsv_registry.pipeline import PipelineRunner, RunContext, RunnerConfig, Stage, StageFn
from tsv_registry.serve import ServeConfig, create_app
from tsv_registry.stages import stage_parse, stage_publish, stage_validate

console = Console()
err_console = Console(stderr=True)

_BUILD_STAGES: tuple[tuple[str, Callable[[RunContext], object]], ...] = (
    ("parse", stage_parse),
    ("validate", stage_validate),
    ("publish", stage_publish),
)


def _with_status(stage_id: str, fn: StageFn) -> StageFn:
    def _run_with_status(ctx: RunContext):
        with err_console.status(f"[bold]{stage_id}[/]", spinner="dots"):
            return fn(ctx)

    return _run_with_status


def _build_stages() -> list[Stage]:
    return [
        PipelineRunner.fn(stage_id=sid, fn=_with_status(sid, fn))  # type: ignore[arg-type]
        for sid, fn in _BUILD_STAGES
    ]


def _build_parser() -> argparse.ArgumentParser:
    return argparse.ArgumentParser(
        prog="tsv-registry-build",
        description=(
            "Convert the table in ./registry.md into dist/registry.tsv and "
            "dist/registry.<version>.tsv."
        ),
    )


def build_main(argv: list[str] | None = None) -> int:
    _build_parser().parse_args(argv)

    s = load_settings()
    configure_logging(level=s.log_level, fmt=s.log_format)
    log = get_logger("tsv_registry.build")

    run_id = new_run_id()
    bind(run_id=run_id, command="build")

    runner = PipelineRunner(
        stages=_build_stages(), cfg=RunnerConfig(stop_on_failure=True), logger=log
    )
    try:
        exit_code, report = runner.run(
            run_root=s.run_root,
            run_id=run_id,
            meta={"input_path": Path(s.input_path), "out_dir": Path(s.out_dir)},
        )
    except (OSError, RegistryError) as e:
        log.error("Build run failed before any stage ran", error=str(e))
        err_console.print(str(e), markup=False, highlight=False, soft_wrap=True)
        return 1

    if exit_code != 0:
        err = report.error
        message = err.message if err is not None else "registry build failed"
        err_console.print(message, markup=False, highlight=False, soft_wrap=True)
        return exit_code

    out = report.outputs("publish")
    for line in (
        f"Built {out['entries']} entries",
        f"version: {out['version']}",
        out["stable_path"],
        out["hashed_path"],
    ):
        console.print(line, markup=False, highlight=False, soft_wrap=True)
    return 0


def _serve_parser(s: Settings) -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="tsv-registry-serve",
        description="Serve a directory with gzip and registry cache headers.",
    )
    p.add_argument(
        "-dir", "--dir", dest="dir", default=str(s.serve_dir), help="directory to serve"
    )
    p.add_argument(
        "-addr", "--addr", dest="addr", default=s.serve_addr, help="listen address"
    )
    return p


def serve_main(argv: list[str] | None = None) -> int:
    s = load_settings()
    args = _serve_parser(s).parse_args(argv)

    try:
        cfg = ServeConfig.from_args(directory=args.dir, addr=args.addr)
    except RegistryError as e:
        err_console.print(str(e), markup=False, highlight=False)
        return 2

    if not cfg.directory.is_dir():
        err_console.print(
            f"Directory to serve does not exist: {cfg.directory}",
            markup=False,
            highlight=False,
        )
        return 1

    configure_logging(level=s.log_level, fmt=s.log_format)
    bind(command="serve")

    app = create_app(cfg)

    console.print(
        f"Serving {cfg.directory} at http://{cfg.addr}",
        markup=False,
        highlight=False,
        soft_wrap=True,
    )
    uvicorn.run(
        app,
        host=cfg.host,
        port=cfg.port,
        log_config=None,
        log_level=s.log_level.lower(),
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(build_main())
