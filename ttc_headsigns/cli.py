from __future__ import annotations

import json
import logging
import sys
from collections.abc import Callable, Iterable
from typing import Any, List, Optional

import typer

from ttc_headsigns.framework import Artifact, get_pass
from ttc_headsigns.headsigns import choose_direction, select_direction_headsign
from ttc_headsigns.overrides import default_table


def _exit_with_error(exc: Exception) -> None:
    """Print ``exc`` to stderr and exit with status 1."""
    print(f"error: {exc}", file=sys.stderr)
    raise typer.Exit(1)


def _safe(func: Callable[[], None]) -> None:
    """Invoke ``func`` and exit non-zero on any exception."""
    try:
        func()
    except Exception as exc:
        _exit_with_error(exc)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        stream=sys.stderr,
    )


def _record_meta(
    route_short_name: str | None,
    route_long_name: str | None,
    direction_id: int | None,
    from_stop_name: bool,
) -> dict[str, Any]:
    return {
        k: v
        for k, v in {
            "route_short_name": route_short_name,
            "route_long_name": route_long_name,
            "direction_id": direction_id,
            "from_stop_name": from_stop_name or None,
        }.items()
        if v is not None
    }


def _input_lines(texts: Iterable[str] | None) -> list[str]:
    """Command-line texts, or one text per stdin line."""
    provided = list(texts or [])
    return provided or [line.rstrip("\r\n") for line in sys.stdin]


def _run_clean(field: str, texts: Iterable[str] | None, meta: dict[str, Any]) -> None:
    clean_field = get_pass(field)
    for text in _input_lines(texts):
        print(clean_field(Artifact(payload=text, meta=meta)).payload)


def _run_select(first: str, second: str) -> None:
    chosen = select_direction_headsign(first, second)
    print(chosen if chosen is not None else choose_direction(first, second).value)


def _run_overrides() -> None:
    print(json.dumps(default_table().to_dict(), indent=2))


app = typer.Typer(add_completion=False, no_args_is_help=True)


@app.command()
def clean(
    field: str = typer.Argument(..., help="Registered pass name, e.g. trip_headsign"),
    texts: Optional[List[str]] = typer.Argument(
        None, help="Texts to clean; read from stdin when omitted"
    ),
    route_short_name: Optional[str] = typer.Option(None, "--route-short-name"),
    route_long_name: Optional[str] = typer.Option(None, "--route-long-name"),
    direction_id: Optional[int] = typer.Option(None, "--direction-id", min=0, max=1),
    from_stop_name: bool = typer.Option(False, "--from-stop-name"),
    verbose: bool = typer.Option(False, "--verbose"),
) -> None:
    """Clean one feed field, one output line per input text."""
    _configure_logging(verbose)
    meta = _record_meta(route_short_name, route_long_name, direction_id, from_stop_name)
    _safe(lambda: _run_clean(field, texts, meta))


@app.command("select-direction")
def select_direction(first: str, second: str) -> None:
    """Print the label that names the direction, or "undecided"."""
    _run_select(first, second)


@app.command()
def overrides(verbose: bool = typer.Option(False, "--verbose")) -> None:
    """Print the active direction override table as JSON."""
    _configure_logging(verbose)
    _safe(_run_overrides)


if __name__ == "__main__":
    app()
