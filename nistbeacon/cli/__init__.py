"""
nistbeacon.cli
--------------

Small command line front-end for the beacon client.

Commands (require `typer`):
  - last         : Print the latest verified record.
  - current T    : Print the record closest to T.
  - previous T   : Print the record before T.
  - next T       : Print the record after T.
  - start-chain T: Print the start-of-chain record covering T.
  - rand         : Print integers from a generator seeded from the latest record.

T is epoch seconds or an ISO-8601 datetime (naive values are UTC).

Environment:
  NISTBEACON_* variables (see nistbeacon.config.BeaconConfig.from_env) set the
  defaults; command line options win.
  A bad value in either exits 1 with the message, as any beacon error does.

Example:
  python -m nistbeacon.cli last
  python -m nistbeacon.cli previous 2015-11-18T18:57:00 --staleness
  python -m nistbeacon.cli rand --count 5
"""

from __future__ import annotations

import json
import logging
import sys
from dataclasses import replace
from datetime import datetime
from typing import Callable, Optional, Sequence

import typer

from ..client import BeaconClient
from ..config import BeaconConfig
from ..errors import BeaconError
from ..rng import BeaconRand
from ..types.core import Record
from ..utils.time import TimeLike

__all__ = ["app", "main"]

app = typer.Typer(
    name="nistbeacon",
    help="Fetch and verify NIST Randomness Beacon records.",
    no_args_is_help=True,
    add_completion=False,
)

_state = {"base_url": None, "timeout": None}


@app.callback()
def _root(
    base_url: Optional[str] = typer.Option(None, "--base-url", help="Beacon base URL."),
    timeout: Optional[float] = typer.Option(None, "--timeout", help="HTTP timeout (seconds)."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log pipeline steps to stderr."),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    _state["base_url"] = base_url
    _state["timeout"] = timeout


def _make_client() -> BeaconClient:
    cfg = BeaconConfig.from_env()
    if _state["base_url"] is not None:
        cfg = replace(cfg, base_url=_state["base_url"])
    if _state["timeout"] is not None:
        cfg = replace(cfg, timeout_s=_state["timeout"])
    return BeaconClient(cfg)


def _parse_time(value: str) -> TimeLike:
    try:
        return int(value)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        raise typer.BadParameter(f"not epoch seconds or ISO-8601: {value!r}")


def _run(fn: Callable[[BeaconClient], Record]) -> None:
    try:
        with _make_client() as client:
            rec = fn(client)
    except (BeaconError, ValueError) as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(code=1)
    typer.echo(json.dumps(rec.to_dict(), indent=2))


_STALENESS_HELP = "Force (--staleness) or skip (--no-staleness) the freshness check."


@app.command("last")
def cmd_last(
    staleness: Optional[bool] = typer.Option(None, "--staleness/--no-staleness", help=_STALENESS_HELP),
) -> None:
    """Print the latest verified record."""
    _run(lambda c: c.last(check_staleness=staleness))


@app.command("current")
def cmd_current(
    t: str = typer.Argument(..., help="Epoch seconds or ISO-8601 datetime."),
    staleness: Optional[bool] = typer.Option(None, "--staleness/--no-staleness", help=_STALENESS_HELP),
) -> None:
    """Print the record closest to T."""
    when = _parse_time(t)
    _run(lambda c: c.current(when, check_staleness=staleness))


@app.command("previous")
def cmd_previous(
    t: str = typer.Argument(..., help="Epoch seconds or ISO-8601 datetime."),
    staleness: Optional[bool] = typer.Option(None, "--staleness/--no-staleness", help=_STALENESS_HELP),
) -> None:
    """Print the record immediately before T."""
    when = _parse_time(t)
    _run(lambda c: c.previous(when, check_staleness=staleness))


@app.command("next")
def cmd_next(
    t: str = typer.Argument(..., help="Epoch seconds or ISO-8601 datetime."),
    staleness: Optional[bool] = typer.Option(None, "--staleness/--no-staleness", help=_STALENESS_HELP),
) -> None:
    """Print the record immediately after T."""
    when = _parse_time(t)
    _run(lambda c: c.next(when, check_staleness=staleness))


@app.command("start-chain")
def cmd_start_chain(
    t: str = typer.Argument(..., help="Epoch seconds or ISO-8601 datetime."),
    staleness: Optional[bool] = typer.Option(None, "--staleness/--no-staleness", help=_STALENESS_HELP),
) -> None:
    """Print the start-of-chain record covering T."""
    when = _parse_time(t)
    _run(lambda c: c.start_chain(when, check_staleness=staleness))


@app.command("rand")
def cmd_rand(
    count: int = typer.Option(1, "--count", "-n", min=1, max=10000, help="How many integers to print."),
) -> None:
    """Print integers from a generator seeded from the latest record (NOT for secrets)."""
    try:
        with _make_client() as client:
            rng = BeaconRand.updated(client)
            for _ in range(count):
                typer.echo(str(rng.next_int()))
    except (BeaconError, ValueError) as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(code=1)


def main(argv: Optional[Sequence[str]] = None) -> None:  # pragma: no cover - thin wrapper
    """Entry-point to run as `python -m nistbeacon.cli` or the `nistbeacon` script."""
    try:
        app(args=list(argv) if argv is not None else None, prog_name="nistbeacon")
    except KeyboardInterrupt:
        typer.echo("", err=True)
        sys.exit(130)


if __name__ == "__main__":  # pragma: no cover
    main()
