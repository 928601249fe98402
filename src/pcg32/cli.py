from __future__ import annotations

from pathlib import Path
from typing import NoReturn

import typer

from .generator import Pcg32, Pcg32Error
from .state import GeneratorStateError, decode_state, encode_state, restore, snapshot
from .trace import init_trace_log, set_trace_enabled, trace_enabled, trace_event

app = typer.Typer(add_completion=False, help="Draw from the PCG32 generator.")

_KINDS = ("uint", "float", "double")


def _parse_int_auto(text: str) -> int:
    try:
        return int(text, 0)
    except ValueError as exc:
        raise typer.BadParameter(f"invalid integer: {text!r}") from exc


def _fail(message: str) -> NoReturn:
    typer.echo(message, err=True)
    raise typer.Exit(code=1)


def _seeded(seed: str, seq: str) -> Pcg32:
    return Pcg32.from_seed(_parse_int_auto(seed), _parse_int_auto(seq))


def _format_draw(rng: Pcg32, kind: str, bound: int | None) -> str:
    if kind == "float":
        return f"{rng.next_float():.9g}"
    if kind == "double":
        return f"{rng.next_double():.17g}"
    if bound is not None:
        return str(rng.next_uint32(bound))
    return f"0x{rng.next_uint32():08x}"


def _emit_draws(rng: Pcg32, *, count: int, kind: str, bound: str | None) -> None:
    if kind not in _KINDS:
        raise typer.BadParameter(f"kind must be one of {', '.join(_KINDS)}, got {kind!r}")
    if bound is not None and kind != "uint":
        raise typer.BadParameter(f"--bound only applies to kind uint, got {kind!r}")
    bound_value = _parse_int_auto(bound) if bound is not None else None
    try:
        for _ in range(count):
            typer.echo(_format_draw(rng, kind, bound_value))
    except Pcg32Error as exc:
        _fail(str(exc))


@app.callback()
def main_callback(
    ctx: typer.Context,
    trace: bool = typer.Option(False, "--trace", help="write a trace log (also enabled by PCG32_TRACE=1)"),
    base_dir: Path | None = typer.Option(None, help="trace log root (default: PCG32_TRACE_DIR or ./artifacts/runtime)"),
) -> None:
    if trace:
        set_trace_enabled(True)
    if trace_enabled():
        init_trace_log(base_dir=base_dir, command=ctx.invoked_subcommand or "")


@app.command("draw")
def cmd_draw(
    seed: str = typer.Option("42", help="initial state (decimal or 0x hex)"),
    seq: str = typer.Option("54", help="sequence selector / stream id"),
    count: int = typer.Option(6, min=0, help="number of values to print"),
    bound: str | None = typer.Option(None, help="draw uniformly in [0, bound) instead of 32 bits"),
    kind: str = typer.Option("uint", help="uint|float|double"),
    skip: str = typer.Option("0", help="jump this many draws before printing (negative: back)"),
) -> None:
    """Print draws from a seeded stream, one per line."""
    rng = _seeded(seed, seq)
    skip_value = _parse_int_auto(skip)
    if skip_value:
        rng.advance(skip_value)
    _emit_draws(rng, count=count, kind=kind, bound=bound)


@app.command("shuffle")
def cmd_shuffle(
    items: list[str] = typer.Argument(..., help="items to permute"),
    seed: str = typer.Option("42", help="initial state (decimal or 0x hex)"),
    seq: str = typer.Option("54", help="sequence selector / stream id"),
) -> None:
    """Print ITEMS in a seeded random order."""
    rng = _seeded(seed, seq)
    values = list(items)
    rng.shuffle(values)
    typer.echo(" ".join(values))


@app.command("state")
def cmd_state(
    seed: str = typer.Option("42", help="initial state (decimal or 0x hex)"),
    seq: str = typer.Option("54", help="sequence selector / stream id"),
    advance: str = typer.Option("0", help="jump this many draws before saving (negative: back)"),
    out: Path | None = typer.Option(None, help="also write the snapshot JSON to this file"),
) -> None:
    """Print the generator state as JSON, for `resume`."""
    rng = _seeded(seed, seq)
    delta = _parse_int_auto(advance)
    if delta:
        rng.advance(delta)
    blob = encode_state(snapshot(rng))
    if out is not None:
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_bytes(blob)
        trace_event("state_saved", path=out)
    typer.echo(blob.decode("utf-8"))


@app.command("resume")
def cmd_resume(
    snapshot_path: Path = typer.Argument(..., help="snapshot JSON written by `state --out`"),
    count: int = typer.Option(6, min=0, help="number of values to print"),
    bound: str | None = typer.Option(None, help="draw uniformly in [0, bound) instead of 32 bits"),
    kind: str = typer.Option("uint", help="uint|float|double"),
) -> None:
    """Continue a saved stream."""
    if not snapshot_path.is_file():
        _fail(f"snapshot not found: {snapshot_path}")
    try:
        rng = restore(decode_state(snapshot_path.read_bytes()))
    except GeneratorStateError as exc:
        _fail(str(exc))
    _emit_draws(rng, count=count, kind=kind, bound=bound)


def main(argv: list[str] | None = None) -> None:
    app(prog_name="pcg32", args=argv)


if __name__ == "__main__":
    main()
