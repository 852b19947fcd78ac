"""CLI implementation for ovastream."""

import json
import logging
import shutil
import sys
from enum import Enum
from pathlib import Path
from typing import Optional

import typer

from .core.model import Manifest
from .io import HttpxTransport, Opener, RequestsTransport
from .source import ImportSource

app = typer.Typer(add_completion=False, help="Read entries of OVA archives, OVF folders and URLs.")


class TransportChoice(str, Enum):
    requests = "requests"
    httpx = "httpx"
    none = "none"


def _make_transport(choice: TransportChoice):
    if choice is TransportChoice.requests:
        return RequestsTransport()
    if choice is TransportChoice.httpx:
        return HttpxTransport()
    return None


def _fail(err: Exception):
    typer.echo(f"error: {err}", err=True)
    raise typer.Exit(code=1)


def manifest_asdict(manifest: Manifest) -> dict:
    return {name: {"algorithm": c.algorithm, "value": c.value} for name, c in manifest.items()}


@app.callback()
def main(
    ctx: typer.Context,
    transport: TransportChoice = typer.Option(TransportChoice.requests, "--transport",
                                              help="Backend for http(s) sources"),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Enable debug logging"),
):
    """Read entries of OVA archives, OVF folders and URLs."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s", stream=sys.stderr)
    backend = _make_transport(transport)
    if backend is not None:
        ctx.call_on_close(backend.close)
    ctx.obj = Opener(backend)


@app.command()
def cat(
    ctx: typer.Context,
    source: str = typer.Argument(..., help="OVA/OVF path or URL"),
    entry: str = typer.Argument(..., help="Entry name (glob pattern inside OVA archives)"),
    output: Optional[Path] = typer.Option(None, "-o", "--output", help="Write to PATH instead of stdout"),
):
    """Copy one entry to stdout or a file."""
    src = ImportSource.from_path(source, ctx.obj)
    try:
        handle = src.open(entry)
    except Exception as e:
        _fail(e)

    with handle:
        try:
            sink = open(output, "wb") if output else sys.stdout.buffer
        except OSError as e:
            _fail(e)
        try:
            shutil.copyfileobj(handle, sink)
        except OSError as e:
            _fail(e)
        finally:
            if output:
                sink.close()
            else:
                sink.flush()


@app.command()
def descriptor(
    ctx: typer.Context,
    source: str = typer.Argument(..., help="OVA/OVF path or URL"),
):
    """Print the OVF descriptor."""
    src = ImportSource.from_path(source, ctx.obj)
    try:
        data = src.read_descriptor()
    except Exception as e:
        _fail(e)
    typer.echo(data.decode("utf-8", errors="replace"), nl=not data.endswith(b"\n"))


@app.command()
def manifest(
    ctx: typer.Context,
    source: str = typer.Argument(..., help="OVA/OVF path or URL"),
    jsonl: bool = typer.Option(False, "--jsonl", help="One JSON object per entry"),
):
    """Print the checksum manifest as JSON."""
    src = ImportSource.from_path(source, ctx.obj)
    try:
        mf = src.load_manifest()
    except Exception as e:
        _fail(e)

    payload = manifest_asdict(mf)
    if jsonl:
        for name, checksum in payload.items():
            typer.echo(json.dumps({"name": name, **checksum}))
    else:
        typer.echo(json.dumps(payload, indent=2))


if __name__ == "__main__":
    app()
