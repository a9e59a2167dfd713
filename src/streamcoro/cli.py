"""CLI implementation for streamcoro."""

import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional

import typer

from .coroutines import Read, ReadExact, ReadToEnd, WriteAll
from .io import drive, drive_async, open_stream, open_stream_async

app = typer.Typer(add_completion=False, help="Copy files, URLs or stdin to stdout through stream coroutines.")


def _make_coroutine(size: Optional[int], capacity: int):
    if size is None:
        return ReadToEnd(capacity)
    return ReadExact(size, capacity)


def _read_source_sync(src: str, size: Optional[int], capacity: int) -> bytes:
    source = typer.get_binary_stream("stdin") if src == "-" else src
    stream = open_stream(source)
    try:
        return drive(_make_coroutine(size, capacity), stream).value
    finally:
        stream.close()


async def _read_source(src: str, size: Optional[int], capacity: int) -> bytes:
    source = typer.get_binary_stream("stdin") if src == "-" else src
    stream = await open_stream_async(source)
    try:
        return (await drive_async(_make_coroutine(size, capacity), stream)).value
    finally:
        await stream.close()


async def _batch_read(sources: list[str], size: Optional[int], capacity: int) -> list:
    """Asynchronously read a list of sources, keeping failures as exceptions."""
    tasks = [_read_source(src, size, capacity) for src in sources]
    return await asyncio.gather(*tasks, return_exceptions=True)


@app.command()
def main(
    files: list[str] = typer.Argument(None, help="Files or URLs to copy, or '-' for stdin"),
    size: Optional[int] = typer.Option(None, "--bytes", min=0, help="Read exactly N bytes from each source"),
    capacity: int = typer.Option(Read.DEFAULT_CAPACITY, "--capacity", min=1, help="Read buffer capacity in bytes"),
    output: Optional[Path] = typer.Option(None, "-o", "--output", help="Write to PATH instead of stdout"),
    sync: bool = typer.Option(False, "--sync", help="Force synchronous I/O"),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Log coroutine progression to stderr"),
):
    """Copy one or many local paths, URLs or stdin to a single sink."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, stream=sys.stderr,
                            format="%(levelname)s %(name)s: %(message)s")

    sources = list(files or [])
    if not sources:
        typer.echo("No input sources given.", err=True)
        raise typer.Exit(code=1)

    results: list = []
    if sync:
        for src in sources:
            try:
                res = _read_source_sync(src, size, capacity)
            except Exception as e:
                res = e
            results.append(res)
    else:
        results = asyncio.run(_batch_read(sources, size, capacity))

    # open output sink
    sink = open_stream(output, "wb") if output else open_stream(typer.get_binary_stream("stdout"), "wb")
    failed = False
    try:
        for src, res in zip(sources, results):
            if isinstance(res, Exception):
                typer.echo(f"{src}: {res}", err=True)
                failed = True
                continue
            drive(WriteAll(res), sink)
        sink.flush()
    finally:
        sink.close()

    # exit code
    if failed:
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
