"""Command-line entry point for wiremock-mapping-editor.

This module exposes the journal-to-mapping workflow through Typer:
1.  `logs` lists captured requests (optionally filtered) with their keys.
2.  `draft KEY` synthesizes a draft mapping from one captured request.
3.  `mappings` / `show ID` inspect the current mapping collection.
4.  `save FILE` runs the save protocol (create or update, then persist).
5.  `delete ID` and `reset-log` cover the remaining admin operations.

Every command opens one admin API client for its duration and exits with
status 1 after printing the surfaced error message when an operation fails.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, NoReturn, Optional

import typer
from dotenv import find_dotenv, load_dotenv

from .admin_api import AdminApiClient
from .config import Settings, get_settings
from .draft_store import load_text, store_text
from .mapping.id_utils import event_key
from .mapping.synthesizer import synthesize_draft
from .mapping.time_utils import display_time
from .session import EditorSession
from .workflow import name_from_text

app = typer.Typer(help="Turn captured WireMock requests into persisted stub mappings")


def _make_client(settings: Settings) -> AdminApiClient:
    return AdminApiClient.from_settings(settings)


def _fail(message: str) -> NoReturn:
    typer.echo(message, err=True)
    raise typer.Exit(code=1)


def _run(body: Callable[[EditorSession, Settings], Awaitable[Any]]) -> None:
    settings = get_settings()

    async def _go() -> None:
        async with _make_client(settings) as client:
            await body(EditorSession(client), settings)

    asyncio.run(_go())


@app.callback()
def main() -> None:  # pragma: no cover - simple callback
    """wiremock-mapping-editor CLI.

    Reads ADMIN_BASE_URL / ADMIN_API_PREFIX (and friends) from the
    environment or a .env file.
    """
    env_file = find_dotenv(usecwd=True)
    if env_file:
        load_dotenv(env_file)
    get_settings.cache_clear()
    logging.basicConfig(level=get_settings().LOG_LEVEL)


@app.command(help="List captured requests from the journal.")
def logs(
    query: Optional[str] = typer.Option(
        None, "--query", "-q", help="Case-insensitive substring filter over the raw entry JSON"
    ),
) -> None:
    async def body(session: EditorSession, settings: Settings) -> None:
        view = session.logs
        if not await view.load():
            _fail(view.last_error.message if view.last_error else "Loading journal failed")
        view.query = query or ""
        items = view.visible()
        for entry in items:
            req = entry.request
            typer.echo(
                "\t".join(
                    (
                        display_time(entry, settings.TIMESTAMP_FORMAT),
                        req.method or "?",
                        req.url or req.absoluteUrl or "?",
                        event_key(entry),
                    )
                )
            )
        typer.echo(f"{len(items)} of {len(view.entries)} request(s)")

    _run(body)


@app.command(help="Synthesize a draft mapping from the journal entry with the given key.")
def draft(
    key: str = typer.Argument(..., help="Entry key as printed by `logs`"),
    out: Optional[str] = typer.Option(None, "--out", "-o", help="Write the draft to this file"),
) -> None:
    async def body(session: EditorSession, settings: Settings) -> None:
        view = session.logs
        if not await view.load():
            _fail(view.last_error.message if view.last_error else "Loading journal failed")
        entry = view.find(key)
        if entry is None:
            _fail(f"No journal entry with key {key!r}")
        result = synthesize_draft(entry)
        if out:
            store_text(out, result.text)
            typer.echo(f"Draft from {result.source_label} written to {out}")
        else:
            typer.echo(result.text)

    _run(body)


@app.command(help="List stub mappings.")
def mappings() -> None:
    async def body(session: EditorSession, settings: Settings) -> None:
        workflow = session.mappings
        if not await workflow.load():
            _fail(workflow.last_error.message if workflow.last_error else "Loading mappings failed")
        for m in workflow.mappings:
            typer.echo(f"{m.label}\t{m.id or '?'}")
        if not workflow.mappings:
            typer.echo("No mappings")

    _run(body)


@app.command(help="Print (or write) the document of one mapping.")
def show(
    mapping_id: str = typer.Argument(..., help="Mapping id"),
    out: Optional[str] = typer.Option(None, "--out", "-o", help="Write the document to this file"),
) -> None:
    async def body(session: EditorSession, settings: Settings) -> None:
        if not await session.open_mapping(mapping_id):
            err = session.mappings.last_error
            _fail(err.message if err else f"Mapping {mapping_id} not found")
        text = session.mappings.state.text
        if out:
            store_text(out, text)
            typer.echo(f"Mapping {mapping_id} written to {out}")
        else:
            typer.echo(text)

    _run(body)


@app.command(help="Create or update a mapping from a JSON file, then persist to disk.")
def save(
    file: str = typer.Argument(..., help="File holding the mapping JSON"),
    mapping_id: Optional[str] = typer.Option(
        None, "--id", help="Update this existing mapping instead of creating a new one"
    ),
    name: Optional[str] = typer.Option(
        None,
        "--name",
        help="Mapping name (defaults to the document's name; blank removes it)",
    ),
) -> None:
    text = load_text(file)
    if text is None:
        _fail(f"No such file: {file}")

    async def body(session: EditorSession, settings: Settings) -> None:
        workflow = session.mappings
        if mapping_id is not None and not await session.open_mapping(mapping_id):
            err = workflow.last_error
            _fail(err.message if err else f"Mapping {mapping_id} not found")
        workflow.set_text(text)
        workflow.set_name(name if name is not None else name_from_text(text))
        if not await workflow.save():
            _fail(workflow.last_error.message if workflow.last_error else "Save failed")
        typer.echo(f"{'Updated' if mapping_id else 'Created'} mapping and saved to disk")
        if workflow.last_error is not None:
            typer.echo(f"Reload failed: {workflow.last_error.message}", err=True)

    _run(body)


@app.command(help="Delete a mapping, then persist to disk.")
def delete(mapping_id: str = typer.Argument(..., help="Mapping id")) -> None:
    async def body(session: EditorSession, settings: Settings) -> None:
        workflow = session.mappings
        if not await workflow.delete(mapping_id):
            _fail(workflow.last_error.message if workflow.last_error else "Delete failed")
        typer.echo(f"Deleted mapping {mapping_id} and saved to disk")

    _run(body)


@app.command("reset-log", help="Clear the request journal.")
def reset_log() -> None:
    async def body(session: EditorSession, settings: Settings) -> None:
        view = session.logs
        if not await view.reset():
            _fail(view.last_error.message if view.last_error else "Clearing journal failed")
        typer.echo("Request journal cleared")

    _run(body)


if __name__ == "__main__":  # pragma: no cover
    app()
