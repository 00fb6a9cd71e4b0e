"""Typer CLI interface for the TVDB client."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any

import typer

from tvdb.api.errors import TVDBError
from tvdb.api.models import RequestOptions
from tvdb.client import TheTVDB
from tvdb.config.settings import Settings
from tvdb.display import (
    build_episodes_table,
    build_series_table,
    build_updates_table,
    print_data,
    print_table,
)

app = typer.Typer(
    name="tvdb",
    help="Look up series, episodes and updates on TheTVDB.",
    no_args_is_help=True,
)

logger = logging.getLogger(__name__)


def _get_settings() -> Settings:
    """Load settings, warning on config errors."""
    try:
        return Settings()
    except Exception as e:
        logger.warning("Failed to load config: %s", e)
        logger.warning("Using default settings")
        return Settings.model_construct()


def _open_client(settings: Settings) -> TheTVDB:
    return TheTVDB.from_settings(settings)


def _run(ctx: typer.Context, call: Callable[[TheTVDB], Awaitable[Any]]) -> Any:
    """Run one client call to completion, exiting 1 on any API failure."""
    settings: Settings = ctx.obj
    if not settings.api_key:
        typer.echo(
            "No API key configured. Set TVDB_API_KEY or api_key in "
            f"{Settings.CONFIG_PATH}",
            err=True,
        )
        raise typer.Exit(1)

    async def _call() -> Any:
        async with _open_client(settings) as client:
            return await call(client)

    try:
        return asyncio.run(_call())
    except TVDBError as e:
        logger.debug("Request failed", exc_info=True)
        message = e.message if not e.details else f"{e.message} ({e.details})"
        typer.echo(f"Error: {message}", err=True)
        raise typer.Exit(1)


def _parse_query(pairs: list[str]) -> dict[str, str | list[str]]:
    """Turn repeated 'key=value' options into a query mapping."""
    query: dict[str, str | list[str]] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise typer.BadParameter(f"Expected key=value, got '{pair}'")
        if key in query:
            existing = query[key]
            if isinstance(existing, list):
                existing.append(value)
            else:
                query[key] = [existing, value]
        else:
            query[key] = value
    return query


@app.callback()
def main(
    ctx: typer.Context,
    lang: str | None = typer.Option(
        None, "--lang", "-l", help="Language for results, e.g. 'de'"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Query TheTVDB from the command line."""
    settings = _get_settings()
    if lang:
        settings = settings.model_copy(update={"language": lang})

    level = logging.DEBUG if verbose else settings.log_level
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")
    ctx.obj = settings


@app.command()
def languages(ctx: typer.Context) -> None:
    """List the languages TheTVDB supports."""
    print_data(_run(ctx, lambda c: c.get_languages()))


@app.command()
def series(
    ctx: typer.Context,
    series_id: int = typer.Argument(..., help="TheTVDB series id"),
) -> None:
    """Show basic series information."""
    print_data(_run(ctx, lambda c: c.get_series_by_id(series_id)))


@app.command()
def episodes(
    ctx: typer.Context,
    series_id: int = typer.Argument(..., help="TheTVDB series id"),
    aired: str | None = typer.Option(
        None, "--aired", help="Only episodes first aired on YYYY-MM-DD"
    ),
) -> None:
    """List all episodes of a series."""
    if aired:
        result = _run(ctx, lambda c: c.get_episodes_by_air_date(series_id, aired))
    else:
        result = _run(ctx, lambda c: c.get_episodes_by_series_id(series_id))
    print_table(build_episodes_table(result or []))


@app.command()
def search(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Series name, e.g. 'Seinfeld'"),
) -> None:
    """Search series by name."""
    results = _run(ctx, lambda c: c.get_series_by_name(name))
    print_table(build_series_table(results or []))


@app.command()
def actors(
    ctx: typer.Context,
    series_id: int = typer.Argument(..., help="TheTVDB series id"),
) -> None:
    """List the actors of a series."""
    print_data(_run(ctx, lambda c: c.get_actors(series_id)))


@app.command()
def images(
    ctx: typer.Context,
    series_id: int = typer.Argument(..., help="TheTVDB series id"),
    key_type: str = typer.Option(
        "poster", "--key-type", "-k", help="poster, fanart, season, series"
    ),
) -> None:
    """List series images of one key type."""
    print_data(_run(ctx, lambda c: c.get_series_images(series_id, key_type)))


@app.command()
def updates(
    ctx: typer.Context,
    from_time: int = typer.Argument(..., help="Unix timestamp to start from"),
    to_time: int | None = typer.Option(None, "--to", help="Unix timestamp to stop at"),
) -> None:
    """List series updated in a time window."""
    result = _run(ctx, lambda c: c.get_updates(from_time, to_time))
    print_table(build_updates_table(result or []))


@app.command()
def get(
    ctx: typer.Context,
    path: str = typer.Argument(..., help="API path, e.g. 'series/81189/actors'"),
    query: list[str] = typer.Option(
        [], "--query", "-q", help="Query parameter as key=value, repeatable"
    ),
) -> None:
    """Run a raw GET request and print the merged data."""
    options = RequestOptions(query=_parse_query(query))
    print_data(_run(ctx, lambda c: c.send_request(path, options)))
