"""Display helpers for series, episodes and update tables."""

from typing import Any

from rich.console import Console
from rich.table import Table

from tvdb.api.models import Episode, Series, Update
from tvdb.utils.formatting import fmt_episode_code, fmt_timestamp, truncate

console = Console()

_OVERVIEW_WIDTH = 60


def build_episodes_table(episodes: list[Episode]) -> Table:
    """Episodes sorted by season and episode number."""
    table = Table(title=f"{len(episodes)} episodes")
    table.add_column("Code", style="bold")
    table.add_column("Title")
    table.add_column("Aired")
    table.add_column("ID", justify="right")

    ordered = sorted(
        episodes,
        key=lambda e: (e.get("airedSeason") or 0, e.get("airedEpisodeNumber") or 0),
    )
    for ep in ordered:
        table.add_row(
            fmt_episode_code(ep.get("airedSeason"), ep.get("airedEpisodeNumber")),
            ep.get("episodeName") or "",
            ep.get("firstAired") or "-",
            str(ep.get("id", "")),
        )
    return table


def build_series_table(results: list[Series]) -> Table:
    table = Table(title="Search results")
    table.add_column("ID", justify="right")
    table.add_column("Name", style="bold")
    table.add_column("First aired")
    table.add_column("Network")
    table.add_column("Overview")

    for series in results:
        table.add_row(
            str(series.get("id", "")),
            series.get("seriesName") or "",
            series.get("firstAired") or "-",
            series.get("network") or "-",
            truncate(series.get("overview"), _OVERVIEW_WIDTH),
        )
    return table


def build_updates_table(updates: list[Update]) -> Table:
    table = Table(title=f"{len(updates)} updated series")
    table.add_column("Series ID", justify="right")
    table.add_column("Last updated (UTC)")

    for update in updates:
        table.add_row(
            str(update.get("id", "")),
            fmt_timestamp(update.get("lastUpdated")),
        )
    return table


def print_table(table: Table) -> None:
    console.print(table)


def print_data(data: Any) -> None:
    """Print any API payload as JSON."""
    console.print_json(data=data)
