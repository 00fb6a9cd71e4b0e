"""Episode code, timestamp and text formatting utilities."""

from datetime import datetime, timezone


def fmt_episode_code(season: int | None, episode: int | None) -> str:
    """Format season/episode numbers as 'S01E02'."""
    if season is None or episode is None:
        return "-"
    return f"S{season:02d}E{episode:02d}"


def fmt_timestamp(timestamp: int | None) -> str:
    """Format a unix timestamp as 'YYYY-MM-DD HH:MM' UTC."""
    if not timestamp:
        return "-"
    dt = datetime.fromtimestamp(timestamp, tz=timezone.utc)
    return dt.strftime("%Y-%m-%d %H:%M")


def truncate(text: str | None, width: int) -> str:
    """Shorten text to ``width`` characters, ending with '...' if cut."""
    if not text:
        return ""
    text = " ".join(text.split())
    if len(text) <= width:
        return text
    return text[: max(width - 3, 0)] + "..."
