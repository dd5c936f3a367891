"""Rich terminal display for devpulse."""

from __future__ import annotations

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

console = Console()

CODING_COLOR = "blue"
BREAK_COLOR = "red"


def format_minutes(minutes: float) -> str:
    """Format minutes: 45 -> '45m', 90 -> '1h 30m', 12.5 -> '12.5m'."""
    if minutes < 0:
        return "-" + format_minutes(-minutes)
    if minutes < 60:
        if minutes == int(minutes):
            return f"{int(minutes)}m"
        return f"{minutes:.1f}m"
    hours, rest = divmod(int(round(minutes)), 60)
    if rest == 0:
        return f"{hours}h"
    return f"{hours}h {rest}m"


def format_score(score: float | None) -> str:
    """One decimal place, or N/A when nothing was logged today."""
    if score is None:
        return "N/A"
    return f"{score:.1f}"


def print_dashboard(data: dict) -> None:
    """Print today's score, streaks and today's minutes."""
    current_streak = data.get("current_streak", 0)
    longest_streak = data.get("longest_streak", 0)

    lines: list[str] = []
    lines.append("")
    lines.append(
        f"  [bold blue]Today's Productivity Score: {format_score(data.get('todays_score'))}[/]"
    )
    lines.append("")
    lines.append(
        f"  \U0001f525 Current Streak: {current_streak} days  |  "
        f"Longest Streak: {longest_streak} days"
    )
    lines.append(
        f"  [{CODING_COLOR}]Coding today: {format_minutes(data.get('today_coding', 0))}[/]  |  "
        f"[{BREAK_COLOR}]Breaks today: {data.get('today_breaks', 0)}[/]"
    )
    lines.append("")
    lines.append(
        f"  Logged days: {data.get('days_logged', 0)}  |  "
        f"Sessions: {data.get('total_sessions', 0)}"
    )
    lines.append(f"  Total coding: {format_minutes(data.get('total_coding', 0))}")
    lines.append("")

    panel = Panel(
        "\n".join(lines),
        title="[bold]DEVPULSE[/]",
        box=box.ROUNDED,
        border_style="blue",
        width=60,
    )
    console.print(panel)


def print_daily_table(rows: list[dict]) -> None:
    """Print one row per logged day."""
    table = Table(
        title="Daily Metrics",
        box=box.ROUNDED,
        border_style="blue",
        show_header=True,
        header_style="bold",
    )
    table.add_column("Date", style="bold")
    table.add_column("Coding", justify="right", style=CODING_COLOR)
    table.add_column("Break", justify="right", style=BREAK_COLOR)
    table.add_column("Total", justify="right")
    table.add_column("Sessions", justify="right")
    table.add_column("Avg Session", justify="right")
    table.add_column("Score", justify="right")

    for row in rows:
        table.add_row(
            row["date"],
            format_minutes(row["coding_minutes"]),
            format_minutes(row["break_minutes"]),
            format_minutes(row["total_minutes"]),
            str(row["coding_session_count"]),
            format_minutes(row["average_session_length"]),
            format_score(row["daily_score"]),
        )

    console.print(table)


def print_sessions(sessions: list[dict], period: str) -> None:
    """Print a session list, newest first."""
    titles = {"all": "All Sessions", "today": "Today's Sessions", "week": "This Week's Sessions"}
    if not sessions:
        console.print("[dim]No sessions in this period.[/]")
        return

    table = Table(
        title=f"{titles.get(period, period)} ({len(sessions)})",
        box=box.ROUNDED,
        show_header=True,
        header_style="bold",
    )
    table.add_column("Started")
    table.add_column("Type")
    table.add_column("Duration", justify="right")

    for s in sessions:
        color = BREAK_COLOR if s["type"] == "break" else CODING_COLOR
        table.add_row(s["start_time"], f"[{color}]{s['type'].capitalize()}[/]", f"{s['duration_minutes']} min")

    console.print(table)


def print_no_data_message() -> None:
    """Print a friendly message when no session data exists."""
    console.print(
        Panel(
            "No sessions found.\n\n"
            "Point devpulse at your sessions export:\n"
            "  [bold]devpulse config --sessions-file /path/to/sessions.json[/]",
            title="[bold]DEVPULSE[/]",
            box=box.ROUNDED,
            border_style="yellow",
            width=60,
        )
    )


def print_invalid_input(message: str) -> None:
    console.print(f"[red]Invalid session data: {message}[/]")


def print_config_result(result: dict) -> None:
    console.print(f"[green]Sessions file set to:[/] {result['sessions_file']}")
