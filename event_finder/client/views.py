from datetime import datetime
from typing import Iterable, Mapping, Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.progress_bar import ProgressBar
from rich.table import Table
from rich.text import Text

from event_finder.client.forms import CreateEventForm, min_datetime
from event_finder.client.state import Filters
from event_finder.validation import parse_date


def format_date(value) -> str:
    parsed = parse_date(value)
    if parsed is None:
        return str(value)
    return parsed.strftime("%a, %b %d, %Y, %I:%M %p UTC")


def is_full(event: Mapping) -> bool:
    return event["currentParticipants"] >= event["maxParticipants"]


def spots_left(event: Mapping) -> int:
    return max(event["maxParticipants"] - event["currentParticipants"], 0)


def fill_percent(event: Mapping) -> float:
    if not event["maxParticipants"]:
        return 100.0
    return min(event["currentParticipants"] / event["maxParticipants"] * 100, 100.0)


def capacity_label(event: Mapping) -> str:
    return f"{event['currentParticipants']}/{event['maxParticipants']} participants"


def render_error_banner(console: Console, error: Optional[str]) -> None:
    if not error:
        return
    console.print(Panel(Text.assemble(("Error: ", "bold"), error), style="red", expand=False))


def render_event_list(console: Console, events: Iterable[Mapping], filters: Optional[Filters] = None) -> None:
    events = list(events)
    if filters and (filters.location or filters.search):
        pairs = (("location", filters.location), ("search", filters.search))
        active = ", ".join(f"{name}={escape(repr(value))}" for name, value in pairs if value)
        console.print(f"[dim]Filters: {active}[/]")

    if not events:
        console.print("[yellow]No events found[/]")
        return

    table = Table(title=f"Upcoming Events ({len(events)})", show_lines=False)
    table.add_column("ID", style="dim", no_wrap=True)
    table.add_column("Title", style="bold")
    table.add_column("Date")
    table.add_column("Location")
    table.add_column("Capacity", justify="right")
    for event in events:
        capacity = capacity_label(event)
        if is_full(event):
            capacity = f"[red]{capacity} (Full)[/]"
        table.add_row(event["id"], escape(event["title"]), format_date(event["date"]), escape(event["location"]), capacity)
    console.print(table)


def render_event_detail(console: Console, event: Mapping) -> None:
    full = is_full(event)
    console.print(Text(event["title"], style="bold"))
    console.print(Text(event["description"]))
    console.print()
    console.print(f"Date:      {format_date(event['date'])}")
    console.print(f"Location:  {escape(event['location'])}")
    console.print(f"Capacity:  {capacity_label(event)}")
    console.print(ProgressBar(total=100, completed=fill_percent(event), width=40))
    if full:
        console.print("[red]Event is full[/]")
    else:
        console.print(f"[green]{spots_left(event)} spots left[/]")
    console.print(f"[dim]Created {format_date(event['createdAt'])}[/]")
    console.print()
    join_hint = "join disabled (event is full)" if full else f"event-finder join {event['id']}"
    console.print(f"[dim]Actions: {join_hint} | event-finder delete {event['id']}[/]")


def render_create_preview(console: Console, form: CreateEventForm, now: Optional[datetime] = None) -> None:
    if not form.has_content():
        console.print(f"[dim]Earliest date: {min_datetime(now)}[/]")
        return
    lines = [
        Text(form.title or "Event Title", style="bold"),
        Text(form.description or "Event description will appear here..."),
    ]
    if form.date:
        lines.append(Text(f"Date: {format_date(form.date)}"))
    if form.location:
        lines.append(Text(f"Location: {form.location}"))
    if form.max_participants:
        lines.append(Text(f"0/{form.max_participants} participants"))
    console.print(Panel(Text("\n").join(lines), title="Preview", expand=False))


def render_form_errors(console: Console, errors: Mapping[str, str]) -> None:
    for name, message in errors.items():
        console.print(f"[red]{name}: {message}[/]")
