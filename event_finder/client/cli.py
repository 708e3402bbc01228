"""
Command line client for Event Finder.

Lists, shows, creates, joins and deletes events through the REST API,
and can start the API server itself.
"""
import logging
from typing import Optional

import click
import uvicorn
from rich.console import Console

from event_finder.client.api import APIError, EventAPI, make_http_client
from event_finder.client.context import EventContext
from event_finder.client.forms import CreateEventForm, min_datetime
from event_finder.client.views import (
    render_create_preview,
    render_error_banner,
    render_event_detail,
    render_event_list,
    render_form_errors,
)
from event_finder.core import config
from event_finder.core.logging_config import configure_logging

logger = logging.getLogger(__name__)


def _context(ctx: click.Context) -> EventContext:
    return ctx.obj["context"]


def _console(ctx: click.Context) -> Console:
    return ctx.obj["console"]


def _fail(ctx: click.Context) -> None:
    render_error_banner(_console(ctx), _context(ctx).state.error)
    ctx.exit(1)


@click.group()
@click.option("--api-url", envvar="EVENT_FINDER_API_URL", default=None, help="Base URL of the API (ends in /api).")
@click.option("--verbose", "-v", is_flag=True, help="Log every API request.")
@click.pass_context
def main(ctx: click.Context, api_url: Optional[str], verbose: bool):
    """Discover, create and join events."""
    configure_logging("DEBUG" if verbose else None)
    ctx.ensure_object(dict)
    if "api" not in ctx.obj:
        ctx.obj["api"] = EventAPI(make_http_client(api_url))
        ctx.call_on_close(ctx.obj["api"].close)
    ctx.obj.setdefault("console", Console())
    ctx.obj["context"] = EventContext(ctx.obj["api"])


@main.command("list")
@click.option("--location", "-l", default="", help="Only events whose location contains this text.")
@click.option("--search", "-s", default="", help="Only events whose title or description contains this text.")
@click.pass_context
def list_events(ctx: click.Context, location: str, search: str):
    """List upcoming events."""
    context = _context(ctx)
    context.set_filters(location=location, search=search)
    context.load_events(context.state.filters.as_params())
    if context.state.error:
        _fail(ctx)
    render_event_list(_console(ctx), context.state.events, context.state.filters)


@main.command("show")
@click.argument("event_id")
@click.pass_context
def show_event(ctx: click.Context, event_id: str):
    """Show one event with its capacity."""
    try:
        response = _context(ctx).api.get_event(event_id)
    except APIError as e:
        render_error_banner(_console(ctx), e.message or "Failed to load event")
        ctx.exit(1)
    render_event_detail(_console(ctx), response["data"])


@main.command("join")
@click.argument("event_id")
@click.pass_context
def join_event(ctx: click.Context, event_id: str):
    """Take a spot in an event."""
    try:
        response = _context(ctx).join_event(event_id)
    except APIError:
        _fail(ctx)
    console = _console(ctx)
    console.print(f"[green]{response.get('message', 'Joined')}[/]")
    render_event_detail(console, response["data"])


@main.command("delete")
@click.argument("event_id")
@click.option("--yes", "-y", is_flag=True, help="Skip the confirmation prompt.")
@click.pass_context
def delete_event(ctx: click.Context, event_id: str, yes: bool):
    """Delete an event."""
    if not yes and not click.confirm(
        "Are you sure you want to delete this event? This action cannot be undone."
    ):
        _console(ctx).print("Cancelled")
        return
    try:
        response = _context(ctx).delete_event(event_id)
    except APIError:
        _fail(ctx)
    _console(ctx).print(f"[green]{response.get('message', 'Deleted')}:[/] {response['data']['title']}")


@main.command("create")
@click.option("--title", help="3 to 100 characters.")
@click.option("--description", help="10 to 500 characters.")
@click.option("--location", help="Where the event takes place.")
@click.option("--date", help="ISO date and time, e.g. 2030-05-01T18:00 (UTC).")
@click.option("--max-participants", help="1 to 1000.")
@click.pass_context
def create_event(ctx: click.Context, title, description, location, date, max_participants):
    """Create a new event, prompting for any field not given."""
    console = _console(ctx)
    form = CreateEventForm()
    prompts = (
        ("title", title, "Event title"),
        ("description", description, "Description"),
        ("location", location, "Location"),
        ("date", date, f"Date & time (earliest {min_datetime()})"),
        ("max_participants", max_participants, "Maximum participants"),
    )
    for name, value, label in prompts:
        if value is None:
            value = click.prompt(label, default="", show_default=False)
        form.update(name, value)

    if not form.validate():
        render_form_errors(console, form.errors)
        ctx.exit(1)

    render_create_preview(console, form)
    try:
        response = _context(ctx).create_event(form.to_payload())
    except APIError:
        _fail(ctx)
    event = response["data"]
    console.print(f"[green]{response.get('message', 'Event created')}[/] ({event['id']})")


@main.command("health")
@click.pass_context
def health(ctx: click.Context):
    """Check that the API is up."""
    try:
        response = _context(ctx).api.health_check()
    except APIError as e:
        render_error_banner(_console(ctx), e.message)
        ctx.exit(1)
    _console(ctx).print(f"{response['message']} ({response['eventsCount']} events)")


@main.command("serve")
@click.option("--host", default=config.HOST, show_default=True)
@click.option("--port", default=config.PORT, show_default=True, type=int)
@click.option("--reload", is_flag=True, help="Restart on code changes.")
def serve(host: str, port: int, reload: bool):
    """Run the API server."""
    configure_logging()
    uvicorn.run("event_finder.main:app", host=host, port=port, reload=reload)


if __name__ == "__main__":
    main()
