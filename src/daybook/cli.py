"""Daybook CLI - day-keyed event calendar."""

import json
import logging
import sys
from datetime import date

import click

from .config import load_config
from .core.errors import ValidationError
from .core.events import Category, EventRecord, day_key
from .core.export import EXPORT_FORMATS
from .core.interval import format_time
from .core.month import grid_weeks, weekday_headers
from .workflows import Outcome, Session, get_export_sink, open_session

SHORT_ID = 8


def _parse_month(value: str | None) -> date:
    """Accept YYYY-MM or YYYY-MM-DD, defaulting to the current month."""
    if not value:
        return date.today().replace(day=1)
    try:
        if len(value) == 7:
            return date.fromisoformat(f"{value}-01")
        return date.fromisoformat(value).replace(day=1)
    except ValueError:
        raise click.BadParameter(f"Expected YYYY-MM, got {value!r}") from None


def _parse_day(value: str | None) -> str:
    if not value:
        return day_key(date.today())
    try:
        return day_key(value)
    except ValidationError as e:
        raise click.BadParameter(str(e)) from None


def _fail(message: str) -> None:
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


def _check(outcome: Outcome) -> Outcome:
    if not outcome.ok:
        _fail(outcome.message)
    return outcome


def _resolve_event_id(session: Session, day: str, ref: str) -> str:
    """Match a full id or a unique id prefix on the given day."""
    matches = [e.id for e in session.events_on(day) if e.id.startswith(ref)]
    if len(matches) == 1:
        return matches[0]
    if not matches:
        _fail(f"No event {ref!r} on {day}")
    _fail(f"Event id {ref!r} is ambiguous on {day}")


def _event_json(event: EventRecord, day: str | None = None) -> dict:
    data = event.to_dict()
    if day:
        data = {"date": day, **data}
    return data


def _format_event(event: EventRecord) -> str:
    desc = f" - {event.description}" if event.description else ""
    return (
        f"  {event.id[:SHORT_ID]}  {event.interval.format()}  "
        f"[{event.category.value}] {event.name}{desc}"
    )


@click.group()
@click.version_option()
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx, debug: bool):
    """Daybook - day-keyed event calendar."""
    if debug:
        logging.basicConfig(
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            level=logging.DEBUG,
        )
    ctx.ensure_object(dict)


def _session(ctx) -> Session:
    if "session" not in ctx.obj:
        ctx.obj["config"] = load_config()
        ctx.obj["session"] = open_session(ctx.obj["config"])
    return ctx.obj["session"]


@main.command()
@click.argument("day")
@click.argument("name")
@click.option("--start", "-s", required=True, help="Start time (HH:MM)")
@click.option("--end", "-e", required=True, help="End time (HH:MM)")
@click.option("--description", "-m", default="", help="Description")
@click.option(
    "--category",
    "-c",
    type=click.Choice([c.value for c in Category], case_sensitive=False),
    default=None,
    help="Category (defaults to DEFAULT_CATEGORY)",
)
@click.pass_context
def add(ctx, day: str, name: str, start: str, end: str, description: str, category: str | None):
    """Add an event to DAY (YYYY-MM-DD)."""
    session = _session(ctx)
    key = _parse_day(day)
    category = category or ctx.obj["config"].default_category
    outcome = _check(session.add_event(key, name, start, end, description, category))
    click.echo(f"✓ Added {outcome.event.name} on {key} ({outcome.event.id[:SHORT_ID]})")


@main.command()
@click.argument("day")
@click.argument("event_ref")
@click.option("--name", "-n", default=None, help="New name")
@click.option("--start", "-s", default=None, help="New start time (HH:MM)")
@click.option("--end", "-e", default=None, help="New end time (HH:MM)")
@click.option("--description", "-m", default=None, help="New description")
@click.option(
    "--category",
    "-c",
    type=click.Choice([c.value for c in Category], case_sensitive=False),
    default=None,
)
@click.option("--to", "to_day", default=None, help="Move the event to another day")
@click.pass_context
def edit(ctx, day: str, event_ref: str, name, start, end, description, category, to_day):
    """Edit the event EVENT_REF (id or id prefix) on DAY."""
    session = _session(ctx)
    key = _parse_day(day)
    event_id = _resolve_event_id(session, key, event_ref)

    target = _parse_day(to_day) if to_day else None
    outcome = _check(
        session.edit_event(
            key, event_id, name, start, end, description, category, to_day=target
        )
    )
    click.echo(f"✓ Updated {outcome.event.name} on {target or key}")


@main.command()
@click.argument("day")
@click.argument("event_ref")
@click.pass_context
def remove(ctx, day: str, event_ref: str):
    """Remove the event EVENT_REF (id or id prefix) from DAY."""
    session = _session(ctx)
    key = _parse_day(day)
    event_id = _resolve_event_id(session, key, event_ref)
    outcome = _check(session.remove(key, event_id))
    click.echo(f"✓ Removed {outcome.event.name} from {key}")


@main.command()
@click.argument("day", required=False)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.option("--free", is_flag=True, help="Show free time within WORK_HOURS instead")
@click.option(
    "--min",
    "min_duration",
    type=click.IntRange(min=0),
    default=0,
    help="Shortest gap to list, in minutes",
)
@click.pass_context
def day(ctx, day: str | None, as_json: bool, free: bool, min_duration: int):
    """Show the events on DAY (defaults to today)."""
    session = _session(ctx)
    key = _parse_day(day)
    if free:
        _show_free(session, key, ctx.obj["config"].work_hours, min_duration, as_json)
        return
    events = session.events_on(key)

    if as_json:
        click.echo(json.dumps([_event_json(e) for e in events], indent=2))
        return

    if not events:
        click.echo(f"No events on {key}.")
        return

    click.echo(f"### {date.fromisoformat(key).strftime('%A, %B %d')}")
    for event in events:
        click.echo(_format_event(event))


def _show_free(session: Session, key: str, hours: str, min_duration: int, as_json: bool):
    try:
        slots = session.free_slots(key, hours, min_duration)
    except ValidationError as e:
        _fail(f"Bad WORK_HOURS: {e}")

    if as_json:
        click.echo(
            json.dumps(
                [
                    {
                        "startTime": format_time(s.start),
                        "endTime": format_time(s.end),
                        "minutes": s.duration_minutes(),
                    }
                    for s in slots
                ],
                indent=2,
            )
        )
        return

    if not slots:
        click.echo(f"No free time on {key} within {hours}.")
        return

    click.echo(f"Free on {key} within {hours}:")
    for slot in slots:
        click.echo(f"  {slot.format()}  ({slot.duration_minutes()} min)")


@main.command()
@click.argument("month", required=False)
@click.option("--search", "-q", "query", default="", help="Dim days without a matching event")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def month(ctx, month: str | None, query: str, as_json: bool):
    """Show the month grid for MONTH (YYYY-MM, defaults to this month)."""
    session = _session(ctx)
    week_start = ctx.obj["config"].week_start
    month_date = _parse_month(month)
    month_events = session.month_events(month_date)

    if as_json:
        click.echo(
            json.dumps(
                {
                    day: [_event_json(e) for e in events]
                    for day, events in month_events.items()
                },
                indent=2,
            )
        )
        return

    result = session.search(query)
    if result.active and not result.days:
        click.echo("No Match Found")

    click.echo(month_date.strftime("%B %Y").center(7 * 6))
    click.echo(" ".join(f"{h:>5}" for h in weekday_headers(week_start)))
    for week in grid_weeks(month_date, week_start):
        cells = []
        for key in week:
            d = date.fromisoformat(key)
            if d.month != month_date.month or not result.includes_day(key):
                cells.append(f"{'.':>5}")
                continue
            count = len(month_events.get(key, ()))
            marker = f"*{count}" if count else ""
            cells.append(f"{d.day:>3}{marker:<2}")
        click.echo(" ".join(cells))


@main.command()
@click.argument("query")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def search(ctx, query: str, as_json: bool):
    """Search all events by name."""
    session = _session(ctx)
    result = session.search(query)

    if as_json:
        click.echo(
            json.dumps(
                {
                    "days": sorted(result.days),
                    "events": [_event_json(m.event, m.day) for m in result.events],
                },
                indent=2,
            )
        )
        return

    if not result.active:
        click.echo("Empty query.")
        return
    if not result.events:
        click.echo("No Match Found")
        return

    for match in result.events:
        click.echo(f"{match.day} {match.event.interval.format()}  {match.event.name}")


@main.command()
@click.argument("month", required=False)
@click.option(
    "--format",
    "-f",
    "fmt",
    type=click.Choice(EXPORT_FORMATS, case_sensitive=False),
    default="json",
    show_default=True,
)
@click.option("--output-dir", "-o", default=None, help="Directory for the export file")
@click.pass_context
def export(ctx, month: str | None, fmt: str, output_dir: str | None):
    """Export MONTH's events (YYYY-MM, defaults to this month)."""
    session = _session(ctx)
    sink = get_export_sink(ctx.obj["config"], output_dir)
    outcome = _check(session.export_month(_parse_month(month), fmt, sink))
    click.echo(f"✓ Exported to {outcome.path}")


if __name__ == "__main__":
    main()
