import calendar
import logging
from datetime import date, datetime, time, timedelta, tzinfo
from typing import Callable, Optional, Sequence, TypeVar

from kimai_cli.config import Config
from kimai_cli.durations import parse_duration
from kimai_cli.exceptions import DurationParseError, EmptySelectionError
from kimai_cli.kimai import TimeTrackingApi
from kimai_cli.models import Activity, Project, TimesheetEntry
from kimai_cli.prompts import Prompter

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_DURATION = "1"


def default_start_time(day: date, duration: timedelta, now: datetime, configured: time) -> time:
    """Suggest a start time: `duration` before now when logging today, else the configured time."""
    if day == now.date():
        # wraps past midnight like a clock
        return (datetime.combine(now.date(), now.time()) - duration % timedelta(days=1)).time()
    return configured


def normalize_description(text: str) -> Optional[str]:
    return text if text.strip() else None


def assemble_entry(
    project: Project,
    activity: Activity,
    day: date,
    start: time,
    duration: timedelta,
    description: Optional[str],
    tz: Optional[tzinfo] = None,
) -> TimesheetEntry:
    naive = datetime.combine(day, start)
    begin = naive.replace(tzinfo=tz) if tz is not None else naive.astimezone()
    try:
        end = begin + duration
    except OverflowError as e:
        raise DurationParseError(f"Duration out of range: {duration}") from e
    return TimesheetEntry(
        begin=begin,
        end=end,
        project=project.id,
        activity=activity.id,
        description=description,
    )


def _choose(prompter: Prompter, message: str, options: Sequence[T], what: str) -> T:
    if not options:
        raise EmptySelectionError(f"The server returned no visible {what}")
    return prompter.select(message, options)


def create_timesheet_entry(
    config: Config,
    api: TimeTrackingApi,
    prompter: Prompter,
    now: Callable[[], datetime] = datetime.now,
) -> TimesheetEntry:
    project = _choose(prompter, "Project:", api.projects(), "projects")
    activity = _choose(prompter, "Activity:", api.activities(project.id), f"activities for project {project}")

    # TODO: re-prompt on an unparsable duration instead of ending the session
    duration = parse_duration(
        prompter.text("Duration:", required=True, default=DEFAULT_DURATION, help_message="E.g. 1.5 or 2:30")
    )

    day = prompter.date("Date:", week_start=calendar.MONDAY)
    start = prompter.time(
        "Enter start time (HH:MM):",
        default=default_start_time(day, duration, now(), config.default_start_time),
        help_message="Enter the time in 24-hour format (e.g., 14:30 for 2:30 PM)",
    )
    description = normalize_description(prompter.text("Description:", help_message="optional"))

    entry = assemble_entry(project, activity, day, start, duration, description)
    logger.debug(f"Submitting {entry}")
    api.create_timesheet(entry)
    return entry
