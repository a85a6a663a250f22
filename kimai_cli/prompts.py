import abc
import calendar
from contextlib import contextmanager
from datetime import date, datetime, time
from typing import Callable, Optional, Sequence, TypeVar

import click

from kimai_cli.exceptions import PromptAbort

T = TypeVar("T")


class Prompter(abc.ABC):
    @abc.abstractmethod
    def select(self, message: str, options: Sequence[T]) -> T:
        pass

    @abc.abstractmethod
    def text(
        self,
        message: str,
        required: bool = False,
        default: Optional[str] = None,
        help_message: Optional[str] = None,
    ) -> str:
        pass

    @abc.abstractmethod
    def date(self, message: str, week_start: int = calendar.MONDAY) -> date:
        pass

    @abc.abstractmethod
    def time(
        self,
        message: str,
        default: time,
        formatter: Callable[[time], str] = lambda t: t.strftime("%H:%M"),
        error_message: str = "Please enter a valid time in HH:MM format",
        help_message: Optional[str] = None,
    ) -> time:
        pass


@contextmanager
def _abortable(message: str):
    try:
        yield
    except click.Abort as e:
        raise PromptAbort(f"Input cancelled at {message!r}") from e


def _help(help_message: Optional[str]) -> None:
    if help_message:
        click.echo(click.style(f"  [{help_message}]", dim=True))


class ClickPrompter(Prompter):
    """Terminal prompts rendered with click."""

    def __init__(self, today: Callable[[], date] = date.today) -> None:
        self._today = today

    def select(self, message: str, options: Sequence[T]) -> T:
        click.echo(message)
        for number, option in enumerate(options, start=1):
            click.echo(f"  {number}) {option}")
        with _abortable(message):
            choice = click.prompt("Choose", type=click.IntRange(1, len(options)))
        return options[choice - 1]

    def text(self, message, required=False, default=None, help_message=None) -> str:
        _help(help_message)
        while True:
            with _abortable(message):
                value = click.prompt(
                    message,
                    default=default if default is not None else "",
                    show_default=default is not None,
                )
            if required and not value.strip():
                click.echo("This field is required")
                continue
            return value

    def date(self, message, week_start=calendar.MONDAY) -> date:
        today = self._today()
        click.echo(calendar.TextCalendar(firstweekday=week_start).formatmonth(today.year, today.month))
        with _abortable(message):
            value = click.prompt(
                message,
                type=click.DateTime(formats=["%Y-%m-%d"]),
                default=today.isoformat(),
            )
        return value.date()

    def time(
        self,
        message,
        default,
        formatter=lambda t: t.strftime("%H:%M"),
        error_message="Please enter a valid time in HH:MM format",
        help_message=None,
    ) -> time:
        def parse(value):
            if isinstance(value, time):
                return value
            try:
                return datetime.strptime(value.strip(), "%H:%M").time()
            except ValueError:
                raise click.BadParameter(error_message)

        _help(help_message)
        with _abortable(message):
            return click.prompt(message, default=formatter(default), value_proc=parse)
