from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Generic, List, Optional, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from kimai_cli.models import Activity, Project, TimesheetEntry

T = TypeVar("T")


class ProjectSchema(BaseModel):
    model_config = ConfigDict(strict=True, frozen=True)

    id: int
    name: str

    def to_model(self) -> Project:
        return Project(id=self.id, name=self.name)


class ActivitySchema(BaseModel):
    model_config = ConfigDict(strict=True, frozen=True)

    id: int
    name: str
    parent_title: Optional[str] = Field(default=None, alias="parentTitle")

    def to_model(self) -> Activity:
        return Activity(id=self.id, name=self.name, parent_title=self.parent_title)


class TimesheetForm(BaseModel):
    begin: datetime
    project: int
    activity: int
    end: datetime
    description: Optional[str] = None

    @classmethod
    def from_entry(cls, entry: TimesheetEntry) -> "TimesheetForm":
        return cls(
            begin=entry.begin.astimezone(timezone.utc),
            project=entry.project,
            activity=entry.activity,
            end=entry.end.astimezone(timezone.utc),
            description=entry.description,
        )

    def to_payload(self) -> dict:
        # description is left out entirely when absent, never sent as null
        return self.model_dump(mode="json", exclude_none=True)


PROJECT_LIST = TypeAdapter(List[ProjectSchema])
ACTIVITY_LIST = TypeAdapter(List[ActivitySchema])


@dataclass(frozen=True)
class Decoded(Generic[T]):
    value: T


@dataclass(frozen=True)
class DecodeFailure:
    reason: str


DecodeResult = Union[Decoded[T], DecodeFailure]


def decode(adapter: TypeAdapter, raw: Union[str, bytes]) -> DecodeResult:
    try:
        return Decoded(adapter.validate_json(raw))
    except ValidationError as e:
        return DecodeFailure(_describe(e))


def _describe(error: ValidationError) -> str:
    problems = []
    for detail in error.errors():
        location = ".".join(str(part) for part in detail["loc"]) or "<body>"
        problems.append(f"{location}: {detail['msg']}")
    return "; ".join(problems)
