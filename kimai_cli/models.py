from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Project:
    id: int
    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Activity:
    id: int
    name: str
    parent_title: Optional[str] = None

    def __str__(self) -> str:
        if self.parent_title is not None:
            return f"{self.parent_title} | {self.name}"
        return self.name


@dataclass(frozen=True)
class TimesheetEntry:
    begin: datetime
    end: datetime
    project: int
    activity: int
    description: Optional[str] = None
