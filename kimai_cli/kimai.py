import abc
import logging
import os
from typing import Any, Optional

import requests

from kimai_cli.config import Config
from kimai_cli.exceptions import DecodeError, ServerError, TransportError
from kimai_cli.models import Activity, Project, TimesheetEntry
from kimai_cli.schemas import ACTIVITY_LIST, PROJECT_LIST, DecodeFailure, TimesheetForm, decode

logger = logging.getLogger(__name__)


class TimeTrackingApi(abc.ABC):
    @abc.abstractmethod
    def projects(self) -> list[Project]:
        pass

    @abc.abstractmethod
    def activities(self, project_id: int) -> list[Activity]:
        pass

    @abc.abstractmethod
    def create_timesheet(self, entry: TimesheetEntry) -> None:
        pass


class KimaiClient(TimeTrackingApi):
    def __init__(self, config: Config, debug=False) -> None:
        self._config = config
        self._debug = debug or bool(os.environ.get("KIMAI_DEBUG"))
        if self._debug:
            logger.debug(f"Running Kimai client with endpoint={self.endpoint}, token={self.masked_token}")

    @property
    def endpoint(self):
        return self._config.endpoint

    @property
    def masked_token(self):
        token = self._config.token
        return f"{token[:4]}...{token[-4:]}" if len(token) > 8 else "***"

    @property
    def headers(self):
        return {
            "Accept": "application/json",
            "Authorization": f"Bearer {self._config.token}",
        }

    def _request(self, method: str, path: str, body: Optional[dict[str, Any]] = None) -> requests.Response:
        # No session: every call opens and closes its own connection
        url = self.endpoint + path
        try:
            response = requests.request(method, url, headers=self.headers, json=body)
        except requests.RequestException as e:
            raise TransportError(f"Request failed: {method} {url}: {e!r}") from e

        if self._debug:
            logger.debug(f"{method} {url}: sc={response.status_code}, content={response.content}")

        if not 200 <= response.status_code < 300:
            raise ServerError(response.status_code, response.text)
        return response

    def _get(self, path: str, adapter):
        response = self._request("GET", path)
        result = decode(adapter, response.content)
        if isinstance(result, DecodeFailure):
            raise DecodeError(result.reason)
        return result.value

    def projects(self) -> list[Project]:
        projects = [schema.to_model() for schema in self._get("/api/projects?visible=1", PROJECT_LIST)]
        if self._debug:
            logger.debug(f"Got projects={projects}")
        return projects

    def activities(self, project_id: int) -> list[Activity]:
        path = f"/api/activities?visible=1&projects[]={project_id}"
        activities = [schema.to_model() for schema in self._get(path, ACTIVITY_LIST)]
        if self._debug:
            logger.debug(f"Got activities={activities}")
        return activities

    def create_timesheet(self, entry: TimesheetEntry) -> None:
        self._request("POST", "/api/timesheets", body=TimesheetForm.from_entry(entry).to_payload())
        logger.info(f"Created timesheet entry {entry.begin:%Y-%m-%d %H:%M} - {entry.end:%H:%M}")
