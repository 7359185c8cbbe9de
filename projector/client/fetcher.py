# File: projector/client/fetcher.py

"""
Client data fetcher.

Sits between the view components and the ``/projects`` API and owns the
transient copy of whatever the current view shows:

  - ``projects``       list view, replaced wholesale by ``refresh()``
  - ``detail``         detail view record
  - ``detail_status``  IDLE / LOADING / LOADED / NOT_FOUND

Failures are logged and kept on ``error``; nothing is retried and
nothing is rolled back. A request that never returns leaves the detail
in LOADING.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

import httpx

from projector.client.session import UserSession

logger = logging.getLogger(__name__)

PROJECTS_ROUTE = "/projects"


class LoadStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class ProjectRecord:
    id: str
    title: str
    description: str
    owner: str

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "ProjectRecord":
        return cls(
            id=data["id"],
            title=data["title"],
            description=data.get("description") or "",
            owner=data["owner"],
        )


class FetchError(Exception):
    """A failed API call, classified for display."""

    def __init__(self, kind: str, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.status_code = status_code

    @classmethod
    def from_exception(cls, exc: httpx.HTTPError) -> "FetchError":
        if not isinstance(exc, httpx.HTTPStatusError):
            return cls("transport", str(exc) or exc.__class__.__name__)

        response = exc.response
        try:
            body = response.json()
        except ValueError:
            body = None
        detail = body.get("detail") if isinstance(body, dict) else None
        if not isinstance(detail, str):
            detail = response.reason_phrase or f"HTTP {response.status_code}"

        code = response.status_code
        if code in (401, 403):
            kind = "unauthorized"
        elif code == 404:
            kind = "not_found"
        elif code == 422:
            kind = "validation"
        else:
            kind = "server"
        return cls(kind, detail, status_code=code)


class ProjectFetcher:
    def __init__(
        self,
        client: httpx.Client,
        session: UserSession,
        navigate: Optional[Callable[[str], None]] = None,
    ):
        """
        Args:
            client: httpx client whose base_url points at the API root
                (e.g. ``http://localhost:8000/api/v1``)
            session: source of the bearer token
            navigate: called with a route after a successful delete
        """
        self._client = client
        self._session = session
        self._navigate = navigate

        self.projects: List[ProjectRecord] = []
        self.detail: Optional[ProjectRecord] = None
        self.detail_status = LoadStatus.IDLE
        self.error: Optional[FetchError] = None

    # ------------------------------------------------------------------
    # transport
    # ------------------------------------------------------------------

    def _request(self, method: str, url: str, **kwargs) -> httpx.Response:
        response = self._client.request(
            method, url, headers=self._session.auth_headers(), **kwargs
        )
        response.raise_for_status()
        return response

    def _fail(self, action: str, exc: httpx.HTTPError) -> FetchError:
        error = FetchError.from_exception(exc)
        logger.warning("Could not %s: %s (%s)", action, error.message, error.kind)
        self.error = error
        return error

    # ------------------------------------------------------------------
    # operations
    # ------------------------------------------------------------------

    def refresh(self) -> Optional[List[ProjectRecord]]:
        """Fetch the full list and replace the local collection."""
        self.error = None
        try:
            response = self._request("GET", "projects/")
        except httpx.HTTPError as exc:
            self._fail("list projects", exc)
            return None

        self.projects = [ProjectRecord.from_json(item) for item in response.json()]
        return self.projects

    def load_one(self, project_id: str) -> Optional[ProjectRecord]:
        self.error = None
        previous = (self.detail, self.detail_status)
        self.detail_status = LoadStatus.LOADING

        try:
            response = self._request("GET", f"projects/{project_id}")
        except httpx.HTTPError as exc:
            error = self._fail(f"load project {project_id}", exc)
            if error.kind == "not_found":
                self.detail = None
                self.detail_status = LoadStatus.NOT_FOUND
            else:
                self.detail, self.detail_status = previous
            return None

        self.detail = ProjectRecord.from_json(response.json())
        self.detail_status = LoadStatus.LOADED
        return self.detail

    def submit_create(self, fields: Dict[str, str]) -> Optional[ProjectRecord]:
        """
        Create a project, then re-fetch the list. The new record only
        shows up locally through that refresh.
        """
        self.error = None
        try:
            response = self._request("POST", "projects/", json=_project_body(fields))
        except httpx.HTTPError as exc:
            self._fail("create project", exc)
            return None

        created = ProjectRecord.from_json(response.json())
        self.refresh()
        return created

    def submit_update(self, project_id: str, fields: Dict[str, str]) -> Optional[ProjectRecord]:
        """Update a project and adopt the server's copy of it."""
        self.error = None
        try:
            response = self._request("PUT", f"projects/{project_id}", json=_project_body(fields))
        except httpx.HTTPError as exc:
            self._fail(f"update project {project_id}", exc)
            return None

        updated = ProjectRecord.from_json(response.json())
        if self.detail is not None and self.detail.id == updated.id:
            self.detail = updated
            self.detail_status = LoadStatus.LOADED
        self.projects = [updated if p.id == updated.id else p for p in self.projects]
        return updated

    def submit_delete(self, project_id: str) -> bool:
        self.error = None
        try:
            self._request("DELETE", f"projects/{project_id}")
        except httpx.HTTPError as exc:
            self._fail(f"delete project {project_id}", exc)
            return False

        self.projects = [p for p in self.projects if p.id != project_id]
        if self.detail is not None and self.detail.id == project_id:
            self.detail = None
            self.detail_status = LoadStatus.IDLE
        if self._navigate is not None:
            self._navigate(PROJECTS_ROUTE)
        return True


def _project_body(fields: Dict[str, str]) -> Dict[str, str]:
    return {
        "title": fields.get("title", ""),
        "description": fields.get("description", ""),
    }
