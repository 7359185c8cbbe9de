# File: projector/client/components.py

"""
View components for the project pages.

Components keep only what the user is typing (drafts) and whether the
edit form is open. Everything that touches projects goes through the
ProjectFetcher handed to them, and the user session is passed in
explicitly. ``render()`` returns the plain-text content of the view.
"""

from typing import Callable, Dict, List, Optional

from projector.client.fetcher import LoadStatus, ProjectFetcher, ProjectRecord
from projector.client.session import CurrentUser, UserSession
from projector.client.storage import KeyValueStore

DRAFT_FIELDS = ("title", "description")


class _DraftForm:
    def __init__(self, title: str = "", description: str = ""):
        self.title = title
        self.description = description

    def change(self, name: str, value: str) -> None:
        """Input handler: only known fields are accepted."""
        if name in DRAFT_FIELDS:
            setattr(self, name, value)

    def fields(self) -> Dict[str, str]:
        return {"title": self.title, "description": self.description}


class AddProjectForm(_DraftForm):
    def __init__(self, fetcher: ProjectFetcher):
        super().__init__()
        self._fetcher = fetcher

    def submit(self) -> Optional[ProjectRecord]:
        created = self._fetcher.submit_create(self.fields())
        if created is not None:
            self.title = ""
            self.description = ""
        return created

    def render(self) -> str:
        return "\n".join(
            [
                f"Title: [{self.title}]",
                f"Description: [{self.description}]",
                "(Add a project)",
            ]
        )


class ProjectListView:
    def __init__(self, fetcher: ProjectFetcher):
        self._fetcher = fetcher
        self.add_form = AddProjectForm(fetcher)

    def mount(self) -> None:
        self._fetcher.refresh()

    @property
    def projects(self) -> List[ProjectRecord]:
        return self._fetcher.projects

    def render(self) -> str:
        lines = ["Projects"]
        lines += [f"- {p.title}" for p in self.projects]
        if self._fetcher.error is not None:
            lines.append(f"Error: {self._fetcher.error.message}")
        lines.append(self.add_form.render())
        return "\n".join(lines)


class EditProjectForm(_DraftForm):
    def __init__(self, fetcher: ProjectFetcher, project: ProjectRecord):
        super().__init__(project.title, project.description)
        self._fetcher = fetcher
        self.project_id = project.id

    def submit(self) -> Optional[ProjectRecord]:
        return self._fetcher.submit_update(self.project_id, self.fields())

    def render(self) -> str:
        return "\n".join(
            [
                "Edit the Project",
                f"Title: [{self.title}]",
                f"Description: [{self.description}]",
                "(Edit)",
            ]
        )


class ProjectDetailView:
    """
    Detail page for one project.

    The delete action is only offered to the project's owner. The server
    makes the same check, so this only decides what to show.
    """

    def __init__(self, fetcher: ProjectFetcher, session: UserSession, project_id: str):
        self._fetcher = fetcher
        self._session = session
        self.project_id = project_id
        self.edit_form: Optional[EditProjectForm] = None
        self.deleted = False

    def mount(self) -> None:
        self._fetcher.load_one(self.project_id)

    @property
    def project(self) -> Optional[ProjectRecord]:
        return self._fetcher.detail

    @property
    def editing(self) -> bool:
        return self.edit_form is not None

    @property
    def allowed_to_delete(self) -> bool:
        user = self._session.user
        project = self.project
        return user is not None and project is not None and user.id == project.owner

    def toggle_edit_form(self) -> None:
        if self.edit_form is not None:
            self.edit_form = None
        elif self.project is not None:
            self.edit_form = EditProjectForm(self._fetcher, self.project)

    def submit_edit(self) -> Optional[ProjectRecord]:
        if self.edit_form is None:
            return None
        updated = self.edit_form.submit()
        if updated is not None:
            self.edit_form = None
        return updated

    def delete(self) -> bool:
        if not self.allowed_to_delete:
            return False
        if not self._fetcher.submit_delete(self.project_id):
            return False
        self.deleted = True
        self.edit_form = None
        return True

    def render(self) -> str:
        if self.deleted:
            return "Project deleted"
        status = self._fetcher.detail_status
        if status == LoadStatus.NOT_FOUND:
            return "Not found"
        project = self.project
        if status == LoadStatus.LOADING or project is None:
            return "Loading ..."

        lines = [project.title, project.description]
        if self.allowed_to_delete:
            lines.append("(Delete Project)")
        lines.append("(Show Edit Form)")
        if self._fetcher.error is not None:
            lines.append(f"Error: {self._fetcher.error.message}")
        if self.edit_form is not None:
            lines.append(self.edit_form.render())
        return "\n".join(lines)


class UserBadge:
    """Shows who is signed in and follows session changes until closed."""

    def __init__(self, session: UserSession):
        self.user: Optional[CurrentUser] = session.user
        self._unsubscribe: Optional[Callable[[], None]] = session.subscribe(self._on_user)

    def _on_user(self, user: Optional[CurrentUser]) -> None:
        self.user = user

    def close(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def render(self) -> str:
        if self.user is None:
            return "Not signed in"
        return f"Signed in as {self.user.email}"


class CounterWidget:
    """Click counter that survives restarts through the given store."""

    STORAGE_KEY = "app-count"

    def __init__(self, store: KeyValueStore, key: str = STORAGE_KEY):
        self._store = store
        self._key = key
        value = store.get(key, 0)
        self.count = value if isinstance(value, int) and not isinstance(value, bool) else 0

    def _set(self, value: int) -> None:
        self.count = value
        self._store.set(self._key, value)

    def increment(self) -> int:
        self._set(self.count + 1)
        return self.count

    def clear(self) -> None:
        self._set(0)

    def render(self) -> str:
        return f"real high numbers: {self.count}"
