# File: projector/services/project_service.py

"""
Project CRUD over the database.

Each public function maps one API operation onto one store read or
mutation. Failures surface as domain exceptions:

  - NotFoundError     Get / Update on an id that does not exist (including
                      one deleted while the update was in flight)
  - UnauthorizedError Delete by anyone other than the owner
  - StoreError        any SQLAlchemy failure (session is rolled back)

Delete is idempotent: an id that is already gone reports success.
"""

import logging
from typing import List

from sqlalchemy import select
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from projector.core.exceptions import NotFoundError, UnauthorizedError
from projector.db.session import store_guard
from projector.models.project import Project
from projector.schemas.project import ProjectCreate, ProjectUpdate

logger = logging.getLogger(__name__)


def list_projects(db: Session) -> List[Project]:
    with store_guard(db, "list projects"):
        projects = list(db.scalars(select(Project)))
    logger.debug("Listed %d projects", len(projects))
    return projects


def get_project(db: Session, project_id: str) -> Project:
    with store_guard(db, "load project"):
        project = db.get(Project, project_id)
    if project is None:
        raise NotFoundError("Project", project_id)
    return project


def create_project(db: Session, payload: ProjectCreate, owner_id: str) -> Project:
    project = Project(
        title=payload.title,
        description=payload.description,
        owner=owner_id,
    )
    with store_guard(db, "create project"):
        db.add(project)
        db.commit()
        db.refresh(project)

    logger.info("Created project %s for owner %s", project.id, owner_id)
    return project


def update_project(db: Session, project_id: str, payload: ProjectUpdate) -> Project:
    project = get_project(db, project_id)

    with store_guard(db, "update project"):
        project.title = payload.title
        project.description = payload.description
        try:
            db.commit()
        except StaleDataError as exc:
            # row deleted after we loaded it: the UPDATE matched nothing
            db.rollback()
            raise NotFoundError("Project", project_id) from exc
        db.refresh(project)

    logger.info("Updated project %s", project_id)
    return project


def delete_project(db: Session, project_id: str, requester_id: str) -> None:
    with store_guard(db, "delete project"):
        project = db.get(Project, project_id)

    if project is None:
        logger.debug("Delete of missing project %s treated as success", project_id)
        return

    if project.owner != requester_id:
        logger.warning(
            "User %s tried to delete project %s owned by %s",
            requester_id,
            project_id,
            project.owner,
        )
        raise UnauthorizedError("delete", f"project '{project_id}'")

    with store_guard(db, "delete project"):
        db.delete(project)
        db.commit()

    logger.info("Deleted project %s", project_id)
