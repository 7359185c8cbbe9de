# File: projector/api/v1/routes_project.py

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from projector.api.deps import get_current_user, get_db
from projector.models.user import User
from projector.schemas.project import DeleteResult, ProjectCreate, ProjectRead, ProjectUpdate
from projector.services import project_service

# Every project endpoint needs a resolvable requester
router = APIRouter(dependencies=[Depends(get_current_user)])


@router.get(
    "/",
    response_model=list[ProjectRead],
    summary="List projects",
)
@router.get("", response_model=list[ProjectRead], include_in_schema=False)
def list_projects(db: Session = Depends(get_db)):
    """
    Return every project in store order.
    """
    return project_service.list_projects(db)


@router.get(
    "/{project_id}",
    response_model=ProjectRead,
    summary="Get a project",
    responses={404: {"description": "Project does not exist"}},
)
def get_project(project_id: str, db: Session = Depends(get_db)):
    return project_service.get_project(db, project_id)


@router.post(
    "/",
    response_model=ProjectRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create project",
)
@router.post(
    "",
    response_model=ProjectRead,
    status_code=status.HTTP_201_CREATED,
    include_in_schema=False,
)
def create_project(
    payload: ProjectCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Create a project owned by the requester.

    The owner always comes from the bearer token, never from the body.
    """
    return project_service.create_project(db, payload, owner_id=current_user.id)


@router.put(
    "/{project_id}",
    response_model=ProjectRead,
    summary="Update project title and description",
    responses={404: {"description": "Project does not exist"}},
)
def update_project(
    project_id: str,
    payload: ProjectUpdate,
    db: Session = Depends(get_db),
):
    return project_service.update_project(db, project_id, payload)


@router.delete(
    "/{project_id}",
    response_model=DeleteResult,
    summary="Delete project",
    responses={403: {"description": "Requester is not the owner"}},
)
def delete_project(
    project_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Delete a project. Only the owner may delete; a project that is
    already gone still reports success.
    """
    project_service.delete_project(db, project_id, requester_id=current_user.id)
    return DeleteResult()
