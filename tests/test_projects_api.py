# File: tests/test_projects_api.py

"""
HTTP-level tests for /api/v1/projects.
"""

import pytest

from projector.core.exceptions import StoreError
from projector.models.base import Base
from projector.models.project import Project
from projector.services import project_service

PROJECTS = "/api/v1/projects/"


def create(client, user, title="A", description="B"):
    resp = client.post(
        PROJECTS, json={"title": title, "description": description}, headers=user.headers
    )
    assert resp.status_code == 201, resp.text
    return resp.json()


def test_health_endpoint(client):
    resp = client.get("/healthz")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


def test_list_projects_empty(client, alice):
    resp = client.get(PROJECTS, headers=alice.headers)
    assert resp.status_code == 200
    assert resp.json() == []


@pytest.mark.parametrize(
    "method, path",
    [
        ("get", PROJECTS),
        ("get", PROJECTS + "abc"),
        ("post", PROJECTS),
        ("put", PROJECTS + "abc"),
        ("delete", PROJECTS + "abc"),
    ],
)
def test_project_routes_require_token(client, method, path):
    kwargs = {"json": {"title": "x"}} if method in ("post", "put") else {}
    resp = getattr(client, method)(path, **kwargs)
    assert resp.status_code == 401


def test_full_lifecycle(client, alice):
    project = create(client, alice, "A", "B")
    assert project["owner"] == alice.id
    assert set(project) == {"id", "title", "description", "owner"}

    resp = client.get(PROJECTS + project["id"], headers=alice.headers)
    assert resp.status_code == 200
    assert resp.json() == project

    resp = client.put(
        PROJECTS + project["id"],
        json={"title": "A2", "description": "B2"},
        headers=alice.headers,
    )
    assert resp.status_code == 200
    assert resp.json() == {
        "id": project["id"],
        "title": "A2",
        "description": "B2",
        "owner": alice.id,
    }

    resp = client.delete(PROJECTS + project["id"], headers=alice.headers)
    assert resp.status_code == 200
    assert resp.json() == {"message": "ok"}

    resp = client.get(PROJECTS + project["id"], headers=alice.headers)
    assert resp.status_code == 404
    assert resp.json()["error"] == "not_found"


def test_owner_comes_from_token_not_body(client, alice, bob):
    resp = client.post(
        PROJECTS,
        json={"title": "Sneaky", "description": "", "owner": bob.id},
        headers=alice.headers,
    )
    assert resp.status_code == 201
    assert resp.json()["owner"] == alice.id


def test_list_contains_new_project_once_and_drops_deleted(client, alice):
    first = create(client, alice, "one")
    second = create(client, alice, "two")

    ids = [p["id"] for p in client.get(PROJECTS, headers=alice.headers).json()]
    assert ids.count(first["id"]) == 1
    assert ids.count(second["id"]) == 1

    client.delete(PROJECTS + first["id"], headers=alice.headers)
    ids = [p["id"] for p in client.get(PROJECTS, headers=alice.headers).json()]
    assert first["id"] not in ids
    assert second["id"] in ids


def test_get_missing_project_is_404(client, alice):
    resp = client.get(PROJECTS + "does-not-exist", headers=alice.headers)
    assert resp.status_code == 404


def test_update_missing_project_is_404(client, alice):
    resp = client.put(
        PROJECTS + "does-not-exist",
        json={"title": "T", "description": "D"},
        headers=alice.headers,
    )
    assert resp.status_code == 404
    assert resp.json()["error"] == "not_found"


def test_update_by_other_user_keeps_owner(client, alice, bob):
    project = create(client, alice)
    resp = client.put(
        PROJECTS + project["id"],
        json={"title": "by bob", "description": "still alice's"},
        headers=bob.headers,
    )
    assert resp.status_code == 200
    assert resp.json()["owner"] == alice.id


def test_delete_missing_project_is_ok(client, alice):
    resp = client.delete(PROJECTS + "never-existed", headers=alice.headers)
    assert resp.status_code == 200
    assert resp.json() == {"message": "ok"}

    resp = client.get(PROJECTS + "never-existed", headers=alice.headers)
    assert resp.status_code == 404


def test_delete_twice_is_ok(client, alice):
    project = create(client, alice)
    for _ in range(2):
        resp = client.delete(PROJECTS + project["id"], headers=alice.headers)
        assert resp.status_code == 200


def test_delete_by_non_owner_is_rejected(client, alice, bob):
    project = create(client, alice)

    resp = client.delete(PROJECTS + project["id"], headers=bob.headers)
    assert resp.status_code == 403
    assert resp.json()["error"] == "unauthorized"

    for user in (alice, bob):
        resp = client.get(PROJECTS + project["id"], headers=user.headers)
        assert resp.status_code == 200
        assert resp.json() == project


@pytest.mark.parametrize(
    "body",
    [
        {"description": "no title"},
        {"title": "", "description": "empty title"},
        {"title": "   ", "description": "blank title"},
        {"title": "x" * 201, "description": ""},
        {"title": "ok", "description": "x" * 5001},
    ],
)
def test_create_validation(client, alice, body):
    resp = client.post(PROJECTS, json=body, headers=alice.headers)
    assert resp.status_code == 422


def test_create_without_description_defaults_to_empty(client, alice):
    resp = client.post(PROJECTS, json={"title": "  Trim me  "}, headers=alice.headers)
    assert resp.status_code == 201
    assert resp.json()["title"] == "Trim me"
    assert resp.json()["description"] == ""


def test_store_error_is_reported_as_500(client, alice, monkeypatch):
    def broken(db):
        raise StoreError("Could not list projects.")

    monkeypatch.setattr(project_service, "list_projects", broken)

    resp = client.get(PROJECTS, headers=alice.headers)
    assert resp.status_code == 500
    assert resp.json() == {"detail": "Could not list projects.", "error": "store_error"}


def test_collection_routes_without_trailing_slash(client, alice):
    resp = client.post(
        "/api/v1/projects",
        json={"title": "No slash", "description": ""},
        headers=alice.headers,
        follow_redirects=False,
    )
    assert resp.status_code == 201
    project = resp.json()

    resp = client.get("/api/v1/projects", headers=alice.headers, follow_redirects=False)
    assert resp.status_code == 200
    assert resp.json() == [project]


def test_projects_table_failure_returns_store_error(client, engine, alice):
    Project.__table__.drop(bind=engine)

    resp = client.get(PROJECTS, headers=alice.headers)
    assert resp.status_code == 500
    assert resp.json() == {"detail": "Could not list projects.", "error": "store_error"}

    resp = client.put(
        PROJECTS + "abc", json={"title": "T", "description": ""}, headers=alice.headers
    )
    assert resp.status_code == 500
    assert resp.json()["error"] == "store_error"


def test_database_outage_returns_store_error(client, engine, alice):
    Base.metadata.drop_all(bind=engine)

    resp = client.get(PROJECTS, headers=alice.headers)
    assert resp.status_code == 500
    assert resp.json()["error"] == "store_error"

    resp = client.post(
        "/api/v1/auth/login", json={"email": alice.email, "password": alice.password}
    )
    assert resp.status_code == 500
    assert resp.json() == {"detail": "Could not look up user.", "error": "store_error"}

    resp = client.post(
        "/api/v1/auth/register",
        json={"email": "erin@projector.dev", "password": "long-enough"},
    )
    assert resp.status_code == 500
    assert resp.json()["error"] == "store_error"
