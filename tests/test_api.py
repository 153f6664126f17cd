"""
tests.test_api

End-to-end tests through the FastAPI app.

Responsibilities:
- Boot the app (lifespan creates tables and seeds the bootstrap admin).
- Exercise login, token-gated administration and the error-kind -> status mapping.
"""

from __future__ import annotations

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from iam_service.api.app import create_app
from iam_service.settings import Settings


@pytest.fixture()
def client(settings: Settings, clock) -> Iterator[TestClient]:
    app = create_app(settings=settings, clock=clock)
    with TestClient(app) as c:
        yield c


def _login(client: TestClient, username: str, password: str) -> dict[str, str]:
    r = client.post("/api/auth/login", json={"username": username, "password": password})
    assert r.status_code == 200, r.text
    return r.json()


def _bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def admin_headers(client: TestClient) -> dict[str, str]:
    return _bearer(_login(client, "root", "root-password")["token"])


def test_health_endpoints(client: TestClient) -> None:
    r = client.get("/healthz")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"

    r = client.get("/readyz")
    assert r.status_code == 200
    assert r.json()["status"] == "ready"
    assert r.json()["roles"] >= 3


def test_openapi_documents_the_error_body(client: TestClient) -> None:
    paths = client.get("/openapi.json").json()["paths"]

    responses = paths["/api/user/delete/{user_id}"]["delete"]["responses"]
    schema = responses["404"]["content"]["application/json"]["schema"]
    assert schema["$ref"] == "#/components/schemas/ErrorResponse"
    assert "401" in paths["/api/auth/login"]["post"]["responses"]


def test_request_id_is_echoed(client: TestClient) -> None:
    r = client.get("/healthz", headers={"x-request-id": "req-123"})
    assert r.headers["x-request-id"] == "req-123"


def test_bootstrap_admin_can_log_in(client: TestClient) -> None:
    body = _login(client, "root", "root-password")

    assert body["user_id"]
    assert body["name"] == "root"
    assert body["token_type"] == "bearer"
    assert "password" not in body

    r = client.get("/api/auth/me", headers=_bearer(body["token"]))
    assert r.status_code == 200
    assert r.json() == {
        "subject": body["user_id"],
        "username": "root",
        "roles": ["admin", "management"],
    }


@pytest.mark.parametrize(
    ("username", "password"),
    [("root", "wrong-password"), ("nobody", "root-password")],
)
def test_bad_login_is_401_without_detail(client: TestClient, username: str, password: str) -> None:
    r = client.post("/api/auth/login", json={"username": username, "password": password})

    assert r.status_code == 401
    assert r.json()["detail"] == {
        "code": "invalid_credentials",
        "message": "Invalid username or password",
    }


def test_login_payload_is_validated(client: TestClient) -> None:
    r = client.post("/api/auth/login", json={"username": "root"})
    assert r.status_code == 422


def test_me_requires_a_token(client: TestClient) -> None:
    r = client.get("/api/auth/me")

    assert r.status_code == 401
    assert r.json()["detail"]["code"] == "unauthenticated"
    assert r.headers["www-authenticate"] == "Bearer"


def test_garbage_token_is_401(client: TestClient) -> None:
    r = client.get("/api/user/get-all", headers=_bearer("not-a-jwt"))
    assert r.status_code == 401


def test_user_lifecycle(client: TestClient, admin_headers: dict[str, str]) -> None:
    r = client.post(
        "/api/user/create",
        headers=admin_headers,
        json={
            "username": "alice",
            "password": "alice-pw",
            "email": "alice@example.com",
            "full_name": "Alice",
            "roles": ["user"],
        },
    )
    assert r.status_code == 200, r.text
    user_id = r.json()["id"]

    r = client.get(f"/api/user/details/{user_id}", headers=admin_headers)
    assert r.status_code == 200
    assert r.json() == {
        "id": user_id,
        "username": "alice",
        "full_name": "Alice",
        "email": "alice@example.com",
        "roles": ["user"],
    }

    r = client.get("/api/user/details/by-username/alice", headers=admin_headers)
    assert r.json()["id"] == user_id

    r = client.get("/api/user/get-all", headers=admin_headers)
    assert sorted(u["username"] for u in r.json()) == ["alice", "root"]

    r = client.get("/api/user/all-details", headers=admin_headers)
    assert {u["username"]: u["roles"] for u in r.json()}["alice"] == ["user"]

    r = client.put(
        f"/api/user/edit-profile/{user_id}",
        headers=admin_headers,
        json={"id": user_id, "full_name": "Alice L.", "email": "al@example.com", "roles": []},
    )
    assert r.status_code == 200
    assert r.json() == 1

    r = client.delete(f"/api/user/delete/{user_id}", headers=admin_headers)
    assert r.json() == 1

    r = client.delete(f"/api/user/delete/{user_id}", headers=admin_headers)
    assert r.status_code == 404
    assert r.json()["detail"]["code"] == "not_found"


def test_duplicate_user_is_409(client: TestClient, admin_headers: dict[str, str]) -> None:
    body = {"username": "root", "password": "x"}

    r = client.post("/api/user/create", headers=admin_headers, json=body)

    assert r.status_code == 409
    assert r.json()["detail"]["code"] == "conflict"


def test_unknown_role_is_400(client: TestClient, admin_headers: dict[str, str]) -> None:
    body = {"username": "bob", "password": "x", "roles": ["wizard"]}

    r = client.post("/api/user/create", headers=admin_headers, json=body)

    assert r.status_code == 400


def test_password_limit_counts_bytes(client: TestClient, admin_headers: dict[str, str]) -> None:
    # 40 characters but 80 bytes once encoded.
    body = {"username": "bob", "password": "\u00e9" * 40}

    r = client.post("/api/user/create", headers=admin_headers, json=body)
    assert r.status_code == 422

    body["password"] = "\u00e9" * 36
    r = client.post("/api/user/create", headers=admin_headers, json=body)
    assert r.status_code == 200, r.text
    assert _login(client, "bob", "\u00e9" * 36)["user_id"] == r.json()["id"]


def test_padded_username_logs_in_as_registered(
    client: TestClient, admin_headers: dict[str, str]
) -> None:
    body = {"username": " frank ", "password": "pw"}
    r = client.post("/api/user/create", headers=admin_headers, json=body)
    assert r.status_code == 200, r.text

    assert _login(client, " frank ", "pw")["user_id"] == r.json()["id"]
    assert _login(client, "frank", "pw")["user_id"] == r.json()["id"]


def test_edit_profile_id_mismatch_is_400(client: TestClient, admin_headers: dict[str, str]) -> None:
    r = client.put(
        "/api/user/edit-profile/id2",
        headers=admin_headers,
        json={"id": "id1", "full_name": "x", "email": "x@example.com"},
    )

    assert r.status_code == 400
    assert r.json()["detail"]["code"] == "bad_request"


def test_role_changes_apply_from_next_login(client: TestClient, admin_headers: dict[str, str]) -> None:
    client.post(
        "/api/user/create",
        headers=admin_headers,
        json={"username": "carol", "password": "carol-pw", "roles": ["user"]},
    )
    old_token = _login(client, "carol", "carol-pw")["token"]

    r = client.post(
        "/api/user/assign-roles",
        headers=admin_headers,
        json={"username": "carol", "roles": ["management"]},
    )
    assert r.json() == 1

    # The earlier token keeps its snapshot and stays unprivileged.
    assert client.get("/api/role/get-all", headers=_bearer(old_token)).status_code == 403

    new_token = _login(client, "carol", "carol-pw")["token"]
    assert client.get("/api/role/get-all", headers=_bearer(new_token)).status_code == 200


def test_non_admin_is_403_and_anonymous_is_401(client: TestClient, admin_headers: dict[str, str]) -> None:
    client.post(
        "/api/user/create",
        headers=admin_headers,
        json={"username": "dave", "password": "dave-pw", "roles": ["user"]},
    )
    token = _login(client, "dave", "dave-pw")["token"]

    r = client.get("/api/user/get-all", headers=_bearer(token))
    assert r.status_code == 403
    assert r.json()["detail"]["code"] == "forbidden"

    assert client.get("/api/user/get-all").status_code == 401


def test_role_endpoints(client: TestClient, admin_headers: dict[str, str]) -> None:
    r = client.post("/api/role/create", headers=admin_headers, json={"name": "auditor"})
    assert r.status_code == 200
    role_id = r.json()["id"]

    r = client.post("/api/role/create", headers=admin_headers, json={"name": "auditor"})
    assert r.status_code == 409

    r = client.get(f"/api/role/{role_id}", headers=admin_headers)
    assert r.json() == {"id": role_id, "name": "auditor"}

    r = client.put(f"/api/role/{role_id}", headers=admin_headers, json={"id": "other", "name": "x"})
    assert r.status_code == 400

    r = client.put(f"/api/role/{role_id}", headers=admin_headers, json={"id": role_id, "name": "reviewer"})
    assert r.json() == 1

    names = [role["name"] for role in client.get("/api/role/get-all", headers=admin_headers).json()]
    assert "reviewer" in names and "auditor" not in names

    assert client.delete(f"/api/role/{role_id}", headers=admin_headers).json() == 1
    r = client.delete(f"/api/role/{role_id}", headers=admin_headers)
    assert r.status_code == 404


# --- Module Notes -----------------------------------------------------------
# TestClient runs the lifespan, so each test boots against its own SQLite file.
