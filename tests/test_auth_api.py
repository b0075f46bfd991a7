from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from backend.api.app import create_app
from backend.api.limiter import limiter
from backend.auth.passwords import hash_password, verify_password
from backend.auth.users import UserStore
from backend.db import User
from backend.errors import BadRequestError

pytestmark = pytest.mark.integration

AUTH_URL = "/api/v1/auth"


def register(client: TestClient, email: str = "jane@example.com", password: str = "secret123"):
    return client.post(
        f"{AUTH_URL}/register",
        json={"name": "Jane", "email": email, "password": password},
    )


def test_password_hash_round_trip() -> None:
    hashed = hash_password("secret123")

    assert hashed != "secret123"
    assert verify_password("secret123", hashed)
    assert not verify_password("wrong", hashed)
    assert not verify_password("secret123", "not-a-bcrypt-hash")


def test_register_returns_user_and_working_token(client: TestClient) -> None:
    response = register(client, email="Jane@Example.com")

    body = response.json()
    assert response.status_code == 201
    assert body["user"] == {
        "email": "jane@example.com",
        "name": "Jane",
        "lastName": "lastName",
        "location": "my city",
    }

    jobs = client.get("/api/v1/jobs", headers={"Authorization": f"Bearer {body['token']}"})
    assert jobs.status_code == 200


def test_register_rejects_duplicate_email(client: TestClient) -> None:
    register(client)

    response = register(client, email="JANE@example.com")

    assert response.status_code == 400
    assert response.json() == {"detail": "Email already in use"}


def test_register_validates_input(client: TestClient) -> None:
    response = client.post(f"{AUTH_URL}/register", json={"name": "Jo", "email": "nope"})

    assert response.status_code == 422


def test_login_with_valid_credentials(client: TestClient, codec) -> None:
    user_id = codec.verify(register(client).json()["token"]).user_id

    response = client.post(
        f"{AUTH_URL}/login", json={"email": "jane@example.com", "password": "secret123"}
    )

    assert response.status_code == 200
    assert codec.verify(response.json()["token"]).user_id == user_id


@pytest.mark.parametrize(
    ("email", "password"),
    [("jane@example.com", "wrong-password"), ("nobody@example.com", "secret123")],
)
def test_login_with_bad_credentials(client: TestClient, email: str, password: str) -> None:
    register(client)

    response = client.post(f"{AUTH_URL}/login", json={"email": email, "password": password})

    assert response.status_code == 401
    assert response.json() == {"detail": "Invalid credentials"}


def test_login_is_rate_limited(client: TestClient) -> None:
    credentials = {"email": "nobody@example.com", "password": "secret123"}
    statuses = [client.post(f"{AUTH_URL}/login", json=credentials).status_code for _ in range(11)]

    assert statuses[:10] == [401] * 10
    assert statuses[10] == 429


def test_register_is_rate_limited(client: TestClient) -> None:
    statuses = [register(client).status_code for _ in range(11)]

    assert statuses[0] == 201
    assert statuses[1:10] == [400] * 9
    assert statuses[10] == 429


def test_auth_limit_comes_from_injected_settings(settings) -> None:
    limiter.reset()
    app = create_app(settings.model_copy(update={"auth_rate_limit": "2/minute"}))
    credentials = {"email": "nobody@example.com", "password": "secret123"}

    with TestClient(app) as client:
        statuses = [client.post(f"{AUTH_URL}/login", json=credentials).status_code for _ in range(3)]

    assert statuses == [401, 401, 429]


def test_login_reports_unavailable_store(app, client: TestClient) -> None:
    User.__table__.drop(app.state.engine)

    response = client.post(f"{AUTH_URL}/login", json={"email": "jane@example.com", "password": "secret123"})

    assert response.status_code == 503
    assert response.json() == {"detail": "Data store is unavailable"}


def test_duplicate_email_on_commit_is_a_bad_request(app, client: TestClient) -> None:
    with app.state.session_factory() as db:
        users = UserStore(db)
        users.create("Jane", "jane@example.com", hash_password("secret123"))

        with pytest.raises(BadRequestError, match="Email already in use"):
            users.create("Janet", "jane@example.com", hash_password("secret123"))

        assert users.get_by_email("jane@example.com").name == "Jane"


def test_update_user_returns_new_profile(client: TestClient) -> None:
    token = register(client).json()["token"]

    response = client.patch(
        f"{AUTH_URL}/updateUser",
        headers={"Authorization": f"Bearer {token}"},
        json={"email": "jane.doe@example.com", "name": "Jane", "lastName": "Doe", "location": "Berlin"},
    )

    assert response.status_code == 200
    assert response.json()["user"] == {
        "email": "jane.doe@example.com",
        "name": "Jane",
        "lastName": "Doe",
        "location": "Berlin",
    }
    login = client.post(
        f"{AUTH_URL}/login", json={"email": "jane.doe@example.com", "password": "secret123"}
    )
    assert login.status_code == 200


def test_update_user_requires_all_values(client: TestClient) -> None:
    token = register(client).json()["token"]

    response = client.patch(
        f"{AUTH_URL}/updateUser",
        headers={"Authorization": f"Bearer {token}"},
        json={"email": "jane@example.com", "name": "Jane"},
    )

    assert response.status_code == 400
    assert response.json() == {"detail": "Please provide all values"}


def test_update_user_rejects_email_of_another_account(client: TestClient) -> None:
    register(client, email="taken@example.com")
    token = register(client).json()["token"]

    response = client.patch(
        f"{AUTH_URL}/updateUser",
        headers={"Authorization": f"Bearer {token}"},
        json={"email": "taken@example.com", "name": "Jane", "lastName": "Doe", "location": "Berlin"},
    )

    assert response.status_code == 400
    assert response.json() == {"detail": "Email already in use"}


def test_update_user_requires_authentication(client: TestClient) -> None:
    response = client.patch(
        f"{AUTH_URL}/updateUser",
        json={"email": "jane@example.com", "name": "Jane", "lastName": "Doe", "location": "Berlin"},
    )

    assert response.status_code == 401


def test_restricted_identity_cannot_update_profile(
    client: TestClient, make_user, auth_headers, settings
) -> None:
    demo = make_user(user_id=settings.test_user_id)

    response = client.patch(
        f"{AUTH_URL}/updateUser",
        headers=auth_headers(demo.id),
        json={"email": "demo@example.com", "name": "Demo", "lastName": "User", "location": "Here"},
    )

    assert response.status_code == 403
    assert response.json() == {"detail": "Test user. Read only!"}


def test_health(client: TestClient) -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}
