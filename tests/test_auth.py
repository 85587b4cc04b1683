from conftest import auth_headers, seed_user
from twilight.core.security import TokenKind, create_access_token, verify_token


def test_signin_success(client, db_session):
    user = seed_user(db_session)
    resp = client.post(
        "/users/signin",
        json={"username": user.username, "password": "correct-password"},
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["result"] is True
    assert body["user"] == {
        "id": user.user_id,
        "username": "alice",
        "firstname": "Alice",
        "email": "alice@example.com",
    }
    payload = verify_token(body["accessToken"], TokenKind.ACCESS)
    assert payload["sub"] == str(user.user_id)


def test_signin_sets_http_only_refresh_cookie(client, db_session):
    user = seed_user(db_session)
    resp = client.post(
        "/users/signin",
        json={"username": user.username, "password": "correct-password"},
    )
    set_cookie = resp.headers["set-cookie"]
    assert set_cookie.startswith("refreshToken=")
    assert "HttpOnly" in set_cookie
    assert "samesite=lax" in set_cookie.lower()
    assert "Secure" not in set_cookie


def test_signin_wrong_password(client, db_session):
    user = seed_user(db_session)
    resp = client.post(
        "/users/signin",
        json={"username": user.username, "password": "wrong-password"},
    )
    assert resp.status_code == 401
    assert resp.json() == {"result": False, "message": "Wrong password"}


def test_signin_unknown_username(client):
    resp = client.post(
        "/users/signin",
        json={"username": "nobody", "password": "whatever"},
    )
    assert resp.status_code == 401
    assert resp.json()["message"] == "Wrong username"


def test_signin_unverified_user_is_refused(client, db_session):
    user = seed_user(db_session, is_verified=False)
    resp = client.post(
        "/users/signin",
        json={"username": user.username, "password": "correct-password"},
    )
    assert resp.status_code == 403


def test_signin_missing_field(client):
    resp = client.post("/users/signin", json={"username": "alice"})
    assert resp.status_code == 400
    assert resp.json() == {"result": False, "message": "bad request : missing password"}


def test_protected_route_without_token(client):
    resp = client.get("/tweets")
    assert resp.status_code == 401
    assert resp.json()["message"] == "Token missing"


def test_protected_route_with_bad_token(client):
    resp = client.get("/tweets", headers={"Authorization": "Bearer not-a-jwt"})
    assert resp.status_code == 401
    assert resp.json()["message"] == "Token expired or invalid"


def test_refresh_token_is_not_an_access_token(client, db_session):
    user = seed_user(db_session)
    signin = client.post(
        "/users/signin",
        json={"username": user.username, "password": "correct-password"},
    )
    refresh_token = signin.cookies.get("refreshToken")
    resp = client.get("/tweets", headers={"Authorization": f"Bearer {refresh_token}"})
    assert resp.status_code == 401


def test_me_returns_current_user(client, db_session):
    user = seed_user(db_session)
    resp = client.get("/users/me", headers=auth_headers(user))
    assert resp.status_code == 200
    assert resp.json()["user"]["username"] == "alice"


def test_access_token_of_deleted_user(client, db_session):
    user = seed_user(db_session)
    token = create_access_token(user.user_id)
    db_session.delete(user)
    db_session.commit()
    resp = client.get("/users/me", headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 401
    assert resp.json()["message"] == "Invalid User"


def test_refresh_access_token(client, db_session):
    user = seed_user(db_session)
    client.post(
        "/users/signin",
        json={"username": user.username, "password": "correct-password"},
    )
    resp = client.post("/users/refresh_token")
    assert resp.status_code == 200
    payload = verify_token(resp.json()["accessToken"], TokenKind.ACCESS)
    assert payload["sub"] == str(user.user_id)


def test_refresh_without_cookie(client):
    resp = client.post("/users/refresh_token")
    assert resp.status_code == 401
    assert resp.json()["message"] == "No refresh token provided"


def test_refresh_with_invalid_cookie(client):
    client.cookies.set("refreshToken", "garbage")
    resp = client.post("/users/refresh_token")
    assert resp.status_code == 403
    assert resp.json()["message"] == "Invalid or expired refresh token"


def test_refresh_for_unverified_user(client, db_session):
    from twilight.core.security import create_refresh_token

    user = seed_user(db_session, is_verified=False)
    client.cookies.set("refreshToken", create_refresh_token(user.user_id))
    resp = client.post("/users/refresh_token")
    assert resp.status_code == 403
    assert resp.json()["message"] == "Invalid User"


def test_logout_clears_cookie(client, db_session):
    user = seed_user(db_session)
    client.post(
        "/users/signin",
        json={"username": user.username, "password": "correct-password"},
    )
    resp = client.post("/users/logout")
    assert resp.status_code == 204
    assert 'refreshToken=""' in resp.headers["set-cookie"] or "Max-Age=0" in resp.headers["set-cookie"]


def test_logout_without_cookie(client):
    resp = client.post("/users/logout")
    assert resp.status_code == 204
    assert "set-cookie" not in resp.headers
