from datetime import timedelta
from uuid import uuid4

from conftest import auth_headers, signup_dict
from quiet_hours.core.security import hash_password, issue_token, verify_password, verify_token


# ---------- HAPPY PATH TESTS ----------

def test_signup_returns_user_and_token(client):
    r = client.post("/api/auth/signup", json=signup_dict(email="Ada@QuietHours.io"))
    assert r.status_code == 201
    body = r.json()
    assert body["message"] == "User registered successfully"
    assert body["user"]["email"] == "ada@quiethours.io"
    assert body["user"]["firstName"] == "Ada"
    assert "passwordHash" not in body["user"]
    assert verify_token(body["token"]) is not None


def test_login_with_valid_credentials(client, register):
    user, _ = register()
    r = client.post("/api/auth/login", json={"email": "ada@quiethours.io", "password": "secret123"})
    assert r.status_code == 200
    assert r.json()["message"] == "Login successful"
    assert r.json()["user"]["id"] == user["id"]
    assert str(verify_token(r.json()["token"])) == user["id"]


def test_get_and_update_profile(client, register):
    user, headers = register()

    r = client.get("/api/auth/profile", headers=headers)
    assert r.status_code == 200
    assert r.json()["user"]["id"] == user["id"]

    r = client.put("/api/auth/profile", json={"bio": "Writes in libraries", "firstName": "Augusta"}, headers=headers)
    assert r.status_code == 200
    updated = r.json()["user"]
    assert updated["bio"] == "Writes in libraries"
    assert updated["firstName"] == "Augusta"
    # Omitted fields are unchanged
    assert updated["lastName"] == "Lovelace"
    assert updated["phone"] == "555-0100"


def test_password_whitespace_is_kept(client, register):
    register(password="  secret123  ")

    r = client.post("/api/auth/login", json={"email": "ada@quiethours.io", "password": "secret123"})
    assert r.status_code == 401

    r = client.post("/api/auth/login", json={"email": "ada@quiethours.io", "password": "  secret123  "})
    assert r.status_code == 200


def test_health(client):
    r = client.get("/api/health")
    assert r.status_code == 200
    assert r.json()["status"] == "OK"


# ---------- ERROR TESTS ----------

def test_signup_password_mismatch(client):
    r = client.post("/api/auth/signup", json=signup_dict(confirmPassword="different"))
    assert r.status_code == 400
    assert r.json()["message"] == "Passwords do not match"


def test_signup_short_password(client):
    r = client.post("/api/auth/signup", json=signup_dict(password="12345"))
    assert r.status_code == 400
    assert r.json()["message"] == "Password must be at least 6 characters"


def test_signup_duplicate_email(client, register):
    register()
    r = client.post("/api/auth/signup", json=signup_dict(email="ADA@quiethours.io"))
    assert r.status_code == 409
    assert r.json()["message"] == "User already exists with this email"


def test_signup_missing_field(client):
    data = signup_dict()
    del data["email"]
    r = client.post("/api/auth/signup", json=data)
    assert r.status_code == 400
    assert "email" in r.json()["message"]


def test_login_wrong_password_and_unknown_email_look_the_same(client, register):
    register()
    wrong = client.post("/api/auth/login", json={"email": "ada@quiethours.io", "password": "nope-nope"})
    unknown = client.post("/api/auth/login", json={"email": "grace@quiethours.io", "password": "secret123"})
    assert wrong.status_code == unknown.status_code == 401
    assert wrong.json() == unknown.json() == {"message": "Invalid email or password"}


def test_profile_requires_token(client):
    r = client.get("/api/auth/profile")
    assert r.status_code == 401
    assert r.json()["message"] == "No token provided"


def test_profile_rejects_bad_token(client):
    r = client.get("/api/auth/profile", headers=auth_headers("not-a-jwt"))
    assert r.status_code == 403
    assert r.json()["message"] == "Invalid or expired token"


def test_profile_rejects_expired_token(client, register):
    user, _ = register()
    token = issue_token(user["id"], expires_delta=timedelta(seconds=-10))
    r = client.get("/api/auth/profile", headers=auth_headers(token))
    assert r.status_code == 403


def test_profile_of_deleted_user(client):
    r = client.get("/api/auth/profile", headers=auth_headers(issue_token(uuid4())))
    assert r.status_code == 404
    assert r.json()["message"] == "User not found"


def test_unknown_route(client):
    r = client.get("/api/nowhere")
    assert r.status_code == 404
    assert r.json() == {"message": "Route not found"}


# ---------- UNIT TESTS ----------

def test_password_hashing():
    hashed = hash_password("secret123")
    assert hashed != "secret123"
    assert verify_password("secret123", hashed)
    assert not verify_password("secret124", hashed)


def test_verify_password_never_raises_on_bad_hash():
    assert verify_password("secret123", "not-a-bcrypt-hash") is False
    assert verify_password("secret123", None) is False
