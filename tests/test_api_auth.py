from datetime import timedelta

from fastapi.testclient import TestClient

from inventory_api.core.config import settings
from inventory_api.core.security import Identity, create_access_token
from inventory_api.main import create_app


def test_register_and_me(client):
	res = client.post("/api/auth/register", json={"username": "alice", "email": "alice@x.com", "password": "Abcdef12"})
	assert res.status_code == 201
	body = res.json()
	assert body["message"] == "User registered successfully"
	assert set(body["user"]) == {"id", "username", "email", "role", "createdAt"}
	assert body["user"]["role"] == "user"

	me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {body['token']}"})
	assert me.status_code == 200
	assert me.json()["username"] == "alice"
	assert "password_hash" not in me.json()


def test_register_validation_failure_lists_fields(client):
	res = client.post("/api/auth/register", json={"username": "a", "email": "bad", "password": "x"})
	assert res.status_code == 400
	body = res.json()
	assert body["error"] == "Validation failed"
	assert {d["field"] for d in body["details"]} == {"username", "email", "password"}
	assert all(d["location"] == "body" for d in body["details"])


def test_malformed_json_is_reported_against_the_body(client):
	res = client.post("/api/auth/register", content="{bad", headers={"Content-Type": "application/json"})
	assert res.status_code == 400
	assert [(d["field"], d["location"]) for d in res.json()["details"]] == [("body", "body")]


def test_register_conflict(client, register):
	register("alice")
	res = client.post("/api/auth/register", json={"username": "alice", "email": "new@x.com", "password": "Abcdef12"})
	assert res.status_code == 409
	assert res.json()["error"] == "User already exists"
	assert res.json()["field"] == "username"

	res = client.post("/api/auth/register", json={"username": "newbie", "email": "alice@x.com", "password": "Abcdef12"})
	assert res.status_code == 409
	assert res.json()["field"] == "email"


def test_login(client, register):
	register("alice")
	res = client.post("/api/auth/login", json={"username": "alice", "password": "Abcdef12"})
	assert res.status_code == 200
	assert res.json()["message"] == "Login successful"
	assert res.json()["user"]["username"] == "alice"
	assert res.json()["token"]


def test_login_failures(client, register):
	register("alice")
	wrong = client.post("/api/auth/login", json={"username": "alice", "password": "Nope1234"})
	unknown = client.post("/api/auth/login", json={"username": "ghost", "password": "Abcdef12"})
	assert wrong.status_code == unknown.status_code == 401
	assert wrong.json()["error"] == unknown.json()["error"] == "Invalid credentials"

	empty = client.post("/api/auth/login", json={})
	assert empty.status_code == 400
	assert len(empty.json()["details"]) == 2


def test_me_requires_token(client):
	res = client.get("/api/auth/me")
	assert res.status_code == 401
	assert res.json()["error"] == "Access token required"


def test_me_rejects_bad_and_expired_tokens(client):
	expired = create_access_token(Identity(id="1", username="a", role="user"), expires_delta=timedelta(seconds=-1))
	for token in ["garbage", expired]:
		res = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
		assert res.status_code == 403
		assert res.json()["error"] == "Invalid or expired token"


def test_me_for_user_that_no_longer_exists(client):
	token = create_access_token(Identity(id="missing", username="ghost", role="user"))
	res = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
	assert res.status_code == 404
	assert res.json()["error"] == "User not found"


def test_seeded_accounts_can_log_in(seeded_client):
	res = seeded_client.post("/api/auth/login", json={"username": "admin", "password": "Admin123!"})
	assert res.status_code == 200
	assert res.json()["user"]["role"] == "admin"
	res = seeded_client.post("/api/auth/login", json={"username": "testuser", "password": "Test123!"})
	assert res.json()["user"]["role"] == "user"


def test_responses_carry_request_id(client):
	res = client.get("/api/health")
	assert res.status_code == 200
	assert res.json()["status"] == "healthy"
	assert res.headers["X-Request-Id"]


def test_unknown_route(client):
	res = client.get("/api/nothing")
	assert res.status_code == 404
	assert res.json()["error"] == "Not Found"
	assert res.json()["message"] == "Cannot GET /api/nothing"


def test_unexpected_errors_do_not_leak_details():
	app = create_app(seed_demo_data=False)

	@app.get("/api/boom")
	def boom():
		raise RuntimeError("secret internals")

	with TestClient(app, raise_server_exceptions=False) as c:
		res = c.get("/api/boom")
	assert res.status_code == 500
	assert res.json()["error"] == "Internal server error"
	assert "secret" not in res.text


def test_101st_request_in_a_window_is_rate_limited(client):
	for _ in range(100):
		assert client.get("/api/health").status_code == 200
	res = client.get("/api/health")
	assert res.status_code == 429
	assert res.json()["error"] == "Too many requests, please try again later."
	assert res.headers["X-Request-Id"]

	# One budget per client, shared by every route.
	res = client.post("/api/auth/login", json={"username": "alice", "password": "Abcdef12"})
	assert res.status_code == 429


def test_rate_limit_reads_settings(monkeypatch):
	monkeypatch.setattr(settings, "RATE_LIMIT_MAX", 2)
	with TestClient(create_app(seed_demo_data=False)) as c:
		assert [c.get("/api/health").status_code for _ in range(3)] == [200, 200, 429]

	monkeypatch.setattr(settings, "RATE_LIMIT_ENABLED", False)
	with TestClient(create_app(seed_demo_data=False)) as c:
		assert {c.get("/api/health").status_code for _ in range(3)} == {200}
