from quillmarket.models.enums import UserRole


class TestRegister:
    def test_register_writer_starts_pending(self, client):
        r = client.post("/api/register", json={
            "username": "wanjiru",
            "password": "s3cret-pass",
            "email": "wanjiru@example.com",
            "full_name": "Wanjiru K",
            "role": "writer",
        })
        assert r.status_code == 201
        data = r.get_json()
        assert data["user"]["approval_status"] == "pending"
        assert data["user"]["balance"] == 0
        assert "password" not in data["user"]
        assert data["access_token"]
        assert "access_token_cookie=" in r.headers.get("Set-Cookie", "")

    def test_register_client_is_approved(self, client):
        r = client.post("/api/register", json={
            "username": "acme",
            "password": "s3cret-pass",
            "email": "ops@acme.test",
            "full_name": "Acme Ltd",
            "role": "client",
        })
        assert r.status_code == 201
        assert r.get_json()["user"]["approval_status"] == "approved"

    def test_admin_cannot_self_register(self, client):
        r = client.post("/api/register", json={
            "username": "sneaky",
            "password": "s3cret-pass",
            "email": "sneaky@example.com",
            "full_name": "Sneaky",
            "role": "admin",
        })
        assert r.status_code == 422
        issues = r.get_json()["error"]["details"]["issues"]
        assert any(i["path"] == "role" for i in issues)

    def test_duplicate_username(self, client, writer):
        r = client.post("/api/register", json={
            "username": writer.username,
            "password": "s3cret-pass",
            "email": "other@example.com",
            "full_name": "Other",
        })
        assert r.status_code == 400
        assert r.get_json()["error"]["code"] == "USER_EXISTS"

    def test_validation_errors_are_listed_per_field(self, client):
        r = client.post("/api/register", json={"username": "ab", "email": "not-an-email"})
        assert r.status_code == 422
        paths = {i["path"] for i in r.get_json()["error"]["details"]["issues"]}
        assert {"username", "email", "password", "full_name"} <= paths


class TestSession:
    def test_login_sets_cookie_session(self, client, make_user):
        user = make_user(UserRole.CLIENT)
        r = client.post("/api/login", json={"username": user.username, "password": "secret123"})
        assert r.status_code == 200

        r = client.get("/api/user")
        assert r.status_code == 200
        assert r.get_json()["user"]["id"] == user.id

    def test_login_bad_password(self, client, writer):
        r = client.post("/api/login", json={"username": writer.username, "password": "wrong"})
        assert r.status_code == 401
        assert r.get_json()["error"]["code"] == "AUTH_FAILED"

    def test_user_requires_session(self, client):
        r = client.get("/api/user")
        assert r.status_code == 401
        assert r.get_json()["error"]["code"] == "UNAUTHORIZED"

    def test_bearer_header(self, client, writer, auth):
        r = client.get("/api/user", headers=auth(writer))
        assert r.status_code == 200
        assert r.get_json()["user"]["role"] == "writer"

    def test_logout_clears_cookie(self, client, writer):
        client.post("/api/login", json={"username": writer.username, "password": "secret123"})
        r = client.post("/api/logout")
        assert r.status_code == 200

        r = client.get("/api/user")
        assert r.status_code == 401
