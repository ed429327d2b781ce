import uuid

from planner.core.security import create_access_token, create_refresh_token


def test_signup_success(client):
    """Test : créer un utilisateur avec succès"""
    unique_id = str(uuid.uuid4())[:8]
    response = client.post("/auth/signup", json={
        "email": f"signup_{unique_id}@example.com",
        "username": f"testuser_signup_{unique_id}",
        "password": "password123"
    })
    assert response.status_code == 200
    data = response.json()
    assert data["email"] == f"signup_{unique_id}@example.com"
    assert "password_hash" not in data  # Le password ne doit pas être retourné


def test_signup_duplicate_email(client):
    """Test : impossible de créer 2 users avec le même email"""
    client.post("/auth/signup", json={"email": "dup@example.com", "username": "u1", "password": "pw"})
    response = client.post("/auth/signup", json={"email": "dup@example.com", "username": "u2", "password": "pw"})
    assert response.status_code == 400


def test_login_wrong_password(client):
    client.post("/auth/signup", json={"email": "a@example.com", "username": "a", "password": "right"})
    response = client.post("/auth/login", json={"email": "a@example.com", "password": "wrong"})
    assert response.status_code == 401


def test_refresh_token_flow(client):
    client.post("/auth/signup", json={"email": "r@example.com", "username": "r", "password": "pw"})
    tokens = client.post("/auth/login", json={"email": "r@example.com", "password": "pw"}).json()

    response = client.post(f"/auth/refresh?refresh_token={tokens['refresh_token']}")
    assert response.status_code == 200
    assert response.json()["access_token"]

    # un access token n'est pas un refresh token
    assert client.post(f"/auth/refresh?refresh_token={tokens['access_token']}").status_code == 401


def test_refresh_token_cannot_authenticate_requests(client):
    token = create_refresh_token(1, "x@example.com")
    response = client.get("/workspaces", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


def test_missing_and_invalid_token(client):
    assert client.get("/workspaces").status_code == 401
    assert client.get("/workspaces", headers={"Authorization": "Bearer nope"}).status_code == 401


def test_token_of_unknown_user(client):
    token = create_access_token(4242, "ghost@example.com")
    assert client.get("/workspaces", headers={"Authorization": f"Bearer {token}"}).status_code == 404


def test_health(client):
    response = client.get("/health/z")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
