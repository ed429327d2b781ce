import sys
from pathlib import Path

# Ajoute la racine du projet au PYTHONPATH EN PREMIER
sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

# Créer engine SQLite pour tests AVANT d'importer app
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///./test.db"
test_engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL, 
    connect_args={"check_same_thread": False}
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)

# PATCH: remplacer le engine et SessionLocal du core.database AVANT d'importer app
import planner.core.database
planner.core.database.engine = test_engine
planner.core.database.SessionLocal = TestingSessionLocal

# Maintenant importer app (qui utilisera notre engine SQLite)
from planner.core.database import Base, get_db
from planner.main import app
from planner.models.category import Category
from planner.models.user import User
from planner.models.workspace import Workspace

def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()

@pytest.fixture(autouse=True)
def setup_teardown():
    """Crée et nettoie la DB avant/après chaque test"""
    Base.metadata.drop_all(bind=test_engine)
    Base.metadata.create_all(bind=test_engine)
    yield
    Base.metadata.drop_all(bind=test_engine)

# Override la dépendance
app.dependency_overrides[get_db] = override_get_db


@pytest.fixture
def client():
    """Client de test FastAPI"""
    from fastapi.testclient import TestClient
    return TestClient(app)


@pytest.fixture
def db():
    """Session DB pour les tests"""
    db = TestingSessionLocal()
    yield db
    db.close()


def signup_and_login(client, email, username, password="pass123"):
    client.post(
        "/auth/signup",
        json={"email": email, "username": username, "password": password}
    )
    login_response = client.post(
        "/auth/login",
        json={"email": email, "password": password}
    )
    return login_response.json()["access_token"]


@pytest.fixture
def auth_token(client):
    """Crée un utilisateur et retourne son token JWT"""
    return signup_and_login(client, "test@example.com", "testuser")


@pytest.fixture
def headers(auth_token):
    return {"Authorization": f"Bearer {auth_token}"}


@pytest.fixture
def workspace_id(client, headers):
    response = client.post("/workspaces", headers=headers, json={"name": "Perso"})
    return response.json()["id"]


@pytest.fixture
def category_id(client, headers, workspace_id):
    response = client.post(
        f"/workspaces/{workspace_id}/categories",
        headers=headers,
        json={"label": "Deep work"}
    )
    return response.json()["id"]


@pytest.fixture
def owner(db):
    """User + workspace + une catégorie créés directement en base (tests de services)"""
    user = User(email="owner@example.com", username="owner")
    user.set_password("pass123")
    db.add(user)
    db.commit()

    workspace = Workspace(user_id=user.id, name="Owner space")
    db.add(workspace)
    db.commit()

    category = Category(workspace_id=workspace.id, label="Sport")
    db.add(category)
    db.commit()

    return {"user_id": user.id, "workspace_id": workspace.id, "category_id": category.id}
