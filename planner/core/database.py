from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from os import getenv

DATABASE_URL = getenv("DATABASE_URL", "postgresql+psycopg://planner:planner@db:5432/planner")

# SQLite (dev local / tests): la session peut changer de thread dans FastAPI
connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(DATABASE_URL, echo=False, connect_args=connect_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()

def get_db():
    """Dépendance session DB, une par requête (fermée = rollback implicite si non commitée)"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
