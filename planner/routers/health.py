from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.orm import Session
from planner.core.database import get_db

router = APIRouter(tags=["health"])

@router.get("/z")
def healthz(db: Session = Depends(get_db)):
    # Check si l'API et la base répondent
    db.execute(text("SELECT 1"))
    return {"status": "ok"}
