import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from planner.core.config import settings
from planner.core.database import engine, Base
from planner.core.errors import PlannerError
from planner.models import category, report, routine, schedule_entry, task, user, workspace  # noqa: F401
from planner.routers import health, auth, workspaces, categories, routines, schedule_entries, tasks, reports

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

# Init DB
Base.metadata.create_all(bind=engine)

app = FastAPI(
    title="Routine Planner API",
    version="0.1.0"
)


@app.exception_handler(PlannerError)
async def planner_error_handler(request: Request, exc: PlannerError):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    # pas de retry: l'erreur du store est renvoyée telle quelle
    logger.error(f"Database error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"detail": str(exc)})


# Routes
app.include_router(health.router, prefix="/health")
app.include_router(auth.router)
app.include_router(workspaces.router)
app.include_router(categories.router)
app.include_router(routines.router)
app.include_router(schedule_entries.router)
app.include_router(tasks.router)
app.include_router(reports.router)
