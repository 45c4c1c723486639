# task_tracker/main.py
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import exc as sa_exc

from task_tracker.config import settings
from task_tracker.database import engine, AsyncSessionLocal, Base
from task_tracker.errors import TaskTrackerError, task_tracker_error_handler
from task_tracker.logging_setup import setup_logging
from task_tracker.routers import auth, task
from task_tracker.seed import seed_demo_data
import task_tracker.models  # noqa: F401  (registers tables on Base.metadata)

logger = logging.getLogger(__name__)


app = FastAPI(title="Task Tracker", version="1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(TaskTrackerError, task_tracker_error_handler)

# Include Routers
app.include_router(auth.router)
app.include_router(task.router)

# Create DB Tables (use Alembic migrations in prod)
@app.on_event("startup")
async def startup_event():
    setup_logging(settings.LOG_LEVEL)

    # ignore duplicate-object errors from previous partial runs.
    async with engine.begin() as conn:
        try:
            await conn.run_sync(Base.metadata.create_all)
        except sa_exc.IntegrityError as e:
            msg = str(getattr(e, "orig", e))
            if "duplicate key value violates unique constraint" in msg or "already exists" in msg:
                logger.warning("Ignored duplicate DDL error during create_all: %s", msg)
            else:
                raise

    if settings.SEED_DEMO_DATA:
        async with AsyncSessionLocal() as session:
            await seed_demo_data(session)

@app.get("/")
def read_root():
    return {"message": "Welcome to Task Tracker Backend"}

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("task_tracker.main:app", host="0.0.0.0", port=8000, reload=True)
