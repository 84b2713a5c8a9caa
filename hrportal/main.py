import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from hrportal.api import (
    attendance,
    auth,
    dashboard,
    employees,
    holidays,
    leaves,
    notifications,
    projects,
    user_settings,
    work_logs,
)
from hrportal.core.config import settings
from hrportal.core.database import close_db, init_db

handlers = [logging.StreamHandler()]
if settings.LOG_FILE:
    handlers.append(logging.FileHandler(settings.LOG_FILE))

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=handlers
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting server...")

    if settings.AUTO_CREATE_TABLES:
        await init_db()

    yield

    logger.info("Shutting down, closing connections...")

    try:
        await close_db()
    except Exception as e:
        logger.error(f"Error during shutdown: {str(e)}")


app = FastAPI(
    title=settings.APP_NAME,
    description="API for employee records, attendance, leave, holidays, work logs and notifications",
    version=settings.APP_VERSION,
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def add_process_time_header(request: Request, call_next):
    start_time = time.time()
    response = await call_next(request)
    process_time = time.time() - start_time
    response.headers["X-Process-Time"] = str(process_time)
    return response


app.include_router(auth.router)
app.include_router(employees.router)
app.include_router(attendance.router)
app.include_router(leaves.router)
app.include_router(holidays.router)
app.include_router(work_logs.router)
app.include_router(notifications.router)
app.include_router(projects.router)
app.include_router(user_settings.router)
app.include_router(dashboard.router)


@app.get("/", tags=["health"])
async def health_check():
    return {
        "status": "ok",
        "message": "Server is running",
        "version": settings.APP_VERSION
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run('hrportal.main:app', host='0.0.0.0', port=8000, reload=True)
