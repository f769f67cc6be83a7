from contextlib import asynccontextmanager
import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from edconnect_backend.api.admin import admin_router
from edconnect_backend.api.classes import classes_router
from edconnect_backend.api.communication import communication_router
from edconnect_backend.api.records import records_router
from edconnect_backend.database import init_db
from edconnect_backend.settings import settings

logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):

    if settings.DEBUG_MODE != "production":
        init_db()

    logger.info(f"Portal backend started for school {settings.SCHOOL_ID} ({settings.DEBUG_MODE})")
    yield

app = FastAPI(lifespan=lifespan)

origins = [
    "*"
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(
    communication_router,
    tags=["messages", "announcements"]
)

app.include_router(
    classes_router,
    tags=["classes", "students"]
)

app.include_router(
    records_router,
    tags=["reports", "invoices", "timetables"]
)

app.include_router(
    admin_router,
    tags=["admin", "support"]
)

@app.head("/", status_code=204)
def get_status_head():
    return
