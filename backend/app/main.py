# Clinic Receipts backend entrypoint.

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from backend.app.api import admin_templates, admin_users, auth, dashboard, profile, receipts
from backend.app.api.error_handlers import register_exception_handlers
from backend.app.core.dev_seed import ensure_default_template
from backend.app.core.settings import get_settings
from backend.app.db.base import Base
from backend.app.db.session import SessionLocal, engine

settings = get_settings()

logging.basicConfig(level=getattr(logging, settings.log_level.upper(), logging.INFO))
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.app_name, version=settings.api_version)

origins = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(auth.router)
app.include_router(receipts.router)
app.include_router(dashboard.router)
app.include_router(profile.router)
app.include_router(admin_users.router)
app.include_router(admin_templates.router)


@app.get("/")
def read_root():
    return {"app": "Clinic Receipts backend", "status": "ok"}


@app.get("/health")
def health_check():
    return {"status": "ok"}


@app.on_event("startup")
def prepare_database():
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        ensure_default_template(db)
    finally:
        db.close()
    logger.info("%s started (%s)", settings.app_name, settings.environment)
