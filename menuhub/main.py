import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from menuhub.core.config import CORS_ORIGINS, DEV_ADMIN_EMAIL, DEV_ADMIN_PASSWORD, DEV_ADMIN_PHONE
from menuhub.core.database import Base, SessionLocal, engine
from menuhub.core.error_handlers import register_exception_handlers
from menuhub.core.logging_setup import configure_logging
from menuhub.core.startup_checks import validate_auth_settings, validate_database_environment
from menuhub.middleware.observability import ObservabilityMiddleware
import menuhub.models  # registers every table on Base.metadata before create_all

from menuhub.routers.auth import router as auth_router
from menuhub.routers.menu_items import router as menu_items_router
from menuhub.routers.menus import router as menus_router
from menuhub.routers.restaurants import router as restaurants_router
from menuhub.routers.users import router as users_router
from menuhub.services.admin_bootstrap import upsert_admin_user

configure_logging()

logger = logging.getLogger(__name__)
BOOTSTRAP_PREFIX = "[ADMIN_BOOTSTRAP]"


@asynccontextmanager
async def lifespan(_: FastAPI):
    _startup_tasks()
    yield


app = FastAPI(
    title="MenuHub API",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(ObservabilityMiddleware)
register_exception_handlers(app)


def _bootstrap_initial_admin() -> None:
    if not DEV_ADMIN_PASSWORD or not DEV_ADMIN_PHONE or not DEV_ADMIN_EMAIL:
        logger.info("%s skipped: configure DEV_ADMIN_PHONE, DEV_ADMIN_EMAIL and DEV_ADMIN_PASSWORD.", BOOTSTRAP_PREFIX)
        return

    db = SessionLocal()
    try:
        admin, created = upsert_admin_user(
            db,
            phone_number=DEV_ADMIN_PHONE,
            email=DEV_ADMIN_EMAIL,
            password=DEV_ADMIN_PASSWORD,
        )
        logger.info(
            "%s %s id=%s email=%s",
            BOOTSTRAP_PREFIX,
            "created" if created else "promoted",
            admin.id,
            admin.email,
        )
    except Exception:
        logger.exception("%s ERROR bootstrap failed", BOOTSTRAP_PREFIX)
        raise
    finally:
        db.close()


def _startup_tasks() -> None:
    validate_database_environment()
    validate_auth_settings()
    Base.metadata.create_all(bind=engine)
    _bootstrap_initial_admin()


app.include_router(auth_router)
app.include_router(users_router)
app.include_router(restaurants_router)
app.include_router(menus_router)
app.include_router(menu_items_router)


@app.get("/")
def root():
    return {"status": "ok"}


@app.get("/health")
def health():
    return {"status": "healthy"}


@app.get("/ping")
def ping():
    return {"message": "pong"}
