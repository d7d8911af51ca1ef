import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from .get_db import build_engine, build_session_factory, create_tables
from .settings import settings

logger = logging.getLogger("startup")


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Waiting for application startup...")

    engine = build_engine(settings.DATABASE_URL)
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)

    if settings.AUTO_CREATE_TABLES:
        try:
            await create_tables(engine)
            logger.info("Database tables ensured.")
        except Exception:
            logger.exception("Failed to create database tables")
            await engine.dispose()
            raise

    logger.info("Application startup complete.")

    yield

    await engine.dispose()
    logger.info("Database engine disposed.")
