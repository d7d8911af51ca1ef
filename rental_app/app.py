import logging

import uvicorn
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from core.catch_error_middleware import ErrorHandlerMiddleware
from core.exception_handler import (
    AppErrorHandler,
    HTTPErrorHandler,
    ValidationErrorHandler,
)
from core.exceptions import AppError
from core.lifespan import lifespan
from core.settings import settings
from routes.admin_routes import router as admin_router
from routes.commission_routes import router as commission_router
from routes.property_routes import router as property_router
from routes.request_routes import router as request_router
from routes.user_routes import router as user_router

logging.basicConfig(level=settings.LOG_LEVEL)
app = FastAPI(
    lifespan=lifespan,
    title=settings.PROJECT_NAME,
    version="1.0.0",
)

app.include_router(user_router, prefix=settings.API_PREFIX)
app.include_router(property_router, prefix=settings.API_PREFIX)
app.include_router(request_router, prefix=settings.API_PREFIX)
app.include_router(commission_router, prefix=settings.API_PREFIX)
app.include_router(admin_router, prefix=settings.API_PREFIX)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_HOSTS,
    allow_credentials="*" not in settings.ALLOWED_HOSTS,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health", tags=["System"])
async def health_check():
    return {"status": "ok", "message": f"{settings.PROJECT_NAME} is running"}


@app.get("/", tags=["System"])
async def index():
    return {
        "status": "success",
        "message": f"Welcome to the {settings.PROJECT_NAME}",
        "data": {
            "version": app.version,
            "apiPrefix": settings.API_PREFIX,
            "docs": "/docs",
            "health": "/health",
        },
    }


app.add_exception_handler(
    RequestValidationError,
    ValidationErrorHandler(),
)
app.add_exception_handler(AppError, AppErrorHandler())
app.add_exception_handler(StarletteHTTPException, HTTPErrorHandler())

app.add_middleware(ErrorHandlerMiddleware)


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=settings.PORT)
