# social_dashboard/main.py
import logging
import os

import structlog
import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from social_dashboard.errors import DashboardError
from social_dashboard.infrastructure.database import init_db
from social_dashboard.middleware.logging import RequestIdMiddleware
from social_dashboard.routers.auth_router import router as auth_router
from social_dashboard.routers.user_router import router as user_router
from social_dashboard.routers.post_router import router as post_router
from social_dashboard.routers.publish_router import router as publish_router
from social_dashboard.routers.analytics_router import router as analytics_router
from social_dashboard.routers.content_router import router as content_router
from social_dashboard.routers.platforms_router import router as platforms_router
from social_dashboard.routers.media_router import router as media_router

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


def configure_structlog():
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer()
        ],
        wrapper_class=structlog.make_filtering_bound_logger(getattr(logging, LOG_LEVEL, logging.INFO)),
        context_class=dict,
    )


configure_structlog()
logger = structlog.get_logger()

app = FastAPI(title="Social Dashboard")

app.add_middleware(RequestIdMiddleware)

app.include_router(auth_router)
app.include_router(user_router)
app.include_router(post_router)
app.include_router(publish_router)
app.include_router(analytics_router)
app.include_router(content_router)
app.include_router(platforms_router)
app.include_router(media_router)


@app.exception_handler(DashboardError)
async def dashboard_error_handler(request: Request, exc: DashboardError):
    logger.info("request_rejected", code=exc.code, status=exc.status_code, error=str(exc))
    return JSONResponse(status_code=exc.status_code, content=jsonable_encoder(exc.to_dict()))


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content={"detail": jsonable_encoder(exc.errors()), "code": "VALIDATION_ERROR"},
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("unhandled_error", error=str(exc))
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


@app.on_event("startup")
async def on_startup():
    await init_db()
    logger.info("app_startup")


if __name__ == "__main__":
    uvicorn.run("social_dashboard.main:app", host="0.0.0.0", port=int(os.getenv("PORT", 8000)), reload=True)
