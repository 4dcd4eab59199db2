import os
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.sessions import SessionMiddleware


from app.core.logger import logger_manager
from app.core.exceptions import register_exception_handlers
from app.core.database.connection import db_manager
from app.core.config.settings import settings
from app.router.v1 import (
    admin_router,
    donation_router,
    health_router,
    subscriber_router,
)


logger_manager.setup()


logger = logger_manager.get_logger(__name__)


async def lifespan(_app: FastAPI):
    logger.info("🚩 Starting the application...")
    logger.info(f"🚧 You are Working in {settings.app.ENV} Environment")

    try:
        await db_manager.initialize()
        logger.info("🎉 Database connections initialized successfully")
        await db_manager.test_connections()
        logger.info("🎉 Database connections test successfully")
    except Exception as e:
        logger.error(f"❌ Database connection failed: {e}")
        logger.warning("⚠️ Application will start without database connections")

    yield

    try:
        await db_manager.close()
        logger.info("🎉 Database connections closed successfully")
    except Exception as e:
        logger.error(f"❌ Database connection closed failed: {e}")


app = FastAPI(
    lifespan=lifespan,
    title=settings.app.APP_NAME,
    description=settings.app.APP_DESCRIPTION,
    version=settings.app.APP_VERSION,
)


register_exception_handlers(app)


# Bare OPTIONS requests (no preflight headers) get an empty 200.
# Registered before CORSMiddleware so real preflights are answered there.
@app.middleware("http")
async def options_short_circuit(request: Request, call_next):
    if request.method == "OPTIONS":
        return JSONResponse(status_code=200, content={})
    return await call_next(request)


# CORS (preflight OPTIONS requests are answered here)
allow_origins = [x.strip()
                 for x in settings.cors.CORS_ALLOWED_ORIGINS.split(',') if x.strip()]
allow_methods = [x.strip()
                 for x in settings.cors.CORS_ALLOW_METHODS.split(',') if x.strip()]
allow_headers = [x.strip()
                 for x in settings.cors.CORS_ALLOW_HEADERS.split(',') if x.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=allow_origins,
    allow_methods=allow_methods,
    allow_headers=allow_headers,
    allow_credentials=settings.cors.CORS_ALLOW_CREDENTIALS,
)


# Admin login state
if not os.getenv("SESSION_SECRET_KEY"):
    logger.warning("⚠️ SESSION_SECRET_KEY is not set, using a random per-process key")
app.add_middleware(
    SessionMiddleware,
    secret_key=settings.session.SESSION_SECRET_KEY.get_secret_value(),
    max_age=settings.session.SESSION_MAX_AGE,
    https_only=settings.session.SESSION_HTTPS_ONLY,
    same_site="lax",
)


# The site calls both /subscribe and /api/subscribe
for prefix in ("", "/api"):
    app.include_router(health_router.router, prefix=prefix)
    app.include_router(subscriber_router.router, prefix=prefix)
    app.include_router(admin_router.router, prefix=prefix)
    app.include_router(donation_router.router, prefix=prefix)


if __name__ == "__main__":
    uvicorn.run(
        app="app.main:app",
        host="127.0.0.1",
        port=int(os.getenv("PORT", "3001")),
        reload=True,
    )
