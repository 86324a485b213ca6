from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.trustedhost import TrustedHostMiddleware
from fastapi.responses import JSONResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles
from pathlib import Path
import time
import logging
import os

from .api.views.home import router as home_router
from .api.views.auth import router as auth_router
from .api.views.admin import router as admin_router
from .api.views.doctor import router as doctor_router
from .api.views.patient import router as patient_router
from .core.config import settings
from .core.security import (
    AuthorizationError, SessionExpiredError,
    create_session_cookie, verify_session_cookie
)
from .core.session import get_session_store
from .services.api_client import ApiClient

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

STATIC_DIR = Path(__file__).resolve().parent / "static"

# Create FastAPI application
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.VERSION,
    description="Web portal for the clinic scheduling system",
    docs_url=None,
    redoc_url=None
)

# Only add TrustedHostMiddleware in production, not in testing
if not os.getenv("TESTING"):
    app.add_middleware(
        TrustedHostMiddleware,
        allowed_hosts=settings.ALLOWED_HOSTS
    )

# Session middleware: cookie carries a signed session id, redis holds the record
@app.middleware("http")
async def load_session(request: Request, call_next):
    if request.url.path.startswith("/static"):
        return await call_next(request)

    store = get_session_store()
    session = None

    cookie = request.cookies.get(settings.SESSION_COOKIE_NAME)
    if cookie:
        session_id = verify_session_cookie(cookie)
        if session_id:
            session = store.load(session_id)

    stored = session is not None
    if session is None:
        session = store.create()

    snapshot = session.model_dump_json()
    request.state.session = session
    response = await call_next(request)

    # Unchanged sessions are never written back, so a request cannot
    # resurrect notifications another request already popped
    if session.model_dump_json() != snapshot:
        store.save(session)
    elif stored:
        store.touch(session)
    else:
        return response

    response.set_cookie(
        settings.SESSION_COOKIE_NAME,
        create_session_cookie(session.id),
        max_age=settings.SESSION_EXPIRE_MINUTES * 60,
        httponly=True,
        samesite="lax"
    )
    return response

# Custom middleware for request logging and timing
@app.middleware("http")
async def add_process_time_header(request: Request, call_next):
    start_time = time.time()
    response = await call_next(request)
    process_time = time.time() - start_time
    response.headers["X-Process-Time"] = str(process_time)

    # Log request
    logger.info(
        f"{request.method} {request.url.path} - "
        f"Status: {response.status_code} - "
        f"Time: {process_time:.4f}s"
    )

    return response

# Exception handlers
@app.exception_handler(SessionExpiredError)
async def session_expired_handler(request: Request, exc: SessionExpiredError):
    session = request.state.session
    logger.info(f"Session expired on {request.url.path} (role: {session.role})")
    session.clear()
    session.notify(exc.detail, "error")
    return RedirectResponse("/", status_code=303)

@app.exception_handler(AuthorizationError)
async def authorization_error_handler(request: Request, exc: AuthorizationError):
    session = request.state.session
    logger.info(f"Role {session.role} denied access to {request.url.path}")
    session.notify(exc.detail, "warning")
    return RedirectResponse("/", status_code=303)

@app.exception_handler(404)
async def not_found_handler(request: Request, exc: HTTPException):
    return JSONResponse(
        status_code=404,
        content={
            "error": "Not Found",
            "message": "The requested resource was not found",
            "path": str(request.url.path)
        }
    )

@app.exception_handler(500)
async def internal_error_handler(request: Request, exc: Exception):
    logger.error(f"Internal server error: {str(exc)}")
    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal Server Error",
            "message": "An unexpected error occurred"
        }
    )

# Static assets and routers
app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

app.include_router(home_router)
app.include_router(auth_router)
app.include_router(admin_router)
app.include_router(doctor_router)
app.include_router(patient_router)

# Startup and shutdown events
@app.on_event("startup")
async def startup_event():
    """Initialize application on startup."""
    logger.info("Starting Clinic Portal...")
    app.state.api_client = ApiClient()
    logger.info(f"Using clinic backend at {settings.API_BASE_URL}")
    logger.info("Application startup complete")

@app.on_event("shutdown")
async def shutdown_event():
    """Cleanup on application shutdown."""
    logger.info("Shutting down Clinic Portal...")
    await app.state.api_client.close()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "clinic_portal.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
        log_level="info"
    )
