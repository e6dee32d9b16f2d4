from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from pizza_service.core.config import get_settings
from pizza_service.core.exceptions import ServiceError
from pizza_service.routers.auth import router as auth_router
from pizza_service.routers.franchise import router as franchise_router
from pizza_service.routers.health import router as health_router
from pizza_service.routers.order import router as order_router
from pizza_service.routers.user import router as user_router

settings = get_settings()

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.CREATE_TABLES_ON_STARTUP:
        from pizza_service.db.init_db import init_db
        from pizza_service.db.session import engine

        init_db(engine)
    yield


app = FastAPI(
    title=settings.APP_NAME,
    description="Pizza ordering API - Franchises, stores, menu and orders fulfilled by the pizza factory.",
    version=settings.VERSION,
    lifespan=lifespan,
)


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_content())


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Report malformed request bodies and parameters as 400."""
    problems = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        problems.append(f"{location}: {error.get('msg')}" if location else error.get("msg", "invalid"))
    return JSONResponse(
        status_code=400,
        content={"message": "; ".join(problems) or "invalid request"},
    )


@app.exception_handler(IntegrityError)
async def integrity_error_handler(request: Request, exc: IntegrityError):
    logger.warning("Rejected write violating a database constraint: %s", exc.orig)
    return JSONResponse(status_code=400, content={"message": "request conflicts with existing data"})


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    message = exc.detail
    if exc.status_code == 404 and exc.detail == "Not Found":
        message = "unknown endpoint"
    return JSONResponse(status_code=exc.status_code, content={"message": message}, headers=exc.headers)


# Global exception handler for unhandled errors
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Handle unexpected server errors with structured response."""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={
            "message": "An unexpected error occurred. Please try again later.",
            "request_id": request.headers.get("X-Request-ID"),
        }
    )

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(health_router)
app.include_router(auth_router, prefix="/api")
app.include_router(user_router, prefix="/api")
app.include_router(order_router, prefix="/api")
app.include_router(franchise_router, prefix="/api")


@app.get("/")
def read_root():
    return {
        "message": "welcome to JWT Pizza",
        "version": settings.VERSION,
        "docs": "/docs",
    }
