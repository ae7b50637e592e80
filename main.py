from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Security
from fastapi.security.api_key import APIKeyHeader
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.trustedhost import TrustedHostMiddleware
from fastapi.responses import JSONResponse
from fastapi.openapi.utils import get_openapi
from dotenv import load_dotenv
import os
import secrets

load_dotenv()

from utils.logger import logger
from api import deps
from api.assign import router as assign_router
from api.entities import router as entities_router
from api.history import router as history_router
from api.healthcheck import router as healthcheck_router
from utils.loader import seed_store

# env
API_KEY = os.getenv("API_KEY")
CORS_ALLOW_ORIGINS = [o for o in os.getenv("CORS_ALLOW_ORIGINS", "").split(",") if o]
ALLOWED_HOSTS = [h for h in os.getenv("ALLOWED_HOSTS", "").split(",") if h] or ["*"]
MAX_BODY_BYTES = int(os.getenv("MAX_BODY_BYTES", "0"))  # 0 = no limit
PARTICIPANTS_PATH = os.getenv("ASSIGN_PARTICIPANTS_PATH")
TARGETS_PATH = os.getenv("ASSIGN_TARGETS_PATH")


@asynccontextmanager
async def lifespan(app: FastAPI):
    history = deps.history_store.load()
    logger.info(f"📂 Loaded assignment history for {len(history)} participants")

    if PARTICIPANTS_PATH and TARGETS_PATH:
        counts = seed_store(deps.entity_store, PARTICIPANTS_PATH, TARGETS_PATH)
        logger.info(f"📥 Seeded entity store: {counts}")

    yield


# app
API_KEY_HEADER = "x-api-key"
api_key_header = APIKeyHeader(name=API_KEY_HEADER, auto_error=False)
app = FastAPI(title="Assignment Engine API", lifespan=lifespan)

# Swagger, the schema and the health probe stay reachable without a key
OPEN_PATHS = ("/openapi.json", "/redoc", "/docs", "/api/health/check")


def is_open_path(path: str) -> bool:
    return any(path == p or path.startswith(p + "/") for p in OPEN_PATHS)


if os.getenv("ENABLE_CORS") == "true":
    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ALLOW_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

app.add_middleware(TrustedHostMiddleware, allowed_hosts=ALLOWED_HOSTS)


@app.middleware("http")
async def reject_oversized_body(request: Request, call_next):
    declared = request.headers.get("content-length", "")
    if MAX_BODY_BYTES > 0 and declared.isdigit() and int(declared) > MAX_BODY_BYTES:
        logger.warning(f"🚫 Rejected {request.url.path}: body of {declared} bytes")
        return JSONResponse(
            status_code=413,
            content={"detail": f"Request body exceeds {MAX_BODY_BYTES} bytes"},
        )
    return await call_next(request)


@app.middleware("http")
async def require_api_key(request: Request, call_next):
    # Preflight requests never carry the key
    if request.method == "OPTIONS" or is_open_path(request.url.path):
        return await call_next(request)

    if not API_KEY:
        logger.warning("API_KEY not set; assignment endpoints are unauthenticated.")
        return await call_next(request)

    supplied = request.headers.get(API_KEY_HEADER) or ""
    if not secrets.compare_digest(supplied.encode(), API_KEY.encode()):
        return JSONResponse(status_code=401, content={"detail": "Unauthorized"})
    return await call_next(request)


def get_api_key(api_key: str = Security(api_key_header)):
    return api_key


def assignment_openapi():
    """OpenAPI schema advertising the x-api-key header on every protected route."""
    if app.openapi_schema:
        return app.openapi_schema

    schema = get_openapi(
        title=app.title,
        version=app.version,
        description="Participant-to-target assignment API",
        routes=app.routes,
    )
    schema.setdefault("components", {}).setdefault("securitySchemes", {})["ApiKeyAuth"] = {
        "type": "apiKey",
        "in": "header",
        "name": API_KEY_HEADER,
        "description": "Key configured through the API_KEY environment variable",
    }

    for path, operations in schema.get("paths", {}).items():
        security = [] if is_open_path(path) else [{"ApiKeyAuth": []}]
        for operation in operations.values():
            operation["security"] = security

    app.openapi_schema = schema
    return schema


app.openapi = assignment_openapi

# Register routers
app.include_router(assign_router, prefix="/api")
app.include_router(entities_router, prefix="/api")
app.include_router(history_router, prefix="/api")
app.include_router(healthcheck_router, prefix="/api")
