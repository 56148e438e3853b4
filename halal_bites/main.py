# ============================================================
#   HALAL BITES API
#   Restaurant directory: listing, proximity search, comments,
#   admin dashboard
# ============================================================

import logging

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import sentry_sdk

from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from halal_bites.api.v1 import health
from halal_bites.api.v1.router import api_router
from halal_bites.core.config import get_settings
from halal_bites.core.dependencies import get_cache_service
from halal_bites.core.exceptions import ConstraintViolation, StoreUnavailable
from halal_bites.core.rate_limit import limiter
from halal_bites.services.cache import CacheService
from halal_bites.utils.sentry import init_sentry

settings = get_settings()

# ============================================================
# LOGGING + SENTRY
# ============================================================
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("halal_bites")

init_sentry(settings)

# ============================================================
# FASTAPI APP + RATE LIMITING
# ============================================================
app = FastAPI(title=settings.PROJECT_NAME)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


@app.exception_handler(StoreUnavailable)
async def store_unavailable_handler(request: Request, exc: StoreUnavailable):
    logger.error("Database unavailable on %s %s: %s", request.method, request.url.path, exc)
    sentry_sdk.capture_exception(exc)
    return JSONResponse(status_code=503, content={"detail": "Database unavailable"})


@app.exception_handler(ConstraintViolation)
async def constraint_violation_handler(request: Request, exc: ConstraintViolation):
    logger.warning("Write rejected on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=409, content={"detail": "Conflicts with existing data"})

# ============================================================
# CORS
# ============================================================
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ============================================================
# REGISTER ROUTERS
# ============================================================
app.include_router(api_router, prefix=settings.API_PREFIX)
app.include_router(health.router)

# ============================================================
# ROOT ROUTE
# ============================================================
@app.get("/")
async def root(cache: CacheService = Depends(get_cache_service)):
    return {
        "message": settings.PROJECT_NAME,
        "redis": "connected" if cache.ping() else "down",
        "status": "OK",
    }

# ============================================================
# UVICORN ENTRYPOINT
# ============================================================
if __name__ == "__main__":
    import uvicorn
    uvicorn.run("halal_bites.main:app", host="0.0.0.0", port=8000, reload=True)
