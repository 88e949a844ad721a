"""
Next Ball - Cricket Ball-by-Ball Prediction Game API
"""
import logging
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from nextball import __version__
from nextball.config import configure_logging, settings, validate_config
from nextball.api.catalog import router as catalog_router
from nextball.api.game import router as game_router

configure_logging()
logger = logging.getLogger("nextball")

# Initialize FastAPI app
app = FastAPI(
    title="Next Ball",
    description="Predict the next ball of a replayed IPL match",
    version=__version__,
)

# CORS origins - configurable via environment variable
default_origins = [
    "http://localhost:5173",
    "http://localhost:5174",
    "http://127.0.0.1:5173",
    "http://127.0.0.1:5174",
]

# Add custom origins from environment (comma-separated)
if settings.CORS_ORIGINS:
    default_origins.extend([o.strip() for o in settings.CORS_ORIGINS.split(",") if o.strip()])

app.add_middleware(
    CORSMiddleware,
    allow_origins=default_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(catalog_router, prefix="/api")
app.include_router(game_router, prefix="/api")


# Every error response is {"error": "..."}
@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404 and exc.detail == "Not Found":
        logger.info("Route not found: %s %s", request.method, request.url.path)
        return JSONResponse(status_code=404, content={"error": "Route not found"})
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = "; ".join(
        f"{'.'.join(str(p) for p in err.get('loc', ()))}: {err.get('msg')}" for err in exc.errors()
    )
    return JSONResponse(status_code=422, content={"error": errors or "Invalid request"})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "Something went wrong"})


@app.on_event("startup")
def startup_event():
    """Check configuration on startup"""
    validate_config()
    logger.info("Serving match data in %s mode (data dir: %s)", settings.APP_MODE, settings.DATA_DIR)


@app.get("/")
def root():
    """Health check endpoint"""
    return {
        "name": "Next Ball API",
        "version": __version__,
        "status": "running",
    }


@app.get("/api/health")
def health_check():
    """API health check"""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
