import logging
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from config import CORS_ORIGINS, LOG_LEVEL, PORT
from graph_api.errors import GatewayError
from routes import auth, instagram, setup  # To add new route add: from routes import "new route name"

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger("app")

app = FastAPI(
    title="Instagram Posts API",
    version="2.0.0",
    description="Real Instagram API integration to retrieve posts by username",
    docs_url="/api-docs",
)
app.include_router(instagram.router)
app.include_router(auth.router)
app.include_router(setup.router)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials="*" not in CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.state.limiter = instagram.limiter


# --- Error handlers: every failure is {"success": false, "error": ...} ---

@app.exception_handler(GatewayError)
def gateway_error_handler(request: Request, exc: GatewayError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    else:
        logger.info("%s %s rejected (%s): %s", request.method, request.url.path, exc.status_code, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.payload())


@app.exception_handler(StarletteHTTPException)
def http_error_handler(request: Request, exc: StarletteHTTPException):
    # only the router raises these; our own errors are GatewayError.
    # a known path with the wrong method is still an unmatched endpoint
    if exc.status_code in (404, 405):
        return JSONResponse(status_code=404, content={"success": False, "error": "Endpoint not found"})
    return JSONResponse(status_code=exc.status_code, content={"success": False, "error": str(exc.detail)})


@app.exception_handler(RequestValidationError)
def request_validation_handler(request: Request, exc: RequestValidationError):
    first = exc.errors()[0] if exc.errors() else {}
    where = ".".join(str(p) for p in first.get("loc", ()))
    msg = f"Invalid request: {where} {first.get('msg', '')}".strip()
    return JSONResponse(status_code=400, content={"success": False, "error": msg})


@app.exception_handler(RateLimitExceeded)
def rate_limit_handler(request: Request, exc: RateLimitExceeded):
    return JSONResponse(
        status_code=429,
        content={"success": False, "error": "Rate limit exceeded. Try again later."},
    )


@app.exception_handler(Exception)
def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"success": False, "error": "Internal server error"})


# --- Routes ---

@app.get("/health")
def health():
    now = datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
    return {"status": "OK", "timestamp": now}


@app.get("/")
def root():
    return {
        "message": "Real Instagram Posts API",
        "documentation": "/api-docs",
        "setup": "/api/setup",
        "health": "/health",
        "note": "Instagram Basic Display API was discontinued Dec 2024. Use Graph API for business accounts.",
    }


if __name__ == "__main__":
    import uvicorn

    logger.info("API Documentation: http://localhost:%s/api-docs", PORT)
    logger.info("Setup Instructions: http://localhost:%s/api/setup", PORT)
    uvicorn.run(app, host="0.0.0.0", port=PORT)
