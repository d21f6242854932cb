import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from milk_api.api.deliveries import router as deliveries_router
from milk_api.config.config import CORS_HEADERS, PORT
from milk_api.utils.error_utils import DeliveryNotFoundError, describe_validation_error, log_error

# --- Logging Setup ---
logging.basicConfig(
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    level=logging.INFO
)

# Set higher logging level for noisy libraries
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("urllib3").setLevel(logging.WARNING)
logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

logger = logging.getLogger(__name__)


# --- FastAPI Lifespan Management ---
@asynccontextmanager
async def lifespan(app: FastAPI):
    """Logs startup and shutdown. Config and credentials are read per request."""
    logger.info("Milk Delivery API starting up...")
    yield
    logger.info("Milk Delivery API shut down.")


# --- FastAPI App Instance ---
app = FastAPI(
    title="Milk Delivery API",
    description="CRUD proxy over the milk deliveries Google Sheet",
    version="1.0.0",
    lifespan=lifespan
)

app.include_router(deliveries_router, prefix="/api/deliveries")
app.include_router(deliveries_router, prefix="/deliveries", include_in_schema=False)


# --- CORS / Upstream Failure Middleware ---
@app.middleware("http")
async def cors_and_errors(request: Request, call_next):
    """Answers preflight requests and stamps the fixed CORS headers on every response.

    Anything the route layer did not turn into a response (sheet/auth failures,
    config errors) becomes a 500 carrying the raw error message.
    """
    if request.method == "OPTIONS":
        response = Response(status_code=200)
    else:
        try:
            response = await call_next(request)
        except Exception as e:
            log_error(f"{request.method} {request.url.path} failed: {e}", exc_info=True)
            response = JSONResponse(status_code=500, content={"error": str(e)})
    response.headers.update(CORS_HEADERS)
    return response


# --- Exception Handlers ---
@app.exception_handler(DeliveryNotFoundError)
async def delivery_not_found_handler(request: Request, exc: DeliveryNotFoundError):
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc), "status": exc.status_code})


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 405:
        return JSONResponse(status_code=405, content={"error": "Method not allowed"}, headers=exc.headers)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail}, headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    # Malformed input is reported like any other failure
    message = describe_validation_error(exc)
    logger.error(f"Rejected {request.method} {request.url.path}: {message}")
    return JSONResponse(status_code=500, content={"error": message})


# Health check endpoint
@app.get("/health")
async def health_check():
    return {"status": "healthy"}


def main():
    """Runs the API with uvicorn (local development / simple deployments)."""
    import uvicorn
    logger.info(f"Starting Uvicorn server on port {PORT}...")
    uvicorn.run(app, host="0.0.0.0", port=PORT)


if __name__ == "__main__":
    main()
