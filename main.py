# main.py
from http import HTTPStatus

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException

from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from snsfeed.core.config import settings
from snsfeed.core.limiter import limiter
from snsfeed.core.logger import configure_logging
from snsfeed.db.initial_data import init_db
from snsfeed.db.session import dispose_engine
from snsfeed.api.endpoints import auth, users

# Models must be registered on Base.metadata before init_db runs
from snsfeed.models import user, refresh_token # noqa

configure_logging()

app = FastAPI(
    title="SNS Feed API",
    description="SNS Feed API: accounts and JWT authentication",
    version="1.0.0",
)

app.state.limiter = limiter
app.add_middleware(SlowAPIMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def error_body(status_code: int, message: str) -> dict:
    try:
        reason = HTTPStatus(status_code).phrase
    except ValueError:
        reason = "Error"
    return {"message": message, "error": reason, "statusCode": status_code}


# Sync on purpose: SlowAPIMiddleware swaps coroutine handlers for slowapi's default one
def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded):
    response = JSONResponse(
        status_code=429,
        content=error_body(429, f"요청 한도를 초과했습니다: {exc.detail}"),
    )
    return request.app.state.limiter._inject_headers(response, request.state.view_rate_limit)

app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.status_code, str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    # Only the first problem is reported
    errors = exc.errors()
    message = errors[0].get("msg", "Bad Request") if errors else "Bad Request"
    message = message.removeprefix("Value error, ")
    logger.debug(f"Validation failed on {request.url.path}: {message}")
    return JSONResponse(status_code=400, content=error_body(400, message))


app.include_router(auth.router, prefix="/auth", tags=["auth"])
app.include_router(users.router, prefix="/users", tags=["users"])


@app.on_event("startup")
async def startup_event():
    await init_db()
    logger.info("SNS Feed API started")

@app.on_event("shutdown")
async def shutdown_event():
    logger.info("Shutting down: disposing database engine...")
    await dispose_engine()


@app.get("/")
def read_root():
    return {"message": "SNS Feed API is running!"}
