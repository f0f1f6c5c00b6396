"""
FastAPI app assembly: logging, middleware and router wiring.
"""
import logging

from fastapi import APIRouter, FastAPI, status
from fastapi.middleware.cors import CORSMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, PlainTextResponse

from expensync import __version__
from expensync.api.auth import router as auth_router
from expensync.api.budgets import router as budgets_router
from expensync.api.category_goals import router as category_goals_router
from expensync.api.debts import router as debts_router
from expensync.api.reminders import router as reminders_router
from expensync.api.summary import router as summary_router
from expensync.api.transactions import router as transactions_router
from expensync.utils.settings import get_server_settings

API_PREFIX = "/api/v1"

_settings = get_server_settings()

# Configure logging
LOG_LEVEL = getattr(logging, _settings.log_level, logging.INFO)
logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)
logger.setLevel(LOG_LEVEL)
logger.info("app_startup: log_level=%s", logging.getLevelName(LOG_LEVEL))

# Database schema is managed by Alembic migrations.

app = FastAPI(
    title="Expensync API",
    description="Personal finance tracking: transactions, budgets, debts, category goals and reminders.",
    version=__version__,
)

# Avoid implicit trailing-slash redirects for predictable URLs
app.router.redirect_slashes = False

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(_settings.cors_origins),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Middleware: writes outside /auth must carry a bearer credential
@app.middleware("http")
async def reject_anonymous_writes(request: Request, call_next):
    if request.method in ("POST", "PUT", "PATCH", "DELETE"):
        path = request.url.path or ""
        if path.startswith(API_PREFIX) and not path.startswith(f"{API_PREFIX}/auth/"):
            if not request.headers.get("authorization"):
                return JSONResponse(
                    {"detail": "Authentication required"},
                    status_code=status.HTTP_401_UNAUTHORIZED,
                    headers={"WWW-Authenticate": "Bearer"},
                )
    return await call_next(request)


@app.get("/", response_class=PlainTextResponse)
def root():
    return "API running"


api_router = APIRouter(prefix=API_PREFIX)


@api_router.get("", response_class=PlainTextResponse)
def api_root():
    return "Backend is running!"


api_router.include_router(auth_router)
api_router.include_router(transactions_router)
api_router.include_router(budgets_router)
api_router.include_router(category_goals_router)
api_router.include_router(debts_router)
api_router.include_router(summary_router)
api_router.include_router(reminders_router)

app.include_router(api_router)
