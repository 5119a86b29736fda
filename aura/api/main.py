from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from aura import __version__
from aura.common.logger import setup_logger
from aura.core.config import get_settings
from aura.api.routers import events, reviews, dashboard, members, health
from aura.api.middleware.request_logging import RequestLoggingMiddleware

settings = get_settings()

setup_logger(
    "aura",
    log_dir=settings.log_dir,
    level=settings.log_level,
    file_logging=settings.file_logging,
    console_logging=settings.console_logging,
)

app = FastAPI(
    title=settings.app_name,
    description="Peer-approved recognition points for groups",
    version=__version__,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.debug else settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Request logging middleware
app.add_middleware(RequestLoggingMiddleware)

# Include routers
app.include_router(events.router, prefix="/api")
app.include_router(reviews.router, prefix="/api")
app.include_router(dashboard.router, prefix="/api")
app.include_router(members.router, prefix="/api")
app.include_router(health.router)


@app.get("/", response_class=PlainTextResponse)
async def root():
    return "Backend is running!"
