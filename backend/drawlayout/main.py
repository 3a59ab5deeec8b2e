import logging
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from drawlayout import __version__
from drawlayout.database import init_db
from drawlayout.routes import draws, layout

logger = logging.getLogger(__name__)

app = FastAPI(title="Draw Layout API")

_cors_origins = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
    "http://localhost:8081",  # Metro bundler (mobile client in dev)
]
_extra = os.getenv("CORS_ORIGINS", "")
if _extra:
    _cors_origins.extend(o.strip() for o in _extra.split(",") if o.strip())

app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Draw catalogue (fetched draw data)
app.include_router(draws.router, prefix="/api", tags=["draws"])

# Bracket geometry and round-robin standings
app.include_router(layout.router, prefix="/api", tags=["layout"])


@app.on_event("startup")
def on_startup():
    init_db()
    route_count = sum(1 for r in app.routes if getattr(r, "path", None))
    logger.info("Draw Layout API started: %d routes, version %s", route_count, __version__)


@app.get("/api/health")
def health_check():
    """Diagnostic endpoint to verify which code is running"""
    return {"app_name": "Draw Layout API", "version": __version__, "status": "healthy"}


@app.get("/")
def root():
    return {"message": "Draw Layout API"}
