from fastapi import FastAPI

from .db import engine, Base
from .routers.ingest import router as ingest_router
from .routers.read import router as read_router
from catalog.settings import LOG_LEVEL
from catalog.setup_logging import setup_logging
from catalog.normalizers import get_config

# --------------------------------------------------------------------
# App bootstrap
# --------------------------------------------------------------------
setup_logging(LOG_LEVEL) # Init Logging

# Create database tables if they don’t exist.
Base.metadata.create_all(bind=engine)

# Create the FastAPI app instance
app = FastAPI(title="Catalog Cleaner")

# --------------------------------------------------------------------
# Routes
# --------------------------------------------------------------------
@app.get("/healthz")
def health():
    """
    Simple health probe for monitoring.
    Returns:
      - ok: static True if the app is alive
      - aliases / date_formats: size of the loaded normalization config
    """
    cfg = get_config()
    return {
        "ok": True,
        "service": "catalog",
        "version": 1,
        "aliases": len(cfg.aliases),
        "date_formats": list(cfg.date_formats),
    }

# Register API routers:
app.include_router(ingest_router)
app.include_router(read_router)
