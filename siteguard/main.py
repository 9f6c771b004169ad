from fastapi import FastAPI

from . import __version__
from .config import get_settings, setup_logging
from .routers import billing, pages, scans

settings = get_settings()
setup_logging()

app = FastAPI(
    title=settings.APP_NAME,
    description="Website security, performance and compliance audit reports",
    version=__version__,
)

app.include_router(pages.router)
app.include_router(scans.router)
app.include_router(billing.router)


@app.get("/health", include_in_schema=False)
async def health_check():
    """Returns instantly; touches no upstream service."""
    return {
        "status": "healthy",
        "app": app.title,
        "version": app.version,
    }
