from pathlib import Path
import logging

from fastapi import FastAPI
from fastapi.responses import RedirectResponse
from fastapi.staticfiles import StaticFiles

from navsite.config.settings import settings
from navsite.routes import streaming, web

logger = logging.getLogger(__name__)

# Create app
app = FastAPI(title="Enhanced Navigation Test Site")

# Resolve project base directory regardless of where the server is started from
BASE_DIR = Path(__file__).resolve().parent.parent

# Static files (enhanced-nav.js, estilos)
app.mount("/static", StaticFiles(directory=str(BASE_DIR / "static")), name="static")

app.include_router(streaming.router)
app.include_router(web.router)


@app.get("/health", tags=["health"])  # simple liveness endpoint
async def health():
    return {"status": "ok"}


if settings.path_base:

    @app.get("/", include_in_schema=False)
    async def root_redirect():
        return RedirectResponse(settings.path_base, status_code=302)


logger.info(f"Sitio de pruebas montado bajo '{settings.path_base or '/'}'")
