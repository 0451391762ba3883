"""
Demo REST backend for the MedAssist app.

Serves the static sample dataset:
- GET  /articles   health articles
- GET  /providers  doctors/providers
- POST /bookings   appointment bookings (validated, not persisted)

Acts as the primary source of the synchronized fetcher in local setups.
"""

import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from medassist import __version__
from medassist.api.articles import router as articles_router
from medassist.api.bookings import router as bookings_router
from medassist.api.providers import router as providers_router
from medassist.config.system_settings import system_settings

logging.basicConfig(level=system_settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="MedAssist REST API",
    description="Articles, providers and bookings for the MedAssist app",
    version=__version__
)

# For development only
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)


@app.get("/", response_class=PlainTextResponse)
async def root():
    return "MedAssist REST API Server is running!"


# Register API routers
app.include_router(articles_router)
app.include_router(providers_router)
app.include_router(bookings_router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=system_settings.SERVER_HOST, port=system_settings.SERVER_PORT)
