import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from api.controllers import boards, media_files, pins, tags, websites
from config import Settings, load_settings
from database import Database

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup: settings are resolved here so importing this module never
        # requires the environment to be configured.
        app_settings = settings or load_settings()
        logging.basicConfig(
            level=logging.DEBUG if app_settings.app.environment == "development" else logging.INFO,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
        database = Database(app_settings.database.url, echo=app_settings.database.echo)
        await database.connect()
        app.state.settings = app_settings
        app.state.database = database
        logger.info("Media DB API started (%s)", app_settings.app.environment)

        yield
        # Shutdown
        await database.disconnect()

    app = FastAPI(title="Media DB API", lifespan=lifespan)

    app.include_router(websites.router)
    app.include_router(boards.router)
    app.include_router(pins.router)
    app.include_router(media_files.router)
    app.include_router(tags.router)

    @app.get("/")
    async def root():
        return {"message": "Media DB API is running"}

    return app


app = create_app()
