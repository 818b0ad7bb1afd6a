import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from config import AppSettings, DatabaseSettings, FilesSettings, Settings
from database import Database
from main import create_app
from repositories.board import BoardRepository
from repositories.media_file import MediaFileRepository
from repositories.pin import PinRepository
from repositories.tag import TagRepository
from repositories.website import WebsiteRepository
from services.board import BoardService
from services.media_file import MediaFileService
from services.pin import PinService
from services.tag import TagService
from services.website import WebsiteService


@pytest_asyncio.fixture
async def database(tmp_path):
    # A throwaway SQLite file per test keeps every test isolated.
    db = Database(f"sqlite:///{tmp_path / 'media.db'}")
    await db.connect()
    yield db
    await db.disconnect()


@pytest_asyncio.fixture
async def session(database):
    async with database.session() as session:
        yield session


@pytest.fixture
def website_service(session):
    return WebsiteService(WebsiteRepository(session))


@pytest.fixture
def board_service(session):
    return BoardService(BoardRepository(session), WebsiteRepository(session), TagRepository(session))


@pytest.fixture
def pin_service(session):
    return PinService(PinRepository(session), BoardRepository(session), MediaFileRepository(session))


@pytest.fixture
def media_file_service(session):
    return MediaFileService(MediaFileRepository(session), TagRepository(session))


@pytest.fixture
def tag_service(session):
    return TagService(TagRepository(session))


@pytest.fixture
def settings(tmp_path):
    return Settings(
        database=DatabaseSettings(url=f"sqlite:///{tmp_path / 'api.db'}"),
        files=FilesSettings(directory=str(tmp_path)),
        app=AppSettings(environment="test"),
    )


@pytest.fixture
def client(settings):
    # Entering the context runs the lifespan, which opens the database.
    with TestClient(create_app(settings)) as client:
        yield client
