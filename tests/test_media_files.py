import pytest

from config import FilesSettings
from errors import ErrorKind
from repositories.media_file import MediaFileRepository
from repositories.pin import PinRepository
from repositories.tag import TagRepository
from schemas import BoardCreate, MediaFileCreate, PinCreate
from services.media_file import MediaFileService


async def add(media_file_service, name, **fields):
    result = await media_file_service.create_media_file(
        MediaFileCreate(path=f"/media/{name}.jpg", hash=f"hash-{name}", **fields)
    )
    return result.data


async def tags(tag_service, *names):
    return [(await tag_service.create_tag(name)).data for name in names]


async def test_create_media_file(media_file_service):
    result = await media_file_service.create_media_file(
        MediaFileCreate(path="/media/a.png", hash="abc", width=640, height=480, mime_type="image/png", size=2048)
    )

    assert result.success is True
    assert result.created is True
    assert result.data.width == 640
    assert result.message == "MediaFile created successfully."


async def test_same_hash_returns_existing_media_file(media_file_service):
    first = await media_file_service.create_media_file(MediaFileCreate(path="/media/a.png", hash="abc"))
    second = await media_file_service.create_media_file(MediaFileCreate(path="/elsewhere/a.png", hash="abc"))

    assert second.created is False
    assert second.data.id == first.data.id
    assert second.data.path == "/media/a.png"


async def test_get_media_file_with_and_without_tags(media_file_service, tag_service):
    media_file = await add(media_file_service, "one")
    (tag,) = await tags(tag_service, "red")
    await media_file_service.update_media_file_tags(media_file.id, [tag.id])

    with_tags = await media_file_service.get_media_file_by_id(media_file.id)
    assert [t.name for t in with_tags.data.tags] == ["red"]

    missing = await media_file_service.get_media_file_by_id(999)
    assert missing.success is True and missing.found is False


async def test_untagged_media_files(media_file_service, tag_service):
    tagged = await add(media_file_service, "tagged")
    bare = await add(media_file_service, "bare")
    (tag,) = await tags(tag_service, "red")
    await media_file_service.update_media_file_tags(tagged.id, [tag.id])

    result = await media_file_service.get_untagged_media_files()

    assert [m.id for m in result.data] == [bare.id]
    assert result.total == 1


async def test_media_files_with_all_tags(media_file_service, tag_service):
    red, blue, green = await tags(tag_service, "red", "blue", "green")
    both = await add(media_file_service, "both")
    only_red = await add(media_file_service, "only-red")
    everything = await add(media_file_service, "everything")
    await media_file_service.update_media_file_tags(both.id, [red.id, blue.id])
    await media_file_service.update_media_file_tags(only_red.id, [red.id])
    await media_file_service.update_media_file_tags(everything.id, [red.id, blue.id, green.id])

    result = await media_file_service.get_media_files_with_tags([red.id, blue.id])

    assert result.success is True
    assert [m.id for m in result.data] == [both.id, everything.id]
    assert result.total == 2
    assert result.page == 1


@pytest.mark.parametrize("tag_ids", [[], [0], "1,2", None])
async def test_media_files_with_tags_rejects_bad_ids(media_file_service, tag_ids):
    result = await media_file_service.get_media_files_with_tags(tag_ids)

    assert result.success is False
    assert result.error_kind == ErrorKind.VALIDATION
    assert result.total == 0


async def test_update_media_file_tags_replaces_the_set(media_file_service, tag_service):
    red, blue, green = await tags(tag_service, "red", "blue", "green")
    media_file = await add(media_file_service, "one")
    await media_file_service.update_media_file_tags(media_file.id, [red.id, blue.id])

    result = await media_file_service.update_media_file_tags(media_file.id, [green.id])

    assert result.success is True
    assert result.updated is True
    assert [t.name for t in result.data.tags] == ["green"]


async def test_update_media_file_tags_with_missing_tag(media_file_service, tag_service):
    (red,) = await tags(tag_service, "red")
    media_file = await add(media_file_service, "one")

    result = await media_file_service.update_media_file_tags(media_file.id, [red.id, 77])

    assert result.success is True
    assert result.updated is False
    assert result.message == "Tag 77 not found."
    current = await media_file_service.get_media_file_by_id(media_file.id)
    assert current.data.tags == []


async def test_update_tags_on_missing_media_file(media_file_service, tag_service):
    (red,) = await tags(tag_service, "red")

    result = await media_file_service.update_media_file_tags(500, [red.id])

    assert result.updated is False
    assert result.message == "MediaFile not found."


async def test_migrate_media_file_tag(media_file_service, tag_service):
    old, new = await tags(tag_service, "old", "new")
    first = await add(media_file_service, "first")
    second = await add(media_file_service, "second")
    other = await add(media_file_service, "other")
    await media_file_service.update_media_file_tags(first.id, [old.id])
    await media_file_service.update_media_file_tags(second.id, [old.id, new.id])
    await media_file_service.update_media_file_tags(other.id, [new.id])

    result = await media_file_service.migrate_media_file_tag(old.id, new.id)

    assert result.success is True
    assert result.updated is True
    assert [m.id for m in result.data] == [first.id, second.id]
    for media_file in result.data:
        assert [t.name for t in media_file.tags] == ["new"]

    leftover = await media_file_service.get_media_files_with_tags([old.id])
    assert leftover.total == 0
    moved = await media_file_service.get_media_files_with_tags([new.id])
    assert moved.total == 3


async def test_migrate_from_missing_tag(media_file_service, tag_service):
    (new,) = await tags(tag_service, "new")

    result = await media_file_service.migrate_media_file_tag(404, new.id)

    assert result.success is True
    assert result.updated is False
    assert result.message == "Tag not found."


async def test_delete_media_file_unlinks_pins(
    media_file_service, website_service, board_service, pin_service, session
):
    website = (await website_service.create_website("https://m.example")).data
    board = (await board_service.create_website_board(website.id, BoardCreate(name="Art"))).data
    media_file = await add(media_file_service, "pinned")
    pin = (await pin_service.create_board_pin(board.id, PinCreate(title="p"), media_file.id)).data

    result = await media_file_service.delete_media_file(media_file.id)

    assert result.success is True
    assert result.deleted is True
    assert result.data.id == media_file.id
    remaining = await PinRepository(session).get_by_id(pin.id)
    assert remaining is not None
    assert remaining.media_file_id is None


async def test_delete_missing_media_file(media_file_service):
    result = await media_file_service.delete_media_file(42)

    assert result.success is True
    assert result.deleted is False
    assert result.message == "MediaFile not found."


@pytest.fixture
def limited_media_file_service(session):
    files = FilesSettings(directory="/media", allowed_types=["jpg", "png"], max_size_mb=1)
    return MediaFileService(MediaFileRepository(session), TagRepository(session), files)


@pytest.mark.parametrize(
    "path, size",
    [("/media/tool.exe", None), ("/media/noextension", None), ("/media/huge.jpg", 1024 * 1024 + 1)],
)
async def test_create_media_file_outside_file_limits(limited_media_file_service, session, path, size):
    result = await limited_media_file_service.create_media_file(MediaFileCreate(path=path, hash="h", size=size))

    assert result.success is False
    assert result.created is False
    assert result.error_kind == ErrorKind.VALIDATION
    assert await MediaFileRepository(session).count() == 0


async def test_create_media_file_within_file_limits(limited_media_file_service):
    result = await limited_media_file_service.create_media_file(
        MediaFileCreate(path="/media/Photo.PNG", hash="h", size=1024 * 1024)
    )

    assert result.created is True
