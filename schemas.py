from datetime import datetime
from typing import Any, List, Optional
from pydantic import BaseModel, ConfigDict, Field, model_validator
from sqlalchemy import inspect as sa_inspect

from database import Base
from results import CreateResult, DeleteResult, PaginatedResult, RetrieveResult, UpdateResult


class ORMModel(BaseModel):
    """Read schema built from an ORM row.

    Only attributes that are already loaded are read, so a relationship that
    was not eager-loaded comes out as ``None`` instead of triggering lazy IO
    outside the async context.
    """
    model_config = ConfigDict(from_attributes=True)

    @model_validator(mode="before")
    @classmethod
    def _loaded_attributes(cls, data: Any) -> Any:
        if not isinstance(data, Base):
            return data
        unloaded = sa_inspect(data).unloaded
        return {
            name: getattr(data, name)
            for name in cls.model_fields
            if name not in unloaded and hasattr(data, name)
        }


# Read schemas

class TagSummary(ORMModel):
    id: int
    name: str


class MediaFileSummary(ORMModel):
    id: int
    path: str
    hash: str
    width: Optional[int] = None
    height: Optional[int] = None
    mime_type: Optional[str] = None
    size: Optional[int] = None  # In bytes
    title: Optional[str] = None
    description: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class MediaFile(MediaFileSummary):
    tags: Optional[List[TagSummary]] = None  # Present when tags were loaded


class Tag(TagSummary):
    created_at: datetime
    updated_at: datetime
    media_files: Optional[List[MediaFileSummary]] = None
    # Newest few media files for the tag, attached by TagService
    sample_media_files: Optional[List[MediaFileSummary]] = None


class Website(ORMModel):
    id: int
    url: str
    name: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class BoardSummary(ORMModel):
    id: int
    name: str
    description: Optional[str] = None
    url: Optional[str] = None
    parent_id: Optional[int] = None
    website_id: int
    created_at: datetime
    updated_at: datetime


class Board(BoardSummary):
    website: Optional[Website] = None
    parent: Optional[BoardSummary] = None


class Pin(ORMModel):
    id: int
    title: Optional[str] = None
    description: Optional[str] = None
    source_url: Optional[str] = None
    download_status: Optional[str] = None
    board_id: int
    media_file_id: Optional[int] = None
    created_at: datetime
    updated_at: datetime
    media_file: Optional[MediaFileSummary] = None


# Input schemas

class WebsiteCreate(BaseModel):
    url: str = Field(min_length=1)
    name: Optional[str] = None


class BoardCreate(BaseModel):
    name: str = Field(min_length=1)
    description: Optional[str] = None
    url: Optional[str] = None


class BoardCreateRequest(BoardCreate):
    parent_board_name: Optional[str] = None


class BoardUpdate(BaseModel):
    """Only the fields that are set get written."""
    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    url: Optional[str] = None


class PinCreate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    source_url: Optional[str] = None
    download_status: Optional[str] = None


class PinCreateRequest(PinCreate):
    media_file_id: Optional[int] = None


class MediaFileCreate(BaseModel):
    path: str = Field(min_length=1)
    hash: str = Field(min_length=1)
    width: Optional[int] = None
    height: Optional[int] = None
    mime_type: Optional[str] = None
    size: Optional[int] = None
    title: Optional[str] = None
    description: Optional[str] = None


class MediaFileTagsUpdate(BaseModel):
    tag_ids: List[int]


class TagCreate(BaseModel):
    name: str = Field(min_length=1)


class TagMigration(BaseModel):
    from_tag_id: int
    to_tag_id: int


# Response envelopes

WebsiteCreateResponse = CreateResult[Website]
WebsiteRetrieveResponse = RetrieveResult[Website]
WebsiteDeleteResponse = DeleteResult[Website]
PaginatedWebsitesResponse = PaginatedResult[Website]

BoardCreateResponse = CreateResult[BoardSummary]
BoardRetrieveResponse = RetrieveResult[Board]
BoardUpdateResponse = UpdateResult[BoardSummary]
BoardDeleteResponse = DeleteResult[BoardSummary]

PinCreateResponse = CreateResult[Pin]
PaginatedPinsResponse = PaginatedResult[Pin]

MediaFileCreateResponse = CreateResult[MediaFile]
MediaFileRetrieveResponse = RetrieveResult[MediaFile]
MediaFileUpdateResponse = UpdateResult[MediaFile]
MediaFileListUpdateResponse = UpdateResult[List[MediaFile]]
MediaFileDeleteResponse = DeleteResult[MediaFileSummary]
PaginatedMediaFilesResponse = PaginatedResult[MediaFile]

TagCreateResponse = CreateResult[Tag]
TagRetrieveResponse = RetrieveResult[Tag]
TagUpdateResponse = UpdateResult[Tag]
TagDeleteResponse = DeleteResult[Tag]
PaginatedTagsResponse = PaginatedResult[Tag]
