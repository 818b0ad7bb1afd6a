"""Uniform result envelopes returned by every service operation."""

from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict

from errors import ErrorKind, classify_error

T = TypeVar("T")


class OperationResult(BaseModel, Generic[T]):
    """Base envelope.

    ``success`` only says no error occurred. Whether the operation found,
    created, updated or deleted anything is carried by the flag on the
    subclass. ``data`` is absent on not-found and on errors.
    """
    model_config = ConfigDict(arbitrary_types_allowed=True)

    success: bool
    data: Optional[T] = None
    message: str
    error_kind: Optional[ErrorKind] = None


class CreateResult(OperationResult[T], Generic[T]):
    created: bool  # False if the object already exists


class RetrieveResult(OperationResult[T], Generic[T]):
    found: bool


class UpdateResult(OperationResult[T], Generic[T]):
    updated: bool


class DeleteResult(OperationResult[T], Generic[T]):
    deleted: bool


class PaginatedResult(BaseModel, Generic[T]):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    success: bool
    data: Optional[List[T]] = None
    message: str
    error_kind: Optional[ErrorKind] = None
    total: int  # matching rows across all pages
    page: Optional[int] = None
    page_size: Optional[int] = None


# Creation

def creation_successful(data, message_prefix: str) -> CreateResult:
    return CreateResult(success=True, created=True, data=data,
                        message=f"{message_prefix} created successfully.")


def creation_found_preexisting(data, message_prefix: str) -> CreateResult:
    return CreateResult(success=True, created=False, data=data,
                        message=f"{message_prefix} already exists.")


def creation_failure(message_prefix: str) -> CreateResult:
    """A prerequisite record (website, board, ...) was missing."""
    return CreateResult(success=True, created=False, message=f"{message_prefix} not found.")


def creation_error(error: BaseException) -> CreateResult:
    kind, message = classify_error(error)
    return CreateResult(success=False, created=False, message=message, error_kind=kind)


# Retrieval

def retrieval_successful(data, message_prefix: str) -> RetrieveResult:
    return RetrieveResult(success=True, found=True, data=data,
                          message=f"{message_prefix} retrieved successfully.")


def retrieval_not_found(message_prefix: str) -> RetrieveResult:
    return RetrieveResult(success=True, found=False, message=f"{message_prefix} not found.")


def retrieval_error(error: BaseException) -> RetrieveResult:
    kind, message = classify_error(error)
    return RetrieveResult(success=False, found=False, message=message, error_kind=kind)


# Update

def update_successful(data, message_prefix: str) -> UpdateResult:
    return UpdateResult(success=True, updated=True, data=data,
                        message=f"{message_prefix} updated successfully.")


def update_not_found(message_prefix: str) -> UpdateResult:
    return UpdateResult(success=True, updated=False, message=f"{message_prefix} not found.")


def update_error(error: BaseException) -> UpdateResult:
    kind, message = classify_error(error)
    return UpdateResult(success=False, updated=False, message=message, error_kind=kind)


# Deletion

def deletion_successful(data, message_prefix: str) -> DeleteResult:
    return DeleteResult(success=True, deleted=True, data=data,
                        message=f"{message_prefix} deleted successfully.")


def deletion_not_found(message_prefix: str) -> DeleteResult:
    return DeleteResult(success=True, deleted=False, message=f"{message_prefix} not found.")


def deletion_error(error: BaseException) -> DeleteResult:
    kind, message = classify_error(error)
    return DeleteResult(success=False, deleted=False, message=message, error_kind=kind)
