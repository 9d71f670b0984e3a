"""
Data models for the folders service.
"""

from typing import List
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, StrictInt


class Folder(BaseModel):
    """A folder owned by an organization. Immutable once fetched."""

    id: UUID
    name: str
    org_id: UUID

    model_config = ConfigDict(frozen=True, extra="forbid")


class FetchFolderRequest(BaseModel):
    """Request for every folder of one organization."""

    org_id: UUID


class FetchFolderResponse(BaseModel):
    """All folders of the requested organization, in source order."""

    folders: List[Folder] = Field(default_factory=list)


class PaginationRequest(BaseModel):
    """
    Request for the next chunk of an organization's folders.

    An empty token starts a new sequence; otherwise it must be the token from
    the previous response. ``max_folders`` must be a real integer (booleans and
    numeric strings are refused, as by ``extract_chunk``); the paginator checks
    its range so that an out-of-range value surfaces as InvalidArgumentError.
    """

    org_id: UUID
    max_folders: StrictInt
    token: str = ""


class PaginationResponse(BaseModel):
    """One chunk of folders. An empty token marks the end of the sequence."""

    folders: List[Folder] = Field(default_factory=list)
    num_folders: int = 0
    token: str = ""
