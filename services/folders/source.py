"""
Folder sources.

A folder source answers "which folders belong to this organization". The
bundled ``StaticFolderSource`` reads a fixed collection, by default the sample
data set shipped with the service.
"""

from pathlib import Path
from typing import Iterable, List, Optional, Protocol, Union
from uuid import UUID

from pydantic import TypeAdapter

from services.common.logging_config import get_logger
from services.folders.exceptions import NilRequestError, SourceFetchError
from services.folders.models import FetchFolderRequest, FetchFolderResponse, Folder

logger = get_logger(__name__)

DEFAULT_ORG_ID = UUID("c1556e17-b7c0-45a3-a6ae-9546248fb17a")
SAMPLE_DATA_PATH = Path(__file__).parent / "data" / "sample_folders.json"

_folder_list_adapter = TypeAdapter(List[Folder])


class FolderSource(Protocol):
    """Anything that can list the folders of an organization."""

    def fetch_by_org_id(self, org_id: UUID) -> List[Folder]:
        """
        Return the organization's folders in a deterministic order.

        An unknown organization yields an empty list. Failures are raised.
        """
        ...


class StaticFolderSource:
    """Folder source over a fixed, in-memory collection."""

    def __init__(self, folders: Iterable[Folder]):
        # Stable order by id, so every snapshot of an organization is identical
        self._folders = tuple(sorted(folders, key=lambda folder: str(folder.id)))

    @classmethod
    def from_json_file(cls, path: Union[str, Path]) -> "StaticFolderSource":
        """Load folders from a JSON array of ``{id, name, org_id}`` objects."""
        raw = Path(path).read_bytes()
        folders = _folder_list_adapter.validate_json(raw)
        logger.debug(f"Loaded {len(folders)} folders", path=str(path))
        return cls(folders)

    @classmethod
    def sample(cls) -> "StaticFolderSource":
        """Source over the sample data set bundled with the service."""
        return cls.from_json_file(SAMPLE_DATA_PATH)

    def fetch_by_org_id(self, org_id: UUID) -> List[Folder]:
        return [folder for folder in self._folders if folder.org_id == org_id]


def get_all_folders(
    request: Optional[FetchFolderRequest], source: FolderSource
) -> FetchFolderResponse:
    """
    Fetch every folder belonging to the requested organization.

    Each folder is copied into a fresh instance, so the response never shares
    objects with the source.

    Raises:
        NilRequestError: If request is None
        SourceFetchError: If the source fails
    """
    if request is None:
        raise NilRequestError("FetchFolderRequest")

    try:
        # Sources may return lazy iterables, so consume them inside the guard
        folders = [
            folder.model_copy()
            for folder in source.fetch_by_org_id(request.org_id)
            if folder is not None
        ]
    except Exception as e:
        logger.error(
            "Folder source failed",
            org_id=str(request.org_id),
            error=str(e),
        )
        raise SourceFetchError(org_id=str(request.org_id), reason=str(e)) from e

    return FetchFolderResponse(folders=folders)
