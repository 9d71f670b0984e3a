"""
Helpers shared by the folders service tests.
"""

from typing import List
from uuid import UUID

from services.folders.models import Folder
from services.folders.source import StaticFolderSource

ORG_X = UUID("11111111-1111-4111-8111-111111111111")
ORG_Y = UUID("22222222-2222-4222-8222-222222222222")
EMPTY_ORG = UUID("33333333-3333-4333-8333-333333333333")


def make_folders(org_id: UUID, count: int) -> List[Folder]:
    """Create folders whose ids sort in creation order (f1, f2, ...)."""
    return [
        Folder(
            id=UUID(f"{org_id.hex[:8]}-0000-4000-8000-{index:012d}"),
            name=f"f{index}",
            org_id=org_id,
        )
        for index in range(1, count + 1)
    ]


class FailingSource:
    """Folder source that always fails."""

    def __init__(self, error: Exception = None):
        self.error = error or ConnectionError("folder backend unavailable")
        self.calls = 0

    def fetch_by_org_id(self, org_id: UUID) -> List[Folder]:
        self.calls += 1
        raise self.error


class CountingSource(StaticFolderSource):
    """Static source that records how often it is queried."""

    def __init__(self, folders):
        super().__init__(folders)
        self.calls = 0

    def fetch_by_org_id(self, org_id: UUID) -> List[Folder]:
        self.calls += 1
        return super().fetch_by_org_id(org_id)


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds
