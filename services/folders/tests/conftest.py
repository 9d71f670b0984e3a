"""
Shared fixtures for folders service tests.
"""

from typing import List

import pytest

from services.common.pagination import PaginationStore, TokenManager
from services.folders.models import Folder
from services.folders.service import FolderPaginator
from services.folders.tests.helpers import ORG_X, ORG_Y, CountingSource, make_folders


@pytest.fixture
def org_x_folders() -> List[Folder]:
    return make_folders(ORG_X, 7)


@pytest.fixture
def org_y_folders() -> List[Folder]:
    return make_folders(ORG_Y, 10)


@pytest.fixture
def source(org_x_folders, org_y_folders) -> CountingSource:
    return CountingSource(org_x_folders + org_y_folders)


@pytest.fixture
def store() -> PaginationStore:
    return PaginationStore(shard_count=4)


@pytest.fixture
def token_manager() -> TokenManager:
    return TokenManager("test-secret-key")


@pytest.fixture
def paginator(source, store, token_manager) -> FolderPaginator:
    return FolderPaginator(source=source, store=store, token_manager=token_manager)
