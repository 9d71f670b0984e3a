"""
Concurrency tests for folder pagination.

These tests drive one paginator from many threads at once and check that
tokens stay single-use and that sequences never corrupt each other.
"""

import concurrent.futures
import threading
from uuid import UUID

import pytest

from services.common.pagination import Cursor, PaginationStore, TokenManager
from services.folders.exceptions import InvalidTokenError
from services.folders.models import PaginationRequest
from services.folders.service import FolderPaginator, iter_folder_pages
from services.folders.source import StaticFolderSource
from services.folders.tests.helpers import ORG_X, make_folders


class TestConcurrentPagination:
    """Test the paginator under concurrent access."""

    def test_same_token_consumed_exactly_once(self, paginator, org_x_folders):
        """Test that concurrent requests with one token yield a single success."""
        first = paginator.paginate(PaginationRequest(org_id=ORG_X, max_folders=3))
        thread_count = 16
        barrier = threading.Barrier(thread_count)

        def continue_sequence():
            barrier.wait(timeout=10)
            try:
                return paginator.paginate(
                    PaginationRequest(org_id=ORG_X, max_folders=3, token=first.token)
                )
            except InvalidTokenError:
                return None

        with concurrent.futures.ThreadPoolExecutor(max_workers=thread_count) as executor:
            futures = [executor.submit(continue_sequence) for _ in range(thread_count)]
            results = [future.result() for future in futures]

        successes = [response for response in results if response is not None]
        assert len(successes) == 1
        assert results.count(None) == thread_count - 1
        assert successes[0].folders == org_x_folders[3:6]

    def test_store_take_and_remove_is_atomic(self):
        """Test that one stored cursor is handed to exactly one taker."""
        store = PaginationStore(shard_count=1)
        rounds = 50
        thread_count = 8

        with concurrent.futures.ThreadPoolExecutor(max_workers=thread_count) as executor:
            for round_index in range(rounds):
                token = f"token-{round_index}"
                store.put(token, Cursor.start([1, 2, 3]))
                barrier = threading.Barrier(thread_count)

                def take():
                    barrier.wait(timeout=10)
                    return store.take_and_remove(token)

                futures = [executor.submit(take) for _ in range(thread_count)]
                taken = [
                    cursor
                    for cursor in (future.result() for future in futures)
                    if cursor is not None
                ]

                assert len(taken) == 1
                assert token not in store

    @pytest.mark.parametrize("max_folders", [1, 4, 7])
    def test_parallel_sequences_each_complete(self, max_folders):
        """Test that many sequences run in parallel each deliver every folder."""
        org_ids = [UUID(f"{index:08d}-0000-4000-8000-000000000000") for index in range(12)]
        folders_by_org = {org_id: make_folders(org_id, 9) for org_id in org_ids}
        source = StaticFolderSource(
            [folder for folders in folders_by_org.values() for folder in folders]
        )
        store = PaginationStore(shard_count=4)
        paginator = FolderPaginator(source, store, TokenManager("concurrency-secret"))

        def walk(org_id):
            return [
                folder
                for response in iter_folder_pages(paginator, org_id, max_folders)
                for folder in response.folders
            ]

        with concurrent.futures.ThreadPoolExecutor(max_workers=len(org_ids)) as executor:
            futures = {org_id: executor.submit(walk, org_id) for org_id in org_ids}
            results = {org_id: future.result() for org_id, future in futures.items()}

        for org_id in org_ids:
            assert results[org_id] == folders_by_org[org_id]
        assert len(store) == 0
