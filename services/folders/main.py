"""
Wiring for the folders service.

Builds a ready-to-use paginator from settings: logging, the folder source, the
token store and the token manager. The store is created here once and injected;
nothing else holds pagination state.
"""

from typing import Optional

from services.common.logging_config import log_service_startup, setup_service_logging
from services.common.pagination import PaginationStore, TokenManager
from services.folders.models import Folder
from services.folders.service import FolderPaginator
from services.folders.settings import Settings, get_settings
from services.folders.source import FolderSource, StaticFolderSource


def create_paginator(
    settings: Optional[Settings] = None,
    source: Optional[FolderSource] = None,
) -> FolderPaginator:
    """
    Create a FolderPaginator configured from settings.

    Args:
        settings: Settings to use; the global settings if omitted
        source: Folder source; built from ``folder_data_path`` or the bundled
            sample data if omitted

    Returns:
        A paginator with its own, empty token store
    """
    settings = settings or get_settings()

    setup_service_logging(
        service_name=settings.service_name,
        log_level=settings.log_level,
        log_format=settings.log_format,
    )

    if source is None:
        if settings.folder_data_path:
            source = StaticFolderSource.from_json_file(settings.folder_data_path)
        else:
            source = StaticFolderSource.sample()

    store: PaginationStore[Folder] = PaginationStore(
        shard_count=settings.pagination_store_shards,
        ttl_seconds=settings.pagination_token_ttl_seconds or None,
    )
    token_manager = TokenManager(settings.pagination_secret_key)

    log_service_startup(
        settings.service_name,
        store_shards=settings.pagination_store_shards,
        token_ttl_seconds=settings.pagination_token_ttl_seconds,
        folder_data_path=settings.folder_data_path or "sample",
    )

    return FolderPaginator(source=source, store=store, token_manager=token_manager)
