"""
Token-based pagination over an organization's folders.

A sequence starts with an empty token: the paginator takes one snapshot of the
organization's folders and hands out the first chunk together with a fresh
token. Each later call presents the previous token, which is consumed on the
spot; a new token is issued only while folders remain. The final chunk comes
back with an empty token and leaves nothing behind in the store.

Example:
    paginator = create_paginator()
    request = PaginationRequest(org_id=DEFAULT_ORG_ID, max_folders=5)
    while True:
        response = paginator.paginate(request)
        ...
        if not response.token:
            break
        request = request.model_copy(update={"token": response.token})
"""

from contextlib import contextmanager
from typing import Iterator, Optional
from uuid import UUID

from services.common.logging_config import (
    get_logger,
    new_request_id,
    org_id_var,
    request_id_var,
)
from services.common.pagination import (
    Cursor,
    DuplicateTokenError,
    PaginationStore,
    TokenManager,
    extract_chunk,
)
from services.folders.exceptions import (
    InvalidArgumentError,
    InvalidTokenError,
    NilRequestError,
    TokenGenerationError,
)
from services.folders.models import (
    FetchFolderRequest,
    FetchFolderResponse,
    Folder,
    PaginationRequest,
    PaginationResponse,
)
from services.folders.source import FolderSource, get_all_folders

logger = get_logger(__name__)


@contextmanager
def _request_context(org_id: Optional[UUID]) -> Iterator[None]:
    """Bind a fresh request id and the org id to log entries for one call."""
    request_token = request_id_var.set(new_request_id())
    org_token = org_id_var.set(str(org_id) if org_id else "unknown")
    try:
        yield
    finally:
        org_id_var.reset(org_token)
        request_id_var.reset(request_token)


class FolderPaginator:
    """
    Serves folder listings in bounded chunks behind single-use tokens.

    The paginator holds no lock of its own; the injected store is the only
    shared mutable state, so one instance can serve many threads at once.
    """

    def __init__(
        self,
        source: FolderSource,
        store: PaginationStore[Folder],
        token_manager: TokenManager,
    ):
        self.source = source
        self.store = store
        self.token_manager = token_manager

    def get_all_folders(
        self, request: Optional[FetchFolderRequest]
    ) -> FetchFolderResponse:
        """Fetch every folder of an organization without pagination."""
        return get_all_folders(request, self.source)

    def rotate_secret_key(self, new_secret_key: str) -> int:
        """
        Rotate the token signing key and drop the cursors it strands.

        Tokens issued before the rotation no longer validate, so their cursors
        can never be taken again.

        Returns:
            Number of cursors dropped from the store
        """
        self.token_manager.rotate_secret_key(new_secret_key)
        dropped = self.store.clear()
        logger.info("Rotated pagination secret key", dropped_cursors=dropped)
        return dropped

    def paginate(self, request: Optional[PaginationRequest]) -> PaginationResponse:
        """
        Return the next chunk of folders for a pagination sequence.

        Args:
            request: Organization, chunk bound and continuation token

        Returns:
            PaginationResponse with the chunk and the token for the next call,
            or an empty token once the sequence is complete

        Raises:
            NilRequestError: If request is None
            InvalidArgumentError: If max_folders is below 1
            SourceFetchError: If the initial folder lookup fails
            InvalidTokenError: If the token is unknown, consumed or malformed
            TokenGenerationError: If a continuation token cannot be issued
        """
        if request is None:
            raise NilRequestError("PaginationRequest")

        with _request_context(request.org_id):
            # Validate before touching the store, so a bad request consumes nothing
            if request.max_folders < 1:
                logger.warning(
                    "Rejected pagination request", max_folders=request.max_folders
                )
                raise InvalidArgumentError(
                    "max_folders must be a positive integer",
                    field="max_folders",
                    value=request.max_folders,
                )

            if request.token == "":
                cursor = self._start_sequence(request)
            else:
                cursor = self._resume_sequence(request.token)

            chunk, cursor = extract_chunk(cursor, request.max_folders)

            if cursor.exhausted:
                logger.info(
                    "Pagination sequence complete",
                    num_folders=len(chunk),
                    total_folders=len(cursor.snapshot),
                )
                return PaginationResponse(folders=chunk, num_folders=len(chunk))

            token = self._save_cursor(cursor)
            logger.debug(
                "Issued continuation token",
                num_folders=len(chunk),
                remaining=cursor.remaining,
            )
            return PaginationResponse(
                folders=chunk, num_folders=len(chunk), token=token
            )

    def _start_sequence(self, request: PaginationRequest) -> Cursor[Folder]:
        response = get_all_folders(
            FetchFolderRequest(org_id=request.org_id), self.source
        )
        logger.info(
            "Started pagination sequence",
            total_folders=len(response.folders),
            max_folders=request.max_folders,
        )
        return Cursor.start(response.folders)

    def _resume_sequence(self, token: str) -> Cursor[Folder]:
        if not self.token_manager.validate_token(token):
            logger.warning("Rejected pagination token with invalid signature")
            raise InvalidTokenError()

        cursor = self.store.take_and_remove(token)
        if cursor is None:
            logger.warning("Rejected unknown or already consumed pagination token")
            raise InvalidTokenError()
        return cursor

    def _save_cursor(self, cursor: Cursor[Folder]) -> str:
        token = self.token_manager.generate_token()
        try:
            self.store.put(token, cursor)
        except DuplicateTokenError as e:
            logger.error("Generated pagination token collided with a live token")
            raise TokenGenerationError("Generated token is already in use") from e
        return token


def iter_folder_pages(
    paginator: FolderPaginator, org_id: UUID, max_folders: int
) -> Iterator[PaginationResponse]:
    """
    Walk a whole pagination sequence.

    Yields every response, feeding each call the token from the previous one,
    and stops after the response with an empty token.
    """
    request = PaginationRequest(org_id=org_id, max_folders=max_folders)
    while True:
        response = paginator.paginate(request)
        yield response
        if not response.token:
            return
        request = PaginationRequest(
            org_id=org_id, max_folders=max_folders, token=response.token
        )
