"""
Token manager for continuation tokens.

Tokens are random UUID4 nonces signed with the itsdangerous library. The nonce
makes a token unguessable; the signature lets the paginator reject forged or
mangled tokens before the store is consulted. A token carries no cursor data:
the cursor itself lives only in the pagination store.
"""

import uuid

from itsdangerous import BadData, URLSafeSerializer

from .exceptions import TokenGenerationError

DEFAULT_SALT = "folders.pagination"


class TokenManager:
    """
    Mints and verifies opaque continuation tokens.

    Possession of a valid token is the only authorization needed to continue
    a sequence.
    """

    def __init__(self, secret_key: str, salt: str = DEFAULT_SALT):
        """
        Initialize the token manager.

        Args:
            secret_key: Secret key for token signing
            salt: Namespace separating these signatures from other uses of the key
        """
        self.secret_key = secret_key
        self.salt = salt
        self.serializer = URLSafeSerializer(secret_key, salt=salt)

    def generate_token(self) -> str:
        """
        Create a fresh, unguessable token.

        Raises:
            TokenGenerationError: If no randomness source is available
        """
        try:
            nonce = uuid.uuid4().hex
        except (OSError, NotImplementedError) as e:
            raise TokenGenerationError(f"Failed to generate token: {e}") from e
        return self.serializer.dumps(nonce)

    def validate_token(self, token: str) -> bool:
        """
        Check that a token was minted with the current secret key.

        Returns:
            True if the signature is valid, False otherwise
        """
        if not token:
            return False
        try:
            self.serializer.loads(token)
            return True
        except BadData:
            return False

    def rotate_secret_key(self, new_secret_key: str) -> None:
        """
        Rotate the secret key used for token signing.

        Tokens signed with the previous key stop validating.
        """
        self.secret_key = new_secret_key
        self.serializer = URLSafeSerializer(new_secret_key, salt=self.salt)
