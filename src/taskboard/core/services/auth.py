"""Password hashing and bearer token handling."""

import base64
import os
from datetime import datetime, timedelta, timezone

import jwt
from cryptography.exceptions import InvalidKey
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from taskboard.core.exceptions import UnauthorizedError

_SCHEME = "pbkdf2_sha256"


class PasswordHasher:
    """PBKDF2-HMAC-SHA256 password hashing with a random salt per password.

    Hashes are encoded as ``pbkdf2_sha256$<iterations>$<salt>$<hash>``
    with urlsafe base64 salt and hash, so the iteration count can be
    raised later without invalidating stored passwords.
    """

    def __init__(self, iterations: int = 100_000, salt_size: int = 16) -> None:
        if iterations < 1:
            raise ValueError("iterations must be positive")
        self._iterations = iterations
        self._salt_size = salt_size

    def hash(self, password: str) -> str:
        """Hash a plaintext password for storage."""
        salt = os.urandom(self._salt_size)
        derived = self._kdf(salt, self._iterations).derive(password.encode("utf-8"))
        return "$".join(
            [
                _SCHEME,
                str(self._iterations),
                base64.urlsafe_b64encode(salt).decode("ascii"),
                base64.urlsafe_b64encode(derived).decode("ascii"),
            ]
        )

    def verify(self, password: str, encoded: str) -> bool:
        """Check a plaintext password against a stored hash."""
        try:
            scheme, iterations, salt_b64, hash_b64 = encoded.split("$")
            if scheme != _SCHEME:
                return False
            salt = base64.urlsafe_b64decode(salt_b64)
            expected = base64.urlsafe_b64decode(hash_b64)
            kdf = self._kdf(salt, int(iterations))
        except ValueError:
            return False

        try:
            kdf.verify(password.encode("utf-8"), expected)
        except InvalidKey:
            return False
        return True

    @staticmethod
    def _kdf(salt: bytes, iterations: int) -> PBKDF2HMAC:
        return PBKDF2HMAC(
            algorithm=hashes.SHA256(),
            length=32,
            salt=salt,
            iterations=iterations,
        )


class TokenManager:
    """Issues and verifies HS256 JWT bearer tokens carrying the user id."""

    algorithm = "HS256"

    def __init__(self, secret: str, expires_in: timedelta = timedelta(hours=1)) -> None:
        if not secret:
            raise ValueError("a JWT secret is required")
        self._secret = secret
        self._expires_in = expires_in

    def issue(self, user_id: str) -> str:
        """Create a signed token for a user."""
        now = datetime.now(timezone.utc)
        payload = {
            "sub": user_id,
            "iat": now,
            "exp": now + self._expires_in,
        }
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def verify(self, token: str) -> str:
        """Validate a token and return the user id it was issued for.

        Raises:
            UnauthorizedError: If the token is expired, malformed or
                signed with another key.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                options={"require": ["sub", "exp"]},
            )
        except jwt.ExpiredSignatureError as e:
            raise UnauthorizedError("Token expired") from e
        except jwt.InvalidTokenError as e:
            raise UnauthorizedError("Invalid token") from e

        subject = payload.get("sub")
        if not isinstance(subject, str) or not subject:
            raise UnauthorizedError("Invalid token")
        return subject
