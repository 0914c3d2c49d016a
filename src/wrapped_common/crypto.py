"""Fernet encryption for Spotify refresh tokens stored at rest."""

from cryptography.fernet import Fernet, InvalidToken


class TokenDecryptionError(Exception):
    """Stored ciphertext could not be decrypted with the configured key."""


class TokenEncryptor:
    """Encrypts and decrypts refresh tokens with a Fernet key.

    Ciphertext differs on every call because Fernet uses a random IV, so
    equality checks must be done on decrypted values.
    """

    def __init__(self, key: str) -> None:
        self._fernet = Fernet(key.encode())

    def encrypt(self, plaintext: str) -> str:
        return self._fernet.encrypt(plaintext.encode()).decode()

    def decrypt(self, ciphertext: str) -> str:
        """Decrypt a token, raising TokenDecryptionError if the key does not match."""
        try:
            return self._fernet.decrypt(ciphertext.encode()).decode()
        except InvalidToken as exc:
            raise TokenDecryptionError("Stored token could not be decrypted") from exc
