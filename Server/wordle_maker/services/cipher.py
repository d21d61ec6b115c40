"""
Authenticated Cipher

AES-GCM sealing of puzzle payloads under the process-wide puzzle key.
Every seal draws its own random 96-bit nonce; callers cannot supply one.
"""

import secrets
import threading
from typing import NamedTuple, Optional

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from ..config.app_config import Config
from ..config.game_settings import NONCE_SIZE, VALID_KEY_SIZES
from ..errors import AuthenticationFailure, ConfigurationError, MalformedInput, WordleMakerError
from . import transport


class SealedPayload(NamedTuple):
    """Output of AuthenticatedCipher.seal()."""
    nonce: bytes
    ciphertext: bytes  # includes the 16-byte GCM tag

    def to_bytes(self) -> bytes:
        """Wire format: nonce || ciphertext_with_tag."""
        return self.nonce + self.ciphertext

    @classmethod
    def from_bytes(cls, data: bytes) -> 'SealedPayload':
        if len(data) <= NONCE_SIZE:
            raise MalformedInput("Sealed payload is too short")
        return cls(nonce=data[:NONCE_SIZE], ciphertext=data[NONCE_SIZE:])


class AuthenticatedCipher:
    """
    Confidentiality plus integrity for arbitrary byte payloads.

    Args:
        key: Raw AES key, 16, 24 or 32 bytes
    """

    def __init__(self, key: bytes):
        if len(key) not in VALID_KEY_SIZES:
            raise ConfigurationError(
                f"Puzzle key must be {', '.join(map(str, VALID_KEY_SIZES))} bytes, got {len(key)}"
            )
        self._aead = AESGCM(key)

    def seal(self, plaintext: bytes) -> SealedPayload:
        nonce = secrets.token_bytes(NONCE_SIZE)
        return SealedPayload(nonce, self._aead.encrypt(nonce, plaintext, None))

    def open(self, nonce: bytes, ciphertext: bytes) -> bytes:
        """
        Verify and decrypt a sealed payload.

        Raises:
            AuthenticationFailure: If the tag does not verify
        """
        if len(nonce) != NONCE_SIZE:
            raise MalformedInput(f"Nonce must be {NONCE_SIZE} bytes")
        try:
            return self._aead.decrypt(nonce, ciphertext, None)
        except InvalidTag as e:
            raise AuthenticationFailure("Integrity check failed") from e

    def seal_bytes(self, plaintext: bytes) -> bytes:
        return self.seal(plaintext).to_bytes()

    def open_bytes(self, data: bytes) -> bytes:
        sealed = SealedPayload.from_bytes(data)
        return self.open(sealed.nonce, sealed.ciphertext)


def load_key(encoded_key: str) -> bytes:
    """Decode configured key text (base64 or base64url) into raw key bytes."""
    try:
        key = transport.decode(encoded_key.replace('+', '-').replace('/', '_'))
    except (AttributeError, WordleMakerError) as e:
        raise ConfigurationError("Puzzle key is not valid base64") from e
    if len(key) not in VALID_KEY_SIZES:
        raise ConfigurationError(f"Puzzle key must decode to 16, 24 or 32 bytes, got {len(key)}")
    return key


class _CipherCell:
    """Single-assignment holder for the process-wide cipher."""

    def __init__(self):
        self._lock = threading.Lock()
        self._cipher: Optional[AuthenticatedCipher] = None

    def get(self, encoded_key: Optional[str] = None) -> AuthenticatedCipher:
        cipher = self._cipher
        if cipher is not None:
            return cipher
        with self._lock:
            if self._cipher is None:
                self._cipher = AuthenticatedCipher(load_key(encoded_key or Config.PUZZLE_KEY))
            return self._cipher

    @property
    def initialized(self) -> bool:
        return self._cipher is not None


_cipher_cell = _CipherCell()


def get_cipher() -> AuthenticatedCipher:
    """Return the shared cipher, loading the configured key on first use."""
    return _cipher_cell.get()
