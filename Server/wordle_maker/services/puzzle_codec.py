"""
Puzzle Codec

Turns a PuzzleDefinition into an opaque, URL-safe puzzle token and back.

Token layout: base64url( nonce(12) || AES-GCM(payload) ), where payload is
compact UTF-8 JSON with the fields, in order:

    v           int   payload format version (absent in version-1 tokens)
    word        str   secret word; "secret" is accepted as a synonym on decode
    maxGuesses  int   guess budget, clamped into range on decode
    title       str   optional, falls back to hint on decode
    hint        str   optional
    language    str   alphabet tag, defaults to "en"
"""

import json
from collections import OrderedDict
from typing import Optional

from ..config.game_settings import DEFAULT_LANGUAGE, PAYLOAD_VERSION
from ..errors import InvalidDefinition, MalformedInput
from ..models.game import PuzzleDefinition
from ..utils.helpers import clamp_guesses, sanitize_word
from . import transport
from .cipher import AuthenticatedCipher, get_cipher


def serialize_definition(definition: PuzzleDefinition) -> bytes:
    """Canonical pre-encryption bytes for a definition."""
    payload = OrderedDict([
        ('v', PAYLOAD_VERSION),
        ('word', definition.solution),
        ('maxGuesses', definition.max_guesses),
        ('title', definition.title),
        ('hint', definition.hint),
        ('language', definition.language),
    ])
    return json.dumps(payload, ensure_ascii=False, separators=(',', ':')).encode('utf-8')


def _text_field(payload: dict, key: str) -> str:
    value = payload.get(key)
    if not value:
        return ''
    if not isinstance(value, str):
        raise InvalidDefinition(f"Field '{key}' must be text")
    return value.strip()


def deserialize_definition(data: bytes) -> PuzzleDefinition:
    """
    Parse and normalize decrypted payload bytes.

    Raises:
        MalformedInput: If the bytes are not a JSON object
        InvalidDefinition: If the fields do not form a valid puzzle
    """
    try:
        payload = json.loads(data.decode('utf-8'))
    except (UnicodeDecodeError, ValueError) as e:
        raise MalformedInput(f"Payload is not valid JSON: {e}") from e
    if not isinstance(payload, dict):
        raise MalformedInput("Payload must be a JSON object")

    version = payload.get('v', 1)
    if isinstance(version, bool) or not isinstance(version, int) or not 1 <= version <= PAYLOAD_VERSION:
        raise InvalidDefinition(f"Unsupported payload version {version!r}")

    raw_word = payload.get('word') or payload.get('secret') or ''
    if not isinstance(raw_word, str):
        raise InvalidDefinition("Secret word must be text")

    hint = _text_field(payload, 'hint')
    language = payload.get('language') or DEFAULT_LANGUAGE

    return PuzzleDefinition(
        solution=sanitize_word(raw_word),
        max_guesses=clamp_guesses(payload.get('maxGuesses')),
        title=_text_field(payload, 'title') or hint,
        hint=hint,
        language=language,
    )


class PuzzleCodec:
    """
    Seals puzzle definitions into tokens and opens them again.

    Args:
        cipher: Cipher to use; defaults to the process-wide one
    """

    def __init__(self, cipher: Optional[AuthenticatedCipher] = None):
        self._cipher = cipher

    @property
    def cipher(self) -> AuthenticatedCipher:
        return self._cipher or get_cipher()

    def encode(self, definition: PuzzleDefinition) -> str:
        return transport.encode(self.cipher.seal_bytes(serialize_definition(definition)))

    def decode(self, token: str) -> PuzzleDefinition:
        """
        Decode a puzzle token.

        Raises:
            PuzzleCodecError: MalformedInput, AuthenticationFailure or
                InvalidDefinition. Nothing partial is ever returned.
        """
        sealed = transport.decode(token)
        return deserialize_definition(self.cipher.open_bytes(sealed))


def encode_puzzle(definition: PuzzleDefinition) -> str:
    return PuzzleCodec().encode(definition)


def decode_puzzle(token: str) -> PuzzleDefinition:
    return PuzzleCodec().decode(token)
