"""
Transport Encoding

URL-safe base64 without padding. Tokens go straight into a query
parameter, so the alphabet is restricted to A-Z a-z 0-9 - _.
"""

import base64
import binascii

from ..errors import MalformedInput


def encode(data: bytes) -> str:
    """Encode raw bytes as unpadded base64url text."""
    return base64.urlsafe_b64encode(data).decode('ascii').rstrip('=')


def decode(text: str) -> bytes:
    """
    Decode base64url text, with or without padding.

    Raises:
        MalformedInput: If the text is not valid base64url
    """
    if not isinstance(text, str):
        raise MalformedInput("Transport text must be a string")
    stripped = text.strip().rstrip('=')
    padded = stripped + '=' * (-len(stripped) % 4)
    try:
        return base64.b64decode(padded.encode('ascii'), altchars=b'-_', validate=True)
    except (binascii.Error, UnicodeEncodeError) as e:
        raise MalformedInput(f"Invalid transport encoding: {e}") from e
