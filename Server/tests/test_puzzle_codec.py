"""Tests for sealing puzzle definitions into share tokens."""

from __future__ import annotations

import json

import pytest

from wordle_maker.errors import (
    AuthenticationFailure,
    InvalidDefinition,
    MalformedInput,
    PuzzleCodecError,
)
from wordle_maker.models.game import PuzzleDefinition
from wordle_maker.services import transport
from wordle_maker.services.puzzle_codec import (
    PuzzleCodec,
    decode_puzzle,
    deserialize_definition,
    encode_puzzle,
    serialize_definition,
)


def _token_for_payload(codec: PuzzleCodec, payload: dict) -> str:
    raw = json.dumps(payload).encode("utf-8")
    return transport.encode(codec.cipher.seal_bytes(raw))


def test_round_trip_preserves_every_field(codec) -> None:
    definition = PuzzleDefinition(
        solution="BRIGHT", max_guesses=4, title="Birthday", hint="Sunny", language="en"
    )

    assert codec.decode(codec.encode(definition)) == definition


def test_two_encodings_differ_but_decode_identically(codec) -> None:
    definition = PuzzleDefinition(solution="CRANE", max_guesses=6)

    first = codec.encode(definition)
    second = codec.encode(definition)

    assert first != second
    assert codec.decode(first) == codec.decode(second) == definition


def test_token_does_not_reveal_the_word(codec) -> None:
    token = codec.encode(PuzzleDefinition(solution="SECRET"))

    assert "SECRET" not in token.upper()


def test_flipping_any_byte_never_decodes_silently(codec) -> None:
    token = codec.encode(PuzzleDefinition(solution="CRANE"))
    sealed = transport.decode(token)

    for i in range(len(sealed)):
        corrupted = bytearray(sealed)
        corrupted[i] ^= 0x80
        with pytest.raises((AuthenticationFailure, MalformedInput)):
            codec.decode(transport.encode(bytes(corrupted)))


def test_garbage_token_is_malformed(codec) -> None:
    with pytest.raises(MalformedInput):
        codec.decode("%%%")


def test_token_from_another_key_fails_authentication(codec) -> None:
    other = PuzzleCodec(type(codec.cipher)(bytes(32)))
    token = other.encode(PuzzleDefinition(solution="CRANE"))

    with pytest.raises(AuthenticationFailure):
        codec.decode(token)


def test_every_failure_shares_the_codec_base_class(codec) -> None:
    for bad in ("%%%", "AAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAA"):
        with pytest.raises(PuzzleCodecError):
            codec.decode(bad)


def test_canonical_payload_field_order() -> None:
    data = serialize_definition(PuzzleDefinition(solution="CRANE", max_guesses=5, title="T", hint="H"))

    assert data == b'{"v":1,"word":"CRANE","maxGuesses":5,"title":"T","hint":"H","language":"en"}'


def test_secret_is_accepted_as_synonym_for_word(codec) -> None:
    token = _token_for_payload(codec, {"secret": "llama", "maxGuesses": 3})

    assert codec.decode(token).solution == "LLAMA"


def test_title_falls_back_to_hint() -> None:
    definition = deserialize_definition(b'{"word":"CRANE","hint":"  bird  "}')

    assert definition.title == "bird"
    assert definition.hint == "bird"


@pytest.mark.parametrize(
    ("raw", "expected"),
    [(0, 6), (None, 6), (40, 12), (-3, 1), ("4", 4), (7.9, 7)],
)
def test_max_guesses_is_clamped_on_decode(raw, expected) -> None:
    payload = json.dumps({"word": "CRANE", "maxGuesses": raw}).encode()

    assert deserialize_definition(payload).max_guesses == expected


def test_missing_language_defaults_to_english() -> None:
    assert deserialize_definition(b'{"word":"CRANE"}').language == "en"


def test_non_letters_are_stripped_on_decode() -> None:
    assert deserialize_definition(b'{"word":"cr-a n3e"}').solution == "CRANE"


@pytest.mark.parametrize(
    "payload",
    [
        b'{"word":"AB"}',
        b'{"word":"' + b"A" * 26 + b'"}',
        b'{"word":"123"}',
        b'{"maxGuesses":6}',
        b'{"word":["C","R","A","N","E"]}',
        b'{"word":"CRANE","maxGuesses":"lots"}',
        b'{"word":"CRANE","language":"xx"}',
        b'{"word":"CRANE","title":42}',
        b'{"v":99,"word":"CRANE"}',
    ],
)
def test_invariant_violations_fail_closed(payload) -> None:
    with pytest.raises(InvalidDefinition):
        deserialize_definition(payload)


@pytest.mark.parametrize("payload", [b"not json", b"[1, 2]", b"\xff\xfe"])
def test_malformed_inner_structure(payload) -> None:
    with pytest.raises(MalformedInput):
        deserialize_definition(payload)


def test_module_helpers_use_the_shared_key() -> None:
    definition = PuzzleDefinition(solution="PLAY", max_guesses=3)

    assert decode_puzzle(encode_puzzle(definition)) == definition
