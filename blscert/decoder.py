"""Decoding and validation of compressed BLS12-381 points.

Every byte buffer entering a public operation goes through this module.
Length, encoding and subgroup membership are always checked; there is no
fast path that skips the subgroup check.
"""

from typing import Any

from py_ecc.bls.g2_primitives import (
    is_inf,
    pubkey_to_G1,
    signature_to_G2,
    subgroup_check,
)

from .ciphersuite import PUBLIC_KEY_LENGTH, SIGNATURE_LENGTH
from .models import FailureReason

# py_ecc signals malformed encodings with ValueError and failed curve
# assertions with AssertionError
_LIBRARY_ERRORS = (ValueError, AssertionError, TypeError)


class DecodeError(Exception):
    """A byte buffer is not a valid point of the expected group."""

    def __init__(self, reason: FailureReason, message: str) -> None:
        super().__init__(message)
        self.reason = reason


def as_bytes(data: object, what: str) -> bytes:
    """Return ``data`` as immutable bytes.

    Raises:
        DecodeError: If data is not bytes, bytearray or memoryview

    """
    if isinstance(data, bytes):
        return data
    if isinstance(data, (bytearray, memoryview)):
        return bytes(data)
    raise DecodeError(
        FailureReason.NOT_BYTES,
        f"{what} must be bytes-like, got {type(data).__name__}",
    )


def _check_length(data: bytes, expected: int, what: str) -> None:
    if len(data) != expected:
        raise DecodeError(
            FailureReason.WRONG_LENGTH,
            f"{what} must be {expected} bytes, got {len(data)}",
        )


def decode_public_key(data: object, *, allow_identity: bool = False) -> Any:
    """Decode a 48-byte compressed G1 public key.

    Args:
        data: The compressed public key
        allow_identity: Accept the point at infinity. Signer keys never
            use this; it exists so callers can inspect degenerate keys.

    Returns:
        The G1 point in Jacobian coordinates

    Raises:
        DecodeError: If the key is malformed, outside the subgroup, or the
            identity point while allow_identity is False

    """
    raw = as_bytes(data, "public key")
    _check_length(raw, PUBLIC_KEY_LENGTH, "public key")

    try:
        point = pubkey_to_G1(raw)
    except _LIBRARY_ERRORS as e:
        raise DecodeError(FailureReason.INVALID_ENCODING, f"invalid public key encoding: {e}") from e

    if is_inf(point):
        if allow_identity:
            return point
        raise DecodeError(FailureReason.IDENTITY_PUBLIC_KEY, "public key is the identity point")

    if not subgroup_check(point):
        raise DecodeError(FailureReason.NOT_IN_SUBGROUP, "public key is not in the G1 subgroup")

    return point


def decode_signature(data: object) -> Any:
    """Decode a 96-byte compressed G2 signature.

    The identity point is in the group and decodes successfully.

    Raises:
        DecodeError: If the signature is malformed or outside the subgroup

    """
    raw = as_bytes(data, "signature")
    _check_length(raw, SIGNATURE_LENGTH, "signature")

    try:
        point = signature_to_G2(raw)
    except _LIBRARY_ERRORS as e:
        raise DecodeError(FailureReason.INVALID_ENCODING, f"invalid signature encoding: {e}") from e

    if not subgroup_check(point):
        raise DecodeError(FailureReason.NOT_IN_SUBGROUP, "signature is not in the G2 subgroup")

    return point
