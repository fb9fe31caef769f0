"""Data classes for blscert.

This module contains the result types returned by the diagnostic variants of
the core operations. The boolean / empty-buffer operations are derived from
them, so the internal reason never changes a caller-visible result.
"""

from dataclasses import dataclass
from enum import Enum


class FailureReason(Enum):
    """Internal reason a verification or aggregation did not succeed."""

    # argument is not a bytes-like object
    NOT_BYTES = "not_bytes"
    # not exactly 48 (public key) or 96 (signature) bytes
    WRONG_LENGTH = "wrong_length"
    # bad flag bits, coordinate out of range, or no point with that x
    INVALID_ENCODING = "invalid_encoding"
    # decodes to a curve point outside the prime-order subgroup
    NOT_IN_SUBGROUP = "not_in_subgroup"
    # point at infinity used as a signer key, or a key sum that cancels out
    IDENTITY_PUBLIC_KEY = "identity_public_key"
    EMPTY_INPUT = "empty_input"
    PAIRING_MISMATCH = "pairing_mismatch"


@dataclass(frozen=True, slots=True)
class VerificationOutcome:
    """Result of a single or aggregate signature check.

    Attributes:
        valid: Whether the pairing equation holds for well-formed inputs
        failure: Why the check failed, None when valid
        index: Position of the offending public key in the input list, when
            the failure belongs to one list entry

    """

    valid: bool
    failure: FailureReason | None = None
    index: int | None = None

    @classmethod
    def success(cls) -> "VerificationOutcome":
        return cls(valid=True)

    @classmethod
    def rejected(cls, failure: FailureReason, index: int | None = None) -> "VerificationOutcome":
        return cls(valid=False, failure=failure, index=index)


@dataclass(frozen=True, slots=True)
class AggregationOutcome:
    """Result of aggregating signatures.

    Attributes:
        signature: The 96-byte aggregate, or None if aggregation failed
        failure: Why aggregation failed, None on success
        index: Position of the offending signature in the input list

    """

    signature: bytes | None
    failure: FailureReason | None = None
    index: int | None = None

    @property
    def ok(self) -> bool:
        return self.signature is not None
