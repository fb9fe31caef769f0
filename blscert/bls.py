"""BLS12-381 min_pk verification and aggregation.

Three stateless operations make up the core:

- ``verify``: check one signature against one public key and message
- ``aggregate``: sum signatures over the same message into one
- ``verify_aggregate``: check an aggregate against the full signer set

All three are total. Malformed input, failed subgroup checks and pairing
mismatches all produce ``False`` (or the empty-buffer sentinel for
``aggregate``). The ``check_*`` and ``aggregate_signatures`` variants return
the same decision along with the internal failure reason for logging.
"""

import logging
from collections.abc import Sequence
from typing import Any

from py_ecc.bls.g2_primitives import G2_to_signature, is_inf
from py_ecc.bls.hash_to_curve import hash_to_G2
from py_ecc.optimized_bls12_381 import (
    FQ12,
    G1,
    Z1,
    add,
    final_exponentiate,
    neg,
    pairing,
)

from .ciphersuite import DST, HASH_FUNCTION
from .decoder import DecodeError, as_bytes, decode_public_key, decode_signature
from .models import AggregationOutcome, FailureReason, VerificationOutcome

logger = logging.getLogger(__name__)

_NEG_G1 = neg(G1)


def _pairing_check(public_key: Any, message: bytes, signature: Any) -> bool:
    """Evaluate e(G1, signature) == e(public_key, H(message)).

    Both sides are folded into one product with a single final
    exponentiation: e(-G1, signature) * e(public_key, H(message)) == 1.
    """
    message_point = hash_to_G2(message, DST, HASH_FUNCTION)
    product = pairing(signature, _NEG_G1, final_exponentiate=False) * pairing(
        message_point, public_key, final_exponentiate=False
    )
    return final_exponentiate(product) == FQ12.one()


def check_signature(signature: object, public_key: object, message: object) -> VerificationOutcome:
    """Verify a single signature and report why it failed, if it did."""
    try:
        pk_point = decode_public_key(public_key)
        sig_point = decode_signature(signature)
        msg = as_bytes(message, "message")
    except DecodeError as e:
        logger.debug(f"Rejected signature input: {e}")
        return VerificationOutcome.rejected(e.reason)

    if not _pairing_check(pk_point, msg, sig_point):
        return VerificationOutcome.rejected(FailureReason.PAIRING_MISMATCH)
    return VerificationOutcome.success()


def verify(signature: object, public_key: object, message: object) -> bool:
    """Verify a BLS12-381 min_pk signature.

    Args:
        signature: 96-byte compressed G2 signature
        public_key: 48-byte compressed G1 public key
        message: Arbitrary message bytes

    Returns:
        True if the signature is valid for the key and message, False
        otherwise, including for any malformed input

    """
    return check_signature(signature, public_key, message).valid


def aggregate_signatures(signatures: Sequence[object]) -> AggregationOutcome:
    """Sum signatures into one aggregate, all or nothing.

    Every entry is decoded with the subgroup check before any addition. A
    single malformed entry fails the whole call; the valid subset is never
    aggregated on its own.
    """
    try:
        items = list(signatures)
    except TypeError:
        return AggregationOutcome(signature=None, failure=FailureReason.NOT_BYTES)

    if not items:
        return AggregationOutcome(signature=None, failure=FailureReason.EMPTY_INPUT)

    points = []
    for index, item in enumerate(items):
        try:
            points.append(decode_signature(item))
        except DecodeError as e:
            logger.debug(f"Rejected signature {index} for aggregation: {e}")
            return AggregationOutcome(signature=None, failure=e.reason, index=index)

    total = points[0]
    for point in points[1:]:
        total = add(total, point)

    return AggregationOutcome(signature=G2_to_signature(total))


def aggregate(signatures: Sequence[object]) -> bytes:
    """Aggregate BLS12-381 min_pk signatures over the same message.

    Args:
        signatures: 96-byte compressed G2 signatures, in any order

    Returns:
        The 96-byte aggregate signature, or b"" if the list is empty or any
        entry is malformed

    """
    outcome = aggregate_signatures(signatures)
    if outcome.signature is None:
        return b""
    return outcome.signature


def check_aggregate(
    public_keys: Sequence[object],
    message: object,
    aggregate_signature: object,
) -> VerificationOutcome:
    """Verify an aggregate signature and report why it failed, if it did."""
    try:
        keys = list(public_keys)
    except TypeError:
        return VerificationOutcome.rejected(FailureReason.NOT_BYTES)

    if not keys:
        return VerificationOutcome.rejected(FailureReason.EMPTY_INPUT)

    key_sum = Z1
    for index, key in enumerate(keys):
        try:
            key_sum = add(key_sum, decode_public_key(key))
        except DecodeError as e:
            logger.debug(f"Rejected public key {index} for aggregate verification: {e}")
            return VerificationOutcome.rejected(e.reason, index=index)

    try:
        sig_point = decode_signature(aggregate_signature)
        msg = as_bytes(message, "message")
    except DecodeError as e:
        logger.debug(f"Rejected aggregate signature input: {e}")
        return VerificationOutcome.rejected(e.reason)

    # keys that cancel each other out would verify against the identity signature
    if is_inf(key_sum):
        logger.debug("Rejected aggregate verification: public keys sum to the identity point")
        return VerificationOutcome.rejected(FailureReason.IDENTITY_PUBLIC_KEY)

    if not _pairing_check(key_sum, msg, sig_point):
        return VerificationOutcome.rejected(FailureReason.PAIRING_MISMATCH)
    return VerificationOutcome.success()


def verify_aggregate(
    public_keys: Sequence[object],
    message: object,
    aggregate_signature: object,
) -> bool:
    """Verify an aggregate signature where every signer signed ``message``.

    Args:
        public_keys: 48-byte compressed G1 public keys of the exact signer set
        message: The shared message
        aggregate_signature: 96-byte compressed aggregate G2 signature

    Returns:
        True only if the keys are exactly the signers of the aggregate over
        this message. An empty key list, a missing or extra signer, or any
        malformed input yields False.

    """
    return check_aggregate(public_keys, message, aggregate_signature).valid
