"""BLS12-381 min_pk signature verification and aggregation."""

__version__ = "0.1.0"

from .bls import aggregate, verify, verify_aggregate  # noqa: E402
from .ciphersuite import DST, PUBLIC_KEY_LENGTH, SIGNATURE_LENGTH  # noqa: E402

__all__ = [
    "DST",
    "PUBLIC_KEY_LENGTH",
    "SIGNATURE_LENGTH",
    "aggregate",
    "verify",
    "verify_aggregate",
]
