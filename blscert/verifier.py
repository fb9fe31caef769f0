"""Verification orchestration."""

import logging
import time
from collections.abc import Sequence

from . import bls
from .metrics import (
    BATCH_SIZE,
    BLS_FAILURES_TOTAL,
    BLS_OPERATION_DURATION_SECONDS,
    BLS_OPERATIONS_TOTAL,
)
from .models import FailureReason
from .types import Message, PublicKeyBytes, SignatureBytes

logger = logging.getLogger(__name__)


class Verifier:
    """Runs BLS operations with metrics and diagnostic logging.

    The internal failure reason is recorded but never changes the result
    returned to the caller.
    """

    def __init__(self) -> None:
        self._logger = logger

    def _record(self, operation: str, started: float, failure: FailureReason | None, index: int | None) -> None:
        BLS_OPERATION_DURATION_SECONDS.labels(operation=operation).observe(
            time.perf_counter() - started
        )
        if failure is None:
            self._logger.debug(f"{operation}: success")
            return

        BLS_FAILURES_TOTAL.labels(operation=operation, reason=failure.value).inc()
        where = f" (entry {index})" if index is not None else ""
        self._logger.debug(f"{operation}: rejected, {failure.value}{where}")

    def verify(self, signature: SignatureBytes, public_key: PublicKeyBytes, message: Message) -> bool:
        """Verify a single signature.

        Args:
            signature: 96-byte compressed signature
            public_key: 48-byte compressed public key
            message: The signed message

        Returns:
            True if the signature is valid

        """
        BLS_OPERATIONS_TOTAL.labels(operation="verify").inc()
        started = time.perf_counter()

        outcome = bls.check_signature(signature, public_key, message)
        self._record("verify", started, outcome.failure, outcome.index)
        return outcome.valid

    def aggregate(self, signatures: Sequence[SignatureBytes]) -> SignatureBytes | None:
        """Aggregate signatures over one message.

        Returns:
            The 96-byte aggregate signature, or None if the list is empty or
            any entry is malformed

        """
        BLS_OPERATIONS_TOTAL.labels(operation="aggregate").inc()
        BATCH_SIZE.labels(operation="aggregate").observe(len(signatures))
        started = time.perf_counter()

        outcome = bls.aggregate_signatures(signatures)
        self._record("aggregate", started, outcome.failure, outcome.index)
        if outcome.signature is None:
            return None
        return SignatureBytes(outcome.signature)

    def verify_aggregate(
        self,
        public_keys: Sequence[PublicKeyBytes],
        message: Message,
        aggregate_signature: SignatureBytes,
    ) -> bool:
        """Verify an aggregate signature against the full signer set.

        Returns:
            True only if exactly these keys signed ``message``

        """
        BLS_OPERATIONS_TOTAL.labels(operation="verify_aggregate").inc()
        BATCH_SIZE.labels(operation="verify_aggregate").observe(len(public_keys))
        started = time.perf_counter()

        outcome = bls.check_aggregate(public_keys, message, aggregate_signature)
        self._record("verify_aggregate", started, outcome.failure, outcome.index)
        return outcome.valid
