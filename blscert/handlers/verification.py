"""BLS verification and aggregation API endpoints."""

from __future__ import annotations

import asyncio
import logging
from typing import Annotated

from litestar import Controller, Request, Response, post
from litestar.exceptions import HTTPException
from litestar.params import Dependency
from litestar.status_codes import HTTP_200_OK, HTTP_500_INTERNAL_SERVER_ERROR

from blscert.config import Config  # noqa: TC001
from blscert.verifier import Verifier  # noqa: TC001

from .base import (
    AggregateRequest,
    AggregateResponse,
    VerifyAggregateRequest,
    VerifyRequest,
    VerifyResponse,
    check_batch_size,
    decode_hex,
    encode_hex,
    parse_request,
)

logger = logging.getLogger(__name__)

# Both are provided from application state by create_app
VerifierDependency = Annotated[Verifier, Dependency(skip_validation=True)]
ConfigDependency = Annotated[Config, Dependency(skip_validation=True)]


class VerificationController(Controller):  # type: ignore[misc]
    """BLS12-381 min_pk verification endpoints."""

    path = "/api/v1/bls"

    @post("/verify", status_code=HTTP_200_OK)  # type: ignore[untyped-decorator]
    async def verify(self, request: Request, verifier: VerifierDependency) -> VerifyResponse:
        """POST /api/v1/bls/verify - Verify one signature."""
        verify_request = await parse_request(request, VerifyRequest)

        signature = decode_hex(verify_request.signature, "signature")
        public_key = decode_hex(verify_request.public_key, "public_key")
        message = decode_hex(verify_request.message, "message")

        try:
            valid = await asyncio.to_thread(verifier.verify, signature, public_key, message)
        except Exception as e:
            logger.exception("Verification error")
            raise HTTPException(
                status_code=HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Verification failed: {e}",
            ) from e

        return VerifyResponse(valid=valid)

    @post("/aggregate", status_code=HTTP_200_OK)  # type: ignore[untyped-decorator]
    async def aggregate(
        self,
        request: Request,
        verifier: VerifierDependency,
        config: ConfigDependency,
    ) -> Response | AggregateResponse:
        """POST /api/v1/bls/aggregate - Aggregate signatures over one message."""
        aggregate_request = await parse_request(request, AggregateRequest)
        check_batch_size(aggregate_request.signatures, "signatures", config.max_batch_size)

        signatures = [
            decode_hex(value, f"signatures[{i}]")
            for i, value in enumerate(aggregate_request.signatures)
        ]

        try:
            aggregated = await asyncio.to_thread(verifier.aggregate, signatures)
        except Exception as e:
            logger.exception("Aggregation error")
            raise HTTPException(
                status_code=HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Aggregation failed: {e}",
            ) from e

        signature_hex = encode_hex(aggregated) if aggregated is not None else None

        accept_header = request.headers.get("Accept", "")
        if accept_header == "text/plain":
            return Response(
                content=signature_hex or "",
                status_code=HTTP_200_OK,
                media_type="text/plain",
            )

        return AggregateResponse(signature=signature_hex)

    @post("/verify_aggregate", status_code=HTTP_200_OK)  # type: ignore[untyped-decorator]
    async def verify_aggregate(
        self,
        request: Request,
        verifier: VerifierDependency,
        config: ConfigDependency,
    ) -> VerifyResponse:
        """POST /api/v1/bls/verify_aggregate - Verify an aggregate against its signer set."""
        verify_request = await parse_request(request, VerifyAggregateRequest)
        check_batch_size(verify_request.public_keys, "public_keys", config.max_batch_size)

        public_keys = [
            decode_hex(value, f"public_keys[{i}]")
            for i, value in enumerate(verify_request.public_keys)
        ]
        message = decode_hex(verify_request.message, "message")
        aggregate_signature = decode_hex(verify_request.aggregate_signature, "aggregate_signature")

        try:
            valid = await asyncio.to_thread(
                verifier.verify_aggregate,
                public_keys,
                message,
                aggregate_signature,
            )
        except Exception as e:
            logger.exception("Aggregate verification error")
            raise HTTPException(
                status_code=HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Aggregate verification failed: {e}",
            ) from e

        return VerifyResponse(valid=valid)
