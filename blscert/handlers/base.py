"""Base types, structs and validation helpers for handlers."""

import logging
from typing import TypeVar

import msgspec
from litestar import Request
from litestar.exceptions import ValidationException

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=msgspec.Struct)


# Request/Response structs


class VerifyRequest(msgspec.Struct):
    """Request struct for verifying one signature."""

    signature: str
    public_key: str
    message: str


class AggregateRequest(msgspec.Struct):
    """Request struct for aggregating signatures."""

    signatures: list[str]


class VerifyAggregateRequest(msgspec.Struct):
    """Request struct for verifying an aggregate signature."""

    public_keys: list[str]
    message: str
    aggregate_signature: str


class VerifyResponse(msgspec.Struct):
    """Response for verification operations."""

    valid: bool


class AggregateResponse(msgspec.Struct):
    """Response for aggregation.

    signature is null when the input list was empty or held a malformed entry.
    """

    signature: str | None


class HealthResponse(msgspec.Struct):
    """Health check response."""

    status: str
    dst: str


# Validation helpers


async def parse_request(request: Request, struct_type: type[T]) -> T:
    """Decode a JSON request body into ``struct_type``.

    Raises:
        ValidationException: If the body is not valid JSON for the struct

    """
    body_bytes = await request.body()
    try:
        return msgspec.json.decode(body_bytes, type=struct_type)
    except (msgspec.ValidationError, msgspec.DecodeError) as e:
        raise ValidationException(detail=f"Validation error: {e}") from e


def check_batch_size(items: list[str], field: str, max_batch_size: int) -> None:
    """Reject lists longer than the configured batch limit.

    Raises:
        ValidationException: If the list is too long

    """
    if len(items) > max_batch_size:
        raise ValidationException(
            detail=f"{field} has {len(items)} entries, at most {max_batch_size} allowed",
        )


def decode_hex(value: str, field: str) -> bytes:
    """Decode a hex string with optional 0x prefix.

    Only the hex layer is checked here. Whether the bytes form a valid
    point is decided by the core, which answers false instead of failing.

    Raises:
        ValidationException: If value is not valid hex

    """
    cleaned = value.removeprefix("0x").removeprefix("0X")
    try:
        return bytes.fromhex(cleaned)
    except ValueError as e:
        raise ValidationException(detail=f"{field} is not valid hex: {e}") from e


def encode_hex(data: bytes) -> str:
    """Render bytes as 0x-prefixed lowercase hex."""
    return f"0x{data.hex()}"
