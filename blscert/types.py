"""Type definitions for blscert.

This module contains type aliases and NewType definitions for domain-specific
types to improve type safety and code readability.
"""

from typing import NewType

PublicKeyBytes = NewType("PublicKeyBytes", bytes)
"""Compressed G1 public key (48 bytes)."""

SignatureBytes = NewType("SignatureBytes", bytes)
"""Compressed G2 signature or aggregate signature (96 bytes)."""

Message = NewType("Message", bytes)
"""Opaque message bytes, signed as-is without canonicalization."""
