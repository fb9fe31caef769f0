"""BLS12-381 min_pk ciphersuite constants.

Public keys are compressed G1 points, signatures are compressed G2 points.
The domain separation tag is the IETF basic (NUL) scheme tag, which is the
tag used by ledger-side verifiers of the same scheme. Changing it makes
every signature produced elsewhere silently fail to verify.
"""

import hashlib

DST = b"BLS_SIG_BLS12381G2_XMD:SHA-256_SSWU_RO_NUL_"

PUBLIC_KEY_LENGTH = 48
SIGNATURE_LENGTH = 96

# expand_message_xmd hash for hash-to-curve
HASH_FUNCTION = hashlib.sha256
