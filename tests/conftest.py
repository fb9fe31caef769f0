"""Test fixtures and utilities.

Keys and signatures are produced with py_ecc's basic ciphersuite, which uses
the same domain separation tag as blscert. Pairings are slow in pure Python,
so key material is built once per session.
"""

from collections.abc import AsyncGenerator

import pytest
from litestar.testing import AsyncTestClient
from py_ecc.bls import G2Basic
from py_ecc.bls.g2_primitives import G1_to_pubkey, G2_to_signature, subgroup_check
from py_ecc.bls.point_compression import modular_squareroot_in_FQ2
from py_ecc.optimized_bls12_381 import FQ, FQ2, b, b2, field_modulus, is_on_curve

from blscert.config import Config
from blscert.server import create_app

# Fixed 32-byte key generation seeds
NODE_SEEDS = [
    b"walrus-node-0-secret-key-seed!!1",
    b"walrus-node-1-secret-key-seed!!2",
    b"walrus-node-2-secret-key-seed!!3",
    b"walrus-node-3-secret-key-seed!!4",
    b"walrus-node-4-secret-key-seed!!5",
]

BLOB_CERT_MESSAGE = b"blob_cert_v1:blobid=abc123:epoch=42:size=1024"


class KeyPair:
    """A test signer: secret scalar plus compressed public key."""

    def __init__(self, seed: bytes) -> None:
        self.secret_key = G2Basic.KeyGen(seed)
        self.public_key = G2Basic.SkToPk(self.secret_key)

    def sign(self, message: bytes) -> bytes:
        return G2Basic.Sign(self.secret_key, message)


@pytest.fixture(scope="session")
def nodes() -> list[KeyPair]:
    """Five signers generated from fixed seeds."""
    return [KeyPair(seed) for seed in NODE_SEEDS]


@pytest.fixture(scope="session")
def quorum_signatures(nodes: list[KeyPair]) -> list[bytes]:
    """Signatures of nodes 0, 2 and 4 over the blob certificate message."""
    return [nodes[i].sign(BLOB_CERT_MESSAGE) for i in (0, 2, 4)]


@pytest.fixture(scope="session")
def quorum_public_keys(nodes: list[KeyPair]) -> list[bytes]:
    """Public keys of nodes 0, 2 and 4."""
    return [nodes[i].public_key for i in (0, 2, 4)]


@pytest.fixture
def config() -> Config:
    """Create a test configuration."""
    return Config(host="127.0.0.1", port=8080, log_level="DEBUG", max_batch_size=8)


@pytest.fixture
async def client(config: Config) -> AsyncGenerator[AsyncTestClient, None]:
    """Create a test client."""
    app = create_app(config)
    async with AsyncTestClient(app) as client:
        yield client


def _off_subgroup_g1_point() -> bytes:
    """Compressed G1 point that is on the curve but outside the subgroup."""
    x = 0
    while True:
        x += 1
        y = FQ(x**3 + 4) ** ((field_modulus + 1) // 4)
        point = (FQ(x), y, FQ.one())
        if is_on_curve(point, b) and not subgroup_check(point):
            return G1_to_pubkey(point)


def _off_subgroup_g2_point() -> bytes:
    """Compressed G2 point that is on the curve but outside the subgroup."""
    x = 0
    while True:
        x += 1
        y = modular_squareroot_in_FQ2(FQ2([x, 0]) ** 3 + b2)
        if y is None:
            continue
        point = (FQ2([x, 0]), y, FQ2.one())
        if is_on_curve(point, b2) and not subgroup_check(point):
            return G2_to_signature(point)


@pytest.fixture(scope="session")
def off_subgroup_public_key() -> bytes:
    return _off_subgroup_g1_point()


@pytest.fixture(scope="session")
def off_subgroup_signature() -> bytes:
    return _off_subgroup_g2_point()
