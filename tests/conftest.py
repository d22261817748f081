"""
Shared fixtures:
- Deterministic key pairs used by the known-answer transaction tests
- Test and public networks
- A helper that wraps one operation in a signed test transaction
"""
import pytest

from stellar_base import KeyPair, Network, Transaction

KP0_SECRET = "SBPQUZ6G4FZNWFHKUWC5BEYWF6R52E3SEP7R3GWYSM2XTKGF5LNTWW4R"
KP1_SECRET = "SBMSVD4KKELKGZXHBUQTIROWUAPQASDX7KEJITARP4VMZ6KLUHOGPTYW"
KP2_SECRET = "SBZVMB74Z76QZ3ZOY7UTDFYKMEGKW5XFJEB6PFKBF4UYSSWHG4EDH7PY"

TEST_SEQUENCE = 3556091187167235


@pytest.fixture
def keypair0():
    return KeyPair.from_secret_seed(KP0_SECRET)


@pytest.fixture
def keypair1():
    return KeyPair.from_secret_seed(KP1_SECRET)


@pytest.fixture
def keypair2():
    return KeyPair.from_secret_seed(KP2_SECRET)


@pytest.fixture
def test_network():
    return Network.new_test()


@pytest.fixture
def public_network():
    return Network.new_public()


@pytest.fixture
def signed_envelope(keypair0, test_network):
    """Build, sign with keypair0 and wrap a one-operation test transaction."""

    def make(operation, base_fee=100):
        tx = (
            Transaction.builder(keypair0.public_key, TEST_SEQUENCE, base_fee)
            .add_operation(operation)
            .build()
        )
        tx.sign(keypair0, test_network)
        return tx.to_envelope()

    return make
