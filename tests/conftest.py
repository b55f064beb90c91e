import pytest

from goldguard.core.config import LedgerConfig
from goldguard.ledger import GoldLedger
from goldguard.storage.memory import InMemoryStorage

ADMIN = "ST1PQHQKV0RJXZFY1DGX8MNSNYVE3VGZJSRTPGZGM"
ALICE = "ST2CY5V39NHDPWSXMW9QDT3HC3GD6Q6XX4CFRK9AG"
BOB = "ST3NBRSFKX28FQ2ZJ1MAKX58HKHSDGNV5N7R21XCP"
START_HEIGHT = 1000


@pytest.fixture
def config() -> LedgerConfig:
    return LedgerConfig(admin=ADMIN)


@pytest.fixture
def ledger(config) -> GoldLedger:
    return GoldLedger(config, block_height=START_HEIGHT)


@pytest.fixture
def funded_ledger(ledger) -> GoldLedger:
    """Ledger where ALICE holds 5,000,000 units."""
    ledger.mint(ADMIN, ALICE, 5_000_000, True).unwrap()
    return ledger


@pytest.fixture
def memory_storage() -> InMemoryStorage:
    return InMemoryStorage()
