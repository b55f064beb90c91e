"""
Example: Gold token lifecycle

Demonstrates minting, transfers, staking and time-locked redemption
against persisted state.
"""

import asyncio

from dotenv import load_dotenv

load_dotenv()

from goldguard import (  # noqa: E402
    InMemoryStorage,
    LedgerConfig,
    LedgerExecutor,
    configure_logging,
)


async def main():
    """
    Ledger example showing:
    1. Oracle-attested minting
    2. Transfers and staking
    3. Redemption and its per-account lock
    """
    print("=== GoldGuard Ledger Example ===\n")

    # GOLDGUARD_ADMIN must be set (e.g. in .env)
    config = LedgerConfig.from_env()
    configure_logging(config.log_level)

    executor = LedgerExecutor(InMemoryStorage(), config)
    admin = config.admin
    alice = "ST2CY5V39NHDPWSXMW9QDT3HC3GD6Q6XX4CFRK9AG"
    bob = "ST3NBRSFKX28FQ2ZJ1MAKX58HKHSDGNV5N7R21XCP"
    height = 1000

    print("--- Minting ---")
    result = await executor.execute("mint", admin, height, alice, 5_000_000, True)
    print(f"mint 5,000,000 to alice: {result.to_dict()}")

    print("\n--- Transfer and Stake ---")
    result = await executor.execute("transfer", alice, height, bob, 2_000_000)
    print(f"alice -> bob 2,000,000: {result.to_dict()}")
    result = await executor.execute("stake", alice, height, 1_000_000)
    print(f"alice stakes 1,000,000: {result.to_dict()}")

    print("\n--- Redemption ---")
    await executor.execute("set_redemption_enabled", admin, height, True)
    result = await executor.execute("redeem", bob, height, 1_000_000)
    print(f"bob redeems 1,000,000: {result.to_dict()}")
    result = await executor.execute("redeem", bob, height + 1, 1_000_000)
    print(f"bob redeems again one block later: {result.to_dict()}")

    state = await executor.load()
    print("\n--- Final State ---")
    print(f"Total supply: {state.total_supply:,}")
    for account in (alice, bob):
        print(
            f"  {account[:8]}...: balance={state.balance_of(account):,} "
            f"staked={state.staked_of(account):,} "
            f"locked_until={state.redemption_lock_of(account)}"
        )


if __name__ == "__main__":
    asyncio.run(main())
