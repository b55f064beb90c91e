"""
Unit tests for the GoldLedger facade.

Covers every operation's success path and each rejection in check order.
"""

import pytest

from conftest import ADMIN, ALICE, BOB, START_HEIGHT
from goldguard.core.exceptions import LedgerRejectedError, ValidationError
from goldguard.core.types import BURN_ADDRESS, Err, ErrorCode, LedgerEvent, Ok
from goldguard.ledger import GoldLedger, LedgerState


class TestAdminOperations:
    """Tests for set_paused, set_redemption_enabled and set_oracle."""

    def test_set_paused(self, ledger):
        assert ledger.set_paused(ADMIN, True) == Ok(True)
        assert ledger.paused is True
        assert ledger.set_paused(ADMIN, False) == Ok(False)
        assert ledger.paused is False

    def test_set_paused_requires_admin(self, ledger):
        assert ledger.set_paused(ALICE, True) == Err(ErrorCode.NOT_ADMIN)
        assert ledger.paused is False

    def test_set_redemption_enabled(self, ledger):
        assert ledger.set_redemption_enabled(ADMIN, True) == Ok(True)
        assert ledger.redemption_enabled is True

    def test_set_redemption_enabled_requires_admin(self, ledger):
        assert ledger.set_redemption_enabled(BOB, True) == Err(ErrorCode.NOT_ADMIN)
        assert ledger.redemption_enabled is False

    def test_set_oracle(self, ledger):
        assert ledger.set_oracle(ADMIN, BOB) == Ok(True)
        assert ledger.oracle == BOB
        assert ledger.is_oracle(BOB)
        assert not ledger.is_oracle(ADMIN)

    def test_set_oracle_requires_admin(self, ledger):
        assert ledger.set_oracle(ALICE, ALICE) == Err(ErrorCode.NOT_ADMIN)
        assert ledger.oracle == ADMIN

    def test_set_oracle_rejects_burn_address(self, ledger):
        assert ledger.set_oracle(ADMIN, BURN_ADDRESS) == Err(ErrorCode.INVALID_RECIPIENT)
        assert ledger.oracle == ADMIN

    def test_empty_oracle_disables_minting(self, ledger):
        assert ledger.set_oracle(ADMIN, "") == Ok(True)

        assert ledger.oracle == ""
        assert ledger.mint(ADMIN, ALICE, 1, True) == Err(ErrorCode.NOT_ORACLE)

    def test_not_admin_checked_before_burn_address(self, ledger):
        assert ledger.set_oracle(ALICE, BURN_ADDRESS) == Err(ErrorCode.NOT_ADMIN)

    def test_role_queries(self, ledger):
        assert ledger.is_admin(ADMIN)
        assert not ledger.is_admin(ALICE)
        assert ledger.is_oracle(ADMIN)


class TestMint:
    """Tests for mint."""

    def test_mint_by_admin_oracle(self, ledger):
        result = ledger.mint(ADMIN, ALICE, 1_000_000, True)

        assert result == Ok(True)
        assert ledger.balance_of(ALICE) == 1_000_000
        assert ledger.total_supply == 1_000_000
        assert ledger.last_mint_event == LedgerEvent(ALICE, 1_000_000, 1000)

    def test_mint_over_max_supply(self, ledger):
        result = ledger.mint(ADMIN, ALICE, 2_000_000_000_000, True)

        assert result == Err(ErrorCode.SUPPLY_CAP_EXCEEDED)
        assert ledger.total_supply == 0
        assert ALICE not in ledger.state.balances
        assert ledger.last_mint_event == LedgerEvent()

    def test_mint_up_to_exact_cap(self, ledger, config):
        assert ledger.mint(ADMIN, ALICE, config.max_supply, True) == Ok(True)
        assert ledger.mint(ADMIN, ALICE, 1, True) == Err(ErrorCode.SUPPLY_CAP_EXCEEDED)
        assert ledger.total_supply == config.max_supply

    def test_mint_requires_admin(self, ledger):
        assert ledger.mint(ALICE, ALICE, 100, True) == Err(ErrorCode.NOT_ADMIN)

    def test_mint_requires_oracle_role(self, ledger):
        ledger.set_oracle(ADMIN, BOB)

        assert ledger.mint(ADMIN, ALICE, 100, True) == Err(ErrorCode.NOT_ORACLE)
        # Oracle alone is not enough either
        assert ledger.mint(BOB, ALICE, 100, True) == Err(ErrorCode.NOT_ADMIN)

    def test_mint_rejects_burn_recipient(self, ledger):
        assert ledger.mint(ADMIN, BURN_ADDRESS, 100, True) == Err(ErrorCode.INVALID_RECIPIENT)

    @pytest.mark.parametrize("amount", [0, -1])
    def test_mint_rejects_non_positive_amount(self, ledger, amount):
        assert ledger.mint(ADMIN, ALICE, amount, True) == Err(ErrorCode.INVALID_AMOUNT)

    def test_oracle_verified_flag_is_not_checked(self, ledger):
        assert ledger.mint(ADMIN, ALICE, 100, False) == Ok(True)

    def test_last_mint_event_overwritten(self, ledger):
        ledger.mint(ADMIN, ALICE, 100, True)
        ledger.advance_to(1005)
        ledger.mint(ADMIN, BOB, 200, True)

        assert ledger.last_mint_event == LedgerEvent(BOB, 200, 1005)

    def test_mint_rejects_non_integer_amount(self, ledger):
        with pytest.raises(ValidationError):
            ledger.mint(ADMIN, ALICE, 1.5, True)
        with pytest.raises(ValidationError):
            ledger.mint(ADMIN, ALICE, True, True)
        assert ledger.total_supply == 0


class TestTransfer:
    """Tests for transfer."""

    def test_transfer(self, funded_ledger):
        result = funded_ledger.transfer(ALICE, BOB, 2_000_000)

        assert result == Ok(True)
        assert funded_ledger.balance_of(ALICE) == 3_000_000
        assert funded_ledger.balance_of(BOB) == 2_000_000
        assert funded_ledger.total_supply == 5_000_000

    def test_transfer_when_paused(self, funded_ledger):
        funded_ledger.set_paused(ADMIN, True)

        assert funded_ledger.transfer(ALICE, BOB, 1_000_000) == Err(ErrorCode.PAUSED)

    def test_transfer_to_burn_address(self, funded_ledger):
        assert funded_ledger.transfer(ALICE, BURN_ADDRESS, 1) == Err(ErrorCode.INVALID_RECIPIENT)

    def test_transfer_zero(self, funded_ledger):
        assert funded_ledger.transfer(ALICE, BOB, 0) == Err(ErrorCode.INVALID_AMOUNT)

    def test_transfer_insufficient_balance(self, funded_ledger):
        assert funded_ledger.transfer(ALICE, BOB, 5_000_001) == Err(ErrorCode.INSUFFICIENT_BALANCE)
        assert funded_ledger.balance_of(ALICE) == 5_000_000
        assert BOB not in funded_ledger.state.balances

    def test_transfer_from_unknown_account(self, ledger):
        assert ledger.transfer(BOB, ALICE, 1) == Err(ErrorCode.INSUFFICIENT_BALANCE)
        assert ledger.state.balances == {}

    def test_transfer_entire_balance_keeps_zero_entry(self, funded_ledger):
        funded_ledger.transfer(ALICE, BOB, 5_000_000)

        assert funded_ledger.state.balances[ALICE] == 0

    def test_self_transfer(self, funded_ledger):
        assert funded_ledger.transfer(ALICE, ALICE, 1_000_000) == Ok(True)
        assert funded_ledger.balance_of(ALICE) == 5_000_000


class TestStaking:
    """Tests for stake and unstake."""

    def test_stake(self, funded_ledger):
        result = funded_ledger.stake(ALICE, 2_000_000)

        assert result == Ok(True)
        assert funded_ledger.balance_of(ALICE) == 3_000_000
        assert funded_ledger.staked_of(ALICE) == 2_000_000
        assert funded_ledger.total_supply == 5_000_000

    def test_unstake(self, funded_ledger):
        funded_ledger.stake(ALICE, 2_000_000)
        result = funded_ledger.unstake(ALICE, 1_000_000)

        assert result == Ok(True)
        assert funded_ledger.staked_of(ALICE) == 1_000_000
        assert funded_ledger.balance_of(ALICE) == 4_000_000

    def test_stake_when_paused(self, funded_ledger):
        funded_ledger.set_paused(ADMIN, True)
        assert funded_ledger.stake(ALICE, 1) == Err(ErrorCode.PAUSED)

    def test_unstake_when_paused(self, funded_ledger):
        funded_ledger.stake(ALICE, 10)
        funded_ledger.set_paused(ADMIN, True)
        assert funded_ledger.unstake(ALICE, 10) == Err(ErrorCode.PAUSED)
        assert funded_ledger.staked_of(ALICE) == 10

    @pytest.mark.parametrize("amount", [0, -5])
    def test_stake_invalid_amount(self, funded_ledger, amount):
        assert funded_ledger.stake(ALICE, amount) == Err(ErrorCode.INVALID_AMOUNT)

    @pytest.mark.parametrize("amount", [0, -5])
    def test_unstake_invalid_amount(self, funded_ledger, amount):
        assert funded_ledger.unstake(ALICE, amount) == Err(ErrorCode.INVALID_AMOUNT)

    def test_stake_insufficient_balance(self, funded_ledger):
        assert funded_ledger.stake(ALICE, 6_000_000) == Err(ErrorCode.INSUFFICIENT_BALANCE)
        assert ALICE not in funded_ledger.state.staked

    def test_unstake_insufficient_stake(self, funded_ledger):
        funded_ledger.stake(ALICE, 100)
        assert funded_ledger.unstake(ALICE, 101) == Err(ErrorCode.INSUFFICIENT_STAKE)

    def test_unstake_without_any_stake(self, ledger):
        assert ledger.unstake(BOB, 1) == Err(ErrorCode.INSUFFICIENT_STAKE)
        assert ledger.state.staked == {}
        assert ledger.state.balances == {}


class TestRedeem:
    """Tests for redeem and the redemption lock."""

    @pytest.fixture
    def redeemable(self, funded_ledger) -> GoldLedger:
        funded_ledger.set_redemption_enabled(ADMIN, True)
        return funded_ledger

    def test_redeem(self, redeemable):
        result = redeemable.redeem(ALICE, 1_000_000)

        assert result == Ok(True)
        assert redeemable.balance_of(ALICE) == 4_000_000
        assert redeemable.total_supply == 4_000_000
        assert redeemable.redemption_lock_of(ALICE) == 1000 + 1440
        assert redeemable.last_redemption_event == LedgerEvent(ALICE, 1_000_000, 1000)

    def test_redeem_when_disabled(self, funded_ledger):
        assert funded_ledger.redeem(ALICE, 1_000_000) == Err(ErrorCode.REDEMPTION_LOCKED)

    def test_redeem_when_paused(self, redeemable):
        redeemable.set_paused(ADMIN, True)
        assert redeemable.redeem(ALICE, 1_000_000) == Err(ErrorCode.PAUSED)

    def test_paused_checked_before_disabled(self, funded_ledger):
        funded_ledger.set_paused(ADMIN, True)
        assert funded_ledger.redeem(ALICE, 1_000_000) == Err(ErrorCode.PAUSED)

    def test_redeem_below_minimum(self, redeemable):
        assert redeemable.redeem(ALICE, 500_000) == Err(ErrorCode.INVALID_AMOUNT)

    def test_redeem_exact_minimum(self, redeemable):
        assert redeemable.redeem(ALICE, 1_000_000) == Ok(True)

    def test_redeem_during_lock_period(self, redeemable):
        redeemable.redeem(ALICE, 1_000_000)
        result = redeemable.redeem(ALICE, 1_000_000)

        assert result == Err(ErrorCode.REDEMPTION_LOCKED)
        assert redeemable.balance_of(ALICE) == 4_000_000

    def test_redeem_one_block_before_unlock(self, redeemable):
        redeemable.redeem(ALICE, 1_000_000)
        redeemable.advance_to(START_HEIGHT + 1439)

        assert redeemable.redeem(ALICE, 1_000_000) == Err(ErrorCode.REDEMPTION_LOCKED)

    def test_redeem_after_lock_period(self, redeemable):
        redeemable.redeem(ALICE, 1_000_000)
        redeemable.advance_to(2440)

        assert redeemable.redeem(ALICE, 1_000_000) == Ok(True)
        assert redeemable.balance_of(ALICE) == 3_000_000
        assert redeemable.redemption_lock_of(ALICE) == 2440 + 1440

    def test_lock_checked_before_balance(self, redeemable):
        redeemable.redeem(ALICE, 1_000_000)
        assert redeemable.redeem(ALICE, 10_000_000) == Err(ErrorCode.REDEMPTION_LOCKED)

    def test_redeem_insufficient_balance(self, redeemable):
        assert redeemable.redeem(ALICE, 6_000_000) == Err(ErrorCode.INSUFFICIENT_BALANCE)
        assert redeemable.redemption_lock_of(ALICE) == 0
        assert ALICE not in redeemable.state.redemption_locks

    def test_lock_is_per_account(self, redeemable):
        redeemable.transfer(ALICE, BOB, 2_000_000)
        redeemable.redeem(ALICE, 1_000_000)

        assert redeemable.redeem(BOB, 1_000_000) == Ok(True)

    def test_staked_funds_cannot_be_redeemed(self, redeemable):
        redeemable.stake(ALICE, 4_500_000)
        assert redeemable.redeem(ALICE, 1_000_000) == Err(ErrorCode.INSUFFICIENT_BALANCE)


class TestBlockHeight:
    """Tests for the host-supplied clock."""

    def test_advance(self, ledger):
        ledger.advance_to(1001)
        assert ledger.block_height == 1001

    def test_same_height_allowed(self, ledger):
        ledger.advance_to(START_HEIGHT)
        assert ledger.block_height == START_HEIGHT

    def test_cannot_go_backwards(self, ledger):
        with pytest.raises(ValidationError, match="cannot decrease"):
            ledger.advance_to(999)
        assert ledger.block_height == START_HEIGHT

    def test_negative_start_height(self, config):
        with pytest.raises(ValidationError):
            GoldLedger(config, block_height=-1)

    def test_events_use_current_height(self, ledger):
        ledger.advance_to(123_456)
        ledger.mint(ADMIN, ALICE, 1, True)
        assert ledger.last_mint_event.block_height == 123_456


class TestExecuteByName:
    """Tests for dispatching operations by name."""

    def test_execute_known_operation(self, ledger):
        assert ledger.execute("mint", ADMIN, ALICE, 10, True) == Ok(True)
        assert ledger.balance_of(ALICE) == 10

    def test_execute_unknown_operation(self, ledger):
        with pytest.raises(ValidationError, match="Unknown ledger operation"):
            ledger.execute("burn", ADMIN, 10)


class TestResultUnwrap:
    """Tests for unwrapping operation results."""

    def test_unwrap_ok(self, ledger):
        assert ledger.mint(ADMIN, ALICE, 10, True).unwrap() is True

    def test_unwrap_err_raises(self, ledger):
        with pytest.raises(LedgerRejectedError) as exc_info:
            ledger.mint(ALICE, ALICE, 10, True).unwrap()
        assert exc_info.value.code == ErrorCode.NOT_ADMIN


class TestFromState:
    """Tests for resuming a ledger from committed state."""

    def test_uses_state_config(self, config):
        state = LedgerState(config=config.with_updates(max_supply=100))

        ledger = GoldLedger.from_state(state, block_height=START_HEIGHT)

        assert ledger.config is state.config
        assert ledger.config.max_supply == 100
        assert ledger.mint(ADMIN, ALICE, 101, True) == Err(ErrorCode.SUPPLY_CAP_EXCEEDED)

    def test_keeps_state_object(self, config):
        state = LedgerState(config=config)

        ledger = GoldLedger.from_state(state, block_height=START_HEIGHT)
        ledger.mint(ADMIN, ALICE, 10, True)

        assert ledger.state is state
        assert state.balance_of(ALICE) == 10

    def test_negative_height(self, config):
        with pytest.raises(ValidationError):
            GoldLedger.from_state(LedgerState(config=config), block_height=-1)


class TestCallCost:
    """Calls run against the live state without copying it."""

    @pytest.fixture
    def no_copy(self, monkeypatch):
        def fail(self):
            raise AssertionError("ledger state was copied")

        monkeypatch.setattr(LedgerState, "copy", fail)

    def test_accepted_calls_do_not_copy(self, funded_ledger, no_copy):
        state = funded_ledger.state

        assert funded_ledger.transfer(ALICE, BOB, 1_000) == Ok(True)
        assert funded_ledger.stake(BOB, 1_000) == Ok(True)
        assert funded_ledger.execute("unstake", BOB, 500) == Ok(True)
        assert funded_ledger.state is state

    def test_rejected_calls_do_not_copy(self, funded_ledger, no_copy):
        state = funded_ledger.state

        assert funded_ledger.transfer(ALICE, BOB, 10**9) == Err(ErrorCode.INSUFFICIENT_BALANCE)
        assert funded_ledger.redeem(ALICE, 1_000_000) == Err(ErrorCode.REDEMPTION_LOCKED)
        assert funded_ledger.state is state
        assert funded_ledger.balance_of(ALICE) == 5_000_000
