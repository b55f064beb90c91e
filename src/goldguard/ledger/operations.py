"""
Ledger operations.

Each operation takes the ledger state, the call context and its own
arguments, runs its checks in a fixed order and either applies all of its
effects and returns ``Ok`` or returns ``Err`` with the first failing check's
code. No state is written before the last check passes.
"""

from __future__ import annotations

import logging

from goldguard.core.types import (
    BURN_ADDRESS,
    CallContext,
    Err,
    ErrorCode,
    LedgerEvent,
    Ok,
    Result,
    require_int,
)
from goldguard.ledger.state import LedgerState

logger = logging.getLogger(__name__)


def _reject(operation: str, ctx: CallContext, code: ErrorCode, reason: str = "") -> Err:
    logger.debug(
        f"{operation} rejected for {ctx.caller} at height {ctx.block_height}: "
        f"{code.name}{f' ({reason})' if reason else ''}"
    )
    return Err(code)


def is_admin(state: LedgerState, caller: str) -> bool:
    return caller == state.admin


def is_oracle(state: LedgerState, caller: str) -> bool:
    return caller == state.oracle


def set_paused(state: LedgerState, ctx: CallContext, pause: bool) -> Result[bool]:
    if not is_admin(state, ctx.caller):
        return _reject("set_paused", ctx, ErrorCode.NOT_ADMIN)

    state.paused = bool(pause)
    logger.info(f"Ledger {'paused' if state.paused else 'unpaused'} by {ctx.caller}")
    return Ok(state.paused)


def set_redemption_enabled(state: LedgerState, ctx: CallContext, enabled: bool) -> Result[bool]:
    if not is_admin(state, ctx.caller):
        return _reject("set_redemption_enabled", ctx, ErrorCode.NOT_ADMIN)

    state.redemption_enabled = bool(enabled)
    logger.info(
        f"Redemption {'enabled' if state.redemption_enabled else 'disabled'} by {ctx.caller}"
    )
    return Ok(state.redemption_enabled)


def set_oracle(state: LedgerState, ctx: CallContext, new_oracle: str) -> Result[bool]:
    if not is_admin(state, ctx.caller):
        return _reject("set_oracle", ctx, ErrorCode.NOT_ADMIN)
    if new_oracle == BURN_ADDRESS:
        return _reject("set_oracle", ctx, ErrorCode.INVALID_RECIPIENT)

    previous = state.oracle
    state.oracle = new_oracle
    logger.info(f"Oracle changed from {previous} to {new_oracle}")
    return Ok(True)


def mint(
    state: LedgerState,
    ctx: CallContext,
    recipient: str,
    amount: int,
    oracle_verified: bool,
) -> Result[bool]:
    """
    Issue new units to a recipient.

    The caller must hold both the admin and the oracle role. ``oracle_verified``
    is carried for off-chain attestation plumbing and is not an
    authorization input.
    """
    require_int("amount", amount)
    if not is_admin(state, ctx.caller):
        return _reject("mint", ctx, ErrorCode.NOT_ADMIN)
    if not is_oracle(state, ctx.caller):
        return _reject("mint", ctx, ErrorCode.NOT_ORACLE)
    if recipient == BURN_ADDRESS:
        return _reject("mint", ctx, ErrorCode.INVALID_RECIPIENT)
    if amount <= 0:
        return _reject("mint", ctx, ErrorCode.INVALID_AMOUNT)
    if state.total_supply + amount > state.config.max_supply:
        return _reject("mint", ctx, ErrorCode.SUPPLY_CAP_EXCEEDED)

    state.balances[recipient] = state.balance_of(recipient) + amount
    state.total_supply += amount
    state.last_mint_event = LedgerEvent(recipient, amount, ctx.block_height)
    logger.info(
        f"Minted {amount} to {recipient} at height {ctx.block_height} "
        f"(oracle_verified={oracle_verified}, supply={state.total_supply})"
    )
    return Ok(True)


def redeem(state: LedgerState, ctx: CallContext, amount: int) -> Result[bool]:
    """
    Burn units from the caller's balance in exchange for physical gold.

    A successful redemption locks the caller out of further redemptions
    until ``block_height + redemption_lock_period``.
    """
    require_int("amount", amount)
    if state.paused:
        return _reject("redeem", ctx, ErrorCode.PAUSED)
    if not state.redemption_enabled:
        return _reject("redeem", ctx, ErrorCode.REDEMPTION_LOCKED, "redemption disabled")
    if amount < state.config.min_redemption:
        return _reject("redeem", ctx, ErrorCode.INVALID_AMOUNT)
    lock_height = state.redemption_lock_of(ctx.caller)
    if ctx.block_height < lock_height:
        return _reject(
            "redeem", ctx, ErrorCode.REDEMPTION_LOCKED, f"account locked until {lock_height}"
        )
    balance = state.balance_of(ctx.caller)
    if balance < amount:
        return _reject("redeem", ctx, ErrorCode.INSUFFICIENT_BALANCE)

    state.balances[ctx.caller] = balance - amount
    state.total_supply -= amount
    state.redemption_locks[ctx.caller] = ctx.block_height + state.config.redemption_lock_period
    state.last_redemption_event = LedgerEvent(ctx.caller, amount, ctx.block_height)
    logger.info(
        f"Redeemed {amount} from {ctx.caller} at height {ctx.block_height}, "
        f"locked until {state.redemption_locks[ctx.caller]}"
    )
    return Ok(True)


def transfer(state: LedgerState, ctx: CallContext, recipient: str, amount: int) -> Result[bool]:
    require_int("amount", amount)
    if state.paused:
        return _reject("transfer", ctx, ErrorCode.PAUSED)
    if recipient == BURN_ADDRESS:
        return _reject("transfer", ctx, ErrorCode.INVALID_RECIPIENT)
    if amount <= 0:
        return _reject("transfer", ctx, ErrorCode.INVALID_AMOUNT)
    balance = state.balance_of(ctx.caller)
    if balance < amount:
        return _reject("transfer", ctx, ErrorCode.INSUFFICIENT_BALANCE)

    # Debit first so a self-transfer nets to zero
    state.balances[ctx.caller] = balance - amount
    state.balances[recipient] = state.balance_of(recipient) + amount
    logger.debug(f"Transferred {amount} from {ctx.caller} to {recipient}")
    return Ok(True)


def stake(state: LedgerState, ctx: CallContext, amount: int) -> Result[bool]:
    require_int("amount", amount)
    if state.paused:
        return _reject("stake", ctx, ErrorCode.PAUSED)
    if amount <= 0:
        return _reject("stake", ctx, ErrorCode.INVALID_AMOUNT)
    balance = state.balance_of(ctx.caller)
    if balance < amount:
        return _reject("stake", ctx, ErrorCode.INSUFFICIENT_BALANCE)

    state.balances[ctx.caller] = balance - amount
    state.staked[ctx.caller] = state.staked_of(ctx.caller) + amount
    logger.debug(f"{ctx.caller} staked {amount}")
    return Ok(True)


def unstake(state: LedgerState, ctx: CallContext, amount: int) -> Result[bool]:
    require_int("amount", amount)
    if state.paused:
        return _reject("unstake", ctx, ErrorCode.PAUSED)
    if amount <= 0:
        return _reject("unstake", ctx, ErrorCode.INVALID_AMOUNT)
    staked = state.staked_of(ctx.caller)
    if staked < amount:
        return _reject("unstake", ctx, ErrorCode.INSUFFICIENT_STAKE)

    state.staked[ctx.caller] = staked - amount
    state.balances[ctx.caller] = state.balance_of(ctx.caller) + amount
    logger.debug(f"{ctx.caller} unstaked {amount}")
    return Ok(True)


OPERATIONS = {
    "set_paused": set_paused,
    "set_redemption_enabled": set_redemption_enabled,
    "set_oracle": set_oracle,
    "mint": mint,
    "redeem": redeem,
    "transfer": transfer,
    "stake": stake,
    "unstake": unstake,
}
