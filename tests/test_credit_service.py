"""Credit ledger and reservation flow."""

import asyncio

import pytest

from chainwise.core.exceptions import (
    InsufficientCreditsError,
    InvalidRefillError,
    UnknownAccountError,
)
from chainwise.services.credit_service import InMemoryCreditLedger, credit_hold


@pytest.fixture
def ledger():
    ledger = InMemoryCreditLedger()
    ledger.seed("alice", "pro", credits=10)
    return ledger


class TestLedger:
    def test_seed_defaults_to_monthly_allotment(self):
        ledger = InMemoryCreditLedger()
        assert ledger.seed("bob", "elite").credits == 2000

    @pytest.mark.asyncio
    async def test_unknown_account(self, ledger):
        with pytest.raises(UnknownAccountError):
            await ledger.get_balance("mallory")

    @pytest.mark.asyncio
    async def test_debit(self, ledger):
        assert await ledger.debit("alice", 4, "chat:buddy") == 6
        transactions = await ledger.transactions("alice")
        assert transactions[0].amount == -4
        assert transactions[0].balance_after == 6

    @pytest.mark.asyncio
    async def test_debit_insufficient(self, ledger):
        with pytest.raises(InsufficientCreditsError) as exc_info:
            await ledger.debit("alice", 11, "tool:narrative_scanner")
        assert exc_info.value.available == 10
        assert exc_info.value.status_code == 402

    @pytest.mark.asyncio
    async def test_hold_reduces_available_until_commit(self, ledger):
        reservation = await ledger.reserve("alice", 3, "chat:trader")
        assert await ledger.get_balance("alice") == 7
        assert await ledger.transactions("alice") == []

        assert await ledger.commit(reservation) == 7
        assert (await ledger.get_account("alice")).credits == 7
        assert len(await ledger.transactions("alice")) == 1

    @pytest.mark.asyncio
    async def test_release_restores_credits(self, ledger):
        reservation = await ledger.reserve("alice", 3, "chat:trader")
        await ledger.release(reservation)
        assert await ledger.get_balance("alice") == 10

    @pytest.mark.asyncio
    async def test_commit_twice_fails(self, ledger):
        reservation = await ledger.reserve("alice", 1, "chat:buddy")
        await ledger.commit(reservation)
        with pytest.raises(ValueError):
            await ledger.commit(reservation)

    @pytest.mark.asyncio
    async def test_concurrent_holds_never_overdraw(self, ledger):
        async def try_reserve():
            try:
                return await ledger.reserve("alice", 3, "chat:trader")
            except InsufficientCreditsError:
                return None

        results = await asyncio.gather(*[try_reserve() for _ in range(5)])
        assert sum(1 for r in results if r is not None) == 3
        assert await ledger.get_balance("alice") == 1

    @pytest.mark.asyncio
    async def test_bonus_refill_adds_amount(self, ledger):
        assert await ledger.refill("alice", 50, "bonus") == 60
        latest = (await ledger.transactions("alice"))[0]
        assert (latest.amount, latest.reason, latest.balance_after) == (50, "bonus", 60)

    @pytest.mark.asyncio
    async def test_monthly_reset_restores_allotment(self, ledger):
        await ledger.debit("alice", 10, "tool:narrative_scanner")
        assert await ledger.refill("alice", refill_type="monthly_reset") == 500
        assert (await ledger.transactions("alice"))[0].reason == "monthly_reset"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "amount,refill_type",
        [(None, "refill"), (0, "refill"), (-5, "bonus"), (10, "gift")],
    )
    async def test_invalid_refill_rejected(self, ledger, amount, refill_type):
        with pytest.raises(InvalidRefillError):
            await ledger.refill("alice", amount, refill_type)
        assert await ledger.get_balance("alice") == 10
        assert await ledger.transactions("alice") == []

    @pytest.mark.asyncio
    async def test_transactions_paged_newest_first(self, ledger):
        for amount in (1, 2, 3):
            await ledger.debit("alice", amount, f"chat:{amount}")

        page = await ledger.transactions("alice", limit=2, offset=1)

        assert [t.reason for t in page] == ["chat:2", "chat:1"]


class TestCreditHold:
    @pytest.mark.asyncio
    async def test_commit_on_success(self, ledger):
        async with credit_hold(ledger, "alice", 2, "chat:professor") as hold:
            pass
        assert hold.remaining == 8
        assert await ledger.get_balance("alice") == 8

    @pytest.mark.asyncio
    async def test_release_on_error(self, ledger):
        with pytest.raises(RuntimeError):
            async with credit_hold(ledger, "alice", 2, "chat:professor"):
                raise RuntimeError("generation failed")
        assert await ledger.get_balance("alice") == 10
        assert await ledger.transactions("alice") == []

    @pytest.mark.asyncio
    async def test_waived_hold_is_released(self, ledger):
        async with credit_hold(ledger, "alice", 2, "chat:professor") as hold:
            hold.waive()
        assert hold.remaining == 10
        assert await ledger.get_balance("alice") == 10

    @pytest.mark.asyncio
    async def test_insufficient_credits_on_enter(self, ledger):
        with pytest.raises(InsufficientCreditsError):
            async with credit_hold(ledger, "alice", 20, "tool:portfolio_allocator"):
                pytest.fail("body must not run")
