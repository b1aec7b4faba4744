"""Credit ledger with reservation (hold / commit / release) semantics.

Credits are held before a billable generation starts and only committed once a
response has been produced, so a failed request never leaves the caller charged.
"""
import asyncio
import uuid
from contextlib import asynccontextmanager
from typing import AsyncIterator, Protocol

from loguru import logger

from chainwise.core.exceptions import (
    InsufficientCreditsError,
    InvalidRefillError,
    UnknownAccountError,
)
from chainwise.core.tiers import TIER_CONFIG, Tier
from chainwise.models.credit import (
    CreditReservation,
    CreditTransaction,
    REFILL_TYPES,
    RefillType,
    UserCreditAccount,
)


class CreditLedger(Protocol):
    async def get_account(self, user_id: str) -> UserCreditAccount: ...

    async def get_balance(self, user_id: str) -> int: ...

    async def debit(self, user_id: str, amount: int, reason: str) -> int: ...

    async def reserve(self, user_id: str, amount: int, reason: str) -> CreditReservation: ...

    async def commit(self, reservation: CreditReservation) -> int: ...

    async def release(self, reservation: CreditReservation) -> None: ...

    async def transactions(
        self, user_id: str, limit: int = 20, offset: int = 0
    ) -> list[CreditTransaction]: ...

    async def refill(
        self, user_id: str, amount: int | None = None, refill_type: RefillType = "refill"
    ) -> int: ...


class InMemoryCreditLedger:
    """Process-local ledger; mutations are serialised with an asyncio.Lock."""

    def __init__(self):
        self._accounts: dict[str, UserCreditAccount] = {}
        self._holds: dict[str, CreditReservation] = {}
        self._transactions: dict[str, list[CreditTransaction]] = {}
        self._lock = asyncio.Lock()

    def seed(self, user_id: str, tier: Tier = "free", credits: int | None = None) -> UserCreditAccount:
        if credits is None:
            credits = TIER_CONFIG[tier].monthly_credits
        account = UserCreditAccount(user_id=user_id, tier=tier, credits=credits)
        self._accounts[user_id] = account
        self._transactions.setdefault(user_id, [])
        return account

    def _account(self, user_id: str) -> UserCreditAccount:
        account = self._accounts.get(user_id)
        if account is None:
            raise UnknownAccountError(user_id)
        return account

    def _held(self, user_id: str) -> int:
        return sum(h.amount for h in self._holds.values() if h.user_id == user_id)

    def _available(self, user_id: str) -> int:
        return self._account(user_id).credits - self._held(user_id)

    def _record(self, user_id: str, amount: int, reason: str) -> None:
        self._transactions[user_id].append(
            CreditTransaction(
                user_id=user_id,
                amount=amount,
                reason=reason,
                balance_after=self._accounts[user_id].credits,
            )
        )

    async def get_account(self, user_id: str) -> UserCreditAccount:
        account = self._account(user_id)
        return account.model_copy(update={"credits": self._available(user_id)})

    async def get_balance(self, user_id: str) -> int:
        return self._available(user_id)

    async def debit(self, user_id: str, amount: int, reason: str) -> int:
        async with self._lock:
            available = self._available(user_id)
            if available < amount:
                raise InsufficientCreditsError(amount, available)
            account = self._accounts[user_id]
            account.credits -= amount
            self._record(user_id, -amount, reason)
            return self._available(user_id)

    async def reserve(self, user_id: str, amount: int, reason: str) -> CreditReservation:
        async with self._lock:
            available = self._available(user_id)
            if available < amount:
                raise InsufficientCreditsError(amount, available)
            reservation = CreditReservation(
                reservation_id=uuid.uuid4().hex,
                user_id=user_id,
                amount=amount,
                reason=reason,
            )
            self._holds[reservation.reservation_id] = reservation
            logger.debug(f"Held {amount} credits for {user_id} ({reason})")
            return reservation

    async def commit(self, reservation: CreditReservation) -> int:
        async with self._lock:
            if self._holds.pop(reservation.reservation_id, None) is None:
                raise ValueError(f"Unknown reservation: {reservation.reservation_id}")
            account = self._accounts[reservation.user_id]
            account.credits -= reservation.amount
            self._record(reservation.user_id, -reservation.amount, reservation.reason)
            logger.info(
                f"Charged {reservation.amount} credits to {reservation.user_id} "
                f"({reservation.reason})"
            )
            return self._available(reservation.user_id)

    async def release(self, reservation: CreditReservation) -> None:
        async with self._lock:
            if self._holds.pop(reservation.reservation_id, None) is not None:
                logger.info(
                    f"Released {reservation.amount} held credits for {reservation.user_id}"
                )

    async def transactions(
        self, user_id: str, limit: int = 20, offset: int = 0
    ) -> list[CreditTransaction]:
        """Newest-first page of the account's history."""
        self._account(user_id)
        history = list(reversed(self._transactions.get(user_id, [])))
        return history[offset : offset + limit]

    async def refill(
        self, user_id: str, amount: int | None = None, refill_type: RefillType = "refill"
    ) -> int:
        """Add ``amount`` credits, or reset to the tier allotment for ``monthly_reset``."""
        if refill_type not in REFILL_TYPES:
            raise InvalidRefillError(f"Invalid refill type: {refill_type}")
        if refill_type != "monthly_reset" and (amount is None or amount <= 0):
            raise InvalidRefillError("Invalid amount")

        async with self._lock:
            account = self._account(user_id)
            if refill_type == "monthly_reset":
                allotment = TIER_CONFIG[account.tier].monthly_credits
                delta = allotment - account.credits
                account.credits = allotment
            else:
                delta = amount
                account.credits += amount
            self._record(user_id, delta, refill_type)
            logger.info(f"Refilled {user_id} by {delta} credits ({refill_type})")
            return self._available(user_id)


class CreditHold:
    def __init__(self, reservation: CreditReservation):
        self.reservation = reservation
        self.waived = False
        self.remaining: int | None = None

    @property
    def amount(self) -> int:
        return self.reservation.amount

    def waive(self) -> None:
        """Release the hold instead of charging it when the block exits."""
        self.waived = True


@asynccontextmanager
async def credit_hold(
    ledger: CreditLedger, user_id: str, amount: int, reason: str
) -> AsyncIterator[CreditHold]:
    reservation = await ledger.reserve(user_id, amount, reason)
    hold = CreditHold(reservation)
    try:
        yield hold
    except BaseException:
        await ledger.release(reservation)
        raise

    if hold.waived:
        await ledger.release(reservation)
        hold.remaining = await ledger.get_balance(user_id)
    else:
        hold.remaining = await ledger.commit(reservation)
