"""
Account view models and the pure functions that build and update them.

The Account is the dashboard's picture of the user: it is built from a
profile response with fixed fallbacks for optional fields, then updated
locally after each successful payment until the next full refresh.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .https import PaymentRecord, ProfileResponse

DEFAULT_BALANCE = 1200
DEFAULT_DISPLAY_NAME = "User"
RECENT_TRANSACTIONS_LIMIT = 5

# Single fixed-amount payment: minor units and ledger label of each debit.
PAYMENT_AMOUNT = 500
PAYMENT_DESCRIPTION = "Payment to merchant"


class AccountStatus(str, Enum):
    ACTIVE = "active"
    OTHER = "other"


class Transaction(BaseModel):
    """A single balance movement. Negative amounts are debits."""
    model_config = ConfigDict(frozen=True)

    id: str
    amount: int
    timestamp: str = Field(..., description="ISO-8601 timestamp")
    description: str = ""


class Account(BaseModel):
    """
    Dashboard view of the signed-in user.

    ``transactions`` is kept in insertion order (oldest first); use
    ``recent_transactions`` for the most-recent-first view.
    """
    model_config = ConfigDict(frozen=True)

    display_name: str
    email: Optional[str] = None
    balance: int
    transactions: List[Transaction] = Field(default_factory=list)
    status: AccountStatus = AccountStatus.ACTIVE
    raw_status: Optional[str] = None

    @property
    def is_active(self) -> bool:
        return self.status is AccountStatus.ACTIVE

    def recent_transactions(self, limit: int = RECENT_TRANSACTIONS_LIMIT) -> List[Transaction]:
        return list(reversed(self.transactions))[:limit]


def _parse_status(raw: Optional[str]) -> AccountStatus:
    if raw is None or raw == AccountStatus.ACTIVE.value:
        return AccountStatus.ACTIVE
    return AccountStatus.OTHER


def normalize_profile(profile: ProfileResponse) -> Account:
    """
    Build an Account from a /auth/me response, filling omitted fields.

    Fallbacks:
        balance       -> 1200
        transactions  -> []
        status        -> "active"
        display name  -> name, else email, else "User"
    """
    transactions = [
        Transaction(
            id=str(tx.id),
            amount=tx.amount,
            timestamp=tx.timestamp or "",
            description=tx.description,
        )
        for tx in (profile.transactions or [])
    ]
    return Account(
        display_name=profile.name or profile.email or DEFAULT_DISPLAY_NAME,
        email=profile.email,
        balance=DEFAULT_BALANCE if profile.balance is None else profile.balance,
        transactions=transactions,
        status=_parse_status(profile.status),
        raw_status=profile.status or AccountStatus.ACTIVE.value,
    )


def apply_payment_result(
    account: Account,
    record: PaymentRecord,
    amount: int = PAYMENT_AMOUNT,
    description: str = PAYMENT_DESCRIPTION,
    now: Optional[datetime] = None,
) -> Account:
    """
    Return ``account`` as it looks after a successful debit of ``amount``.

    The input is not modified. The new transaction takes its id from the
    server's order identifier and its timestamp from the client clock.
    """
    observed = now or datetime.now(timezone.utc)
    transaction = Transaction(
        id=record.order_id,
        amount=-amount,
        timestamp=observed.isoformat(),
        description=description,
    )
    return account.model_copy(
        update={
            "balance": account.balance - amount,
            "transactions": [*account.transactions, transaction],
        }
    )
