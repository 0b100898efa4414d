from dataclasses import dataclass
from datetime import date
from typing import Optional

from .account import Account
from .money import Money


@dataclass(frozen=True)
class Transaction:
    account: Account
    id: str
    amount: Money
    description: str
    effective_date: date
    balance: Optional[Money] = None

    @property
    def currency(self) -> str:
        return self.amount.currency
