from dataclasses import dataclass, field
from datetime import date
from typing import Any, Optional

from .money import Money


@dataclass(frozen=True)
class Account:
    id: str
    name: str
    available_balance: Optional[Money]
    balance: Optional[Money]
    iban: str
    description: str
    bank: Any = field(default=None, compare=False, repr=False)

    @property
    def currency(self) -> Optional[str]:
        for money in (self.balance, self.available_balance):
            if money is not None:
                return money.currency
        return None

    def fetch_transactions(self, start_date: Optional[date] = None, end_date: Optional[date] = None) -> list:
        """Fetch this account's movements through the adapter that listed it."""
        if self.bank is None:
            raise RuntimeError(f"Account {self.id} is not bound to a bank adapter")
        return self.bank.fetch_transactions_for(self, start_date=start_date, end_date=end_date)
