from datetime import date
from typing import Optional
from typing_extensions import Protocol

from domain.entities import Account, Transaction


class BankAdapter(Protocol):
    """Contract every bank adapter offers to the host framework."""

    def login(self) -> None: ...
    def fetch_accounts(self) -> list[Account]: ...
    def fetch_transactions_for(
        self,
        account: Account,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[Transaction]: ...
