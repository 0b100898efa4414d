# import
from .credentials import Credentials
from .money import Money
from .account import Account
from .transaction import Transaction

__all__ = ["Credentials", "Money", "Account", "Transaction"]
