from .bank_adapter import BankAdapter
from .logging_port import LoggingPort, BoundLogger

__all__ = ["BankAdapter", "LoggingPort", "BoundLogger"]
