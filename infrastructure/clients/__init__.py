from .bbva_client import BBVAClient, BankResponse
from .bbva_bank import BBVABank

__all__ = ["BBVAClient", "BankResponse", "BBVABank"]
