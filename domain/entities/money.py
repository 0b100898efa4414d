from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP


@dataclass(frozen=True)
class Money:
    amount_cents: int
    currency: str

    @staticmethod
    def from_major(value, currency: str) -> 'Money':
        # str() first so floats like -15.3 keep their printed value
        cents = (Decimal(str(value)) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
        return Money(amount_cents=int(cents), currency=currency)
