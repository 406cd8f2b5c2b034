"""Value Object Money - monto en pesos para cotizaciones y recibos."""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from carrental.domain.constants import CURRENCY_CODE

CURRENCY_SYMBOLS = {"PHP": "₱", "USD": "$"}

CENTS = Decimal("0.01")


@dataclass(frozen=True)
class Money:
    """
    Monto no negativo con su moneda (PHP por defecto).

    Se usa para mostrar el desglose; los cálculos de tarifas trabajan sobre
    Decimal directamente.
    """

    amount: Decimal
    currency_code: str = CURRENCY_CODE

    def __post_init__(self) -> None:
        amount = self.amount if isinstance(self.amount, Decimal) else Decimal(str(self.amount))
        if amount < 0:
            raise ValueError(f"Monto negativo: {amount}")
        if len(self.currency_code) != 3:
            raise ValueError(f"Código de moneda inválido: {self.currency_code}")
        object.__setattr__(self, "amount", amount)

    def __add__(self, other: "Money") -> "Money":
        if not isinstance(other, Money):
            return NotImplemented
        if other.currency_code != self.currency_code:
            raise ValueError(f"Monedas distintas: {self.currency_code} / {other.currency_code}")
        return Money(self.amount + other.amount, self.currency_code)

    @property
    def rounded(self) -> Decimal:
        return self.amount.quantize(CENTS, rounding=ROUND_HALF_UP)

    def format(self) -> str:
        """Formato para recibos: ₱1,000.00"""
        symbol = CURRENCY_SYMBOLS.get(self.currency_code, f"{self.currency_code} ")
        return f"{symbol}{self.rounded:,.2f}"

    def __str__(self) -> str:
        return self.format()
