from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel

WINSTON_PER_AR = 10**12


def winston_to_ar(winston: int) -> str:
    ar = Decimal(winston) / Decimal(WINSTON_PER_AR)
    return f"{ar:.12f}"


class WalletStats(BaseModel):
    address: str = ""
    balance: int = 0
    balance_ar: str = "0"

    @classmethod
    def from_balance(cls, address: str, balance: int) -> WalletStats:
        return cls(address=address, balance=balance, balance_ar=winston_to_ar(balance))
