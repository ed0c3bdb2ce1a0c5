"""Account models."""

from dataclasses import dataclass


@dataclass
class Balance:
    """Available and reserved amount of one currency."""

    currency: str
    available: float
    reserved: float

    @property
    def total(self) -> float:
        return self.available + self.reserved

    @classmethod
    def from_api(cls, currency: str, data: dict) -> "Balance":
        return cls(
            currency=currency,
            available=float(data.get("available", 0)),
            reserved=float(data.get("reserved", 0)),
        )


def parse_balances(result: dict) -> dict[str, Balance]:
    """Parse the ``result`` map of the balances endpoint."""
    return {
        currency: Balance.from_api(currency, data) for currency, data in result.items()
    }


def parse_wallet(result: dict) -> dict[str, float]:
    """Parse the ``result`` map of the wallet endpoint."""
    return {currency: float(amount) for currency, amount in result.items()}


@dataclass
class TradingLimits:
    """Deposit/withdraw limits and their current usage (in THB for fiat)."""

    crypto_deposit: float
    crypto_withdraw: float
    fiat_deposit: float
    fiat_withdraw: float
    crypto_deposit_used: float
    crypto_withdraw_used: float
    fiat_deposit_used: float
    fiat_withdraw_used: float
    rate: float

    @classmethod
    def from_api(cls, data: dict) -> "TradingLimits":
        limits = data["limits"]
        usage = data.get("usage", {})
        return cls(
            crypto_deposit=float(limits["crypto"]["deposit"]),
            crypto_withdraw=float(limits["crypto"]["withdraw"]),
            fiat_deposit=float(limits["fiat"]["deposit"]),
            fiat_withdraw=float(limits["fiat"]["withdraw"]),
            crypto_deposit_used=float(usage.get("crypto", {}).get("deposit", 0)),
            crypto_withdraw_used=float(usage.get("crypto", {}).get("withdraw", 0)),
            fiat_deposit_used=float(usage.get("fiat", {}).get("deposit", 0)),
            fiat_withdraw_used=float(usage.get("fiat", {}).get("withdraw", 0)),
            rate=float(data.get("rate", 0)),
        )
