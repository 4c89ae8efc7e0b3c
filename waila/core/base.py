from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Optional

MSAT_PER_SAT = 1000
SAT_PER_BTC = 100_000_000


class Network(Enum):
    bitcoin = 0
    testnet = 1
    signet = 2
    regtest = 3

    def __str__(self):
        return self.name

    @classmethod
    def from_chain_hash(cls, chain_hash: bytes) -> Optional["Network"]:
        for network, chain_hash_hex in _CHAIN_HASHES.items():
            if chain_hash.hex() == chain_hash_hex:
                return network
        return None

    @classmethod
    def from_bolt11_currency(cls, currency: str) -> Optional["Network"]:
        return _BOLT11_CURRENCIES.get(currency)

    def is_testnet_family(self) -> bool:
        return self in (Network.testnet, Network.signet, Network.regtest)


_CHAIN_HASHES = {
    Network.bitcoin: "6fe28c0ab6f1b372c1a6a246ae63f74f931e8365e15a089c68d6190000000000",
    Network.testnet: "43497fd7f826957108f4a30fd9cec3aeba79972084e90ead01ea330900000000",
    Network.signet: "f61eee3b63a380a477a063af32b2bbc97c9ff9f01f2c4225e973988108000000",
    Network.regtest: "06226e46111a0b59caaf126043eb5bbf28c34f3a5e332a1fc7b2b73cf188910f",
}

_BOLT11_CURRENCIES = {
    "bc": Network.bitcoin,
    "tb": Network.testnet,
    "tbs": Network.signet,
    "bcrt": Network.regtest,
    # simnet has no chain of its own here
    "sb": Network.regtest,
}


class Unit(Enum):
    sat = 0
    msat = 1

    def str(self, amount: int) -> str:
        if self == Unit.sat:
            return f"{amount} sat"
        elif self == Unit.msat:
            return f"{amount} msat"
        else:
            raise Exception("Invalid unit")

    def __str__(self):
        return self.name


@dataclass(frozen=True)
class Amount:
    unit: Unit
    amount: int

    def to(self, to_unit: Unit) -> "Amount":
        """Converts between sat and msat. msat to sat rounds down."""
        if self.unit == to_unit:
            return self

        if self.unit == Unit.sat and to_unit == Unit.msat:
            return Amount(to_unit, self.amount * MSAT_PER_SAT)
        elif self.unit == Unit.msat and to_unit == Unit.sat:
            return Amount(to_unit, self.amount // MSAT_PER_SAT)
        else:
            raise Exception(f"Cannot convert {self.unit.name} to {to_unit.name}")

    def sat_to_btc(self) -> str:
        if self.unit != Unit.sat:
            raise Exception("Amount must be in satoshis")
        return f"{Decimal(self.amount) / SAT_PER_BTC:.8f}"

    def str(self) -> str:
        return self.unit.str(self.amount)

    def __repr__(self):
        return self.unit.str(self.amount)
