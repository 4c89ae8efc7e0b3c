from dataclasses import dataclass
from enum import Enum
from typing import Optional

import base58

from ..core.base import Network
from ..core.encoding import segwit_decode, segwit_encode
from ..core.errors import AddressParseError

# base58check version bytes
P2PKH_VERSIONS = {0x00: Network.bitcoin, 0x6F: Network.testnet}
P2SH_VERSIONS = {0x05: Network.bitcoin, 0xC4: Network.testnet}

SEGWIT_HRPS = {"bc": Network.bitcoin, "tb": Network.testnet, "bcrt": Network.regtest}


class AddressKind(Enum):
    p2pkh = "p2pkh"
    p2sh = "p2sh"
    segwit = "segwit"

    def __str__(self):
        return self.value


@dataclass(frozen=True)
class Address:
    address: str
    network: Network
    kind: AddressKind
    witness_version: Optional[int] = None

    def __str__(self):
        return self.address

    def is_valid_for_network(self, network: Network) -> bool:
        if self.network == Network.bitcoin:
            return network == Network.bitcoin
        if self.kind == AddressKind.segwit:
            if self.network == Network.regtest:
                return network == Network.regtest
            return network in (Network.testnet, Network.signet)
        # legacy testnet prefixes are shared by every test network
        return network.is_testnet_family()


def _segwit_hrp(network: Network) -> str:
    if network == Network.bitcoin:
        return "bc"
    if network == Network.regtest:
        return "bcrt"
    return "tb"


def parse_address(string: str) -> Address:
    lower = string.lower()
    for hrp, network in SEGWIT_HRPS.items():
        if lower.startswith(hrp + "1"):
            try:
                witver, _ = segwit_decode(hrp, string)
            except ValueError as e:
                raise AddressParseError(f"invalid segwit address: {e}") from e
            return Address(
                address=lower,
                network=network,
                kind=AddressKind.segwit,
                witness_version=witver,
            )

    try:
        payload = base58.b58decode_check(string)
    except ValueError as e:
        raise AddressParseError(f"invalid base58 address: {e}") from e
    if len(payload) != 21:
        raise AddressParseError("invalid base58 payload length")
    version = payload[0]
    if version in P2PKH_VERSIONS:
        return Address(string, P2PKH_VERSIONS[version], AddressKind.p2pkh)
    if version in P2SH_VERSIONS:
        return Address(string, P2SH_VERSIONS[version], AddressKind.p2sh)
    raise AddressParseError(f"unknown address version {version}")


def encode_address(
    network: Network, kind: AddressKind, program: bytes, witver: int = 0
) -> Address:
    """Builds an address from a raw hash or witness program."""
    if kind == AddressKind.segwit:
        hrp = _segwit_hrp(network)
        try:
            encoded = segwit_encode(hrp, witver, program)
        except ValueError as e:
            raise AddressParseError(f"invalid witness program: {e}") from e
        return Address(encoded, network, kind, witness_version=witver)

    if len(program) != 20:
        raise AddressParseError("invalid hash length")
    mainnet = network == Network.bitcoin
    if kind == AddressKind.p2pkh:
        version = 0x00 if mainnet else 0x6F
    else:
        version = 0x05 if mainnet else 0xC4
    encoded = base58.b58encode_check(bytes([version]) + program).decode()
    # base58 addresses carry no regtest marker
    return Address(encoded, Network.bitcoin if mainnet else Network.testnet, kind)
