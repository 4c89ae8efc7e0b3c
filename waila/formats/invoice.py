from dataclasses import dataclass
from typing import List, Optional, Tuple

import bolt11
from loguru import logger

from ..core.base import Network
from ..core.encoding import bech32_decode
from ..core.errors import AddressParseError, InvoiceParseError
from .address import Address, AddressKind, encode_address

TIMESTAMP_GROUPS = 7
SIGNATURE_GROUPS = 104
FALLBACK_TAG = 9  # "f"
FALLBACK_P2PKH = 17
FALLBACK_P2SH = 18
DEFAULT_EXPIRY = 3600


@dataclass(frozen=True)
class Bolt11Invoice:
    bolt11: str
    network: Network
    payment_hash: str
    date: int
    expiry: int
    amount_msat: Optional[int] = None
    description: Optional[str] = None
    description_hash: Optional[str] = None
    payee: Optional[str] = None
    fallbacks: Tuple[Address, ...] = ()

    def __str__(self):
        return self.bolt11

    @property
    def expires_at(self) -> int:
        return self.date + self.expiry

    def is_valid_for_network(self, network: Network) -> bool:
        return self.network == network


def _fallback_addresses(invoice: str, network: Network) -> List[Address]:
    """Re-encodes the `f` tagged fields of an invoice as addresses."""
    _, data, _ = bech32_decode(invoice)
    data = data[TIMESTAMP_GROUPS : len(data) - SIGNATURE_GROUPS]
    addresses: List[Address] = []
    pos = 0
    while pos + 3 <= len(data):
        tag = data[pos]
        length = data[pos + 1] * 32 + data[pos + 2]
        value = data[pos + 3 : pos + 3 + length]
        pos += 3 + length
        if tag != FALLBACK_TAG or not value:
            continue
        version, program_groups = value[0], value[1:]
        program = _groups_to_bytes(program_groups)
        try:
            if version == FALLBACK_P2PKH:
                addresses.append(encode_address(network, AddressKind.p2pkh, program))
            elif version == FALLBACK_P2SH:
                addresses.append(encode_address(network, AddressKind.p2sh, program))
            elif version <= 16:
                addresses.append(
                    encode_address(network, AddressKind.segwit, program, version)
                )
        except AddressParseError as e:
            logger.trace(f"skipping fallback address: {e}")
    return addresses


def _groups_to_bytes(groups: List[int]) -> bytes:
    # trailing bits that do not fill a byte are padding
    acc = 0
    bits = 0
    out = bytearray()
    for group in groups:
        acc = (acc << 5) | group
        bits += 5
        if bits >= 8:
            bits -= 8
            out.append((acc >> bits) & 0xFF)
    return bytes(out)


def parse_invoice(string: str) -> Bolt11Invoice:
    if string.upper() == string:
        string = string.lower()
    if not string.startswith("ln"):
        raise InvoiceParseError("missing ln prefix")
    try:
        decoded = bolt11.decode(string)
    except Exception as e:
        raise InvoiceParseError(f"could not decode invoice: {e}") from e

    network = Network.from_bolt11_currency(decoded.currency)
    if network is None:
        raise InvoiceParseError(f"unknown currency {decoded.currency}")

    try:
        fallbacks = _fallback_addresses(string, network)
    except ValueError as e:
        raise InvoiceParseError(f"invalid tagged fields: {e}") from e

    return Bolt11Invoice(
        bolt11=string,
        network=network,
        payment_hash=decoded.payment_hash,
        date=decoded.date,
        expiry=decoded.expiry if decoded.expiry is not None else DEFAULT_EXPIRY,
        amount_msat=(
            int(decoded.amount_msat) if decoded.amount_msat is not None else None
        ),
        description=decoded.description,
        description_hash=decoded.description_hash,
        payee=decoded.payee,
        fallbacks=tuple(fallbacks),
    )
