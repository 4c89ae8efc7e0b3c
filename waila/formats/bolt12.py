"""
BOLT12 offers (`lno1...`) and refunds (`lnr1...`).

Both are bech32 strings without a checksum wrapping a TLV stream. Only the
fields needed to describe a payment are decoded; blinded paths are kept as
raw bytes.
"""

import re
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from coincurve import PublicKey

from ..core.base import Network
from ..core.encoding import (
    bech32_decode_nochecksum,
    iter_tlv_stream,
    read_tu64,
    to_bytes,
)
from ..core.errors import OfferParseError, ParseError, RefundParseError

OFFER_HRP = "lno"
REFUND_HRP = "lnr"

# offer fields
OFFER_CHAINS = 2
OFFER_METADATA = 4
OFFER_CURRENCY = 6
OFFER_AMOUNT = 8
OFFER_DESCRIPTION = 10
OFFER_FEATURES = 12
OFFER_ABSOLUTE_EXPIRY = 14
OFFER_PATHS = 16
OFFER_ISSUER = 18
OFFER_QUANTITY_MAX = 20
OFFER_ISSUER_ID = 22

# invoice request fields used by refunds
INVREQ_METADATA = 0
INVREQ_CHAIN = 80
INVREQ_AMOUNT = 82
INVREQ_FEATURES = 84
INVREQ_QUANTITY = 86
INVREQ_PAYER_ID = 88
INVREQ_PAYER_NOTE = 89
INVREQ_PATHS = 90

OFFER_TYPES = range(1, 80)
INVREQ_TYPES = range(80, 160)

REFUND_OFFER_FIELDS = (OFFER_DESCRIPTION, OFFER_ABSOLUTE_EXPIRY, OFFER_ISSUER)

_CONCATENATION = re.compile(r"\+\s*")


@dataclass(frozen=True)
class Bolt12Offer:
    offer: str
    chains: Tuple[Network, ...]
    issuer_id: Optional[str] = None
    description: Optional[str] = None
    issuer: Optional[str] = None
    currency: Optional[str] = None
    amount: Optional[int] = None
    absolute_expiry: Optional[int] = None
    quantity_max: Optional[int] = None
    paths: Optional[bytes] = None

    def __str__(self):
        return self.offer

    @property
    def amount_msat(self) -> Optional[int]:
        """Amount in msats, unset when denominated in a fiat currency."""
        if self.currency is not None:
            return None
        return self.amount

    def supports_chain(self, network: Network) -> bool:
        return network in self.chains


@dataclass(frozen=True)
class Bolt12Refund:
    refund: str
    network: Network
    amount_msat: int
    description: str
    payer_id: str
    issuer: Optional[str] = None
    absolute_expiry: Optional[int] = None
    quantity: Optional[int] = None
    payer_note: Optional[str] = None
    paths: Optional[bytes] = None

    def __str__(self):
        return self.refund


def _decode(string: str, hrp: str) -> Tuple[str, Dict[int, bytes]]:
    string = _CONCATENATION.sub("", string)
    try:
        got_hrp, data = bech32_decode_nochecksum(string)
        payload = to_bytes(data)
        records = dict(iter_tlv_stream(payload))
    except ValueError as e:
        raise ParseError(str(e)) from e
    if got_hrp != hrp:
        raise ParseError(f"expected {hrp} prefix")
    return string.lower(), records


def _utf8(value: bytes) -> str:
    try:
        return value.decode("utf-8")
    except UnicodeDecodeError as e:
        raise ParseError("field is not valid utf-8") from e


def _point(value: bytes) -> str:
    try:
        return PublicKey(value).format(compressed=True).hex()
    except Exception as e:
        raise ParseError("invalid public key") from e


def _tu64(value: bytes) -> int:
    try:
        return read_tu64(value)
    except ValueError as e:
        raise ParseError(str(e)) from e


def _check_unknown(records: Dict[int, bytes], known) -> None:
    for tlv_type in records:
        if tlv_type not in known and tlv_type % 2 == 0:
            raise ParseError(f"unknown even field {tlv_type}")


def _chain(value: bytes) -> Network:
    network = Network.from_chain_hash(value)
    if network is None:
        raise ParseError(f"unknown chain {value.hex()}")
    return network


def parse_offer(string: str) -> Bolt12Offer:
    try:
        offer, records = _decode(string, OFFER_HRP)

        if any(t not in OFFER_TYPES for t in records):
            raise ParseError("field outside the offer range")
        _check_unknown(
            records,
            (
                OFFER_CHAINS,
                OFFER_METADATA,
                OFFER_CURRENCY,
                OFFER_AMOUNT,
                OFFER_DESCRIPTION,
                OFFER_FEATURES,
                OFFER_ABSOLUTE_EXPIRY,
                OFFER_PATHS,
                OFFER_ISSUER,
                OFFER_QUANTITY_MAX,
                OFFER_ISSUER_ID,
            ),
        )

        chains: Tuple[Network, ...] = (Network.bitcoin,)
        if OFFER_CHAINS in records:
            raw = records[OFFER_CHAINS]
            if not raw or len(raw) % 32:
                raise ParseError("invalid chains length")
            chains = tuple(_chain(raw[i : i + 32]) for i in range(0, len(raw), 32))

        amount = _tu64(records[OFFER_AMOUNT]) if OFFER_AMOUNT in records else None
        currency = (
            _utf8(records[OFFER_CURRENCY]) if OFFER_CURRENCY in records else None
        )
        if currency is not None and amount is None:
            raise ParseError("currency without amount")
        description = (
            _utf8(records[OFFER_DESCRIPTION])
            if OFFER_DESCRIPTION in records
            else None
        )
        if amount is not None and description is None:
            raise ParseError("amount without description")

        issuer_id = (
            _point(records[OFFER_ISSUER_ID]) if OFFER_ISSUER_ID in records else None
        )
        paths = records.get(OFFER_PATHS)
        if issuer_id is None and not paths:
            raise ParseError("offer needs an issuer id or paths")

        return Bolt12Offer(
            offer=offer,
            chains=chains,
            issuer_id=issuer_id,
            description=description,
            issuer=_utf8(records[OFFER_ISSUER]) if OFFER_ISSUER in records else None,
            currency=currency,
            amount=amount,
            absolute_expiry=(
                _tu64(records[OFFER_ABSOLUTE_EXPIRY])
                if OFFER_ABSOLUTE_EXPIRY in records
                else None
            ),
            quantity_max=(
                _tu64(records[OFFER_QUANTITY_MAX])
                if OFFER_QUANTITY_MAX in records
                else None
            ),
            paths=paths,
        )
    except ParseError as e:
        raise OfferParseError(f"invalid offer: {e.detail}") from e


def parse_refund(string: str) -> Bolt12Refund:
    try:
        refund, records = _decode(string, REFUND_HRP)

        for tlv_type in records:
            if tlv_type in OFFER_TYPES and tlv_type not in REFUND_OFFER_FIELDS:
                raise ParseError(f"unexpected offer field {tlv_type}")
            if tlv_type >= INVREQ_TYPES.stop:
                raise ParseError(f"unexpected field {tlv_type}")
        _check_unknown(
            records,
            (
                INVREQ_METADATA,
                *REFUND_OFFER_FIELDS,
                INVREQ_CHAIN,
                INVREQ_AMOUNT,
                INVREQ_FEATURES,
                INVREQ_QUANTITY,
                INVREQ_PAYER_ID,
                INVREQ_PAYER_NOTE,
                INVREQ_PATHS,
            ),
        )

        for required in (
            INVREQ_METADATA,
            OFFER_DESCRIPTION,
            INVREQ_AMOUNT,
            INVREQ_PAYER_ID,
        ):
            if required not in records:
                raise ParseError(f"missing field {required}")

        network = (
            _chain(records[INVREQ_CHAIN])
            if INVREQ_CHAIN in records
            else Network.bitcoin
        )

        return Bolt12Refund(
            refund=refund,
            network=network,
            amount_msat=_tu64(records[INVREQ_AMOUNT]),
            description=_utf8(records[OFFER_DESCRIPTION]),
            payer_id=_point(records[INVREQ_PAYER_ID]),
            issuer=_utf8(records[OFFER_ISSUER]) if OFFER_ISSUER in records else None,
            absolute_expiry=(
                _tu64(records[OFFER_ABSOLUTE_EXPIRY])
                if OFFER_ABSOLUTE_EXPIRY in records
                else None
            ),
            quantity=(
                _tu64(records[INVREQ_QUANTITY])
                if INVREQ_QUANTITY in records
                else None
            ),
            payer_note=(
                _utf8(records[INVREQ_PAYER_NOTE])
                if INVREQ_PAYER_NOTE in records
                else None
            ),
            paths=records.get(INVREQ_PATHS),
        )
    except ParseError as e:
        raise RefundParseError(f"invalid refund: {e.detail}") from e
