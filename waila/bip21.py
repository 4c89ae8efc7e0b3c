"""
BIP21 `bitcoin:` URIs with the lightning, bolt12 and payjoin extensions.

`UnifiedUri.from_str` parses the base URI (address, amount, label, message)
and hands every other query parameter to an `ExtraParamsDeserializer`, which
collects the extension parameters and checks them once all are seen.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Set
from urllib.parse import unquote_to_bytes

from loguru import logger
from pydantic import AnyUrl

from .core.base import MSAT_PER_SAT, SAT_PER_BTC, Network
from .core.errors import (
    BadEndpointError,
    BadFlagValueError,
    DuplicateParameterError,
    InsecureEndpointError,
    InvalidAmountError,
    InvalidUriError,
    InvoiceDecodeError,
    MissingEndpointError,
    NotUtf8Error,
    OfferDecodeError,
    ParseError,
    UnknownRequiredParameterError,
)
from .formats.address import Address, parse_address
from .formats.bolt12 import Bolt12Offer, parse_offer
from .formats.invoice import Bolt11Invoice, parse_invoice
from .formats.lnurl import is_onion, validate_url

SCHEME = "bitcoin:"
REQUIRED_PREFIX = "req-"
MAX_MONEY_SAT = 21_000_000 * SAT_PER_BTC

_BTC_AMOUNT = re.compile(r"([0-9]*)(?:\.([0-9]*))?")


class ParamKind(Enum):
    known = "known"
    unknown = "unknown"


class DeserializerState(Enum):
    collecting = "collecting"
    finalized = "finalized"
    rejected = "rejected"


@dataclass(frozen=True)
class ExtraParams:
    lightning: Optional[Bolt11Invoice] = None
    b12: Optional[Bolt12Offer] = None
    pj: Optional[str] = None
    pjos: Optional[bool] = None

    def disable_output_substitution(self) -> bool:
        return self.pjos or False


class ExtraParamsDeserializer:
    """Collects the extension parameters of a single URI.

    Parameters are fed one by one through `deserialize_temp`. Unknown keys are
    accepted and dropped, a known key seen twice is an error. `finalize` checks
    the payjoin parameters against each other and returns the `ExtraParams`.
    The deserializer can not be used again once it has finalized or rejected.
    """

    # `b12` and `offer` fill the same slot
    SLOTS = {
        "lightning": "lightning",
        "b12": "b12",
        "offer": "b12",
        "pj": "pj",
        "pjos": "pjos",
    }

    def __init__(self):
        self.state = DeserializerState.collecting
        self.lightning: Optional[Bolt11Invoice] = None
        self.b12: Optional[Bolt12Offer] = None
        self.pj: Optional[AnyUrl] = None
        self.pj_raw: Optional[str] = None
        self.pjos: Optional[bool] = None

    def is_param_known(self, key: str) -> bool:
        return key in self.SLOTS

    def _ensure_collecting(self) -> None:
        if self.state != DeserializerState.collecting:
            raise RuntimeError(f"deserializer already {self.state.value}")

    def deserialize_temp(self, key: str, value: bytes) -> ParamKind:
        self._ensure_collecting()
        slot = self.SLOTS.get(key)
        if slot is None:
            return ParamKind.unknown
        try:
            if getattr(self, slot) is not None:
                # b12 and offer are reported under the bip321 name
                raise DuplicateParameterError("offer" if slot == "b12" else key)
            getattr(self, f"_set_{slot}")(value)
        except ParseError:
            self.state = DeserializerState.rejected
            raise
        return ParamKind.known

    def _set_lightning(self, value: bytes) -> None:
        try:
            self.lightning = parse_invoice(value.decode("utf-8"))
        except (UnicodeDecodeError, ParseError) as e:
            raise InvoiceDecodeError() from e

    def _set_b12(self, value: bytes) -> None:
        try:
            self.b12 = parse_offer(value.decode("utf-8"))
        except (UnicodeDecodeError, ParseError) as e:
            raise OfferDecodeError() from e

    def _set_pj(self, value: bytes) -> None:
        try:
            endpoint = value.decode("utf-8")
        except UnicodeDecodeError as e:
            raise NotUtf8Error() from e
        try:
            self.pj = validate_url(endpoint)
        except ValueError as e:
            raise BadEndpointError(f"invalid payjoin endpoint: {endpoint}") from e
        self.pj_raw = endpoint

    def _set_pjos(self, value: bytes) -> None:
        if value == b"0":
            self.pjos = False
        elif value == b"1":
            self.pjos = True
        else:
            raise BadFlagValueError()

    def finalize(self) -> ExtraParams:
        self._ensure_collecting()
        try:
            self._check_payjoin()
        except ParseError:
            self.state = DeserializerState.rejected
            raise
        self.state = DeserializerState.finalized
        return ExtraParams(
            lightning=self.lightning, b12=self.b12, pj=self.pj_raw, pjos=self.pjos
        )

    def _check_payjoin(self) -> None:
        if self.pj is None:
            if self.pjos is not None:
                raise MissingEndpointError()
            return
        if self.pj.scheme == "https":
            return
        if self.pj.scheme == "http" and is_onion(self.pj.host):
            return
        raise InsecureEndpointError()


def parse_btc_amount(value: str) -> int:
    """Parses a decimal BTC amount into sats without going through floats."""
    match = _BTC_AMOUNT.fullmatch(value)
    if not match or value in ("", "."):
        raise InvalidAmountError(f"invalid amount: {value}")
    whole, fraction = match.group(1), match.group(2) or ""
    if len(fraction) > 8:
        raise InvalidAmountError("amount has more than 8 decimal places")
    sats = int(whole or "0") * SAT_PER_BTC + int(fraction.ljust(8, "0"))
    if sats > MAX_MONEY_SAT:
        raise InvalidAmountError("amount exceeds the bitcoin supply")
    return sats


def _utf8_or_none(value: bytes) -> Optional[str]:
    try:
        return value.decode("utf-8")
    except UnicodeDecodeError:
        return None


@dataclass(frozen=True)
class UnifiedUri:
    address: Address
    amount: Optional[int] = None  # sats
    label: Optional[str] = None
    message: Optional[str] = None
    extras: ExtraParams = field(default_factory=ExtraParams)

    @property
    def network(self) -> Network:
        return self.address.network

    @property
    def amount_msat(self) -> Optional[int]:
        if self.amount is None:
            return None
        return self.amount * MSAT_PER_SAT

    @property
    def memo(self) -> Optional[str]:
        return self.message if self.message is not None else self.label

    @classmethod
    def from_str(cls, string: str) -> "UnifiedUri":
        if string[: len(SCHEME)].lower() != SCHEME:
            raise InvalidUriError("missing bitcoin: scheme")
        address_part, _, query = string[len(SCHEME) :].partition("?")
        try:
            address = parse_address(address_part)
        except ParseError as e:
            raise InvalidUriError(f"invalid address: {e.detail}") from e

        base: Dict[str, bytes] = {}
        seen: Set[str] = set()
        extras = ExtraParamsDeserializer()
        for pair in query.split("&"):
            if not pair:
                continue
            key, _, raw_value = pair.partition("=")
            value = unquote_to_bytes(raw_value)
            if key.startswith(REQUIRED_PREFIX):
                key = key[len(REQUIRED_PREFIX) :]
                if key not in ("amount", "label", "message") and not (
                    extras.is_param_known(key)
                ):
                    raise UnknownRequiredParameterError(key)
            if key in ("amount", "label", "message"):
                if key in seen:
                    raise DuplicateParameterError(key)
                seen.add(key)
                base[key] = value
                continue
            if extras.deserialize_temp(key, value) == ParamKind.unknown:
                logger.trace(f"ignoring unknown uri parameter {key}")

        amount = None
        if "amount" in base:
            try:
                amount = parse_btc_amount(base["amount"].decode("ascii"))
            except UnicodeDecodeError as e:
                raise InvalidAmountError("amount is not ascii") from e

        return cls(
            address=address,
            amount=amount,
            label=_utf8_or_none(base["label"]) if "label" in base else None,
            message=_utf8_or_none(base["message"]) if "message" in base else None,
            extras=extras.finalize(),
        )


def parse_uri(string: str) -> UnifiedUri:
    return UnifiedUri.from_str(string)
