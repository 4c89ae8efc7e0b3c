"""
What am I looking at?

`PaymentParams.from_str` (or `classify`) takes a user supplied string and
returns exactly one payment variant. Explicit schemes (`lightning:`,
`lnurl:`, ...) only try the formats that make sense under that scheme and
never fall back to the unprefixed chain. Unprefixed strings are tried
against every format in a fixed order and the first one that parses wins.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from loguru import logger

from .bip21 import UnifiedUri, parse_uri
from .core.base import Amount, Network, Unit
from .core.errors import ParseError, SchemeMismatchError, UnrecognizedError
from .core.settings import settings
from .formats.address import Address, parse_address
from .formats.bolt12 import Bolt12Offer, Bolt12Refund, parse_offer, parse_refund
from .formats.cashu import Token, parse_token
from .formats.fedimint import OOBNotes, parse_invite_code, parse_oob_notes
from .formats.invoice import Bolt11Invoice, parse_invoice
from .formats.lnurl import (
    LightningAddress,
    LnUrl,
    parse_lightning_address,
    parse_lnurl,
    parse_lud17_url,
)
from .formats.nostr import (
    WalletAuthUri,
    parse_npub,
    parse_nostr_pubkey,
    parse_wallet_auth,
)
from .formats.pubkey import parse_node_pubkey


class PaymentParams(ABC):
    """Base class of every recognized payment format.

    `memo`, `network`, `amount_msats` and `valid_for_network` must be answered
    by every variant. The narrowing accessors (`address`, `invoice`, `offer`,
    ...) return `None` unless the variant carries that value.
    """

    @classmethod
    def from_str(cls, string: str) -> "PaymentParams":
        return classify(string)

    @abstractmethod
    def memo(self) -> Optional[str]: ...

    @abstractmethod
    def network(self) -> Optional[Network]: ...

    @abstractmethod
    def amount_msats(self) -> Optional[int]: ...

    @abstractmethod
    def valid_for_network(self, network: Network) -> Optional[bool]:
        """`None` when the format is not tied to a network."""

    def amount(self) -> Optional[int]:
        """Amount in sats, rounded down."""
        msats = self.amount_msats()
        if msats is None:
            return None
        return Amount(Unit.msat, msats).to(Unit.sat).amount

    def amount_subunits(self) -> Optional[int]:
        return self.amount_msats()

    def address(self) -> Optional[Address]:
        return None

    def invoice(self) -> Optional[Bolt11Invoice]:
        return None

    def offer(self) -> Optional[Bolt12Offer]:
        return None

    def refund(self) -> Optional[Bolt12Refund]:
        return None

    def node_pubkey(self) -> Optional[str]:
        return None

    def recipient_identity(self) -> Optional[str]:
        return self.node_pubkey()

    def lnurl(self) -> Optional[LnUrl]:
        return None

    def lightning_address(self) -> Optional[LightningAddress]:
        return None

    def nostr_pubkey(self) -> Optional[str]:
        return None

    def fedimint_invite_code(self) -> Optional[str]:
        return None

    def nostr_wallet_auth(self) -> Optional[WalletAuthUri]:
        return None

    def cashu_token(self) -> Optional[Token]:
        return None

    def fedimint_oob_notes(self) -> Optional[OOBNotes]:
        return None

    def payjoin_endpoint(self) -> Optional[str]:
        return None

    def disable_output_substitution(self) -> Optional[bool]:
        return None

    def payjoin_supported(self) -> bool:
        return self.payjoin_endpoint() is not None

    def is_lnurl_auth(self) -> bool:
        lnurl = self.lnurl()
        return lnurl is not None and lnurl.is_lnurl_auth()


PaymentDescriptor = PaymentParams


# ------- VARIANTS -------


@dataclass(frozen=True)
class OnChainAddress(PaymentParams):
    onchain_address: Address

    def memo(self) -> Optional[str]:
        return None

    def network(self) -> Optional[Network]:
        return self.onchain_address.network

    def amount_msats(self) -> Optional[int]:
        return None

    def valid_for_network(self, network: Network) -> Optional[bool]:
        return self.onchain_address.network == network

    def address(self) -> Optional[Address]:
        return self.onchain_address


@dataclass(frozen=True)
class UriPaymentRequest(PaymentParams):
    uri: UnifiedUri

    def memo(self) -> Optional[str]:
        return self.uri.memo

    def network(self) -> Optional[Network]:
        return self.uri.network

    def amount_msats(self) -> Optional[int]:
        return self.uri.amount_msat

    def valid_for_network(self, network: Network) -> Optional[bool]:
        return self.uri.address.is_valid_for_network(network)

    def address(self) -> Optional[Address]:
        return self.uri.address

    def invoice(self) -> Optional[Bolt11Invoice]:
        return self.uri.extras.lightning

    def offer(self) -> Optional[Bolt12Offer]:
        return self.uri.extras.b12

    def node_pubkey(self) -> Optional[str]:
        invoice = self.uri.extras.lightning
        return invoice.payee if invoice else None

    def payjoin_endpoint(self) -> Optional[str]:
        return self.uri.extras.pj

    def disable_output_substitution(self) -> Optional[bool]:
        return self.uri.extras.disable_output_substitution()


@dataclass(frozen=True)
class Invoice(PaymentParams):
    bolt11: Bolt11Invoice

    def memo(self) -> Optional[str]:
        # a description hash is never surfaced as a memo
        return self.bolt11.description

    def network(self) -> Optional[Network]:
        return self.bolt11.network

    def amount_msats(self) -> Optional[int]:
        return self.bolt11.amount_msat

    def valid_for_network(self, network: Network) -> Optional[bool]:
        return self.bolt11.is_valid_for_network(network)

    def address(self) -> Optional[Address]:
        return self.bolt11.fallbacks[0] if self.bolt11.fallbacks else None

    def invoice(self) -> Optional[Bolt11Invoice]:
        return self.bolt11

    def node_pubkey(self) -> Optional[str]:
        return self.bolt11.payee


@dataclass(frozen=True)
class Offer(PaymentParams):
    bolt12_offer: Bolt12Offer

    def memo(self) -> Optional[str]:
        return self.bolt12_offer.description

    def network(self) -> Optional[Network]:
        return self.bolt12_offer.chains[0]

    def amount_msats(self) -> Optional[int]:
        return self.bolt12_offer.amount_msat

    def valid_for_network(self, network: Network) -> Optional[bool]:
        return self.bolt12_offer.supports_chain(network)

    def offer(self) -> Optional[Bolt12Offer]:
        return self.bolt12_offer


@dataclass(frozen=True)
class Refund(PaymentParams):
    bolt12_refund: Bolt12Refund

    def memo(self) -> Optional[str]:
        return self.bolt12_refund.description

    def network(self) -> Optional[Network]:
        return self.bolt12_refund.network

    def amount_msats(self) -> Optional[int]:
        return self.bolt12_refund.amount_msat

    def valid_for_network(self, network: Network) -> Optional[bool]:
        return self.bolt12_refund.network == network

    def refund(self) -> Optional[Bolt12Refund]:
        return self.bolt12_refund


class _NoPaymentContext(PaymentParams):
    """Identities and bearer formats that carry no memo or network."""

    def memo(self) -> Optional[str]:
        return None

    def network(self) -> Optional[Network]:
        return None

    def amount_msats(self) -> Optional[int]:
        return None

    def valid_for_network(self, network: Network) -> Optional[bool]:
        return None


@dataclass(frozen=True)
class NodeIdentity(_NoPaymentContext):
    pubkey: str

    def node_pubkey(self) -> Optional[str]:
        return self.pubkey


@dataclass(frozen=True)
class ResolvableAddress(_NoPaymentContext):
    endpoint: LnUrl

    def lnurl(self) -> Optional[LnUrl]:
        return self.endpoint

    def lightning_address(self) -> Optional[LightningAddress]:
        return self.endpoint.lightning_address()


@dataclass(frozen=True)
class HumanReadableAddress(_NoPaymentContext):
    ln_address: LightningAddress

    def lnurl(self) -> Optional[LnUrl]:
        return self.ln_address.lnurl()

    def lightning_address(self) -> Optional[LightningAddress]:
        return self.ln_address


@dataclass(frozen=True)
class OtherIdentity(_NoPaymentContext):
    xonly_pubkey: str

    def nostr_pubkey(self) -> Optional[str]:
        return self.xonly_pubkey


@dataclass(frozen=True)
class InviteCode(_NoPaymentContext):
    code: str

    def fedimint_invite_code(self) -> Optional[str]:
        return self.code


@dataclass(frozen=True)
class AuthRequest(_NoPaymentContext):
    request: WalletAuthUri

    def nostr_wallet_auth(self) -> Optional[WalletAuthUri]:
        return self.request


@dataclass(frozen=True)
class BearerToken(_NoPaymentContext):
    token: Token

    def amount_msats(self) -> Optional[int]:
        return self.token.amount_msat

    def cashu_token(self) -> Optional[Token]:
        return self.token


@dataclass(frozen=True)
class RedeemableNotes(_NoPaymentContext):
    notes: OOBNotes

    def amount_msats(self) -> Optional[int]:
        return self.notes.total_amount_msat

    def fedimint_oob_notes(self) -> Optional[OOBNotes]:
        return self.notes


# ------- CLASSIFIER -------

Candidate = Tuple[str, Callable[[str], PaymentParams]]


def _onchain(s: str) -> PaymentParams:
    return OnChainAddress(parse_address(s))


def _bip21(s: str) -> PaymentParams:
    return UriPaymentRequest(parse_uri(s))


def _bolt11(s: str) -> PaymentParams:
    return Invoice(parse_invoice(s))


def _bolt12_offer(s: str) -> PaymentParams:
    return Offer(parse_offer(s))


def _bolt12_refund(s: str) -> PaymentParams:
    return Refund(parse_refund(s))


def _node_pubkey(s: str) -> PaymentParams:
    return NodeIdentity(parse_node_pubkey(s))


def _lnurl(s: str) -> PaymentParams:
    return ResolvableAddress(parse_lnurl(s))


def _lightning_address(s: str) -> PaymentParams:
    return HumanReadableAddress(parse_lightning_address(s))


def _nostr_hex(s: str) -> PaymentParams:
    return OtherIdentity(parse_nostr_pubkey(s))


def _npub(s: str) -> PaymentParams:
    return OtherIdentity(parse_npub(s))


def _invite_code(s: str) -> PaymentParams:
    return InviteCode(parse_invite_code(s))


def _wallet_auth(s: str) -> PaymentParams:
    return AuthRequest(parse_wallet_auth(s))


def _cashu(s: str) -> PaymentParams:
    return BearerToken(parse_token(s))


def _oob_notes(s: str) -> PaymentParams:
    return RedeemableNotes(parse_oob_notes(s))


def _lud17(scheme: str) -> Callable[[str], PaymentParams]:
    # lud-17 urls need their scheme back to pick the transport
    def parse(s: str) -> PaymentParams:
        return ResolvableAddress(parse_lud17_url(scheme + s))

    return parse


SCHEMES: List[Tuple[str, List[Candidate]]] = [
    (
        "lightning:",
        [
            ("bolt11", _bolt11),
            ("lnurl", _lnurl),
            ("lightning address", _lightning_address),
            ("bolt12 offer", _bolt12_offer),
            ("bolt12 refund", _bolt12_refund),
        ],
    ),
    (
        "lnurl:",
        [("lnurl", _lnurl), ("lightning address", _lightning_address)],
    ),
    (
        "lnurlp:",
        [
            ("lnurl", _lnurl),
            ("lightning address", _lightning_address),
            ("lud-17 url", _lud17("lnurlp:")),
        ],
    ),
    ("lnurlw:", [("lud-17 url", _lud17("lnurlw:"))]),
    ("lnurlc:", [("lud-17 url", _lud17("lnurlc:"))]),
    ("keyauth:", [("lud-17 url", _lud17("keyauth:"))]),
    ("nostr:", [("nostr pubkey", _nostr_hex), ("npub", _npub)]),
    ("fedimint:", [("fedimint invite code", _invite_code)]),
]

UNPREFIXED: List[Candidate] = [
    ("onchain address", _onchain),
    ("bolt11", _bolt11),
    ("bip21 uri", _bip21),
    ("lightning address", _lightning_address),
    ("lnurl", _lnurl),
    ("node pubkey", _node_pubkey),
    ("bolt12 offer", _bolt12_offer),
    ("bolt12 refund", _bolt12_refund),
    ("nostr pubkey", _nostr_hex),
    ("npub", _npub),
    ("nostr wallet auth", _wallet_auth),
    ("fedimint invite code", _invite_code),
    ("cashu token", _cashu),
    ("fedimint oob notes", _oob_notes),
]


def _first_match(candidates: List[Candidate], string: str) -> Optional[PaymentParams]:
    for name, parse in candidates:
        try:
            params = parse(string)
        except ParseError as e:
            logger.trace(f"{name} parser rejected input: {e.detail}")
            continue
        logger.debug(f"classified input as {name}")
        return params
    return None


def classify(string: str) -> PaymentParams:
    string = string.strip()
    if len(string) > settings.max_input_length:
        raise UnrecognizedError(
            f"input longer than {settings.max_input_length} characters"
        )

    lower = string.lower()
    for scheme, candidates in SCHEMES:
        if lower.startswith(scheme):
            params = _first_match(candidates, string[len(scheme) :])
            if params is None:
                raise SchemeMismatchError(scheme.rstrip(":"))
            return params

    params = _first_match(UNPREFIXED, string)
    if params is None:
        raise UnrecognizedError()
    return params
