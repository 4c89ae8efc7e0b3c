"""
Nostr identities: bare x-only keys (hex or `npub`) and nostr wallet auth
URIs (`nostr+walletauth://<pubkey>?relay=...&secret=...`).
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple
from urllib.parse import parse_qsl, urlsplit

from coincurve import PublicKey

from ..core.encoding import (
    BECH32,
    bech32_decode,
    bech32_encode,
    from_bytes,
    to_bytes,
)
from ..core.errors import PubkeyParseError, WalletAuthParseError
from .lnurl import validate_url

NPUB_HRP = "npub"
WALLET_AUTH_SCHEME = "nostr+walletauth"

# NIP-47 methods a wallet connection may request
WALLET_METHODS = (
    "pay_invoice",
    "multi_pay_invoice",
    "pay_keysend",
    "multi_pay_keysend",
    "make_invoice",
    "lookup_invoice",
    "list_transactions",
    "get_balance",
    "get_info",
)

_XONLY_HEX = re.compile(r"[0-9a-fA-F]{64}")


def _xonly(raw: bytes) -> str:
    if len(raw) != 32:
        raise PubkeyParseError("x-only key must be 32 bytes")
    try:
        PublicKey(b"\x02" + raw)
    except Exception as e:
        raise PubkeyParseError("x-only key is not on the curve") from e
    return raw.hex()


def parse_nostr_pubkey(string: str) -> str:
    """Validates a 64 character hex x-only key, returned lower-case."""
    if not _XONLY_HEX.fullmatch(string):
        raise PubkeyParseError("expected 64 hex characters")
    return _xonly(bytes.fromhex(string))


def parse_npub(string: str) -> str:
    try:
        hrp, data, variant = bech32_decode(string)
        raw = to_bytes(data)
    except ValueError as e:
        raise PubkeyParseError(f"invalid bech32: {e}") from e
    if hrp != NPUB_HRP or variant != BECH32:
        raise PubkeyParseError("not an npub")
    return _xonly(raw)


def encode_npub(pubkey_hex: str) -> str:
    return bech32_encode(NPUB_HRP, from_bytes(bytes.fromhex(pubkey_hex)))


class BudgetPeriod(Enum):
    daily = "daily"
    weekly = "weekly"
    monthly = "monthly"
    yearly = "yearly"

    def __str__(self):
        return self.value


@dataclass(frozen=True)
class Budget:
    amount: int
    period: BudgetPeriod

    def __str__(self):
        return f"{self.amount}/{self.period}"


@dataclass(frozen=True)
class WalletAuthUri:
    public_key: str
    relays: Tuple[str, ...]
    secret: str
    required_commands: Tuple[str, ...]
    optional_commands: Tuple[str, ...] = ()
    budget: Optional[Budget] = None
    identity: Optional[str] = None

    @property
    def relay(self) -> str:
        return self.relays[0]


def _parse_budget(value: str) -> Budget:
    amount, sep, period = value.partition("/")
    if not sep or not (amount.isascii() and amount.isdigit()):
        raise WalletAuthParseError(f"invalid budget {value}")
    try:
        return Budget(int(amount), BudgetPeriod(period))
    except ValueError as e:
        raise WalletAuthParseError(f"invalid budget period {period}") from e


def _parse_commands(value: str) -> Tuple[str, ...]:
    commands = tuple(value.split())
    for command in commands:
        if command not in WALLET_METHODS:
            raise WalletAuthParseError(f"unknown command {command}")
    return commands


def _parse_relay(value: str) -> str:
    try:
        url = validate_url(value)
    except ValueError as e:
        raise WalletAuthParseError(f"invalid relay {value}") from e
    if url.scheme not in ("ws", "wss"):
        raise WalletAuthParseError(f"relay must be a websocket url: {value}")
    return value


def parse_wallet_auth(string: str) -> WalletAuthUri:
    scheme, sep, _ = string.partition("://")
    if not sep or scheme.lower() != WALLET_AUTH_SCHEME:
        raise WalletAuthParseError("not a nostr wallet auth uri")
    try:
        parts = urlsplit(string)
        pubkey = parse_nostr_pubkey(parts.netloc)
    except (ValueError, PubkeyParseError) as e:
        raise WalletAuthParseError(f"invalid wallet public key: {e}") from e

    relays = []
    secret = None
    required = None
    optional: Tuple[str, ...] = ()
    budget = None
    identity = None
    for key, value in parse_qsl(parts.query, keep_blank_values=True):
        if key == "relay":
            relays.append(_parse_relay(value))
        elif key == "secret":
            secret = value
        elif key == "required_commands":
            required = _parse_commands(value)
        elif key == "optional_commands":
            optional = _parse_commands(value)
        elif key == "budget":
            budget = _parse_budget(value)
        elif key == "identity":
            try:
                identity = parse_nostr_pubkey(value)
            except PubkeyParseError as e:
                raise WalletAuthParseError("invalid identity key") from e

    if not relays:
        raise WalletAuthParseError("missing relay")
    if not secret:
        raise WalletAuthParseError("missing secret")
    if not required:
        raise WalletAuthParseError("missing required_commands")

    return WalletAuthUri(
        public_key=pubkey,
        relays=tuple(relays),
        secret=secret,
        required_commands=required,
        optional_commands=optional,
        budget=budget,
        identity=identity,
    )
