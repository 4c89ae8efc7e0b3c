from .address import parse_address
from .bolt12 import parse_offer, parse_refund
from .cashu import parse_token
from .fedimint import parse_invite_code, parse_oob_notes
from .invoice import parse_invoice
from .lnurl import parse_lightning_address, parse_lnurl, parse_lud17_url
from .nostr import parse_npub, parse_nostr_pubkey, parse_wallet_auth
from .pubkey import parse_node_pubkey

__all__ = [
    "parse_address",
    "parse_invite_code",
    "parse_invoice",
    "parse_lightning_address",
    "parse_lnurl",
    "parse_lud17_url",
    "parse_node_pubkey",
    "parse_nostr_pubkey",
    "parse_npub",
    "parse_offer",
    "parse_oob_notes",
    "parse_refund",
    "parse_token",
    "parse_wallet_auth",
]
