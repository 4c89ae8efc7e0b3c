#!/usr/bin/env python

import json
from typing import Any, Dict, Optional

import click
from click import Context

from .core.base import Amount, Unit
from .core.errors import WailaError
from .core.logging import configure_logger
from .core.settings import VERSION, settings
from .params import PaymentParams, classify


class NaturalOrderGroup(click.Group):
    """For listing commands in help in order of definition"""

    def list_commands(self, ctx):
        return self.commands.keys()


def describe(params: PaymentParams) -> Dict[str, Any]:
    """Every accessor of `params` that has a value, as plain json types."""
    wallet_auth = params.nostr_wallet_auth()
    token = params.cashu_token()
    notes = params.fedimint_oob_notes()
    lnurl = params.lnurl()
    network = params.network()

    fields: Dict[str, Optional[Any]] = {
        "type": type(params).__name__,
        "amount": params.amount(),
        "amount_msats": params.amount_msats(),
        "memo": params.memo(),
        "network": str(network) if network else None,
        "address": _str(params.address()),
        "invoice": _str(params.invoice()),
        "offer": _str(params.offer()),
        "refund": _str(params.refund()),
        "node_pubkey": params.node_pubkey(),
        "lnurl": str(lnurl) if lnurl else None,
        "lnurl_url": lnurl.url if lnurl else None,
        "lnurl_auth": params.is_lnurl_auth() or None,
        "lightning_address": _str(params.lightning_address()),
        "nostr_pubkey": params.nostr_pubkey(),
        "fedimint_invite_code": params.fedimint_invite_code(),
        "wallet_auth_pubkey": wallet_auth.public_key if wallet_auth else None,
        "wallet_auth_relays": list(wallet_auth.relays) if wallet_auth else None,
        "cashu_mint": token.mint if token else None,
        "cashu_unit": token.unit if token else None,
        "federation_id_prefix": notes.federation_id_prefix if notes else None,
        "payjoin_endpoint": params.payjoin_endpoint(),
        "disable_output_substitution": (
            params.disable_output_substitution() if params.payjoin_supported() else None
        ),
    }
    return {k: v for k, v in fields.items() if v is not None}


def _str(value: Any) -> Optional[str]:
    return str(value) if value is not None else None


@click.group(cls=NaturalOrderGroup)
@click.pass_context
def cli(ctx: Context):
    configure_logger()
    ctx.ensure_object(dict)


@cli.command("decode", help="Classify a payment string.")
@click.argument("string", type=str)
@click.option(
    "--json",
    "as_json",
    default=False,
    is_flag=True,
    help="Print the result as json.",
    type=bool,
)
@click.pass_context
def decode(ctx: Context, string: str, as_json: bool):
    try:
        params = classify(string)
    except WailaError as e:
        raise click.ClickException(e.detail)

    described = describe(params)
    if as_json:
        print(json.dumps(described, indent=2))
        return

    print(f"Type: {described.pop('type')}")
    if "amount" in described:
        amount = Amount(Unit.sat, described.pop("amount"))
        print(f"Amount: {amount.str()} ({amount.sat_to_btc()} BTC)")
    for key, value in described.items():
        if isinstance(value, list):
            value = ", ".join(value)
        print(f"{key.replace('_', ' ').capitalize()}: {value}")


@cli.command("version", help="Print the waila version.")
def version():
    print(f"Version: {VERSION}")
    if settings.debug:
        print(f"Debug: {settings.debug}")
    if settings.env_file:
        print(f"Settings: {settings.env_file}")
