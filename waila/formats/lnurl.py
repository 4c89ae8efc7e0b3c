import re
from dataclasses import dataclass
from typing import Optional
from urllib.parse import parse_qs, urlsplit

from pydantic import AnyUrl, TypeAdapter, ValidationError

from ..core.encoding import (
    BECH32,
    bech32_decode,
    bech32_encode,
    from_bytes,
    to_bytes,
)
from ..core.errors import LightningAddressParseError, LnUrlParseError

LNURL_HRP = "lnurl"
LUD17_SCHEMES = ("lnurlp", "lnurlw", "lnurlc", "keyauth")
WELL_KNOWN_LNURLP = "/.well-known/lnurlp/"

_url_adapter = TypeAdapter(AnyUrl)
_USER = re.compile(r"[a-z0-9._+-]+")
_DOMAIN = re.compile(r"[a-z0-9-]+(\.[a-z0-9-]+)+(:[0-9]{1,5})?")


def is_onion(host: Optional[str]) -> bool:
    return bool(host) and host.lower().rstrip(".").endswith(".onion")


def validate_url(url: str) -> AnyUrl:
    """Raises `ValueError` if `url` is not an absolute URL with a host."""
    try:
        parsed = _url_adapter.validate_python(url)
    except ValidationError as e:
        raise ValueError(f"invalid url: {url}") from e
    if not parsed.host:
        raise ValueError(f"url has no host: {url}")
    return parsed


@dataclass(frozen=True)
class LnUrl:
    url: str

    def __str__(self):
        return self.encode()

    def encode(self) -> str:
        return bech32_encode(LNURL_HRP, from_bytes(self.url.encode("utf-8")), BECH32)

    def is_lnurl_auth(self) -> bool:
        query = parse_qs(urlsplit(self.url).query)
        return "login" in query.get("tag", [])

    def lightning_address(self) -> Optional["LightningAddress"]:
        """The lightning address this LNURL points to, if it is one."""
        parts = urlsplit(self.url)
        if parts.query or parts.fragment:
            return None
        if parts.scheme != "https" and not (
            parts.scheme == "http" and is_onion(parts.hostname)
        ):
            return None
        if not parts.path.startswith(WELL_KNOWN_LNURLP):
            return None
        user = parts.path[len(WELL_KNOWN_LNURLP) :]
        try:
            return parse_lightning_address(f"{user}@{parts.netloc}")
        except LightningAddressParseError:
            return None


@dataclass(frozen=True)
class LightningAddress:
    user: str
    domain: str

    def __str__(self):
        return f"{self.user}@{self.domain}"

    def lnurlp_url(self) -> str:
        scheme = "http" if is_onion(self.domain.split(":")[0]) else "https"
        return f"{scheme}://{self.domain}{WELL_KNOWN_LNURLP}{self.user}"

    def lnurl(self) -> LnUrl:
        return LnUrl(self.lnurlp_url())


def decode_lnurl(lnurl: str) -> str:
    try:
        hrp, data, variant = bech32_decode(lnurl)
    except ValueError as e:
        raise LnUrlParseError(f"invalid bech32: {e}") from e
    if hrp != LNURL_HRP or variant != BECH32:
        raise LnUrlParseError("not an lnurl")
    try:
        return to_bytes(data).decode("utf-8")
    except (ValueError, UnicodeDecodeError) as e:
        raise LnUrlParseError("lnurl payload is not a utf-8 url") from e


def parse_lnurl(string: str) -> LnUrl:
    url = decode_lnurl(string)
    try:
        parsed = validate_url(url)
    except ValueError as e:
        raise LnUrlParseError(str(e)) from e
    if parsed.scheme not in ("http", "https"):
        raise LnUrlParseError(f"unsupported lnurl scheme {parsed.scheme}")
    return LnUrl(url)


def parse_lud17_url(string: str) -> LnUrl:
    """Parses a LUD-17 url such as `lnurlp://domain/path` into an LnUrl."""
    scheme, sep, rest = string.partition("://")
    scheme = scheme.lower()
    if not sep or scheme not in LUD17_SCHEMES:
        raise LnUrlParseError("not a lud-17 url")
    try:
        host = urlsplit(f"//{rest}").hostname
        url = f"{'http' if is_onion(host) else 'https'}://{rest}"
        validate_url(url)
    except ValueError as e:
        raise LnUrlParseError(str(e)) from e
    return LnUrl(url)


def parse_lightning_address(string: str) -> LightningAddress:
    parts = string.split("@")
    if len(parts) != 2:
        raise LightningAddressParseError("expected exactly one @")
    user, domain = (p.lower() for p in parts)
    if not _USER.fullmatch(user):
        raise LightningAddressParseError(f"invalid user {user}")
    if not _DOMAIN.fullmatch(domain):
        raise LightningAddressParseError(f"invalid domain {domain}")
    return LightningAddress(user=user, domain=domain)
