from coincurve import PublicKey

from ..core.errors import PubkeyParseError

COMPRESSED_HEX_LENGTH = 66
UNCOMPRESSED_HEX_LENGTH = 130


def parse_node_pubkey(string: str) -> str:
    """Validates a hex secp256k1 point and returns it in compressed form."""
    if len(string) not in (COMPRESSED_HEX_LENGTH, UNCOMPRESSED_HEX_LENGTH):
        raise PubkeyParseError("unexpected public key length")
    try:
        raw = bytes.fromhex(string)
    except ValueError as e:
        raise PubkeyParseError("public key is not hex") from e
    try:
        return PublicKey(raw).format(compressed=True).hex()
    except Exception as e:
        raise PubkeyParseError(f"invalid curve point: {e}") from e
