import struct
from typing import Iterator, List, Optional, Tuple

from bech32 import CHARSET, bech32_hrp_expand, bech32_polymod, convertbits

BECH32_CONST = 1
BECH32M_CONST = 0x2BC830A3

BECH32 = "bech32"
BECH32M = "bech32m"


# ─── Bech32 / Bech32m ──────────────────────────────────────────────


def _create_checksum(hrp: str, data: List[int], const: int) -> List[int]:
    values = bech32_hrp_expand(hrp) + list(data)
    polymod = bech32_polymod(values + [0, 0, 0, 0, 0, 0]) ^ const
    return [(polymod >> 5 * (5 - i)) & 31 for i in range(6)]


def _split(bech: str) -> Tuple[str, List[int]]:
    if any(ord(x) < 33 or ord(x) > 126 for x in bech):
        raise ValueError("invalid character")
    if bech.lower() != bech and bech.upper() != bech:
        raise ValueError("mixed case")
    bech = bech.lower()
    pos = bech.rfind("1")
    if pos < 1:
        raise ValueError("missing separator")
    if not all(x in CHARSET for x in bech[pos + 1 :]):
        raise ValueError("invalid data character")
    return bech[:pos], [CHARSET.find(x) for x in bech[pos + 1 :]]


def bech32_decode(bech: str) -> Tuple[str, List[int], str]:
    """Decodes a bech32 or bech32m string of any length.

    Returns the lower-case human readable part, the 5-bit data without the
    checksum and the checksum variant (`BECH32` or `BECH32M`). Raises
    `ValueError` on any malformation.
    """
    hrp, data = _split(bech)
    if len(data) < 6:
        raise ValueError("too short")
    const = bech32_polymod(bech32_hrp_expand(hrp) + data)
    if const == BECH32_CONST:
        variant = BECH32
    elif const == BECH32M_CONST:
        variant = BECH32M
    else:
        raise ValueError("invalid checksum")
    return hrp, data[:-6], variant


def bech32_decode_nochecksum(bech: str) -> Tuple[str, List[int]]:
    """Splits a checksum-less bech32 string, as used by bolt12."""
    return _split(bech)


def bech32_encode(hrp: str, data: List[int], variant: str = BECH32) -> str:
    const = BECH32M_CONST if variant == BECH32M else BECH32_CONST
    combined = list(data) + _create_checksum(hrp, data, const)
    return hrp + "1" + "".join([CHARSET[d] for d in combined])


def to_bytes(data: List[int]) -> bytes:
    decoded = convertbits(data, 5, 8, False)
    if decoded is None:
        raise ValueError("invalid padding")
    return bytes(decoded)


def from_bytes(data: bytes) -> List[int]:
    converted = convertbits(data, 8, 5)
    assert converted is not None
    return converted


# ─── Segwit addresses (BIP173 / BIP350) ────────────────────────────


def segwit_decode(hrp: str, addr: str) -> Tuple[int, bytes]:
    """Returns (witness version, witness program) of a segwit address."""
    hrpgot, data, variant = bech32_decode(addr)
    if hrpgot != hrp:
        raise ValueError(f"expected hrp {hrp}, got {hrpgot}")
    if len(addr) > 90:
        raise ValueError("address too long")
    if not data:
        raise ValueError("empty data")
    witver = data[0]
    if witver > 16:
        raise ValueError("invalid witness version")
    program = to_bytes(data[1:])
    if len(program) < 2 or len(program) > 40:
        raise ValueError("invalid witness program length")
    if witver == 0 and len(program) not in (20, 32):
        raise ValueError("invalid v0 witness program length")
    if (witver == 0) != (variant == BECH32):
        raise ValueError("wrong checksum variant for witness version")
    return witver, program


def segwit_encode(hrp: str, witver: int, witprog: bytes) -> str:
    variant = BECH32 if witver == 0 else BECH32M
    addr = bech32_encode(hrp, [witver] + from_bytes(witprog), variant)
    segwit_decode(hrp, addr)
    return addr


# ─── Lightning wire primitives ─────────────────────────────────────


class ByteReader:
    """Cursor over a byte string reading BOLT1 BigSize and fixed fields."""

    def __init__(self, data: bytes):
        self.data = data
        self.pos = 0

    def remaining(self) -> int:
        return len(self.data) - self.pos

    def at_end(self) -> bool:
        return self.pos >= len(self.data)

    def read(self, n: int) -> bytes:
        if n < 0 or self.remaining() < n:
            raise ValueError("unexpected end of data")
        chunk = self.data[self.pos : self.pos + n]
        self.pos += n
        return chunk

    def read_bigsize(self) -> int:
        prefix = self.read(1)[0]
        if prefix < 0xFD:
            return prefix
        if prefix == 0xFD:
            value, minimum = struct.unpack(">H", self.read(2))[0], 0xFD
        elif prefix == 0xFE:
            value, minimum = struct.unpack(">I", self.read(4))[0], 0x10000
        else:
            value, minimum = struct.unpack(">Q", self.read(8))[0], 0x100000000
        if value < minimum:
            raise ValueError("non-canonical bigsize")
        return value


def read_tu64(value: bytes) -> int:
    """Truncated big-endian u64; leading zero bytes are not allowed."""
    if len(value) > 8:
        raise ValueError("tu64 too long")
    if value and value[0] == 0:
        raise ValueError("non-minimal tu64")
    return int.from_bytes(value, "big")


def iter_tlv_stream(data: bytes) -> Iterator[Tuple[int, bytes]]:
    """Yields (type, value) records; types must be strictly increasing."""
    reader = ByteReader(data)
    last: Optional[int] = None
    while not reader.at_end():
        tlv_type = reader.read_bigsize()
        if last is not None and tlv_type <= last:
            raise ValueError(f"tlv type {tlv_type} out of order")
        length = reader.read_bigsize()
        yield tlv_type, reader.read(length)
        last = tlv_type
