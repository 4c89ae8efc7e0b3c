import base64
import binascii
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from ..core.encoding import BECH32M, ByteReader, bech32_decode
from ..core.errors import InviteCodeParseError, NotesParseError

INVITE_HRP = "fed1"

# out-of-band notes parts
PART_NOTES = 0
PART_FEDERATION_ID_PREFIX = 1
PART_INVITE = 2
PART_API_SECRET = 3

# bls signature (48 bytes) followed by the spend key (32 bytes)
NOTE_LENGTH = 80


def parse_invite_code(string: str) -> str:
    """Checks the human readable part and checksum variant of an invite code."""
    try:
        hrp, _, variant = bech32_decode(string)
    except ValueError as e:
        raise InviteCodeParseError(f"invalid bech32m: {e}") from e
    if hrp != INVITE_HRP or variant != BECH32M:
        raise InviteCodeParseError("not a fedimint invite code")
    return string


@dataclass(frozen=True)
class OOBNotes:
    notes: str
    federation_id_prefix: str
    # amount tier in msats -> number of notes
    tiers: Tuple[Tuple[int, int], ...]
    invite: Optional[bytes] = None

    def __str__(self):
        return self.notes

    @property
    def total_amount_msat(self) -> int:
        return sum(amount * count for amount, count in self.tiers)

    @property
    def note_count(self) -> int:
        return sum(count for _, count in self.tiers)


def _parse_tiers(data: bytes) -> Tuple[Tuple[int, int], ...]:
    reader = ByteReader(data)
    tiers: Dict[int, int] = {}
    for _ in range(reader.read_bigsize()):
        amount = reader.read_bigsize()
        count = reader.read_bigsize()
        reader.read(count * NOTE_LENGTH)
        tiers[amount] = tiers.get(amount, 0) + count
    if not reader.at_end():
        raise ValueError("trailing bytes in notes")
    return tuple(sorted(tiers.items()))


def parse_oob_notes(string: str) -> OOBNotes:
    try:
        raw = base64.b64decode(string, validate=True)
    except (binascii.Error, ValueError) as e:
        raise NotesParseError("notes are not base64") from e

    tiers = None
    prefix = None
    invite = None
    try:
        reader = ByteReader(raw)
        for _ in range(reader.read_bigsize()):
            variant = reader.read_bigsize()
            part = reader.read(reader.read_bigsize())
            if variant == PART_NOTES:
                if tiers is not None:
                    raise ValueError("notes given more than once")
                tiers = _parse_tiers(part)
            elif variant == PART_FEDERATION_ID_PREFIX:
                if len(part) != 4:
                    raise ValueError("federation id prefix must be 4 bytes")
                prefix = part.hex()
            elif variant == PART_INVITE:
                invite = part
        if not reader.at_end():
            raise ValueError("trailing bytes")
    except ValueError as e:
        raise NotesParseError(f"invalid notes encoding: {e}") from e

    if not tiers:
        raise NotesParseError("notes are empty")
    if prefix is None:
        raise NotesParseError("missing federation id prefix")
    return OOBNotes(
        notes=string, federation_id_prefix=prefix, tiers=tiers, invite=invite
    )
