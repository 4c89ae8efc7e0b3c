import base64
import json
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

import cbor2
from pydantic import BaseModel, ConfigDict, Field

from ..core.base import MSAT_PER_SAT, Unit
from ..core.errors import TokenParseError


class Proof(BaseModel):
    """
    Value token
    """

    model_config = ConfigDict(frozen=True)

    id: str
    amount: int = Field(ge=0)
    secret: str
    C: str  # unblinded signature on secret
    witness: Optional[str] = None  # witness for spending condition


# ------- TOKEN -------


class Token(ABC):
    @property
    @abstractmethod
    def proofs(self) -> List[Proof]: ...

    @property
    @abstractmethod
    def mint(self) -> Optional[str]: ...

    @property
    @abstractmethod
    def memo(self) -> Optional[str]: ...

    @property
    @abstractmethod
    def unit(self) -> str: ...

    @property
    def amount(self) -> int:
        return sum([p.amount for p in self.proofs])

    @property
    def keysets(self) -> List[str]:
        return sorted({p.id for p in self.proofs})

    @property
    def amount_msat(self) -> Optional[int]:
        """Value in msats; fiat denominated tokens have none."""
        if self.unit == Unit.sat.name:
            return self.amount * MSAT_PER_SAT
        if self.unit == Unit.msat.name:
            return self.amount
        return None


class TokenV3Token(BaseModel):
    model_config = ConfigDict(frozen=True)

    mint: Optional[str] = None
    proofs: Tuple[Proof, ...]


@dataclass(frozen=True)
class TokenV3(Token):
    """
    A Cashu token that includes proofs and their respective mints. Can include proofs from multiple different mints and keysets.
    """

    token: Tuple[TokenV3Token, ...] = ()
    _memo: Optional[str] = None
    _unit: str = "sat"

    @property
    def proofs(self) -> List[Proof]:
        return [proof for token in self.token for proof in token.proofs]

    @property
    def mint(self) -> Optional[str]:
        mints = self.mints
        return mints[0] if mints else None

    @property
    def mints(self) -> List[str]:
        return list(dict.fromkeys(t.mint for t in self.token if t.mint))

    @property
    def memo(self) -> Optional[str]:
        return str(self._memo) if self._memo else None

    @property
    def unit(self) -> str:
        return self._unit

    @classmethod
    def deserialize(cls, tokenv3_serialized: str) -> "TokenV3":
        """
        Ingests a serialized "cashuA<json_urlsafe_base64>" token and returns a TokenV3.
        """
        prefix = "cashuA"
        if not tokenv3_serialized.startswith(prefix):
            raise TokenParseError(f"Token prefix not valid. Expected {prefix}.")
        token_base64 = tokenv3_serialized[len(prefix) :]
        # if base64 string is not a multiple of 4, pad it with "="
        token_base64 += "=" * (-len(token_base64) % 4)

        token = json.loads(base64.urlsafe_b64decode(token_base64))
        return cls.parse_obj(token)

    @classmethod
    def parse_obj(cls, token_dict: Dict[str, Any]) -> "TokenV3":
        token: List[Dict[str, Any]] = token_dict.get("token") or []
        return cls(
            token=tuple(
                TokenV3Token(
                    mint=t.get("mint"),
                    proofs=tuple(Proof(**p) for p in t.get("proofs") or []),
                )
                for t in token
            ),
            _memo=token_dict.get("memo"),
            _unit=token_dict.get("unit") or "sat",
        )


class TokenV4Proof(BaseModel):
    model_config = ConfigDict(frozen=True)

    a: int = Field(ge=0)
    s: str  # secret
    c: bytes  # signature
    w: Optional[str] = None  # witness


class TokenV4Token(BaseModel):
    model_config = ConfigDict(frozen=True)

    # keyset ID
    i: bytes
    # proofs
    p: Tuple[TokenV4Proof, ...]


@dataclass(frozen=True)
class TokenV4(Token):
    # mint URL
    m: str
    # unit
    u: str
    # tokens
    t: Tuple[TokenV4Token, ...]
    # memo
    d: Optional[str] = None

    @property
    def mint(self) -> str:
        return self.m

    @property
    def memo(self) -> Optional[str]:
        return self.d

    @property
    def unit(self) -> str:
        return self.u

    @property
    def proofs(self) -> List[Proof]:
        return [
            Proof(id=token.i.hex(), amount=p.a, secret=p.s, C=p.c.hex(), witness=p.w)
            for token in self.t
            for p in token.p
        ]

    @classmethod
    def deserialize(cls, tokenv4_serialized: str) -> "TokenV4":
        """
        Ingests a serialized "cashuB<cbor_urlsafe_base64>" token and returns a TokenV4.
        """
        prefix = "cashuB"
        if not tokenv4_serialized.startswith(prefix):
            raise TokenParseError(f"Token prefix not valid. Expected {prefix}.")
        token_base64 = tokenv4_serialized[len(prefix) :]
        # if base64 string is not a multiple of 4, pad it with "="
        token_base64 += "=" * (-len(token_base64) % 4)

        token = cbor2.loads(base64.urlsafe_b64decode(token_base64))
        return cls.parse_obj(token)

    @classmethod
    def parse_obj(cls, token_dict: Dict[str, Any]) -> "TokenV4":
        return cls(
            m=token_dict["m"],
            u=token_dict["u"],
            t=tuple(TokenV4Token(**t) for t in token_dict["t"]),
            d=token_dict.get("d", None),
        )


def parse_token(string: str) -> Token:
    if string.startswith("cashuA"):
        deserialize = TokenV3.deserialize
    elif string.startswith("cashuB"):
        deserialize = TokenV4.deserialize
    else:
        raise TokenParseError("missing cashu token prefix")
    try:
        token = deserialize(string)
    except TokenParseError:
        raise
    except Exception as e:
        raise TokenParseError(f"could not decode token: {e}") from e
    if not token.proofs:
        raise TokenParseError("Token must contain proofs.")
    return token
