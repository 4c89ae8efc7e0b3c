from typing import Optional


class WailaError(Exception):
    code: int
    detail: str

    def __init__(self, detail, code=0):
        super().__init__(detail)
        self.code = code
        self.detail = detail


class ParseError(WailaError):
    detail = "could not parse input"
    code = 10000

    def __init__(self, detail: Optional[str] = None, code: Optional[int] = None):
        super().__init__(detail or self.detail, code=code or self.code)


class AddressParseError(ParseError):
    detail = "invalid on-chain address"
    code = 10001


class InvoiceParseError(ParseError):
    detail = "invalid bolt11 invoice"
    code = 10002


class OfferParseError(ParseError):
    detail = "invalid bolt12 offer"
    code = 10003


class RefundParseError(ParseError):
    detail = "invalid bolt12 refund"
    code = 10004


class PubkeyParseError(ParseError):
    detail = "invalid public key"
    code = 10005


class LnUrlParseError(ParseError):
    detail = "invalid lnurl"
    code = 10006


class LightningAddressParseError(ParseError):
    detail = "invalid lightning address"
    code = 10007


class InviteCodeParseError(ParseError):
    detail = "invalid fedimint invite code"
    code = 10008


class WalletAuthParseError(ParseError):
    detail = "invalid nostr wallet auth uri"
    code = 10009


class TokenParseError(ParseError):
    detail = "invalid cashu token"
    code = 10010


class NotesParseError(ParseError):
    detail = "invalid fedimint notes"
    code = 10011


# ------- BIP21 -------


class UriError(ParseError):
    detail = "invalid bitcoin uri"
    code = 11000


class InvalidUriError(UriError):
    code = 11001


class InvalidAmountError(UriError):
    detail = "invalid amount"
    code = 11002


class UnknownRequiredParameterError(UriError):
    code = 11003

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"unknown required parameter: {key}", code=self.code)


class DuplicateParameterError(UriError):
    code = 11004

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"parameter given more than once: {key}", code=self.code)


class InvoiceDecodeError(UriError):
    detail = "could not decode lightning parameter"
    code = 11005


class OfferDecodeError(UriError):
    detail = "could not decode offer parameter"
    code = 11006


class NotUtf8Error(UriError):
    detail = "parameter is not valid utf-8"
    code = 11007


class BadEndpointError(UriError):
    detail = "payjoin endpoint is not a valid url"
    code = 11008


class BadFlagValueError(UriError):
    detail = "pjos must be 0 or 1"
    code = 11009


class MissingEndpointError(UriError):
    detail = "pjos given without a payjoin endpoint"
    code = 11010


class InsecureEndpointError(UriError):
    detail = "payjoin endpoint must use https or be an onion service"
    code = 11011


# ------- CLASSIFIER -------


class ClassificationError(WailaError):
    detail = "classification failed"
    code = 20000

    def __init__(self, detail: Optional[str] = None, code: Optional[int] = None):
        super().__init__(detail or self.detail, code=code or self.code)


class UnrecognizedError(ClassificationError):
    detail = "unrecognized payment format"
    code = 20001


class SchemeMismatchError(ClassificationError):
    code = 20002

    def __init__(self, scheme: str):
        self.scheme = scheme
        super().__init__(
            f"no {scheme} payment could be parsed from the input", code=self.code
        )
