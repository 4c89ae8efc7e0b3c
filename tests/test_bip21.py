import pytest

from tests.helpers import (
    SAMPLE_ADDRESS,
    SAMPLE_B12_OFFER,
    SAMPLE_B12_OFFER_ISSUER_ID,
    SAMPLE_BIP21,
    SAMPLE_BIP21_INVOICE,
)
from waila.bip21 import (
    DeserializerState,
    ExtraParamsDeserializer,
    ParamKind,
    UnifiedUri,
    parse_btc_amount,
    parse_uri,
)
from waila.core.base import SAT_PER_BTC, Network
from waila.core.errors import (
    BadEndpointError,
    BadFlagValueError,
    DuplicateParameterError,
    InsecureEndpointError,
    InvalidAmountError,
    InvalidUriError,
    InvoiceDecodeError,
    MissingEndpointError,
    NotUtf8Error,
    OfferDecodeError,
    UnknownRequiredParameterError,
)

BASE = f"bitcoin:{SAMPLE_ADDRESS}"


def test_parse_base_uri():
    uri = UnifiedUri.from_str(SAMPLE_BIP21)

    assert str(uri.address) == SAMPLE_ADDRESS
    assert uri.network == Network.bitcoin
    assert uri.amount == 50 * SAT_PER_BTC
    assert uri.label == "Luke-Jr"
    assert uri.message == "Donation for project xyz"
    assert uri.memo == "Donation for project xyz"


def test_uri_without_parameters():
    uri = parse_uri(BASE)

    assert uri.amount is None
    assert uri.amount_msat is None
    assert uri.memo is None
    assert uri.extras.lightning is None
    assert uri.extras.b12 is None
    assert uri.extras.pj is None
    assert uri.extras.disable_output_substitution() is False


def test_scheme_is_case_insensitive():
    assert parse_uri(f"BITCOIN:{SAMPLE_ADDRESS}?amount=1").amount == SAT_PER_BTC


def test_memo_falls_back_to_label():
    assert parse_uri(f"{BASE}?label=Luke-Jr").memo == "Luke-Jr"


def test_non_utf8_label_reads_as_absent():
    uri = parse_uri(f"{BASE}?label=%FF%FE&message=hi")

    assert uri.label is None
    assert uri.message == "hi"


def test_ln_uri():
    uri = parse_uri(f"{BASE}?lightning={SAMPLE_BIP21_INVOICE}")

    assert uri.extras.lightning.bolt11 == SAMPLE_BIP21_INVOICE.lower()
    assert uri.extras.lightning.network == Network.bitcoin
    assert uri.extras.lightning.amount_msat == 1_000_000


@pytest.mark.parametrize("key", ["b12", "offer"])
def test_offer_uri(key):
    uri = parse_uri(f"{BASE}?{key}={SAMPLE_B12_OFFER}")

    assert uri.extras.lightning is None
    assert str(uri.extras.b12) == SAMPLE_B12_OFFER
    assert uri.extras.b12.issuer_id == SAMPLE_B12_OFFER_ISSUER_ID


def test_unknown_parameters_are_ignored():
    uri = parse_uri(f"{BASE}?foo=bar&amount=0.5&baz")

    assert uri.amount == SAT_PER_BTC // 2


def test_duplicate_known_parameter():
    with pytest.raises(DuplicateParameterError) as e:
        parse_uri(f"{BASE}?lightning={SAMPLE_BIP21_INVOICE}&lightning=x")
    assert e.value.key == "lightning"


@pytest.mark.parametrize(
    "first,second", [("b12", "offer"), ("offer", "b12"), ("b12", "b12")]
)
def test_b12_and_offer_share_a_slot(first, second):
    with pytest.raises(DuplicateParameterError) as e:
        parse_uri(f"{BASE}?{first}={SAMPLE_B12_OFFER}&{second}={SAMPLE_B12_OFFER}")
    assert e.value.key == "offer"


def test_duplicate_base_parameter():
    with pytest.raises(DuplicateParameterError) as e:
        parse_uri(f"{BASE}?amount=1&amount=2")
    assert e.value.key == "amount"


def test_required_parameters():
    with pytest.raises(UnknownRequiredParameterError) as e:
        parse_uri(f"{BASE}?req-somethingyoudontunderstand=50")
    assert e.value.key == "somethingyoudontunderstand"

    assert parse_uri(f"{BASE}?req-amount=1").amount == SAT_PER_BTC
    uri = parse_uri(f"{BASE}?req-pj=https://example.com/pj")
    assert uri.extras.pj == "https://example.com/pj"


def test_payjoin_endpoint():
    uri = parse_uri(f"{BASE}?pj=https://example.com/pj&pjos=1")

    assert uri.extras.pj == "https://example.com/pj"
    assert uri.extras.pjos is True
    assert uri.extras.disable_output_substitution() is True

    uri = parse_uri(f"{BASE}?pj=https%3A%2F%2Fexample.com%2Fpj&pjos=0")
    assert uri.extras.pj == "https://example.com/pj"
    assert uri.extras.disable_output_substitution() is False


def test_payjoin_over_http_onion():
    uri = parse_uri(f"{BASE}?pj=http://payjoin.example.onion/pj")
    assert uri.extras.pj == "http://payjoin.example.onion/pj"


@pytest.mark.parametrize(
    "query,error",
    [
        ("pj=http://example.com/pj", InsecureEndpointError),
        ("pj=ftp://example.com/pj", InsecureEndpointError),
        ("pjos=1", MissingEndpointError),
        ("pjos=0", MissingEndpointError),
        ("pj=https://example.com/pj&pjos=2", BadFlagValueError),
        ("pj=not%20a%20url", BadEndpointError),
        ("pj=%FF", NotUtf8Error),
        ("lightning=lnbc1garbage", InvoiceDecodeError),
        ("b12=lno1garbage", OfferDecodeError),
        ("amount=1.123456789", InvalidAmountError),
        ("amount=%FF", InvalidAmountError),
    ],
)
def test_invalid_extension_parameters(query, error):
    with pytest.raises(error):
        parse_uri(f"{BASE}?{query}")


@pytest.mark.parametrize(
    "string", ["1andreas3batLhQa2FawWjeyjCqyBzypd", "bitcoin:notanaddress?amount=1"]
)
def test_invalid_uri(string):
    with pytest.raises(InvalidUriError):
        parse_uri(string)


@pytest.mark.parametrize(
    "value,sats",
    [
        ("50", 50 * SAT_PER_BTC),
        ("0.00001", 1_000),
        ("0.00000001", 1),
        ("1.", SAT_PER_BTC),
        (".5", SAT_PER_BTC // 2),
        ("21000000", 21_000_000 * SAT_PER_BTC),
    ],
)
def test_parse_btc_amount(value, sats):
    assert parse_btc_amount(value) == sats


@pytest.mark.parametrize(
    "value", ["", ".", "-1", "1e3", "0.000000001", "21000000.00000001", "1,5", " 1"]
)
def test_parse_btc_amount_invalid(value):
    with pytest.raises(InvalidAmountError):
        parse_btc_amount(value)


def test_deserializer_collects_and_finalizes():
    deserializer = ExtraParamsDeserializer()

    assert deserializer.state == DeserializerState.collecting
    assert deserializer.is_param_known("lightning")
    assert deserializer.is_param_known("offer")
    assert not deserializer.is_param_known("amount")
    assert deserializer.deserialize_temp("foo", b"bar") == ParamKind.unknown
    assert (
        deserializer.deserialize_temp("pj", b"https://example.com/pj")
        == ParamKind.known
    )
    assert deserializer.deserialize_temp("pjos", b"1") == ParamKind.known

    extras = deserializer.finalize()
    assert deserializer.state == DeserializerState.finalized
    assert extras.pj == "https://example.com/pj"
    assert extras.pjos is True

    with pytest.raises(RuntimeError):
        deserializer.deserialize_temp("foo", b"bar")
    with pytest.raises(RuntimeError):
        deserializer.finalize()


def test_deserializer_rejects_duplicates():
    deserializer = ExtraParamsDeserializer()
    deserializer.deserialize_temp("pjos", b"0")

    with pytest.raises(DuplicateParameterError):
        deserializer.deserialize_temp("pjos", b"1")
    assert deserializer.state == DeserializerState.rejected
    with pytest.raises(RuntimeError):
        deserializer.finalize()


def test_deserializer_rejects_on_finalize():
    deserializer = ExtraParamsDeserializer()
    deserializer.deserialize_temp("pjos", b"1")

    with pytest.raises(MissingEndpointError):
        deserializer.finalize()
    assert deserializer.state == DeserializerState.rejected
