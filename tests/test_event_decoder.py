import pytest

from agentreg.constants import REGISTERED_T0, URI_UPDATED_T0
from agentreg.core.models import EventLog
from agentreg.decoding.event_decoder import decode_event_log
from agentreg.decoding.registry import make_registry
from agentreg.decoding.specs import TopicFieldSpec
from agentreg.decoding.utils import decode_abi_string, hex_to_bytes, parse_topic_field, word_at

AGENT_ID_42_TOPIC = "0x000000000000000000000000000000000000000000000000000000000000002a"
OWNER_TOPIC = "0x0000000000000000000000008ec6c9a8a6b0d69f48734c4b7ecd1cbb190a0d69"
OWNER_ADDRESS = "0x8Ec6C9A8A6b0d69f48734c4b7Ecd1cbb190a0D69"
EMPTY_STRING_DATA = "0x" + "0" * 62 + "20" + "0" * 64


@pytest.fixture
def registry():
    return make_registry()


def _log(topics, data=EMPTY_STRING_DATA) -> EventLog:
    return EventLog(topics=tuple(topics) if topics is not None else None, data=data)


def test_decode_registered_log(registry, abi_string) -> None:
    uri = "https://myagent.com/.well-known/erc8004.json"
    decoded = decode_event_log(_log([REGISTERED_T0, AGENT_ID_42_TOPIC, OWNER_TOPIC], abi_string(uri)), registry=registry)

    assert decoded.status is True
    assert decoded.messages == ()
    assert decoded.agent_id == "42"
    assert decoded.owner_address == OWNER_ADDRESS
    assert decoded.decoded_agent_uri == uri
    assert decoded.event_name == "Registered"


def test_decode_uri_updated_log(registry, abi_string) -> None:
    decoded = decode_event_log(_log([URI_UPDATED_T0, AGENT_ID_42_TOPIC, OWNER_TOPIC], abi_string("ipfs://Qm")), registry=registry)

    assert decoded.status is True
    assert decoded.event_name == "URIUpdated"
    assert decoded.decoded_agent_uri == "ipfs://Qm"


def test_decode_empty_uri_is_success(registry) -> None:
    decoded = decode_event_log(_log([REGISTERED_T0, AGENT_ID_42_TOPIC, OWNER_TOPIC]), registry=registry)

    assert decoded.status is True
    assert decoded.decoded_agent_uri == ""


def test_topic0_lookup_is_case_insensitive(registry) -> None:
    decoded = decode_event_log(_log([REGISTERED_T0.upper().replace("0X", "0x"), AGENT_ID_42_TOPIC, OWNER_TOPIC]), registry=registry)
    assert decoded.status is True


def test_decode_utf8_uri(registry, abi_string) -> None:
    uri = '{"name":"Agent ünïcödé 🤖"}'
    decoded = decode_event_log(_log([REGISTERED_T0, AGENT_ID_42_TOPIC, OWNER_TOPIC], abi_string(uri)), registry=registry)
    assert decoded.decoded_agent_uri == uri


@pytest.mark.parametrize("topics", [None, []])
def test_missing_topics(registry, topics) -> None:
    decoded = decode_event_log(_log(topics), registry=registry)

    assert decoded.status is False
    assert decoded.messages == ("log: Missing or empty topics array",)
    assert (decoded.agent_id, decoded.owner_address, decoded.decoded_agent_uri) == (None, None, None)


def test_unknown_event_signature_stops_extraction(registry) -> None:
    decoded = decode_event_log(_log(["0x" + "deadbeef" * 8, AGENT_ID_42_TOPIC, OWNER_TOPIC]), registry=registry)

    assert decoded.status is False
    assert decoded.messages == ("log.topics[0]: Unknown event signature, not a recognized ERC-8004 event",)
    assert decoded.agent_id is None
    assert decoded.owner_address is None
    assert decoded.event_name is None


def test_missing_data(registry) -> None:
    decoded = decode_event_log(_log([REGISTERED_T0, AGENT_ID_42_TOPIC, OWNER_TOPIC], None), registry=registry)

    assert decoded.status is False
    assert decoded.messages == ("log: Missing data field",)
    assert decoded.agent_id is None


def test_short_data(registry) -> None:
    decoded = decode_event_log(_log([REGISTERED_T0, AGENT_ID_42_TOPIC, OWNER_TOPIC], "0x0000000000000000"), registry=registry)

    assert decoded.status is False
    assert decoded.messages == ("log.data: Too short for ABI-encoded string (minimum 66 bytes)",)


def test_bad_agent_id_keeps_owner_and_skips_uri(registry, abi_string) -> None:
    decoded = decode_event_log(_log([REGISTERED_T0, "0xnothex", OWNER_TOPIC], abi_string("ipfs://Qm")), registry=registry)

    assert decoded.status is False
    assert decoded.messages == ("log.topics[1]: Cannot decode as uint256 agentId",)
    assert decoded.agent_id is None
    assert decoded.owner_address == OWNER_ADDRESS
    assert decoded.decoded_agent_uri is None


def test_missing_owner_topic(registry) -> None:
    decoded = decode_event_log(_log([REGISTERED_T0, AGENT_ID_42_TOPIC]), registry=registry)

    assert decoded.status is False
    assert decoded.messages == ("log.topics[2]: Cannot decode as address",)
    assert decoded.agent_id == "42"
    assert decoded.decoded_agent_uri is None


@pytest.mark.parametrize(
    "data",
    [
        "0x" + "0" * 62 + "40" + "0" * 64,  # offset past the end
        "0x" + "0" * 62 + "20" + "0" * 62 + "ff" + "0" * 64,  # length past the end
        "0x" + "0" * 62 + "20" + "0" * 63 + "1" + "ff" + "0" * 62,  # not UTF-8
        "0x" + "zz" * 64,  # not hex
    ],
)
def test_abi_string_decoding_failure(registry, data) -> None:
    decoded = decode_event_log(_log([REGISTERED_T0, AGENT_ID_42_TOPIC, OWNER_TOPIC], data), registry=registry)

    assert decoded.status is False
    assert decoded.messages == ("log.data: ABI string decoding failed",)
    assert decoded.agent_id == "42"
    assert decoded.owner_address == OWNER_ADDRESS
    assert decoded.decoded_agent_uri is None


# ---------- utils ----------


def test_word_at_pads_out_of_range() -> None:
    data = bytes(range(32))
    assert word_at(data, 0) == data
    assert word_at(data, 1) == b"\x00" * 32


def test_hex_to_bytes() -> None:
    assert hex_to_bytes("0x0102") == b"\x01\x02"
    assert hex_to_bytes("0X") == b""
    with pytest.raises(ValueError):
        hex_to_bytes("0x123")


def test_parse_topic_field_types() -> None:
    assert parse_topic_field(AGENT_ID_42_TOPIC, TopicFieldSpec("agentId", 1, "uint256")) == 42
    assert parse_topic_field(OWNER_TOPIC, TopicFieldSpec("owner", 2, "address")) == OWNER_ADDRESS
    with pytest.raises(TypeError):
        parse_topic_field(None, TopicFieldSpec("owner", 2, "address"))
    with pytest.raises(ValueError):
        parse_topic_field("0x" + "ff" * 32, TopicFieldSpec("small", 1, "uint8"))
    with pytest.raises(ValueError):
        parse_topic_field(OWNER_TOPIC, TopicFieldSpec("flag", 1, "bool"))


def test_decode_abi_string(abi_string) -> None:
    assert decode_abi_string(hex_to_bytes(abi_string("a" * 40))) == "a" * 40
    with pytest.raises(ValueError):
        decode_abi_string(b"\x00" * 16)


def test_event_log_from_rpc(make_log) -> None:
    log = EventLog.from_rpc(make_log())

    assert log.topics is not None and len(log.topics) == 3
    assert log.block_number == 16
    assert log.log_index == 0
    assert EventLog.from_rpc({"topics": "0x1"}).topics is None
