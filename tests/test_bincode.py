import pytest
from construct import ConstructError, Struct
from solders.hash import Hash
from solders.pubkey import Pubkey

from instruction_parser.bincode import I64, U64, HashBytes, Option, PublicKey, RustString, UnitEnum, Vec
from instruction_parser.vote_instruction import VoteAuthorize


def test_option_tags():
    layout = Option(I64)
    assert layout.build(None) == b"\x00"
    assert layout.build(-1) == b"\x01" + b"\xff" * 8
    assert layout.parse(b"\x00") is None
    assert layout.parse(b"\x01" + (42).to_bytes(8, "little")) == 42
    with pytest.raises(ConstructError):
        layout.parse(b"\x02" + bytes(8))


def test_string_and_vec_use_u64_prefix():
    assert RustString.build("ab") == bytes.fromhex("0200000000000000") + b"ab"
    assert Vec(U64).build([3]) == bytes.fromhex("0100000000000000" "0300000000000000")
    assert Vec(U64).parse(bytes(8)) == []


def test_key_adapters_accept_base58_text():
    pubkey = Pubkey.new_unique()
    layout = Struct("key" / PublicKey, "hash" / HashBytes)
    data = layout.build(dict(key=str(pubkey), hash=str(Hash(bytes([5] * 32)))))

    parsed = layout.parse(data)
    assert parsed.key == pubkey
    assert parsed.hash == Hash(bytes([5] * 32))


def test_unit_enum():
    layout = UnitEnum(VoteAuthorize)
    assert layout.build("Withdrawer") == bytes.fromhex("01000000")
    assert layout.parse(bytes.fromhex("00000000")) is VoteAuthorize.Voter
    with pytest.raises(ConstructError):
        layout.parse(bytes.fromhex("05000000"))
