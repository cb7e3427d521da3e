"""
Bincode wire primitives expressed as construct layouts.

Solana's native programs serialize their instructions with bincode's legacy
configuration: fixed-width little-endian integers, u32 enum discriminants,
u64 length prefixes on strings and vectors, and a single tag byte on options.
Trailing bytes after a complete value are ignored.
"""
from construct import (
    Adapter,
    Bytes,
    ConstructError,
    If,
    Int8ul,
    Int32ul,
    Int64sl,
    Int64ul,
    MappingError,
    OneOf,
    PascalString,
    PrefixedArray,
    Struct,
    this,
)
from solders.hash import Hash
from solders.pubkey import Pubkey

U8 = Int8ul
U32 = Int32ul
U64 = Int64ul
I64 = Int64sl

# Enum discriminants are always serialized as u32
EnumTag = Int32ul

RustString = PascalString(Int64ul, "utf8")

# Everything the layouts can raise on untrusted input. Invalid UTF-8 in a
# seed surfaces as UnicodeDecodeError, oversized length prefixes as
# OverflowError.
DECODE_ERRORS = (ConstructError, ValueError, OverflowError)


def Vec(subcon):
    """Vec<T>: u64 element count followed by the elements."""
    return PrefixedArray(Int64ul, subcon)


class Option(Adapter):
    """Option<T>: tag byte 0 (None) or 1 (Some) followed by the value."""

    def __init__(self, subcon):
        super().__init__(Struct(
            "is_some" / OneOf(Int8ul, [0, 1]),
            "value" / If(this.is_some == 1, subcon),
        ))

    def _decode(self, obj, context, path):
        return obj.value if obj.is_some else None

    def _encode(self, obj, context, path):
        return dict(is_some=0 if obj is None else 1, value=obj)


class PubkeyAdapter(Adapter):
    """32 raw bytes <-> solders Pubkey."""

    def _decode(self, obj, context, path):
        return Pubkey(bytes(obj))

    def _encode(self, obj, context, path):
        if isinstance(obj, str):
            obj = Pubkey.from_string(obj)
        return bytes(obj)


class HashAdapter(Adapter):
    """32 raw bytes <-> solders Hash."""

    def _decode(self, obj, context, path):
        return Hash(bytes(obj))

    def _encode(self, obj, context, path):
        if isinstance(obj, str):
            obj = Hash.from_string(obj)
        return bytes(obj)


class UnitEnum(Adapter):
    """A fieldless Rust enum, serialized as its u32 discriminant."""

    def __init__(self, enum_class):
        super().__init__(EnumTag)
        self.enum_class = enum_class

    def _decode(self, obj, context, path):
        try:
            return self.enum_class(obj)
        except ValueError:
            raise MappingError(f"unknown {self.enum_class.__name__} discriminant {obj}", path=path)

    def _encode(self, obj, context, path):
        if isinstance(obj, str):
            return int(self.enum_class[obj])
        return int(self.enum_class(obj))


PublicKey = PubkeyAdapter(Bytes(32))
HashBytes = HashAdapter(Bytes(32))
