import binascii
from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable, Iterator

from minigit.models.errors import MalformedObject, UnknownEntryMode

__all__ = [
    "EntryMode",
    "TreeEntry",
    "parse_tree_content",
    "encode_tree_entries",
]

NULL_BYTE = b"\x00"
SPACE = b" "
RAW_HASH_SIZE = 20


class EntryMode(IntEnum):
    REGULAR_FILE = 100644
    EXECUTABLE_FILE = 100755
    SYMBOLIC_LINK = 120000
    DIRECTORY = 40000

    @classmethod
    def from_code(cls, code: int) -> "EntryMode":
        try:
            return cls(code)
        except ValueError:
            raise UnknownEntryMode(code) from None

    @property
    def object_type(self) -> str:
        match self:
            case EntryMode.DIRECTORY:
                return "tree"
            case _:
                return "blob"

    def encode(self) -> bytes:
        return str(self.value).encode()


@dataclass(frozen=True, kw_only=True)
class TreeEntry:
    mode: EntryMode
    name: str
    raw_hash: bytes

    def __post_init__(self):
        if not self.name or "\0" in self.name:
            raise ValueError(f"Invalid entry name: {self.name!r}")
        if len(self.raw_hash) != RAW_HASH_SIZE:
            raise ValueError(f"Entry hash must be {RAW_HASH_SIZE} bytes")

    @classmethod
    def from_hex(cls, mode: EntryMode, name: str, hash_value: str) -> "TreeEntry":
        return cls(mode=mode, name=name, raw_hash=binascii.unhexlify(hash_value))

    @property
    def hash(self) -> str:
        return binascii.hexlify(self.raw_hash).decode()

    def encode(self) -> bytes:
        name = self.name.encode()
        return self.mode.encode() + SPACE + name + NULL_BYTE + self.raw_hash


def _decode_entry(head: bytes, raw_hash: bytes, offset: int) -> TreeEntry:
    where = f"tree entry at offset {offset}"
    mode_digits, sep, name = head.partition(SPACE)
    if not sep:
        raise MalformedObject(f"{where} has no mode separator")
    if not mode_digits.isdigit():
        raise MalformedObject(f"{where} has non-numeric mode {mode_digits!r}")
    mode = EntryMode.from_code(int(mode_digits))
    if mode_digits != mode.encode():
        raise MalformedObject(f"{where} has non-canonical mode {mode_digits!r}")
    if not name:
        raise MalformedObject(f"{where} has an empty name")
    try:
        decoded_name = name.decode()
    except UnicodeDecodeError as err:
        raise MalformedObject(f"{where} has a non UTF-8 name") from err
    return TreeEntry(mode=mode, name=decoded_name, raw_hash=raw_hash)


def _iter_tree_content(content: bytes) -> Iterator[TreeEntry]:
    start = 0
    end = len(content)
    while start < end:
        null_at = content.find(NULL_BYTE, start)
        if null_at == -1:
            raise MalformedObject(
                f"tree entry at offset {start} is not NUL terminated"
            )
        boundary = null_at + 1 + RAW_HASH_SIZE
        if boundary > end:
            raise MalformedObject(
                f"tree entry at offset {start} is truncated: "
                f"expected {RAW_HASH_SIZE} hash bytes, got {end - null_at - 1}"
            )
        head = content[start:null_at]
        yield _decode_entry(head, content[null_at + 1 : boundary], start)
        start = boundary


def parse_tree_content(content: bytes) -> tuple[TreeEntry, ...]:
    """Decode the binary payload of a tree object.

    Entries are ``<mode> <name>\\0<20 raw hash bytes>`` concatenated without
    any delimiter. The scan resumes right after each entry's hash, so NUL
    bytes inside a binary hash are never taken for a name terminator.
    Entries are returned in stored order.
    """
    return tuple(_iter_tree_content(content))


def encode_tree_entries(entries: Iterable[TreeEntry]) -> bytes:
    return b"".join(entry.encode() for entry in entries)
