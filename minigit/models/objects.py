from dataclasses import dataclass
from enum import StrEnum, auto
from typing import ClassVar

from minigit.models.errors import (
    MalformedObject,
    SizeMismatch,
    UnknownKind,
    UnsupportedKind,
)
from minigit.models.tree import (
    NULL_BYTE,
    SPACE,
    EntryMode,
    TreeEntry,
    encode_tree_entries,
    parse_tree_content,
)

__all__ = [
    "ObjectKind",
    "Blob",
    "Tree",
    "Commit",
    "GitObject",
    "encode_object",
    "split_header",
    "decode_object",
]


class ObjectKind(StrEnum):
    BLOB = auto()
    TREE = auto()
    COMMIT = auto()

    @property
    def mode(self) -> EntryMode:
        match self:
            case ObjectKind.BLOB:
                return EntryMode.REGULAR_FILE
            case ObjectKind.TREE:
                return EntryMode.DIRECTORY
            case _:
                raise UnsupportedKind(self.value)


@dataclass(frozen=True, kw_only=True)
class Blob:
    kind: ClassVar[ObjectKind] = ObjectKind.BLOB

    body: bytes

    @property
    def size(self) -> int:
        return len(self.body)


@dataclass(frozen=True, kw_only=True)
class Tree:
    kind: ClassVar[ObjectKind] = ObjectKind.TREE

    entries: tuple[TreeEntry, ...] = ()

    @property
    def body(self) -> bytes:
        return encode_tree_entries(self.entries)

    @property
    def size(self) -> int:
        return len(self.body)


@dataclass(frozen=True, kw_only=True)
class Commit:
    """History node. Declared only; it has no encoding in this store."""

    kind: ClassVar[ObjectKind] = ObjectKind.COMMIT


GitObject = Blob | Tree | Commit


def encode_object(obj: GitObject) -> bytes:
    """Return the canonical ``<kind> <size>\\0<payload>`` bytes of *obj*.

    This is the exact byte sequence that is hashed and compressed.
    """
    match obj:
        case Blob(body=body):
            payload = body
        case Tree():
            payload = obj.body
        case _:
            raise UnsupportedKind(obj.kind.value)
    header = f"{obj.kind} {len(payload)}".encode()
    return header + NULL_BYTE + payload


def split_header(data: bytes) -> tuple[str, bytes]:
    """Split canonical bytes into ``(kind tag, payload)``.

    The declared size is checked against the payload length; the kind tag is
    returned unvalidated.
    """
    header, sep, payload = data.partition(NULL_BYTE)
    if not sep:
        raise MalformedObject("object header is not NUL terminated")
    kind, sep, size = header.partition(SPACE)
    if not sep:
        raise MalformedObject(f"object header {header!r} has no size field")
    if not size.isdigit():
        raise MalformedObject(f"object header {header!r} has a non-numeric size")
    if int(size) != len(payload):
        raise SizeMismatch(int(size), len(payload))
    try:
        return kind.decode("ascii"), payload
    except UnicodeDecodeError as err:
        raise MalformedObject(f"object header {header!r} has a non ASCII kind") from err


def decode_object(data: bytes) -> Blob | Tree:
    kind, payload = split_header(data)
    try:
        object_kind = ObjectKind(kind)
    except ValueError:
        raise UnknownKind(kind) from None
    match object_kind:
        case ObjectKind.BLOB:
            return Blob(body=payload)
        case ObjectKind.TREE:
            return Tree(entries=parse_tree_content(payload))
        case _:
            raise UnsupportedKind(kind)
