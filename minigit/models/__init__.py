from minigit.models.errors import (
    DecompressionFailed,
    GitError,
    InvalidIdentifier,
    IoFailure,
    KindMismatch,
    MalformedObject,
    ObjectNotFound,
    SizeMismatch,
    UnknownEntryMode,
    UnknownKind,
    UnsupportedKind,
)
from minigit.models.git import Git
from minigit.models.objects import (
    Blob,
    Commit,
    ObjectKind,
    Tree,
    decode_object,
    encode_object,
)
from minigit.models.tree import EntryMode, TreeEntry, parse_tree_content
