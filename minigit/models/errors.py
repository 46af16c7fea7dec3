from os import PathLike

__all__ = [
    "GitError",
    "ObjectNotFound",
    "DecompressionFailed",
    "MalformedObject",
    "SizeMismatch",
    "UnknownKind",
    "UnsupportedKind",
    "UnknownEntryMode",
    "IoFailure",
    "InvalidIdentifier",
    "KindMismatch",
]


class GitError(Exception):
    """Base class for every error raised by the object layer."""


class ObjectNotFound(GitError):
    def __init__(self, hash_value: str, path: PathLike):
        self.hash_value = hash_value
        self.path = path
        super().__init__(f"object {hash_value} not found at {path}")


class DecompressionFailed(GitError):
    def __init__(self, reason: str, *, hash_value: str | None = None):
        self.reason = reason
        self.hash_value = hash_value
        where = f" for object {hash_value}" if hash_value else ""
        super().__init__(f"corrupt zlib stream{where}: {reason}")


class MalformedObject(GitError):
    pass


class SizeMismatch(GitError):
    def __init__(self, declared: int, actual: int):
        self.declared = declared
        self.actual = actual
        super().__init__(f"header declares {declared} bytes, payload has {actual}")


class UnknownKind(GitError):
    def __init__(self, kind: str):
        self.kind = kind
        super().__init__(f"unknown object kind {kind!r}")


class UnsupportedKind(GitError):
    def __init__(self, kind: str):
        self.kind = kind
        super().__init__(f"object kind {kind!r} cannot be encoded or decoded")


class UnknownEntryMode(GitError):
    def __init__(self, mode: int):
        self.mode = mode
        super().__init__(f"unknown tree entry mode {mode}")


class IoFailure(GitError):
    def __init__(self, path: PathLike, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")


class InvalidIdentifier(GitError, ValueError):
    def __init__(self, hash_value: str):
        self.hash_value = hash_value
        super().__init__(f"not a 40-character lowercase hex identifier: {hash_value!r}")


class KindMismatch(GitError):
    def __init__(self, hash_value: str, expected: str, actual: str):
        self.hash_value = hash_value
        self.expected = expected
        self.actual = actual
        super().__init__(f"object {hash_value} is a {actual}, expected a {expected}")
