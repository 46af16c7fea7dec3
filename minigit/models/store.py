import hashlib
import logging
import pathlib
import re
import zlib
from os import PathLike

from minigit.models.errors import (
    DecompressionFailed,
    InvalidIdentifier,
    IoFailure,
    ObjectNotFound,
)

__all__ = ["ObjectStore", "create_hash", "compress", "decompress", "validate_hash"]

logger = logging.getLogger(__name__)

HASH_PATTERN = re.compile(r"[0-9a-f]{40}")


def create_hash(data: str | bytes, *, hasher=hashlib.sha1) -> str:
    if isinstance(data, str):
        data = data.encode()
    hash_object = hasher(data)
    return hash_object.hexdigest()


def compress(data: bytes, *, level: int = zlib.Z_DEFAULT_COMPRESSION) -> bytes:
    return zlib.compress(data, level)


def decompress(data: bytes, *, hash_value: str | None = None) -> bytes:
    try:
        return zlib.decompress(data)
    except zlib.error as err:
        raise DecompressionFailed(str(err), hash_value=hash_value) from err


def validate_hash(hash_value: str) -> str:
    if not isinstance(hash_value, str) or not HASH_PATTERN.fullmatch(hash_value):
        raise InvalidIdentifier(hash_value)
    return hash_value


class ObjectStore:
    """Loose objects sharded as ``<objects>/<hash[:2]>/<hash[2:]>``.

    Files are created exclusively and never rewritten. Since identifiers are
    derived from content, an existing file already holds the same bytes.
    """

    def __init__(self, objects_folder: PathLike):
        self.objects_folder = pathlib.Path(objects_folder)

    def path_for(self, hash_value: str) -> pathlib.Path:
        validate_hash(hash_value)
        return self.objects_folder / hash_value[:2] / hash_value[2:]

    def exists(self, hash_value: str) -> bool:
        return self.path_for(hash_value).is_file()

    def write(self, hash_value: str, compressed_data: bytes) -> bool:
        """Persist *compressed_data*, returning ``False`` if already stored."""
        path = self.path_for(hash_value)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as err:
            raise IoFailure(path.parent, err.strerror or str(err)) from err

        try:
            f = path.open("xb")
        except FileExistsError:
            logger.debug("Object %s already stored, skipped", hash_value)
            return False
        except OSError as err:
            raise IoFailure(path, err.strerror or str(err)) from err

        try:
            with f:
                f.write(compressed_data)
        except OSError as err:
            path.unlink(missing_ok=True)
            raise IoFailure(path, err.strerror or str(err)) from err
        logger.debug("Stored object %s (%d bytes)", hash_value, len(compressed_data))
        return True

    def read(self, hash_value: str) -> bytes:
        path = self.path_for(hash_value)
        try:
            with path.open("rb") as f:
                data = f.read()
        except FileNotFoundError:
            raise ObjectNotFound(hash_value, path) from None
        except OSError as err:
            raise IoFailure(path, err.strerror or str(err)) from err
        logger.debug("Read object %s (%d bytes)", hash_value, len(data))
        return data
