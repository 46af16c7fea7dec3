import logging
import os
import pathlib
import stat
from os import PathLike

from minigit.models.errors import IoFailure, KindMismatch, UnknownKind, UnsupportedKind
from minigit.models.objects import (
    Blob,
    GitObject,
    ObjectKind,
    Tree,
    decode_object,
    encode_object,
)
from minigit.models.store import ObjectStore, compress, create_hash, decompress
from minigit.models.tree import EntryMode, TreeEntry, parse_tree_content

__all__ = ["Git"]

logger = logging.getLogger(__name__)


class Git:
    def __init__(
        self,
        work_dir: PathLike = ".",
        *,
        git_dir: PathLike = ".git",
        default_branch: str = "main",
    ):
        self.work_dir = pathlib.Path(work_dir)
        self.git_folder = self.work_dir / git_dir
        self.objects_folder = self.git_folder / "objects"
        self.default_branch = default_branch
        self.objects = ObjectStore(self.objects_folder)

    def init_repo(self):
        dirs = [
            self.git_folder,
            self.objects_folder,
            self.git_folder / "refs" / "heads",
        ]
        for _dir in dirs:
            try:
                _dir.mkdir(exist_ok=False, parents=True)
            except OSError as err:
                raise IoFailure(_dir, err.strerror or str(err)) from err
        head = self.git_folder / "HEAD"
        try:
            head.write_text(f"ref: refs/heads/{self.default_branch}\n")
        except OSError as err:
            raise IoFailure(head, err.strerror or str(err)) from err
        logger.debug("Initialized repository in %s", self.git_folder)

    def store_object(self, obj: GitObject, *, write: bool = True) -> str:
        data = encode_object(obj)
        hash_value = create_hash(data)
        if write:
            self.objects.write(hash_value, compress(data))
        return hash_value

    def store(
        self, kind: ObjectKind | str, payload: bytes, *, write: bool = True
    ) -> str:
        try:
            kind = ObjectKind(kind)
        except ValueError:
            raise UnknownKind(str(kind)) from None
        match kind:
            case ObjectKind.BLOB:
                obj = Blob(body=payload)
            case ObjectKind.TREE:
                obj = Tree(entries=parse_tree_content(payload))
            case _:
                raise UnsupportedKind(kind.value)
        return self.store_object(obj, write=write)

    def retrieve(self, hash_value: str) -> Blob | Tree:
        data = decompress(self.objects.read(hash_value), hash_value=hash_value)
        return decode_object(data)

    def list_entries(self, hash_value: str) -> tuple[TreeEntry, ...]:
        obj = self.retrieve(hash_value)
        if not isinstance(obj, Tree):
            raise KindMismatch(hash_value, ObjectKind.TREE.value, obj.kind.value)
        return obj.entries

    def hash_file(self, path: PathLike, *, write: bool = False) -> str:
        path = pathlib.Path(path)
        try:
            content = path.read_bytes()
        except OSError as err:
            raise IoFailure(path, err.strerror or str(err)) from err
        return self.store(ObjectKind.BLOB, content, write=write)

    def _tree_entry(self, entry: pathlib.Path, *, write: bool) -> TreeEntry | None:
        try:
            entry.name.encode()
        except UnicodeEncodeError as err:
            raise IoFailure(entry, "name is not valid UTF-8") from err

        try:
            st = entry.lstat()
        except OSError as err:
            raise IoFailure(entry, err.strerror or str(err)) from err

        if stat.S_ISLNK(st.st_mode):
            mode = EntryMode.SYMBOLIC_LINK
            target = os.fsencode(os.readlink(entry))
            hash_value = self.store(ObjectKind.BLOB, target, write=write)
        elif stat.S_ISDIR(st.st_mode):
            mode = ObjectKind.TREE.mode
            hash_value = self.write_tree(entry, write=write)
        elif stat.S_ISREG(st.st_mode):
            if st.st_mode & stat.S_IXUSR:
                mode = EntryMode.EXECUTABLE_FILE
            else:
                mode = ObjectKind.BLOB.mode
            hash_value = self.hash_file(entry, write=write)
        else:
            logger.debug("Skipping special file %s", entry)
            return None
        return TreeEntry.from_hex(mode, entry.name, hash_value)

    def write_tree(
        self, working_directory: PathLike | None = None, *, write: bool = True
    ) -> str:
        """Snapshot *working_directory* into blob and tree objects.

        Entries are ordered by name, with directories compared as ``name/``.
        The repository directory itself is never included.
        """
        if working_directory is None:
            working_directory = self.work_dir
        dir_path = pathlib.Path(working_directory)
        try:
            children = list(dir_path.iterdir())
        except OSError as err:
            raise IoFailure(dir_path, err.strerror or str(err)) from err

        git_folder = self.git_folder.resolve()
        parent = dir_path.resolve()
        children = [child for child in children if parent / child.name != git_folder]

        def sort_key(child: pathlib.Path) -> bytes:
            name = os.fsencode(child.name)
            if child.is_dir() and not child.is_symlink():
                return name + b"/"
            return name

        entries = []
        for child in sorted(children, key=sort_key):
            tree_entry = self._tree_entry(child, write=write)
            if tree_entry is not None:
                entries.append(tree_entry)
        return self.store_object(Tree(entries=tuple(entries)), write=write)
