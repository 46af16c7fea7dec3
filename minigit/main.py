import os
import sys

from minigit.models import Blob, Git, GitError, Tree
from minigit.models.tree import TreeEntry
from minigit.utils import configure_logging, get_parser


def format_entry(entry: TreeEntry) -> str:
    return f"{entry.mode.value:06d} {entry.mode.object_type} {entry.hash}\t{entry.name}"


def cat_file(git: Git, hash_value: str, *, pretty_print=False, type_=False, size=False):
    obj = git.retrieve(hash_value)
    if type_:
        print(obj.kind)
    elif size:
        print(obj.size)
    elif pretty_print:
        match obj:
            case Blob(body=body):
                sys.stdout.flush()
                sys.stdout.buffer.write(body)
                sys.stdout.buffer.flush()
            case Tree(entries=entries):
                for entry in entries:
                    print(format_entry(entry))
    return obj


def ls_tree(git: Git, hash_value: str, *, name_only=False):
    entries = git.list_entries(hash_value)
    for entry in entries:
        print(entry.name if name_only else format_entry(entry))
    return entries


def main(argv=None) -> int:
    parser = get_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)
    git_dir = args.git_dir or os.environ.get("GIT_DIR") or ".git"
    git = Git(git_dir=git_dir)
    try:
        match args.command:
            case "init":
                git.init_repo()
                print(f"Initialized empty repository in {git.git_folder}")
            case "cat-file":
                cat_file(
                    git,
                    args.hash,
                    pretty_print=args.pretty_print,
                    type_=args.type,
                    size=args.size,
                )
            case "hash-object":
                print(git.hash_file(args.path, write=args.write))
            case "ls-tree":
                ls_tree(git, args.hash_value, name_only=args.name_only)
            case "write-tree":
                print(git.write_tree())
            case _:
                raise RuntimeError(f"Unknown command #{args.command}")
    except GitError as err:
        print(f"{type(err).__name__}: {err}", file=sys.stderr)
        return 1
    return 0


def run():
    sys.exit(main())


if __name__ == "__main__":
    run()
