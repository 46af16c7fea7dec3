import logging
import pathlib
from argparse import ArgumentParser


def get_parser():
    parser = ArgumentParser(prog="minigit")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    parser.add_argument(
        "--git-dir",
        type=pathlib.Path,
        help="repository directory (default: $GIT_DIR or .git)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # init
    _init_parser = subparsers.add_parser("init")

    # cat-file
    cat_file_parser = subparsers.add_parser("cat-file")
    cat_file_options = cat_file_parser.add_mutually_exclusive_group()
    cat_file_options.add_argument(
        "-p", "--pretty-print", action="store_true", help="pretty print"
    )
    cat_file_options.add_argument("-t", "--type", action="store_true", help="show kind")
    cat_file_options.add_argument("-s", "--size", action="store_true", help="show size")
    cat_file_parser.add_argument(
        "hash",
    )

    # hash_object
    hash_object_parser = subparsers.add_parser("hash-object")
    hash_object_parser.add_argument("path", type=pathlib.Path)
    hash_object_parser.add_argument("-w", "--write", action="store_true")

    # ls-tree
    ls_tree_parser = subparsers.add_parser("ls-tree")
    ls_tree_parser.add_argument("--name-only", action="store_true")
    ls_tree_parser.add_argument("hash_value")

    # write-tree
    _write_tree_parser = subparsers.add_parser("write-tree")

    return parser


def configure_logging(verbose: bool = False):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
