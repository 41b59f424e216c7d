"""
Command-line interface.

Usage:
    gitlite [--root PATH] [-v] init
    gitlite cat-file -p <hash>
    gitlite hash-object -w <file>      # relative paths resolve against --root
    gitlite ls-tree --name-only <hash>
    gitlite write-tree
"""

import argparse
import logging
import sys

from .errors import GitliteError
from .repository import Repository


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='gitlite', description="Minimal git object store")
    parser.add_argument('--root', default='.', help="path to the repository root (default: .)")
    parser.add_argument('-v', '--verbose', action='store_true', help="enable debug logging")

    subparsers = parser.add_subparsers(dest='command', required=True)

    subparsers.add_parser('init', help="create an empty repository")

    cat_file = subparsers.add_parser('cat-file', help="print an object's content")
    cat_file.add_argument('-p', dest='object_hash', required=True, metavar='HASH',
                          help="pretty-print the object's content")

    hash_object = subparsers.add_parser('hash-object', help="store a file as a blob")
    hash_object.add_argument('-w', dest='file', required=True, metavar='FILE',
                             help="write the object into the store")

    ls_tree = subparsers.add_parser('ls-tree', help="list the names in a tree")
    ls_tree.add_argument('--name-only', dest='object_hash', required=True, metavar='HASH',
                         help="list only entry names")

    subparsers.add_parser('write-tree', help="store the working directory as a tree")

    return parser


def run(repository: Repository, args: argparse.Namespace) -> None:
    if args.command == 'init':
        repository.init()
        print(f"Initialized empty repository in {repository.layout.git_dir}")

    elif args.command == 'cat-file':
        _, payload = repository.read_object(args.object_hash)
        sys.stdout.buffer.write(payload)
        sys.stdout.flush()

    elif args.command == 'hash-object':
        print(repository.hash_object(args.file, base_dir=repository.root))

    elif args.command == 'ls-tree':
        sys.stdout.write(repository.read_tree(args.object_hash))

    elif args.command == 'write-tree':
        print(repository.write_tree())


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
    )

    try:
        run(Repository(args.root), args)
    except GitliteError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
