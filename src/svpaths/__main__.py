#!/usr/bin/env python

import argparse

from .svcalling import path_dedup
from .version import get_versions


def get_parser():
    """Return argparse command line parser."""
    parser = argparse.ArgumentParser(
        description="svpaths compares alternate paths between structural variant breakends and indexes their transitive links.",
    )
    parser.add_argument(
        "--version", action="version", version=get_versions()["version"]
    )
    subparsers = parser.add_subparsers()

    # =========================================================================
    #  link store
    # =========================================================================

    parser_link_store = subparsers.add_parser(
        "link-store",
        description="Group equivalent alternate paths and index their transitive links by origin breakend.",
    )
    path_dedup.add_arguments(parser_link_store)
    parser_link_store.set_defaults(func=path_dedup.run)

    return parser


def main():
    parser = get_parser()
    args = parser.parse_args()
    if not hasattr(args, "func"):
        parser.print_help()
    else:
        args.func(args)


if __name__ == "__main__":
    main()
