# groups alternate paths that explain the same rearrangement and indexes their transitive links
from __future__ import annotations

import argparse
import gzip
import json
import logging
import os
import sys
from collections.abc import Iterable
from pathlib import Path

import attrs
import cattrs

from ..linking.alternate_paths import AlternatePath
from ..linking.link_store import LinkStore, create_link_store

log = logging.getLogger(__name__)


def group_equivalent_paths(
    alternate_paths: Iterable[AlternatePath],
) -> dict[str, list[AlternatePath]]:
    """Groups paths by their path string. Groups keep the order in which their first path was seen."""
    groups: dict[str, list[AlternatePath]] = {}
    for alternate_path in alternate_paths:
        groups.setdefault(alternate_path.path_string(), []).append(alternate_path)
    return groups


def deduplicate_alternate_paths(
    alternate_paths: Iterable[AlternatePath],
) -> list[AlternatePath]:
    return [group[0] for group in group_equivalent_paths(alternate_paths).values()]


def group_paths_by_vcf_ids(
    alternate_paths: Iterable[AlternatePath],
) -> dict[tuple[str, ...], list[AlternatePath]]:
    """Groups paths that visit the same breakends in the same order, no matter which links connect them."""
    groups: dict[tuple[str, ...], list[AlternatePath]] = {}
    for alternate_path in alternate_paths:
        groups.setdefault(tuple(alternate_path.path_vcf_ids()), []).append(
            alternate_path
        )
    return groups


def paths_by_origin(
    alternate_paths: Iterable[AlternatePath],
) -> dict[str, list[AlternatePath]]:
    result: dict[str, list[AlternatePath]] = {}
    for alternate_path in alternate_paths:
        result.setdefault(alternate_path.origin_id, []).append(alternate_path)
    return result


@attrs.define
class AlternatePathResolution:
    alternate_paths: list[AlternatePath]
    equivalent_groups: dict[str, list[AlternatePath]]
    link_store: LinkStore

    def unique_paths(self) -> list[AlternatePath]:
        return [group[0] for group in self.equivalent_groups.values()]

    def unstructure(self) -> dict:
        return {
            "unique_paths": list(self.equivalent_groups.keys()),
            "equivalent_groups": {
                path_string: [
                    [alternate_path.origin_id, alternate_path.mate_id]
                    for alternate_path in group
                ]
                for path_string, group in self.equivalent_groups.items()
            },
            "link_store": self.link_store.unstructure(),
        }


def resolve_alternate_paths(
    alternate_paths: Iterable[AlternatePath], threads: int = 1
) -> AlternatePathResolution:
    """Groups equivalent alternate paths and indexes the transitive links of all of them.

    The link store is built from every given path, not only from one representative per group.
    """
    alternate_paths = list(alternate_paths)
    equivalent_groups = group_equivalent_paths(alternate_paths)
    log.info(
        f"Found {len(equivalent_groups)} distinct paths among {len(alternate_paths)} alternate paths"
    )
    for path_string, group in equivalent_groups.items():
        if len(group) > 1:
            log.debug(f"{len(group)} alternate paths share the path {path_string}")
    link_store = create_link_store(alternate_paths, threads=threads)
    return AlternatePathResolution(
        alternate_paths=alternate_paths,
        equivalent_groups=equivalent_groups,
        link_store=link_store,
    )


def load_alternate_paths_from_json(input_path: Path | str) -> list[AlternatePath]:
    """Loads a JSON list of unstructured alternate paths. Files ending with .gz are read with gzip."""
    input_path = Path(input_path)
    if not input_path.exists():
        raise FileNotFoundError(f"Input file not found: {input_path}")

    try:
        if str(input_path).endswith(".gz"):
            with gzip.open(input_path, "rt", encoding="utf-8") as f:
                serialized_data = json.load(f)
        else:
            with open(input_path, "r", encoding="utf-8") as f:
                serialized_data = json.load(f)
        alternate_paths = cattrs.structure(serialized_data, list[AlternatePath])
    except json.JSONDecodeError as e:
        log.error(f"Failed to parse JSON from {input_path}: {e}")
        raise
    except Exception as e:
        log.error(f"Error loading alternate paths from {input_path}: {e}")
        raise

    log.info(f"Loaded {len(alternate_paths)} alternate paths from {input_path}")
    return alternate_paths


def save_resolution_to_json(
    resolution: AlternatePathResolution, output_path: Path | str | None
) -> None:
    """Writes the resolution as JSON to output_path, or to stdout if output_path is None."""
    serialized_data = resolution.unstructure()
    if output_path is None:
        json.dump(serialized_data, sys.stdout, indent=2)
        sys.stdout.write("\n")
        return

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    if str(output_path).endswith(".gz"):
        with gzip.open(output_path, "wt", encoding="utf-8") as f:
            json.dump(serialized_data, f, indent=2)
    else:
        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(serialized_data, f, indent=2)
    log.info(
        f"Saved {len(resolution.equivalent_groups)} distinct paths and {resolution.link_store.link_count()} transitive links to {output_path}"
    )


def alternate_paths_to_link_store(
    input_path: Path | str,
    output: Path | str | None = None,
    threads: int = 1,
) -> AlternatePathResolution:
    alternate_paths = load_alternate_paths_from_json(input_path)
    resolution = resolve_alternate_paths(alternate_paths, threads=threads)
    save_resolution_to_json(resolution, output)
    return resolution


def add_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--input",
        help="JSON file (.json or .json.gz) with a list of alternate paths.",
        required=True,
        type=os.path.abspath,
    )
    parser.add_argument(
        "--output",
        help="Output JSON file (.json or .json.gz). Default: write to stdout.",
        required=False,
        type=os.path.abspath,
        default=None,
    )
    parser.add_argument(
        "--threads",
        help="Number of processes used to index transitive links (default: 1).",
        type=int,
        default=1,
    )
    parser.add_argument(
        "--verbose", help="Enable verbose output.", action="store_true", default=False
    )


def run(args) -> None:
    log_level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    alternate_paths_to_link_store(
        input_path=args.input,
        output=args.output,
        threads=args.threads,
    )


def get_parser():
    parser = argparse.ArgumentParser(
        description="Group equivalent alternate paths and index their transitive links by origin breakend."
    )
    add_arguments(parser)
    return parser


def main():
    parser = get_parser()
    args = parser.parse_args()
    run(args)


if __name__ == "__main__":
    main()
