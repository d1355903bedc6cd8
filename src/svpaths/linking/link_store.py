from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from concurrent.futures import ProcessPoolExecutor
from typing import TYPE_CHECKING

import attrs
import cattrs
from tqdm import tqdm

from .links import Link

if TYPE_CHECKING:
    from .alternate_paths import AlternatePath

log = logging.getLogger(__name__)


@attrs.define
class LinkStore:
    """Transitive links of alternate paths, indexed by the vcf ID of the path origin.

    The store is filled once, by :func:`create_link_store`, and read afterwards.
    It has no internal locking; concurrent producers build separate stores and
    combine them with :meth:`merge`.
    """

    _links: dict[str, list[Link]] = attrs.Factory(dict)

    def __attrs_post_init__(self):
        links, self._links = self._links, {}
        for origin_id, origin_links in links.items():
            self.add_links(origin_id, origin_links)

    def add_link(self, origin_id: str, link: Link) -> None:
        if not link.is_transitive():
            raise ValueError(
                f"Only transitive links can be stored, got {link} for origin {origin_id}"
            )
        self._links.setdefault(origin_id, []).append(link)

    def add_links(self, origin_id: str, links: Iterable[Link]) -> None:
        for link in links:
            self.add_link(origin_id, link)

    def links_for(self, origin_id: str) -> list[Link]:
        return list(self._links.get(origin_id, []))

    def merge(self, other: LinkStore) -> None:
        """Appends all links of other, keeping other's order after this store's links."""
        for origin_id, links in other._links.items():
            self.add_links(origin_id, links)

    def origin_ids(self) -> list[str]:
        return list(self._links.keys())

    def link_count(self) -> int:
        return sum(len(links) for links in self._links.values())

    def __len__(self) -> int:
        return len(self._links)

    def __contains__(self, origin_id: object) -> bool:
        return origin_id in self._links

    def __iter__(self) -> Iterator[str]:
        return iter(self._links)

    def unstructure(self) -> dict[str, list[dict]]:
        return {
            origin_id: [cattrs.unstructure(link) for link in links]
            for origin_id, links in self._links.items()
        }

    @classmethod
    def from_unstructured(cls, data: dict[str, list[dict]]) -> LinkStore:
        link_store = cls()
        for origin_id, links in data.items():
            link_store.add_links(origin_id, cattrs.structure(links, list[Link]))
        return link_store


def _link_store_from_paths(alternate_paths: Iterable[AlternatePath]) -> LinkStore:
    link_store = LinkStore()
    for alternate_path in alternate_paths:
        for link in alternate_path.transitive_links():
            link_store.add_link(alternate_path.origin_id, link)
    return link_store


def _split_into_chunks(items: list, n_chunks: int) -> list[list]:
    chunk_size = -(-len(items) // n_chunks)
    return [items[i : i + chunk_size] for i in range(0, len(items), chunk_size)]


def create_link_store(
    alternate_paths: Iterable[AlternatePath], threads: int = 1
) -> LinkStore:
    """Collects the transitive links of all alternate paths under their origin vcf IDs.

    Paths are visited in the given order and links in path order, so links_for()
    returns them in that order. With threads > 1 the paths are split into
    contiguous chunks, each chunk is indexed in its own process and the partial
    stores are merged in chunk order. The result is the same as with threads=1.
    """
    if threads < 1:
        raise ValueError(f"threads must be at least 1, got {threads}")
    alternate_paths = list(alternate_paths)

    if threads == 1 or len(alternate_paths) < 2:
        link_store = _link_store_from_paths(alternate_paths)
    else:
        chunks = _split_into_chunks(alternate_paths, threads)
        log.info(
            f"Indexing transitive links of {len(alternate_paths)} alternate paths in {len(chunks)} chunks with {threads} workers"
        )
        link_store = LinkStore()
        with ProcessPoolExecutor(max_workers=threads) as executor:
            futures = [
                executor.submit(_link_store_from_paths, chunk) for chunk in chunks
            ]
            # collected in submission order to keep the input order of the paths
            for i, future in enumerate(
                tqdm(futures, total=len(futures), desc="Indexing transitive links")
            ):
                try:
                    link_store.merge(future.result())
                except Exception as e:
                    log.error(f"Error indexing chunk {i} of alternate paths: {e}")
                    raise

    log.info(
        f"Indexed {link_store.link_count()} transitive links for {len(link_store)} origins from {len(alternate_paths)} alternate paths"
    )
    return link_store
