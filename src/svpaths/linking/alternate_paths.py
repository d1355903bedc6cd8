from __future__ import annotations

import json
from collections.abc import Iterable

import attrs
import cattrs

from .errors import MalformedPathError
from .link_store import LinkStore, create_link_store
from .links import Link


@attrs.frozen
class AlternatePath:
    """Chain of links explaining how the breakend origin_id connects to its mate mate_id.

    The links must form a connected chain: the end breakend of every link is the
    start breakend of the next one. origin_id and mate_id are taken as given and
    are not re-derived from the chain (see :meth:`from_links` for that).
    """

    origin_id: str
    mate_id: str
    links: tuple[Link, ...] = attrs.field(converter=tuple)

    def __attrs_post_init__(self):
        if not self.links:
            raise MalformedPathError(
                f"AlternatePath {self.origin_id}->{self.mate_id} must contain at least one link"
            )
        for i in range(len(self.links) - 1):
            current, following = self.links[i], self.links[i + 1]
            if current.breakend_end != following.breakend_start:
                raise MalformedPathError(
                    f"AlternatePath {self.origin_id}->{self.mate_id} is not contiguous at hop {i}: "
                    f"{current} is followed by {following}"
                )

    @classmethod
    def from_links(cls, links: Iterable[Link]) -> AlternatePath:
        """Build a path whose origin and mate are the first and last breakend of the chain."""
        links = list(links)
        if not links:
            raise MalformedPathError("AlternatePath must contain at least one link")
        return cls(
            origin_id=links[0].breakend_start.vcf_id,
            mate_id=links[-1].breakend_end.vcf_id,
            links=links,
        )

    @property
    def hop_count(self) -> int:
        return len(self.links)

    def is_direct(self) -> bool:
        """True if the path is a single observed breakend pair."""
        return self.hop_count == 1 and self.links[0].is_pair()

    def path_vcf_ids(self) -> list[str]:
        """vcf IDs of all breakends visited by the path, in order of traversal."""
        vcf_ids = [link.breakend_start.vcf_id for link in self.links]
        vcf_ids.append(self.links[-1].breakend_end.vcf_id)
        return vcf_ids

    def transitive_links(self) -> list[Link]:
        return [link for link in self.links if link.is_transitive()]

    def path_string(self) -> str:
        """Serializes the path, e.g. A-B<trs1>C-D.

        Pair hops are written as '-', every other hop as its link id in angle brackets.
        The string is direction sensitive; a path and its reverse give different strings.
        """
        parts = [self.links[0].breakend_start.vcf_id]
        for link in self.links:
            parts.append("-" if link.is_pair() else f"<{link.id}>")
            parts.append(link.breakend_end.vcf_id)
        return "".join(parts)

    def reverse(self) -> AlternatePath:
        """The same path traversed from mate to origin."""
        return AlternatePath(
            origin_id=self.mate_id,
            mate_id=self.origin_id,
            links=[link.reverse() for link in reversed(self.links)],
        )

    @staticmethod
    def create_link_store(
        alternate_paths: Iterable[AlternatePath], threads: int = 1
    ) -> LinkStore:
        return create_link_store(alternate_paths, threads=threads)

    def unstructure(self):
        return cattrs.unstructure(self)

    @classmethod
    def from_unstructured(cls, data: dict) -> AlternatePath:
        return cattrs.structure(data, cls)

    def to_json(self) -> str:
        return json.dumps(self.unstructure(), indent=2)

    @classmethod
    def from_json(cls, json_str: str) -> AlternatePath:
        return cls.from_unstructured(json.loads(json_str))

    def __str__(self) -> str:
        return self.path_string()
