from __future__ import annotations

from enum import Enum

import attrs
import cattrs

from .breakends import Breakend
from .errors import DegenerateLinkError

PAIR_LINK_ID = "PAIR"


class LinkType(Enum):
    PAIR = "PAIR"  # directly observed breakend pair, i.e. a called SV
    TRANSITIVE = "TRANSITIVE"  # assembled connection over one or more intermediate breakends


@attrs.frozen
class Link:
    """Directed edge from one breakend to another.

    A pair link always carries the id ``PAIR``. A transitive link carries the tag
    assigned when the connection was assembled, e.g. ``trs1``.
    Use :meth:`pair` and :meth:`transitive` to build links.
    """

    id: str
    breakend_start: Breakend
    breakend_end: Breakend
    link_type: LinkType = attrs.field(converter=LinkType)

    def __attrs_post_init__(self):
        if not self.id:
            raise ValueError("Link must have a non-empty id")
        if self.breakend_start == self.breakend_end:
            raise DegenerateLinkError(
                f"Link {self.id} starts and ends at the same breakend {self.breakend_start.vcf_id}"
            )
        if self.link_type is LinkType.PAIR and self.id != PAIR_LINK_ID:
            raise ValueError(
                f"Pair link must have id {PAIR_LINK_ID}, got {self.id}"
            )
        if self.link_type is LinkType.TRANSITIVE and self.id == PAIR_LINK_ID:
            raise ValueError(f"Transitive link cannot use the reserved id {PAIR_LINK_ID}")

    @classmethod
    def pair(cls, breakend_start: Breakend, breakend_end: Breakend) -> Link:
        return cls(
            id=PAIR_LINK_ID,
            breakend_start=breakend_start,
            breakend_end=breakend_end,
            link_type=LinkType.PAIR,
        )

    @classmethod
    def transitive(
        cls, tag: str, breakend_start: Breakend, breakend_end: Breakend
    ) -> Link:
        return cls(
            id=tag,
            breakend_start=breakend_start,
            breakend_end=breakend_end,
            link_type=LinkType.TRANSITIVE,
        )

    def is_pair(self) -> bool:
        return self.link_type is LinkType.PAIR

    def is_transitive(self) -> bool:
        return self.link_type is LinkType.TRANSITIVE

    @property
    def vcf_ids(self) -> tuple[str, str]:
        return self.breakend_start.vcf_id, self.breakend_end.vcf_id

    def reverse(self) -> Link:
        """Returns the same link traversed from its end to its start."""
        return attrs.evolve(
            self, breakend_start=self.breakend_end, breakend_end=self.breakend_start
        )

    def unstructure(self):
        return cattrs.unstructure(self)

    @classmethod
    def from_unstructured(cls, data: dict) -> Link:
        return cattrs.structure(data, cls)

    def __str__(self) -> str:
        return f"{self.breakend_start.vcf_id}--{self.id}-->{self.breakend_end.vcf_id}"
