from __future__ import annotations

import attrs
import cattrs


@attrs.frozen
class Breakend:
    """One side of a structural variant junction. Two breakends are equal if they share the vcf ID."""

    vcf_id: str
    mate_id: str | None = attrs.field(default=None, eq=False)  # None for single breakends

    def __attrs_post_init__(self):
        if not self.vcf_id:
            raise ValueError("Breakend must have a non-empty vcf_id")

    @property
    def is_single(self) -> bool:
        return self.mate_id is None

    def is_mate_of(self, other: Breakend) -> bool:
        return self.mate_id == other.vcf_id and other.mate_id == self.vcf_id

    def unstructure(self):
        return cattrs.unstructure(self)

    @classmethod
    def from_unstructured(cls, data: dict) -> Breakend:
        return cattrs.structure(data, cls)

    def __str__(self) -> str:
        return self.vcf_id
