import pytest

from svpaths.linking.alternate_paths import AlternatePath
from svpaths.linking.breakends import Breakend
from svpaths.linking.link_store import LinkStore, create_link_store
from svpaths.linking.links import Link


def bnd(vcf_id: str) -> Breakend:
    return Breakend(vcf_id)


def transitive_path(origin_id: str, tag: str, via: str, mate_id: str) -> AlternatePath:
    """origin --PAIR--> via --tag--> mate"""
    return AlternatePath(
        origin_id=origin_id,
        mate_id=mate_id,
        links=[
            Link.pair(bnd(origin_id), bnd(via)),
            Link.transitive(tag, bnd(via), bnd(mate_id)),
        ],
    )


# ---- LinkStore ----


class TestLinkStore:
    def test_unknown_origin_gives_empty_list(self):
        assert LinkStore().links_for("Z") == []

    def test_add_link_keeps_order_and_duplicates(self):
        store = LinkStore()
        first = Link.transitive("trs1", bnd("A"), bnd("B"))
        second = Link.transitive("trs2", bnd("B"), bnd("C"))
        store.add_link("X", first)
        store.add_link("X", second)
        store.add_link("X", first)
        assert store.links_for("X") == [first, second, first]
        assert store.link_count() == 3
        assert len(store) == 1

    def test_links_for_returns_copy(self):
        store = LinkStore()
        link = Link.transitive("trs1", bnd("A"), bnd("B"))
        store.add_link("X", link)
        store.links_for("X").clear()
        assert store.links_for("X") == [link]

    def test_origin_ids_and_membership(self):
        store = LinkStore()
        store.add_links("Y", [Link.transitive("trs1", bnd("A"), bnd("B"))])
        store.add_links("X", [Link.transitive("trs2", bnd("A"), bnd("C"))])
        assert store.origin_ids() == ["Y", "X"]
        assert list(store) == ["Y", "X"]
        assert "X" in store
        assert "Z" not in store

    def test_merge_appends_other_after_own_links(self):
        a1 = Link.transitive("trs1", bnd("A"), bnd("B"))
        a2 = Link.transitive("trs2", bnd("A"), bnd("C"))
        b1 = Link.transitive("trs3", bnd("D"), bnd("E"))
        store = LinkStore()
        store.add_link("X", a1)
        other = LinkStore()
        other.add_link("X", a2)
        other.add_link("Y", b1)
        store.merge(other)
        assert store.links_for("X") == [a1, a2]
        assert store.links_for("Y") == [b1]
        assert other.links_for("X") == [a2]

    def test_unstructure(self):
        store = LinkStore()
        store.add_link("X", Link.transitive("trs1", bnd("A"), bnd("B")))
        data = store.unstructure()
        assert list(data.keys()) == ["X"]
        assert data["X"][0]["id"] == "trs1"
        assert LinkStore.from_unstructured(data) == store

    def test_pair_link_is_rejected(self):
        store = LinkStore()
        with pytest.raises(ValueError, match="Only transitive links can be stored"):
            store.add_link("X", Link.pair(bnd("A"), bnd("B")))
        assert store.links_for("X") == []
        assert "X" not in store

    def test_add_links_rejects_pair_link(self):
        store = LinkStore()
        with pytest.raises(ValueError, match="Only transitive links"):
            store.add_links(
                "X",
                [
                    Link.transitive("trs1", bnd("A"), bnd("B")),
                    Link.pair(bnd("B"), bnd("C")),
                ],
            )

    def test_constructor_rejects_pair_link(self):
        with pytest.raises(ValueError, match="Only transitive links"):
            LinkStore(links={"X": [Link.pair(bnd("A"), bnd("B"))]})

    def test_from_unstructured_rejects_pair_link(self):
        data = {"X": [Link.pair(bnd("A"), bnd("B")).unstructure()]}
        with pytest.raises(ValueError, match="Only transitive links"):
            LinkStore.from_unstructured(data)

    def test_stored_links_are_always_transitive(self):
        store = LinkStore()
        store.add_link("X", Link.transitive("trs1", bnd("A"), bnd("B")))
        other = LinkStore(links={"X": [Link.transitive("trs2", bnd("B"), bnd("C"))]})
        store.merge(other)
        assert all(link.is_transitive() for link in store.links_for("X"))
        assert [link.id for link in store.links_for("X")] == ["trs1", "trs2"]


# ---- create_link_store ----


class TestCreateLinkStore:
    def test_links_are_grouped_by_origin(self):
        x1 = transitive_path("X", "trs1", "B", "C")
        x2 = transitive_path("X", "trs2", "D", "E")
        y1 = transitive_path("Y", "trs3", "F", "G")
        store = create_link_store([x1, x2, y1])
        assert store.links_for("X") == [
            x1.transitive_links()[0],
            x2.transitive_links()[0],
        ]
        assert len(store.links_for("Y")) == 1
        assert store.links_for("Z") == []

    def test_pair_links_are_not_stored(self):
        direct = AlternatePath.from_links([Link.pair(bnd("A"), bnd("B"))])
        store = create_link_store([direct])
        assert len(store) == 0
        assert store.links_for("A") == []

    def test_key_is_path_origin(self):
        path = AlternatePath(
            origin_id="V1",
            mate_id="V2",
            links=[Link.transitive("trs1", bnd("A"), bnd("B"))],
        )
        store = create_link_store([path])
        assert store.origin_ids() == ["V1"]

    def test_every_stored_link_is_transitive(self):
        paths = [transitive_path(f"O{i % 3}", f"trs{i}", f"M{i}", f"E{i}") for i in range(9)]
        store = create_link_store(paths)
        assert store.link_count() == 9
        assert all(
            link.is_transitive()
            for origin_id in store
            for link in store.links_for(origin_id)
        )

    def test_static_delegate_on_alternate_path(self):
        paths = [transitive_path("X", "trs1", "B", "C")]
        assert AlternatePath.create_link_store(paths) == create_link_store(paths)

    def test_accepts_generators(self):
        store = create_link_store(
            transitive_path("X", f"trs{i}", f"B{i}", f"C{i}") for i in range(3)
        )
        assert [link.id for link in store.links_for("X")] == ["trs0", "trs1", "trs2"]

    def test_invalid_threads(self):
        with pytest.raises(ValueError, match="threads must be at least 1"):
            create_link_store([], threads=0)

    def test_parallel_equals_sequential(self):
        paths = [
            transitive_path(f"O{i % 4}", f"trs{i}", f"M{i}", f"E{i}") for i in range(11)
        ]
        sequential = create_link_store(paths)
        parallel = create_link_store(paths, threads=3)
        assert parallel == sequential
        assert [link.id for link in parallel.links_for("O0")] == [
            "trs0",
            "trs4",
            "trs8",
        ]

    def test_more_threads_than_paths(self):
        paths = [transitive_path("X", f"trs{i}", f"B{i}", f"C{i}") for i in range(2)]
        assert create_link_store(paths, threads=8) == create_link_store(paths)
