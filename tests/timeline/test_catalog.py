#!filepath: tests/timeline/test_catalog.py
import pytest

from tl_assistant.timeline.buffs.catalog import BuffCatalog, BuffScope, CatalogEntry
from tl_assistant.utils.errors import ConfigError


@pytest.mark.parametrize(
    "name, expected",
    [
        ("水着ホシノEX", "mizugi_hoshino"),
        ("水着おじさん", "mizugi_hoshino"),
        ("セイアEX", "seia"),
        ("水着セイア", None),   # excluded from seia, not a hoshino either
        ("ホシノ", None),
        ("", None),
    ],
)
def test_default_catalog_detection(default_catalog, name, expected):
    entry = default_catalog.match(name)
    assert (entry.id if entry else None) == expected


def test_default_catalog_shape(default_catalog):
    assert default_catalog.template.id == "general"
    assert default_catalog.template.scope is BuffScope.POOL
    assert {e.id for e in default_catalog.grants()} == {"kanoe", "cherino"}

    seia = default_catalog.get("seia")
    assert seia.duration_frames() == 450
    assert seia.duration_frames(second_variant=True) == 535
    assert seia.offset == 98


def test_stacking_magnitude(default_catalog):
    kanoe = default_catalog.get("kanoe")
    assert kanoe.magnitude_at(1) == 342
    assert kanoe.magnitude_at(3) == 342 + 2 * 85


def test_first_match_wins_and_is_case_insensitive():
    catalog = BuffCatalog([
        CatalogEntry(id="first", name="First", target="A", magnitude=1, duration=10, include=["^abc"]),
        CatalogEntry(id="second", name="Second", target="B", magnitude=2, duration=10, include=["abc"]),
    ])
    assert catalog.match("ABCdef").id == "first"
    assert catalog.match("xxabc").id == "second"


def test_scope_derived_from_target():
    assert CatalogEntry(id="a", name="a", target="全員", magnitude=1, duration=1).scope is BuffScope.ALL
    assert CatalogEntry(id="b", name="b", target="NA", magnitude=1, duration=1).scope is BuffScope.POOL
    assert CatalogEntry(id="c", name="c", target="セイア", magnitude=1, duration=1).scope is BuffScope.INDIVIDUAL


def test_duplicate_ids_rejected():
    e = CatalogEntry(id="dup", name="x", target="A", magnitude=1, duration=1)
    with pytest.raises(ConfigError):
        BuffCatalog([e, e])


def test_invalid_catalog_file(tmp_path):
    path = tmp_path / "catalog.yml"
    path.write_text("entries:\n  - id: broken\n    name: Broken\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        BuffCatalog.load(str(path))


def test_missing_catalog_file(tmp_path):
    with pytest.raises(ConfigError):
        BuffCatalog.load(str(tmp_path / "nope.yml"))


def test_custom_catalog_file(tmp_path):
    path = tmp_path / "catalog.yml"
    path.write_text(
        "entries:\n"
        "  - id: shout\n"
        "    name: Shout\n"
        "    target: all\n"
        "    magnitude: 50\n"
        "    duration: [100, 200]\n"
        "    include: ['shout']\n",
        encoding="utf-8",
    )
    catalog = BuffCatalog.load(str(path))

    entry = catalog.match("Big SHOUT")
    assert entry.scope is BuffScope.ALL
    assert entry.duration == (100, 200)
