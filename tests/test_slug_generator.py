import pytest

from seo_paths.schemas.slug import EntityClass
from seo_paths.services.slug_generator import SlugGenerator, slugify, unique_slug
from tests.conftest import make_content, make_thread


@pytest.mark.parametrize(
    "title, expected",
    [
        ("XAUUSD M5 Scalping Strategy", "xauusd-m5-scalping-strategy"),
        ("  Gold -- Scalper: PRO!!  ", "gold-scalper-pro"),
        ("Crème brûlée EA", "creme-brulee-ea"),
        ("What's the best EA?", "whats-the-best-ea"),
        ("!!!", ""),
        ("", ""),
    ],
)
def test_slugify(title, expected):
    assert slugify(title) == expected


def test_slugify_truncates_without_trailing_hyphen():
    slug = slugify("word " * 30, max_length=60)
    assert len(slug) <= 60
    assert not slug.endswith("-")


def test_unique_slug_suffixes_sequentially():
    assert unique_slug("ea", set()) == "ea"
    assert unique_slug("ea", {"ea"}) == "ea-1"
    assert unique_slug("ea", {"ea", "ea-1", "ea-2"}) == "ea-3"
    assert unique_slug("ea", {"ea", "ea-2"}) == "ea-1"


class TestSlugGenerator:
    def test_repeated_titles_get_base_then_numbered_suffixes(self, db):
        generator = SlugGenerator()
        slugs = []
        for i in range(4):
            slug = generator.generate_slug(db, "Gold Scalper Pro", EntityClass.CONTENT)
            make_content(db, f"c{i}", slug, "ea")
            slugs.append(slug)

        assert slugs == ["gold-scalper-pro", "gold-scalper-pro-1", "gold-scalper-pro-2", "gold-scalper-pro-3"]

    def test_namespaces_are_per_entity_class(self, db):
        generator = SlugGenerator()
        make_content(db, "c1", "gold-scalper-pro", "ea")

        assert generator.generate_slug(db, "Gold Scalper Pro", EntityClass.THREAD) == "gold-scalper-pro"
        assert generator.generate_slug(db, "Gold Scalper Pro", EntityClass.CONTENT) == "gold-scalper-pro-1"

    def test_similar_prefixes_do_not_collide(self, db):
        generator = SlugGenerator()
        make_thread(db, "t1", "gold-scalper-professional", "cat")

        assert generator.generate_slug(db, "Gold Scalper", EntityClass.THREAD) == "gold-scalper"

    def test_punctuation_only_title_falls_back_to_entity_class(self, db):
        generator = SlugGenerator()
        assert generator.generate_slug(db, "???", EntityClass.THREAD) == "thread"

        make_thread(db, "t1", "thread", "cat")
        assert generator.generate_slug(db, "", EntityClass.THREAD) == "thread-1"

    def test_base_is_truncated_before_suffixing(self, db):
        generator = SlugGenerator(max_length=10)
        make_content(db, "c1", "abcdefghij", "ea")

        assert generator.generate_slug(db, "abcdefghijklmnop", EntityClass.CONTENT) == "abcdefghij-1"

    def test_accepts_plain_string_entity_class(self, db):
        assert SlugGenerator().generate_slug(db, "Hello World", "reply") == "hello-world"
