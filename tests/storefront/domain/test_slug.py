import random

from storefront.shared.slug import is_url_safe, random_suffix, slugify


class TestSlugify:
    def test_lowercases_and_hyphenates(self):
        assert slugify("Baan Khanom Shop") == "baan-khanom-shop"

    def test_strips_punctuation_and_collapses_hyphens(self):
        assert slugify("  Som's  Café -- & Bakery!! ") == "soms-caf-bakery"

    def test_non_ascii_only_name_falls_back(self):
        assert slugify("ร้านขนม") == "shop"

    def test_is_capped_at_fifty_characters(self):
        slug = slugify("a very long shop name " * 10)
        assert len(slug) <= 50
        assert not slug.endswith("-")

    def test_generated_slugs_are_url_safe(self):
        for name in ["Baan Khanom", "  x  ", "A_B-C", "ร้าน 99"]:
            assert is_url_safe(slugify(name))


class TestRandomSuffix:
    def test_four_lowercase_base36_characters(self):
        suffix = random_suffix(rng=random.Random(1))
        assert len(suffix) == 4
        assert all(c in "0123456789abcdefghijklmnopqrstuvwxyz" for c in suffix)


class TestIsUrlSafe:
    def test_rejects_uppercase_spaces_and_double_hyphens(self):
        assert not is_url_safe("Baan")
        assert not is_url_safe("baan khanom")
        assert not is_url_safe("baan--khanom")
        assert not is_url_safe("-baan")
        assert not is_url_safe("")
