"""Test public links for exported examples."""

from guidegen.links import LinkBuilder, make_link_builder


def test_no_url_means_no_link_builder():
    assert make_link_builder(None, "shapes", "circle") is None
    assert make_link_builder("", "shapes", "circle") is None


def test_link_for_index():
    mk_link = make_link_builder("https://example.org/repo", "shapes", "circle")

    assert isinstance(mk_link, LinkBuilder)
    assert mk_link(2) == "https://example.org/repo/examples/shapes/circle002.kt"
    assert mk_link(12) == "https://example.org/repo/examples/shapes/circle012.kt"


def test_link_in_root_directory():
    mk_link = make_link_builder("https://example.org/repo/", "", "intro")

    assert mk_link(0) == "https://example.org/repo/examples/intro000.kt"


def test_link_keeps_nested_directories():
    mk_link = make_link_builder("https://example.org/repo", "50_Animation/easing", "C10_Easing")

    assert mk_link(1) == "https://example.org/repo/examples/50_Animation/easing/C10_Easing001.kt"
