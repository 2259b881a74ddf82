"""Test the Jekyll header for generated pages."""

from guidegen.header import build_page_header, is_section_index


def test_regular_page_header():
    header = build_page_header(
        "docs/50_Animation/C50_BasicAnimation.kt",
        {"Title": "Basic animation", "ParentTitle": "Animation", "Order": "50"},
    )

    assert header.title == "Basic animation"
    assert header.parent == "Animation"
    assert header.nav_order == "50"
    assert header.has_children is False

    rendered = header.render()
    assert rendered.startswith("---\n")
    assert rendered.endswith("---\n\n")
    assert "# Edit 'docs/50_Animation/C50_BasicAnimation.kt' instead." in rendered
    assert "layout: default\n" in rendered
    assert "title: Basic animation\n" in rendered
    assert "parent: Animation\n" in rendered
    assert "nav_order: 50\n" in rendered
    assert "has_children: false\n" in rendered


def test_missing_parent_is_absent():
    header = build_page_header("docs/about.kt", {"Title": "About"})

    assert header.parent is None
    assert header.nav_order is None
    assert header.has_children is False
    assert "parent: \n" in header.render()


def test_section_index_overrides_parent():
    for name in ("index.kt", "home.kt"):
        header = build_page_header(
            f"docs/10_Basics/{name}",
            {"Title": "Basics", "ParentTitle": "Somewhere else", "Order": "10"},
        )

        assert header.parent == "~"
        assert header.has_children is True
        rendered = header.render()
        assert "parent: ~\n" in rendered
        assert "has_children: true\n" in rendered


def test_is_section_index_uses_exact_base_name():
    assert is_section_index("docs/index.kt")
    assert is_section_index("home.kt")
    assert not is_section_index("docs/reindex.kt")
    assert not is_section_index("docs/homepage.kt")


def test_values_that_break_yaml_are_quoted():
    header = build_page_header(
        "docs/faq.kt", {"Title": "FAQ: common questions", "ParentTitle": "*Extras"}
    )

    rendered = header.render()
    assert 'title: "FAQ: common questions"\n' in rendered
    assert 'parent: "*Extras"\n' in rendered
