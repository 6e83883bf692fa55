"""Unit tests for the single-pass section state machine.

These tests feed short drafts through :class:`SectionStateMachine` and
inspect the raw assembled HTML (before cleanup). They cover idle output
(headings, coalesced lists, tables), section opening and closing rules,
the guarantee that sections never nest, ignored regions, and the table of
contents slot that is filled once from the finished outline.

Usage
-----
Run ``pytest tests/test_transducer.py -v``.
"""

from __future__ import annotations

from bs4 import BeautifulSoup

from blogdoc.classifier import classify_lines
from blogdoc.sections import SectionTag
from blogdoc.transducer import (
    SectionStateMachine,
    collect_table_rows,
    number_prefix,
    transduce,
)


def _run(text: str) -> tuple[SectionStateMachine, BeautifulSoup]:
    machine = SectionStateMachine()
    document = machine.run(text.splitlines())
    return machine, BeautifulSoup(document.html, "html.parser")


def test_list_items_coalesce_until_blank_line() -> None:
    _machine, soup = _run("- One\n- Two\n\n- Three")
    lists = soup.select("ul.bullet-new-box")
    assert [len(ul.find_all("li")) for ul in lists] == [2, 1]


def test_list_kind_change_starts_new_list() -> None:
    _machine, soup = _run("1. first step\n- a bullet")
    assert [tag.name for tag in soup.find_all(["ol", "ul"])] == ["ol", "ul"]
    assert soup.select_one("ol.listing-bx li").get_text() == "first step"


def test_headings_get_unique_ids() -> None:
    machine, soup = _run("Overview Section\nText one.\nOverview Section\nText two.")
    assert [h2["id"] for h2 in soup.find_all("h2")] == ["overview-section", "overview-section-2"]
    assert [heading.id for heading in machine.outline] == [
        "overview-section",
        "overview-section-2",
    ]


def test_idle_table_rows_are_collected_across_blank_lines() -> None:
    _machine, soup = _run("Name | Role\nAda | Engineer\n\nGrace | Admiral\nAfter table.")
    assert [th.get_text() for th in soup.find_all("th")] == ["Name", "Role"]
    assert len(soup.find_all("tr")) == 3
    assert soup.find("p").get_text() == "After table."


def test_single_table_row_is_a_paragraph() -> None:
    document = transduce(["Just | one row"])
    assert document.html == "<p>Just | one row</p>"


def test_collect_table_rows_stops_at_prose() -> None:
    items = classify_lines(["A | B", "", "", "C | D", "", "plain words"])
    rows, next_index = collect_table_rows(items, 0)
    assert rows == ["A | B", "C | D"]
    assert next_index == 4


def test_trigger_heading_is_kept_and_section_closes_at_next_heading() -> None:
    machine, soup = _run(
        "KEY TAKEAWAYS\n- Fast\n- Small\n\nClosing Thoughts\nThe end."
    )
    assert [h2.get_text() for h2 in soup.find_all("h2")] == ["KEY TAKEAWAYS", "Closing Thoughts"]
    block = soup.select_one("ul.kta-list")
    assert [li.get_text() for li in block.find_all("li")] == ["Fast", "Small"]
    assert block.find("h2") is None
    assert machine.closed_sections == [SectionTag.KEY_TAKEAWAYS]


def test_phrase_faq_keeps_question_headings() -> None:
    _machine, soup = _run("FAQ\nWhat is X?\nX is Y.\nWhy use X?\nBecause Z.")
    block = soup.select_one("div.faq_blog")
    assert [h3.get_text() for h3 in block.find_all("h3")] == ["What is X?", "Why use X?"]
    assert soup.find("p", string="FAQ") is None


def test_new_trigger_closes_phrase_section() -> None:
    machine, soup = _run("KEY TAKEAWAYS\n- Fast\nFAQ\nWhat is X?\nX is Y.")
    assert machine.closed_sections == [SectionTag.KEY_TAKEAWAYS, SectionTag.FAQ]
    assert soup.select_one("ul.kta-list") is not None
    assert soup.select_one("div.faq_blog") is not None


def test_directive_sections_ignore_trigger_phrases() -> None:
    machine, soup = _run(
        "<FAQ>\nWhat is X?\nX is Y.\nKEY TAKEAWAYS\nStill part of the answer.\n<FAQ END>"
    )
    assert machine.closed_sections == [SectionTag.FAQ]
    assert soup.select_one("ul.kta-list") is None
    answers = [p.get_text() for p in soup.select("div.faq_blog p")]
    assert answers == ["X is Y.", "KEY TAKEAWAYS", "Still part of the answer."]


def test_sections_never_nest() -> None:
    machine, soup = _run(
        "<FAQ>\nWhat is X?\nX is Y.\n<STEPS>\nInstall: run it\n<STEPS END>\nAfter the steps."
    )
    assert machine.sections_opened == 2
    assert machine.closed_sections == [SectionTag.FAQ, SectionTag.STEPS]
    assert machine.active is None
    faq = soup.select_one("div.faq_blog")
    assert faq.find("ol") is None
    assert faq.find_next_sibling("ol")["class"] == ["listing-bx"]


def test_ignored_section_vanishes() -> None:
    document = transduce(
        [
            "Visible intro.",
            "<IGNORE>",
            "Secret Heading",
            "secret text",
            "<IGNORE END>",
            "Visible outro.",
        ]
    )
    assert "Secret" not in document.html
    assert "secret" not in document.html
    assert document.html == "<p>Visible intro.</p>\n<p>Visible outro.</p>"
    assert document.outline == ()


def test_unclosed_section_closes_at_end_of_input() -> None:
    assert transduce(["<IGNORE>", "secret text"]).html == ""
    machine, soup = _run("<STEPS>\nPlan: sketch it")
    assert machine.closed_sections == [SectionTag.STEPS]
    assert soup.select_one("ol.listing-bx h3").get_text() == "Plan"


def test_unknown_directive_renders_paragraph() -> None:
    document = transduce(["<CUSTOM>", "first line", "second line", "<CUSTOM END>"])
    assert document.html == "<p>first line second line</p>"


def test_stray_end_tag_is_dropped() -> None:
    assert transduce(["<FAQ END>", "plain text here"]).html == "<p>plain text here</p>"


def test_toc_is_rendered_from_the_finished_outline() -> None:
    draft = "\n".join(
        [
            "TABLE OF CONTENTS",
            "1. Getting Started",
            "2. Advanced Usage",
            "",
            "1. Getting Started",
            "Some text about starting.",
            "1.1 Install The Tools",
            "Run the installer first.",
            "2. Advanced Usage",
            "More details follow here.",
        ]
    )
    machine, soup = _run(draft)
    toc = soup.select_one("div.blog_index_cover")
    assert toc is not None
    assert soup.find().get("class") == ["blog_index_cover"]
    assert [a["href"] for a in toc.find_all("a")] == [
        "#getting-started",
        "#install-the-tools",
        "#advanced-usage",
    ]
    assert toc.find_all("li")[1]["class"] == ["sub-heading"]
    assert [h["id"] for h in soup.find_all(["h2", "h3"])] == [
        "getting-started",
        "install-the-tools",
        "advanced-usage",
    ]
    assert machine.toc_slot == 0


def test_bare_toc_marker_does_not_swallow_the_body() -> None:
    _machine, soup = _run("<TOC>\n\nWelcome to the guide.\n\nSetup Basics\nRun it.")
    assert soup.find().get("class") == ["blog_index_cover"]
    assert [a["href"] for a in soup.select("div.blog_index_cover a")] == ["#setup-basics"]
    assert [p.get_text() for p in soup.find_all("p", class_=False)] == [
        "Welcome to the guide.",
        "Run it.",
    ]


def test_toc_source_entries_are_not_emitted_in_the_body() -> None:
    _machine, soup = _run(
        "<TOC>\n- Introduction\n- FAQs\n<TOC END>\n\nIntroduction Section\nIntro text here."
    )
    assert soup.select_one("ul.bullet-new-box") is None
    assert soup.find("ul") is None
    assert [a["href"] for a in soup.select("div.blog_index_cover a")] == ["#introduction-section"]


def test_toc_entry_naming_a_section_stays_an_entry() -> None:
    draft = "\n".join(
        [
            "TABLE OF CONTENTS",
            "1. Introduction",
            "2. Key Takeaways",
            "3. Conclusion",
            "",
            "1. Introduction",
            "Intro text here.",
            "",
            "KEY TAKEAWAYS",
            "- Fast",
            "- Small",
            "",
            "2. Conclusion",
            "Done text.",
        ]
    )
    machine, soup = _run(draft)
    assert machine.closed_sections == [SectionTag.TOC, SectionTag.KEY_TAKEAWAYS]
    assert [h2["id"] for h2 in soup.find_all("h2")] == [
        "introduction",
        "key-takeaways",
        "conclusion",
    ]
    blocks = soup.select("ul.kta-list")
    assert len(blocks) == 1
    assert [li.get_text() for li in blocks[0].find_all("li")] == ["Fast", "Small"]
    assert [p.get_text() for p in soup.find_all("p", class_=False, recursive=False)] == [
        "Intro text here.",
        "Done text.",
    ]


def test_numbered_heading_after_blank_line_closes_key_takeaways() -> None:
    machine, soup = _run("KEY TAKEAWAYS\n- Fast\n- Small\n\n2. Conclusion\nDone text.")
    assert machine.closed_sections == [SectionTag.KEY_TAKEAWAYS]
    assert [li.get_text() for li in soup.select("ul.kta-list li")] == ["Fast", "Small"]
    assert soup.find("h2", id="conclusion").get_text() == "Conclusion"
    assert soup.find("p", class_=False, recursive=False).get_text() == "Done text."


def test_numbered_heading_after_blank_line_closes_steps() -> None:
    machine, soup = _run(
        "STEPS\n1. Install The Tool\n2. Configure The Tool\n\n3. Wrap Up\nAll done now."
    )
    assert machine.closed_sections == [SectionTag.STEPS]
    assert len(soup.select("ol.listing-bx li")) == 2
    assert soup.find("h2", id="wrap-up") is not None
    assert [h2.get_text() for h2 in soup.find_all("h2")] == ["Wrap Up"]


def test_restarted_numbering_closes_steps() -> None:
    machine, soup = _run(
        "STEPS\n1. Install The Tool\n2. Configure The Tool\n1. Next Chapter\nMore text follows."
    )
    assert machine.closed_sections == [SectionTag.STEPS]
    assert len(soup.select("ol.listing-bx li")) == 2
    assert soup.find("h2", id="next-chapter") is not None


def test_contiguous_numbered_entries_stay_in_the_section() -> None:
    _machine, soup = _run("KEY TAKEAWAYS\n1. Fast Setup\n2. Small Footprint")
    assert [li.get_text() for li in soup.select("ul.kta-list li")] == [
        "Fast Setup",
        "Small Footprint",
    ]


def test_number_prefix() -> None:
    assert number_prefix("2.1 Install The Tools") == (2, 1)
    assert number_prefix("3. Wrap Up") == (3,)
    assert number_prefix("- bullet") is None


def test_document_without_headings_has_no_toc() -> None:
    assert transduce(["TOC", "just words here"]).html == "<p>just words here</p>"
