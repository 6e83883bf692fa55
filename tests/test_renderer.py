"""Unit tests for the section renderer and its helpers.

Each test renders one section buffer and inspects the fragment with
BeautifulSoup, checking the class names the blog style sheet depends on and
the structural guarantees of each block: FAQ questions are followed by their
answers, table rows are padded to the header width, pros and cons split at
the midpoint, and ignored sections render nothing.

Usage
-----
Run ``pytest tests/test_renderer.py -v``.
"""

from __future__ import annotations

from bs4 import BeautifulSoup

from blogdoc.classifier import ListKind
from blogdoc.config import DEFAULT_CTA, CtaDefaults
from blogdoc.config.models import DEFAULT_CTA_IMAGE
from blogdoc.models import Heading
from blogdoc.rendering import (
    SectionRenderer,
    Step,
    group_faq,
    is_question,
    parse_table,
    split_pros_cons,
    split_step,
)
from blogdoc.rendering.tables import detect_delimiter
from blogdoc.sections import SectionTag


def _soup(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


def test_faq_pairs_questions_with_answers() -> None:
    renderer = SectionRenderer()
    html = renderer.render(
        SectionTag.FAQ, ["What is X?", "X is Y.", "Why use X?", "Because Z."]
    )
    soup = _soup(html)
    block = soup.select_one("div.faq_blog")
    assert block is not None
    assert block.h2 is not None
    assert block.h2["id"] == "frequently-asked-questions"
    questions = block.find_all("h3")
    assert [h3["id"] for h3 in questions] == ["what-is-x", "why-use-x"]
    answers = [h3.find_next_sibling() for h3 in questions]
    assert [answer.name for answer in answers] == ["p", "p"]
    assert [answer.get_text() for answer in answers] == ["X is Y.", "Because Z."]


def test_faq_keeps_questions_without_answers() -> None:
    soup = _soup(SectionRenderer().render(SectionTag.FAQ, ["What is X?", "Why use X?"]))
    assert len(soup.find_all("h3")) == 2
    assert soup.find_all("p") == []


def test_empty_faq_keeps_its_wrapper() -> None:
    soup = _soup(SectionRenderer().render(SectionTag.FAQ, ["", "  "]))
    block = soup.select_one("div.faq_blog")
    assert block is not None
    assert block.h2.get_text() == "Frequently Asked Questions"
    assert block.find("h3") is None


def test_formatted_inline_markup_is_not_escaped() -> None:
    html = SectionRenderer().render(SectionTag.KEY_TAKEAWAYS, ["<strong>Fast</strong> setup"])
    assert "&lt;strong&gt;" not in html
    assert _soup(html).select_one("ul.kta-list strong").get_text() == "Fast"


def test_faq_leading_answers_render_as_paragraphs() -> None:
    entries = group_faq(["Some context first.", "How does it work?", "Quietly."])
    assert entries[0].question is None
    assert entries[0].answers == ["Some context first."]
    assert entries[1].question == "How does it work?"
    assert entries[1].answers == ["Quietly."]


def test_is_question_accepts_question_words() -> None:
    assert is_question("How this works in practice")
    assert is_question("Really?")
    assert not is_question("How so")
    assert not is_question("Plain statement.")


def test_table_pads_short_rows() -> None:
    soup = _soup(SectionRenderer().render_table(["A|B|C", "1|2"]))
    assert soup.select_one("div.travel_table") is not None
    headers = soup.find_all("th")
    assert [th.get_text() for th in headers] == ["A", "B", "C"]
    assert headers[0]["style"] == "width: 33%;"
    cells = soup.find_all("td")
    assert [td.get_text() for td in cells] == ["1", "2", ""]


def test_table_skips_separator_rows_and_outer_pipes() -> None:
    table = parse_table(["| Name | Role |", "| --- | :---: |", "| Ada | Engineer |"])
    assert table is not None
    assert table.header == ["Name", "Role"]
    assert table.rows == [["Ada", "Engineer"]]
    assert table.delimiter == "pipe"


def test_table_delimiters() -> None:
    assert detect_delimiter("a\tb") == "tab"
    assert detect_delimiter("Name   Role") == "spaces"
    assert detect_delimiter("single cell") == "single"
    table = parse_table(["Name   Role", "Ada    Engineer"])
    assert table is not None
    assert table.rows == [["Ada", "Engineer"]]


def test_empty_table_renders_nothing() -> None:
    assert parse_table(["", "  "]) is None
    assert SectionRenderer().render(SectionTag.TABLE, []) == ""


def test_pros_cons_split_at_ceiling_midpoint() -> None:
    assert split_pros_cons(["a", "b", "c"]) == (["a", "b"], ["c"])
    soup = _soup(SectionRenderer().render(SectionTag.PROS_CONS, ["a", "b", "c", "d"]))
    assert soup.select_one("div.expense_track") is not None
    assert [li.get_text() for li in soup.select("ul.pros li")] == ["a", "b"]
    assert [li.get_text() for li in soup.select("ul.cons li")] == ["c", "d"]


def test_split_step_labels_and_fallbacks() -> None:
    assert split_step("Install: run the installer", 1) == Step("Install", "run the installer")
    assert split_step("Just do it", 2) == Step("Step 2", "Just do it")
    assert split_step("Prepare:", 3) == Step("Step 3", "Prepare")
    linked = 'Visit <a href="https://example.com">the site</a>'
    assert split_step(linked, 4) == Step("Step 4", linked)


def test_steps_render_as_listing() -> None:
    soup = _soup(SectionRenderer().render(SectionTag.STEPS, ["Plan: sketch it", "Build it"]))
    items = soup.select("ol.listing-bx > li")
    assert [li.h3.get_text() for li in items] == ["Plan", "Step 2"]
    assert [li.p.get_text() for li in items] == ["sketch it", "Build it"]


def test_comparison_rows() -> None:
    soup = _soup(
        SectionRenderer().render(
            SectionTag.COMPARISON,
            ["Speed | Fast | Slow", "| --- | --- | --- |", "Note only"],
        )
    )
    assert [th.get_text() for th in soup.find_all("th")] == ["Feature", "Option 1", "Option 2"]
    rows = soup.tbody.find_all("tr")
    assert [td.get_text() for td in rows[0].find_all("td")] == ["Speed", "Fast", "Slow"]
    assert rows[1].td["colspan"] == "3"
    assert rows[1].td.get_text() == "Note only"


def test_cta_uses_defaults_when_empty() -> None:
    soup = _soup(SectionRenderer().render(SectionTag.CTA, []))
    assert soup.select_one(".call_heading").get_text() == DEFAULT_CTA[SectionTag.CTA].heading
    assert soup.img["src"] == DEFAULT_CTA_IMAGE


def test_cta_fields_are_positional() -> None:
    soup = _soup(SectionRenderer().render(SectionTag.CTA1, ["Build faster", "We help."]))
    heading = soup.select_one("h3.call_heading")
    assert heading.get_text() == "Build faster"
    assert heading.find_next_sibling("p").get_text() == "We help."
    assert "Schedule Free Consultation" in soup.button.get_text()


def test_cta2_has_no_image() -> None:
    soup = _soup(SectionRenderer().render(SectionTag.CTA2, []))
    assert soup.select_one("div.callout_box") is not None
    assert soup.img is None


def test_cta_defaults_can_be_replaced() -> None:
    renderer = SectionRenderer(
        cta_defaults={SectionTag.CTA1: CtaDefaults("Talk to us", "Any time.", "Call", "")}
    )
    soup = _soup(renderer.render(SectionTag.CTA1, []))
    assert soup.select_one(".call_heading").get_text() == "Talk to us"
    assert soup.img is None


def test_toc_renders_nested_entries() -> None:
    outline = [Heading(2, "Intro", "intro"), Heading(3, "Details", "details")]
    soup = _soup(SectionRenderer().render(SectionTag.TOC, [], outline))
    index = soup.select_one("div.blog_index_cover ol.blog_index")
    assert index is not None
    assert index["style"] == "display: none;"
    items = soup.find_all("li")
    assert [li.a["href"] for li in items] == ["#intro", "#details"]
    assert items[0].get("class") is None
    assert items[1]["class"] == ["sub-heading"]


def test_toc_accepts_plain_titles() -> None:
    soup = _soup(SectionRenderer().render_toc(["Plain Entry"]))
    assert soup.a["href"] == "#plain-entry"


def test_empty_toc_renders_nothing() -> None:
    assert SectionRenderer().render_toc([]) == ""
    assert SectionRenderer().render(SectionTag.TOC, ["ignored"]) == ""


def test_ignore_renders_nothing() -> None:
    assert SectionRenderer().render(SectionTag.IGNORE, ["secret", "More secrets"]) == ""


def test_empty_key_takeaways_render_nothing() -> None:
    assert SectionRenderer().render(SectionTag.KEY_TAKEAWAYS, ["", "  "]) == ""


def test_key_takeaways_markup() -> None:
    soup = _soup(SectionRenderer().render(SectionTag.KEY_TAKEAWAYS, ["Fast", "Small"]))
    block = soup.select_one("ul.kta-list")
    assert block.p.get_text() == "Key Takeaways"
    assert [li.get_text() for li in block.find_all("li")] == ["Fast", "Small"]


def test_unknown_directive_renders_paragraph() -> None:
    assert SectionRenderer().render(None, ["first line", "second line"]) == (
        "<p>first line second line</p>"
    )


def test_lists_and_inline_markup_pass_through() -> None:
    renderer = SectionRenderer()
    ordered = _soup(renderer.render_list(ListKind.ORDERED, ["<strong>One</strong>"]))
    assert ordered.select_one("ol.listing-bx li strong").get_text() == "One"
    bullets = _soup(renderer.render(SectionTag.BULLET_LIST, ["a", "b"]))
    assert len(bullets.select("ul.bullet-new-box li")) == 2
    assert renderer.render_list(ListKind.UNORDERED, []) == ""
