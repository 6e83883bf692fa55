"""Behaviour tests for table-of-contents reconciliation using pytest-bdd.

The scenarios convert a draft whose hand-written contents list mirrors its
numbered headings. After conversion the ``blog_index_cover`` block must link
every h2-h4 heading in document order, each id must be unique, and running
the final cleanup again must not change the HTML.

Usage
-----
Run ``pytest tests/bdd/test_toc_reconciliation.py -v`` or filter with
``pytest -k toc`` to execute only these scenarios.
"""

from __future__ import annotations

import typing as typ
from pathlib import Path
from textwrap import dedent

import pytest
from bs4 import BeautifulSoup
from pytest_bdd import given, scenarios, then, when

from blogdoc.cleanup import finalize_html
from blogdoc.converter import ConversionResult, convert_text

FEATURE_FILE = Path(__file__).resolve().parents[2] / "features" / "toc_reconciliation.feature"
scenarios(FEATURE_FILE)

ScenarioState = dict[str, typ.Any]


@pytest.fixture
def scenario_state() -> ScenarioState:
    """Share mutable scenario data across pytest-bdd steps.

    Returns
    -------
    ScenarioState
        Mutable dictionary used to exchange state between steps.
    """
    return {}


@given("a draft with a table of contents and numbered headings")
def given_toc_draft(scenario_state: ScenarioState) -> None:
    """Store a draft with a contents list and three numbered headings.

    Parameters
    ----------
    scenario_state : ScenarioState
        Mutable dictionary receiving the draft under ``draft``.
    """
    scenario_state["draft"] = dedent(
        """
        TABLE OF CONTENTS
        1. Getting Started
        2. Advanced Usage

        1. Getting Started
        Some text about starting.
        1.1 Install The Tools
        Run the installer first.
        2. Advanced Usage
        More details follow here.
        """
    ).strip()


@when("I convert the draft")
def when_convert(scenario_state: ScenarioState) -> None:
    """Convert the stored draft.

    Parameters
    ----------
    scenario_state : ScenarioState
        Shared dictionary providing ``draft`` and receiving ``result``.
    """
    scenario_state["result"] = convert_text(typ.cast("str", scenario_state["draft"]))


@then("the table of contents links every heading in order")
def then_toc_complete(scenario_state: ScenarioState) -> None:
    """Verify the TOC anchors match the document headings one to one.

    Parameters
    ----------
    scenario_state : ScenarioState
        Shared dictionary holding the conversion result.
    """
    result = typ.cast("ConversionResult", scenario_state["result"])
    soup = BeautifulSoup(result.html, "html.parser")
    toc = soup.select_one("div.blog_index_cover")
    assert toc is not None
    links = [a["href"] for a in toc.find_all("a")]
    headings = [f"#{h['id']}" for h in soup.find_all(["h2", "h3", "h4"])]
    assert links == headings
    assert links == ["#getting-started", "#install-the-tools", "#advanced-usage"]
    assert [li.get("class") for li in toc.find_all("li")] == [None, ["sub-heading"], None]


@then("the heading ids are unique")
def then_ids_unique(scenario_state: ScenarioState) -> None:
    """Verify no two headings share an id.

    Parameters
    ----------
    scenario_state : ScenarioState
        Shared dictionary holding the conversion result.
    """
    result = typ.cast("ConversionResult", scenario_state["result"])
    ids = [heading.id for heading in result.document.outline]
    assert len(ids) == len(set(ids))


@then("finalising the HTML again changes nothing")
def then_idempotent(scenario_state: ScenarioState) -> None:
    """Verify the cleanup and reconciliation passes are idempotent.

    Parameters
    ----------
    scenario_state : ScenarioState
        Shared dictionary holding the conversion result.
    """
    result = typ.cast("ConversionResult", scenario_state["result"])
    assert finalize_html(result.html) == result.html
