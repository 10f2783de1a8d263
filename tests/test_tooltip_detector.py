from unittest.mock import Mock, call

import pytest
from selenium.common.exceptions import InvalidSelectorException, TimeoutException

from canvas_grid.errors import TooltipTimeout
from canvas_grid.lib.s2_interaction import TOOLTIP_HOVER
from canvas_grid.lib.s3_tooltip import DEFAULT_TOOLTIP_SELECTORS, TooltipDetector

from conftest import FakeElement


def _dom(page, mapping):
    """find_all renvoie les éléments déclarés par sélecteur ; sélecteur inconnu = aucun."""

    def find_all(selector):
        found = mapping.get(selector, [])
        if isinstance(found, Exception):
            raise found
        return found

    page.find_all.side_effect = find_all


def test_capture_first_visible_selector(page):
    _dom(page, {
        ".tooltip": [FakeElement(text="Bêta", html="<b>Bêta</b>")],
        ".hover-info": [FakeElement(text="ignoré")],
    })
    hover = Mock()

    capture = TooltipDetector(page, [".absent", ".tooltip", ".hover-info"]).hover_cell_and_capture_tooltip(
        hover, 2, 1, wait_time=0
    )

    hover.assert_called_once_with(2, 1, TOOLTIP_HOVER)
    assert capture.visible
    assert capture.selector == ".tooltip"
    assert capture.text == "Bêta"
    assert capture.html == "<b>Bêta</b>"
    assert capture.screenshot is None


def test_capture_only_checks_first_element(page):
    _dom(page, {".tooltip": [FakeElement(visible=False), FakeElement(text="second")]})

    capture = TooltipDetector(page, [".tooltip"]).hover_cell_and_capture_tooltip(Mock(), 0, 0, wait_time=0)

    assert not capture.visible
    assert capture.text is None


def test_capture_skips_failing_selector(page):
    _dom(page, {
        "[[bad": InvalidSelectorException("invalid selector"),
        ".tooltip": [FakeElement(text="ok")],
    })

    capture = TooltipDetector(page, ["[[bad", ".tooltip"]).hover_cell_and_capture_tooltip(Mock(), 0, 0, wait_time=0)

    assert capture.selector == ".tooltip"


def test_capture_screenshot_only_when_visible(page):
    page.screenshot_base64.return_value = "aGVsbG8="
    _dom(page, {".tooltip": [FakeElement(text="ok")]})
    detector = TooltipDetector(page, [".tooltip"])

    capture = detector.hover_cell_and_capture_tooltip(Mock(), 0, 0, wait_time=0, capture_screenshot=True)
    assert capture.screenshot == "aGVsbG8="

    _dom(page, {})
    page.screenshot_base64.reset_mock()
    missed = detector.hover_cell_and_capture_tooltip(Mock(), 0, 0, wait_time=0, capture_screenshot=True)
    assert not missed.visible
    page.screenshot_base64.assert_not_called()


def test_capture_selector_override(page):
    _dom(page, {".custom": [FakeElement(text="perso")]})
    capture = TooltipDetector(page).hover_cell_and_capture_tooltip(
        Mock(), 0, 0, wait_time=0, tooltip_selectors=[".custom"]
    )
    assert capture.text == "perso"


def test_wait_for_tooltip_splits_budget(page):
    element = FakeElement(text="trouvé", html="trouvé")
    page.wait_for_visible.side_effect = [TimeoutException(), element]

    observation = TooltipDetector(page, [".a", ".b"]).wait_for_tooltip(timeout=3.0)

    assert observation.selector == ".b"
    assert observation.text == "trouvé"
    assert page.wait_for_visible.call_args_list == [call(".a", 1.5), call(".b", 1.5)]


def test_wait_for_tooltip_timeout_names_selectors(page):
    page.wait_for_visible.side_effect = TimeoutException()

    with pytest.raises(TooltipTimeout) as exc:
        TooltipDetector(page, [".a", ".b"]).wait_for_tooltip(timeout=1.0)

    assert exc.value.selectors == [".a", ".b"]
    assert exc.value.timeout == 1.0
    assert str(exc.value) == "No tooltip found within 1s using selectors: .a, .b"


def test_visible_tooltips_keep_indices(page):
    _dom(page, {
        ".tooltip": [FakeElement(visible=False), FakeElement(text="un"), FakeElement(text="deux")],
        ".d3-tip": [FakeElement(text="trois")],
        ".hover-info": InvalidSelectorException("boom"),
    })

    tooltips = TooltipDetector(page, [".tooltip", ".hover-info", ".d3-tip"]).get_visible_tooltips()

    assert [(t.selector, t.index, t.text) for t in tooltips] == [
        (".tooltip", 1, "un"),
        (".tooltip", 2, "deux"),
        (".d3-tip", 0, "trois"),
    ]


def test_default_selectors():
    assert DEFAULT_TOOLTIP_SELECTORS[0] == '[role="tooltip"]'
    assert ".tooltip" in DEFAULT_TOOLTIP_SELECTORS
