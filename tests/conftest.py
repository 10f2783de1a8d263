import io
from unittest.mock import Mock

import pytest
from PIL import Image

from canvas_grid.lib.s0_browser.page import PageDriver
from canvas_grid.lib.s0_coordinates import BoundingBox


class FakeElement:
    """Élément DOM minimal pour les doubles de PageDriver."""

    def __init__(self, visible=True, text=None, html=None):
        self.visible = visible
        self.text = text
        self.html = html


def png_bytes(size, color):
    buffer = io.BytesIO()
    Image.new("RGBA", size, color).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def box():
    return BoundingBox(x=10, y=10, width=200, height=150)


@pytest.fixture
def canvas_element():
    return FakeElement()


@pytest.fixture
def page(box, canvas_element):
    page = Mock(spec=PageDriver)
    page.resolve.return_value = canvas_element
    page.bounding_box.return_value = box
    page.is_visible.side_effect = lambda element: element.visible
    page.text_content.side_effect = lambda element: element.text
    page.inner_html.side_effect = lambda element: element.html
    return page
