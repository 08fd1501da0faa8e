from __future__ import annotations

import logging

from rent_board.models.image_ref import to_data_url
from rent_board.utils import InlineImageFormatter, configure_logging


def test_formatter_elides_inline_images():
    url = to_data_url(b"x" * 300)
    record = logging.LogRecord("rent_board", logging.INFO, __file__, 1, "saving %s", (url,), None)

    text = InlineImageFormatter("%(message)s").format(record)

    assert "base64" not in text
    assert text.startswith("saving <inline image/jpeg, ")


def test_formatter_leaves_paths_alone():
    record = logging.LogRecord("rent_board", logging.INFO, __file__, 1, "saved %s", ("uploads/a.jpg",), None)
    assert InlineImageFormatter("%(message)s").format(record) == "saved uploads/a.jpg"


def test_configure_logging_installs_formatter():
    configure_logging("debug")
    logger = logging.getLogger("rent_board")
    assert logger.level == logging.DEBUG
    assert isinstance(logger.handlers[0].formatter, InlineImageFormatter)
