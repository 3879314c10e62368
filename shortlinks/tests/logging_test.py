import logging

from shortlinks.core.logging_config import configure_logging


def test_configure_logging_returns_service_logger():
    logger = configure_logging("debug")
    assert logger.name == "shortlinks"
    assert logging.getLogger("uvicorn.access").disabled
    assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING


def test_configure_logging_defaults_to_settings_level():
    assert configure_logging().name == "shortlinks"
