import logging

from sitebook.core.logging_config import configure_logging, get_logger


def test_loggers_are_namespaced():
    assert get_logger("services.ai").name == "sitebook.services.ai"
    assert get_logger("sitebook.auth").name == "sitebook.auth"


def test_configure_twice_keeps_one_handler():
    logger = configure_logging("debug")
    configure_logging("info")
    assert len(logger.handlers) == 1
    assert logger.level == logging.INFO
