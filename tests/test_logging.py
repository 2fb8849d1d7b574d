import logging

from bazaar.utils.logging import get_logger


def test_messages_are_rendered_by_structlog(caplog):
    logger = get_logger("bazaar.tests")

    with caplog.at_level(logging.WARNING, logger="bazaar"):
        logger.warning("Zamowienie 5 bez powiadomienia")
        logger.info("nie powinno sie pojawic")

    assert len(caplog.records) == 1
    record = caplog.records[0]
    assert record.name == "bazaar.tests"
    assert "Zamowienie 5 bez powiadomienia" in record.getMessage()
    assert "warning" in record.getMessage()
    assert "bazaar.tests" in record.getMessage()


def test_handler_is_installed_once():
    get_logger("bazaar.a")
    handlers = list(logging.getLogger("bazaar").handlers)
    get_logger("bazaar.b")

    assert logging.getLogger("bazaar").handlers == handlers
