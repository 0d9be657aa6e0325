################################################################################
# © Copyright 2024 Zapata Computing Inc.
################################################################################
"""
Unit tests for ``tzstamp._env`` and ``tzstamp._log``.
"""

import logging

import pytest

from tzstamp import InvalidArgumentError, Timestamp, TimeZone, _env, _log


@pytest.fixture
def package_logger():
    logger = logging.getLogger(_log.PACKAGE_LOGGER_NAME)
    handlers = list(logger.handlers)
    level = logger.level
    yield logger
    for handler in logger.handlers:
        if handler not in handlers:
            logger.removeHandler(handler)
    logger.setLevel(level)


class TestFlagSet:
    @staticmethod
    @pytest.mark.parametrize(
        "value,expected",
        [
            pytest.param("1", True, id="one"),
            pytest.param("true", True, id="true"),
            pytest.param("TRUE", True, id="upper"),
            pytest.param("0", False, id="zero"),
            pytest.param("yes", False, id="yes"),
            pytest.param("", False, id="empty"),
        ],
    )
    def test_values(monkeypatch, value: str, expected: bool):
        monkeypatch.setenv(_env.TZSTAMP_VERBOSE, value)
        assert _env.flag_set(_env.TZSTAMP_VERBOSE) is expected

    @staticmethod
    def test_unset(monkeypatch):
        monkeypatch.delenv(_env.TZSTAMP_VERBOSE, raising=False)
        assert _env.flag_set(_env.TZSTAMP_VERBOSE) is False


class TestMakeLogger:
    @staticmethod
    def test_silent_by_default(monkeypatch, package_logger):
        # Given
        monkeypatch.delenv(_env.TZSTAMP_VERBOSE, raising=False)
        before = list(package_logger.handlers)

        # When
        logger = _log.make_logger("tzstamp._example")

        # Then
        assert logger.name == "tzstamp._example"
        assert package_logger.handlers == before

    @staticmethod
    def test_verbose_attaches_one_handler(monkeypatch, package_logger):
        # Given
        monkeypatch.setenv(_env.TZSTAMP_VERBOSE, "1")
        for handler in list(package_logger.handlers):
            package_logger.removeHandler(handler)

        # When
        _log.make_logger("tzstamp._a")
        _log.make_logger("tzstamp._b")

        # Then
        assert len(package_logger.handlers) == 1
        assert package_logger.level == logging.DEBUG


class TestLoggable:
    @staticmethod
    def test_short_value():
        assert _log.loggable("abc") == "'abc'"

    @staticmethod
    def test_long_value_is_cut():
        text = _log.loggable("A" * 10_000)
        assert len(text) == _log.MAX_LOGGED_INPUT + 3
        assert text.endswith("...")


class TestDebugRecords:
    @staticmethod
    def test_rejected_timestamp(caplog):
        # Given
        caplog.set_level(logging.DEBUG, logger=_log.PACKAGE_LOGGER_NAME)

        # When
        with pytest.raises(InvalidArgumentError):
            _ = Timestamp.parse("B" * 10_000)

        # Then
        assert "Rejected timestamp text" in caplog.text
        assert "B" * 100 not in caplog.text

    @staticmethod
    def test_anonymous_zone(caplog):
        # Given
        caplog.set_level(logging.DEBUG, logger=_log.PACKAGE_LOGGER_NAME)

        # When
        _ = TimeZone.from_offset("+05:45")

        # Then
        assert "OFFSET +05:45" in caplog.text

    @staticmethod
    def test_nothing_above_debug(caplog):
        # Given
        caplog.set_level(logging.INFO, logger=_log.PACKAGE_LOGGER_NAME)

        # When
        with pytest.raises(InvalidArgumentError):
            _ = Timestamp.parse("garbage")

        # Then
        assert caplog.records == []
