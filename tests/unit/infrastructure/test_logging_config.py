"""Unit tests for setup_logging."""
from __future__ import annotations

import logging

import pytest

from thumbgen.infrastructure.logging_config import LOG_FORMAT, setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    level, handlers = root.level, list(root.handlers)
    yield root
    root.setLevel(level)
    root.handlers[:] = handlers


def test_setup_logging_installs_handler(restore_root_logger):
    before = len(restore_root_logger.handlers)

    setup_logging("debug")

    assert restore_root_logger.level == logging.DEBUG
    assert len(restore_root_logger.handlers) == before + 1
    assert restore_root_logger.handlers[-1].formatter._fmt == LOG_FORMAT


def test_unknown_level_falls_back_to_info(restore_root_logger):
    setup_logging("chatty")

    assert restore_root_logger.level == logging.INFO
