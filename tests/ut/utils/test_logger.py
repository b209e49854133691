"""日志配置测试"""

from __future__ import annotations

import io
import json
import logging

import pytest

from winebox.utils.logger import setup_logging


@pytest.fixture(autouse=True)
def _restore_logger():
    logger = logging.getLogger("winebox")
    level = logger.level
    yield
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
    logger.setLevel(level)


class TestSetupLogging:
    def test_cli_format(self) -> None:
        buf = io.StringIO()
        setup_logging("INFO", stream=buf)
        logging.getLogger("winebox.core.cache").info("缓存已更新")
        assert buf.getvalue() == "INFO: 缓存已更新\n"

    def test_level_filters(self) -> None:
        buf = io.StringIO()
        setup_logging("WARNING", stream=buf)
        logging.getLogger("winebox.core").info("hidden")
        assert buf.getvalue() == ""

    def test_json_output(self) -> None:
        buf = io.StringIO()
        setup_logging("INFO", json_output=True, stream=buf)
        logging.getLogger("winebox.core.prefix_registry").warning("前缀已存在，跳过: %s", "work")
        entry = json.loads(buf.getvalue())
        assert entry["level"] == "WARNING"
        assert entry["logger"] == "winebox.core.prefix_registry"
        assert entry["message"] == "前缀已存在，跳过: work"

    def test_repeated_setup_single_handler(self) -> None:
        setup_logging("INFO", stream=io.StringIO())
        setup_logging("DEBUG", stream=io.StringIO())
        assert len(logging.getLogger("winebox").handlers) == 1

    def test_unknown_level_falls_back_to_info(self) -> None:
        setup_logging("LOUD", stream=io.StringIO())
        assert logging.getLogger("winebox").level == logging.INFO
