#!filepath: tests/observability/test_logger.py
import pytest
from loguru import logger

from tl_assistant import init_logging, logs
from tl_assistant.config.log_config import LogConfig


def test_catch_logs_and_reraises(captured_logs):
    @logs.catch("boom")
    def explode():
        raise KeyError("x")

    with pytest.raises(KeyError):
        explode()

    assert any("explode: boom" in line for line in captured_logs)


def test_catch_passes_result_through():
    @logs.catch()
    def add(a, b):
        return a + b

    assert add(2, 3) == 5


def test_init_logging_writes_file_sink(tmp_path):
    init_logging(LogConfig(dir=str(tmp_path), level="INFO"))
    try:
        logs.info("[Test] hello file")
    finally:
        logger.remove()

    files = list(tmp_path.glob("*.log"))
    assert files
    assert "[Test] hello file" in files[0].read_text(encoding="utf-8")
