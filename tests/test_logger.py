import io

from models.enums import LogCategory, LogLevel
from utils.logger import Logger, get_logger, configure_logger


def make_logger(level=LogLevel.DEBUG):
    stream = io.StringIO()
    return Logger(min_level=level, use_colors=False, stream=stream), stream


def test_message_with_detail_tree():
    logger, stream = make_logger()
    logger.warn(LogCategory.FILE, "Failed to save filter list", path="/tmp/f.txt", error="OTHER")

    lines = stream.getvalue().splitlines()
    assert len(lines) == 3
    assert lines[0].endswith("FILE      ⚠ Failed to save filter list")
    assert lines[1].strip() == "├─ path: /tmp/f.txt"
    assert lines[2].strip() == "└─ error: OTHER"


def test_level_filter():
    logger, stream = make_logger(LogLevel.WARN)
    logger.info(LogCategory.STATE, "hidden")
    logger.debug(LogCategory.STATE, "hidden")
    logger.error(LogCategory.STATE, "shown")

    assert stream.getvalue().count("\n") == 1
    assert "shown" in stream.getvalue()


def test_colors_can_be_disabled():
    logger, stream = make_logger()
    logger.info(LogCategory.API, "plain")
    assert "\033[" not in stream.getvalue()

    logger.use_colors = True
    logger.info(LogCategory.API, "colored")
    assert "\033[" in stream.getvalue()


def test_bound_logger_uses_category():
    logger, stream = make_logger()
    logger.for_category(LogCategory.CLOCK).info("tick")
    assert "CLOCK" in stream.getvalue()


def test_configure_updates_shared_instance():
    stream = io.StringIO()
    bound = get_logger().for_category(LogCategory.CONFIG)
    try:
        configure_logger(LogLevel.ERROR, use_colors=False, stream=stream)
        bound.warn("dropped")
        bound.error("kept")
    finally:
        configure_logger()

    assert stream.getvalue().splitlines()[0].endswith("CONFIG    ✗ kept")
