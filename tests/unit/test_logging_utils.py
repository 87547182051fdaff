import logging

from bhashaantar.logging_utils import setup_logging


def test_setup_logging_writes_to_file(tmp_path):
    log_file = tmp_path / "service.log"
    root = logging.getLogger()
    before = list(root.handlers)

    logger = setup_logging(level="INFO", log_file=str(log_file))
    try:
        logging.getLogger("bhashaantar.test").warning("pipeline.submit.failed")
        for handler in root.handlers:
            handler.flush()
    finally:
        for handler in root.handlers:
            if handler not in before:
                root.removeHandler(handler)
                handler.close()

    assert logger.name == "bhashaantar"
    assert "pipeline.submit.failed" in log_file.read_text(encoding="utf-8")
