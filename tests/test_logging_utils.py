import logging
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from pgnrelay.utils import config_utils
from pgnrelay.utils.logging_utils import setup_logger


def test_setup_logger_console_and_file(tmp_path):
    logger = setup_logger("test_logger_a", level=logging.DEBUG, logs_dir=tmp_path)

    assert logger.level == logging.DEBUG
    kinds = {type(h) for h in logger.handlers}
    assert logging.StreamHandler in kinds
    assert logging.FileHandler in kinds

    logger.info("hello file")
    for h in logger.handlers:
        h.flush()
    files = list(tmp_path.glob("test_logger_a_*.log"))
    assert len(files) == 1
    assert "hello file" in files[0].read_text(encoding="utf-8")


def test_setup_logger_is_idempotent(tmp_path):
    setup_logger("test_logger_b", logs_dir=tmp_path)
    logger = setup_logger("test_logger_b", logs_dir=tmp_path)
    assert len(logger.handlers) == 2


def test_console_handler_writes_to_stderr(tmp_path):
    logger = setup_logger("test_logger_c", logs_dir=tmp_path)
    console = next(h for h in logger.handlers if type(h) is logging.StreamHandler)
    assert console.stream is sys.stderr


def test_env_log_dir(monkeypatch, tmp_path):
    target = tmp_path / "nested"
    monkeypatch.setenv("RELAY_LOG_DIR", str(target))

    setup_logger("test_logger_d")

    assert list(target.glob("test_logger_d_*.log"))


def test_unwritable_dir_falls_back_to_console(tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("x")

    logger = setup_logger("test_logger_e", logs_dir=blocker / "sub")

    assert [type(h) for h in logger.handlers] == [logging.StreamHandler]


def test_installed_layout_writes_no_log_files(monkeypatch, tmp_path):
    monkeypatch.delenv("RELAY_LOG_DIR", raising=False)
    monkeypatch.setattr(config_utils, "CHECKOUT_ROOT", None)
    monkeypatch.chdir(tmp_path)

    logger = setup_logger("test_logger_f")
    logger.info("console only")

    assert [type(h) for h in logger.handlers] == [logging.StreamHandler]
    assert list(tmp_path.iterdir()) == []


def test_checkout_layout_writes_under_checkout_logs(monkeypatch, tmp_path):
    monkeypatch.delenv("RELAY_LOG_DIR", raising=False)
    monkeypatch.setattr(config_utils, "CHECKOUT_ROOT", tmp_path)

    setup_logger("test_logger_g")

    assert list((tmp_path / "logs").glob("test_logger_g_*.log"))
