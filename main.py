"""
main.py
Entry point for Pocket Notes. Configures logging and crash diagnostics, opens
local storage, builds the NotesStore and shows the main window.
"""
import logging
import os
import sys
import warnings

import structlog
from PyQt5 import QtWidgets

from errors import PersistenceError
from local_storage import SqliteLocalStorage
from notes_store import NotesStore
from settings_manager import (
    get_last_group_id,
    get_min_group_name_length,
    get_settings_dir,
    get_storage_path,
    get_window_geometry,
    set_window_geometry,
)
from ui_main_window import PocketNotesWindow

logger = structlog.get_logger(__name__)


def configure_logging(level: int = logging.INFO):
    """Route structlog through the stdlib logging module with a console (or JSON) renderer."""
    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=level)
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer()
            if os.environ.get("LOG_FORMAT") == "json"
            else structlog.dev.ConsoleRenderer(),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def _install_global_excepthook(log_path: str):
    """Install a sys.excepthook that appends the traceback to crash.log and shows a critical dialog."""
    import traceback as _traceback

    def _handler(exctype, value, tb):
        msg = "".join(_traceback.format_exception(exctype, value, tb))
        try:
            with open(log_path, "a", encoding="utf-8") as _f:
                _f.write("\n=== Unhandled exception ===\n")
                _f.write(msg)
        except OSError:
            pass
        logger.error("unhandled_exception", error=str(value))
        if QtWidgets.QApplication.instance() is not None:
            QtWidgets.QMessageBox.critical(None, "Unexpected Error", msg)

    sys.excepthook = _handler


def _install_qt_message_handler(log_path: str):
    """Capture Qt warnings/errors into a log to aid diagnosing native problems."""
    from PyQt5.QtCore import QtMsgType, qInstallMessageHandler
    import datetime as _dt

    level_map = {
        QtMsgType.QtDebugMsg: "DEBUG",
        QtMsgType.QtInfoMsg: "INFO",
        QtMsgType.QtWarningMsg: "WARNING",
        QtMsgType.QtCriticalMsg: "CRITICAL",
        QtMsgType.QtFatalMsg: "FATAL",
    }

    def _qt_handler(msg_type, context, message):
        ts = _dt.datetime.now().strftime("%Y-%m-%d %H:%M:%S.%f")
        level = level_map.get(msg_type, str(msg_type))
        try:
            with open(log_path, "a", encoding="utf-8") as _f:
                _f.write(f"[{ts}] [Qt {level}] {message}\n")
                file = getattr(context, "file", None)
                func = getattr(context, "function", None)
                if file or func:
                    line = getattr(context, "line", None)
                    _f.write(f"    at {file or '?'}:{line or '?'} ({func or '?'})\n")
        except OSError:
            pass

    qInstallMessageHandler(_qt_handler)


def build_store() -> NotesStore:
    """Open local storage from settings and load the saved groups and notes."""
    storage = SqliteLocalStorage(get_storage_path())
    store = NotesStore(storage, min_name_length=get_min_group_name_length())
    last = get_last_group_id()
    if last is not None and store.get_group(last) is not None:
        store.select_group(last)
    return store


def main():
    # Suppress noisy SIP deprecation warning from PyQt5 about sipPyTypeDict
    warnings.filterwarnings("ignore", category=DeprecationWarning, message=".*sipPyTypeDict.*")
    configure_logging()
    settings_dir = get_settings_dir()
    _install_global_excepthook(os.path.join(settings_dir, "crash.log"))

    app = QtWidgets.QApplication(sys.argv)
    app.setApplicationName("Pocket Notes")
    _install_qt_message_handler(os.path.join(settings_dir, "qt.log"))

    try:
        store = build_store()
    except PersistenceError as exc:
        QtWidgets.QMessageBox.critical(None, "Pocket Notes", exc.message)
        return 1

    window = PocketNotesWindow(store)
    geom = get_window_geometry()
    if geom:
        window.setGeometry(int(geom["x"]), int(geom["y"]), int(geom["w"]), int(geom["h"]))

    def _save_geometry():
        g = window.geometry()
        set_window_geometry(g.x(), g.y(), g.width(), g.height())

    app.aboutToQuit.connect(_save_geometry)
    window.show()
    logger.info("app_started", storage=get_storage_path())
    return app.exec_()


if __name__ == "__main__":
    sys.exit(main())
