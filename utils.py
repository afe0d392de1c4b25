import sys
import os
import logging

APP_DIR_NAME = "ClipboardHelper"
LOG_FILE_NAME = "clipboard_helper.log"
LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def get_app_dir():
    app_dir = os.path.join(os.path.expanduser("~"), APP_DIR_NAME)
    if not os.path.exists(app_dir):
        os.makedirs(app_dir)
    return app_dir


def get_icon_path(icon_name):
    if getattr(sys, 'frozen', False):
        return os.path.join(sys._MEIPASS, icon_name)
    else:
        return os.path.join(os.path.dirname(os.path.abspath(__file__)), icon_name)


def setup_logging(app_dir, level="INFO"):
    root = logging.getLogger()
    root.setLevel(getattr(logging, str(level).upper(), logging.INFO))
    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    # avoid stacking handlers when called twice
    for handler in list(root.handlers):
        if getattr(handler, "_clipboard_helper", False):
            root.removeHandler(handler)
            handler.close()

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)
    stream_handler._clipboard_helper = True
    root.addHandler(stream_handler)

    try:
        file_handler = logging.FileHandler(os.path.join(app_dir, LOG_FILE_NAME), encoding="utf-8")
    except OSError as e:
        root.warning("could not open log file in %s: %s", app_dir, e)
    else:
        file_handler.setFormatter(formatter)
        file_handler._clipboard_helper = True
        root.addHandler(file_handler)
    return root
