"""Settings for surfom

Default values will be read from the file 'surfom/settings/default_settings.py'
User specific settings are read from '$HOME/.surfom/user_settings.py'. Any
settings defined in the user settings file will override the default settings

Setting must be defined as ALL-CAPS and can be accessed as attributes
from surfom.settings.settings

For example, to use the settings in a module under 'surfom':

    >>> from surfom.settings import settings
    >>> print(settings.LOG_LEVEL_CONSOLE)

Settings that are not ALL-CAPS will generate a warning. To avoid warnings
for everything that is not a setting (such as imported modules), prepend
and underscore to the name.
"""
import os

from ..init_utils import get_user_home as _get_user_home

# Location for the user's surfom folder, settings and log files
SURFOM_USER_HOME = os.path.join(_get_user_home(), ".surfom")

# Location for log files
LOG_DIR = os.path.join(SURFOM_USER_HOME, "logs")

# Name of log file
LOG_FILE_NAME = "surfom.log"

# Log levels: "CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"
# Level of log messages to the log file
LOG_LEVEL_FILE = "INFO"
# Level of log messages to the console
LOG_LEVEL_CONSOLE = "ERROR"


def log_config(log_dir, log_file_name, level_file, level_console):
    """Returns the logging configuration for `logging.config.dictConfig`."""
    return {
        "version": 1,
        "disable_existing_loggers": True,
        "formatters": {
            "standard": {
                "format": "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
            },
            "brief": {"format": "[%(levelname)s] - %(message)s"},
        },
        "handlers": {
            "console": {
                "level": level_console,
                "class": "logging.StreamHandler",
                "formatter": "brief",
            },
            "file": {
                "level": level_file,
                "class": "logging.handlers.RotatingFileHandler",
                "formatter": "standard",
                "filename": os.path.join(log_dir, log_file_name),
                "maxBytes": 1024**2,
                "backupCount": 7,
                "mode": "a",
                "encoding": "utf8",
            },
        },
        "root": {
            "handlers": ["console", "file"],
            "propagate": True,
            "level": "NOTSET",
        },
    }


# Log configuration, rebuilt by Settings from the final LOG_* values unless
# the user settings define LOG_CONFIG themselves
LOG_CONFIG = log_config(LOG_DIR, LOG_FILE_NAME, LOG_LEVEL_FILE, LOG_LEVEL_CONSOLE)
