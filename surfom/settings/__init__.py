import importlib.util
import logging
import os

from . import default_settings


class Settings:
    """Holds the ALL-CAPS settings of `default_settings`, overridden by
    those of the user settings file when it exists.

    :param user_settings_file: path of the user settings file, defaults to
        `~/.surfom/user_settings.py`
    """

    def __init__(self, user_settings_file=None):
        for name in dir(default_settings):
            if name.isupper():
                setattr(self, name, getattr(default_settings, name))

        if user_settings_file is None:
            user_settings_file = os.path.join(self.SURFOM_USER_HOME, "user_settings.py")
        user_names = set()
        if os.path.exists(user_settings_file):
            user_names = self._load_user_settings(user_settings_file)

        if "LOG_CONFIG" not in user_names:
            self.LOG_CONFIG = default_settings.log_config(
                self.LOG_DIR, self.LOG_FILE_NAME, self.LOG_LEVEL_FILE, self.LOG_LEVEL_CONSOLE
            )

    def _load_user_settings(self, fname):
        """Sets the ALL-CAPS names of the user settings file and returns them."""
        spec = importlib.util.spec_from_file_location("surfom_user_settings", fname)
        user_settings = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(user_settings)

        logger = logging.getLogger(__name__)
        names = set()
        for name in dir(user_settings):
            if name.startswith("_"):
                continue
            if name.isupper():
                setattr(self, name, getattr(user_settings, name))
                names.add(name)
            else:
                logger.warning("Setting '%s' in %s is not ALL-CAPS, ignored." % (name, fname))
        return names

    def __str__(self):
        names = sorted(n for n in dir(self) if n.isupper())
        return "\n".join("%s: %r" % (n, getattr(self, n)) for n in names)


settings = Settings()
