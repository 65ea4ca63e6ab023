import logging
import os
import platform
import tempfile


def get_user_home():
    """A reasonable platform independent way to get the user home folder.
    If surfom runs under a system user then return the temp directory as returned
    by tempfile.gettempdir()
    """
    user_home = None
    if platform.system() == "Windows":
        user = os.getenv("USERNAME")
        if user is not None:
            user_home = os.path.expanduser("~")
    elif platform.system() == "Linux" or platform.system() == "Darwin":
        user = os.getenv("USER")
        if user is not None:
            user_home = os.path.expanduser("~")
    else:
        msg = "Platform not recognized, using system temp directory for surfom settings."
        logger = logging.getLogger("surfom")
        logger.warning(msg)

    if user_home is None:
        user_home = tempfile.gettempdir()

    return user_home
