"""
Opens DB-API connections from settings.
"""

import importlib
import logging

from ..utils.exceptions import ConnectionSetupError


logger = logging.getLogger(__name__)


def load_driver(name: str):
    """
    Import a DB-API 2.0 module by name (e.g. 'sqlite3', 'pymysql').

    Raises:
        ConnectionSetupError: If the module cannot be imported or is not a
            DB-API driver
    """
    try:
        module = importlib.import_module(name)
    except ImportError as e:
        raise ConnectionSetupError(name, str(e))

    if not callable(getattr(module, "connect", None)):
        raise ConnectionSetupError(name, "module has no connect() function")

    return module


def connect(settings):
    """
    Connect using settings.driver and settings.connect_args.

    Returns:
        Tuple of (connection, driver module)
    """
    module = load_driver(settings.driver)
    try:
        connection = module.connect(**settings.connect_args)
    except Exception as e:
        raise ConnectionSetupError(settings.driver, str(e))

    logger.info("Connected with %s.", settings.driver)
    return connection, module


def driver_error_type(module):
    """The driver's base exception class; Exception if it declares none."""
    return getattr(module, "Error", Exception)
