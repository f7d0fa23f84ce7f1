# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Logging utilities for the SparkPost client.

The library only creates named loggers. Handlers, levels and formats belong
to the application embedding the client and should be configured there via
``logging.basicConfig()`` or an equivalent.

Example:
    Typical usage in a module::

        from sparkpost_client.logger import get_logger

        logger = get_logger(__name__)
        logger.debug("Request built")
"""

import logging

ROOT_LOGGER_NAME = "sparkpost_client"


def get_logger(name: str = ROOT_LOGGER_NAME) -> logging.Logger:
    """Retrieve a logger in the client's namespace.

    Names that are not already inside the ``sparkpost_client`` hierarchy are
    nested under it so an application can tune the whole library through a
    single logger.

    Args:
        name: The logger name. Defaults to ``"sparkpost_client"``.

    Returns:
        A ``logging.Logger`` instance bound to the resolved name.

    Example:
        >>> get_logger("dispatch").name
        'sparkpost_client.dispatch'
    """
    if name != ROOT_LOGGER_NAME and not name.startswith(ROOT_LOGGER_NAME + "."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)
