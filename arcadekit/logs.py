"""Console logging for hosts embedding the engines."""

import logging

_FORMAT = '%(asctime)s %(levelname)s %(name)s: %(message)s'


def setup_logging(level: int | str = logging.INFO) -> None:
    """
    Configure a console handler on the root logger.

    The engines only create module loggers; calling this is left to the application.

    Parameters
    ----------
    level : int or str, optional
        Logging level for the root logger (default is ``logging.INFO``).
    """
    logging.basicConfig(level=level, format=_FORMAT)
