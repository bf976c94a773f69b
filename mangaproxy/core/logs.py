import logging
import sys

from mangaproxy.core.config import LOG_LEVEL

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = LOG_LEVEL):
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stdout)
