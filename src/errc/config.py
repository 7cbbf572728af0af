"""Settings which affect how errc presents things (display, logging). Nothing in here
changes how errors propagate, and the default error policy is never taken from here:
that's always held by the ErrorValue itself."""

import configparser
import logging
import os

from errc.assets import getAssetAsFile

logger = logging.getLogger(__name__)

# create the config parser
data = configparser.ConfigParser()

# load the defaults.ini file first
data.read_file(getAssetAsFile('defaults.ini'))
# and then the site.cfg and user's .errc.ini file, overriding the defaults
data.read(['site.cfg', os.path.expanduser('~/.errc.ini')], encoding='utf_8')


def getSigFigs() -> int:
    """number of significant figures used by ErrorValue.__str__"""
    n = data.getint('display', 'sigfigs', fallback=6)
    if n < 1:
        logger.warning(f"display sigfigs must be at least 1, not {n}; using 1")
        n = 1
    return n


def getPlusMinus() -> str:
    """separator placed between value and error when rendering"""
    return data.get('display', 'plusminus', fallback='±').strip()


def getLogLevel() -> int:
    """level for the top-level errc logger, as a logging constant"""
    name = data.get('logging', 'level', fallback='WARNING').strip().upper()
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        logger.warning(f"unknown log level {name} in config, using WARNING")
        return logging.WARNING
    return level
