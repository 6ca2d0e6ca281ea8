"""
tidydtm – conversions between tidy text tables and sparse document-term matrices

tidydtm contributors
"""

import logging

__title__ = 'tidydtm'
__version__ = '0.1.0'
__author__ = 'tidydtm contributors'
__license__ = 'Apache License 2.0'

logger = logging.getLogger(__title__)
logger.addHandler(logging.NullHandler())
logger.setLevel(logging.WARNING)   # set default level


from . import bow, defaults, errors, sentiment, types, utils
