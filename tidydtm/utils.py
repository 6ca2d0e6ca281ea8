"""
Misc. utility functions.
"""

import logging
from typing import Union, Optional, Sequence, Any

import numpy as np
import pandas as pd
from scipy.sparse import issparse

from .errors import SchemaError


#%% logging

_default_logging_hndlr: Optional[logging.Handler] = None  # default logging handler


def enable_logging(level: int = logging.INFO, fmt: str = '%(asctime)s:%(levelname)s:%(name)s:%(message)s',
                   logging_handler: Optional[logging.Handler] = None, add_logging_handler: bool = True,
                   **stream_hndlr_opts) -> None:
    """
    Enable logging for tidydtm package with minimum log level `level` and log message format `fmt`. By default, logs
    to stderr via ``logging.StreamHandler``. You may also pass your own log handler.

    .. seealso:: Only the logging levels INFO and DEBUG are used in tidydtm. See the
                 `Python Logging HOWTO guide <https://docs.python.org/3/howto/logging.html>`_ for more information
                 on log levels and formats.

    :param level: minimum log level; default is INFO level
    :param fmt: log message format
    :param logging_handler: pass custom logging handler to be used instead of the default stream handler
    :param add_logging_handler: if True, add the logging handler to the logger
    :param stream_hndlr_opts: optional additional parameters passed to ``logging.StreamHandler``
    """

    global _default_logging_hndlr

    logger = logging.getLogger('tidydtm')
    logger.setLevel(level)

    if logging_handler:
        _default_logging_hndlr = logging_handler
    else:
        _default_logging_hndlr = logging.StreamHandler(**stream_hndlr_opts)

    _default_logging_hndlr.setLevel(level)

    if fmt:
        _default_logging_hndlr.setFormatter(logging.Formatter(fmt))

    if add_logging_handler:
        logger.addHandler(_default_logging_hndlr)


def set_logging_level(level: int) -> None:
    """
    Set logging level for tidydtm package default logging handler.

    :param level: minimum log level
    """

    logger = logging.getLogger('tidydtm')
    logger.setLevel(level)

    if _default_logging_hndlr:
        _default_logging_hndlr.setLevel(level)


def disable_logging() -> None:
    """
    Disable logging for tidydtm package.
    """
    set_logging_level(logging.WARNING)  # reset to default level

    if _default_logging_hndlr:
        logger = logging.getLogger('tidydtm')
        logger.removeHandler(_default_logging_hndlr)


#%% NumPy array/matrices related helper functions


def empty_chararray() -> np.ndarray:
    """
    Create empty NumPy character array.

    :return: empty NumPy character array
    """
    return np.array([], dtype='<U1')


def as_label_array(x: Union[np.ndarray, Sequence, None], n: int, what: str) -> np.ndarray:
    """
    Turn a sequence of row or column labels `x` into a 1D NumPy array and check that it contains exactly `n`
    elements. If `x` is None, integer positions ``0, ..., n-1`` are used as labels.

    :param x: sequence of labels or None
    :param n: expected number of labels
    :param what: name of the labels used in the error message, e.g. ``"doc_labels"``
    :return: 1D NumPy array of labels
    """
    if x is None:
        return np.arange(n)

    if not isinstance(x, np.ndarray):
        # going through pandas keeps tuple labels as single elements of a 1D array
        x = pd.Series(list(x), dtype=object).to_numpy() if len(x) > 0 else empty_chararray()

    if x.ndim != 1:
        raise SchemaError(f'`{what}` must be one-dimensional')

    if len(x) != n:
        raise SchemaError(f'length of `{what}` ({len(x)}) does not match the matrix dimension ({n})')

    return x


def check_2d_matrix(mat: Any, what: str = 'dtm') -> None:
    """
    Raise a :class:`~tidydtm.errors.SchemaError` if `mat` is not a two-dimensional sparse matrix or array.

    :param mat: object to check
    :param what: name of the object used in the error message
    """
    if not (issparse(mat) or isinstance(mat, np.ndarray)):
        raise SchemaError(f'`{what}` must be a SciPy sparse matrix or a NumPy array')

    if mat.ndim != 2:
        raise SchemaError(f'`{what}` must be a 2D array/matrix')


#%% misc functions


def dict2df(data: dict, key_name: str = 'key', value_name: str = 'value', sort: Optional[str] = None) -> pd.DataFrame:
    """
    Take a simple dictionary that maps any key to any **scalar** value and convert it to a dataframe that contains
    two columns: one for the keys and one for the respective values. Optionally sort by column `sort`.

    :param data: dictionary that maps keys to **scalar** values
    :param key_name: column name for the keys
    :param value_name: column name for the values
    :param sort: optionally sort by this column; prepend by "-" to indicate descending sorting order, e.g. "-value"
    :return: a dataframe with two columns: one for the keys named `key_name` and one for the respective values named
             `value_name`
    """

    if key_name == value_name:
        raise ValueError('`key_name` and `value_name` must differ')

    df = pd.DataFrame({key_name: list(data.keys()), value_name: list(data.values())})
    if sort is not None:
        if sort.startswith('-'):
            asc = False
            sort = sort[1:]
        else:
            asc = True
        return df.sort_values(by=sort, ascending=asc, kind='stable', ignore_index=True)
    else:
        return df
