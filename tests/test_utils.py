import logging
from datetime import date

import numpy as np
import pytest
from hypothesis import given, strategies as st
from scipy.sparse import csr_matrix

from tidydtm.errors import SchemaError, TidyDTMError, DuplicateKeyError, EmptyInputError
from tidydtm.utils import enable_logging, set_logging_level, disable_logging, empty_chararray, as_label_array, \
    check_2d_matrix, dict2df


@pytest.mark.parametrize('level, fmt', [
    (logging.DEBUG, '%(levelname)s:%(name)s:%(message)s'),
    (logging.INFO, '%(levelname)s:%(name)s:%(message)s'),
    (logging.WARNING, '%(levelname)s:%(name)s:%(message)s'),
    (logging.INFO, '<default>'),
])
def test_enable_disable_logging(caplog, level, fmt):
    pkg_logger = logging.getLogger('tidydtm')
    pkg_logger.setLevel(logging.WARNING)      # reset to default level

    pkg_logger.debug('test line debug 1')
    pkg_logger.info('test line info 1')
    assert caplog.text == ''

    # pytest caplog fixture uses an extra logging handler (which is already added to the logger)
    if fmt == '<default>':
        enable_logging(level, logging_handler=caplog.handler, add_logging_handler=False)
    else:
        enable_logging(level, fmt, logging_handler=caplog.handler, add_logging_handler=False)

    pkg_logger.debug('test line debug 2')
    if level == logging.DEBUG:
        assert caplog.text.endswith('DEBUG:tidydtm:test line debug 2\n')
    else:
        assert caplog.text == ''

    caplog.clear()

    pkg_logger.info('test line info 2')
    if level <= logging.INFO:
        assert caplog.text.endswith('INFO:tidydtm:test line info 2\n')
        if fmt == '<default>':
            assert caplog.text.startswith(date.today().isoformat())
    else:
        assert caplog.text == ''

    if level > logging.DEBUG:   # reduce logging level to DEBUG
        caplog.clear()
        set_logging_level(logging.DEBUG)
        pkg_logger.debug('test line debug 3')
        assert caplog.text.endswith('DEBUG:tidydtm:test line debug 3\n')

    caplog.clear()
    disable_logging()

    pkg_logger.debug('test line debug 4')
    pkg_logger.info('test line info 4')

    assert caplog.text == ''


def test_error_hierarchy():
    for exc in (SchemaError, DuplicateKeyError, EmptyInputError):
        assert issubclass(exc, TidyDTMError)
        assert issubclass(exc, ValueError)


def test_empty_chararray():
    res = empty_chararray()
    assert isinstance(res, np.ndarray)
    assert len(res) == 0
    assert res.ndim == 1
    assert np.issubdtype(res.dtype, np.str_)


@given(labels=st.lists(st.text(max_size=3)), n_offset=st.integers(-1, 1))
def test_as_label_array(labels, n_offset):
    n = len(labels) + n_offset
    if n < 0:
        return

    if n_offset != 0:
        with pytest.raises(SchemaError):
            as_label_array(labels, n, 'labels')
    else:
        res = as_label_array(labels, n, 'labels')
        assert isinstance(res, np.ndarray)
        assert res.ndim == 1
        assert res.tolist() == labels


def test_as_label_array_default_and_invalid():
    assert as_label_array(None, 3, 'labels').tolist() == [0, 1, 2]
    with pytest.raises(SchemaError):
        as_label_array(np.array([['a', 'b']]), 1, 'labels')


def test_check_2d_matrix():
    check_2d_matrix(np.zeros((2, 3)))
    check_2d_matrix(csr_matrix((2, 3)))

    with pytest.raises(SchemaError):
        check_2d_matrix(np.zeros(3))
    with pytest.raises(SchemaError):
        check_2d_matrix([[1, 2]])


@pytest.mark.parametrize('data, key_name, value_name, sort, expected', [
    ({}, 'key', 'value', None, []),
    ({'a': 1, 'b': 3, 'c': 2}, 'key', 'value', None, [('a', 1), ('b', 3), ('c', 2)]),
    ({'a': 1, 'b': 3, 'c': 2}, 'term', 'n', 'n', [('a', 1), ('c', 2), ('b', 3)]),
    ({'a': 1, 'b': 3, 'c': 2}, 'term', 'n', '-n', [('b', 3), ('c', 2), ('a', 1)]),
])
def test_dict2df(data, key_name, value_name, sort, expected):
    res = dict2df(data, key_name, value_name, sort=sort)
    assert res.columns.tolist() == [key_name, value_name]
    assert list(zip(res[key_name], res[value_name])) == expected

    with pytest.raises(ValueError):
        dict2df(data, 'x', 'x')
