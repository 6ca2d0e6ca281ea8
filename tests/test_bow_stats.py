import math

import numpy as np
import pandas as pd
import pytest
from hypothesis import given, strategies as st
from scipy.sparse import coo_matrix, issparse

from tidydtm.bow import bow_stats
from tidydtm.bow.dtm import cast_dtm, cast_sparse
from tidydtm.errors import SchemaError

from ._testtools import strategy_dtm, strategy_dtm_small


DTM = np.array([
    [0, 2, 3, 0, 0],
    [1, 2, 0, 5, 0],
    [0, 1, 0, 3, 1],
])


def _as_type(dtm, matrix_type):
    if matrix_type == 'sparse':
        return coo_matrix(dtm)
    elif matrix_type == 'dtm':
        return cast_dtm([(i, j, v) for (i, j), v in np.ndenumerate(dtm)])
    else:
        return dtm


@given(dtm=strategy_dtm(), matrix_type=st.sampled_from(['dense', 'sparse']))
def test_doc_lengths(dtm, matrix_type):
    res = bow_stats.doc_lengths(_as_type(dtm, matrix_type))
    assert res.ndim == 1
    assert res.shape == (dtm.shape[0],)
    assert res.tolist() == [sum(row) for row in dtm]


@given(dtm=strategy_dtm(), matrix_type=st.sampled_from(['dense', 'sparse']))
def test_term_frequencies(dtm, matrix_type):
    res = bow_stats.term_frequencies(_as_type(dtm, matrix_type))
    assert res.ndim == 1
    assert res.shape == (dtm.shape[1],)
    assert res.tolist() == [sum(col) for col in dtm.T]

    if dtm.sum() == 0:
        with pytest.raises(ValueError):
            bow_stats.term_frequencies(dtm, proportions=True)
    else:
        prop = bow_stats.term_frequencies(_as_type(dtm, matrix_type), proportions=True)
        assert np.isclose(prop.sum(), 1.0)
        assert all(0 <= v <= 1 for v in prop)


@given(dtm=strategy_dtm_small(), matrix_type=st.sampled_from(['dense', 'sparse']), proportions=st.booleans())
def test_doc_frequencies(dtm, matrix_type, proportions):
    n_docs = dtm.shape[0]
    res = bow_stats.doc_frequencies(_as_type(dtm, matrix_type), proportions=proportions)
    assert isinstance(res, np.ndarray)
    assert res.shape == (dtm.shape[1],)
    if proportions:
        assert all(0 <= v <= 1 for v in res)
    else:
        assert all(0 <= v <= n_docs for v in res)


@pytest.mark.parametrize('matrix_type', ['dense', 'sparse', 'dtm'])
def test_stats_example(matrix_type):
    dtm = _as_type(DTM, matrix_type)
    assert bow_stats.doc_frequencies(dtm).tolist() == [1, 3, 1, 2, 1]
    assert bow_stats.doc_lengths(dtm).tolist() == [5, 8, 5]
    assert bow_stats.term_frequencies(dtm).tolist() == [1, 5, 3, 8, 1]


def test_stats_invalid_input():
    with pytest.raises(SchemaError):
        bow_stats.doc_lengths(np.array([1, 2, 3]))
    with pytest.raises(SchemaError):
        bow_stats.idf(np.zeros((0, 3)))
    with pytest.raises(SchemaError):
        bow_stats.tfidf(np.zeros((2, 0)))


@given(dtm=strategy_dtm_small(), matrix_type=st.sampled_from(['dense', 'sparse']))
def test_tf_proportions(dtm, matrix_type):
    res = bow_stats.tf_proportions(_as_type(dtm, matrix_type))
    assert res.shape == dtm.shape
    if issparse(res):
        res = res.toarray()

    for row, row_orig in zip(res, dtm):
        if row_orig.sum() == 0:
            assert np.all(row == 0)
        else:
            assert np.isclose(row.sum(), 1.0)


def test_idf_unsmoothed():
    res = bow_stats.idf(DTM, smooth_log=0, smooth_df=0)
    expected = [math.log(3 / df) for df in [1, 3, 1, 2, 1]]
    assert np.allclose(res, expected)


@given(dtm=strategy_dtm_small())
def test_tfidf_sparse_equals_dense(dtm):
    res_dense = bow_stats.tfidf(dtm)
    res_sparse = bow_stats.tfidf(coo_matrix(dtm))
    assert issparse(res_sparse)
    assert res_dense.shape == dtm.shape
    assert np.allclose(res_sparse.toarray(), res_dense)


def test_bind_tf_idf():
    tbl = pd.DataFrame({'doc': ['doc1', 'doc1', 'doc2'], 'term': ['cat', 'dog', 'cat'], 'value': [2, 1, 3]})
    res = bow_stats.bind_tf_idf(tbl)

    assert res.columns.tolist() == ['doc', 'term', 'value', 'tf', 'idf', 'tf_idf']
    assert np.allclose(res['tf'], [2/3, 1/3, 1.0])
    assert np.allclose(res['idf'], [0, math.log(2), 0])
    assert np.allclose(res['tf_idf'], [0, math.log(2) / 3, 0])
    assert tbl.columns.tolist() == ['doc', 'term', 'value']    # input not modified


def test_bind_tf_idf_matches_matrix_idf():
    tbl = pd.DataFrame({'doc': ['a', 'a', 'b', 'c', 'c'], 'term': ['x', 'y', 'x', 'y', 'z'], 'value': [1, 2, 3, 4, 5]})
    mat, _, vocab = cast_sparse(tbl)
    idf_vec = dict(zip(vocab, bow_stats.idf(mat, smooth_log=0, smooth_df=0)))

    res = bow_stats.bind_tf_idf(tbl)
    assert np.allclose(res['idf'], [idf_vec[t] for t in tbl['term']])


def test_bind_tf_idf_empty_and_invalid():
    res = bow_stats.bind_tf_idf(pd.DataFrame(columns=['doc', 'term', 'value']))
    assert len(res) == 0
    assert res.columns.tolist() == ['doc', 'term', 'value', 'tf', 'idf', 'tf_idf']

    with pytest.raises(SchemaError):
        bow_stats.bind_tf_idf(pd.DataFrame({'doc': ['a'], 'term': ['x']}))
