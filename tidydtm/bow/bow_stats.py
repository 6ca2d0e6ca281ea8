"""
Common statistics from bag-of-words (BoW) matrices and tidy tables.

All matrix functions accept a :class:`~tidydtm.bow.dtm.DocumentTermMatrix`, a SciPy sparse matrix or a dense NumPy
array.
"""

import numpy as np
import pandas as pd
from scipy.sparse import issparse

from ..errors import SchemaError
from .dtm import DocumentTermMatrix, _colnames, _require_columns


def _as_matrix(dtm, nonempty=False):
    if isinstance(dtm, DocumentTermMatrix):
        dtm = dtm.matrix

    if isinstance(dtm, np.matrix):
        dtm = np.asarray(dtm)

    if dtm.ndim != 2:
        raise SchemaError('`dtm` must be a 2D array/matrix')

    if nonempty and 0 in dtm.shape:
        raise SchemaError('`dtm` must be a non-empty 2D array/matrix')

    return dtm


def _flat(res):
    if res.ndim != 1:
        return np.asarray(res).flatten()
    else:
        return res


def doc_lengths(dtm):
    """
    Return the length, i.e. number of terms for each document in document-term-matrix `dtm`.
    This corresponds to the row-wise sums in `dtm`.

    :param dtm: (sparse) document-term-matrix of size NxM (N docs, M is vocab size) with raw terms counts
    :return: NumPy array of size N (number of docs) with integers indicating the number of terms per document
    """
    return _flat(_as_matrix(dtm).sum(axis=1))


def doc_frequencies(dtm, min_val=1, proportions=False):
    """
    For each term in the vocab of `dtm` (i.e. its columns), return how often it occurs at least `min_val` times per
    document.

    :param dtm: (sparse) document-term-matrix of size NxM (N docs, M is vocab size) with raw term counts.
    :param min_val: threshold for counting occurrences
    :param proportions: If `proportions` is True, return proportions scaled to the number of documents instead of
                        absolute numbers.
    :return: NumPy array of size M (vocab size) indicating how often each term occurs at least `min_val` times.
    """
    dtm = _as_matrix(dtm)
    doc_freq = _flat((dtm >= min_val).sum(axis=0))

    if proportions:
        return doc_freq / dtm.shape[0]
    else:
        return doc_freq


def term_frequencies(dtm, proportions=False):
    """
    Return the number of occurrences of each term in the vocab across all documents in document-term-matrix `dtm`.
    This corresponds to the column-wise sums in `dtm`.

    :param dtm: (sparse) document-term-matrix of size NxM (N docs, M is vocab size) with raw term counts.
    :param proportions: If `proportions` is True, return proportions scaled to the number of terms in the whole `dtm`.
    :return: NumPy array of size M (vocab size)
    """
    unnorm = _flat(_as_matrix(dtm).sum(axis=0))

    if proportions:
        n = unnorm.sum()
        if n == 0:
            raise ValueError('`dtm` does not contain any terms (is all-zero)')
        return unnorm / n
    else:
        return unnorm


def tf_proportions(dtm):
    """
    Transform raw count document-term-matrix `dtm` to term frequency matrix with proportions, i.e. term counts
    normalized by document length. Documents of length 0 stay all-zero.

    :param dtm: (sparse) document-term-matrix of size NxM (N docs, M is vocab size) with raw term counts
    :return: (sparse) term frequency matrix of size NxM
    """
    dtm = _as_matrix(dtm)
    lengths = doc_lengths(dtm).astype(float)
    norm_factor = np.divide(1, lengths, out=np.zeros_like(lengths), where=lengths != 0)[:, None]   # shape: Nx1

    if issparse(dtm):
        return dtm.multiply(norm_factor).tocsr()
    else:
        return np.asarray(dtm * norm_factor)


def idf(dtm, smooth_log=1, smooth_df=1):
    """
    Calculate inverse document frequency (idf) vector from raw count document-term-matrix `dtm` with formula
    ``log(smooth_log + N / (smooth_df + df))``, where ``N`` is the number of documents and ``df`` is the document
    frequency. With ``smooth_log=0`` and ``smooth_df=0`` this is the unsmoothed ``log(N / df)``.

    :param dtm: (sparse) document-term-matrix of size NxM (N docs, M is vocab size) with raw term counts.
    :param smooth_log: smoothing constant inside log()
    :param smooth_df: smoothing constant to add to document frequency
    :return: NumPy array of size M (vocab size) with inverse document frequency for each term in the vocab
    """
    dtm = _as_matrix(dtm, nonempty=True)
    x = dtm.shape[0] / (smooth_df + doc_frequencies(dtm))

    if smooth_log == 1:      # log1p is faster than the equivalent log(1 + x)
        return np.log1p(x)
    else:
        return np.log(smooth_log + x)


def tfidf(dtm, tf_func=tf_proportions, **idf_opts):
    """
    Calculate tfidf (term frequency inverse document frequency) matrix ``tf * diag(idf)`` from raw count
    document-term-matrix `dtm`.

    :param dtm: (sparse) document-term-matrix of size NxM (N docs, M is vocab size) with raw term counts
    :param tf_func: function to calculate the term frequency matrix
    :param idf_opts: smoothing constants passed to :func:`idf`
    :return: (sparse) tfidf matrix of size NxM
    """
    dtm = _as_matrix(dtm, nonempty=True)
    idf_vec = idf(dtm, **idf_opts)
    tf_mat = tf_func(dtm)

    # use broadcasting instead of creating the large diagonal matrix diag(idf)
    if issparse(tf_mat):
        return tf_mat.multiply(idf_vec).tocsr()
    else:
        return tf_mat * idf_vec


def bind_tf_idf(data, doc_col=None, term_col=None, value_col=None):
    """
    Add term frequency, inverse document frequency and tf-idf columns to a tidy table `data` with one row per
    (document, term) pair. The term frequency is the value divided by the sum of values of the document, the inverse
    document frequency is ``log(N / df)`` with ``N`` being the number of distinct documents in `data` and ``df`` the
    number of documents in which the term occurs.

    :param data: tidy table with columns `doc_col`, `term_col`, `value_col`
    :param doc_col: name of the document column; if None use :data:`tidydtm.defaults.doc_col`
    :param term_col: name of the term column; if None use :data:`tidydtm.defaults.term_col`
    :param value_col: name of the value column; if None use :data:`tidydtm.defaults.value_col`
    :return: copy of `data` with additional columns ``tf``, ``idf`` and ``tf_idf``
    """
    doc_col, term_col, value_col = _colnames(doc_col, term_col, value_col)
    _require_columns(data, [doc_col, term_col, value_col])

    res = data.copy()
    if len(res) == 0:
        return res.assign(tf=pd.Series(dtype=float), idf=pd.Series(dtype=float), tf_idf=pd.Series(dtype=float))

    n_docs = res[doc_col].nunique()
    res['tf'] = res[value_col] / res.groupby(doc_col)[value_col].transform('sum')
    res['idf'] = np.log(n_docs / res.groupby(term_col)[doc_col].transform('nunique'))
    res['tf_idf'] = res['tf'] * res['idf']

    return res

