"""
Functions for converting between tidy tables with one row per (document, term) pair and sparse document-term
matrices (DTMs), plus some compatibility functions for Gensim.

A tidy table (or *triplet table*) is a pandas DataFrame with a document column, a term column and a value column
(by default named ``"doc"``, ``"term"`` and ``"value"``, see :mod:`tidydtm.defaults`). A DTM is a SciPy sparse
matrix whose rows correspond to document labels and whose columns correspond to the vocabulary.
"""

import logging
from collections import Counter
from dataclasses import dataclass
from typing import Optional, Union, Tuple, List, Any, Sequence, Mapping

import numpy as np
import pandas as pd
from scipy.sparse import coo_matrix, csr_matrix, csc_matrix, issparse, spmatrix

from .. import defaults
from ..errors import SchemaError, DuplicateKeyError, EmptyInputError
from ..types import StrOrInt, TripletSource
from ..utils import as_label_array, check_2d_matrix, dict2df


logger = logging.getLogger('tidydtm')

MATRIX_FORMATS = ('csr', 'csc', 'coo')


#%% DTM value type


@dataclass(frozen=True, eq=False)
class DocumentTermMatrix:
    """
    Immutable sparse document-term matrix together with its row labels `doc_labels`, its column labels `vocab` and
    optional per-document metadata `doc_meta`, which is a dataframe indexed by document label.

    Instances are usually created with :func:`cast_dtm`. The label arrays are set to read-only. Metadata may also be
    passed in any form accepted by :func:`cast_dtm` and is aligned with `doc_labels`.
    """
    matrix: spmatrix
    doc_labels: np.ndarray
    vocab: np.ndarray
    doc_meta: Optional[pd.DataFrame] = None

    def __post_init__(self):
        check_2d_matrix(self.matrix, 'matrix')
        n_docs, n_vocab = self.matrix.shape
        object.__setattr__(self, 'doc_labels', _readonly(as_label_array(self.doc_labels, n_docs, 'doc_labels')))
        object.__setattr__(self, 'vocab', _readonly(as_label_array(self.vocab, n_vocab, 'vocab')))
        if self.doc_meta is not None:
            doc_meta = _normalize_doc_meta(self.doc_meta, defaults.doc_col)
            object.__setattr__(self, 'doc_meta', doc_meta.reindex(_label_index(self.doc_labels)))

    @property
    def shape(self) -> Tuple[int, int]:
        return self.matrix.shape

    @property
    def nnz(self) -> int:
        """Number of non-zero entries in the matrix."""
        if issparse(self.matrix):
            return self.matrix.count_nonzero()
        else:
            return int(np.count_nonzero(self.matrix))

    def to_dataframe(self) -> pd.DataFrame:
        """Return the matrix as wide dataframe with sparse columns; see :func:`dtm_to_dataframe`."""
        return dtm_to_dataframe(self.matrix, self.doc_labels, self.vocab)

    def tidy(self, **kwargs) -> pd.DataFrame:
        """Return the matrix as tidy table; see :func:`tidy_dtm`."""
        return tidy_dtm(self, **kwargs)

    def __repr__(self):
        meta = '' if self.doc_meta is None else f', {self.doc_meta.shape[1]} metadata fields'
        fmt = self.matrix.format if issparse(self.matrix) else 'dense'
        return f'<DocumentTermMatrix [{self.shape[0]} documents / {self.shape[1]} terms, ' \
               f'{self.nnz} non-zero entries, {fmt}{meta}]>'


#%% tidy table -> DTM


def cast_sparse(data: TripletSource,
                doc_col: Optional[str] = None,
                term_col: Optional[str] = None,
                value_col: Optional[str] = None,
                duplicates: Optional[str] = None,
                order: Optional[str] = None,
                fmt: str = 'csr',
                dtype: Optional[Union[str, np.dtype]] = None,
                allow_empty: bool = True) -> Tuple[spmatrix, List[StrOrInt], List[str]]:
    """
    Cast a tidy table `data` with one row per (document, term) pair into a sparse document-term matrix. Returns a
    3-tuple with the matrix, the document labels that correspond to the matrix rows and the vocabulary that
    corresponds to the matrix columns.

    The row and column labels are exactly the distinct documents and terms in `data`. With ``order="sorted"``, they
    are sorted in ascending order; with ``order="first"`` they are ordered by their first occurrence in `data`.
    Records with a value of 0 are not stored in the matrix, however their document and term still make up a row
    and a column.

    The matrix is constructed directly from the coordinates of the records, i.e. memory usage is proportional to the
    number of records and no dense intermediate matrix is created.

    :param data: either a dataframe with columns `doc_col`, `term_col` and `value_col` or an iterable of
                 ``(doc, term, value)`` 3-tuples or of mappings with the keys `doc_col`, `term_col` and `value_col`
    :param doc_col: name of the document column; if None use :data:`tidydtm.defaults.doc_col`
    :param term_col: name of the term column; if None use :data:`tidydtm.defaults.term_col`
    :param value_col: name of the value column; if None use :data:`tidydtm.defaults.value_col`
    :param duplicates: policy for duplicate (document, term) pairs: ``"error"`` raises a
                       :class:`~tidydtm.errors.DuplicateKeyError`, ``"sum"`` adds up their values; if None use
                       :data:`tidydtm.defaults.duplicates`
    :param order: row and column ordering, either ``"sorted"`` or ``"first"``; if None use
                  :data:`tidydtm.defaults.order`
    :param fmt: sparse matrix format of the result: ``"csr"`` (default), ``"csc"`` or ``"coo"``
    :param dtype: data type of the resulting matrix; if None use the data type of the values
    :param allow_empty: if False, raise an :class:`~tidydtm.errors.EmptyInputError` when `data` contains no records
    :return: tuple with (sparse DTM of shape ``(n_docs, n_terms)``, document labels, vocabulary)
    """
    doc_col, term_col, value_col = _colnames(doc_col, term_col, value_col)
    duplicates = duplicates or defaults.duplicates
    order = order or defaults.order

    if duplicates not in {'error', 'sum'}:
        raise ValueError('`duplicates` must be either "error" or "sum"')
    if order not in {'sorted', 'first'}:
        raise ValueError('`order` must be either "sorted" or "first"')
    if fmt not in MATRIX_FORMATS:
        raise ValueError(f'`fmt` must be one of {MATRIX_FORMATS}')

    docs, terms, values = _triplet_arrays(data, doc_col, term_col, value_col)
    n_records = len(values)

    if n_records == 0:
        if not allow_empty:
            raise EmptyInputError('`data` does not contain any records')
        logger.debug('empty input; returning empty DTM')
        mat = csr_matrix((0, 0), dtype=values.dtype if dtype is None else dtype).asformat(fmt)
        return mat, [], []

    row_ind, doc_labels = _factorize(docs, order, doc_col)
    col_ind, vocab = _factorize(terms, order, term_col)
    n_docs = len(doc_labels)
    n_vocab = len(vocab)

    logger.info(f'casting {n_records} records to sparse DTM with {n_docs} documents and vocab size {n_vocab}')

    if duplicates == 'error':
        _check_duplicates(row_ind, col_ind, doc_labels, vocab, n_vocab)

    nonzero = values != 0
    mat = coo_matrix((values[nonzero], (row_ind[nonzero], col_ind[nonzero])), shape=(n_docs, n_vocab),
                     dtype=values.dtype if dtype is None else dtype)

    # converting to CSR sums up duplicate coordinates; sums may be zero so remove these
    mat = mat.tocsr()
    mat.eliminate_zeros()
    logger.debug(f'generated sparse DTM with {mat.nnz} non-zero entries')

    return mat.asformat(fmt), doc_labels.tolist(), vocab.tolist()


def cast_dtm(data: TripletSource,
             doc_meta: Optional[Union[pd.DataFrame, Mapping[StrOrInt, Mapping[str, Any]]]] = None,
             **kwargs) -> DocumentTermMatrix:
    """
    Cast a tidy table `data` into a :class:`DocumentTermMatrix`, optionally attaching document metadata `doc_meta`.
    See :func:`cast_sparse` for the casting rules and additional parameters passed as `kwargs`.

    The metadata table is aligned with the document labels of the matrix: documents without metadata get null
    values, metadata for documents that don't appear in `data` is dropped.

    :param data: tidy table; see :func:`cast_sparse`
    :param doc_meta: optional document metadata as dataframe that is either indexed by document label or contains a
                     document column `doc_col`, or as dict mapping document labels to dicts of metadata fields
    :param kwargs: further arguments passed to :func:`cast_sparse`
    :return: a :class:`DocumentTermMatrix`
    """
    mat, doc_labels, vocab = cast_sparse(data, **kwargs)

    if doc_meta is not None:
        doc_meta = _normalize_doc_meta(doc_meta, kwargs.get('doc_col') or defaults.doc_col)

    return DocumentTermMatrix(mat, doc_labels, vocab, doc_meta)


#%% DTM -> tidy table


def tidy_dtm(dtm: Union[DocumentTermMatrix, spmatrix, np.ndarray],
             doc_labels: Optional[Sequence[StrOrInt]] = None,
             vocab: Optional[Sequence[str]] = None,
             doc_meta: Optional[Union[pd.DataFrame, Mapping[StrOrInt, Mapping[str, Any]]]] = None,
             doc_col: Optional[str] = None,
             term_col: Optional[str] = None,
             value_col: Optional[str] = None) -> pd.DataFrame:
    """
    Convert a document-term matrix `dtm` into a tidy table with one row per non-zero matrix entry. Zero entries
    (including explicitly stored zeros in sparse matrices) are never part of the result, hence the number of rows in
    the result always equals the number of non-zero entries in `dtm`.

    The rows of the result are ordered by matrix row, then by matrix column.

    If `doc_meta` is given, the metadata fields are joined to the result by document label. Documents without
    metadata get null values for these fields.

    :param dtm: a :class:`DocumentTermMatrix`, a SciPy sparse matrix or a dense 2D NumPy array
    :param doc_labels: labels for the matrix rows; if None, use the labels of a :class:`DocumentTermMatrix` or
                       integer row positions otherwise
    :param vocab: labels for the matrix columns; if None, use the vocabulary of a :class:`DocumentTermMatrix` or
                  integer column positions otherwise
    :param doc_meta: optional document metadata; see :func:`cast_dtm`; if None and `dtm` is a
                     :class:`DocumentTermMatrix`, its metadata is used
    :param doc_col: name of the document column; if None use :data:`tidydtm.defaults.doc_col`
    :param term_col: name of the term column; if None use :data:`tidydtm.defaults.term_col`
    :param value_col: name of the value column; if None use :data:`tidydtm.defaults.value_col`
    :return: dataframe with columns `doc_col`, `term_col`, `value_col` and optional metadata columns
    """
    doc_col, term_col, value_col = _colnames(doc_col, term_col, value_col)

    if isinstance(dtm, DocumentTermMatrix):
        if doc_labels is None:
            doc_labels = dtm.doc_labels
        if vocab is None:
            vocab = dtm.vocab
        if doc_meta is None:
            doc_meta = dtm.doc_meta
        mat = dtm.matrix
    else:
        mat = dtm

    if isinstance(mat, np.matrix):
        mat = np.asarray(mat)

    check_2d_matrix(mat)
    n_docs, n_vocab = mat.shape
    doc_labels = as_label_array(doc_labels, n_docs, 'doc_labels')
    vocab = as_label_array(vocab, n_vocab, 'vocab')

    if issparse(mat):
        # work on a copy in canonical CSR format: no duplicate coordinates, no explicit zeros, sorted indices
        mat = mat.tocsr(copy=True)
        mat.sum_duplicates()
        mat.eliminate_zeros()
        mat = mat.tocoo()
        rows, cols, values = mat.row, mat.col, mat.data
    else:
        rows, cols = np.nonzero(mat)
        values = mat[rows, cols]

    logger.info(f'converting DTM of shape {mat.shape} to tidy table with {len(values)} rows')

    res = pd.DataFrame({
        doc_col: doc_labels[rows],
        term_col: vocab[cols],
        value_col: values
    })

    if doc_meta is not None:
        doc_meta = _normalize_doc_meta(doc_meta, doc_col)
        clashes = set(doc_meta.columns) & {doc_col, term_col, value_col}
        if clashes:
            raise SchemaError(f'metadata columns clash with the tidy table columns: {sorted(clashes)}')
        logger.debug(f'joining {doc_meta.shape[1]} metadata fields')
        res = res.join(doc_meta, on=doc_col)

    return res


#%% other tidy helpers


def count_terms(docs: Mapping[StrOrInt, Sequence[str]],
                doc_col: Optional[str] = None,
                term_col: Optional[str] = None,
                value_col: Optional[str] = None,
                order: Optional[str] = None) -> pd.DataFrame:
    """
    Count the terms in already tokenized documents `docs` and return the counts as tidy table with one row per
    (document, term) pair. Documents without any tokens don't produce any rows.

    :param docs: dict mapping document labels to sequences of tokens
    :param doc_col: name of the document column; if None use :data:`tidydtm.defaults.doc_col`
    :param term_col: name of the term column; if None use :data:`tidydtm.defaults.term_col`
    :param value_col: name of the count column; if None use :data:`tidydtm.defaults.value_col`
    :param order: if ``"sorted"``, rows are sorted by document and term; if ``"first"``, rows appear in order of
                  the documents in `docs` and of the first occurrence of each term in a document; if None use
                  :data:`tidydtm.defaults.order`
    :return: dataframe with columns `doc_col`, `term_col`, `value_col`
    """
    doc_col, term_col, value_col = _colnames(doc_col, term_col, value_col)
    order = order or defaults.order

    if order not in {'sorted', 'first'}:
        raise ValueError('`order` must be either "sorted" or "first"')

    doc_labels = []
    terms = []
    counts = []
    for lbl, tok in docs.items():
        if lbl is None:
            raise SchemaError('document labels must not be None')
        tok_counts = Counter(tok)
        if None in tok_counts:
            raise SchemaError(f'document "{lbl}" contains a None token')
        doc_labels.extend([lbl] * len(tok_counts))
        terms.extend(tok_counts.keys())
        counts.extend(tok_counts.values())

    res = pd.DataFrame({
        doc_col: pd.Series(doc_labels, dtype=object),
        term_col: pd.Series(terms, dtype=object),
        value_col: pd.Series(counts, dtype='int64')
    })

    if order == 'sorted' and len(res) > 0:
        res = res.sort_values([doc_col, term_col], kind='stable', ignore_index=True)

    logger.debug(f'counted {len(res)} (document, term) pairs in {len(docs)} documents')

    return res


def term_totals(data: pd.DataFrame, term_col: Optional[str] = None, value_col: Optional[str] = None) -> pd.DataFrame:
    """
    Sum up the values per term in tidy table `data` and return a dataframe with one row per term, sorted by the
    total in descending order.

    :param data: tidy table with columns `term_col` and `value_col`
    :param term_col: name of the term column; if None use :data:`tidydtm.defaults.term_col`
    :param value_col: name of the value column; if None use :data:`tidydtm.defaults.value_col`
    :return: dataframe with columns `term_col` and `value_col`
    """
    _, term_col, value_col = _colnames(None, term_col, value_col)
    _require_columns(data, [term_col, value_col])

    totals = data.groupby(term_col, sort=False)[value_col].sum()
    return dict2df(totals.to_dict(), key_name=term_col, value_name=value_col, sort='-' + value_col)


def dtm_to_dataframe(dtm: Union[spmatrix, np.ndarray], doc_labels: Sequence[StrOrInt], vocab: Sequence[str]) \
        -> pd.DataFrame:
    """
    Convert a (sparse) DTM to a wide pandas DataFrame using document labels `doc_labels` as row index and `vocab` as
    column names. A sparse DTM results in a dataframe with sparse columns, so the data is not densified.

    :param dtm: (sparse) document-term-matrix of size NxM (N docs, M is vocab size)
    :param doc_labels: document labels used as row index (row names); size must equal number of rows in `dtm`
    :param vocab: list or array of vocabulary used as column names; size must equal number of columns in `dtm`
    :return: pandas DataFrame
    """
    check_2d_matrix(dtm)
    doc_labels = as_label_array(doc_labels, dtm.shape[0], 'doc_labels')
    vocab = as_label_array(vocab, dtm.shape[1], 'vocab')

    if issparse(dtm):
        return pd.DataFrame.sparse.from_spmatrix(dtm, index=doc_labels, columns=vocab)
    else:
        return pd.DataFrame(dtm, index=doc_labels, columns=vocab)


#%% Gensim compatibility functions


def dtm_to_gensim_corpus(dtm: Union[DocumentTermMatrix, spmatrix, np.ndarray]):
    """
    Convert a (sparse) DTM to a Gensim Corpus object.

    .. seealso:: :func:`~tidydtm.bow.dtm.gensim_corpus_to_dtm` for the reverse function or
                 :func:`~tidydtm.bow.dtm.dtm_and_vocab_to_gensim_corpus_and_dict` which additionally creates a Gensim
                 :class:`~gensim.corpora.dictionary.Dictionary`.

    :param dtm: a :class:`DocumentTermMatrix`, a sparse matrix or a dense 2D NumPy array
    :return: a Gensim :class:`gensim.matutils.Sparse2Corpus` object
    """
    import gensim

    if isinstance(dtm, DocumentTermMatrix):
        dtm = dtm.matrix

    check_2d_matrix(dtm)

    # Gensim expects terms x documents in CSC format
    dtm_t = dtm.transpose()

    if issparse(dtm_t):
        dtm_sparse = dtm_t.tocsc()
    else:
        dtm_sparse = csc_matrix(dtm_t)

    return gensim.matutils.Sparse2Corpus(dtm_sparse)


def gensim_corpus_to_dtm(corpus, n_vocab: Optional[int] = None, fmt: str = 'csr') -> spmatrix:
    """
    Convert a Gensim corpus object to a sparse DTM.

    .. seealso:: :func:`~tidydtm.bow.dtm.dtm_to_gensim_corpus` for the reverse function.

    :param corpus: Gensim corpus object
    :param n_vocab: optional number of terms; if None, the number of columns is determined from the largest term ID
    :param fmt: sparse matrix format of the result: ``"csr"`` (default), ``"csc"`` or ``"coo"``
    :return: sparse DTM
    """
    import gensim

    if fmt not in MATRIX_FORMATS:
        raise ValueError(f'`fmt` must be one of {MATRIX_FORMATS}')

    dtm_t = gensim.matutils.corpus2csc(corpus, num_terms=n_vocab)
    return dtm_t.transpose().asformat(fmt)


def dtm_and_vocab_to_gensim_corpus_and_dict(dtm: Union[DocumentTermMatrix, spmatrix, np.ndarray],
                                            vocab: Optional[Sequence[str]] = None,
                                            as_gensim_dictionary: bool = True):
    """
    Convert a (sparse) DTM *and* a vocabulary list to a Gensim Corpus object and
    Gensim :class:`~gensim.corpora.dictionary.Dictionary` object or a Python :func:`dict`.

    :param dtm: a :class:`DocumentTermMatrix`, a sparse matrix or a dense 2D NumPy array
    :param vocab: list or array of vocabulary; may be omitted if `dtm` is a :class:`DocumentTermMatrix`
    :param as_gensim_dictionary: if True create Gensim :class:`~gensim.corpora.dictionary.Dictionary` from `vocab`,
                                 else create Python :func:`dict`
    :return: a 2-tuple with (Corpus object, Gensim :class:`~gensim.corpora.dictionary.Dictionary` or
             Python :func:`dict`)
    """
    if isinstance(dtm, DocumentTermMatrix) and vocab is None:
        vocab = dtm.vocab

    if vocab is None:
        raise ValueError('`vocab` must be given if `dtm` is not a DocumentTermMatrix')

    corpus = dtm_to_gensim_corpus(dtm)

    # vocabulary array has to be converted to dict with index -> word mapping
    id2word = dict(zip(range(len(vocab)), vocab))

    if as_gensim_dictionary:
        import gensim
        return corpus, gensim.corpora.dictionary.Dictionary.from_corpus(corpus, id2word)
    else:
        return corpus, id2word


#%% helper functions


def _colnames(doc_col: Optional[str], term_col: Optional[str], value_col: Optional[str]) -> Tuple[str, str, str]:
    cols = (doc_col or defaults.doc_col, term_col or defaults.term_col, value_col or defaults.value_col)
    if len(set(cols)) != 3:
        raise ValueError('document, term and value column names must be distinct')
    return cols


def _require_columns(df: pd.DataFrame, cols: Sequence[str]) -> None:
    missing = [c for c in cols if c not in df.columns]
    if missing:
        raise SchemaError(f'required columns missing from table: {missing}')


def _triplet_arrays(data: TripletSource, doc_col: str, term_col: str, value_col: str) \
        -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Extract document, term and value arrays from a dataframe or an iterable of records and validate them.
    """
    if isinstance(data, pd.DataFrame):
        _require_columns(data, [doc_col, term_col, value_col])
        docs = data[doc_col].to_numpy(dtype=object)
        terms = data[term_col].to_numpy(dtype=object)
        values = data[value_col]
    else:
        docs = []
        terms = []
        values = []
        for i, rec in enumerate(data):
            if isinstance(rec, Mapping):
                try:
                    d, t, v = rec[doc_col], rec[term_col], rec[value_col]
                except KeyError as exc:
                    raise SchemaError(f'record {i} is missing field {exc}') from exc
            else:
                try:
                    d, t, v = rec
                except (TypeError, ValueError) as exc:
                    raise SchemaError(f'record {i} is not a (doc, term, value) triplet: {rec!r}') from exc
            docs.append(d)
            terms.append(t)
            values.append(v)

        # going through pandas prevents NumPy from creating nested arrays from tuple labels
        docs = pd.Series(docs, dtype=object).to_numpy()
        terms = pd.Series(terms, dtype=object).to_numpy()
        values = pd.Series(values) if values else pd.Series([], dtype='int64')

    if pd.isna(docs).any():
        raise SchemaError(f'column "{doc_col}" must not contain null values')
    if pd.isna(terms).any():
        raise SchemaError(f'column "{term_col}" must not contain null values')

    values = _numeric_values(values, value_col)

    return docs, terms, values


def _numeric_values(values: pd.Series, value_col: str) -> np.ndarray:
    if len(values) == 0 and not pd.api.types.is_numeric_dtype(values):
        return np.array([], dtype='int64')

    if values.isna().any():
        raise SchemaError(f'column "{value_col}" must not contain null values')

    if not pd.api.types.is_numeric_dtype(values):
        if values.map(lambda v: isinstance(v, (str, bytes))).any():
            raise SchemaError(f'column "{value_col}" must contain numeric values')
        try:
            values = pd.to_numeric(values)
        except (TypeError, ValueError) as exc:
            raise SchemaError(f'column "{value_col}" must contain numeric values') from exc

    if pd.api.types.is_bool_dtype(values):
        values = values.astype('int64')
    elif pd.api.types.is_extension_array_dtype(values):
        values = values.astype(getattr(values.dtype, 'numpy_dtype', 'float64'))

    if pd.api.types.is_complex_dtype(values):
        raise SchemaError(f'column "{value_col}" must contain real numbers')

    return values.to_numpy()


def _factorize(labels: np.ndarray, order: str, what: str) -> Tuple[np.ndarray, np.ndarray]:
    """Return integer codes for `labels` and the unique labels either sorted or in order of first occurrence."""
    try:
        codes, uniques = pd.factorize(labels, sort=order == 'sorted')
    except TypeError as exc:
        raise SchemaError(f'labels in column "{what}" cannot be sorted; make sure they are of the same type '
                          f'or use order="first"') from exc

    return codes, np.asarray(uniques, dtype=object)


def _check_duplicates(row_ind: np.ndarray, col_ind: np.ndarray, doc_labels: np.ndarray, vocab: np.ndarray,
                      n_vocab: int) -> None:
    keys = row_ind.astype(np.int64) * n_vocab + col_ind
    dupl = pd.Series(keys).duplicated().to_numpy()
    if dupl.any():
        dupl_ind = np.flatnonzero(dupl)
        examples = [(doc_labels[row_ind[i]], vocab[col_ind[i]]) for i in dupl_ind[:5]]
        raise DuplicateKeyError(f'{len(dupl_ind)} duplicate (document, term) pairs found, e.g. {examples}; '
                                f'use duplicates="sum" to aggregate them')


def _normalize_doc_meta(doc_meta: Union[pd.DataFrame, Mapping[StrOrInt, Mapping[str, Any]]], doc_col: str) \
        -> pd.DataFrame:
    """Turn document metadata into a dataframe indexed by document label."""
    if isinstance(doc_meta, pd.DataFrame):
        if doc_col in doc_meta.columns:
            doc_meta = doc_meta.set_index(doc_col)
    elif isinstance(doc_meta, Mapping):
        doc_meta = pd.DataFrame(list(doc_meta.values()), index=_label_index(doc_meta.keys()))
    else:
        raise SchemaError('`doc_meta` must be a dataframe or a dict mapping document labels to metadata dicts')

    if doc_meta.index.has_duplicates:
        raise DuplicateKeyError('`doc_meta` contains duplicate document labels')

    return doc_meta.rename_axis(None)


def _readonly(arr: np.ndarray) -> np.ndarray:
    arr = arr.copy()
    arr.setflags(write=False)
    return arr


def _label_index(labels: Sequence[StrOrInt]) -> pd.Index:
    """Flat index of `labels`; tuple labels are not turned into a MultiIndex."""
    return pd.Index(list(labels), dtype=object, tupleize_cols=False)
