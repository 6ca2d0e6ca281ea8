"""
Sentiment analysis on tidy tables: an immutable sentiment lexicon that maps terms to sentiment categories (e.g.
``"positive"`` / ``"negative"``) or to numeric sentiment scores, and functions to join such a lexicon with a tidy
table and summarize the result per document or per term.

A typical workflow starts with a tidy table obtained from a document-term matrix via
:func:`~tidydtm.bow.dtm.tidy_dtm`::

    lex = load_lexicon('bing.csv')
    sent = join_sentiment(tidy_dtm(dtm), lex)
    sentiment_by_doc(sent)      # net sentiment per document
    term_contributions(sent)    # terms that contribute most to the sentiment
"""

import logging
import os
from collections.abc import Mapping
from types import MappingProxyType
from typing import Optional, Union, Iterator, Sequence

import numpy as np
import pandas as pd

from . import defaults
from .errors import SchemaError, DuplicateKeyError
from .bow.dtm import _colnames, _require_columns


logger = logging.getLogger('tidydtm')

Sentiment = Union[str, int, float]


class Lexicon(Mapping):
    """
    Immutable mapping of terms to a sentiment, which is either a category string or a numeric score. A lexicon is
    either numeric (all sentiments are numbers) or categorical.

    Create a lexicon with :meth:`Lexicon.from_dict`, :meth:`Lexicon.from_dataframe` or :func:`load_lexicon`.
    """

    def __init__(self, entries: Mapping[str, Sentiment], name: Optional[str] = None):
        """
        Create a lexicon from a mapping `entries` of terms to sentiments.

        :param entries: mapping of terms to sentiment categories or scores
        :param name: optional lexicon name
        """
        entries = dict(entries)

        if any(t is None or pd.isna(t) for t in entries.keys()):
            raise SchemaError('lexicon terms must not be null')
        if any(s is None or (not isinstance(s, str) and pd.isna(s)) for s in entries.values()):
            raise SchemaError('lexicon sentiments must not be null')

        n_numeric = sum(isinstance(s, (int, float, np.number)) and not isinstance(s, bool) for s in entries.values())
        if 0 < n_numeric < len(entries):
            raise SchemaError('lexicon sentiments must be either all numeric or all categorical')

        self._entries = MappingProxyType(entries)
        self._numeric = len(entries) > 0 and n_numeric == len(entries)
        self.name = name

    @classmethod
    def from_dict(cls, entries: Mapping[str, Sentiment], name: Optional[str] = None) -> 'Lexicon':
        """
        Create a lexicon from a dict `entries` mapping terms to sentiment categories or scores.

        :param entries: mapping of terms to sentiments
        :param name: optional lexicon name
        :return: a :class:`Lexicon`
        """
        return cls(entries, name=name)

    @classmethod
    def from_dataframe(cls, df: pd.DataFrame, term_col: str = 'word', sentiment_col: Optional[str] = None,
                       name: Optional[str] = None) -> 'Lexicon':
        """
        Create a lexicon from a dataframe `df` with a term column `term_col` and a sentiment column `sentiment_col`.
        Exact duplicate rows are ignored, but a term that is assigned to different sentiments raises a
        :class:`~tidydtm.errors.DuplicateKeyError`.

        :param df: dataframe with lexicon entries
        :param term_col: name of the term column
        :param sentiment_col: name of the sentiment column; if None use :data:`tidydtm.defaults.sentiment_col`
        :param name: optional lexicon name
        :return: a :class:`Lexicon`
        """
        sentiment_col = sentiment_col or defaults.sentiment_col
        _require_columns(df, [term_col, sentiment_col])

        entries = df[[term_col, sentiment_col]].drop_duplicates()
        dupl = entries[term_col].duplicated(keep=False)
        if dupl.any():
            examples = entries.loc[dupl, term_col].unique()[:5].tolist()
            raise DuplicateKeyError(f'{dupl.sum()} lexicon entries assign different sentiments to the same term, '
                                    f'e.g. {examples}')

        return cls(dict(zip(entries[term_col].tolist(), entries[sentiment_col].tolist())), name=name)

    @property
    def numeric(self) -> bool:
        """True if all sentiments in this lexicon are numeric scores."""
        return self._numeric

    @property
    def categories(self) -> list:
        """Sorted list of sentiment categories; empty for a numeric lexicon."""
        if self._numeric:
            return []
        return sorted(set(self._entries.values()))

    def to_dataframe(self, term_col: str = 'word', sentiment_col: Optional[str] = None) -> pd.DataFrame:
        """
        Return the lexicon as dataframe with columns `term_col` and `sentiment_col`.

        :param term_col: name of the term column
        :param sentiment_col: name of the sentiment column; if None use :data:`tidydtm.defaults.sentiment_col`
        :return: dataframe with one row per term
        """
        sentiment_col = sentiment_col or defaults.sentiment_col
        return pd.DataFrame({term_col: pd.Series(list(self._entries.keys()), dtype=object),
                             sentiment_col: list(self._entries.values())})

    def __getitem__(self, term: str) -> Sentiment:
        return self._entries[term]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self):
        kind = 'numeric' if self._numeric else f'{len(self.categories)} categories'
        name = f' "{self.name}"' if self.name else ''
        return f'<Lexicon{name} [{len(self)} terms, {kind}]>'


def load_lexicon(path: str, term_col: str = 'word', sentiment_col: Optional[str] = None,
                 name: Optional[str] = None, **kwargs) -> Lexicon:
    """
    Load a sentiment lexicon from a CSV (``.csv``), tab-separated (``.tsv``, ``.txt``) or Excel (``.xlsx``) file at
    `path`. The file must contain a term column `term_col` and a sentiment column `sentiment_col`.

    :param path: path to the lexicon file
    :param term_col: name of the term column
    :param sentiment_col: name of the sentiment column; if None use :data:`tidydtm.defaults.sentiment_col`
    :param name: lexicon name; if None use the file name without extension
    :param kwargs: further arguments passed to :func:`pandas.read_csv` or :func:`pandas.read_excel`
    :return: a :class:`Lexicon`
    """
    basename, ext = os.path.splitext(os.path.basename(path))
    ext = ext.lower()

    logger.info(f'loading sentiment lexicon from "{path}"')

    if ext == '.csv':
        df = pd.read_csv(path, **kwargs)
    elif ext in {'.tsv', '.txt'}:
        kwargs.setdefault('sep', '\t')
        df = pd.read_csv(path, **kwargs)
    elif ext == '.xlsx':
        kwargs.setdefault('engine', 'openpyxl')
        df = pd.read_excel(path, **kwargs)
    else:
        raise ValueError(f'unsupported lexicon file extension "{ext}"; use .csv, .tsv, .txt or .xlsx')

    lex = Lexicon.from_dataframe(df, term_col=term_col, sentiment_col=sentiment_col, name=name or basename)
    logger.debug(f'loaded {lex}')

    return lex


def join_sentiment(data: pd.DataFrame, lexicon: Lexicon, term_col: Optional[str] = None,
                   sentiment_col: Optional[str] = None) -> pd.DataFrame:
    """
    Join tidy table `data` with sentiment lexicon `lexicon`. Only rows whose term is part of the lexicon are
    retained (inner join) and the order of the rows in `data` is kept.

    :param data: tidy table with a term column `term_col`
    :param lexicon: a :class:`Lexicon`
    :param term_col: name of the term column; if None use :data:`tidydtm.defaults.term_col`
    :param sentiment_col: name of the new sentiment column; if None use :data:`tidydtm.defaults.sentiment_col`
    :return: tidy table with additional sentiment column
    """
    term_col = term_col or defaults.term_col
    sentiment_col = sentiment_col or defaults.sentiment_col
    _require_columns(data, [term_col])

    if sentiment_col in data.columns:
        raise SchemaError(f'column "{sentiment_col}" already exists in `data`')

    lex_df = lexicon.to_dataframe(term_col=term_col, sentiment_col=sentiment_col)
    res = data.merge(lex_df, how='inner', on=term_col)
    logger.debug(f'{len(res)} of {len(data)} rows matched the sentiment lexicon')

    return res


def sentiment_by_doc(data: pd.DataFrame,
                     doc_col: Optional[str] = None,
                     value_col: Optional[str] = None,
                     sentiment_col: Optional[str] = None,
                     positive: Optional[Sequence[str]] = None,
                     negative: Optional[Sequence[str]] = None) -> pd.DataFrame:
    """
    Summarize sentiment per document of a tidy table `data` that was joined with a lexicon via
    :func:`join_sentiment`.

    For a categorical lexicon, the result contains one column per sentiment category with the summed values of the
    terms of that category, plus a column ``net`` with the sum of the `positive` categories minus the sum of the
    `negative` categories. For a numeric lexicon, the result contains a column ``score`` with the sum of
    ``value * sentiment`` per document.

    :param data: tidy table with columns `doc_col`, `value_col` and `sentiment_col`
    :param doc_col: name of the document column; if None use :data:`tidydtm.defaults.doc_col`
    :param value_col: name of the value column; if None use :data:`tidydtm.defaults.value_col`
    :param sentiment_col: name of the sentiment column; if None use :data:`tidydtm.defaults.sentiment_col`
    :param positive: categories that count as positive; if None use :data:`tidydtm.defaults.positive_labels`
    :param negative: categories that count as negative; if None use :data:`tidydtm.defaults.negative_labels`
    :return: dataframe with one row per document
    """
    doc_col, _, value_col = _colnames(doc_col, None, value_col)
    sentiment_col = sentiment_col or defaults.sentiment_col
    _require_columns(data, [doc_col, value_col, sentiment_col])

    if _is_numeric_sentiment(data[sentiment_col]):
        scores = (data[value_col] * data[sentiment_col]).groupby(data[doc_col]).sum()
        return scores.rename('score').rename_axis(doc_col).reset_index()

    res = data.pivot_table(index=doc_col, columns=sentiment_col, values=value_col, aggfunc='sum', fill_value=0)
    res.columns.name = None

    pos = [c for c in (positive or defaults.positive_labels) if c in res.columns]
    neg = [c for c in (negative or defaults.negative_labels) if c in res.columns]
    res['net'] = res[pos].sum(axis=1) - res[neg].sum(axis=1)

    return res.reset_index()


def term_contributions(data: pd.DataFrame,
                       term_col: Optional[str] = None,
                       value_col: Optional[str] = None,
                       sentiment_col: Optional[str] = None,
                       positive: Optional[Sequence[str]] = None,
                       negative: Optional[Sequence[str]] = None) -> pd.DataFrame:
    """
    Calculate how much each term contributes to the overall sentiment in a tidy table `data` that was joined with a
    lexicon via :func:`join_sentiment`.

    The contribution of a term is its summed value, signed by its sentiment: positive categories count positively,
    negative categories count negatively and other categories count as zero. For a numeric lexicon, the summed value
    is multiplied by the sentiment score. The result is sorted by absolute contribution in descending order.

    :param data: tidy table with columns `term_col`, `value_col` and `sentiment_col`
    :param term_col: name of the term column; if None use :data:`tidydtm.defaults.term_col`
    :param value_col: name of the value column; if None use :data:`tidydtm.defaults.value_col`
    :param sentiment_col: name of the sentiment column; if None use :data:`tidydtm.defaults.sentiment_col`
    :param positive: categories that count as positive; if None use :data:`tidydtm.defaults.positive_labels`
    :param negative: categories that count as negative; if None use :data:`tidydtm.defaults.negative_labels`
    :return: dataframe with columns `term_col`, `sentiment_col`, `value_col` and ``contribution``
    """
    _, term_col, value_col = _colnames(None, term_col, value_col)
    sentiment_col = sentiment_col or defaults.sentiment_col
    _require_columns(data, [term_col, value_col, sentiment_col])

    res = data.groupby([term_col, sentiment_col], sort=False)[value_col].sum().reset_index()

    if _is_numeric_sentiment(res[sentiment_col]):
        sign = res[sentiment_col]
    else:
        pos = set(positive or defaults.positive_labels)
        neg = set(negative or defaults.negative_labels)
        sign = res[sentiment_col].map(lambda s: 1 if s in pos else (-1 if s in neg else 0))

    res['contribution'] = res[value_col] * sign

    order = np.argsort(-res['contribution'].abs().to_numpy(), kind='stable')
    return res.iloc[order].reset_index(drop=True)


def _is_numeric_sentiment(sentiments: pd.Series) -> bool:
    return pd.api.types.is_numeric_dtype(sentiments) and not pd.api.types.is_bool_dtype(sentiments)
