"""
Bag-of-Words (BoW) sub-package with modules for converting between tidy tables and document-term-matrices (DTMs)
and some common statistics for the BoW model.
"""

from . import bow_stats, dtm
from .dtm import DocumentTermMatrix, cast_sparse, cast_dtm, tidy_dtm
