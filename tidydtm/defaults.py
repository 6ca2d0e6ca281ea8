"""
Module with default settings used throughout the conversion functions in :mod:`tidydtm.bow.dtm` and
:mod:`tidydtm.sentiment`. These are read each time a function is called, so they can be changed during runtime,
e.g.::

    import tidydtm

    tidydtm.defaults.term_col = 'word'
    tidydtm.defaults.duplicates = 'sum'
    # -> `cast_sparse` now expects a "word" column and sums up duplicate (doc, word) pairs
    tidydtm.bow.dtm.cast_sparse(tbl)
"""

doc_col = 'doc'
term_col = 'term'
value_col = 'value'

duplicates = 'error'   # "error" or "sum"
order = 'sorted'       # "sorted" or "first"

sentiment_col = 'sentiment'
positive_labels = ('positive', 'joy', 'trust')
negative_labels = ('negative', 'anger', 'disgust', 'fear', 'sadness')
