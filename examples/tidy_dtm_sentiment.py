"""
A minimal example showing conversions between tidy tables and sparse document-term matrices (DTMs) and a sentiment
analysis on the tidied DTM.
"""

import pandas as pd

from tidydtm.bow.dtm import count_terms, cast_dtm, tidy_dtm, term_totals
from tidydtm.bow.bow_stats import bind_tf_idf
from tidydtm.sentiment import Lexicon, join_sentiment, sentiment_by_doc, term_contributions


# already tokenized documents; tokenization is left to other packages
docs = {
    'speech1': 'we face great challenges but our nation is great and strong'.split(),
    'speech2': 'the crisis is bad and the loss is bad but hope is strong'.split(),
    'speech3': 'freedom and hope will win over fear'.split(),
}

meta = pd.DataFrame({'doc': ['speech1', 'speech2', 'speech3'], 'year': [1961, 2009, 1941]})

# count terms per document -> tidy table with one row per (document, term) pair
counts = count_terms(docs)
print(counts.head())

# cast to a sparse DTM with document metadata
dtm = cast_dtm(counts, doc_meta=meta)
print(dtm)

# ... and back to a tidy table, now with the metadata joined
tidied = tidy_dtm(dtm)
print(tidied.head())

print(term_totals(tidied).head())
# terms with the highest tf-idf
tfidf = bind_tf_idf(tidied[['doc', 'term', 'value']])
print(tfidf.sort_values('tf_idf', ascending=False, kind='stable').head(3)['term'].tolist())

# a sentiment lexicon would usually be loaded from a file via `load_lexicon`
lex = Lexicon.from_dict({'great': 'positive', 'strong': 'positive', 'hope': 'positive', 'freedom': 'positive',
                         'win': 'positive', 'bad': 'negative', 'crisis': 'negative', 'loss': 'negative',
                         'fear': 'negative', 'challenges': 'negative'}, name='example')

sent = join_sentiment(tidied, lex)
print(sentiment_by_doc(sent))
print(term_contributions(sent))
