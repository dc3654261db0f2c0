"""
Ranked full-text search over a dynamic document collection.

Two interchangeable backends:
- InMemoryBM25Index: in-process inverted index, Okapi BM25
- PersistedTfIdfIndex: Redis sorted sets, TF-IDF aggregated with ZUNIONSTORE
"""

__version__ = "0.1.0"
