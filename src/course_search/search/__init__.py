"""
In-memory search package for the course catalog.

This package provides a pure-Python search stack:
- analyzers: Normalization, tokenization and Spanish stemming
- fuzzy: Levenshtein distance and typo-tolerant term matching
- inverted_index: Token -> document id postings
- facets: Category, duration and level classification with counts
- query_cache: Memoization of search results
- query_engine: Exact + fuzzy matching, filtering and ranking
- suggestions: Prefix typeahead with highlighted explanations
"""
