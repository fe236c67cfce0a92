"""
Data ingestion and normalization module.

Handles parsing of heterogeneous source payloads, normalization into canonical
date-keyed series, outer-join merging and date-range filtering.
"""
