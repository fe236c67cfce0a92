"""
Utility functions module.

Calendar date helpers shared by the normalizer, the filters and the range
aligner.

Date Semantics:
- Canonical dates are ISO "YYYY-MM-DD" strings
- Lexicographic order of canonical dates equals chronological order
- Month-granularity dates are promoted to the first day of the month
"""
