"""Aggregation module for financial summaries.

- Reads transactions through the repository and reduces them to totals
- Forbidden: writes of any kind
"""
