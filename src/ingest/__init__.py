"""Source ingestion for shelter data sets.

This module reads raw CSV exports and wrangles them into adapter rows.
It prepares canonical field tuples for the reconcile layer.
"""
