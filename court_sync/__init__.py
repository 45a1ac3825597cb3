"""
Court Sync - Case Status Normalization Service
==============================================

Normalizes raw case-status payloads from district, high and supreme court
feeds into a canonical case record plus relational child collections, and
replaces those collections in the case store on every ingestion.

No provider calls, no credentials, no UI.
"""

__version__ = "1.0.0"
