"""
Table-oriented data store client with row-level security
"""
from app.store.client import StoreClient, StoreResult, TableQuery

__all__ = ["StoreClient", "StoreResult", "TableQuery"]
