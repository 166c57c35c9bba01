"""
Review store dependency.

Route handlers take ``store: ReviewStore = Depends(get_review_store)``; tests
override it with a store on an InMemoryKeyValueStore.
"""
from fastapi import Depends
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.services.kv_store import SqlKeyValueStore
from app.services.review_store import ReviewStore


def get_review_store(db: Session = Depends(get_db)) -> ReviewStore:
    return ReviewStore(SqlKeyValueStore(db))
