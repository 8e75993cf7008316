from sqlalchemy import Column, String, DateTime, JSON
from sqlalchemy.sql import func
from sitebook.db.base_class import Base

class StoredCollection(Base):
    """One row per ledger collection; ``data`` holds the whole JSON array."""
    __tablename__ = "stored_collections"

    key = Column(String(50), primary_key=True)
    data = Column(JSON, nullable=False, default=list)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
