"""
Persistence for the ledger collections.

Each collection is stored whole, as one JSON array under its stable key.
A key that has never been saved falls back to its seed value.
"""

from typing import Iterable, Optional

from sqlalchemy.orm import Session

from sitebook.core.config import settings
from sitebook.core.logging_config import get_logger
from sitebook.db.models.store import StoredCollection
from sitebook.ledger.seed import initial_value
from sitebook.ledger.state import COLLECTION_KEYS, LedgerState, check_collection

logger = get_logger("services.store")


class LedgerStore:
    def __init__(self, db: Session, seed_demo: Optional[bool] = None):
        self.db = db
        self.seed_demo = settings.SEED_DEMO_DATA if seed_demo is None else seed_demo

    def load_raw(self, key: str) -> list:
        row = self.db.get(StoredCollection, check_collection(key))
        if row is None or row.data is None:
            return initial_value(key, self.seed_demo)
        return row.data

    def load(self) -> LedgerState:
        return LedgerState.model_validate({key: self.load_raw(key) for key in COLLECTION_KEYS})

    def save(self, state: LedgerState, keys: Iterable[str] = COLLECTION_KEYS) -> None:
        """Write the named collections of ``state`` in one transaction."""
        snapshot = state.snapshot()
        keys = list(keys)
        for key in keys:
            check_collection(key)
            row = self.db.get(StoredCollection, key)
            if row is None:
                self.db.add(StoredCollection(key=key, data=snapshot[key]))
            else:
                # Assign a new list so the JSON column is flagged dirty
                row.data = snapshot[key]
        self.db.commit()
        logger.info("Saved collections: %s", ", ".join(keys))
