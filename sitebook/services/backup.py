"""Backup export and import of the whole ledger as one JSON document."""

import json
from datetime import date
from typing import Any, Optional, Union

from pydantic import ValidationError

from sitebook.core.logging_config import get_logger
from sitebook.ledger.state import COLLECTION_KEYS, LedgerState

logger = get_logger("services.backup")

BACKUP_PREFIX = "sn_enterprise_backup"


class InvalidBackup(Exception):
    pass


def backup_filename(on: Optional[date] = None) -> str:
    return f"{BACKUP_PREFIX}_{(on or date.today()).isoformat()}.json"


def export_backup(state: LedgerState) -> dict:
    """Snapshot holding exactly the ten collection keys."""
    snapshot = state.snapshot()
    return {key: snapshot[key] for key in COLLECTION_KEYS}


def parse_backup(payload: Union[bytes, str, dict]) -> dict:
    if isinstance(payload, (bytes, str)):
        try:
            payload = json.loads(payload)
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.warning("Rejected backup: not valid JSON")
            raise InvalidBackup("Failed to read backup file.") from e
    if not isinstance(payload, dict) or not isinstance(payload.get("projects"), list):
        logger.warning("Rejected backup: missing projects list")
        raise InvalidBackup("Invalid backup file format.")
    return payload


def import_backup(state: LedgerState, payload: Union[bytes, str, dict[str, Any]]) -> LedgerState:
    """State with every collection from the backup swapped in.

    All or nothing: any parse or validation error raises InvalidBackup and
    ``state`` is left as it was.
    """
    snapshot = parse_backup(payload)
    try:
        restored = state.restore(snapshot)
    except ValidationError as e:
        logger.warning("Rejected backup: %d invalid field(s)", e.error_count())
        raise InvalidBackup("Invalid backup file format.") from e
    logger.info("Backup restored: %s", ", ".join(k for k in COLLECTION_KEYS if k in snapshot))
    return restored
