from typing import Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from sitebook.core.logging_config import get_logger
from sitebook.db.models.activity import ActivityLog
from sitebook.db.models.user import User

logger = get_logger("activity")

def log_activity(
    db: Session,
    user: User,
    action: str,
    entity_type: str,
    entity_id: Optional[str] = None,
    details: Optional[str] = None
):
    """
    Records a ledger write in the audit log.

    :param db: Database session
    :param user: The User object performing the action
    :param action: CREATE, UPDATE, DELETE, MERGE, SAVE or IMPORT
    :param entity_type: Collection key (e.g. bills, kharchi)
    :param entity_id: ID of the record, when the write targets one
    :param details: Optional free text
    """
    logger.info("%s %s %s by %s", action, entity_type, entity_id or "-", user.username)
    try:
        activity = ActivityLog(
            user_id=user.id,
            action=action,
            entity_type=entity_type,
            entity_id=entity_id,
            details=details,
        )
        db.add(activity)
        db.commit()
    except SQLAlchemyError:
        # The ledger write itself is already committed here
        logger.error("Error logging activity", exc_info=True)
        db.rollback()
