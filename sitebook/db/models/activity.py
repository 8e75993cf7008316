from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from sitebook.db.base_class import Base

class ActivityLog(Base):
    __tablename__ = "activity_logs"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"))
    action = Column(String(50)) # CREATE, UPDATE, DELETE, MERGE, SAVE, IMPORT
    entity_type = Column(String(50)) # collection key, e.g. bills, kharchi
    entity_id = Column(String(100), nullable=True) # record id, when there is one
    details = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    user = relationship("User", backref="activities")
