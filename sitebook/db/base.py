from sitebook.db.base_class import Base

# Import models here so create_all can find them
from sitebook.db.models.user import User
from sitebook.db.models.activity import ActivityLog
from sitebook.db.models.store import StoredCollection
