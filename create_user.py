"""Create the first admin account: python create_user.py [username] [password]"""

import sys

from sitebook.core.security import get_password_hash
from sitebook.db.base import Base
from sitebook.db.models.user import User
from sitebook.db.session import SessionLocal, engine

def create_admin(username: str = "admin", password: str = "admin123"):
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        admin = db.query(User).filter(User.username == username).first()
        if admin:
            print(f"User {username} already exists.")
            return admin
        admin = User(
            username=username,
            hashed_password=get_password_hash(password),
            full_name="Admin User",
            role="admin"
        )
        db.add(admin)
        db.commit()
        print(f"Admin user {username} created.")
        return admin
    finally:
        db.close()

if __name__ == "__main__":
    create_admin(*sys.argv[1:3])
