from typing import Optional
from fastapi import Depends, HTTPException, status, Request
from jose import JWTError, jwt
from sqlalchemy.orm import Session
from sitebook.db.session import SessionLocal
from sitebook.core.config import settings
from sitebook.db.models.user import User
from sitebook.services.store import LedgerStore

WRITE_ROLES = ("admin", "staff")

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def get_store(db: Session = Depends(get_db)) -> LedgerStore:
    return LedgerStore(db)

def credentials_error(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )

def read_token(request: Request) -> Optional[str]:
    # Header for API clients, cookie for the browser session
    token = request.headers.get("Authorization") or request.cookies.get("access_token")
    if not token:
        return None
    token = token.strip().strip('"')
    if token.startswith("Bearer "):
        token = token.split(" ", 1)[1]
    return token

async def get_current_user(request: Request, db: Session = Depends(get_db)) -> User:
    token = read_token(request)
    if not token:
        raise credentials_error("Not authenticated")

    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
        username: str = payload.get("sub")
        if username is None:
            raise credentials_error("Invalid credential")
    except JWTError:
        raise credentials_error("Could not validate credentials")

    user = db.query(User).filter(User.username == username).first()
    if user is None or not user.is_active:
        raise credentials_error("User not found")

    return user

async def get_writer(user: User = Depends(get_current_user)) -> User:
    if user.role not in WRITE_ROLES:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not authorized")
    return user

async def get_admin(user: User = Depends(get_current_user)) -> User:
    if user.role != "admin":
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not authorized")
    return user
