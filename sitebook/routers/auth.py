from fastapi import APIRouter, Depends, Form, status
from fastapi.responses import RedirectResponse
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session
from sitebook.db.models.user import User
from sitebook.core.security import verify_password, create_access_token
from sitebook.core.logging_config import get_logger
from sitebook.routers import deps

router = APIRouter(tags=["auth"])

logger = get_logger("auth")

def authenticate(db: Session, username: str, password: str):
    db_user = db.query(User).filter(User.username == username).first()
    if not db_user or not db_user.is_active or not verify_password(password, db_user.hashed_password):
        logger.warning("Failed login for %s", username)
        return None
    return db_user

def token_for(user: User) -> str:
    return create_access_token(data={"sub": user.username, "role": user.role})

@router.post("/auth/token")
async def issue_token(
    form: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(deps.get_db)
):
    db_user = authenticate(db, form.username, form.password)
    if db_user is None:
        raise deps.credentials_error("Incorrect username or password")
    return {"access_token": token_for(db_user), "token_type": "bearer"}

@router.post("/login")
async def login(
    user: str = Form(...),
    pass_: str = Form(..., alias="pass"), # the login form posts the password as 'pass'
    db: Session = Depends(deps.get_db)
):
    db_user = authenticate(db, user, pass_)
    if db_user is None:
        return RedirectResponse(url="/?error=invalid_credentials", status_code=status.HTTP_303_SEE_OTHER)

    response = RedirectResponse(url="/dashboard", status_code=status.HTTP_303_SEE_OTHER)
    response.set_cookie(key="access_token", value=f"Bearer {token_for(db_user)}", httponly=True)
    return response

@router.get("/logout")
async def logout():
    response = RedirectResponse(url="/", status_code=status.HTTP_303_SEE_OTHER)
    response.delete_cookie("access_token")
    return response
