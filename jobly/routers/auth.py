from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from jobly.database import get_db
from jobly.repositories.user import UserRepository
from jobly.routers.auth_deps import ensure_logged_in
from jobly.schemas.auth import LoginRequest, RegisterRequest, Token, TokenData, UserEnvelope
from jobly.services import auth as auth_service

router = APIRouter(
    prefix="/auth",
    tags=["auth"]
)

@router.post("/token", response_model=Token)
def login(login_data: LoginRequest, db: Session = Depends(get_db)):
    """Exchange {username, password} for a token."""
    user = UserRepository(db).authenticate(login_data.username, login_data.password)
    return {"token": auth_service.create_token(user)}

@router.post("/register", response_model=Token, status_code=status.HTTP_201_CREATED)
def register(register_data: RegisterRequest, db: Session = Depends(get_db)):
    """Create a (non-admin) user and return a token for it."""
    user = UserRepository(db).register(register_data.model_dump(by_alias=True))
    return {"token": auth_service.create_token(user)}

@router.get("/me", response_model=UserEnvelope)
def get_me(current_user: TokenData = Depends(ensure_logged_in), db: Session = Depends(get_db)):
    return {"user": UserRepository(db).get(current_user.username)}
