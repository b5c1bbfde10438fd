import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from sqlalchemy.orm import Session

from ..database import get_db
from ..models import User
from ..security_utils import create_access_token, verify_password_bcrypt

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Auth"])


class LoginRequest(BaseModel):
    username: str
    password: str


class LoginResponse(BaseModel):
    token: str
    role: str
    user_id: int


@router.post("/login", response_model=LoginResponse)
async def login(data: LoginRequest, db: Session = Depends(get_db)):
    """Exchange username and password for a bearer token"""
    user = db.query(User).filter(User.username == data.username).first()
    if not user or not user.password_hash or not verify_password_bcrypt(data.password, user.password_hash):
        logger.warning(f"⚠️ Failed login attempt for {data.username}")
        raise HTTPException(status_code=401, detail="Invalid username or password")

    logger.info(f"✅ {user.username} logged in as {user.role}")
    return LoginResponse(token=create_access_token(user.id, user.role), role=user.role, user_id=user.id)
