import logging
import os
from jose import jwt, JWTError
from datetime import datetime, timedelta, timezone
from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from passlib.context import CryptContext
from .config import password_hash_rounds, token_expire_minutes

logger = logging.getLogger(__name__)

DEV_SECRET = 'devsecret'


def jwt_secret() -> str:
    # Prefer JWT_SECRET but support legacy JWT_SECRET_KEY for compatibility
    secret = os.getenv('JWT_SECRET') or os.getenv('JWT_SECRET_KEY')
    if not secret:
        logger.warning('JWT_SECRET is not set, signing tokens with the development secret')
        return DEV_SECRET
    return secret


SECRET = jwt_secret()
ALGORITHM = os.getenv('JWT_ALGORITHM', 'HS256')
ACCESS_TOKEN_EXPIRE_MINUTES = token_expire_minutes()

pwd_ctx = CryptContext(schemes=['bcrypt'], deprecated='auto', bcrypt__rounds=password_hash_rounds())

oauth2_scheme = OAuth2PasswordBearer(tokenUrl='api/users/login', auto_error=False)


def hash_password(password: str) -> str:
    return pwd_ctx.hash(password)


def verify_password(password: str, hashed: str) -> bool:
    try:
        return pwd_ctx.verify(password, hashed)
    except ValueError:
        # stored value is not a recognised hash
        return False


def create_access_token(data: dict, expires_delta: timedelta = None):
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode.update({'exp': expire})
    encoded = jwt.encode(to_encode, SECRET, algorithm=ALGORITHM)
    return encoded


def decode_token(token: str):
    try:
        payload = jwt.decode(token, SECRET, algorithms=[ALGORITHM])
        return payload
    except JWTError:
        return None


async def get_current_user(token: str = Depends(oauth2_scheme)) -> dict:
    """Resolve the bearer token into {'username': ...} or answer 401."""
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail='Could not validate credentials',
        headers={'WWW-Authenticate': 'Bearer'},
    )
    if not token:
        raise credentials_exception
    payload = decode_token(token)
    if not payload or not payload.get('sub'):
        raise credentials_exception
    return {'username': payload['sub']}
