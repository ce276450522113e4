from datetime import datetime, timedelta, timezone
from typing import Optional, Dict, Tuple
import uuid

from fastapi import APIRouter, HTTPException, Depends
from fastapi.security import OAuth2PasswordRequestForm, OAuth2PasswordBearer
from jose import JWTError, jwt
from passlib.context import CryptContext
from pydantic import BaseModel
import logging

from ..settings import settings

router = APIRouter(prefix="/auth", tags=["auth"])

logger = logging.getLogger(__name__)
logging.getLogger('passlib').setLevel(logging.ERROR)
pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/token")



class Token(BaseModel):
	access_token: str
	token_type: str = "bearer"


class User(BaseModel):
	username: str


# username -> password hash
_users: Dict[str, str] = {}
# jti -> (username, expiry); expired entries are pruned on login
_sessions: Dict[str, Tuple[str, datetime]] = {}


def _ensure_seed_user() -> None:
	username = settings.seed_username
	password = settings.seed_password_plain
	if username and password and username not in _users:
		_users[username] = pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
	return pwd_context.verify(plain_password, hashed_password)


def authenticate_user(username: str, password: str) -> Optional[User]:
	_ensure_seed_user()
	hashed = _users.get(username)
	if hashed and verify_password(password, hashed):
		return User(username=username)
	return None


def _resolve_expiry(expires_delta: Optional[timedelta]) -> datetime:
	delta = expires_delta
	if delta is None:
		minutes = settings.access_token_expire_minutes
		if minutes > 0:
			delta = timedelta(minutes=minutes)
		else:
			delta = timedelta(days=30)
	now = datetime.now(timezone.utc)
	try:
		return now + delta
	except OverflowError:
		# Cap at far future but within datetime bounds
		return datetime.max.replace(tzinfo=timezone.utc)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None, *, expire: Optional[datetime] = None) -> str:
	to_encode = data.copy()
	if expire is None:
		expire = _resolve_expiry(expires_delta)
	to_encode.update({"exp": expire})
	encoded_jwt = jwt.encode(to_encode, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)
	return encoded_jwt


def prune_sessions(now: Optional[datetime] = None) -> int:
	now = now or datetime.now(timezone.utc)
	expired = [jti for jti, (_, expiry) in _sessions.items() if expiry <= now]
	for jti in expired:
		del _sessions[jti]
	if expired:
		logger.debug("pruned %d expired sessions", len(expired))
	return len(expired)


@router.post("/token", response_model=Token)
async def login(form_data: OAuth2PasswordRequestForm = Depends()):
	user = authenticate_user(form_data.username, form_data.password)
	if not user:
		logger.info("failed login for %r", form_data.username)
		raise HTTPException(status_code=401, detail="Incorrect username or password")
	prune_sessions()
	session_id = uuid.uuid4().hex
	expire = _resolve_expiry(None)
	_sessions[session_id] = (user.username, expire)
	return Token(access_token=create_access_token({"sub": user.username, "jti": session_id}, expire=expire))


def get_current_user(token: str = Depends(oauth2_scheme)) -> User:
	credentials_exception = HTTPException(status_code=401, detail="Could not validate credentials")
	try:
		payload = jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
		username: str | None = payload.get("sub")
		jti: str | None = payload.get("jti")
		if username is None or jti is None:
			raise credentials_exception
	except JWTError:
		raise credentials_exception
	# Tokens from a previous process (or a revoked session) are rejected
	session = _sessions.get(jti)
	if session is None or session[0] != username:
		raise credentials_exception
	return User(username=username)


@router.get("/me", response_model=User)
async def me(user: User = Depends(get_current_user)):
	return user
