
import uuid
from dataclasses import dataclass
from passlib.context import CryptContext
from datetime import datetime, timedelta, timezone
from jose import jwt, JWTError
from docman.config import settings
from docman.errors import InvalidToken

ALGORITHM = "HS256"

pwd_context = CryptContext(schemes=["bcrypt_sha256", "bcrypt"], deprecated="auto")


@dataclass(frozen=True)
class TokenClaims:
    user_id: int
    role_id: int


def hash_password(password: str) -> str:
    return pwd_context.hash(password)

def verify_password(password: str, hashed: str) -> bool:
    return pwd_context.verify(password, hashed)

def create_access_token(user_id: int, role_id: int, expires_minutes: int | None = None) -> str:
    now = datetime.now(timezone.utc)
    expire = now + timedelta(minutes=expires_minutes or settings.access_token_expire_minutes)
    # jti keeps tokens issued within the same second distinct
    to_encode = {"sub": str(user_id), "role": role_id, "iat": now, "exp": expire, "jti": uuid.uuid4().hex}
    return jwt.encode(to_encode, settings.secret_key, algorithm=ALGORITHM)

def decode_token(token: str) -> TokenClaims:
    """Verify signature and expiry and return the embedded identity.

    Raises InvalidToken for anything that is not a well formed, unexpired token
    signed with our secret.
    """
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[ALGORITHM])
    except JWTError as exc:
        raise InvalidToken() from exc

    sub = payload.get("sub")
    role = payload.get("role")
    try:
        return TokenClaims(user_id=int(sub), role_id=int(role))
    except (TypeError, ValueError) as exc:
        raise InvalidToken() from exc
