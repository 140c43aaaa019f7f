"""Security helpers for hashing, JWT handling and single-use account tokens."""

from datetime import datetime, timedelta, timezone
from hashlib import sha256
import secrets
import string

from jose import JWTError, jwt
from passlib.context import CryptContext

from juscrm.config import get_settings

_JWT_ALGORITHM = "HS256"

pwd_context = CryptContext(
    schemes=["pbkdf2_sha256"],
    deprecated="auto",
    pbkdf2_sha256__rounds=310_000,
)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def password_signature(hashed_password: str, is_active: bool) -> str:
    """Fingerprint embedded in tokens so a password change revokes them."""

    return sha256(f"{hashed_password}:{int(is_active)}".encode()).hexdigest()


def create_access_token(data: dict, expires_delta: timedelta | None = None) -> str:
    settings = get_settings()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    return jwt.encode(
        {**data, "exp": expire}, settings.secret_key, algorithm=_JWT_ALGORITHM
    )


def decode_access_token(token: str) -> dict:
    try:
        return jwt.decode(token, get_settings().secret_key, algorithms=[_JWT_ALGORITHM])
    except JWTError as exc:
        raise ValueError("Could not validate credentials") from exc


def generate_account_token() -> str:
    """Return a random 64 character hex token for reset and verification links."""

    return secrets.token_hex(32)


def generate_secure_password() -> str:
    """Generate a random temporary password between 8 and 12 characters."""

    alphabet = string.ascii_letters + string.digits + string.punctuation
    length = secrets.choice(range(8, 13))

    while True:
        password = "".join(secrets.choice(alphabet) for _ in range(length))
        if (
            any(char.islower() for char in password)
            and any(char.isupper() for char in password)
            and any(char.isdigit() for char in password)
            and any(char in string.punctuation for char in password)
        ):
            return password
