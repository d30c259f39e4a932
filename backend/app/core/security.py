# backend/app/core/security.py
"""
Utilidades de seguridad: hash de contraseñas y tokens JWT.

Las funciones de tokens aceptan la configuración con la que se construyó la
app; sin ella usan la configuración global.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import JWTError, jwt
from passlib.context import CryptContext

from app.core.config import Settings, settings
from app.core.exceptions import AuthenticationError

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def create_access_token(subject: Any, extra_claims: Optional[Dict[str, Any]] = None,
                        expires_delta: Optional[timedelta] = None,
                        config: Optional[Settings] = None) -> str:
    """Firma un token con `sub` = id de usuario."""
    config = config or settings
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=config.ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    to_encode = dict(extra_claims or {})
    to_encode.update({"sub": str(subject), "exp": expire})
    return jwt.encode(to_encode, config.SECRET_KEY, algorithm=config.ALGORITHM)


def decode_access_token(token: str, config: Optional[Settings] = None) -> int:
    """Valida el token y devuelve el id de usuario que contiene."""
    config = config or settings
    try:
        payload = jwt.decode(token, config.SECRET_KEY, algorithms=[config.ALGORITHM])
    except JWTError:
        raise AuthenticationError("Could not validate credentials")

    subject = payload.get("sub")
    if subject is None:
        raise AuthenticationError("Could not validate credentials")
    try:
        return int(subject)
    except (TypeError, ValueError):
        raise AuthenticationError("Could not validate credentials")
