from datetime import datetime, timedelta
from jose import JWTError, jwt
from planner.core.config import settings

def _create_token(user_id: int, email: str, minutes: int, token_type: str) -> str:
    payload = {
        "user_id": user_id,
        "email": email,
        "exp": datetime.utcnow() + timedelta(minutes=minutes),
        "type": token_type
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm="HS256")

def create_access_token(user_id: int, email: str) -> str:
    # token d'accès JWT (15 minutes par défaut)
    return _create_token(user_id, email, settings.JWT_EXPIRE_MIN, "access")

def create_refresh_token(user_id: int, email: str) -> str:
    # token de rafraîchissement JWT (30 jours par défaut)
    return _create_token(user_id, email, settings.JWT_REFRESH_EXPIRE_MIN, "refresh")

def verify_token(token: str) -> dict:
    try:
        payload = jwt.decode(token, settings.JWT_SECRET, algorithms=["HS256"])
        return payload
    except JWTError:
        return None

def decode_token(token: str) -> int:
    payload = verify_token(token)
    if payload is None or payload.get("type") != "access":
        return None
    return payload.get("user_id")
