from datetime import datetime, timedelta, timezone
from typing import Iterable, Optional
from jose import ExpiredSignatureError, JWTError, jwt
import logging

from app.core.config import settings

logger = logging.getLogger(__name__)

# 토큰 발급은 외부 인증 서버 담당 => 같은 비밀키로 검증만 수행
# create_access_token은 개발/테스트용

ACCESS_TOKEN_TYPE = "access"


def create_access_token(
    subject: str,
    expires_delta: Optional[timedelta] = None,
    scopes: Iterable[str] = (),
) -> str:
    """
    subject -> 즐겨찾기 소유자 식별자
    expires_delta -> 없으면 ACCESS_TOKEN_EXPIRE_MINUTES
    """
    lifetime = expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    claims = {
        "sub": str(subject),
        "exp": datetime.now(timezone.utc) + lifetime,
        "type": ACCESS_TOKEN_TYPE,
        "scopes": list(scopes),
    }
    return jwt.encode(claims, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_token(token: str) -> Optional[dict]:
    """서명/만료 검증 후 payload 반환, 실패 시 None"""
    try:
        return jwt.decode(
            token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM]
        )
    except ExpiredSignatureError:
        logger.info("만료된 토큰")
        return None
    except JWTError as e:
        logger.warning(f"JWT error: {e}")
        return None


def access_token_subject(payload: Optional[dict]) -> Optional[str]:
    """access 토큰의 subject (다른 용도의 토큰이거나 subject가 없으면 None)"""
    if not payload or payload.get("type") != ACCESS_TOKEN_TYPE:
        return None
    return payload.get("sub") or None
