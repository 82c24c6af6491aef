import os
from typing import Optional
from dotenv import load_dotenv

load_dotenv()  # 환경변수 읽어오기


class Settings:
    PROJECT_NAME: str = "SubwayMap Backend"
    VERSION: str = "1.0.0"

    DEBUG: bool = os.getenv("DEBUG", "False").lower() == "true"
    PORT: int = int(os.getenv("PORT", 8080))

    # 노선도 초기 데이터 (JSON), 없으면 빈 노선도로 시작
    TOPOLOGY_DATA_FILE: Optional[str] = os.getenv("TOPOLOGY_DATA_FILE") or None

    # 즐겨찾기 저장소 => memory | redis
    FAVORITE_STORE: str = os.getenv("FAVORITE_STORE", "memory").lower()

    REDIS_HOST: str = os.getenv("REDIS_HOST", "redis")
    REDIS_PORT: int = int(os.getenv("REDIS_PORT", 6379))
    REDIS_DB: int = int(os.getenv("REDIS_DB", 0))

    # 노선도 빌드 메트릭 로깅 플래그
    ENABLE_CACHE_METRICS: bool = (
        os.getenv("ENABLE_CACHE_METRICS", "true").lower() == "true"
    )

    # JWT 설정 (토큰 발급은 외부 인증 서버 담당, 여기서는 검증만)
    JWT_SECRET_KEY: str = os.getenv("JWT_SECRET_KEY", "dev-jwt-secret-key")
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = int(
        os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", 30)
    )

    # CORS 설정
    ALLOWED_ORIGINS: list[str] = os.getenv(
        "ALLOWED_ORIGINS",
        "http://localhost:3000,http://localhost:5173,http://127.0.0.1:3000",
    ).split(",")

    # 요금 정책 (거리 단위: m, 금액 단위: 원)
    FARE_BASE: int = int(os.getenv("FARE_BASE", 1250))
    FARE_BASE_DISTANCE: int = int(os.getenv("FARE_BASE_DISTANCE", 10000))
    FARE_FIRST_STEP_DISTANCE: int = int(os.getenv("FARE_FIRST_STEP_DISTANCE", 5000))
    FARE_FIRST_STEP_AMOUNT: int = int(os.getenv("FARE_FIRST_STEP_AMOUNT", 100))
    FARE_SECOND_THRESHOLD: int = int(os.getenv("FARE_SECOND_THRESHOLD", 50000))
    FARE_SECOND_STEP_DISTANCE: int = int(
        os.getenv("FARE_SECOND_STEP_DISTANCE", 8000)
    )
    FARE_SECOND_STEP_AMOUNT: int = int(os.getenv("FARE_SECOND_STEP_AMOUNT", 100))


settings = Settings()  # 모듈화


# 에러 코드 => HTTP status
ERROR_STATUS_CODES = {
    "STATION_NOT_FOUND": 404,
    "LINE_NOT_FOUND": 404,
    "FAVORITE_NOT_FOUND": 404,
    "NO_PATH": 404,
    "SAME_STATION": 400,
    "INVALID_EDGE": 400,
    "MALFORMED_LINE": 400,
    "UNKNOWN_STATION": 400,
    "STATION_IN_USE": 400,
    "INVALID_DISTANCE": 500,
}
