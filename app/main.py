"""
SubwayMap Backend - FastAPI Application

지하철 노선도 관리 및 최단 경로 / 요금 조회 서비스
노선도 스냅샷 캐시 (ETag), 사용자별 즐겨찾기
"""

import logging
import time
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.core.config import settings, ERROR_STATUS_CODES
from app.core.exceptions import SubwayMapException
from app.services.registry import init_services, get_services, reset_services
from app.api.v1.router import api_router

# 로깅 설정
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    애플리케이션 생명주기 관리

    서버 시작 시 실행:
    - 노선도 초기 데이터 로드 (TOPOLOGY_DATA_FILE)
    - 노선도 캐시 / 서비스 인스턴스 생성
    - 노선도 스냅샷 미리 빌드 (첫 요청 지연 방지)

    서버 종료 시 실행:
    - 서비스 인스턴스 해제
    """
    # ========== Startup ==========
    logger.info("=" * 60)
    logger.info("SubwayMap Backend 시작 중...")
    logger.info("=" * 60)

    try:
        logger.info("1/2 노선도 / 즐겨찾기 저장소 초기화 중...")
        services = init_services()

        logger.info("2/2 노선도 스냅샷 빌드 중...")
        services.map_cache.get_map()

        logger.info("=" * 60)
        logger.info("SubwayMap Backend 시작 완료!")
        logger.info("=" * 60)

    except Exception as e:
        logger.error(f"❌ 초기화 실패: {e}", exc_info=True)
        raise

    yield

    # ========== Shutdown ==========
    logger.info("SubwayMap Backend 종료 중...")
    reset_services()
    logger.info("✓ SubwayMap Backend 종료 완료")


# FastAPI 애플리케이션 생성
app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    description="""
    ## 지하철 노선도 / 경로 조회 서비스

    ### 주요 기능
    - 🚇 역, 노선, 구간 관리
    - 🗺️ 노선도 조회 (ETag 조건부 요청)
    - 🔍 최단 거리 / 최소 시간 경로 및 요금
    - ⭐ 즐겨찾기 역 / 경로 (Bearer 토큰 필요)
    """,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
)

# CORS 설정
# allow_credentials=True일 때는 allow_origins에 ["*"]를 사용할 수 없음
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["ETag", "Location"],
)

# API 라우터 등록
app.include_router(api_router, prefix="/v1")


# ========== Health Check Endpoints ==========


@app.get("/")
async def root():
    """서비스 기본 정보"""
    return {
        "service": settings.PROJECT_NAME,
        "version": settings.VERSION,
        "status": "running",
        "docs": "/docs",
    }


@app.get("/health")
def health_check():
    """
    헬스 체크 엔드포인트

    - 노선도 캐시 상태 (스냅샷 유무, 무효화 여부)
    """
    try:
        map_cache = get_services().map_cache
        snapshot = map_cache.peek()
        cache_status = {
            "built": snapshot is not None,
            "stale": map_cache.is_stale,
            "fingerprint": snapshot.fingerprint if snapshot else None,
        }
        overall_status = "healthy"

    except RuntimeError as e:
        logger.error(f"헬스 체크 실패: {e}")
        cache_status = {"error": str(e)}
        overall_status = "unhealthy"

    status_code = 200 if overall_status == "healthy" else 503

    return JSONResponse(
        status_code=status_code,
        content={
            "status": overall_status,
            "version": settings.VERSION,
            "timestamp": time.time(),
            "components": {"map_cache": cache_status},
        },
    )


# ========== Exception Handlers ==========


@app.exception_handler(SubwayMapException)
async def subway_map_exception_handler(request: Request, exc: SubwayMapException):
    """도메인 예외 => 에러 코드별 HTTP status"""
    status_code = ERROR_STATUS_CODES.get(exc.code, 500)

    if status_code >= 500:
        logger.error(f"[{exc.code}] {exc.message}")
    else:
        logger.info(f"[{exc.code}] {exc.message} ({request.method} {request.url.path})")

    return JSONResponse(
        status_code=status_code,
        content={"message": exc.message, "code": exc.code},
    )


@app.exception_handler(ValueError)
async def value_error_handler(request: Request, exc: ValueError):
    """잘못된 입력 (수정 불가 필드, 음수 구간 등)"""
    logger.info(f"잘못된 요청: {exc}")
    return JSONResponse(
        status_code=400,
        content={"message": str(exc), "code": "BAD_REQUEST"},
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """
    전역 예외 핸들러

    예상치 못한 오류 처리
    """
    logger.error(f"예상치 못한 오류: {exc}", exc_info=True)

    return JSONResponse(
        status_code=500,
        content={
            "message": "서버 내부 오류가 발생했습니다",
            "code": "INTERNAL_ERROR",
            "detail": str(exc) if settings.DEBUG else "Internal Server Error",
        },
    )


# ========== Development Server ==========

if __name__ == "__main__":
    import uvicorn

    logger.info("개발 서버 시작...")

    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level="debug" if settings.DEBUG else "info",
        access_log=True,
        timeout_keep_alive=30,
    )
