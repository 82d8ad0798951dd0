# utils/logger.py

import logging
import os

# 로그 포맷 설정
FORMAT = "[%(asctime)s] %(levelname)s: %(message)s"
LEVEL = getattr(logging, os.getenv("LOG_LEVEL", "INFO").upper(), logging.INFO)
logging.basicConfig(level=LEVEL, format=FORMAT)

logger = logging.getLogger("pixcheck")


def set_level(level: str):
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))


# 공통 log() 함수 정의
def log(msg, level="info", exc_info=False):
    """
    사용 예:
    log("결제 상태 조회 시작")
    log("Supabase 업데이트 실패", level="error")
    """
    if level == "info":
        logger.info(msg, exc_info=exc_info)
    elif level == "warning":
        logger.warning(msg, exc_info=exc_info)
    elif level == "error":
        logger.error(msg, exc_info=exc_info)
    elif level == "debug":
        logger.debug(msg, exc_info=exc_info)
    else:
        logger.info(msg, exc_info=exc_info)  # fallback
