"""
엔진 설정 및 로깅 설정

기본 설정값과 환경 변수 기반 재정의를 제공합니다.
라이브러리는 임포트 시점에 로깅을 설정하지 않으며,
호스트 프로세스가 필요할 때 configure_logging()을 호출합니다.
"""

import logging
import os
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# 환경 변수 이름 -> (설정 키, 변환 함수)
_ENV_OVERRIDES = {
    "INSIGHTFORGE_ZSCORE_THRESHOLD": ("zscore_threshold", float),
    "INSIGHTFORGE_HISTOGRAM_BINS": ("histogram_bins", int),
    "INSIGHTFORGE_KDE_POINTS": ("kde_points", int),
    "INSIGHTFORGE_KDE_BANDWIDTH": ("kde_bandwidth", float),
    "INSIGHTFORGE_CORRELATION_METHOD": ("correlation_method", str),
    "INSIGHTFORGE_PARSE_POLICY": ("numeric_parse_policy", str),
}


def get_default_config() -> Dict[str, Any]:
    """기본 설정 반환 (환경 변수 재정의 적용)"""
    config = {
        # 이상치 탐지
        'zscore_threshold': 3.0,

        # 분포 추정
        'histogram_bins': 10,
        'kde_points': 100,
        'kde_bandwidth': 1.0,

        # 상관분석
        'correlation_method': 'pearson',

        # 단일 컬럼 추출 시 숫자 변환 정책 (skip | strict)
        'numeric_parse_policy': 'skip',
    }

    for env_name, (key, cast) in _ENV_OVERRIDES.items():
        raw = os.getenv(env_name)
        if raw is None or raw == "":
            continue
        try:
            config[key] = cast(raw)
        except ValueError as e:
            raise ValueError(f"Invalid value for {env_name}: {raw!r}") from e
        logger.debug(f"환경 변수 {env_name} 적용: {key}={config[key]!r}")

    return config


def merge_config(overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """기본 설정 위에 사용자 설정을 병합"""
    config = get_default_config()
    if overrides:
        config.update(overrides)
    return config


def configure_logging(level: Optional[str] = None) -> None:
    """
    기본 로깅 설정을 적용합니다.

    Args:
        level: 로그 레벨 이름 (None이면 INSIGHTFORGE_LOG_LEVEL 또는 INFO)
    """
    level_name = (level or os.getenv("INSIGHTFORGE_LOG_LEVEL") or "INFO").upper()
    numeric_level = logging.getLevelName(level_name)
    if not isinstance(numeric_level, int):
        raise ValueError(f"Unknown log level: {level_name}")

    logging.basicConfig(level=numeric_level, format=LOG_FORMAT)
    logging.getLogger("insightforge").setLevel(numeric_level)
