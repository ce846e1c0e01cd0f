"""
InsightForge

텍스트 셀 테이블을 위한 순수 분석 엔진 패키지
"""

from .config import configure_logging, get_default_config
from .exceptions import (
    AnalyticsError,
    ColumnNotFoundError,
    DegenerateDistributionError,
    DimensionMismatchError,
    EmptyInputError,
    InsufficientDataError,
    KeyNotFoundError,
    ParseFailureError,
    UnknownMethodError,
    UnsupportedOperationError,
    ZeroVarianceError,
)
from .models import FilterOption, ParsePolicy, SortOption, Table
from .statistical_analysis import AnalyticsEngine

__version__ = "1.0.0"

__all__ = [
    'AnalyticsEngine',
    'Table',
    'ParsePolicy',
    'FilterOption',
    'SortOption',
    'configure_logging',
    'get_default_config',
    'AnalyticsError',
    'EmptyInputError',
    'InsufficientDataError',
    'DimensionMismatchError',
    'ParseFailureError',
    'ColumnNotFoundError',
    'KeyNotFoundError',
    'ZeroVarianceError',
    'DegenerateDistributionError',
    'UnknownMethodError',
    'UnsupportedOperationError',
]
