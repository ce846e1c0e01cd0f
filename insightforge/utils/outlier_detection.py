"""
사분위수 및 이상치 탐지 유틸리티

"절반의 중앙값" 방식으로 사분위수를 계산하고,
IQR 울타리와 Z-Score 기반으로 이상치 인덱스를 찾습니다.

사분위수 규칙:
    오름차순 정렬 후 n/2 지점에서 나눕니다. n이 홀수이면 가운데 원소는
    아래쪽/위쪽 절반 모두에서 제외합니다. Q1은 아래쪽 절반의 중앙값,
    Q3는 위쪽 절반의 중앙값입니다. 선형 보간 방식과는 결과가 다릅니다.
"""

import logging
from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Sequence, Tuple

import numpy as np

from ..exceptions import DegenerateDistributionError, EmptyInputError, InsufficientDataError
from .descriptive_statistics import mean, median, std_dev

logger = logging.getLogger(__name__)

IQR_FENCE_MULTIPLIER = 1.5


@dataclass
class BoxPlotSummary:
    """박스 플롯 요약"""
    q1: float
    median: float
    q3: float
    iqr: float
    lower_fence: float
    upper_fence: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class IQROutlierResult:
    """IQR 이상치 탐지 결과 (호출자가 임계값을 다시 계산하지 않도록 경계 포함)"""
    indices: List[int]
    lower_bound: float
    upper_bound: float


def quantiles(values: Sequence[float]) -> Tuple[float, float, float]:
    """
    Q1, Q2(중앙값), Q3를 계산합니다.

    Args:
        values: 숫자 시퀀스 (변경되지 않음)

    Returns:
        (Q1, Q2, Q3) 튜플

    Raises:
        EmptyInputError: 입력이 비어 있을 때
        InsufficientDataError: 값이 하나뿐이라 절반이 비어 있을 때
    """
    if len(values) == 0:
        raise EmptyInputError("quantiles")
    if len(values) < 2:
        raise InsufficientDataError("quantiles", required=2, actual=len(values))

    data = np.sort(np.asarray(values, dtype=float))
    q2 = median(data)

    mid = len(data) // 2
    lower_half = data[:mid]
    if len(data) % 2 == 0:
        upper_half = data[mid:]
    else:
        upper_half = data[mid + 1:]

    return median(lower_half), q2, median(upper_half)


def box_plot_data(values: Sequence[float]) -> BoxPlotSummary:
    """
    박스 플롯 데이터 계산

    IQR = Q3 - Q1, 울타리는 [Q1 - 1.5*IQR, Q3 + 1.5*IQR] 입니다.
    """
    q1, q2, q3 = quantiles(values)
    iqr = q3 - q1
    return BoxPlotSummary(
        q1=q1,
        median=q2,
        q3=q3,
        iqr=iqr,
        lower_fence=q1 - IQR_FENCE_MULTIPLIER * iqr,
        upper_fence=q3 + IQR_FENCE_MULTIPLIER * iqr
    )


def zscore_outliers(values: Sequence[float], threshold: float) -> List[int]:
    """
    Z-Score 기반 이상치 인덱스를 반환합니다.

    |x - mean| / stddev > threshold 인 위치를 입력 순서대로 반환합니다.
    표준편차는 표본 표준편차(N-1)입니다.

    Raises:
        EmptyInputError: 입력이 비어 있을 때
        InsufficientDataError: 값이 2개 미만일 때
        DegenerateDistributionError: 표준편차가 0일 때
    """
    if len(values) == 0:
        raise EmptyInputError("zscore_outliers")

    data = np.asarray(values, dtype=float)
    center = mean(data)
    spread = std_dev(data)
    # 상수 시퀀스는 평균의 반올림 오차로 표준편차가 0이 아니게 나올 수 있음
    if np.all(data == data[0]) or spread == 0:
        raise DegenerateDistributionError("zscore_outliers")

    z_scores = np.abs((data - center) / spread)
    logger.debug(f"Z-Score 계산: mean={center:.4f}, std={spread:.4f}, threshold={threshold}")
    return [int(i) for i in np.flatnonzero(z_scores > threshold)]


def iqr_outliers(values: Sequence[float]) -> IQROutlierResult:
    """
    IQR 울타리 밖의 값 인덱스를 반환합니다.

    인덱스는 호출자가 넘긴 (정렬되지 않은) 시퀀스 기준입니다.
    """
    summary = box_plot_data(values)
    data = np.asarray(values, dtype=float)
    outside = (data < summary.lower_fence) | (data > summary.upper_fence)
    return IQROutlierResult(
        indices=[int(i) for i in np.flatnonzero(outside)],
        lower_bound=summary.lower_fence,
        upper_bound=summary.upper_fence
    )
