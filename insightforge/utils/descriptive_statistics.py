"""
기술 통계 유틸리티

숫자 시퀀스에 대한 스칼라 요약값(평균, 중앙값, 최빈값, 분산, 표준편차,
최솟값, 최댓값, 범위, 합계, 개수)을 계산합니다.
모든 함수는 부수 효과가 없으며 호출자의 시퀀스를 변경하지 않습니다.
"""

import math
from collections import Counter
from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Optional, Sequence

import numpy as np

from ..exceptions import EmptyInputError, InsufficientDataError


@dataclass
class SummaryStats:
    """시퀀스 요약 통계"""
    count: int
    mean: float
    median: float
    mode: List[float]
    std_dev: Optional[float]
    variance: Optional[float]
    min: float
    max: float
    range: float
    sum: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _as_array(values: Sequence[float], operation: str) -> np.ndarray:
    if len(values) == 0:
        raise EmptyInputError(operation)
    return np.asarray(values, dtype=float)


def mean(values: Sequence[float]) -> float:
    """
    산술 평균을 계산합니다.

    Raises:
        EmptyInputError: 입력이 비어 있을 때
    """
    data = _as_array(values, "mean")
    return float(np.sum(data) / len(data))


def median(values: Sequence[float]) -> float:
    """
    중앙값을 계산합니다. 정렬은 내부 복사본에서 수행됩니다.

    Raises:
        EmptyInputError: 입력이 비어 있을 때
    """
    data = np.sort(_as_array(values, "median"))
    mid = len(data) // 2
    if len(data) % 2 == 0:
        return float((data[mid - 1] + data[mid]) / 2)
    return float(data[mid])


def mode(values: Sequence[float]) -> List[float]:
    """
    최빈값을 계산합니다.

    가장 높은 빈도를 가진 값이 여러 개면 모두 반환합니다(오름차순).
    임의로 하나를 고르지 않습니다.

    Raises:
        EmptyInputError: 입력이 비어 있을 때
    """
    if len(values) == 0:
        raise EmptyInputError("mode")

    counter = Counter(float(v) for v in values)
    top = max(counter.values())
    return sorted(value for value, freq in counter.items() if freq == top)


def variance(values: Sequence[float]) -> float:
    """
    표본 분산을 계산합니다 (N-1 분모).

    Raises:
        EmptyInputError: 입력이 비어 있을 때
        InsufficientDataError: 값이 2개 미만일 때
    """
    data = _as_array(values, "variance")
    if len(data) < 2:
        raise InsufficientDataError("variance", required=2, actual=len(data))

    center = np.sum(data) / len(data)
    squared_diffs = (data - center) ** 2
    return float(np.sum(squared_diffs) / (len(data) - 1))


def std_dev(values: Sequence[float]) -> float:
    """표본 표준편차 (variance와 같은 N-1 분모)"""
    if len(values) == 0:
        raise EmptyInputError("std_dev")
    if len(values) < 2:
        raise InsufficientDataError("std_dev", required=2, actual=len(values))
    return math.sqrt(variance(values))


def minimum(values: Sequence[float]) -> float:
    return float(np.min(_as_array(values, "min")))


def maximum(values: Sequence[float]) -> float:
    return float(np.max(_as_array(values, "max")))


def value_range(values: Sequence[float]) -> float:
    """최댓값 - 최솟값"""
    if len(values) == 0:
        raise EmptyInputError("range")
    return maximum(values) - minimum(values)


def total(values: Sequence[float]) -> float:
    """합계. 빈 입력은 0이 아니라 EmptyInputError 입니다."""
    return float(np.sum(_as_array(values, "sum")))


def count(values: Sequence[float]) -> int:
    return len(values)


def summarize(values: Sequence[float]) -> SummaryStats:
    """
    모든 기술 통계를 한 번에 계산합니다.

    값이 하나뿐이면 분산과 표준편차는 정의되지 않으므로 None으로 둡니다.

    Args:
        values: 숫자 시퀀스

    Returns:
        SummaryStats

    Raises:
        EmptyInputError: 입력이 비어 있을 때
    """
    if len(values) == 0:
        raise EmptyInputError("summary")

    sample_variance = variance(values) if len(values) >= 2 else None
    sample_std = math.sqrt(sample_variance) if sample_variance is not None else None

    return SummaryStats(
        count=count(values),
        mean=mean(values),
        median=median(values),
        mode=mode(values),
        std_dev=sample_std,
        variance=sample_variance,
        min=minimum(values),
        max=maximum(values),
        range=value_range(values),
        sum=total(values)
    )
