"""
분포 추정 유틸리티

히스토그램 구간화와 가우시안 커널 밀도 추정(KDE)을 계산합니다.
라벨 문자열 생성은 chart_formatting 모듈에서 담당합니다.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Sequence

import numpy as np
from scipy.stats import norm

from ..exceptions import EmptyInputError, UnsupportedOperationError

logger = logging.getLogger(__name__)


@dataclass
class HistogramResult:
    """히스토그램 결과 (bin_edges는 bin_counts보다 하나 많음)"""
    bin_edges: List[float] = field(default_factory=list)
    bin_counts: List[int] = field(default_factory=list)


@dataclass
class KDEResult:
    """KDE 결과"""
    xs: List[float] = field(default_factory=list)
    densities: List[float] = field(default_factory=list)


def histogram(values: Sequence[float], num_bins: int) -> HistogramResult:
    """
    균등 간격 구간별 빈도를 계산합니다.

    모든 값이 같으면 범위를 값 ±0.5로 넓혀 구간 폭이 0이 되지 않게 합니다.
    최댓값은 마지막 구간에 포함됩니다.

    Args:
        values: 숫자 시퀀스
        num_bins: 구간 수 (양수)

    Returns:
        HistogramResult

    Raises:
        EmptyInputError: 입력이 비어 있을 때
        UnsupportedOperationError: num_bins가 양수가 아닐 때
    """
    if len(values) == 0:
        raise EmptyInputError("histogram")
    if num_bins <= 0:
        raise UnsupportedOperationError(f"histogram with {num_bins} bins; number of bins must be positive")

    data = np.asarray(values, dtype=float)
    min_val = float(np.min(data))
    max_val = float(np.max(data))

    if min_val == max_val:
        min_val -= 0.5
        max_val += 0.5

    bin_width = (max_val - min_val) / num_bins
    bin_edges = [min_val + bin_width * i for i in range(num_bins + 1)]

    indices = np.floor((data - min_val) / bin_width).astype(int)
    # 최댓값은 인덱스 num_bins가 되므로 마지막 구간으로 보정
    indices = np.clip(indices, 0, num_bins - 1)
    bin_counts = np.bincount(indices, minlength=num_bins)

    return HistogramResult(
        bin_edges=bin_edges,
        bin_counts=[int(c) for c in bin_counts]
    )


def kde_approximate(values: Sequence[float], num_points: int, bandwidth: float) -> KDEResult:
    """
    가우시안 커널 밀도 추정

    정렬된 복사본의 최솟값~최댓값 사이 num_points개 균등 위치에서
    f(x) = 1/(n*h*sqrt(2*pi)) * sum(exp(-0.5*((x-xi)/h)^2)) 를 계산합니다.
    num_points가 1이면 최솟값 한 곳에서만 평가합니다.

    Raises:
        EmptyInputError: 입력이 비어 있을 때
        UnsupportedOperationError: num_points 또는 bandwidth가 양수가 아닐 때
    """
    if len(values) == 0:
        raise EmptyInputError("kde")
    if num_points <= 0:
        raise UnsupportedOperationError(f"kde with {num_points} points; number of points must be positive")
    if not bandwidth > 0:
        raise UnsupportedOperationError(f"kde with bandwidth {bandwidth}; bandwidth must be positive")

    data = np.sort(np.asarray(values, dtype=float))
    min_val = float(data[0])
    max_val = float(data[-1])

    if num_points == 1:
        xs = np.array([min_val])
    else:
        step = (max_val - min_val) / (num_points - 1)
        xs = min_val + np.arange(num_points) * step

    # norm.pdf(u) = exp(-0.5*u^2) / sqrt(2*pi)
    u = (xs[:, np.newaxis] - data[np.newaxis, :]) / bandwidth
    densities = norm.pdf(u).sum(axis=1) / (len(data) * bandwidth)

    logger.debug(f"KDE 계산 완료: n={len(data)}, points={num_points}, bandwidth={bandwidth}")
    return KDEResult(
        xs=[float(x) for x in xs],
        densities=[float(d) for d in densities]
    )
