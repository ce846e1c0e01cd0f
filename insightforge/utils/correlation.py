"""
상관분석 유틸리티

Pearson / Spearman 상관계수, 평균 순위 변환, N x N 상관계수 행렬을 계산합니다.
"""

import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Sequence, Union

import numpy as np
from scipy.stats import rankdata

from ..exceptions import (
    DimensionMismatchError,
    EmptyInputError,
    UnknownMethodError,
    ZeroVarianceError,
)
from ..models.table import ParsePolicy, extract_numeric_column

logger = logging.getLogger(__name__)


class CorrelationMethod(str, Enum):
    """상관분석 방법"""
    PEARSON = "pearson"
    SPEARMAN = "spearman"

    @classmethod
    def parse(cls, method: Union[str, "CorrelationMethod"]) -> "CorrelationMethod":
        """
        Raises:
            UnknownMethodError: pearson / spearman 이 아닐 때 (대소문자 구분)
        """
        if isinstance(method, cls):
            return method
        for member in cls:
            if member.value == method:
                return member
        raise UnknownMethodError(str(method), supported=[m.value for m in cls])


@dataclass
class CorrelationResult:
    """상관계수 행렬과 라벨"""
    matrix: List[List[float]] = field(default_factory=list)
    labels: List[str] = field(default_factory=list)


def pearson_correlation(x: Sequence[float], y: Sequence[float]) -> float:
    """
    Pearson 적률상관계수를 계산합니다.

    Args:
        x: 첫 번째 시퀀스
        y: 두 번째 시퀀스 (x와 길이가 같아야 함)

    Returns:
        상관계수 [-1, 1]

    Raises:
        DimensionMismatchError: 길이가 다를 때
        EmptyInputError: 시퀀스가 비어 있을 때
        ZeroVarianceError: 어느 한쪽이 상수 시퀀스여서 분모가 0일 때
    """
    if len(x) != len(y):
        raise DimensionMismatchError(
            "input sequences must be the same length",
            x_length=len(x),
            y_length=len(y)
        )
    if len(x) == 0:
        raise EmptyInputError("pearson_correlation")

    xs = np.asarray(x, dtype=float)
    ys = np.asarray(y, dtype=float)

    # 상수 시퀀스는 부동소수 오차와 무관하게 분모 0으로 처리
    if np.all(xs == xs[0]) or np.all(ys == ys[0]):
        raise ZeroVarianceError("pearson_correlation")

    dx = xs - np.sum(xs) / len(xs)
    dy = ys - np.sum(ys) / len(ys)

    numerator = float(np.sum(dx * dy))
    denominator = math.sqrt(float(np.sum(dx * dx)) * float(np.sum(dy * dy)))
    if denominator == 0:
        raise ZeroVarianceError("pearson_correlation")

    return numerator / denominator


def rank(values: Sequence[float]) -> List[float]:
    """
    오름차순 순위(0부터 시작)를 반환합니다. 동점은 평균 순위를 받습니다.

    예: [10, 20, 20, 30] -> [0.0, 1.5, 1.5, 3.0]

    Raises:
        EmptyInputError: 입력이 비어 있을 때
    """
    if len(values) == 0:
        raise EmptyInputError("rank")
    ranks = rankdata(np.asarray(values, dtype=float), method="average") - 1.0
    return [float(r) for r in ranks]


def spearman_correlation(x: Sequence[float], y: Sequence[float]) -> float:
    """Spearman 순위상관계수 = 순위에 대한 Pearson 상관계수"""
    if len(x) != len(y):
        raise DimensionMismatchError(
            "input sequences must be the same length",
            x_length=len(x),
            y_length=len(y)
        )
    return pearson_correlation(rank(x), rank(y))


_CORRELATION_FUNCTIONS = {
    CorrelationMethod.PEARSON: pearson_correlation,
    CorrelationMethod.SPEARMAN: spearman_correlation,
}


def extract_float_columns(
    rows: Sequence[Sequence[str]],
    col_indices: Sequence[int]
) -> List[List[float]]:
    """
    선택한 컬럼들을 숫자 시퀀스로 추출합니다 (엄격 모드).

    Raises:
        DimensionMismatchError: 행이 컬럼보다 짧을 때
        ParseFailureError: 셀을 숫자로 변환할 수 없을 때
    """
    return [extract_numeric_column(rows, col, ParsePolicy.STRICT) for col in col_indices]


def correlation_matrix(
    rows: Sequence[Sequence[str]],
    col_indices: Sequence[int],
    method: Union[str, CorrelationMethod]
) -> List[List[float]]:
    """
    선택한 컬럼들의 N x N 상관계수 행렬을 계산합니다.

    아래 삼각(j <= i)만 계산하고 위 삼각으로 복사합니다.

    Args:
        rows: 텍스트 셀 행 목록
        col_indices: 분석할 컬럼 인덱스 목록
        method: "pearson" 또는 "spearman"

    Raises:
        UnknownMethodError: 지원하지 않는 방법일 때
        ParseFailureError: 변환할 수 없는 셀이 하나라도 있을 때
        ZeroVarianceError: 상수 컬럼이 포함되었을 때
    """
    correlate = _CORRELATION_FUNCTIONS[CorrelationMethod.parse(method)]
    columns = extract_float_columns(rows, col_indices)

    n = len(columns)
    matrix = [[0.0] * n for _ in range(n)]
    for i in range(n):
        for j in range(i + 1):
            coefficient = correlate(columns[i], columns[j])
            matrix[i][j] = coefficient
            matrix[j][i] = coefficient

    logger.debug(f"상관계수 행렬 계산 완료: {n}x{n}, method={method}")
    return matrix


def correlation_labels(col_indices: Sequence[int], header: Sequence[str]) -> List[str]:
    """컬럼 인덱스별 라벨 (헤더가 없거나 비어 있으면 "Col{index}")"""
    labels = []
    for idx in col_indices:
        if 0 <= idx < len(header) and header[idx]:
            labels.append(header[idx])
        else:
            labels.append(f"Col{idx}")
    return labels


def generate_correlation_label_grid(
    col_indices: Sequence[int],
    header: Sequence[str]
) -> List[List[str]]:
    """
    (N+1) x (N+1) 라벨 그리드를 생성합니다.

    첫 행은 빈 모서리 + 컬럼 라벨, 이후 각 행은 행 라벨 + 빈 칸입니다.
    """
    labels = correlation_labels(col_indices, header)
    grid = [[""] + labels]
    for label in labels:
        grid.append([label] + [""] * len(labels))
    return grid


def build_correlation_result(
    rows: Sequence[Sequence[str]],
    header: Sequence[str],
    col_indices: Sequence[int],
    method: Union[str, CorrelationMethod]
) -> CorrelationResult:
    return CorrelationResult(
        matrix=correlation_matrix(rows, col_indices, method),
        labels=correlation_labels(col_indices, header)
    )


def correlation_matrix_to_mapping(result: CorrelationResult) -> Dict[str, Dict[str, float]]:
    """라벨 -> 라벨 -> 상관계수 중첩 딕셔너리 (중복 라벨은 마지막 값이 남음)"""
    mapping: Dict[str, Dict[str, float]] = {}
    for i, row in enumerate(result.matrix):
        inner = mapping.setdefault(result.labels[i], {})
        for j, value in enumerate(row):
            inner[result.labels[j]] = value
    return mapping
