"""
집계 및 피벗 유틸리티

키 컬럼으로 행을 그룹화하고 그룹별 숫자 값을 집계합니다.
피벗은 두 개의 키로 그룹화한 뒤 셀마다 같은 집계 함수를 적용합니다.

빈 그룹 처리 규칙 (의도적으로 서로 다름):
    - count: 모든 키 포함, 빈 그룹은 0
    - min / max: 빈 그룹은 결과에서 제외
    - mean / median / stddev: 빈 그룹은 0.0 (자리 표시값)
값이 하나뿐인 그룹/셀의 stddev는 0.0 입니다.
"""

import logging
import math
from enum import Enum
from typing import Callable, Dict, List, Sequence, Union

import numpy as np

from ..exceptions import (
    DimensionMismatchError,
    KeyNotFoundError,
    ParseFailureError,
    UnsupportedOperationError,
)
from ..models.table import parse_float

logger = logging.getLogger(__name__)

GroupedResult = Dict[str, List[float]]
PivotTable = Dict[str, Dict[str, float]]
Reducer = Callable[[Sequence[float]], float]


# ================================================================================
# Group By
# ================================================================================

def _parse_cell(row: Sequence[str], row_index: int, column_index: int) -> float:
    value = parse_float(row[column_index])
    if value is None:
        raise ParseFailureError(row_index, column_index, row[column_index])
    return value


def group_by(rows: Sequence[Sequence[str]], key_col: int, val_col: int) -> GroupedResult:
    """
    키 컬럼 기준으로 값 컬럼을 그룹화합니다.

    변환할 수 없는 값이 하나라도 있으면 전체 연산이 실패합니다.

    Args:
        rows: 텍스트 셀 행 목록
        key_col: 그룹 키 컬럼 인덱스
        val_col: 값 컬럼 인덱스

    Returns:
        키 -> 값 리스트 (값 순서는 입력 행 순서)

    Raises:
        DimensionMismatchError: 행이 key_col 또는 val_col보다 짧을 때
        ParseFailureError: 값 셀을 숫자로 변환할 수 없을 때
    """
    result: GroupedResult = {}
    for i, row in enumerate(rows):
        if len(row) <= key_col or len(row) <= val_col:
            raise DimensionMismatchError(
                f"row {i} out of range for key_col={key_col} or val_col={val_col}",
                row_index=i
            )
        value = _parse_cell(row, i, val_col)
        result.setdefault(row[key_col], []).append(value)
    return result


def lookup_group(groups: Dict[str, object], key: str):
    """그룹 결과에서 키 조회 (없으면 KeyNotFoundError)"""
    if key not in groups:
        raise KeyNotFoundError(key)
    return groups[key]


# ================================================================================
# Cell Reducers
# ================================================================================

def _sum(values: Sequence[float]) -> float:
    return float(np.sum(np.asarray(values, dtype=float))) if len(values) else 0.0


def _mean(values: Sequence[float]) -> float:
    if not len(values):
        return 0.0
    return _sum(values) / len(values)


def _min(values: Sequence[float]) -> float:
    return float(np.min(np.asarray(values, dtype=float)))


def _max(values: Sequence[float]) -> float:
    return float(np.max(np.asarray(values, dtype=float)))


def _count(values: Sequence[float]) -> float:
    return float(len(values))


def _median(values: Sequence[float]) -> float:
    if not len(values):
        return 0.0
    data = np.sort(np.asarray(values, dtype=float))
    mid = len(data) // 2
    if len(data) % 2 == 0:
        return float((data[mid - 1] + data[mid]) / 2)
    return float(data[mid])


def _stddev(values: Sequence[float]) -> float:
    # 0개 또는 1개: 분모(N-1)가 0 이하이므로 0으로 정의
    if len(values) <= 1:
        return 0.0
    data = np.asarray(values, dtype=float)
    center = np.sum(data) / len(data)
    sample_variance = np.sum((data - center) ** 2) / (len(data) - 1)
    return math.sqrt(float(sample_variance))


# ================================================================================
# Grouped Reducers
# ================================================================================

def grouped_sum(groups: GroupedResult) -> Dict[str, float]:
    """그룹별 합계"""
    return {key: _sum(values) for key, values in groups.items()}


def grouped_mean(groups: GroupedResult) -> Dict[str, float]:
    """그룹별 평균 (빈 그룹은 0)"""
    return {key: _mean(values) for key, values in groups.items()}


def grouped_count(groups: GroupedResult) -> Dict[str, int]:
    """그룹별 개수 (모든 키 포함)"""
    return {key: len(values) for key, values in groups.items()}


def grouped_min(groups: GroupedResult) -> Dict[str, float]:
    """그룹별 최솟값 (빈 그룹 제외)"""
    return {key: _min(values) for key, values in groups.items() if len(values)}


def grouped_max(groups: GroupedResult) -> Dict[str, float]:
    """그룹별 최댓값 (빈 그룹 제외)"""
    return {key: _max(values) for key, values in groups.items() if len(values)}


def grouped_median(groups: GroupedResult) -> Dict[str, float]:
    return {key: _median(values) for key, values in groups.items()}


def grouped_stddev(groups: GroupedResult) -> Dict[str, float]:
    return {key: _stddev(values) for key, values in groups.items()}


# ================================================================================
# Aggregate Function Enumeration
# ================================================================================

class AggregateFunction(str, Enum):
    """집계 함수 식별자"""
    SUM = "sum"
    MEAN = "mean"
    MIN = "min"
    MAX = "max"
    COUNT = "count"
    MEDIAN = "median"
    STDDEV = "stddev"

    @classmethod
    def parse(cls, name: Union[str, "AggregateFunction"]) -> "AggregateFunction":
        """
        문자열을 집계 함수로 변환합니다. API 경계에서 한 번만 호출합니다.

        Raises:
            UnsupportedOperationError: 허용된 집합에 없는 이름일 때
        """
        if isinstance(name, cls):
            return name
        try:
            return cls(str(name).strip().lower())
        except ValueError:
            raise UnsupportedOperationError(
                f"aggregate function '{name}'", supported=[f.value for f in cls]
            ) from None

    @property
    def reduce(self) -> Reducer:
        """비어 있지 않은 셀 하나를 스칼라로 줄이는 함수"""
        return _CELL_REDUCERS[self]

    def apply(self, groups: GroupedResult) -> Dict[str, float]:
        """그룹 결과 전체에 집계 함수 적용"""
        return _GROUPED_REDUCERS[self](groups)


_CELL_REDUCERS: Dict[AggregateFunction, Reducer] = {
    AggregateFunction.SUM: _sum,
    AggregateFunction.MEAN: _mean,
    AggregateFunction.MIN: _min,
    AggregateFunction.MAX: _max,
    AggregateFunction.COUNT: _count,
    AggregateFunction.MEDIAN: _median,
    AggregateFunction.STDDEV: _stddev,
}

_GROUPED_REDUCERS: Dict[AggregateFunction, Callable[[GroupedResult], Dict[str, float]]] = {
    AggregateFunction.SUM: grouped_sum,
    AggregateFunction.MEAN: grouped_mean,
    AggregateFunction.MIN: grouped_min,
    AggregateFunction.MAX: grouped_max,
    AggregateFunction.COUNT: grouped_count,
    AggregateFunction.MEDIAN: grouped_median,
    AggregateFunction.STDDEV: grouped_stddev,
}


# ================================================================================
# Pivot
# ================================================================================

def pivot(
    rows: Sequence[Sequence[str]],
    row_key_col: int,
    col_key_col: int,
    val_col: int,
    reducer: Reducer
) -> PivotTable:
    """
    두 키 컬럼으로 피벗 테이블을 생성합니다.

    Args:
        rows: 텍스트 셀 행 목록
        row_key_col: 행 키 컬럼 인덱스
        col_key_col: 열 키 컬럼 인덱스
        val_col: 값 컬럼 인덱스
        reducer: 셀 값 리스트를 스칼라로 줄이는 함수

    Returns:
        행 키 -> 열 키 -> 집계값

    Raises:
        DimensionMismatchError: 행이 참조 컬럼보다 짧을 때
        ParseFailureError: 값 셀을 숫자로 변환할 수 없을 때
    """
    cells: Dict[str, Dict[str, List[float]]] = {}
    for i, row in enumerate(rows):
        if len(row) <= val_col or len(row) <= row_key_col or len(row) <= col_key_col:
            raise DimensionMismatchError(f"row {i} out of range", row_index=i)

        value = _parse_cell(row, i, val_col)
        cells.setdefault(row[row_key_col], {}).setdefault(row[col_key_col], []).append(value)

    return {
        row_key: {col_key: reducer(values) for col_key, values in col_map.items()}
        for row_key, col_map in cells.items()
    }


def pivot_table(
    rows: Sequence[Sequence[str]],
    row_key_col: int,
    col_key_col: int,
    val_col: int,
    aggregate: AggregateFunction
) -> PivotTable:
    return pivot(rows, row_key_col, col_key_col, val_col, aggregate.reduce)


def pivot_sum(rows, row_key_col, col_key_col, val_col) -> PivotTable:
    return pivot(rows, row_key_col, col_key_col, val_col, _sum)


def pivot_mean(rows, row_key_col, col_key_col, val_col) -> PivotTable:
    return pivot(rows, row_key_col, col_key_col, val_col, _mean)


def pivot_min(rows, row_key_col, col_key_col, val_col) -> PivotTable:
    return pivot(rows, row_key_col, col_key_col, val_col, _min)


def pivot_max(rows, row_key_col, col_key_col, val_col) -> PivotTable:
    return pivot(rows, row_key_col, col_key_col, val_col, _max)


def pivot_count(rows, row_key_col, col_key_col, val_col) -> PivotTable:
    return pivot(rows, row_key_col, col_key_col, val_col, _count)


def pivot_median(rows, row_key_col, col_key_col, val_col) -> PivotTable:
    return pivot(rows, row_key_col, col_key_col, val_col, _median)


def pivot_stddev(rows, row_key_col, col_key_col, val_col) -> PivotTable:
    """셀당 표본 표준편차 (값이 하나인 셀은 0)"""
    return pivot(rows, row_key_col, col_key_col, val_col, _stddev)


def lookup_pivot_cell(table: PivotTable, row_key: str, col_key: str) -> float:
    """피벗 셀 조회 (행 키 또는 열 키가 없으면 KeyNotFoundError)"""
    columns = lookup_group(table, row_key)
    return lookup_group(columns, col_key)
