"""
데이터 정제 유틸리티

결측치 처리, 타입 변환, 컬럼 변환(로그/정규화/표준화),
컬럼 삭제 및 이름 변경을 제공합니다.
모든 함수는 새 행 목록을 반환하며 입력을 변경하지 않습니다.
"""

import logging
import math
from typing import List, Sequence

import numpy as np

from ..exceptions import (
    DegenerateDistributionError,
    DimensionMismatchError,
    EmptyInputError,
    ParseFailureError,
)
from ..models.table import ParsePolicy, Table, extract_numeric_column, parse_float

logger = logging.getLogger(__name__)

Rows = List[List[str]]


def format_number(value: float) -> str:
    """지수 표기 없이 값을 구분할 수 있는 가장 짧은 소수 문자열"""
    return np.format_float_positional(value, trim='-')


# ================================================================================
# Missing Value Handling
# ================================================================================

def drop_rows_with_missing(rows: Sequence[Sequence[str]]) -> Rows:
    """빈 셀이 하나라도 있는 행 제거"""
    return [list(row) for row in rows if all(cell != "" for cell in row)]


def fill_missing_with(rows: Sequence[Sequence[str]], default_value: str) -> Rows:
    """빈 셀을 기본값으로 대체"""
    return [[default_value if cell == "" else cell for cell in row] for row in rows]


# ================================================================================
# Type Conversion
# ================================================================================

def to_float_slice(rows: Sequence[Sequence[str]], col: int) -> List[float]:
    """컬럼을 숫자 시퀀스로 추출 (짧은 행, 숫자가 아닌 셀은 건너뜀)"""
    return extract_numeric_column(rows, col, ParsePolicy.SKIP)


# ================================================================================
# Transformations
# ================================================================================

def apply_log_transformation(rows: Sequence[Sequence[str]], col: int) -> Rows:
    """
    컬럼에 자연로그를 적용합니다.

    컬럼이 없는 짧은 행은 그대로 둡니다.

    Raises:
        ParseFailureError: 셀이 숫자가 아니거나 0 이하일 때
    """
    transformed: Rows = []
    for i, row in enumerate(rows):
        if len(row) <= col:
            transformed.append(list(row))
            continue
        value = parse_float(row[col])
        if value is None or not value > 0:
            raise ParseFailureError(i, col, row[col])
        new_row = list(row)
        new_row[col] = format_number(math.log(value))
        transformed.append(new_row)
    return transformed


def normalize_column(rows: Sequence[Sequence[str]], col: int) -> Rows:
    """
    최소-최대 정규화 (결과는 "%f" 형식, 상수 컬럼은 "0")

    Raises:
        EmptyInputError: 행이 없을 때
        DimensionMismatchError: 행이 컬럼보다 짧을 때
        ParseFailureError: 숫자가 아닌 셀이 있을 때
    """
    if len(rows) == 0:
        raise EmptyInputError("normalize_column")

    values = np.asarray(extract_numeric_column(rows, col, ParsePolicy.STRICT), dtype=float)
    min_val = float(np.min(values))
    max_val = float(np.max(values))

    normalized: Rows = []
    for row, value in zip(rows, values):
        new_row = list(row)
        if max_val == min_val:
            new_row[col] = "0"
        else:
            new_row[col] = "%f" % ((value - min_val) / (max_val - min_val))
        normalized.append(new_row)
    return normalized


def standardize_column(rows: Sequence[Sequence[str]], col: int) -> Rows:
    """
    Z-Score 표준화 (모집단 표준편차 사용)

    숫자로 변환되는 셀만으로 평균/표준편차를 구하고, 변환되지 않는 셀은 그대로 둡니다.

    Raises:
        EmptyInputError: 숫자 셀이 하나도 없을 때
        DegenerateDistributionError: 표준편차가 0일 때
    """
    values = np.asarray(to_float_slice(rows, col), dtype=float)
    if len(values) == 0:
        raise EmptyInputError("standardize_column")

    center = float(np.mean(values))
    spread = float(np.std(values))
    if spread == 0:
        raise DegenerateDistributionError("standardize_column")

    standardized: Rows = []
    for row in rows:
        new_row = list(row)
        if len(row) > col:
            value = parse_float(row[col])
            if value is not None:
                new_row[col] = format_number((value - center) / spread)
        standardized.append(new_row)
    return standardized


# ================================================================================
# Column Operations
# ================================================================================

def drop_columns(table: Table, columns: Sequence[int]) -> Table:
    """지정한 인덱스의 컬럼을 헤더와 모든 행에서 제거"""
    drop = set(columns)
    return Table(
        header=[name for j, name in enumerate(table.header) if j not in drop],
        rows=[[cell for j, cell in enumerate(row) if j not in drop] for row in table.rows]
    )


def rename_columns(table: Table, new_header: Sequence[str]) -> Table:
    """
    헤더를 교체한 새 Table 반환

    Raises:
        DimensionMismatchError: 새 헤더 길이가 기존 헤더와 다를 때
    """
    if len(new_header) != len(table.header):
        raise DimensionMismatchError(
            "header length mismatch",
            expected=len(table.header),
            actual=len(new_header)
        )
    return Table(header=list(new_header), rows=[list(row) for row in table.rows])
