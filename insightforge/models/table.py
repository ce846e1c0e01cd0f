"""
Tabular Data Model

엔진의 유일한 입력 형태인 Table(헤더 + 텍스트 셀 행)과
텍스트 셀을 숫자 시퀀스로 변환하는 어댑터를 정의합니다.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

import pandas as pd

from ..exceptions import (
    ColumnNotFoundError,
    DimensionMismatchError,
    ParseFailureError,
    UnsupportedOperationError,
)

logger = logging.getLogger(__name__)

Row = List[str]
NumericSequence = List[float]
ColumnSelector = Union[str, int]


class ParsePolicy(str, Enum):
    """텍스트 셀의 숫자 변환 정책"""
    SKIP = "skip"      # 변환 불가 셀은 건너뜀
    STRICT = "strict"  # 변환 불가 셀이 있으면 전체 연산 실패

    @classmethod
    def parse(cls, value: Union[str, "ParsePolicy"]) -> "ParsePolicy":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise UnsupportedOperationError(
                f"parse policy '{value}'", supported=[p.value for p in cls]
            ) from None


def parse_float(text: str) -> Optional[float]:
    """
    텍스트 셀을 float로 변환합니다.

    부호, 지수 표기, inf/nan 리터럴은 허용하고
    앞뒤 공백, 밑줄 구분자, 빈 문자열, ASCII가 아닌 숫자(전각/아랍 숫자 등)는 거부합니다.

    Returns:
        변환된 값, 변환할 수 없으면 None
    """
    if not isinstance(text, str) or not text:
        return None
    if not text.isascii() or text != text.strip() or "_" in text:
        return None
    try:
        return float(text)
    except ValueError:
        return None


def extract_numeric_column(
    rows: Sequence[Sequence[str]],
    column_index: int,
    policy: ParsePolicy = ParsePolicy.SKIP
) -> NumericSequence:
    """
    행 데이터에서 한 컬럼을 숫자 시퀀스로 추출합니다.

    Args:
        rows: 텍스트 셀 행 목록
        column_index: 0부터 시작하는 컬럼 인덱스
        policy: SKIP이면 짧은 행과 변환 불가 셀을 건너뛰고,
            STRICT이면 첫 번째 문제 행에서 예외를 발생시킵니다.

    Raises:
        DimensionMismatchError: STRICT 정책에서 행이 컬럼보다 짧을 때
        ParseFailureError: STRICT 정책에서 셀을 숫자로 변환할 수 없을 때
    """
    _, values = extract_numeric_column_with_rows(rows, column_index, policy)
    return values


def extract_numeric_column_with_rows(
    rows: Sequence[Sequence[str]],
    column_index: int,
    policy: ParsePolicy = ParsePolicy.SKIP
) -> Tuple[List[int], NumericSequence]:
    """
    extract_numeric_column과 같지만 각 값의 원래 행 번호도 함께 반환합니다.

    Returns:
        (행 번호 목록, 숫자 시퀀스) - 두 목록의 길이는 같습니다.
    """
    row_indices: List[int] = []
    values: NumericSequence = []
    for i, row in enumerate(rows):
        if column_index >= len(row):
            if policy is ParsePolicy.STRICT:
                raise DimensionMismatchError(
                    f"row {i} has no column {column_index}",
                    row_index=i,
                    column_index=column_index
                )
            continue

        cell = row[column_index]
        value = parse_float(cell)
        if value is None:
            if policy is ParsePolicy.STRICT:
                raise ParseFailureError(i, column_index, cell)
            continue
        row_indices.append(i)
        values.append(value)
    return row_indices, values


@dataclass
class Table:
    """헤더와 텍스트 셀 행으로 구성된 테이블"""
    header: List[str] = field(default_factory=list)
    rows: List[Row] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.rows)

    def column_index(self, column: ColumnSelector) -> int:
        """
        컬럼 이름 또는 인덱스를 0부터 시작하는 인덱스로 변환합니다.

        이름이 여러 번 나오면 첫 번째 컬럼을 사용합니다.

        Raises:
            ColumnNotFoundError: 헤더에 없는 이름이거나 음수 인덱스일 때
        """
        if isinstance(column, int) and not isinstance(column, bool):
            if column < 0:
                raise ColumnNotFoundError(column)
            return column
        for i, name in enumerate(self.header):
            if name == column:
                return i
        raise ColumnNotFoundError(column)

    def column_name(self, index: int) -> Optional[str]:
        """인덱스에 해당하는 헤더 이름 (없거나 비어 있으면 None)"""
        if 0 <= index < len(self.header) and self.header[index]:
            return self.header[index]
        return None

    def numeric_column(
        self,
        column: ColumnSelector,
        policy: ParsePolicy = ParsePolicy.SKIP
    ) -> NumericSequence:
        """컬럼을 숫자 시퀀스로 추출"""
        return extract_numeric_column(self.rows, self.column_index(column), policy)

    def numeric_column_with_rows(
        self,
        column: ColumnSelector,
        policy: ParsePolicy = ParsePolicy.SKIP
    ) -> Tuple[List[int], NumericSequence]:
        """컬럼을 (원래 행 번호, 숫자 시퀀스)로 추출"""
        return extract_numeric_column_with_rows(self.rows, self.column_index(column), policy)

    def to_dataframe(self) -> pd.DataFrame:
        """
        pandas DataFrame으로 변환합니다. 모든 셀은 문자열로 유지됩니다.

        Raises:
            DimensionMismatchError: 행 길이가 헤더 길이와 다를 때
        """
        for i, row in enumerate(self.rows):
            if len(row) != len(self.header):
                raise DimensionMismatchError(
                    f"row {i} has {len(row)} cells, header has {len(self.header)}",
                    row_index=i
                )
        return pd.DataFrame([list(row) for row in self.rows], columns=list(self.header), dtype=object)

    @classmethod
    def from_dataframe(cls, df: pd.DataFrame) -> "Table":
        """pandas DataFrame에서 Table 생성 (결측치는 빈 문자열)"""
        header = [str(column) for column in df.columns]
        rows = [
            ["" if _is_missing(value) else str(value) for value in record]
            for record in df.itertuples(index=False, name=None)
        ]
        logger.debug(f"DataFrame 변환: {len(rows)}행, {len(header)}컬럼")
        return cls(header=header, rows=rows)

    @classmethod
    def from_records(cls, records: Sequence[Mapping[str, Any]]) -> "Table":
        """
        레코드(dict) 목록에서 Table을 생성합니다.

        헤더는 첫 번째 레코드의 키 순서를 따르며, 누락된 값은 빈 문자열이 됩니다.
        """
        if not records:
            return cls()
        keys = list(records[0].keys())
        header = [str(key) for key in keys]
        rows = []
        for record in records:
            rows.append([
                "" if _is_missing(record.get(key)) else str(record.get(key))
                for key in keys
            ])
        return cls(header=header, rows=rows)

    def to_records(self) -> List[Dict[str, str]]:
        """헤더 이름을 키로 하는 레코드 목록 반환 (헤더보다 긴 셀은 무시)"""
        return [dict(zip(self.header, row)) for row in self.rows]


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, (list, tuple, dict, set)):
        return False
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False
