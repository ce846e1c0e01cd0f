"""
데이터 정제 단위 테스트

결측치 처리, 로그/정규화/표준화 변환, 컬럼 삭제 및 이름 변경을 검증합니다.
"""

import math
import pytest
import sys
import os

# 프로젝트 루트를 Python 경로에 추가
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..'))

from insightforge.exceptions import (
    DegenerateDistributionError,
    DimensionMismatchError,
    EmptyInputError,
    ParseFailureError,
)
from insightforge.models.table import Table
from insightforge.utils.cleaning import (
    apply_log_transformation,
    drop_columns,
    drop_rows_with_missing,
    fill_missing_with,
    format_number,
    normalize_column,
    rename_columns,
    standardize_column,
    to_float_slice,
)


class TestMissingValues:
    """결측치 처리 테스트"""

    def test_drop_rows_with_missing(self):
        rows = [["a", "1"], ["b", ""], ["c", "3"]]
        assert drop_rows_with_missing(rows) == [["a", "1"], ["c", "3"]]
        # 원본 유지
        assert rows[1] == ["b", ""]

    def test_fill_missing_with(self):
        assert fill_missing_with([["", "x"], ["y", ""]], "0") == [["0", "x"], ["y", "0"]]

    def test_to_float_slice_skips_bad_cells(self):
        assert to_float_slice([["1.5"], ["x"], [], ["-2"]], 0) == [1.5, -2.0]


class TestTransformations:
    """컬럼 변환 테스트"""

    def test_format_number(self):
        assert format_number(0.0) == "0"
        assert format_number(2.5) == "2.5"
        assert format_number(1e20) == "100000000000000000000"

    def test_log_transformation(self):
        rows = [["a", "1"], ["b", "100"], ["c"]]
        result = apply_log_transformation(rows, 1)

        assert result[0][1] == "0"
        assert float(result[1][1]) == pytest.approx(math.log(100))
        # 컬럼이 없는 행은 그대로
        assert result[2] == ["c"]
        assert rows[1][1] == "100"

    @pytest.mark.parametrize("bad", ["0", "-3", "abc", ""])
    def test_log_transformation_rejects_invalid(self, bad):
        with pytest.raises(ParseFailureError) as exc_info:
            apply_log_transformation([["2"], [bad]], 0)
        assert exc_info.value.row_index == 1

    def test_normalize_column(self):
        result = normalize_column([["0"], ["5"], ["10"]], 0)
        assert [r[0] for r in result] == ["0.000000", "0.500000", "1.000000"]

    def test_normalize_constant_column(self):
        assert normalize_column([["4"], ["4"]], 0) == [["0"], ["0"]]

    def test_normalize_errors(self):
        with pytest.raises(EmptyInputError):
            normalize_column([], 0)
        with pytest.raises(ParseFailureError):
            normalize_column([["1"], ["x"]], 0)
        with pytest.raises(DimensionMismatchError):
            normalize_column([["1"], []], 0)

    def test_standardize_column(self):
        """모집단 표준편차 기준 Z-Score, 숫자가 아닌 셀은 그대로"""
        result = standardize_column([["1"], ["2"], ["3"], ["x"]], 0)
        spread = math.sqrt(2 / 3)

        assert float(result[0][0]) == pytest.approx(-1 / spread)
        assert result[1][0] == "0"
        assert float(result[2][0]) == pytest.approx(1 / spread)
        assert result[3][0] == "x"

    def test_standardize_errors(self):
        with pytest.raises(DegenerateDistributionError):
            standardize_column([["3"], ["3"]], 0)
        with pytest.raises(EmptyInputError):
            standardize_column([["x"], ["y"]], 0)


class TestColumnOperations:
    """컬럼 삭제 / 이름 변경 테스트"""

    def setup_method(self):
        """각 테스트 메서드 실행 전 설정"""
        self.table = Table(header=["a", "b", "c"], rows=[["1", "2", "3"], ["4", "5", "6"]])

    def test_drop_columns(self):
        result = drop_columns(self.table, [1])

        assert result.header == ["a", "c"]
        assert result.rows == [["1", "3"], ["4", "6"]]
        assert self.table.header == ["a", "b", "c"]

    def test_rename_columns(self):
        result = rename_columns(self.table, ["x", "y", "z"])
        assert result.header == ["x", "y", "z"]
        assert result.rows == self.table.rows

    def test_rename_length_mismatch(self):
        with pytest.raises(DimensionMismatchError):
            rename_columns(self.table, ["x", "y"])
