"""
상관분석 단위 테스트

Pearson / Spearman 상관계수, 평균 순위, 상관계수 행렬과 라벨을 검증합니다.
"""

import math
import pytest
import sys
import os

# 프로젝트 루트를 Python 경로에 추가
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..'))

from insightforge.exceptions import (
    DimensionMismatchError,
    EmptyInputError,
    ParseFailureError,
    UnknownMethodError,
    ZeroVarianceError,
)
from insightforge.utils.correlation import (
    CorrelationMethod,
    build_correlation_result,
    correlation_labels,
    correlation_matrix,
    correlation_matrix_to_mapping,
    generate_correlation_label_grid,
    pearson_correlation,
    rank,
    spearman_correlation,
)


class TestPearson:
    """pearson_correlation 테스트"""

    def test_positive_linear_relation(self):
        """y = a*x + b (a > 0) 이면 1.0"""
        x = [1.0, 2.0, 3.0, 4.0, 5.0]
        for a, b in [(2.0, 1.0), (0.5, -10.0), (100.0, 3.0)]:
            y = [a * v + b for v in x]
            assert pearson_correlation(x, y) == pytest.approx(1.0)

    def test_negative_linear_relation(self):
        assert pearson_correlation([1, 2, 3], [3, 2, 1]) == pytest.approx(-1.0)

    def test_length_mismatch(self):
        with pytest.raises(DimensionMismatchError):
            pearson_correlation([1, 2, 3], [1, 2])

    def test_empty(self):
        with pytest.raises(EmptyInputError):
            pearson_correlation([], [])

    def test_constant_sequence(self):
        """상수 시퀀스 -> ZeroVarianceError"""
        with pytest.raises(ZeroVarianceError) as exc_info:
            pearson_correlation([1, 2, 3], [4, 4, 4])
        assert exc_info.value.error_kind == "zero_variance"


class TestRank:
    """rank 및 spearman_correlation 테스트"""

    def test_ties_are_averaged(self):
        assert rank([10, 20, 20, 30]) == [0.0, 1.5, 1.5, 3.0]

    def test_idempotent_on_ranks(self):
        assert rank([0, 1, 2, 3]) == [0.0, 1.0, 2.0, 3.0]

    def test_rank_empty(self):
        with pytest.raises(EmptyInputError):
            rank([])

    def test_spearman_invariant_under_monotonic_transform(self):
        """단조 증가 변환에 대해 Spearman 계수는 변하지 않음"""
        x = [1.0, 2.0, 3.0, 4.0, 5.0]
        y = [2.0, 1.0, 4.0, 3.0, 5.0]
        base = spearman_correlation(x, y)

        assert spearman_correlation([math.exp(v) for v in x], y) == pytest.approx(base)
        assert spearman_correlation(x, [v ** 3 for v in y]) == pytest.approx(base)
        assert base == pytest.approx(0.8)

    def test_spearman_length_mismatch(self):
        with pytest.raises(DimensionMismatchError):
            spearman_correlation([1, 2], [1, 2, 3])


class TestCorrelationMatrix:
    """correlation_matrix 및 라벨 테스트"""

    def setup_method(self):
        """각 테스트 메서드 실행 전 설정"""
        self.header = ["a", "b", "c"]
        self.rows = [
            ["1", "2", "5"],
            ["2", "4", "3"],
            ["3", "7", "4"],
            ["4", "8", "1"],
        ]

    @pytest.mark.parametrize("method", ["pearson", "spearman"])
    def test_matrix_is_symmetric_with_unit_diagonal(self, method):
        matrix = correlation_matrix(self.rows, [0, 1, 2], method)

        assert len(matrix) == 3
        for i in range(3):
            assert matrix[i][i] == pytest.approx(1.0)
            for j in range(3):
                assert matrix[i][j] == matrix[j][i]

    def test_method_enum_accepted(self):
        matrix = correlation_matrix(self.rows, [0, 1], CorrelationMethod.SPEARMAN)
        assert matrix[0][1] == pytest.approx(1.0)

    def test_method_is_case_sensitive(self):
        """"pearson" / "spearman" 외의 값은 UnknownMethodError"""
        with pytest.raises(UnknownMethodError) as exc_info:
            correlation_matrix(self.rows, [0, 1], "Pearson")
        assert exc_info.value.method == "Pearson"

    def test_unparseable_cell_fails_whole_matrix(self):
        rows = self.rows + [["5", "oops", "2"]]
        with pytest.raises(ParseFailureError) as exc_info:
            correlation_matrix(rows, [0, 1], "pearson")
        assert exc_info.value.row_index == 4
        assert exc_info.value.column_index == 1

    def test_labels_fall_back_to_column_index(self):
        assert correlation_labels([0, 2, 5], ["a", "b", ""]) == ["a", "Col2", "Col5"]

    def test_label_grid(self):
        grid = generate_correlation_label_grid([0, 1], self.header)
        assert grid == [
            ["", "a", "b"],
            ["a", "", ""],
            ["b", "", ""],
        ]

    def test_build_result_and_mapping(self):
        result = build_correlation_result(self.rows, self.header, [0, 1], "pearson")

        assert result.labels == ["a", "b"]
        mapping = correlation_matrix_to_mapping(result)
        assert mapping["a"]["a"] == pytest.approx(1.0)
        assert mapping["a"]["b"] == mapping["b"]["a"]
