"""
AnalyticsEngine 통합 테스트

Table 입력에서 컬럼 해석, 파싱 정책, 옵션 해석, 차트 페이로드 변환까지
엔진 파사드 전체 흐름을 검증합니다.
"""

import pytest
import sys
import os

# 프로젝트 루트를 Python 경로에 추가
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..'))

from insightforge import AnalyticsEngine, FilterOption, SortOption, Table
from insightforge.exceptions import (
    ColumnNotFoundError,
    ParseFailureError,
    UnknownMethodError,
    UnsupportedOperationError,
)
from insightforge.models.charts import (
    BoxPlotChartData,
    CorrelationMatrixData,
    HistogramChartData,
    KDEChartData,
)
from insightforge.models.table import ParsePolicy
from insightforge.utils.correlation import CorrelationMethod, CorrelationResult


class TestAnalyticsEngine:
    """AnalyticsEngine 테스트 클래스"""

    def setup_method(self):
        """각 테스트 메서드 실행 전 설정"""
        self.engine = AnalyticsEngine()
        self.table = Table(
            header=["region", "product", "sales", "units"],
            rows=[
                ["North", "A", "100", "10"],
                ["North", "B", "200", "20"],
                ["South", "A", "150", "15"],
                ["South", "B", "50", "5"],
            ]
        )
        self.dirty = Table(
            header=["id", "value"],
            rows=[["1", "1"], ["2", "2"], ["3", "n/a"], ["4", "3"], ["5", "4"], ["6", "100"]]
        )

    def test_default_config(self):
        """기본 설정이 올바르게 로드되는지 테스트"""
        assert self.engine.config['zscore_threshold'] == 3.0
        assert self.engine.parse_policy is ParsePolicy.SKIP
        assert self.engine.correlation_method is CorrelationMethod.PEARSON

    def test_custom_config(self):
        """사용자 정의 설정이 올바르게 적용되는지 테스트"""
        engine = AnalyticsEngine(config={
            'histogram_bins': 4,
            'numeric_parse_policy': 'strict',
            'correlation_method': 'spearman'
        })

        assert engine.config['histogram_bins'] == 4
        assert engine.parse_policy is ParsePolicy.STRICT
        assert engine.correlation_method is CorrelationMethod.SPEARMAN

    def test_invalid_config_method(self):
        with pytest.raises(UnknownMethodError):
            AnalyticsEngine(config={'correlation_method': 'kendall'})

    def test_describe_column(self):
        stats = self.engine.describe_column(self.table, "sales")

        assert stats.count == 4
        assert stats.mean == pytest.approx(125.0)
        assert stats.median == pytest.approx(125.0)
        assert stats.range == 150.0

    def test_describe_by_index_and_many(self):
        stats = self.engine.describe_columns(self.table, ["sales", 3])

        assert list(stats.keys()) == ["sales", "units"]
        assert stats["units"].sum == 50.0

    def test_parse_policy_skip_and_strict(self):
        """SKIP은 변환 불가 셀을 건너뛰고 STRICT는 실패"""
        stats = self.engine.describe_column(self.dirty, "value")
        assert stats.count == 5

        strict = AnalyticsEngine(config={'numeric_parse_policy': 'strict'})
        with pytest.raises(ParseFailureError) as exc_info:
            strict.describe_column(self.dirty, "value")
        assert exc_info.value.row_index == 2

    def test_unknown_column(self):
        with pytest.raises(ColumnNotFoundError):
            self.engine.describe_column(self.table, "profit")

    def test_aggregate(self):
        assert self.engine.aggregate(self.table, "region", "sales", "sum") == {
            "North": 300.0,
            "South": 200.0
        }
        assert self.engine.aggregate(self.table, "product", "units", "MAX") == {"A": 15.0, "B": 20.0}

    def test_aggregate_unknown_function(self):
        with pytest.raises(UnsupportedOperationError):
            self.engine.aggregate(self.table, "region", "sales", "avg")

    def test_group_by_is_strict(self):
        """그룹화는 설정과 관계없이 변환 실패 시 전체 실패"""
        with pytest.raises(ParseFailureError):
            self.engine.group_by(self.dirty, "id", "value")

    def test_pivot(self):
        table = self.engine.pivot(self.table, "region", "product", "sales", "mean")
        assert table == {
            "North": {"A": 100.0, "B": 200.0},
            "South": {"A": 150.0, "B": 50.0}
        }

    def test_correlation_matrix(self):
        result = self.engine.correlation_matrix(self.table, ["sales", "units"])

        assert isinstance(result, CorrelationResult)
        assert result.labels == ["sales", "units"]
        assert result.matrix[0][1] == pytest.approx(1.0)

    def test_correlation_chart_and_method(self):
        chart = self.engine.correlation_matrix(self.table, [2, 3], method="spearman", chart=True)
        assert isinstance(chart, CorrelationMatrixData)
        assert chart.labels == ["sales", "units"]

        with pytest.raises(UnknownMethodError):
            self.engine.correlation_matrix(self.table, ["sales", "units"], method="kendall")

    def test_histogram(self):
        result = self.engine.histogram(self.table, "sales")
        assert len(result.bin_counts) == 10
        assert sum(result.bin_counts) == 4

        chart = self.engine.histogram(self.table, "sales", num_bins=3, chart=True)
        assert isinstance(chart, HistogramChartData)
        assert chart.labels[0] == "[50.00, 100.00]"
        assert sum(chart.counts) == 4

    def test_kde(self):
        result = self.engine.kde(self.table, "units")
        assert len(result.xs) == 100

        chart = self.engine.kde(self.table, "units", num_points=5, bandwidth=2.0, chart=True)
        assert isinstance(chart, KDEChartData)
        assert chart.labels == ["5.00", "8.75", "12.50", "16.25", "20.00"]

    def test_box_plot(self):
        summary = self.engine.box_plot(self.table, "sales")
        assert summary.q1 == pytest.approx(75.0)
        assert summary.q3 == pytest.approx(175.0)

        chart = self.engine.box_plot(self.table, "sales", chart=True)
        assert isinstance(chart, BoxPlotChartData)
        assert chart.values[:2] == pytest.approx([75.0, 175.0])

    def test_outliers(self):
        """SKIP 정책에서 건너뛴 셀이 있어도 인덱스는 테이블 행 번호"""
        assert self.engine.zscore_outliers(self.dirty, "value") == []
        indices = self.engine.zscore_outliers(self.dirty, "value", threshold=1.5)
        assert indices == [5]
        assert self.dirty.rows[indices[0]] == ["6", "100"]

        result = self.engine.iqr_outliers(self.dirty, "value")
        assert result.indices == []
        assert result.upper_bound == pytest.approx(127.75)

    def test_iqr_outlier_rows_skip_unparseable_cells(self):
        """IQR 이상치 인덱스도 건너뛴 셀을 반영한 테이블 행 번호"""
        table = Table(
            header=["id", "value"],
            rows=[["a", "1"], ["b", "x"], ["c", "2"], ["d", "3"],
                  ["e", "4"], ["f", "100"], ["g", "1000"]]
        )
        result = self.engine.iqr_outliers(table, "value")

        assert result.indices == [6]
        assert table.rows[6] == ["g", "1000"]
        assert result.upper_bound == pytest.approx(247.0)

    def test_filter_sort(self):
        result = self.engine.filter_sort(
            self.table,
            filters=[FilterOption(column="region", operator="eq", value="South")],
            sort=SortOption(column="sales", order="asc")
        )

        assert isinstance(result, Table)
        assert result.header == self.table.header
        assert [r[2] for r in result.rows] == ["50", "150"]
        # 원본 유지
        assert len(self.table.rows) == 4
