"""
Chart.js 포맷 어댑터 테스트

라벨 문자열 형식이 바이트 단위로 유지되는지 검증합니다.
"""

import pytest
import sys
import os

# 프로젝트 루트를 Python 경로에 추가
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..'))

from insightforge.models.charts import BoxPlotChartData, CorrelationMatrixData
from insightforge.utils.chart_formatting import (
    BOX_PLOT_LABELS,
    format_box_plot_for_chartjs,
    format_correlation_for_chartjs,
    format_histogram_for_chartjs,
    format_kde_for_chartjs,
)
from insightforge.utils.correlation import CorrelationResult
from insightforge.utils.distribution import histogram
from insightforge.utils.outlier_detection import box_plot_data


class TestChartFormatting:
    """차트 포맷 변환 테스트"""

    def test_histogram_labels(self):
        result = histogram([1, 2, 3, 4, 5], 2)
        chart = format_histogram_for_chartjs(result.bin_edges, result.bin_counts)

        assert chart.labels == ["[1.00, 3.00]", "[3.00, 5.00]"]
        assert chart.counts == [2, 3]

    def test_negative_and_fractional_bin_labels(self):
        chart = format_histogram_for_chartjs([-1.5, 0.25, 2.0], [1, 4])
        assert chart.labels == ["[-1.50, 0.25]", "[0.25, 2.00]"]

    def test_kde_labels(self):
        chart = format_kde_for_chartjs([0.0, 0.5, 1.25], [0.1, 0.2, 0.3])

        assert chart.labels == ["0.00", "0.50", "1.25"]
        assert chart.densities == [0.1, 0.2, 0.3]

    def test_box_plot_payload(self):
        chart = format_box_plot_for_chartjs(box_plot_data([1, 2, 3, 4, 100]))

        assert isinstance(chart, BoxPlotChartData)
        assert chart.labels == ["Q1", "Q3", "Lower Outlier", "Upper Outlier"]
        assert chart.values == pytest.approx([1.5, 52.0, -74.25, 127.75])
        assert chart.stats["IQR"] == pytest.approx(50.5)
        assert chart.stats["lower_outlier"] == pytest.approx(-74.25)

    def test_box_plot_labels_not_shared(self):
        """반환된 라벨 목록을 수정해도 상수는 변하지 않음"""
        chart = format_box_plot_for_chartjs(box_plot_data([1, 2, 3, 4]))
        chart.labels.append("extra")
        assert BOX_PLOT_LABELS == ["Q1", "Q3", "Lower Outlier", "Upper Outlier"]

    def test_correlation_payload(self):
        result = CorrelationResult(matrix=[[1.0, 0.5], [0.5, 1.0]], labels=["x", "y"])
        chart = format_correlation_for_chartjs(result)

        assert isinstance(chart, CorrelationMatrixData)
        assert chart.model_dump() == {"matrix": [[1.0, 0.5], [0.5, 1.0]], "labels": ["x", "y"]}
