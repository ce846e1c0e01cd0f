"""
Chart.js 포맷 어댑터

숫자 결과를 차트 프론트엔드가 기대하는 라벨/값 쌍으로 변환합니다.
라벨 형식("[%.2f, %.2f]", "%.2f")은 외부 소비자와의 계약이므로
바이트 단위로 동일하게 유지해야 합니다.
"""

from typing import Sequence

from ..models.charts import (
    BoxPlotChartData,
    CorrelationMatrixData,
    HistogramChartData,
    KDEChartData,
)
from .correlation import CorrelationResult
from .outlier_detection import BoxPlotSummary

BOX_PLOT_LABELS = ["Q1", "Q3", "Lower Outlier", "Upper Outlier"]


def format_bin_label(lower: float, upper: float) -> str:
    return "[%.2f, %.2f]" % (lower, upper)


def format_point_label(x: float) -> str:
    return "%.2f" % x


def format_histogram_for_chartjs(
    bin_edges: Sequence[float],
    bin_counts: Sequence[int]
) -> HistogramChartData:
    """구간 경계 쌍을 라벨로 변환 (구간 수 = len(bin_counts))"""
    labels = [format_bin_label(bin_edges[i], bin_edges[i + 1]) for i in range(len(bin_counts))]
    return HistogramChartData(labels=labels, counts=list(bin_counts))


def format_kde_for_chartjs(xs: Sequence[float], densities: Sequence[float]) -> KDEChartData:
    return KDEChartData(
        labels=[format_point_label(x) for x in xs],
        densities=list(densities)
    )


def format_box_plot_for_chartjs(summary: BoxPlotSummary) -> BoxPlotChartData:
    """박스 플롯 요약을 라벨/값 + 통계 블록으로 변환"""
    return BoxPlotChartData(
        labels=list(BOX_PLOT_LABELS),
        values=[summary.q1, summary.q3, summary.lower_fence, summary.upper_fence],
        stats={
            "Q1": summary.q1,
            "Q3": summary.q3,
            "IQR": summary.iqr,
            "lower_outlier": summary.lower_fence,
            "upper_outlier": summary.upper_fence
        }
    )


def format_correlation_for_chartjs(result: CorrelationResult) -> CorrelationMatrixData:
    return CorrelationMatrixData(
        matrix=[list(row) for row in result.matrix],
        labels=list(result.labels)
    )
