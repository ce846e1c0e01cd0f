"""
Analytics Utilities

기술 통계, 사분위수/이상치, 집계/피벗, 상관분석, 분포 추정,
필터/정렬, 데이터 정제, 차트 포맷 변환 함수를 제공합니다.
"""

from .descriptive_statistics import (
    SummaryStats,
    count,
    maximum,
    mean,
    median,
    minimum,
    mode,
    std_dev,
    summarize,
    total,
    value_range,
    variance,
)
from .outlier_detection import (
    IQR_FENCE_MULTIPLIER,
    BoxPlotSummary,
    IQROutlierResult,
    box_plot_data,
    iqr_outliers,
    quantiles,
    zscore_outliers,
)
from .aggregation import (
    AggregateFunction,
    GroupedResult,
    PivotTable,
    group_by,
    grouped_count,
    grouped_max,
    grouped_mean,
    grouped_median,
    grouped_min,
    grouped_stddev,
    grouped_sum,
    lookup_group,
    lookup_pivot_cell,
    pivot,
    pivot_count,
    pivot_max,
    pivot_mean,
    pivot_median,
    pivot_min,
    pivot_stddev,
    pivot_sum,
    pivot_table,
)
from .correlation import (
    CorrelationMethod,
    CorrelationResult,
    build_correlation_result,
    correlation_labels,
    correlation_matrix,
    correlation_matrix_to_mapping,
    extract_float_columns,
    generate_correlation_label_grid,
    pearson_correlation,
    rank,
    spearman_correlation,
)
from .distribution import (
    HistogramResult,
    KDEResult,
    histogram,
    kde_approximate,
)
from .filter_sort import (
    apply_filter_sort,
    apply_sort,
    parse_filter_sort,
)
from .cleaning import (
    apply_log_transformation,
    drop_columns,
    drop_rows_with_missing,
    fill_missing_with,
    normalize_column,
    rename_columns,
    standardize_column,
    to_float_slice,
)
from .chart_formatting import (
    format_box_plot_for_chartjs,
    format_correlation_for_chartjs,
    format_histogram_for_chartjs,
    format_kde_for_chartjs,
)

__all__ = [
    # Descriptive statistics
    'SummaryStats',
    'mean',
    'median',
    'mode',
    'variance',
    'std_dev',
    'minimum',
    'maximum',
    'value_range',
    'total',
    'count',
    'summarize',

    # Quantiles & outliers
    'IQR_FENCE_MULTIPLIER',
    'BoxPlotSummary',
    'IQROutlierResult',
    'quantiles',
    'box_plot_data',
    'zscore_outliers',
    'iqr_outliers',

    # Aggregation & pivot
    'AggregateFunction',
    'GroupedResult',
    'PivotTable',
    'group_by',
    'grouped_sum',
    'grouped_mean',
    'grouped_count',
    'grouped_min',
    'grouped_max',
    'grouped_median',
    'grouped_stddev',
    'lookup_group',
    'lookup_pivot_cell',
    'pivot',
    'pivot_table',
    'pivot_sum',
    'pivot_mean',
    'pivot_min',
    'pivot_max',
    'pivot_count',
    'pivot_median',
    'pivot_stddev',

    # Correlation
    'CorrelationMethod',
    'CorrelationResult',
    'pearson_correlation',
    'spearman_correlation',
    'rank',
    'extract_float_columns',
    'correlation_matrix',
    'correlation_labels',
    'generate_correlation_label_grid',
    'build_correlation_result',
    'correlation_matrix_to_mapping',

    # Distribution
    'HistogramResult',
    'KDEResult',
    'histogram',
    'kde_approximate',

    # Filter & sort
    'apply_sort',
    'apply_filter_sort',
    'parse_filter_sort',

    # Cleaning
    'drop_rows_with_missing',
    'fill_missing_with',
    'to_float_slice',
    'apply_log_transformation',
    'normalize_column',
    'standardize_column',
    'drop_columns',
    'rename_columns',

    # Chart formatting
    'format_histogram_for_chartjs',
    'format_kde_for_chartjs',
    'format_box_plot_for_chartjs',
    'format_correlation_for_chartjs',
]
