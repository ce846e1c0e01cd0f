"""
Data Models

테이블 입력 모델, 필터/정렬 옵션, 차트 응답 모델을 제공합니다.
"""

from .table import (
    ColumnSelector,
    NumericSequence,
    ParsePolicy,
    Row,
    Table,
    extract_numeric_column,
    extract_numeric_column_with_rows,
    parse_float,
)
from .options import (
    NUMERIC_OPERATORS,
    FilterOperator,
    FilterOption,
    SortOption,
    SortOrder,
)
from .charts import (
    BoxPlotChartData,
    CorrelationMatrixData,
    HistogramChartData,
    KDEChartData,
)

__all__ = [
    # Table
    'Table',
    'Row',
    'NumericSequence',
    'ColumnSelector',
    'ParsePolicy',
    'parse_float',
    'extract_numeric_column',
    'extract_numeric_column_with_rows',

    # Options
    'FilterOperator',
    'FilterOption',
    'SortOrder',
    'SortOption',
    'NUMERIC_OPERATORS',

    # Charts
    'HistogramChartData',
    'KDEChartData',
    'BoxPlotChartData',
    'CorrelationMatrixData',
]
