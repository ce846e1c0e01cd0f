"""
Analytics Engine

Table 입력을 받아 기술 통계, 집계/피벗, 상관분석, 분포 추정,
이상치 탐지, 필터/정렬을 수행하는 파사드입니다.

컬럼 이름을 인덱스로 변환하고, 연산별 숫자 변환 정책을 적용하며,
열거형 옵션(집계 함수, 상관분석 방법)을 경계에서 한 번만 해석합니다.
모든 예외는 호출자에게 그대로 전달됩니다.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from ..config import merge_config
from ..models.charts import (
    BoxPlotChartData,
    CorrelationMatrixData,
    HistogramChartData,
    KDEChartData,
)
from ..models.options import FilterOption, SortOption
from ..models.table import ColumnSelector, NumericSequence, ParsePolicy, Table
from ..utils.aggregation import (
    AggregateFunction,
    GroupedResult,
    PivotTable,
    group_by,
    pivot_table,
)
from ..utils.chart_formatting import (
    format_box_plot_for_chartjs,
    format_correlation_for_chartjs,
    format_histogram_for_chartjs,
    format_kde_for_chartjs,
)
from ..utils.correlation import CorrelationMethod, CorrelationResult, build_correlation_result
from ..utils.descriptive_statistics import SummaryStats, summarize
from ..utils.distribution import HistogramResult, KDEResult, histogram, kde_approximate
from ..utils.filter_sort import apply_filter_sort
from ..utils.outlier_detection import (
    BoxPlotSummary,
    IQROutlierResult,
    box_plot_data,
    iqr_outliers,
    zscore_outliers,
)

logger = logging.getLogger(__name__)


class AnalyticsEngine:
    """
    테이블 분석 엔진

    상태는 생성 시 병합된 설정뿐이며, 모든 메서드는 입력을 변경하지 않습니다.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Args:
            config: 기본 설정 위에 덮어쓸 설정 (zscore_threshold, histogram_bins,
                kde_points, kde_bandwidth, correlation_method, numeric_parse_policy)
        """
        self.config = merge_config(config)
        self.parse_policy = ParsePolicy.parse(self.config['numeric_parse_policy'])
        self.correlation_method = CorrelationMethod.parse(self.config['correlation_method'])
        logger.info("AnalyticsEngine 초기화 완료")

    # ================================================================================
    # Column Extraction
    # ================================================================================

    def _numeric_column(self, table: Table, column: ColumnSelector) -> NumericSequence:
        values = table.numeric_column(column, self.parse_policy)
        logger.debug(
            f"컬럼 추출: {column!r} -> {len(values)}/{len(table)}개 숫자 값 "
            f"(policy={self.parse_policy.value})"
        )
        return values

    def _numeric_column_with_rows(
        self,
        table: Table,
        column: ColumnSelector
    ) -> Tuple[List[int], NumericSequence]:
        return table.numeric_column_with_rows(column, self.parse_policy)

    # ================================================================================
    # Descriptive Statistics
    # ================================================================================

    def describe_column(self, table: Table, column: ColumnSelector) -> SummaryStats:
        """
        한 컬럼의 기술 통계를 계산합니다.

        Args:
            table: 입력 테이블
            column: 컬럼 이름 또는 0부터 시작하는 인덱스

        Returns:
            SummaryStats

        Raises:
            ColumnNotFoundError: 헤더에 없는 컬럼일 때
            EmptyInputError: 숫자 값이 하나도 없을 때
        """
        logger.info(f"기술 통계 계산 시작: column={column!r}, rows={len(table)}")
        return summarize(self._numeric_column(table, column))

    def describe_columns(
        self,
        table: Table,
        columns: Sequence[ColumnSelector]
    ) -> Dict[str, SummaryStats]:
        """여러 컬럼의 기술 통계 (키는 헤더 이름, 없으면 "Col{index}")"""
        results: Dict[str, SummaryStats] = {}
        for column in columns:
            index = table.column_index(column)
            label = table.column_name(index) or f"Col{index}"
            results[label] = self.describe_column(table, index)
        return results

    # ================================================================================
    # Aggregation & Pivot
    # ================================================================================

    def group_by(self, table: Table, key: ColumnSelector, value: ColumnSelector) -> GroupedResult:
        """키 컬럼으로 값 컬럼을 그룹화 (변환 실패 시 전체 실패)"""
        key_col = table.column_index(key)
        val_col = table.column_index(value)
        logger.info(f"그룹화 시작: key={key!r}, value={value!r}, rows={len(table)}")
        return group_by(table.rows, key_col, val_col)

    def aggregate(
        self,
        table: Table,
        key: ColumnSelector,
        value: ColumnSelector,
        func: Union[str, AggregateFunction]
    ) -> Dict[str, float]:
        """
        그룹별 집계를 수행합니다.

        Args:
            table: 입력 테이블
            key: 그룹 키 컬럼
            value: 값 컬럼
            func: 집계 함수 이름 또는 AggregateFunction

        Raises:
            UnsupportedOperationError: 알 수 없는 집계 함수일 때
            ParseFailureError: 값 셀을 숫자로 변환할 수 없을 때
        """
        aggregate = AggregateFunction.parse(func)
        groups = self.group_by(table, key, value)
        result = aggregate.apply(groups)
        logger.debug(f"집계 완료: func={aggregate.value}, groups={len(result)}")
        return result

    def pivot(
        self,
        table: Table,
        row_key: ColumnSelector,
        col_key: ColumnSelector,
        value: ColumnSelector,
        func: Union[str, AggregateFunction]
    ) -> PivotTable:
        """두 키 컬럼으로 피벗 테이블 생성"""
        aggregate = AggregateFunction.parse(func)
        row_key_col = table.column_index(row_key)
        col_key_col = table.column_index(col_key)
        val_col = table.column_index(value)
        logger.info(
            f"피벗 시작: row_key={row_key!r}, col_key={col_key!r}, "
            f"value={value!r}, func={aggregate.value}"
        )
        return pivot_table(table.rows, row_key_col, col_key_col, val_col, aggregate)

    # ================================================================================
    # Correlation
    # ================================================================================

    def correlation_matrix(
        self,
        table: Table,
        columns: Sequence[ColumnSelector],
        method: Optional[Union[str, CorrelationMethod]] = None,
        chart: bool = False
    ) -> Union[CorrelationResult, CorrelationMatrixData]:
        """
        선택한 컬럼들의 상관계수 행렬을 계산합니다.

        Args:
            table: 입력 테이블
            columns: 컬럼 이름 또는 인덱스 목록
            method: "pearson" / "spearman" (None이면 설정값)
            chart: True이면 차트용 페이로드로 반환

        Raises:
            UnknownMethodError: 지원하지 않는 방법일 때
            ParseFailureError: 변환할 수 없는 셀이 있을 때
            ZeroVarianceError: 상수 컬럼이 포함되었을 때
        """
        resolved = self.correlation_method if method is None else CorrelationMethod.parse(method)
        col_indices = [table.column_index(column) for column in columns]
        logger.info(f"상관분석 시작: columns={col_indices}, method={resolved.value}")

        result = build_correlation_result(table.rows, table.header, col_indices, resolved)
        if chart:
            return format_correlation_for_chartjs(result)
        return result

    # ================================================================================
    # Distribution
    # ================================================================================

    def histogram(
        self,
        table: Table,
        column: ColumnSelector,
        num_bins: Optional[int] = None,
        chart: bool = False
    ) -> Union[HistogramResult, HistogramChartData]:
        """히스토그램 (num_bins가 None이면 설정값 histogram_bins)"""
        bins = self.config['histogram_bins'] if num_bins is None else num_bins
        result = histogram(self._numeric_column(table, column), bins)
        if chart:
            return format_histogram_for_chartjs(result.bin_edges, result.bin_counts)
        return result

    def kde(
        self,
        table: Table,
        column: ColumnSelector,
        num_points: Optional[int] = None,
        bandwidth: Optional[float] = None,
        chart: bool = False
    ) -> Union[KDEResult, KDEChartData]:
        """가우시안 KDE (생략한 인자는 설정값 사용)"""
        points = self.config['kde_points'] if num_points is None else num_points
        h = self.config['kde_bandwidth'] if bandwidth is None else bandwidth
        result = kde_approximate(self._numeric_column(table, column), points, h)
        if chart:
            return format_kde_for_chartjs(result.xs, result.densities)
        return result

    # ================================================================================
    # Outliers
    # ================================================================================

    def box_plot(
        self,
        table: Table,
        column: ColumnSelector,
        chart: bool = False
    ) -> Union[BoxPlotSummary, BoxPlotChartData]:
        summary = box_plot_data(self._numeric_column(table, column))
        if chart:
            return format_box_plot_for_chartjs(summary)
        return summary

    def zscore_outliers(
        self,
        table: Table,
        column: ColumnSelector,
        threshold: Optional[float] = None
    ) -> List[int]:
        """
        Z-Score 이상치의 테이블 행 번호

        SKIP 정책에서 건너뛴 셀이 있어도 반환값은 table.rows의 인덱스입니다.
        """
        limit = self.config['zscore_threshold'] if threshold is None else threshold
        row_indices, values = self._numeric_column_with_rows(table, column)
        indices = [row_indices[i] for i in zscore_outliers(values, limit)]
        logger.info(f"Z-Score 이상치 탐지 완료: column={column!r}, threshold={limit}, 이상치={len(indices)}개")
        return indices

    def iqr_outliers(self, table: Table, column: ColumnSelector) -> IQROutlierResult:
        """IQR 이상치 (indices는 table.rows 기준 행 번호)"""
        row_indices, values = self._numeric_column_with_rows(table, column)
        found = iqr_outliers(values)
        result = IQROutlierResult(
            indices=[row_indices[i] for i in found.indices],
            lower_bound=found.lower_bound,
            upper_bound=found.upper_bound
        )
        logger.info(f"IQR 이상치 탐지 완료: column={column!r}, 이상치={len(result.indices)}개")
        return result

    # ================================================================================
    # Filter & Sort
    # ================================================================================

    def filter_sort(
        self,
        table: Table,
        filters: Sequence[Union[FilterOption, Mapping[str, Any]]] = (),
        sort: Optional[SortOption] = None
    ) -> Table:
        """필터(AND) 후 정렬한 새 Table 반환 (헤더는 그대로)"""
        rows = apply_filter_sort(table.rows, table.header, filters, sort)
        logger.info(f"필터/정렬 완료: {len(table)}행 -> {len(rows)}행")
        return Table(header=list(table.header), rows=rows)
