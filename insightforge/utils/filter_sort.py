"""
필터 및 정렬 유틸리티

행 데이터에 대한 조건 필터링(AND 결합)과 안정 정렬을 제공합니다.

정렬 비교 규칙:
    두 셀이 모두 숫자로 변환되면 숫자로 비교하고, 어느 한쪽이라도
    변환되지 않으면 문자열 사전순으로 비교합니다. 이 판단은 비교하는
    행 쌍마다 이루어지므로, 숫자와 문자가 섞인 컬럼에서는 비교가
    추이적이지 않을 수 있습니다.
"""

import logging
from functools import cmp_to_key
from typing import Any, List, Mapping, Optional, Sequence, Tuple, Union

from ..exceptions import ColumnNotFoundError, DimensionMismatchError, UnsupportedOperationError
from ..models.options import NUMERIC_OPERATORS, FilterOperator, FilterOption, SortOption, SortOrder
from ..models.table import parse_float

logger = logging.getLogger(__name__)

Rows = List[List[str]]


def _find_column(headers: Sequence[str], column: str) -> int:
    for i, name in enumerate(headers):
        if name == column:
            return i
    raise ColumnNotFoundError(column)


def _check_row_lengths(rows: Sequence[Sequence[str]], col_idx: int) -> None:
    for i, row in enumerate(rows):
        if len(row) <= col_idx:
            raise DimensionMismatchError(
                f"row {i} has no column {col_idx}",
                row_index=i,
                column_index=col_idx
            )


def _compare_cells(a: str, b: str) -> int:
    num_a = parse_float(a)
    num_b = parse_float(b)
    if num_a is not None and num_b is not None:
        return (num_a > num_b) - (num_a < num_b)
    return (a > b) - (a < b)


def _resolve_operator(operator: str) -> FilterOperator:
    try:
        return FilterOperator(operator)
    except ValueError:
        raise UnsupportedOperationError(
            f"filter operation '{operator}'", supported=[op.value for op in FilterOperator]
        ) from None


def _matches(cell: str, operator: FilterOperator, target: str) -> bool:
    if operator is FilterOperator.EQ:
        return cell == target
    if operator is FilterOperator.CONTAINS:
        return target.lower() in cell.lower()

    # 숫자 비교: 어느 한쪽이라도 숫자가 아니면 불일치
    num_cell = parse_float(cell)
    num_target = parse_float(target)
    if num_cell is None or num_target is None:
        return False
    if operator is FilterOperator.GT:
        return num_cell > num_target
    if operator is FilterOperator.LT:
        return num_cell < num_target
    if operator is FilterOperator.GE:
        return num_cell >= num_target
    return num_cell <= num_target


def apply_sort(
    rows: Sequence[Sequence[str]],
    headers: Sequence[str],
    sort_option: Optional[SortOption]
) -> Rows:
    """
    지정한 컬럼으로 행을 안정 정렬합니다.

    Args:
        rows: 텍스트 셀 행 목록 (변경되지 않음)
        headers: 컬럼 이름 목록
        sort_option: 정렬 조건, None이면 원래 순서의 복사본 반환

    Raises:
        ColumnNotFoundError: 정렬 컬럼이 헤더에 없을 때
        DimensionMismatchError: 행이 정렬 컬럼보다 짧을 때
    """
    if sort_option is None:
        return [list(row) for row in rows]

    col_idx = _find_column(headers, sort_option.column)
    _check_row_lengths(rows, col_idx)

    descending = sort_option.order == SortOrder.DESC

    def compare(row_a: Sequence[str], row_b: Sequence[str]) -> int:
        result = _compare_cells(row_a[col_idx], row_b[col_idx])
        return -result if descending else result

    return [list(row) for row in sorted(rows, key=cmp_to_key(compare))]


def apply_filter_sort(
    rows: Sequence[Sequence[str]],
    headers: Sequence[str],
    filters: Sequence[Union[FilterOption, Mapping[str, Any]]],
    sort_option: Optional[SortOption] = None
) -> Rows:
    """
    필터를 순서대로 적용(AND)한 뒤 정렬합니다.

    연산자:
        eq       - 문자열 완전 일치
        contains - 대소문자 무시 부분 문자열
        gt/lt/ge/le - 숫자 비교 (숫자가 아닌 셀은 조용히 제외)

    Raises:
        ColumnNotFoundError: 필터/정렬 컬럼이 헤더에 없을 때
        UnsupportedOperationError: 알 수 없는 연산자일 때
        DimensionMismatchError: 행이 필터 컬럼보다 짧을 때
    """
    filtered = [list(row) for row in rows]

    for raw_filter in filters:
        option = raw_filter if isinstance(raw_filter, FilterOption) else FilterOption.model_validate(raw_filter)
        col_idx = _find_column(headers, option.column)
        operator = _resolve_operator(option.operator)
        _check_row_lengths(filtered, col_idx)

        filtered = [row for row in filtered if _matches(row[col_idx], operator, option.value)]
        logger.debug(
            f"필터 적용: {option.column} {operator.value} {option.value!r} -> {len(filtered)}행"
            + (" (숫자 비교)" if operator in NUMERIC_OPERATORS else "")
        )

    return apply_sort(filtered, headers, sort_option)


def _get_first(params: Mapping[str, Any], key: str) -> str:
    values = params.get(key)
    if not values:
        return ""
    if isinstance(values, str):
        return values
    return values[0]


def parse_filter_sort(
    query_params: Mapping[str, Any]
) -> Tuple[List[FilterOption], Optional[SortOption]]:
    """
    쿼리 파라미터를 필터/정렬 옵션으로 변환합니다.

    사용하는 키: sort_by, order, filter_col, filter_op, filter_val
    (값은 리스트이며 첫 번째 원소를 사용, 문자열도 허용)

    Raises:
        UnsupportedOperationError: order가 asc/desc가 아닐 때
    """
    filters: List[FilterOption] = []
    sort_option: Optional[SortOption] = None

    sort_by = _get_first(query_params, "sort_by")
    if sort_by:
        order = (_get_first(query_params, "order") or "asc").lower()
        if order not in (SortOrder.ASC.value, SortOrder.DESC.value):
            raise UnsupportedOperationError(
                f"sort order '{order}'", supported=[o.value for o in SortOrder]
            )
        sort_option = SortOption(column=sort_by, order=order)

    filter_col = _get_first(query_params, "filter_col")
    filter_op = _get_first(query_params, "filter_op")
    filter_val = _get_first(query_params, "filter_val")
    if filter_col and filter_op and filter_val:
        filters.append(FilterOption(column=filter_col, operator=filter_op, value=filter_val))

    return filters, sort_option
