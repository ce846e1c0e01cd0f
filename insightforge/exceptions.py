"""
커스텀 예외 클래스 정의

이 모듈은 분석 엔진에서 사용되는 예외 계층을 정의합니다.
모든 예외는 호출자에게 그대로 전달되며, 엔진 내부에서 로깅하거나
재시도하거나 무시하지 않습니다. HTTP 상태 코드로의 변환은 호출자의 책임입니다.
"""

from typing import Optional, Dict, Any


class AnalyticsError(Exception):
    """
    분석 엔진 예외의 기본 클래스

    모든 커스텀 예외는 이 클래스를 상속받아야 합니다.
    """

    error_kind = "analytics_error"

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """호출자가 직렬화할 수 있는 표준 에러 구조 반환"""
        return {
            "error": {
                "type": self.__class__.__name__,
                "kind": self.error_kind,
                "message": self.message,
                "details": self.details
            }
        }


class EmptyInputError(AnalyticsError):
    """최소 한 개의 값(또는 행)이 필요한 연산에 빈 입력이 들어왔을 때 발생하는 예외"""

    error_kind = "empty_input"

    def __init__(self, operation: str):
        super().__init__(
            message=f"{operation} requires at least one value",
            details={"operation": operation}
        )


class InsufficientDataError(AnalyticsError):
    """연산에 필요한 최소 개수보다 값이 적을 때 발생하는 예외"""

    error_kind = "insufficient_data"

    def __init__(self, operation: str, required: int, actual: int):
        self.required = required
        self.actual = actual
        super().__init__(
            message=f"{operation} requires at least {required} values, got {actual}",
            details={"operation": operation, "required": required, "actual": actual}
        )


class DimensionMismatchError(AnalyticsError):
    """짝을 이루는 시퀀스의 길이가 다르거나 행이 필요한 컬럼보다 짧을 때 발생하는 예외"""

    error_kind = "dimension_mismatch"

    def __init__(self, message: str, row_index: Optional[int] = None, **details: Any):
        self.row_index = row_index
        if row_index is not None:
            details["row_index"] = row_index
        super().__init__(message=message, details=details)


class ParseFailureError(AnalyticsError):
    """셀 값을 숫자로 해석할 수 없을 때 발생하는 예외"""

    error_kind = "parse_failure"

    def __init__(self, row_index: int, column_index: int, value: str):
        self.row_index = row_index
        self.column_index = column_index
        self.value = value
        super().__init__(
            message=f"Cannot parse {value!r} as a number at row {row_index}, column {column_index}",
            details={"row_index": row_index, "column_index": column_index, "value": value}
        )


class ColumnNotFoundError(AnalyticsError):
    """헤더에 존재하지 않는 컬럼을 참조했을 때 발생하는 예외"""

    error_kind = "column_not_found"

    def __init__(self, column: Any):
        self.column = column
        super().__init__(
            message=f"Column '{column}' not found",
            details={"column": column}
        )


class KeyNotFoundError(AnalyticsError):
    """그룹 또는 피벗 키가 결과에 존재하지 않을 때 발생하는 예외"""

    error_kind = "key_not_found"

    def __init__(self, key: str):
        self.key = key
        super().__init__(
            message=f"Key '{key}' not found",
            details={"key": key}
        )


class ZeroVarianceError(AnalyticsError):
    """상관계수 계산의 분모가 0일 때(상수 시퀀스) 발생하는 예외"""

    error_kind = "zero_variance"

    def __init__(self, operation: str = "correlation"):
        super().__init__(
            message=f"Zero variance in {operation}: at least one sequence is constant",
            details={"operation": operation}
        )


class DegenerateDistributionError(AnalyticsError):
    """표준편차가 0이라 Z-Score 등을 계산할 수 없을 때 발생하는 예외"""

    error_kind = "degenerate_distribution"

    def __init__(self, operation: str):
        super().__init__(
            message=f"Standard deviation is zero, {operation} is undefined",
            details={"operation": operation}
        )


class UnknownMethodError(AnalyticsError):
    """지원하지 않는 상관분석 방법이 지정되었을 때 발생하는 예외"""

    error_kind = "unknown_method"

    def __init__(self, method: str, supported: Optional[list] = None):
        self.method = method
        super().__init__(
            message=f"Unknown method: {method}",
            details={"method": method, "supported": supported or []}
        )


class UnsupportedOperationError(AnalyticsError):
    """필터 연산자, 정렬 방향, 집계 함수가 허용된 집합에 없을 때 발생하는 예외"""

    error_kind = "unsupported_operation"

    def __init__(self, operation: str, supported: Optional[list] = None):
        self.operation = operation
        super().__init__(
            message=f"Unsupported operation: {operation}",
            details={"operation": operation, "supported": supported or []}
        )
