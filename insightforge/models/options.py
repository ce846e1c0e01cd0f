"""
Filter / Sort Option Models

필터 및 정렬 옵션을 표현하는 pydantic 모델을 정의합니다.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class FilterOperator(str, Enum):
    """필터 연산자"""
    EQ = "eq"
    CONTAINS = "contains"
    GT = "gt"
    LT = "lt"
    GE = "ge"
    LE = "le"


NUMERIC_OPERATORS = frozenset({
    FilterOperator.GT,
    FilterOperator.LT,
    FilterOperator.GE,
    FilterOperator.LE,
})


class SortOrder(str, Enum):
    """정렬 방향"""
    ASC = "asc"
    DESC = "desc"


class FilterOption(BaseModel):
    """단일 컬럼 필터 조건"""
    column: str = Field(..., description="필터 대상 컬럼 이름")
    operator: str = Field(..., description="필터 연산자: eq, contains, gt, lt, ge, le")
    value: str = Field(..., description="비교 값 (텍스트)")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "column": "age",
                "operator": "gt",
                "value": "30"
            }
        }
    )

    @field_validator('operator')
    @classmethod
    def normalize_operator(cls, v: str) -> str:
        # 연산자 유효성은 적용 시점에 검사 (UnsupportedOperationError)
        return v.lower()


class SortOption(BaseModel):
    """단일 컬럼 정렬 조건"""
    column: str = Field(..., description="정렬 대상 컬럼 이름")
    order: SortOrder = Field(SortOrder.ASC, description="정렬 방향: asc 또는 desc")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "column": "age",
                "order": "desc"
            }
        }
    )

    @field_validator('order', mode='before')
    @classmethod
    def normalize_order(cls, v):
        """정렬 방향 검증 (대소문자 무시)"""
        if isinstance(v, str):
            v = v.lower()
            if v not in (SortOrder.ASC.value, SortOrder.DESC.value):
                raise ValueError('정렬 방향은 asc 또는 desc 이어야 합니다')
        return v
