"""
Chart Payload Models

차트 렌더링 계층(Chart.js 프론트엔드)이 그대로 소비하는 응답 모델을 정의합니다.
라벨 문자열 형식은 외부 소비자와의 직렬화 계약이므로 변경하지 않습니다.
"""

from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field


class HistogramChartData(BaseModel):
    """히스토그램 차트 데이터"""
    labels: List[str] = Field(..., description="구간 라벨 ([%.2f, %.2f] 형식)")
    counts: List[int] = Field(..., description="구간별 빈도")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "labels": ["[1.00, 3.00]", "[3.00, 5.00]"],
                "counts": [2, 3]
            }
        }
    )


class KDEChartData(BaseModel):
    """커널 밀도 추정 차트 데이터"""
    labels: List[str] = Field(..., description="평가 위치 라벨 (%.2f 형식)")
    densities: List[float] = Field(..., description="위치별 밀도")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "labels": ["1.00", "2.00", "3.00"],
                "densities": [0.18, 0.24, 0.18]
            }
        }
    )


class BoxPlotChartData(BaseModel):
    """박스 플롯 차트 데이터"""
    labels: List[str] = Field(..., description="값 라벨")
    values: List[float] = Field(..., description="라벨 순서의 값")
    stats: Dict[str, float] = Field(..., description="사분위수 및 울타리 통계")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "labels": ["Q1", "Q3", "Lower Outlier", "Upper Outlier"],
                "values": [2.5, 7.5, -5.0, 15.0],
                "stats": {
                    "Q1": 2.5,
                    "Q3": 7.5,
                    "IQR": 5.0,
                    "lower_outlier": -5.0,
                    "upper_outlier": 15.0
                }
            }
        }
    )


class CorrelationMatrixData(BaseModel):
    """상관계수 행렬 차트 데이터"""
    matrix: List[List[float]] = Field(..., description="N x N 대칭 상관계수 행렬")
    labels: List[str] = Field(..., description="행/열 라벨")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "matrix": [[1.0, 0.9], [0.9, 1.0]],
                "labels": ["height", "weight"]
            }
        }
    )
