from pydantic import BaseModel
from typing import Any, Optional


class ErrorDetail(BaseModel):
    category: str
    message: str
    code: Optional[str] = None
    user_fault: bool = False
    retryable: bool = False


class TimedResultResponse(BaseModel):
    succeeded: bool
    elapsed_ms: float
    data: Optional[Any] = None
    error: Optional[ErrorDetail] = None


class ComparisonResponse(BaseModel):
    workload: str
    winner: str
    normalized_ms: float
    denormalized_ms: float
    percent_diff: float
    margin: str
    explanation: str


class SimulationResponse(BaseModel):
    success: bool
    workload: str
    normalized: TimedResultResponse
    denormalized: TimedResultResponse
    comparison: Optional[ComparisonResponse] = None
