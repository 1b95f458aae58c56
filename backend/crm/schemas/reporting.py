from pydantic import BaseModel


class TaskStatusCount(BaseModel):
    status: str | None = None
    priority: str | None = None
    count: int


class PipelineStage(BaseModel):
    stage: str | None = None
    count: int
    total_value: int
    avg_probability: float | None = None
