from typing import Any, Literal

from pydantic import BaseModel, Field


class ImportCsvRequest(BaseModel):
    model_config = {"populate_by_name": True}

    csv_data: str = Field(alias="csvData", min_length=1)


class ImportJsonRequest(BaseModel):
    model_config = {"populate_by_name": True}

    json_data: str = Field(alias="jsonData", min_length=1)


class ImportIssue(BaseModel):
    row: int
    outcome: Literal["duplicate", "error"]
    reason: str


class ImportResult(BaseModel):
    created: int = 0
    duplicates: int = 0
    errors: int = 0
    issues: list[ImportIssue] = Field(default_factory=list)


class BatchDeleteRequest(BaseModel):
    ids: list[Any] = Field(min_length=1)


class BatchFailureResponse(BaseModel):
    id: int
    error: str


class ItemOutcomeResponse(BaseModel):
    id: int | None
    status: Literal["succeeded", "skipped", "failed"]
    reason: str | None = None


class BatchDeleteResponse(BaseModel):
    model_config = {"populate_by_name": True}

    message: str
    deleted_count: int = Field(alias="deletedCount")
    failed: list[BatchFailureResponse] = Field(default_factory=list)
    outcomes: list[ItemOutcomeResponse] = Field(default_factory=list)


class BatchUpdateResponse(BaseModel):
    model_config = {"populate_by_name": True}

    message: str
    updated_count: int = Field(alias="updatedCount")
    failed: list[BatchFailureResponse] = Field(default_factory=list)
    outcomes: list[ItemOutcomeResponse] = Field(default_factory=list)
