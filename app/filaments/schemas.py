from typing import Any

from pydantic import BaseModel, Field, ValidationInfo, field_validator


class FilamentCreate(BaseModel):
    model_config = {"populate_by_name": True}

    name: str = Field(min_length=1)
    manufacturer: str | None = None
    material: str = Field(min_length=1)
    color_name: str = Field(alias="colorName", min_length=1)
    color_code: str | None = Field(default=None, alias="colorCode")
    diameter: float | None = Field(default=None, gt=0)
    print_temp: str | None = Field(default=None, alias="printTemp")
    total_weight: float = Field(default=1, alias="totalWeight", gt=0)
    remaining_percentage: float = Field(default=100, alias="remainingPercentage", ge=0, le=100)
    purchase_date: str | None = Field(default=None, alias="purchaseDate")
    purchase_price: float | None = Field(default=None, alias="purchasePrice", ge=0)
    status: str | None = None
    spool_type: str | None = Field(default=None, alias="spoolType")
    dryer_count: int = Field(default=0, alias="dryerCount", ge=0)
    last_drying_date: str | None = Field(default=None, alias="lastDryingDate")
    storage_location: str | None = Field(default=None, alias="storageLocation")

    @field_validator("print_temp", mode="before")
    @classmethod
    def _stringify_print_temp(cls, value: object) -> object:
        if isinstance(value, int | float) and not isinstance(value, bool):
            return str(value)
        return value


class FilamentUpdate(BaseModel):
    """Partial update: only fields present in the payload are applied."""

    model_config = {"populate_by_name": True, "extra": "forbid"}

    name: str | None = Field(default=None, min_length=1)
    manufacturer: str | None = None
    material: str | None = Field(default=None, min_length=1)
    color_name: str | None = Field(default=None, alias="colorName", min_length=1)
    color_code: str | None = Field(default=None, alias="colorCode")
    diameter: float | None = Field(default=None, gt=0)
    print_temp: str | None = Field(default=None, alias="printTemp")
    total_weight: float | None = Field(default=None, alias="totalWeight", gt=0)
    remaining_percentage: float | None = Field(
        default=None, alias="remainingPercentage", ge=0, le=100
    )
    purchase_date: str | None = Field(default=None, alias="purchaseDate")
    purchase_price: float | None = Field(default=None, alias="purchasePrice", ge=0)
    status: str | None = None
    spool_type: str | None = Field(default=None, alias="spoolType")
    dryer_count: int | None = Field(default=None, alias="dryerCount", ge=0)
    last_drying_date: str | None = Field(default=None, alias="lastDryingDate")
    storage_location: str | None = Field(default=None, alias="storageLocation")

    @field_validator("print_temp", mode="before")
    @classmethod
    def _stringify_print_temp(cls, value: object) -> object:
        if isinstance(value, int | float) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator(
        "name", "material", "color_name", "total_weight", "remaining_percentage", "dryer_count"
    )
    @classmethod
    def _not_null(cls, value: object, info: ValidationInfo) -> object:
        if value is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return value


class FilamentResponse(BaseModel):
    model_config = {"populate_by_name": True}

    id: int
    user_id: int = Field(alias="userId")
    name: str
    manufacturer: str | None
    material: str
    color_name: str = Field(alias="colorName")
    color_code: str | None = Field(alias="colorCode")
    diameter: float | None
    print_temp: str | None = Field(alias="printTemp")
    total_weight: float = Field(alias="totalWeight")
    remaining_percentage: float = Field(alias="remainingPercentage")
    purchase_date: str | None = Field(alias="purchaseDate")
    purchase_price: float | None = Field(alias="purchasePrice")
    status: str | None
    spool_type: str | None = Field(alias="spoolType")
    dryer_count: int = Field(alias="dryerCount")
    last_drying_date: str | None = Field(alias="lastDryingDate")
    storage_location: str | None = Field(alias="storageLocation")
    created_at: str = Field(alias="createdAt")
    updated_at: str = Field(alias="updatedAt")


class BatchUpdateRequest(BaseModel):
    ids: list[Any] = Field(min_length=1)
    updates: FilamentUpdate
