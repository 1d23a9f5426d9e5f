from decimal import Decimal, InvalidOperation

from pydantic import BaseModel, Field, field_validator

from app.catalog.models import CatalogKind

HEX_COLOR_PATTERN = r"^#[0-9A-Fa-f]{3,8}$"


class NamedEntryCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)

    @field_validator("name")
    @classmethod
    def _strip(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("name must not be blank")
        return value


class ColorCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    code: str = Field(pattern=HEX_COLOR_PATTERN)


class DiameterCreate(BaseModel):
    value: str = Field(min_length=1, max_length=32)

    @field_validator("value", mode="before")
    @classmethod
    def _positive_number(cls, value: object) -> object:
        if isinstance(value, int | float) and not isinstance(value, bool):
            value = str(value)
        if not isinstance(value, str):
            return value
        value = value.strip()
        try:
            number = Decimal(value)
        except InvalidOperation:
            raise ValueError("value must be a number") from None
        if not number.is_finite() or number <= 0:
            raise ValueError("value must be a positive number")
        return value


class NamedEntryResponse(BaseModel):
    model_config = {"populate_by_name": True}

    id: int
    name: str
    sort_order: int = Field(alias="sortOrder")
    created_at: str = Field(alias="createdAt")


class ColorResponse(BaseModel):
    model_config = {"populate_by_name": True}

    id: int
    name: str
    code: str
    created_at: str = Field(alias="createdAt")


class DiameterResponse(BaseModel):
    model_config = {"populate_by_name": True}

    id: int
    value: str
    created_at: str = Field(alias="createdAt")


class OrderUpdate(BaseModel):
    model_config = {"populate_by_name": True}

    new_order: int = Field(alias="newOrder")


CREATE_SCHEMAS: dict[CatalogKind, type[BaseModel]] = {
    CatalogKind.manufacturer: NamedEntryCreate,
    CatalogKind.material: NamedEntryCreate,
    CatalogKind.storage_location: NamedEntryCreate,
    CatalogKind.color: ColorCreate,
    CatalogKind.diameter: DiameterCreate,
}

RESPONSE_SCHEMAS: dict[CatalogKind, type[BaseModel]] = {
    CatalogKind.manufacturer: NamedEntryResponse,
    CatalogKind.material: NamedEntryResponse,
    CatalogKind.storage_location: NamedEntryResponse,
    CatalogKind.color: ColorResponse,
    CatalogKind.diameter: DiameterResponse,
}
