from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator
from datetime import datetime
from planner.services.category_service import get_category_color

# Schemas catégories (tags)

class CategoryCreate(BaseModel):
    label: str = Field(min_length=1)

    @field_validator("label")
    @classmethod
    def label_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("label is required")
        return value.strip()

class CategoryUpdate(CategoryCreate):
    pass

class CategoryResponse(BaseModel):
    id: int
    workspace_id: int
    label: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @computed_field
    @property
    def color(self) -> str:
        return get_category_color(self.id)
