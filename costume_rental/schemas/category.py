from typing import Optional

from pydantic import BaseModel, Field

from costume_rental.models.category import CategoryType


class CategoryBase(BaseModel):
    name: str = Field(..., min_length=1, description="Unique category name")
    description: Optional[str] = None
    type: CategoryType


class CategoryCreate(CategoryBase):
    pass


class CategoryUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    type: Optional[CategoryType] = None


class Category(CategoryBase):
    id: str

    class Config:
        from_attributes = True


class CategorySeedResult(BaseModel):
    """Outcome of seeding one default category"""

    name: str
    type: CategoryType
    created: bool
