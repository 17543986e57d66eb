from __future__ import annotations

import uuid
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class MaterialCreateRequest(BaseModel):
    name: Optional[str] = Field(default=None, max_length=256)
    category: Optional[str] = Field(default=None, max_length=128)
    default_unit: Optional[str] = Field(default=None, max_length=32)
    is_optional: bool = False
    comment: Optional[str] = None


class MaterialUpdateRequest(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=256)
    category: Optional[str] = Field(default=None, min_length=1, max_length=128)
    default_unit: Optional[str] = Field(default=None, min_length=1, max_length=32)
    is_optional: Optional[bool] = None
    comment: Optional[str] = None


class MaterialOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    category: str
    default_unit: str
    is_optional: bool
    comment: Optional[str] = None


class MaterialResponse(BaseModel):
    material: MaterialOut


class MaterialListResponse(BaseModel):
    materials: List[MaterialOut]


class CategoryListResponse(BaseModel):
    categories: List[str]
