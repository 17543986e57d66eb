#tracker/schemas/purchase_requests.py
from __future__ import annotations

import uuid
from datetime import datetime
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictFloat, StrictInt, StrictStr

from tracker.models.enums import PurchaseRequestStatus

# strict members: the raw JSON value (true, 2.5, "3") reaches the item
# validator unchanged and comes back as InvalidQuantity, not coerced to int
Quantity = Union[StrictInt, StrictFloat, StrictStr, StrictBool]


class ItemCreateRequest(BaseModel):
    name: Optional[str] = Field(default=None, max_length=256)
    quantity: Optional[Quantity] = None
    unit: Optional[str] = Field(default=None, max_length=32)
    note: Optional[str] = None


class ItemUpdateRequest(BaseModel):
    name: Optional[str] = Field(default=None, max_length=256)
    quantity: Optional[Quantity] = None
    unit: Optional[str] = Field(default=None, max_length=32)
    note: Optional[str] = None


class PurchaseRequestCreateRequest(BaseModel):
    task_id: Optional[uuid.UUID] = None
    installation_id: Optional[uuid.UUID] = None
    comment: Optional[str] = None
    items: List[ItemCreateRequest] = []


class PurchaseRequestUpdateRequest(BaseModel):
    comment: Optional[str] = None


class StatusUpdateRequest(BaseModel):
    status: str = Field(..., description="approved | rejected")
    comment: Optional[str] = None


class ItemOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    purchase_request_id: uuid.UUID
    name: str
    quantity: int
    unit: str
    note: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class PurchaseRequestOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    task_id: Optional[uuid.UUID] = None
    installation_id: Optional[uuid.UUID] = None
    created_by: uuid.UUID
    status: PurchaseRequestStatus
    approved_by: Optional[uuid.UUID] = None
    comment: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    items: List[ItemOut] = []


class PurchaseRequestResponse(BaseModel):
    purchase_request: PurchaseRequestOut


class PurchaseRequestListResponse(BaseModel):
    purchase_requests: List[PurchaseRequestOut]


class ItemResponse(BaseModel):
    item: ItemOut


class MessageResponse(BaseModel):
    message: str
