from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

# Sheet cells come back as strings; clients may send numbers for any field
CellValue = Optional[Union[int, float, str]]


class Delivery(BaseModel):
    user: CellValue = ""
    address: CellValue = ""
    milk: CellValue = ""
    partner: CellValue = ""
    quantity: CellValue = ""
    date: CellValue = ""


class DeliveryCreate(BaseModel):
    user: CellValue = None
    address: CellValue = None
    milk: CellValue = None
    partner: CellValue = None
    quantity: CellValue = None
    date: CellValue = None


class DeliveryUpdate(BaseModel):
    """PUT/PATCH body. Only fields actually sent are written."""
    model_config = ConfigDict(populate_by_name=True)

    user: Union[int, float, str]
    target_date: CellValue = Field(default=None, alias="targetDate")
    address: CellValue = None
    milk: CellValue = None
    partner: CellValue = None
    quantity: CellValue = None
    date: CellValue = None


class DeliveryDelete(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user: Union[int, float, str]
    target_date: CellValue = Field(default=None, alias="targetDate")


class MessageResponse(BaseModel):
    success: bool
    message: str


class DeliveryUpdateResponse(MessageResponse):
    updatedRow: Delivery
    status: int


class DeliveryDeleteResponse(MessageResponse):
    deletedRow: Delivery
    status: int


DeliveryList = List[Delivery]
