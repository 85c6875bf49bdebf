from pydantic import BaseModel
from typing import List, Optional


class CustomerResponse(BaseModel):
    id: int
    first_name: str
    last_name: str
    email: str
    phone: Optional[str] = None

    class Config:
        from_attributes = True


class StoreResponse(BaseModel):
    id: int
    name: str
    location: str
    phone: Optional[str] = None

    class Config:
        from_attributes = True


class EmployeeResponse(BaseModel):
    id: int
    store_id: int
    first_name: str
    last_name: str
    position: str

    class Config:
        from_attributes = True


class MenuItemResponse(BaseModel):
    id: int
    name: str
    category: str
    price: float

    class Config:
        from_attributes = True


class SampleDataResponse(BaseModel):
    success: bool = True
    customers: List[CustomerResponse]
    stores: List[StoreResponse]
    employees: List[EmployeeResponse]
    menu_items: List[MenuItemResponse]
