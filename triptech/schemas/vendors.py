from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel
from sqlmodel import SQLModel, Field
from ..models.types import VendorStatus, VehicleStatus


class VehicleCreate(SQLModel):
    vehicle_class: Optional[str] = None
    brand: Optional[str] = None
    model: Optional[str] = None
    year: Optional[int] = None
    license_plate: str = Field(min_length=1)
    seating_capacity: Optional[int] = None


class VehicleSummary(SQLModel):
    id: int
    license_plate: str
    brand: Optional[str] = None
    model: Optional[str] = None
    year: Optional[int] = None
    status: VehicleStatus


class VendorCreate(SQLModel):
    company: str = Field(min_length=1)
    contact_person: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None
    registration_number: Optional[str] = None
    tax_id: Optional[str] = None
    vehicles: List[VehicleCreate] = []


class VendorCreated(SQLModel):
    id: int
    company: str
    contact_person: Optional[str] = None
    email: Optional[str] = None
    status: VendorStatus


class VendorRead(SQLModel):
    id: int
    company: str
    contact_person: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None
    registration_number: Optional[str] = None
    tax_id: Optional[str] = None
    status: VendorStatus
    created_at: datetime
    updated_at: datetime


class VendorListItem(VendorRead):
    total_vehicles: int


class VendorDetail(VendorRead):
    vehicles: List[VehicleSummary]


class VendorUpdate(SQLModel):
    contact_person: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None


class VendorStatusUpdate(SQLModel):
    status: VendorStatus


class VendorListResponse(BaseModel):
    success: bool = True
    data: List[VendorListItem]
    total: int
    page: int
    limit: int
    message: Optional[str] = None
