from typing import List, Optional
from sqlmodel import Field, Relationship
from .base import TimestampModel
from .types import VendorStatus, VehicleStatus


class Vendor(TimestampModel, table=True):
    __tablename__ = "vendors"

    id: Optional[int] = Field(default=None, primary_key=True)
    company: str = Field(index=True)
    contact_person: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None
    registration_number: Optional[str] = None
    tax_id: Optional[str] = None
    status: VendorStatus = Field(default=VendorStatus.INACTIVE)

    vehicles: List["Vehicle"] = Relationship(
        back_populates="vendor",
        sa_relationship_kwargs={"cascade": "all, delete-orphan"}
    )


class Vehicle(TimestampModel, table=True):
    __tablename__ = "vehicles"

    id: Optional[int] = Field(default=None, primary_key=True)
    vendor_id: int = Field(foreign_key="vendors.id", index=True)
    vehicle_class: Optional[str] = None
    brand: Optional[str] = None
    model: Optional[str] = None
    year: Optional[int] = None
    license_plate: str = Field(unique=True)
    seating_capacity: Optional[int] = None
    status: VehicleStatus = Field(default=VehicleStatus.AVAILABLE)

    vendor: Vendor = Relationship(back_populates="vehicles")
