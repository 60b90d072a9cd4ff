import logging
from typing import List, Optional, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select, func

from ..core.exceptions import Internal, NotFound
from ..models.types import VendorStatus
from ..models.vendors import Vendor, Vehicle
from ..schemas.vendors import (
    VehicleSummary,
    VendorCreate,
    VendorCreated,
    VendorDetail,
    VendorListItem,
    VendorRead,
    VendorUpdate,
)

logger = logging.getLogger(__name__)


def _get_vendor_or_404(db: Session, vendor_id: int) -> Vendor:
    vendor = db.get(Vendor, vendor_id)
    if not vendor:
        raise NotFound("Vendor not found")
    return vendor


def _commit(db: Session, action: str) -> None:
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to %s", action)
        raise Internal()


def list_vendors(
    db: Session,
    page: int = 1,
    limit: int = 20,
    status: Optional[VendorStatus] = None,
    search: Optional[str] = None,
) -> Tuple[List[VendorListItem], int]:
    """Return one page of vendors with their vehicle counts, plus the unpaged total."""
    conditions = []
    if status:
        conditions.append(Vendor.status == status)
    if search:
        conditions.append(Vendor.company.contains(search))

    total = db.exec(select(func.count()).select_from(Vendor).where(*conditions)).one()

    vehicle_count = (
        select(func.count(Vehicle.id))
        .where(Vehicle.vendor_id == Vendor.id)
        .correlate(Vendor)
        .scalar_subquery()
    )
    rows = db.exec(
        select(Vendor, vehicle_count.label("total_vehicles"))
        .where(*conditions)
        .order_by(Vendor.id)
        .offset((page - 1) * limit)
        .limit(limit)
    ).all()

    vendors = [
        VendorListItem(**vendor.model_dump(), total_vehicles=total_vehicles)
        for vendor, total_vehicles in rows
    ]
    return vendors, total


def get_vendor(db: Session, vendor_id: int) -> VendorDetail:
    vendor = _get_vendor_or_404(db, vendor_id)
    vehicles = db.exec(select(Vehicle).where(Vehicle.vendor_id == vendor_id)).all()
    return VendorDetail(
        **vendor.model_dump(),
        vehicles=[VehicleSummary.model_validate(vehicle) for vehicle in vehicles]
    )


def create_vendor(db: Session, vendor_data: VendorCreate) -> VendorCreated:
    """
    Create a vendor together with its vehicles in a single transaction.

    If any insert fails (for example a duplicate licence plate) the whole
    transaction is rolled back and no vendor row is left behind.
    """
    vendor = Vendor(
        **vendor_data.model_dump(exclude={"vehicles"}),
        status=VendorStatus.INACTIVE
    )
    try:
        db.add(vendor)
        db.flush()

        for vehicle_data in vendor_data.vehicles:
            db.add(Vehicle(vendor_id=vendor.id, **vehicle_data.model_dump()))

        db.commit()
        db.refresh(vendor)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to create vendor %s", vendor_data.company)
        raise Internal()

    logger.info("Vendor %s created with %d vehicles", vendor.id, len(vendor_data.vehicles))
    return VendorCreated(
        id=vendor.id,
        company=vendor.company,
        contact_person=vendor.contact_person,
        email=vendor.email,
        status=vendor.status,
    )


def update_vendor(db: Session, vendor_id: int, vendor_data: VendorUpdate) -> VendorRead:
    vendor = _get_vendor_or_404(db, vendor_id)

    for field, value in vendor_data.model_dump(exclude_unset=True).items():
        setattr(vendor, field, value)

    db.add(vendor)
    _commit(db, f"update vendor {vendor_id}")
    db.refresh(vendor)
    return VendorRead.model_validate(vendor)


def update_vendor_status(db: Session, vendor_id: int, status: VendorStatus) -> VendorRead:
    vendor = _get_vendor_or_404(db, vendor_id)
    vendor.status = status
    db.add(vendor)
    _commit(db, f"update status of vendor {vendor_id}")
    db.refresh(vendor)
    return VendorRead.model_validate(vendor)


def delete_vendor(db: Session, vendor_id: int) -> None:
    # Hard delete; vehicles go with the vendor
    vendor = _get_vendor_or_404(db, vendor_id)
    db.delete(vendor)
    _commit(db, f"delete vendor {vendor_id}")
    logger.info("Vendor %s deleted", vendor_id)
