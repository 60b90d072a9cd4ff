from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlmodel import Session

from ..core.database import get_session
from ..core.security import get_current_user
from ..models.types import VendorStatus
from ..schemas.common import ApiResponse
from ..schemas.vendors import (
    VendorCreate,
    VendorCreated,
    VendorDetail,
    VendorListResponse,
    VendorRead,
    VendorStatusUpdate,
    VendorUpdate,
)
from ..services import vendor_service


# Every vendor route needs a valid token; there is no role restriction
router = APIRouter(dependencies=[Depends(get_current_user)])


@router.get("", response_model=VendorListResponse)
async def list_vendors(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    status: Optional[VendorStatus] = None,
    search: Optional[str] = None,
    session: Session = Depends(get_session),
):
    vendors, total = vendor_service.list_vendors(session, page=page, limit=limit, status=status, search=search)
    return VendorListResponse(
        data=vendors,
        total=total,
        page=page,
        limit=limit,
        message="Vendors retrieved successfully",
    )


@router.get("/{vendor_id}", response_model=ApiResponse[VendorDetail])
async def get_vendor(vendor_id: int, session: Session = Depends(get_session)):
    return ApiResponse(data=vendor_service.get_vendor(session, vendor_id))


@router.post("", response_model=ApiResponse[VendorCreated], status_code=status.HTTP_201_CREATED)
async def create_vendor(vendor_data: VendorCreate, session: Session = Depends(get_session)):
    vendor = vendor_service.create_vendor(session, vendor_data)
    return ApiResponse(data=vendor, message="Vendor created successfully")


@router.put("/{vendor_id}", response_model=ApiResponse[VendorRead])
async def update_vendor(
    vendor_id: int,
    vendor_data: VendorUpdate,
    session: Session = Depends(get_session),
):
    vendor = vendor_service.update_vendor(session, vendor_id, vendor_data)
    return ApiResponse(data=vendor, message="Vendor updated successfully")


@router.patch("/{vendor_id}/status", response_model=ApiResponse[VendorRead])
async def update_vendor_status(
    vendor_id: int,
    status_data: VendorStatusUpdate,
    session: Session = Depends(get_session),
):
    vendor = vendor_service.update_vendor_status(session, vendor_id, status_data.status)
    return ApiResponse(data=vendor, message="Vendor status updated successfully")


@router.delete("/{vendor_id}", response_model=ApiResponse[None])
async def delete_vendor(vendor_id: int, session: Session = Depends(get_session)):
    vendor_service.delete_vendor(session, vendor_id)
    return ApiResponse(message="Vendor deleted successfully")
