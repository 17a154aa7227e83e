"""
Maintenance endpoints.

Repairs recompute cached balances from their records and write back only
what differs, so calling them repeatedly is safe.
"""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from shopledger.api.deps import get_integrity_service
from shopledger.api.errors import http_error
from shopledger.core.errors import IntegrityMismatch, LedgerError
from shopledger.schemas.order import OrderResponse
from shopledger.schemas.repair import (
    CustomerRepairResponse,
    OrderRepairResponse,
    SupplierRepairResponse,
)
from shopledger.services.integrity_service import IntegrityReport, IntegrityService

router = APIRouter()


def _report_message(report: IntegrityReport) -> str:
    if report.is_valid:
        return "No issues found"
    if report.repairs:
        return f"Repaired {len(report.repairs)} issue(s)"
    return f"Found {len(report.issues)} issue(s), nothing repaired"


def _report_fields(report: IntegrityReport) -> dict:
    return {
        "entity_id": report.entity_id,
        "entity_type": report.entity_type,
        "is_valid": report.is_valid,
        "issues": report.issues,
        "repairs": report.repairs,
        "stored_amount": report.stored_amount,
        "calculated_amount": report.calculated_amount,
        "message": _report_message(report),
    }


@router.post("/repair-customer/{customer_id}", response_model=CustomerRepairResponse)
async def repair_customer(
    customer_id: str,
    force: bool = Query(False, description="Repair even above the auto-repair limit"),
    service: IntegrityService = Depends(get_integrity_service)
):
    try:
        report = await service.check_customer(customer_id, repair=True, force=force)
    except LedgerError as exc:
        raise http_error(exc)
    return CustomerRepairResponse(customer_id=customer_id, **_report_fields(report))


@router.get("/verify-customer/{customer_id}", response_model=CustomerRepairResponse)
async def verify_customer(
    customer_id: str,
    service: IntegrityService = Depends(get_integrity_service)
):
    """Read-only check; a mismatch is reported as 409 with the full report."""
    try:
        report = await service.assert_customer_consistent(customer_id)
    except IntegrityMismatch as exc:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=CustomerRepairResponse(
                customer_id=customer_id, **_report_fields(exc.report)
            ).model_dump(by_alias=True),
        )
    except LedgerError as exc:
        raise http_error(exc)
    return CustomerRepairResponse(customer_id=customer_id, **_report_fields(report))


@router.post("/repair-order/{order_id}", response_model=OrderRepairResponse)
async def repair_order(
    order_id: str,
    service: IntegrityService = Depends(get_integrity_service)
):
    try:
        result = await service.repair_order(order_id)
    except LedgerError as exc:
        raise http_error(exc)

    return OrderRepairResponse(
        order_id=order_id,
        was_corrupted=result.was_corrupted,
        repairs=result.repairs,
        order=OrderResponse.model_validate(result.order),
        message="Order repaired" if result.was_corrupted else "Order is consistent",
    )


@router.post("/repair-supplier/{supplier_id}", response_model=SupplierRepairResponse)
async def repair_supplier(
    supplier_id: str,
    force: bool = Query(False),
    service: IntegrityService = Depends(get_integrity_service)
):
    try:
        report = await service.check_supplier(supplier_id, repair=True, force=force)
    except LedgerError as exc:
        raise http_error(exc)
    return SupplierRepairResponse(supplier_id=supplier_id, **_report_fields(report))
