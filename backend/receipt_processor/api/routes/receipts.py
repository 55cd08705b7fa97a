"""API routes for receipt submission and points retrieval."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status
from pydantic import ValidationError

from receipt_processor.api.dependencies import get_registry
from receipt_processor.core.observability import sentry_breadcrumb
from receipt_processor.models.schemas import PointsResponse, Receipt, ReceiptIdResponse
from receipt_processor.services.registry import ReceiptNotFound, ReceiptRegistry
from receipt_processor.services.rule_engine import InvalidReceipt, score
from receipt_processor.utils.helpers import parse_receipt_id

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/receipts", tags=["receipts"])


@router.post(
    "/process",
    response_model=ReceiptIdResponse,
    responses={
        400: {"description": "The receipt is invalid."},
        500: {"description": "The request body could not be read."},
    },
)
async def process_receipt(
    request: Request,
    registry: ReceiptRegistry = Depends(get_registry),
) -> ReceiptIdResponse:
    """Validate and store a receipt, returning its new id."""
    # The body is read by hand so transport failures map to 500 while
    # malformed documents map to 400.
    try:
        body = await request.body()
    except Exception as exc:
        logger.warning("Failed reading receipt body: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error reading request body",
        ) from exc

    try:
        receipt = Receipt.model_validate_json(body)
    except ValidationError as exc:
        logger.info("Rejected receipt: %d validation error(s)", exc.error_count())
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="The receipt is invalid.",
        ) from exc

    receipt_id = registry.insert(receipt)
    logger.info("Processed receipt %s from %r (%d items)", receipt_id, receipt.retailer, len(receipt.items))
    sentry_breadcrumb(
        category="receipts",
        message="process_receipt.stored",
        data={"receipt_id": str(receipt_id), "items": len(receipt.items)},
    )
    return ReceiptIdResponse(id=str(receipt_id))


@router.get(
    "/{receipt_id}/points",
    response_model=PointsResponse,
    responses={
        400: {"description": "The receipt id is not a UUID."},
        404: {"description": "No receipt found for that ID."},
    },
)
def get_receipt_points(
    receipt_id: str,
    registry: ReceiptRegistry = Depends(get_registry),
) -> PointsResponse:
    """Return the points awarded to a stored receipt."""
    parsed_id = parse_receipt_id(receipt_id)
    if parsed_id is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid receipt ID")

    try:
        receipt = registry.lookup(parsed_id)
    except ReceiptNotFound:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No receipt found for that ID.")

    try:
        points = score(receipt)
    except InvalidReceipt as exc:
        logger.error("Error calculating points for receipt %s: %s", parsed_id, exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error calculating receipt points",
        ) from exc

    sentry_breadcrumb(
        category="receipts",
        message="get_receipt_points.scored",
        data={"receipt_id": str(parsed_id), "points": points},
    )
    return PointsResponse(points=points)
