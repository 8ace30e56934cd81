"""Style transfer endpoints."""

from __future__ import annotations

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Query

from inkprompt.dependencies import get_history_store
from inkprompt.engine.errors import StyleTransferValidationError
from inkprompt.engine.style_transfer import available_transfers, preview_transfer, transfer_style
from inkprompt.history.store import HistoryStore, persist_record, record_from_transfer
from inkprompt.models.requests import TransferRequest
from inkprompt.models.style_transfer import (
    AvailableTransfer,
    StyleTransferRequest,
    StyleTransferResult,
    TransferPreview,
)

router = APIRouter(prefix="/transfer")


@router.post("", response_model=StyleTransferResult)
async def transfer(
    req: TransferRequest,
    background_tasks: BackgroundTasks,
    store: HistoryStore = Depends(get_history_store),
) -> StyleTransferResult:
    request = StyleTransferRequest(**req.model_dump(exclude={"user_id"}))
    try:
        result = transfer_style(request)
    except StyleTransferValidationError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e

    if req.user_id:
        background_tasks.add_task(
            persist_record, store, record_from_transfer(req.user_id, result, req.target_backend)
        )
    return result


@router.get("/rules", response_model=list[AvailableTransfer])
async def rules() -> list[AvailableTransfer]:
    return available_transfers()


@router.get("/preview", response_model=TransferPreview)
async def preview(
    from_style: str = Query(..., description="Source style"),
    to_style: str = Query(..., description="Target style"),
) -> TransferPreview:
    return preview_transfer(from_style, to_style)
