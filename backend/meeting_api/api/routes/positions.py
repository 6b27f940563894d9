"""Position lookup endpoints used to populate form selects."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from meeting_api.collections import positions as positions_store
from meeting_api.core.errors import failure_message
from meeting_api.db.session import get_db
from meeting_api.schemas.position import PositionResponse

router = APIRouter()


@router.get("", response_model=list[PositionResponse])
@failure_message("Failed to fetch positions")
def list_positions(db: Session = Depends(get_db)):
    return [PositionResponse.model_validate(p) for p in positions_store.find_all_positions(db)]


@router.get("/applied", response_model=list[PositionResponse])
@failure_message("Failed to fetch applied positions")
def list_applied_positions(db: Session = Depends(get_db)):
    return [
        PositionResponse.model_validate(p)
        for p in positions_store.find_all_applied_positions(db)
    ]
