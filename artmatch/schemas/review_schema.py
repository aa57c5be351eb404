# artmatch/schemas/review_schema.py
from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, Optional
from datetime import datetime

class ReviewCreate(BaseModel):
    chat_id: int = Field(..., gt=0)
    reviewed_user_id: int = Field(..., gt=0)
    overall_rating: int = Field(..., ge=1, le=5)
    specific_answers: Optional[Dict[str, Any]] = None

class ReviewOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    review_id: int
    chat_id: int
    reviewer_user_id: int
    reviewed_user_id: int
    overall_rating: int
    specific_answers: Optional[Dict[str, Any]] = None
    reviewer_name: str
    created_at: Optional[datetime] = None

class AverageRatingOut(BaseModel):
    average_rating: Optional[float] = None
    review_count: int
