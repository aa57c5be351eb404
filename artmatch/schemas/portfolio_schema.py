# artmatch/schemas/portfolio_schema.py
from pydantic import BaseModel, ConfigDict
from typing import Optional
from datetime import datetime

class PortfolioOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    portfolio_id: int
    artist_user_id: int
    artist_name: str
    image_url: str
    description: Optional[str] = None
    item_type: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
