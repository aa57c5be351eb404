# artmatch/schemas/like_schema.py
from pydantic import BaseModel

class LikeToggleOut(BaseModel):
    message: str
    liked: bool

class LikeStatusOut(BaseModel):
    liked: bool
