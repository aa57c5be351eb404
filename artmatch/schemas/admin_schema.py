# artmatch/schemas/admin_schema.py
from pydantic import BaseModel
from typing import Optional

from artmatch.schemas.profile_schema import ProfileOut
from artmatch.schemas.user_schema import AdminUserOut

class DashboardStatsOut(BaseModel):
    total_users: int
    artists: int
    employers: int
    job_postings: int
    chats: int
    reviews: int
    comments: int
    portfolios: int

# 單一使用者的完整資料 (含 Profile)
class AdminUserDetailOut(AdminUserOut):
    profile: Optional[ProfileOut] = None
