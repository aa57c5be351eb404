# artmatch/schemas/job_schema.py
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import datetime

# 基礎欄位 (對應 Model)
class JobPostingBase(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    location: Optional[str] = Field(None, max_length=255)
    budget: Optional[float] = Field(None, gt=0)

# 雇主刊登職缺時的 Request Body
class JobPostingCreate(JobPostingBase):
    pass

# 雇主更新職缺 (所有欄位皆可選)
class JobPostingUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, min_length=1)
    location: Optional[str] = Field(None, max_length=255)
    budget: Optional[float] = Field(None, gt=0)

# 回傳給前端的職缺資料
class JobPostingOut(JobPostingBase):
    model_config = ConfigDict(from_attributes=True)

    job_id: int
    employer_user_id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

class JobApplicationOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    application_id: int
    job_id: int
    artist_user_id: int
    status: str
    created_at: Optional[datetime] = None

# 藝術家檢視「我的應徵」時附上職缺資訊
class JobApplicationWithJobOut(JobApplicationOut):
    job: Optional[JobPostingOut] = None

class ApplyOut(BaseModel):
    message: str
    application: JobApplicationOut
