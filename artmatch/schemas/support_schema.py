# artmatch/schemas/support_schema.py
from pydantic import BaseModel, ConfigDict, Field

# 前端沿用 camelCase 欄位 (hasSupported / supportCount)
class SupportStatusOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    has_supported: bool = Field(..., alias="hasSupported")
    support_count: int = Field(..., alias="supportCount")

class SupportToggleOut(SupportStatusOut):
    message: str
