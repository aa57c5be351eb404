# artmatch/utils/ids.py
# 路徑參數 (例如 /users/{user_id}) 的 ID 解析

from fastapi import HTTPException, status


def parse_id(value: str, label: str = "ID") -> int:
    """
    將路徑上的字串轉成正整數 ID。
    格式錯誤 (非數字、0 或負數) 一律回傳 400，而不是 FastAPI 預設的 422。
    """
    try:
        parsed = int(str(value).strip())
    except (TypeError, ValueError):
        raise HTTPException(status.HTTP_400_BAD_REQUEST, f"無效的 {label}")
    if parsed <= 0:
        raise HTTPException(status.HTTP_400_BAD_REQUEST, f"無效的 {label}")
    return parsed
