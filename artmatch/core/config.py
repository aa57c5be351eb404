# artmatch/core/config.py
# 應用程式設定 (例如資料庫連線字串、JWT 秘鑰等)
from typing import List
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    # 資料庫設定
    DATABASE_URL: str
    # (可選) 設為 True 會在 console 印出 SQL 語句
    SQL_ECHO: bool = False

    # JWT 設定
    JWT_SECRET_KEY: str
    # JWT 演算法
    JWT_ALGORITHM: str = "HS256"
    # 存取令牌過期時間（分鐘）
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    # 日誌等級
    LOG_LEVEL: str = "INFO"

    # CORS 允許的來源
    CORS_ORIGINS: List[str] = ["*"]

    # 上傳檔案 (大頭貼、作品集) 的位置
    UPLOAD_DIR: str = "static/uploads"
    UPLOAD_URL_PREFIX: str = "/static/uploads"
    # 單一檔案大小上限 (bytes)
    MAX_UPLOAD_BYTES: int = 5 * 1024 * 1024

    # 環境變數檔案
    class Config:
        env_file = ".env"

# 建立設定實例
settings = Settings()
