import logging
from pathlib import Path
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from artmatch.core.config import settings
from artmatch.routers import (
    auth_router, user_router, profile_router,
    message_router, notification_router,
    job_router, comment_router, review_router, admin_router,
    portfolio_router
)

# --- 匯入所有 Model 檔案 ---
# 都在應用程式啟動時被 SQLAlchemy 註冊。
from artmatch.models import user
from artmatch.models import artist_profile
from artmatch.models import employer_profile
from artmatch.models import like
from artmatch.models import message
from artmatch.models import notification
from artmatch.models import job_posting
from artmatch.models import comment
from artmatch.models import review
from artmatch.models import support
from artmatch.models import portfolio


# 設定基礎日誌
logging.basicConfig(level=settings.LOG_LEVEL, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__) # 建立一個 logger 實例

app = FastAPI(title="ArtMatch API")

# --- 設定 CORS (跨來源資源共用) ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"], # 允許所有 HTTP 方法
    allow_headers=["*"], # 允許所有 HTTP 標頭
)

# --- 未預期的錯誤一律回傳 500 ---
@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "伺服器內部錯誤"}
    )

# --- 上傳的檔案 (大頭貼、作品集) ---
# UPLOAD_DIR 放在 static 目錄底下，由 /static 對外提供
Path(settings.UPLOAD_DIR).mkdir(parents=True, exist_ok=True)
static_root = Path(settings.UPLOAD_DIR).parent
app.mount("/static", StaticFiles(directory=str(static_root)), name="static")

# --- 根路徑 ---
@app.get("/")
def read_root():
    return {"status": "success", "message": "Backend is running!"}

# --- 載入 API 路由 ---
app.include_router(auth_router.router)
app.include_router(user_router.router)
app.include_router(profile_router.router)
app.include_router(message_router.router)
app.include_router(message_router.ws_router)
app.include_router(notification_router.router)
app.include_router(job_router.router)
app.include_router(job_router.application_router)
app.include_router(comment_router.router)
app.include_router(review_router.router)
app.include_router(portfolio_router.router)
app.include_router(admin_router.router)
