# artmatch/services/auth_service.py
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError
from fastapi import HTTPException, status
import logging

from artmatch.repositories.user_repo import UserRepository
from artmatch.core.security import verify_password, create_access_token, get_password_hash
from artmatch.models.user import User, UserRoleEnum
from artmatch.models.artist_profile import ArtistProfile
from artmatch.models.employer_profile import EmployerProfile
from artmatch.schemas.user_schema import UserCreate

logger = logging.getLogger(__name__)

class AuthService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.user_repo = UserRepository(db)

    async def authenticate_user(self, email: str, password: str) -> User | None:
        """
        驗證使用者帳號密碼。
        成功回傳 User 物件，失敗回傳 None。
        """
        user = await self.user_repo.get_user_by_email(email)

        # 1. 檢查使用者是否存在
        if not user:
            return None

        # 2. 檢查是否被停權
        if not user.is_active:
            return None

        # 3. 檢查密碼是否正確
        if not verify_password(plain_password=password, hashed_password=user.password_hash):
            return None

        return user

    async def register_user(self, user_create: UserCreate) -> User:
        """
        處理使用者註冊 (同時建立對應角色的空白 Profile)
        """
        # 管理員帳號不開放自行註冊
        if user_create.role == UserRoleEnum.admin:
            raise HTTPException(status.HTTP_400_BAD_REQUEST, "無法註冊管理員帳號")

        # 1. 檢查帳號 / Email 是否已被註冊
        if await self.user_repo.get_user_by_username(user_create.username):
            raise HTTPException(status.HTTP_409_CONFLICT, "此帳號已經被註冊")
        if await self.user_repo.get_user_by_email(user_create.email):
            raise HTTPException(status.HTTP_409_CONFLICT, "此 Email 已經被註冊")

        # 2. 雜湊密碼
        hashed_password = get_password_hash(user_create.password)

        # 3. 建立 User ORM 模型 (Profile 由 relationship 在同一個交易寫入)
        new_user = User(
            username=user_create.username,
            email=user_create.email,
            password_hash=hashed_password,
            fullname=user_create.fullname,
            phone_number=user_create.phone_number,
            role=user_create.role
        )
        if user_create.role == UserRoleEnum.artist:
            new_user.artist_profile = ArtistProfile(bio="")
        else:
            new_user.employer_profile = EmployerProfile(bio="")

        # 4. 呼叫 Repository 儲存到資料庫
        try:
            created_user = await self.user_repo.create_user(new_user)
        except IntegrityError:
            # 兩個請求同時註冊同一組帳號時，由唯一鍵擋下
            await self.db.rollback()
            logger.warning(f"Duplicate registration for {user_create.email}")
            raise HTTPException(status.HTTP_409_CONFLICT, "此帳號或 Email 已經被註冊")

        logger.info(f"User registered: {created_user.user_id} ({created_user.role.value})")
        return created_user

    def create_login_token(self, user: User) -> str:
        """
        為指定使用者建立 access token
        """
        access_token = create_access_token(
            data={
                "sub": user.email,
                "user_id": user.user_id,
                "role": user.role.value # 確保存入的是字串
            }
        )
        return access_token
