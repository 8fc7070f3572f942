# storefront/services/auth_service.py
from datetime import datetime, timezone

from sqlalchemy.orm import Session

from storefront.data.models.user import UserModel
from storefront.domain.schemas import UserCreate, UserRead
from storefront.repos.user_repo import UserRepo
from storefront.utils.security import create_token, hash_password, verify_password
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class AuthService:
    def __init__(self, db: Session):
        self.repo = UserRepo(db)

    def register(self, payload: UserCreate, role: str = "customer") -> dict:
        email = payload.email.lower()
        if self.repo.get_by_email(email):
            raise ValueError("Email already registered")

        user = self.repo.create_user(
            UserModel(
                name=payload.name,
                email=email,
                password_hash=hash_password(payload.password),
                role=role,
            )
        )
        logger.info(f"User {user.id} registered ({role})")
        return self._token_response(user)

    def login(self, email: str, password: str) -> dict:
        user = self.repo.get_by_email(email)
        if not user or not verify_password(password, user.password_hash):
            raise PermissionError("Invalid credentials")
        return self._token_response(user)

    def get_user(self, user_id: int) -> UserRead:
        user = self.repo.get_user(user_id)
        if not user:
            raise ValueError("User not found")
        return UserRead.model_validate(user)

    def change_password(self, user_id: int, current_password: str, new_password: str) -> None:
        user = self.repo.get_user(user_id)
        if not user:
            raise ValueError("User not found")
        if not verify_password(current_password, user.password_hash):
            raise PermissionError("Current password is incorrect")

        user.password_hash = hash_password(new_password)
        user.updated_at = datetime.now(timezone.utc)
        self.repo.save(user)
        logger.info(f"User {user_id} changed password")

    @staticmethod
    def _token_response(user: UserModel) -> dict:
        token = create_token({"id": user.id, "email": user.email, "role": user.role})
        return {"token": token, "user": UserRead.model_validate(user)}
