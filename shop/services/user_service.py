from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from shop.data.models.user import UserModel
from shop.repos.user_repo import UserRepo
from shop.domain.errors import Conflict, NotFound, Unauthenticated
from shop.domain.identity import UserIdentity
from shop.domain.schemas import UserCreate, UserRead
from shop.utils.security import hash_password, new_token, verify_password
from shop.utils.logging import get_logger

logger = get_logger(__name__)


class UserService:
    def __init__(self, db: Session):
        self.repo = UserRepo(db)

    def register(self, payload: UserCreate) -> UserRead:
        if self.repo.get_by_username(payload.username):
            raise Conflict(f"Username {payload.username} is already taken")

        user = UserModel(
            username=payload.username,
            password_hash=hash_password(payload.password),
        )
        try:
            created = self.repo.create_user(user)
        except IntegrityError:
            # ktos zarejestrowal ten sam username w miedzyczasie
            self.repo.rollback()
            raise Conflict(f"Username {payload.username} is already taken")

        logger.info(f"Registered user {created.id} ({created.username})")
        return UserRead.model_validate(created)

    def list_users(self) -> list[UserRead]:
        return [UserRead.model_validate(u) for u in self.repo.list_users()]

    def get_user(self, user_id: int) -> UserRead:
        user = self.repo.get_user(user_id)
        if not user:
            raise NotFound(f"User {user_id} not found")
        return UserRead.model_validate(user)

    def login(self, username: str, password: str) -> str:
        user = self.repo.get_by_username(username)
        if not user or not verify_password(password, user.password_hash):
            logger.warning(f"Failed login for {username}")
            raise Unauthenticated("Invalid username/password")

        # nowy token zastepuje poprzedni
        user.token = new_token()
        self.repo.save(user)

        logger.info(f"User {user.id} logged in")
        return user.token

    def resolve_token(self, token: str | None) -> UserIdentity | None:
        if not token:
            return None
        user = self.repo.get_by_token(token)
        if not user:
            return None
        return UserIdentity(id=user.id, username=user.username)
