"""Authentication service for JWT and password handling."""

import logging
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt
from passlib.context import CryptContext

from blog.config import Settings
from blog.errors import (
    InvalidCredentialsError,
    InvalidTokenError,
    NotFoundError,
    UserNotFoundError,
)
from blog.models.enums import AuthProvider
from blog.models.user import User
from blog.repositories.user import UserRepository
from blog.schemas.auth import UserRegister

logger = logging.getLogger(__name__)

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


class AuthService:
    """Issues and verifies session tokens for local and Google accounts."""

    def __init__(self, users: UserRepository, settings: Settings):
        self.users = users
        self.secret = settings.jwt_secret
        self.algorithm = settings.jwt_algorithm
        self.expiration = timedelta(minutes=settings.jwt_expiration_minutes)

    def create_access_token(self, user: User) -> str:
        """Create a signed JWT whose subject is the user id."""
        expire = datetime.now(UTC) + self.expiration
        to_encode = {
            "sub": user.id,
            "email": user.email,
            "exp": expire,
        }
        return jwt.encode(to_encode, self.secret, algorithm=self.algorithm)

    def parse_token(self, token: str) -> User:
        """Verify a token and resolve its subject to a user."""
        try:
            payload = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except JWTError as e:
            raise InvalidTokenError() from e

        user_id = payload.get("sub")
        if not user_id:
            raise InvalidTokenError()

        try:
            return self.users.find_by_id(user_id)
        except NotFoundError as e:
            raise UserNotFoundError("User not found") from e

    def login(self, email: str, password: str) -> tuple[str, User]:
        """Authenticate by e-mail and password."""
        try:
            user = self.users.find_by_email(email)
        except NotFoundError:
            logger.info(f"Login failed for unknown email {email}")
            raise InvalidCredentialsError() from None

        # Identity-provider accounts have no local password
        if user.password_hash is None or not verify_password(password, user.password_hash):
            logger.info(f"Login failed for user {user.id}")
            raise InvalidCredentialsError()

        return self.create_access_token(user), user

    def register(self, data: UserRegister) -> tuple[str, User]:
        """Create a local account and sign it in."""
        user = User(
            name=data.name,
            lastname=data.lastname,
            email=data.email,
            password_hash=get_password_hash(data.password),
            auth_provider=AuthProvider.LOCAL.value,
        )
        user = self.users.create(user)
        logger.info(f"Registered user {user.id}")
        return self.create_access_token(user), user

    def login_or_register_with_google(
        self, email: str, name: str, provider_id: str, picture: str | None
    ) -> tuple[str, User]:
        """Sign in with verified Google claims, creating the account if needed.

        An existing account is switched to the Google provider. Its local
        password hash is dropped, since a password is only kept for local
        accounts.
        """
        try:
            user = self.users.find_by_email(email)
        except NotFoundError:
            user = self.users.create(
                User(
                    name=name,
                    email=email,
                    google_id=provider_id,
                    profile_picture=picture,
                    auth_provider=AuthProvider.GOOGLE.value,
                )
            )
            logger.info(f"Registered user {user.id} via Google")
        else:
            user = self.users.update(
                user.id,
                {
                    "google_id": provider_id,
                    "profile_picture": picture,
                    "auth_provider": AuthProvider.GOOGLE.value,
                    "password_hash": None,
                },
            )

        return self.create_access_token(user), user
