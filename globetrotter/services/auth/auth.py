from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.exc import IntegrityError

from globetrotter.core.exceptions import ConflictError, InvalidCredentials
from globetrotter.core.logger import logger
from globetrotter.core.security import hash_password, pwd_context, verify_password, create_access_token
from globetrotter.models.user.user import User
from globetrotter.schemas.user.user import UserCreate


async def find_user_by_email(db: AsyncSession, email: str):
    result = await db.execute(select(User).where(User.email == email.lower()))
    return result.scalar_one_or_none()


async def register_user(user_data: UserCreate, db: AsyncSession) -> User:
    if await find_user_by_email(db, user_data.email):
        raise ConflictError("Email already registered")

    new_user = User(
        name=user_data.name,
        email=user_data.email,
        hashed_password=hash_password(user_data.password),
        phone_number=user_data.phone_number,
        city=user_data.city,
    )

    db.add(new_user)
    try:
        await db.commit()
        await db.refresh(new_user)
    except IntegrityError:
        # Fallback in case of race condition with the lookup above
        await db.rollback()
        raise ConflictError("Email already registered")

    logger.info(f"User registered: {new_user.id}")
    return new_user


async def login_user(email: str, password: str, db: AsyncSession) -> dict:
    user = await find_user_by_email(db, email)

    if not user:
        # keep the unknown-email path as slow as a real hash check
        pwd_context.dummy_verify()
        raise InvalidCredentials()

    if not verify_password(password, user.hashed_password):
        raise InvalidCredentials()

    token = create_access_token(data={"sub": user.id})
    logger.info(f"User logged in: {user.id}")

    return {
        "message": "Login successful",
        "token": token,
        "token_type": "bearer",
        "user": user,
    }


def logout_user() -> dict:
    # Tokens are stateless; the client drops its copy
    return {"message": "Logout successful"}
