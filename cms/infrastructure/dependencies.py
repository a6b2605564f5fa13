"""FastAPI dependency injection — wires infrastructure to application layer."""

from collections.abc import AsyncGenerator
from functools import lru_cache

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBasic, HTTPBasicCredentials
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from cms.application.interfaces import ImageStorage, MailSender
from cms.application.services import ArticleService, AuthService, ContactService
from cms.config import get_settings
from cms.domain.entities import User
from cms.domain.exceptions import PersistenceError
from cms.infrastructure.database.repositories import (
    SQLAlchemyArticleRepository,
    SQLAlchemyCategoryRepository,
    SQLAlchemyUserRepository,
)
from cms.infrastructure.database.session import get_db_session
from cms.infrastructure.mail import FastMailSender, build_connection_config
from cms.infrastructure.security import PasslibPasswordHasher
from cms.infrastructure.storage.local_image_storage import LocalImageStorage

_basic_auth = HTTPBasic(realm="admin")


@lru_cache
def get_image_storage() -> ImageStorage:
    """Singleton image storage rooted at the configured upload directory."""
    settings = get_settings()
    return LocalImageStorage(
        upload_dir=settings.upload_dir,
        max_size_bytes=settings.max_upload_size_mb * 1024 * 1024,
    )


@lru_cache
def get_mail_sender() -> MailSender:
    """Singleton SMTP sender built from settings."""
    return FastMailSender(build_connection_config(get_settings()))


async def get_article_service(
    session: AsyncSession = Depends(get_db_session),
    image_storage: ImageStorage = Depends(get_image_storage),
) -> AsyncGenerator[ArticleService, None]:
    """Provides an ArticleService instance with its repositories wired up.

    The session is committed here, before replaced images leave the disk; when
    the request fails, images stored during it are removed instead.
    """
    service = ArticleService(
        SQLAlchemyArticleRepository(session),
        SQLAlchemyCategoryRepository(session),
        image_storage=image_storage,
    )
    try:
        yield service
        try:
            await session.commit()
        except SQLAlchemyError as exc:
            raise PersistenceError("commit", str(exc)) from exc
    except Exception:
        await service.discard_stored_images()
        raise
    await service.remove_replaced_images()


async def get_auth_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[AuthService, None]:
    """Provides an AuthService backed by the users table."""
    yield AuthService(SQLAlchemyUserRepository(session), PasslibPasswordHasher())


async def get_contact_service(
    mail_sender: MailSender = Depends(get_mail_sender),
) -> AsyncGenerator[ContactService, None]:
    """Provides a ContactService that mails the configured recipient."""
    yield ContactService(mail_sender, recipient=get_settings().contact_recipient)


async def require_admin(
    credentials: HTTPBasicCredentials = Depends(_basic_auth),
    auth_service: AuthService = Depends(get_auth_service),
) -> User:
    """Gate for admin routes — 401 unless the Basic credentials match a user."""
    user = await auth_service.authenticate(credentials.username, credentials.password)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="login incorrect",
            headers={"WWW-Authenticate": "Basic"},
        )
    return user
