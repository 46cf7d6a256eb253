"""
Dependency injection for the storefront bounded context.

Provides FastAPI dependency functions that wire infrastructure
adapters into use cases via constructor injection.
Tests replace the four gateway providers through
``app.dependency_overrides``.
"""

from functools import lru_cache

from fastapi import Depends
from sqlalchemy.engine import Engine

from ninjacoders.application.storefront.add_to_cart import AddToCartUseCase
from ninjacoders.application.storefront.change_cart_item_qty import (
    ChangeCartItemQtyUseCase,
)
from ninjacoders.application.storefront.checkout import CheckoutUseCase
from ninjacoders.application.storefront.delete_from_cart import DeleteFromCartUseCase
from ninjacoders.application.storefront.get_cart import GetCartUseCase
from ninjacoders.application.storefront.list_products import ListProductsUseCase
from ninjacoders.application.storefront.newsletter_signup import (
    NewsletterSignupUseCase,
)
from ninjacoders.application.storefront.store_contest_photo import (
    StoreContestPhotoUseCase,
)
from ninjacoders.core.config import settings
from ninjacoders.domain.storefront.ports import (
    DataStoreGateway,
    MailGateway,
    PhotoStorage,
    ReceiptRenderer,
)
from ninjacoders.infrastructure.storefront.data_store_gateway import (
    SqlDataStoreGateway,
)
from ninjacoders.infrastructure.storefront.mail_gateway import (
    LoggingMailGateway,
    SmtpMailGateway,
)
from ninjacoders.infrastructure.storefront.photo_storage import LocalPhotoStorage
from ninjacoders.infrastructure.storefront.receipt_renderer import (
    JinjaReceiptRenderer,
)
from ninjacoders.infrastructure.storefront.schema import create_store_engine
from ninjacoders.interfaces.rendering import TEMPLATES_DIR


@lru_cache(maxsize=1)
def get_db_engine() -> Engine:
    """Build the SQLAlchemy engine once per process."""
    return create_store_engine(settings.database_url)


# ----------------------------------------------------------------------
# Gateways
# ----------------------------------------------------------------------


def get_data_store() -> DataStoreGateway:
    return SqlDataStoreGateway(engine=get_db_engine())


def get_mail_gateway() -> MailGateway:
    """Use SMTP when a host is configured, otherwise only log messages."""
    if not settings.smtp_host:
        return LoggingMailGateway(sender=settings.mail_from)
    return SmtpMailGateway(
        host=settings.smtp_host,
        port=settings.smtp_port,
        sender=settings.mail_from,
        user=settings.smtp_user,
        password=settings.smtp_password,
        use_tls=settings.smtp_use_tls,
        timeout=settings.smtp_timeout,
    )


def get_receipt_renderer() -> ReceiptRenderer:
    return JinjaReceiptRenderer(TEMPLATES_DIR, currency_symbol=settings.currency_symbol)


def get_photo_storage() -> PhotoStorage:
    return LocalPhotoStorage(root=settings.contest_upload_dir)


# ----------------------------------------------------------------------
# Use cases
# ----------------------------------------------------------------------


def get_list_products_use_case(
    store: DataStoreGateway = Depends(get_data_store),
) -> ListProductsUseCase:
    """Build ListProductsUseCase with its infrastructure dependencies."""
    return ListProductsUseCase(store=store)


def get_cart_use_case(
    store: DataStoreGateway = Depends(get_data_store),
) -> GetCartUseCase:
    """Build GetCartUseCase with its infrastructure dependencies."""
    return GetCartUseCase(store=store)


def get_add_to_cart_use_case(
    store: DataStoreGateway = Depends(get_data_store),
) -> AddToCartUseCase:
    """Build AddToCartUseCase with its infrastructure dependencies."""
    return AddToCartUseCase(store=store)


def get_change_cart_item_qty_use_case(
    store: DataStoreGateway = Depends(get_data_store),
) -> ChangeCartItemQtyUseCase:
    """Build ChangeCartItemQtyUseCase with its infrastructure dependencies."""
    return ChangeCartItemQtyUseCase(store=store)


def get_delete_from_cart_use_case(
    store: DataStoreGateway = Depends(get_data_store),
) -> DeleteFromCartUseCase:
    """Build DeleteFromCartUseCase with its infrastructure dependencies."""
    return DeleteFromCartUseCase(store=store)


def get_checkout_use_case(
    store: DataStoreGateway = Depends(get_data_store),
    mailer: MailGateway = Depends(get_mail_gateway),
    renderer: ReceiptRenderer = Depends(get_receipt_renderer),
) -> CheckoutUseCase:
    """Build CheckoutUseCase with its infrastructure dependencies."""
    return CheckoutUseCase(store=store, mailer=mailer, renderer=renderer)


def get_newsletter_signup_use_case(
    mailer: MailGateway = Depends(get_mail_gateway),
) -> NewsletterSignupUseCase:
    """Build NewsletterSignupUseCase with its infrastructure dependencies."""
    return NewsletterSignupUseCase(mailer=mailer)


def get_store_contest_photo_use_case(
    storage: PhotoStorage = Depends(get_photo_storage),
) -> StoreContestPhotoUseCase:
    """Build StoreContestPhotoUseCase with its infrastructure dependencies."""
    return StoreContestPhotoUseCase(storage=storage)
