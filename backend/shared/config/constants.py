"""
Centralized constants for the back-office.

Usage:
    from shared.config.constants import OrderStatus, Limits

    if status == OrderStatus.PENDING:
        ...
"""

from typing import Final


# =============================================================================
# Order Status
# =============================================================================


class OrderStatus:
    """
    Order status constants.

    The natural progression is PENDING -> PREPARING -> READY -> DELIVERED with
    CANCELLED reachable from anywhere, but updates are not checked against it:
    any status in ALL may be written at any time.
    """

    PENDING: Final[str] = "PENDING"
    PREPARING: Final[str] = "PREPARING"
    READY: Final[str] = "READY"
    DELIVERED: Final[str] = "DELIVERED"
    CANCELLED: Final[str] = "CANCELLED"

    ALL: Final[list[str]] = [PENDING, PREPARING, READY, DELIVERED, CANCELLED]


# =============================================================================
# Limits
# =============================================================================


class Limits:
    """Validation limits."""

    MIN_QUANTITY: Final[int] = 1
    MAX_QUANTITY: Final[int] = 999

    # Prices are whole francs CFA
    MIN_PRICE: Final[int] = 1

    MAX_NAME_LENGTH: Final[int] = 200
    MAX_DESCRIPTION_LENGTH: Final[int] = 2000
    MAX_URL_LENGTH: Final[int] = 2048

    RECENT_ORDERS: Final[int] = 5

    DEFAULT_PAGE_SIZE: Final[int] = 10


class ErrorMessages:
    """Standardized error messages in French."""

    INTERNAL: Final[str] = "Erreur interne du serveur"
    INVALID_INPUT: Final[str] = "Données invalides"
    INVALID_CREDENTIALS: Final[str] = "Identifiants invalides"
    DUPLICATE_ENTRY: Final[str] = "Cet enregistrement existe déjà"

    CATEGORY_EXISTS: Final[str] = "Cette catégorie existe déjà"
    BUSINESS_EXISTS: Final[str] = "Ce commerce existe déjà"
    EMAIL_EXISTS: Final[str] = "Un utilisateur avec cet email existe déjà"

    INVALID_STATUS: Final[str] = "Statut de commande invalide"
    INVALID_QUANTITY: Final[str] = "La quantité doit être au moins 1"


def validate_order_status(status: str) -> bool:
    """Validate that an order status is one of the known values."""
    return status in OrderStatus.ALL
