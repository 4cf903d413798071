"""
Cart Service.

One cart per user, created on first add. Adding a menu item that is
already in the cart increments the existing line instead of inserting a
new one; the (cart, menu item) unique constraint backs this up and a
concurrent insert is retried once as an increment.
"""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from cityfood_api.models import Cart, CartItem, MenuItem, User
from cityfood_api.services.base_service import BaseService
from shared.config.constants import ErrorMessages, Limits
from shared.config.logging import get_logger
from shared.infrastructure.db import safe_commit
from shared.utils.admin_schemas import CartItemOutput, CartOutput
from shared.utils.exceptions import ConflictError, NotFoundError, ValidationError
from shared.utils.validators import validate_quantity

logger = get_logger(__name__)


class CartService(BaseService[Cart]):
    """Service for user carts."""

    def __init__(self, db: Session):
        super().__init__(db, Cart)

    def get_cart(self, user_id: str) -> CartOutput | None:
        """Return the user's cart with its items, or None if none exists yet."""
        cart = self.db.scalar(
            select(Cart)
            .where(Cart.user_id == user_id)
            .options(
                selectinload(Cart.cart_items)
                .selectinload(CartItem.menu_item)
                .selectinload(MenuItem.menu_section)
            )
        )
        if cart is None:
            return None
        return CartOutput.model_validate(cart)

    def add_to_cart(self, user_id: str, menu_item_id: str, quantity: int = 1) -> CartItemOutput:
        """
        Add a menu item to the user's cart, creating the cart if needed.

        Raises:
            ValidationError: If quantity < 1.
            NotFoundError: If user or menu item does not exist.
        """
        self._check_quantity(quantity)
        if self.db.get(User, user_id) is None:
            raise NotFoundError("Utilisateur", user_id)
        if self.db.get(MenuItem, menu_item_id) is None:
            raise NotFoundError("Article", menu_item_id)

        try:
            item = self._merge_line(user_id, menu_item_id, quantity)
        except IntegrityError:
            # Another request created the cart or the line first
            logger.info("Cart merge retried after concurrent insert", user_id=user_id)
            try:
                item = self._merge_line(user_id, menu_item_id, quantity)
            except IntegrityError as e:
                raise ConflictError(ErrorMessages.DUPLICATE_ENTRY, details=str(e.orig))

        self.db.refresh(item)
        logger.info(
            "Cart item added",
            user_id=user_id,
            menu_item_id=menu_item_id,
            quantity=item.quantity,
        )
        return CartItemOutput.model_validate(item)

    def set_cart_item_quantity(self, cart_item_id: str, quantity: int) -> CartItemOutput:
        """
        Overwrite the quantity of a cart line.

        Raises:
            ValidationError: If quantity < 1.
            NotFoundError: If the line does not exist.
        """
        self._check_quantity(quantity)
        item = self._get_item(cart_item_id)
        item.quantity = quantity
        self._commit("update cart_item")
        self.db.refresh(item)
        return CartItemOutput.model_validate(item)

    def remove_cart_item(self, cart_item_id: str) -> None:
        """Delete a cart line."""
        item = self._get_item(cart_item_id)
        self.db.delete(item)
        self._commit("delete cart_item")
        logger.info("Cart item removed", cart_item_id=cart_item_id)

    # =========================================================================
    # Helpers
    # =========================================================================

    def _merge_line(self, user_id: str, menu_item_id: str, quantity: int) -> CartItem:
        """Find-or-create the cart, then increment or insert the line, in one commit."""
        try:
            cart = self.db.scalar(select(Cart).where(Cart.user_id == user_id))
            if cart is None:
                cart = Cart(user_id=user_id)
                self.db.add(cart)
                self.db.flush()

            item = self.db.scalar(
                select(CartItem).where(
                    CartItem.cart_id == cart.id,
                    CartItem.menu_item_id == menu_item_id,
                )
            )
            if item is None:
                item = CartItem(cart_id=cart.id, menu_item_id=menu_item_id, quantity=quantity)
                self.db.add(item)
            else:
                # The merged line obeys the same bounds as a direct quantity update
                self._check_quantity(item.quantity + quantity)
                item.quantity = item.quantity + quantity

            safe_commit(self.db)
        except (IntegrityError, ValidationError):
            self.db.rollback()
            raise
        return item

    def _get_item(self, cart_item_id: str) -> CartItem:
        item = self.db.get(CartItem, cart_item_id)
        if item is None:
            raise NotFoundError("Article du panier", cart_item_id)
        return item

    @staticmethod
    def _check_quantity(quantity: int) -> None:
        try:
            validate_quantity(quantity, Limits.MIN_QUANTITY, Limits.MAX_QUANTITY)
        except ValueError as e:
            raise ValidationError(str(e), field="quantity", value=quantity)
