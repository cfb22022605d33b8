"""Cart and purchase rules that are independent from HTTP and DB.

A (client, game) pair is in one of three states: absent (no ownership
row), in_cart or purchased. The functions below decide transitions and
validate inputs; the service layer applies the result to the database.
"""

from decimal import Decimal
from typing import Iterable, List, Optional

from igra_store.domain.errors import (
    ConflictError,
    InsufficientFundsError,
    InvalidInputError,
    NotFoundError,
    NotInCartError,
)
from igra_store.models.dc_models import CartStatusModel

ABSENT = None


def status_after_add(current: Optional[CartStatusModel]) -> Optional[CartStatusModel]:
    """Return the new status, or None when adding changes nothing."""
    if current == CartStatusModel.in_cart:
        return None
    return CartStatusModel.in_cart


def status_after_leaving_cart(current: Optional[CartStatusModel], has_receipt: bool) -> Optional[CartStatusModel]:
    """Status once a game leaves the cart without being bought.

    Raises:
        NotInCartError: the game is not in the cart
    """
    if current != CartStatusModel.in_cart:
        raise NotInCartError("Game is not in cart")
    if has_receipt:
        return CartStatusModel.purchased
    return ABSENT


def ensure_in_cart(current: Optional[CartStatusModel]) -> None:
    # Only carted games can be bought; anything else reads as not found.
    if current != CartStatusModel.in_cart:
        raise NotFoundError("Game is not in cart")


def ensure_funds(balance: Decimal, cost: Decimal) -> None:
    if balance < cost:
        raise InsufficientFundsError(
            f"Insufficient balance: {balance} available, {cost} required"
        )


def cart_total(costs: Iterable[Decimal]) -> Decimal:
    return sum(costs, Decimal("0"))


def validate_amount(amount: Decimal) -> None:
    if amount is None or amount <= 0:
        raise InvalidInputError("Amount must be positive")


def validate_new_game(name: Optional[str], cost: Optional[Decimal], keys: Optional[List[str]]) -> List[str]:
    """Check a catalog game before it is stored.

    Args:
        name (str | None): Game name
        cost (Decimal | None): Price of one key
        keys (List[str] | None): License keys making up the pool

    Raises:
        InvalidInputError: name, cost or keys missing, or a negative cost
        ConflictError: the same key is given twice

    Returns:
        List[str]: The keys in the given order
    """
    if not name or not name.strip() or cost is None or not keys:
        raise InvalidInputError("Name, Cost, and at least one Key are required fields")
    if cost < 0:
        raise InvalidInputError("Cost must not be negative")

    if not all(key and key.strip() for key in keys):
        raise InvalidInputError("Keys must not be blank")
    if len(set(keys)) != len(keys):
        raise ConflictError("Duplicate keys in request")
    return list(keys)
