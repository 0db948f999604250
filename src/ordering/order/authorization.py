"""Multi-seller authorization gate.

An order may hold products from several sellers. A seller may act on the
order when at least one of its lines is theirs. Ownership is read from the
seller id snapshotted onto each line at checkout, so it is recomputed on
every call, never stored, and survives products being delisted later.
"""

from ordering.errors import AccessDeniedError


def sellers_of(order) -> set[str]:
    return {str(line.seller_id) for line in order.lines}


def owns(order, seller_id) -> bool:
    return str(seller_id) in sellers_of(order)


def authorize(order, seller_id) -> None:
    """Raise ``AccessDeniedError`` unless ``seller_id`` owns a line of ``order``."""
    if not owns(order, seller_id):
        raise AccessDeniedError({"order_id": ["You cannot update this order"]})
