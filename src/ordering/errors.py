"""Ordering-specific failures that sit beside Protean's own exceptions.

Missing products, cart lines and orders surface as
``protean.exceptions.ObjectNotFoundError``; malformed input surfaces as
``protean.exceptions.ValidationError``. The two classes below cover the
remaining outcomes of the order lifecycle. Both carry a ``messages`` dict
keyed by field, like ``ValidationError``.
"""

from protean.exceptions import InvalidOperationError, ProteanExceptionWithMessage


class AccessDeniedError(ProteanExceptionWithMessage):
    """A seller acted on an order or product that holds none of their listings."""


class InvalidTransitionError(ProteanExceptionWithMessage, InvalidOperationError):
    """The requested status change is not allowed from the order's current status."""
