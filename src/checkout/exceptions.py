"""Checkout error taxonomy.

Business-rule failures extend Protean's ``ValidationError`` so callers that
only know about Protean still treat them as invalid input. Transient
infrastructure failures extend ``ProteanException`` and are the only ones the
calling layer may retry.
"""

from protean.exceptions import InvalidOperationError, ProteanException, ValidationError


class VendorConflict(ValidationError):
    """A product from another vendor was added to a non-empty cart."""


class InvalidQuantity(ValidationError):
    """A line quantity below the allowed minimum."""


class InvalidSignature(ValidationError):
    """A settlement signature that does not match the expected HMAC."""


class PaymentNotVerified(InvalidOperationError):
    """An order was committed without a verified settlement."""


class GatewayError(ProteanException):
    """The payment gateway could not be reached or refused the request."""


class StoreUnavailable(ProteanException):
    """A backing store or lookup service timed out or kept conflicting."""
