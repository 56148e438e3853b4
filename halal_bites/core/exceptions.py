"""
Domain errors raised by repositories and services.

Routers translate these into HTTP responses; the listing endpoint
collapses `ServiceUnavailable` into an empty list.
"""


class ServiceUnavailable(Exception):
    kind = "unknown"


class StoreUnavailable(ServiceUnavailable):
    kind = "store"


class CacheUnavailable(ServiceUnavailable):
    kind = "cache"


class InvalidListingQuery(ValueError):
    pass


class RestaurantNotFound(LookupError):
    pass


class CommentNotFound(LookupError):
    pass


class DuplicateRestaurant(Exception):
    MESSAGES = {
        "name": "A restaurant with this name already exists",
        "address": "A restaurant at this address already exists",
    }

    def __init__(self, field: str):
        self.field = field
        super().__init__(self.MESSAGES[field])


class InvalidRestaurant(ValueError):
    """A write would leave the stored record failing certification rules."""


class ConstraintViolation(Exception):
    """The database rejected a write (NOT NULL, UNIQUE, foreign key)."""
