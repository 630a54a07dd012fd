"""
Exceptions raised by the service layer.

Places errors never leave the search aggregator; account and donation
errors are translated to HTTP responses by the routers.
"""


class PlacesError(Exception):
    """Base class for places lookup failures."""


class ProviderUnavailable(PlacesError):
    """The places provider is unavailable or rejected a search request."""


class DetailFetchFailed(PlacesError):
    """A place detail could not be fetched or parsed."""

    def __init__(self, place_id: str, reason: str = ""):
        self.place_id = place_id
        self.reason = reason
        super().__init__(f"Detail fetch failed for {place_id}: {reason}" if reason else f"Detail fetch failed for {place_id}")


class AccountError(Exception):
    """Base class for account failures."""


class InvalidCredentials(AccountError):
    pass


class AccountExists(AccountError):
    pass


class InvalidDonation(ValueError):
    pass


class InvalidProfile(ValueError):
    pass
