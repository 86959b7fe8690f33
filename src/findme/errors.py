"""Errors raised along the startup and locate paths.

Each error carries the fixed message shown to the user when the
orchestrator turns it into an alert.
"""


class FindMeError(Exception):
    """Base class for findme errors."""

    message = "Something went wrong."

    def __init__(self, detail: str | None = None):
        super().__init__(detail or self.message)
        self.detail = detail


class PermissionDenied(FindMeError):
    """The user declined foreground location access."""

    message = "Permission to access location was denied"


class LocationAcquisitionFailure(FindMeError):
    """The position provider could not produce a fix."""

    message = "Error fetching location or country data."


class AddressResolutionFailure(FindMeError):
    """The reverse geocoder answered without a usable body."""

    message = "Error fetching location data."


class IpLookupFailure(FindMeError):
    """The public IP could not be determined."""

    message = "Error fetching IP address."
