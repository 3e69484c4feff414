"""Domain errors raised by the access-control and content services.

The API layer translates these into HTTP responses in
``remembrance.exceptions.api_exception_handler``.
"""


class MemorialError(Exception):
    """Base exception for memorial operations."""
    default_message = 'Memorial operation failed.'

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)


class MemorialNotFound(MemorialError):
    """The memorial does not exist or the caller cannot see it."""
    default_message = 'Memorial not found.'


class ContentNotFound(MemorialError):
    """A milestone, media item, entry or participant could not be resolved."""
    default_message = 'Not found.'


class InvitationNotFound(MemorialError):
    default_message = 'Invitation Not Found'


class InvitationExpired(MemorialError):
    default_message = 'Invitation Expired'


class AccessDenied(MemorialError):
    """The caller can see the memorial but may not perform the action."""
    default_message = 'You do not have permission to perform this action.'


class InvalidTransition(MemorialError):
    """A state change that the lifecycle does not allow."""
    default_message = 'This change is not allowed in the current state.'


class InvalidAccessLevel(MemorialError):
    """The level cannot be granted to a participant or an invitation."""
    default_message = 'Access level must be contributor or visitor.'
