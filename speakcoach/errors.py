"""
Exception types shared by the services and routers
"""


class SpeakCoachError(Exception):
    """Base class for all SpeakCoach errors"""


class InvalidInputError(SpeakCoachError):
    """Input payload is empty, unreadable or otherwise unusable"""


class TranscriptionUnavailable(SpeakCoachError):
    """The transcriber could not produce text for the audio"""


class NotFoundError(SpeakCoachError):
    """Requested record does not exist"""


class PermissionDeniedError(SpeakCoachError):
    """Caller is not allowed to touch the record"""


class ConflictError(SpeakCoachError):
    """Request conflicts with the current state of the record"""
