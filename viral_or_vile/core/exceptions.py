"""
Exception hierarchy for the analysis service.

Two failure kinds reach the caller: input errors (nothing was sent to the
model) and upstream errors (the model call failed). Each carries the HTTP
status it maps to; the app-level handler in ``main`` renders them as
``{"error": <message>}``.
"""


class ViralOrVileError(Exception):
    """Base exception for the service"""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ImageInputError(ViralOrVileError):
    """Raised when the request does not carry a usable image"""

    status_code = 400


class ImageTooLargeError(ImageInputError):
    """Raised when the upload exceeds the configured size limit"""

    status_code = 413


class UnsupportedImageTypeError(ImageInputError):
    """Raised when the upload declares a non-image content type"""

    status_code = 415


class UpstreamModelError(ViralOrVileError):
    """Raised when the call to the vision model fails for any reason"""

    status_code = 500
