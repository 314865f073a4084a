"""
Failure types surfaced by the verification pipeline.

Every error a caller can see derives from FactCheckError and carries a
user-facing message plus the data the HTTP layer needs to render it.
"""


class MalformedPayload(ValueError):
    """Model text could not be decoded into a JSON object by any parser tier."""

    def __init__(self, text: str):
        super().__init__("No JSON object found in response")
        self.text = text


class FactCheckError(Exception):
    code = "fact_check_error"
    status_code = 500
    retryable = False
    default_message = "Something went wrong."

    def __init__(self, user_message: str = None):
        self.user_message = user_message or self.default_message
        super().__init__(self.user_message)


class VerificationUnavailable(FactCheckError):
    """Backend unreachable, empty, or failed for reasons unrelated to payload shape."""
    code = "verification_unavailable"
    status_code = 503
    retryable = True
    default_message = (
        "Failed to process verification request. "
        "Please check your internet connection or try again later."
    )


class MalformedResponse(FactCheckError):
    """The model answered but its payload could not be parsed."""
    code = "malformed_response"
    status_code = 502
    retryable = True
    default_message = (
        "The AI verification response was malformed or incomplete. "
        "This can happen with ambiguous inputs or temporary service glitches. Please try again."
    )


class TranscriptionFailed(FactCheckError):
    code = "transcription_failed"
    status_code = 502
    retryable = True
    default_message = "Failed to read text from image. Ensure the image is clear."


class NoLegibleText(FactCheckError):
    """Transcription ran without error but found no usable text."""
    code = "no_legible_text"
    status_code = 422
    default_message = "Could not detect legible text in the image."
