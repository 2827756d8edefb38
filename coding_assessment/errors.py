"""
Error taxonomy for the assessment pipeline.

Validation errors are always surfaced. Upstream errors are recovered only when
fallback is enabled. Malformed responses never leave the component that
received them.
"""


class AssessmentError(Exception):
    """Base class for pipeline errors that map onto an HTTP status."""

    status_code: int = 500

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class InputValidationError(AssessmentError):
    """Missing or invalid caller input."""

    status_code = 400


class UnansweredQuestionsError(InputValidationError):
    """Submission does not answer every question."""

    def __init__(self, missing_question_ids: list[str]):
        self.missing_question_ids = list(missing_question_ids)
        super().__init__(
            f"Please answer all questions before submitting "
            f"({len(self.missing_question_ids)} remaining)"
        )


class ResumeNotFoundError(InputValidationError):
    """No resume supplied and none on the user's profile."""


class InsufficientResumeError(InputValidationError):
    """Resume yields too little readable text to generate questions from."""


class UpstreamUnavailableError(AssessmentError):
    """Upstream service not configured or the call failed."""

    status_code = 500


class ArtifactFetchError(UpstreamUnavailableError):
    """Stored resume artifact could not be fetched."""


class MalformedResponseError(AssessmentError):
    """Upstream text could not be turned into the expected structure."""


class AssessmentNotFoundError(AssessmentError):
    """Assessment absent from the store."""

    status_code = 404
