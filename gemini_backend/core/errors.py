from typing import Any, Dict, Optional


class GeminiBackendError(Exception):
    """Base class for errors that map onto a JSON error response."""

    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_payload(self) -> Dict[str, Any]:
        return {"error": self.message}


class EmptyPromptError(GeminiBackendError):
    status_code = 400

    def __init__(self):
        super().__init__("Empty prompt")


class NoModelAvailableError(GeminiBackendError):
    status_code = 503

    def __init__(self, hint: str):
        super().__init__("No text model available on this key/project.")
        self.hint = hint

    def to_payload(self) -> Dict[str, Any]:
        return {"error": self.message, "hint": self.hint}


class UpstreamFailureError(GeminiBackendError):
    """Non-success response from the generateContent call; mirrors its status."""

    def __init__(self, status: int, status_text: str, body: str):
        super().__init__("Gemini request failed")
        self.status_code = status
        self.status_text = status_text
        self.body = body

    def to_payload(self) -> Dict[str, Any]:
        return {
            "error": self.message,
            "status": self.status_code,
            "statusText": self.status_text,
            "message": self.body,
        }


class UpstreamUnavailableError(GeminiBackendError):
    """The model catalog could not be fetched."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.upstream_status = status
