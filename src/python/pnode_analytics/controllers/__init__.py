from .error_response import ErrorResponse
from .request_handler import RequestHandler

__all__ = [
    "ErrorResponse",
    "RequestHandler"
]
