from http import HTTPStatus
from typing import Optional
from pnode_analytics.exceptions.error_details import ErrorDetails
from pnode_analytics.exceptions.managed_exception import ManagedException

class ItemNotFoundException(ManagedException):
    def __init__(self, message: str, diagnostic_details: Optional[dict[str, str]] = None):
        super().__init__(ErrorDetails(
            status_code=HTTPStatus.NOT_FOUND,
            diagnostic_code="00404",
            diagnostic_details=diagnostic_details or {},
            message=message
        ))
