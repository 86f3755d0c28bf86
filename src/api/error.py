from typing import Optional

from fastapi import status
from libs.result import Error


class ClientError(Exception):
    """Expected failure; its code and message are shown to the caller as-is"""

    def __init__(
        self,
        base_error: Error,
        status_code: int = status.HTTP_400_BAD_REQUEST,
        headers: Optional[dict] = None,
    ):
        self.base_error = base_error
        self.status_code = status_code
        self.headers = headers
        super().__init__(base_error.message)


class ServerError(Exception):
    """Unexpected failure; the caller only sees a generic message"""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, base_error: Error, headers: Optional[dict] = None):
        self.base_error = base_error
        self.headers = headers
        super().__init__(base_error.code)
