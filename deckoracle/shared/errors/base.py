"""Base exception class for application errors.

Error codes are derived from the class name and default messages from the
first docstring line, so a new error type is usually just a docstring.
"""

import logging
import re
from typing import Any

from pydantic import ValidationError

from deckoracle.shared.context import trace_id_var

from .schemas import ErrorDetail, ErrorResponse

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base class for all application errors.

    - ``code`` defaults to the class name in SNAKE_CASE without the
      ``Error`` suffix (``FolderNotFoundError`` -> ``FOLDER_NOT_FOUND``)
    - ``default_message`` defaults to the first docstring line
    - ``details`` is checked against ``ErrorDetail``
    - ``trace_id`` is read from the request context
    """

    status_code: int = 500
    code: str = "INTERNAL_ERROR"
    default_message: str = "Internal server error"

    def __init__(
        self,
        message: str | None = None,
        details: dict[str, Any] | ErrorDetail | None = None,
        status_code: int | None = None,
        code: str | None = None,
    ) -> None:
        self.message = message or self.default_message
        self.details = self._normalize_details(details)

        if status_code is not None:
            self.status_code = status_code
        if code is not None:
            self.code = code

        super().__init__(self.message)

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)

        if "code" not in cls.__dict__:
            name = cls.__name__
            for suffix in ("Exception", "Error"):
                if name.endswith(suffix):
                    name = name[: -len(suffix)]
                    break
            cls.code = re.sub(r"(?<!^)(?=[A-Z])", "_", name).upper()

        if "default_message" not in cls.__dict__ and cls.__doc__:
            cls.default_message = cls.__doc__.strip().split("\n")[0]

    def _normalize_details(self, details: dict[str, Any] | ErrorDetail | None) -> dict[str, Any]:
        if details is None:
            return {}
        if isinstance(details, ErrorDetail):
            return details.model_dump(exclude_none=True)
        try:
            return ErrorDetail(**details).model_dump(exclude_none=True)
        except ValidationError as e:
            logger.warning("Invalid details in %s: %s", self.__class__.__name__, e)
            return dict(details)

    @property
    def trace_id(self) -> str:
        return trace_id_var.get()

    def to_response(self) -> ErrorResponse:
        """Serialize to the API error body."""
        return ErrorResponse(
            error=self.code,
            message=self.message,
            details=self.details,
            trace_id=self.trace_id,
        )

    @classmethod
    def openapi_response(cls) -> dict[str, Any]:
        """OpenAPI ``responses`` entry for this exception type."""
        return {
            "model": ErrorResponse,
            "description": cls.default_message,
            "content": {
                "application/json": {
                    "example": {
                        "error": cls.code,
                        "message": cls.default_message,
                        "details": {},
                        "trace_id": "example-trace-id",
                    }
                }
            },
        }
