"""Error types shared by the parse, region, export and paging stages.

``InterchangeError`` is the common base.  Each raised error belongs to
exactly one category class, which fixes its ``category`` and its default
``retryable`` flag:

- ``ValidationError``: bad input such as an unparseable document, an
  unknown export format or an invalid setting.
- ``TransientError``: a document fetch that may succeed later.
- ``PermanentError``: an encoder that cannot produce the artifact.

Points outside a region are not errors.  The region validator returns
them as a ``ValidationVerdict``.
"""

from __future__ import annotations

from typing import ClassVar


class InterchangeError(Exception):
    """Base exception for all interchange errors.

    Attributes:
        message: Human-readable error description.
        stage: Stage that raised (``"parse_kml"``, ``"export"``, ...).
        code: Machine-readable error code (e.g. ``"KML_PARSE_FAILED"``).
        retryable: Whether the caller may retry the operation.
    """

    category: ClassVar[str] = "permanent"
    default_retryable: ClassVar[bool] = False
    default_stage: ClassVar[str] = ""
    default_code: ClassVar[str] = ""

    def __init__(
        self,
        message: str = "",
        *,
        stage: str = "",
        code: str = "",
        retryable: bool | None = None,
    ) -> None:
        self.message = message
        self.stage = stage or self.default_stage
        self.code = code or self.default_code
        self.retryable = self.default_retryable if retryable is None else retryable
        super().__init__(message)

    def to_error_dict(self) -> dict[str, object]:
        """Structured payload with stable keys, for logs and API responses."""
        return {
            "category": self.category,
            "code": self.code,
            "stage": self.stage,
            "message": self.message,
            "retryable": self.retryable,
        }


class ValidationError(InterchangeError):
    """Input or domain-model validation failure. Never retryable."""

    category = "validation"


class TransientError(InterchangeError):
    """Temporary failure that may succeed on retry."""

    category = "transient"
    default_retryable = True


class PermanentError(InterchangeError):
    """Unrecoverable failure. Not retryable."""

    category = "permanent"
