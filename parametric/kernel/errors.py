from __future__ import annotations

import re
from typing import Any


_ERROR_CODE_RE = re.compile(r"^[a-z][a-z0-9_]*(\.[a-z][a-z0-9_]*)*$")


class ParametricError(Exception):
    """Base typed error for the engine.

    Goals:
    - Stable `code` for programmatic handling by callers.
    - Human-readable `message`.
    - The offending component type and/or parameter name, when known.
    - Optional `meta` payload for debugging.
    """

    def __init__(
        self,
        *,
        code: str,
        message: str,
        component_type: str | None = None,
        parameter: str | None = None,
        meta: dict[str, Any] | None = None,
    ) -> None:
        if not _ERROR_CODE_RE.fullmatch(code):
            raise ValueError(
                "Invalid error code. Expected dot-separated lowercase tokens, "
                f"got: {code!r}"
            )
        super().__init__(message)
        self.code = code
        self.message = message
        self.component_type = component_type
        self.parameter = parameter
        self.meta = dict(meta or {})

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "code": self.code,
            "message": self.message,
        }
        if self.component_type:
            payload["component_type"] = self.component_type
        if self.parameter:
            payload["parameter"] = self.parameter
        if self.meta:
            payload["meta"] = self.meta
        return payload


class ConfigurationError(ParametricError):
    """Unknown ids, malformed schemas, plugin conflicts, storage failures."""

    def __init__(
        self,
        *,
        message: str = "Configuration error",
        code: str = "configuration.invalid",
        component_type: str | None = None,
        parameter: str | None = None,
        meta: dict[str, Any] | None = None,
    ):
        super().__init__(
            code=code,
            message=message,
            component_type=component_type,
            parameter=parameter,
            meta=meta,
        )


class ValidationError(ParametricError):
    """A parameter value failed its checks, or the parameter is undeclared."""

    def __init__(
        self,
        *,
        message: str = "Validation error",
        code: str = "parameter.invalid",
        component_type: str | None = None,
        parameter: str | None = None,
        meta: dict[str, Any] | None = None,
    ):
        super().__init__(
            code=code,
            message=message,
            component_type=component_type,
            parameter=parameter,
            meta=meta,
        )
