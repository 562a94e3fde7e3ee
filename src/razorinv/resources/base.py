from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Optional, Protocol
from urllib.parse import quote

from ..errors import MandatoryFieldError, MissingIdentifierError


class Transport(Protocol):
    async def get(self, url: str, data: Optional[dict[str, Any]] = None) -> Any: ...

    async def post(self, url: str, data: Optional[dict[str, Any]] = None) -> Any: ...

    async def patch(self, url: str, data: dict[str, Any]) -> Any: ...


@dataclass(frozen=True)
class ResourceBinding:
    """Transport handle plus the sub-path a resource lives under."""

    api: Transport
    path: str

    def url(self, resource_id: Optional[str] = None, *actions: str) -> str:
        parts = [self.path.rstrip("/")]
        if resource_id is not None:
            parts.append(quote(resource_id, safe=""))
        parts.extend(actions)
        return "/".join(parts)

    def missing_id_error(self) -> MissingIdentifierError:
        return MissingIdentifierError()

    def field_mandatory_error(self, field: str) -> MandatoryFieldError:
        return MandatoryFieldError(field)

    def require_id(self, resource_id: Optional[str]) -> str:
        if resource_id is None or not str(resource_id).strip():
            raise self.missing_id_error()
        return str(resource_id)
