from __future__ import annotations

from typing import Any, Mapping, TypeVar

import pydantic

from licensechain_nft.api.executor import RequestExecutor, expand_route
from licensechain_nft.errors import LicenseChainError, ValidationError

M = TypeVar("M", bound=pydantic.BaseModel)


class ResourceManager:
    """
    Shared plumbing for the resource managers.

    Subclasses validate their inputs, then call ``_execute`` with a route
    template such as ``/nfts/{nft_id}``; ids are percent-encoded into it.
    Responses are unwrapped from the ``{"data": ...}`` envelope and parsed
    into pydantic models. A 2xx payload of the wrong shape raises the
    manager's domain error (``response_error``).
    """

    response_error: type[LicenseChainError] = LicenseChainError

    def __init__(self, executor: RequestExecutor) -> None:
        self._executor = executor

    async def _execute(
        self,
        method: str,
        route: str,
        *,
        path_params: Mapping[str, Any] | None = None,
        body: Mapping[str, Any] | None = None,
        params: Mapping[str, Any] | None = None,
    ) -> Any:
        path = expand_route(route, path_params)
        return await self._executor.execute(method, path, body=body, params=params, route=route)

    @staticmethod
    def _coerce_request(model_cls: type[M], request: M | Mapping[str, Any]) -> M:
        if isinstance(request, model_cls):
            return request
        try:
            return model_cls.model_validate(request)
        except pydantic.ValidationError as exc:
            raise ValidationError(f"Invalid {model_cls.__name__}: {exc}") from exc

    def _parse(self, model_cls: type[M], payload: Any, *, error: type[LicenseChainError] | None = None) -> M:
        error_cls = error or self.response_error
        try:
            return model_cls.model_validate(payload)
        except pydantic.ValidationError as exc:
            raise error_cls(f"Unexpected {model_cls.__name__} payload: {exc}") from exc

    def _unwrap(self, model_cls: type[M], payload: Any, *, error: type[LicenseChainError] | None = None) -> M:
        error_cls = error or self.response_error
        if not isinstance(payload, dict) or not isinstance(payload.get("data"), dict):
            raise error_cls(f"{model_cls.__name__} response must contain a data object")
        return self._parse(model_cls, payload["data"], error=error_cls)
