"""API error envelope and global handlers.

Every failure leaves the API as
``{"error": {"code", "message", "details"?}, "request_id"}``.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.request_id import get_request_id

logger = logging.getLogger(__name__)


class ApiErrorCode(str, Enum):
	VALIDATION_ERROR = "VALIDATION_ERROR"
	UNAUTHORIZED = "UNAUTHORIZED"
	NOT_FOUND = "NOT_FOUND"
	INTERNAL_ERROR = "INTERNAL_ERROR"


_STATUS_FOR_CODE = {
	ApiErrorCode.VALIDATION_ERROR: status.HTTP_400_BAD_REQUEST,
	ApiErrorCode.UNAUTHORIZED: status.HTTP_401_UNAUTHORIZED,
	ApiErrorCode.NOT_FOUND: status.HTTP_404_NOT_FOUND,
	ApiErrorCode.INTERNAL_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def status_for_code(code: ApiErrorCode) -> int:
	return _STATUS_FOR_CODE.get(code, status.HTTP_500_INTERNAL_SERVER_ERROR)


def code_for_status(status_code: int) -> ApiErrorCode:
	if status_code in (status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN):
		return ApiErrorCode.UNAUTHORIZED
	if status_code == status.HTTP_404_NOT_FOUND:
		return ApiErrorCode.NOT_FOUND
	if 400 <= status_code < 500:
		return ApiErrorCode.VALIDATION_ERROR
	return ApiErrorCode.INTERNAL_ERROR


class ApiError(Exception):
	"""Raised by routers to produce a structured error response."""

	def __init__(self, code: ApiErrorCode, message: str, details: Any = None) -> None:
		super().__init__(message)
		self.code = code
		self.message = message
		self.details = details

	@property
	def status_code(self) -> int:
		return status_for_code(self.code)


def error_payload(code: ApiErrorCode, message: str, details: Any = None, *, request_id: Optional[str] = None) -> dict[str, Any]:
	error: dict[str, Any] = {"code": code.value, "message": message}
	if details is not None:
		error["details"] = jsonable_encoder(details)
	payload: dict[str, Any] = {"error": error}
	if request_id:
		payload["request_id"] = request_id
	return payload


def error_response(
	code: ApiErrorCode,
	message: str,
	details: Any = None,
	*,
	request: Optional[Request] = None,
	status_code: Optional[int] = None,
) -> JSONResponse:
	rid = get_request_id(request)
	return JSONResponse(
		status_code=status_code or status_for_code(code),
		content=error_payload(code, message, details, request_id=rid),
	)


def validation_details(errors: Any) -> list[dict[str, Any]]:
	"""Reduce pydantic error dicts to JSON-safe issue records."""
	issues: list[dict[str, Any]] = []
	for item in errors or []:
		issues.append(
			{
				"path": [str(part) for part in item.get("loc", ())],
				"message": str(item.get("msg", "")),
				"type": str(item.get("type", "")),
			}
		)
	return issues


def install_error_handlers(app: FastAPI) -> None:
	@app.exception_handler(ApiError)
	async def api_error_handler(request: Request, exc: ApiError):  # type: ignore[override]
		return error_response(exc.code, exc.message, exc.details, request=request)

	@app.exception_handler(StarletteHTTPException)
	async def http_exc_handler(request: Request, exc: StarletteHTTPException):  # type: ignore[override]
		code = code_for_status(exc.status_code)
		return error_response(
			code,
			str(exc.detail),
			request=request,
			status_code=exc.status_code,
		)

	@app.exception_handler(RequestValidationError)
	async def validation_exc_handler(request: Request, exc: RequestValidationError):  # type: ignore[override]
		return error_response(
			ApiErrorCode.VALIDATION_ERROR,
			"Invalid request data",
			validation_details(exc.errors()),
			request=request,
		)

	@app.exception_handler(Exception)
	async def unhandled_exc_handler(request: Request, exc: Exception):  # type: ignore[override]
		logger.error("unhandled_exception", exc_info=exc, extra={"path": request.url.path})
		return error_response(
			ApiErrorCode.INTERNAL_ERROR,
			"An unexpected error occurred",
			"INTERNAL_SERVER_ERROR",
			request=request,
		)
