import logging
from abc import ABC, abstractmethod
from http import HTTPStatus
from time import time
from typing import Any, Generic, TypeVar, get_args
from fastapi import Request, Response
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import TypeAdapter, ValidationError
from prometheus_client import Counter, Histogram, Gauge
from pnode_analytics.controllers.error_response import ErrorResponse
from pnode_analytics.exceptions import ManagedException, InternalErrorException, InvalidArgumentException

CONCURRENT_REQUESTS = Gauge("pna_api_exe_concurrent", "Number of concurrent API requests being processed", ["handler"])
REQUEST_COUNTER = Counter("pna_api_exe_total", "Total number of API requests executed", ["handler"])
REQUEST_HISTOGRAM = Histogram("pna_api_exe_duration_seconds", "Duration of API requests in seconds", ["handler"])
RESPONSE_ERROR_COUNTER = Counter("pna_api_exe_error_total", "Total number of API requests that resulted in error", ["handler", "status_code"])

TRequest = TypeVar("TRequest")
TResponse = TypeVar("TResponse")

class RequestHandler(ABC, Generic[TRequest, TResponse]):

    def __init__(self):
        self.__logger = logging.getLogger(self.__class__.__name__)
        base_type = self.__class__.__orig_bases__[0] # type: ignore
        generics = get_args(base_type)
        request_class = generics[0]
        self.__request_type_adapter = TypeAdapter(request_class)

    async def invoke(self, request: Request) -> Response:
        start_time: float = time()
        REQUEST_COUNTER.labels(handler=self.__class__.__name__).inc()
        CONCURRENT_REQUESTS.labels(handler=self.__class__.__name__).inc()
        try:
            # Get request body (an empty body is an empty request)
            body: bytes = await request.body()
            actual_request: TRequest = self.__parse_request(body)
            # Invoke request
            self.__logger.info(f"Full Request: <{actual_request}>")
            await self._on_validate(actual_request)
            actual_ok_response: TResponse = await self._on_invoke(actual_request)
            # Return OK response
            self.__logger.debug(f"Full Response: <{HTTPStatus.OK} | {actual_ok_response}>")
            return self.__get_response(HTTPStatus.OK, actual_ok_response)
        except ManagedException as e:
            # Return error response
            actual_error_response: ErrorResponse = self.__get_error_response(e)
            self.__logger.info(f"Full Response: <{e.status_code} | {actual_error_response}>")
            RESPONSE_ERROR_COUNTER.labels(handler=self.__class__.__name__, status_code=e.status_code).inc()
            return self.__get_response(e.status_code, actual_error_response)
        except Exception as e:
            # Return a generic error response, details stay in the log
            actual_error_response: ErrorResponse = self.__get_error_response(e)
            self.__logger.error(f"Full Response: <{HTTPStatus.INTERNAL_SERVER_ERROR} | {actual_error_response}>", exc_info=True)
            RESPONSE_ERROR_COUNTER.labels(handler=self.__class__.__name__, status_code=HTTPStatus.INTERNAL_SERVER_ERROR).inc()
            return self.__get_response(HTTPStatus.INTERNAL_SERVER_ERROR, actual_error_response)
        finally:
            duration: float = time() - start_time
            REQUEST_HISTOGRAM.labels(handler=self.__class__.__name__).observe(duration)
            CONCURRENT_REQUESTS.labels(handler=self.__class__.__name__).dec()

    @abstractmethod
    async def _on_validate(self, request: TRequest) -> None:
        pass

    @abstractmethod
    async def _on_invoke(self, request: TRequest) -> TResponse:
        pass

    def __parse_request(self, body: bytes) -> TRequest:
        try:
            return self.__request_type_adapter.validate_json(body or b"{}")
        except ValidationError as e:
            raise InvalidArgumentException(
                "Request body is invalid",
                {"errors": str(e.error_count())}
            ) from e

    def __get_error_response(self, exception: Exception) -> ErrorResponse:
        if isinstance(exception, ManagedException):
            managed_exception = exception
        else:
            managed_exception = InternalErrorException("An unexpected error occurred")

        return ErrorResponse(
            diagnostic_code=managed_exception.diagnostic_code,
            diagnostic_details=managed_exception.diagnostic_details,
            message=str(managed_exception)
        )

    def __get_response(self, status_code: HTTPStatus, content: Any) -> JSONResponse:
        return JSONResponse(
            status_code=status_code,
            content=jsonable_encoder(content)
        )
