import logging
import time
from typing import Callable

from fastapi import APIRouter, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.routing import APIRoute

from app.constants.metrics import Constants
from app.metrics.statsd_client import statsd

logger = logging.getLogger("api")


def _client_ip(request: Request) -> str:
    return request.headers.get(
        "X-Forwarded-For", request.client.host if request.client else "unknown"
    )


def _elapsed_ms(start_time: float) -> float:
    return (time.perf_counter() - start_time) * 1000


class MetricsAPIRoute(APIRoute):
    """Route that logs each request and records latency and count metrics."""

    def get_route_handler(self) -> Callable:
        original_route_handler = super().get_route_handler()

        async def metrics_route_handler(request: Request) -> Response:
            route_path = request.scope["route"].path
            method = request.method
            client_ip = _client_ip(request)
            start_time = time.perf_counter()

            logger.info(f"Request | {method} | {request.url.path} | {client_ip}")

            try:
                response = await original_route_handler(request)
            except Exception as e:
                # HTTPExceptions carry their own status; anything else is a 500
                if isinstance(e, RequestValidationError):
                    status_code = 422
                else:
                    status_code = getattr(e, "status_code", 500)
                process_time_ms = _elapsed_ms(start_time)
                logger.error(
                    f"Request failed | {method} | {request.url.path} | {client_ip} | "
                    f"{status_code} | {str(e)} | {process_time_ms:.4f}ms",
                    exc_info=status_code >= 500,
                )
                self._log_metric(method, route_path, status_code, process_time_ms)
                raise

            process_time_ms = _elapsed_ms(start_time)
            logger.info(
                f"Response | {method} | {request.url.path} | {client_ip} | "
                f"{response.status_code} | {process_time_ms:.4f}ms"
            )
            self._log_metric(method, route_path, response.status_code, process_time_ms)
            return response

        return metrics_route_handler

    def _log_metric(self, method, path, status_code, process_time_ms):
        tags = {
            Constants.Tag.METHOD: method,
            Constants.Tag.PATH: path,
            Constants.Tag.CODE: status_code,
        }
        statsd.timing(
            Constants.Metric.API_LATENCY,
            process_time_ms,
            Constants.Metric.HUNDRED_SAMPLING_RATE,
            tags,
        )
        statsd.increment(
            Constants.Metric.API_COUNT,
            Constants.Metric.INCREMENT_COUNT,
            Constants.Metric.HUNDRED_SAMPLING_RATE,
            tags,
        )


class MetricsRouter(APIRouter):
    def __init__(self, *args, **kwargs):
        kwargs["route_class"] = MetricsAPIRoute
        super().__init__(*args, **kwargs)
