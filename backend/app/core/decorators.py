"""
Service layer decorators for common functionality.

This module provides decorators for error handling, logging and input
validation in the service layer.
"""

import functools
import inspect
import structlog
from typing import Any, Awaitable, Callable, Dict, Optional, Type, ParamSpec, TypeVar

from sqlalchemy.exc import SQLAlchemyError

from app.core.exceptions import (
    DatabaseError,
    ExternalServiceError,
    ServiceException,
    ValidationError,
)
from app.core.henrik_api.errors import HenrikAPIError

logger = structlog.get_logger(__name__)

P = ParamSpec("P")
R = TypeVar("R")


def _build_context(
    func: Callable[..., Any],
    service_name: str,
    include_context: bool,
    args: Any,
    kwargs: Any,
) -> Dict[str, Any]:
    """Bind call arguments into a loggable context dict."""
    context: Dict[str, Any] = {
        "service": service_name,
        "operation": func.__name__,
    }
    if not include_context:
        return context

    bound_args = inspect.signature(func).bind(*args, **kwargs)
    bound_args.apply_defaults()
    for name, value in bound_args.arguments.items():
        if name in ["self", "db", "session"]:
            continue
        # Limit string values to avoid huge log entries
        if isinstance(value, str) and len(value) > 100:
            context[name] = value[:100] + "..."
        else:
            context[name] = str(value)[:200] if value is not None else None
    return context


def service_error_handler(
    service_name: str,
    reraise: bool = True,
    include_context: bool = True,
    default_error_type: Type[ServiceException] = ServiceException,
) -> Callable[[Callable[P, Awaitable[R]]], Callable[P, Awaitable[R]]]:
    """
    Decorator for handling async service method errors with structured logging.

    HenrikDev API errors propagate unchanged so routers can map status codes.
    Everything else is logged and re-raised as a ServiceException subclass.

    :param service_name: Name of the service (e.g., "PlayerService")
    :param reraise: Whether to re-raise exceptions after logging
    :param include_context: Whether to include method parameters in error context
    :param default_error_type: Default exception type to wrap generic errors
    :returns: Decorated function with error handling

    :example:
        @service_error_handler("PlayerService")
        async def get_account(self, name: str, tag: str) -> AccountResponse:
            ...
    """

    def decorator(func: Callable[P, Awaitable[R]]) -> Callable[P, Awaitable[R]]:
        operation_name = func.__name__

        @functools.wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            context = _build_context(func, service_name, include_context, args, kwargs)

            try:
                logger.debug("Service method called", **context)
                result = await func(*args, **kwargs)
                logger.debug("Service method completed successfully", **context)
                return result

            except HenrikAPIError as e:
                logger.warning(
                    "HenrikDev API error in service operation - propagating to caller",
                    error_type=e.__class__.__name__,
                    error_message=str(e),
                    status_code=e.status_code,
                    **context,
                )
                raise

            except ServiceException as e:
                logger.error(
                    "Service operation failed",
                    error_type=e.__class__.__name__,
                    error_message=str(e),
                    error_context=e.context,
                    **context,
                )
                if reraise:
                    raise
                return None  # type: ignore[return-value]

            except ValueError as e:
                logger.error(
                    "Validation error in service operation",
                    error_message=str(e),
                    **context,
                )
                if reraise:
                    raise ValidationError(
                        message=str(e),
                        service=service_name,
                        operation=operation_name,
                        context=context,
                    ) from e
                return None  # type: ignore[return-value]

            except SQLAlchemyError as e:
                logger.error(
                    "Database error in service operation",
                    error_type=e.__class__.__name__,
                    error_message=str(e),
                    **context,
                )
                if reraise:
                    raise DatabaseError(
                        message=str(e),
                        service=service_name,
                        operation=operation_name,
                        context=context,
                        original_error=e,
                    ) from e
                return None  # type: ignore[return-value]

            except (ConnectionError, TimeoutError) as e:
                logger.error(
                    "External service connectivity error",
                    error_type=type(e).__name__,
                    error_message=str(e),
                    **context,
                )
                if reraise:
                    raise ExternalServiceError(
                        message=str(e),
                        service=service_name,
                        operation=operation_name,
                        context=context,
                        original_error=e,
                    ) from e
                return None  # type: ignore[return-value]

            except Exception as e:
                logger.error(
                    "Unexpected error in service operation",
                    error_type=e.__class__.__name__,
                    error_message=str(e),
                    **context,
                )
                if reraise:
                    raise default_error_type(
                        message=f"Unexpected error in {service_name}.{operation_name}: {str(e)}",
                        service=service_name,
                        operation=operation_name,
                        context=context,
                        original_error=e,
                    ) from e
                return None  # type: ignore[return-value]

        return wrapper

    return decorator


def input_validation(
    validate_non_empty: Optional[list[str]] = None,
    custom_validators: Optional[Dict[str, Callable[[Any], None]]] = None,
) -> Callable[[Callable[P, Awaitable[R]]], Callable[P, Awaitable[R]]]:
    """
    Decorator for input validation in async service methods.

    :param validate_non_empty: List of parameter names that must not be empty
    :param custom_validators: Dictionary of parameter_name -> validator_function

    :example:
        @input_validation(
            validate_non_empty=["puuid"],
            custom_validators={"region": validate_region},
        )
    """

    def decorator(func: Callable[P, Awaitable[R]]) -> Callable[P, Awaitable[R]]:
        @functools.wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            bound_args = inspect.signature(func).bind(*args, **kwargs)
            bound_args.apply_defaults()

            for param_name in validate_non_empty or []:
                value = bound_args.arguments.get(param_name)
                if value is None or (isinstance(value, str) and not value.strip()):
                    raise ValueError(f"{param_name} cannot be empty or None")

            for param_name, validator in (custom_validators or {}).items():
                value = bound_args.arguments.get(param_name)
                if value is not None:
                    validator(value)

            return await func(*args, **kwargs)

        return wrapper

    return decorator
