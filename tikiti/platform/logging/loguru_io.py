"""
Logger.io traces a call: arguments and return value at DEBUG, failures at
ERROR. Business errors (CustomBaseError) are logged without a traceback;
anything else with one. An exception is logged once, by the innermost
decorated frame it passes through.
"""

from functools import wraps
from inspect import Signature, iscoroutinefunction, signature
from typing import Any, Callable, ParamSpec, TypeVar, cast

from tikiti.platform.config.core_setting import settings
from tikiti.platform.exception.exceptions import CustomBaseError
from tikiti.platform.logging.loguru_io_config import ExtraField, custom_logger
from tikiti.platform.logging.loguru_io_utils import call_target, enter_call, exit_call, redact


_P = ParamSpec('_P')
_T = TypeVar('_T')

_LOGGED_MARKER = '_logged_by_io'


def _bound_arguments(sig: Signature, args: tuple[Any, ...], kwargs: dict[str, Any]) -> Any:
    try:
        bound = sig.bind_partial(*args, **kwargs)
    except TypeError:
        return {'args': args, 'kwargs': kwargs}
    return {name: value for name, value in bound.arguments.items() if name not in ('self', 'cls')}


def _log_failure(log: Any, e: Exception) -> None:
    if getattr(e, _LOGGED_MARKER, False):
        return
    setattr(e, _LOGGED_MARKER, True)
    if isinstance(e, CustomBaseError):
        log.opt(depth=2).error(f'{type(e).__name__}({e.error_code}): {e}')
    else:
        log.opt(depth=2).exception(f'{type(e).__name__}: {e}')


class Logger:
    base = custom_logger

    @staticmethod
    def io(func: Callable[_P, _T]) -> Callable[_P, _T]:
        target = call_target(func)
        sig = signature(func)

        def _start(args: tuple[Any, ...], kwargs: dict[str, Any]) -> Any:
            log = custom_logger.bind(
                **{ExtraField.CALL_TARGET: target, ExtraField.CHAIN_START_TIME: enter_call()}
            )
            if settings.DEBUG:
                log.opt(depth=2).debug(f'args: {redact(_bound_arguments(sig, args, kwargs))}')
            return log

        if iscoroutinefunction(func):

            @wraps(func)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                log = _start(args, kwargs)
                try:
                    result = await func(*args, **kwargs)
                except Exception as e:
                    _log_failure(log, e)
                    raise
                finally:
                    exit_call()
                if settings.DEBUG:
                    log.opt(depth=1).debug(f'return: {redact(result)}')
                return result

            return cast(Callable[_P, _T], async_wrapper)

        @wraps(func)
        def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
            log = _start(args, kwargs)
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                _log_failure(log, e)
                raise
            finally:
                exit_call()
            if settings.DEBUG:
                log.opt(depth=1).debug(f'return: {redact(result)}')
            return result

        return cast(Callable[_P, _T], sync_wrapper)
