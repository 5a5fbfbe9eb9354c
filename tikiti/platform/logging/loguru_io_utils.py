"""Redaction, truncation and call-chain bookkeeping used by Logger.io"""

import re
from time import time
from typing import Any, Callable

from tikiti.platform.logging.loguru_io_config import (
    MAX_LOGGED_CONTENT_LENGTH,
    SENSITIVE_KEYWORDS,
    call_depth_var,
    chain_start_time_var,
)


REDACTED = '********'

# Matches `secret_key='...'`, `code: "..."` and similar pairs inside reprs
_SENSITIVE_PAIR = re.compile(
    r"""(\b(?:%s)\b)(\s*[=:]\s*)(['"]?)[^'",)\s]+\3""" % '|'.join(sorted(SENSITIVE_KEYWORDS)),
    re.IGNORECASE,
)


def call_target(func: Callable[..., Any]) -> str:
    return f'{func.__module__}:{func.__qualname__}'


def enter_call() -> float:
    """Pushes one Logger.io frame; returns when the outermost frame of the chain started"""
    depth = call_depth_var.get()
    if depth == 0:
        chain_start_time_var.set(time())
    call_depth_var.set(depth + 1)
    return chain_start_time_var.get()


def exit_call() -> None:
    depth = max(call_depth_var.get() - 1, 0)
    call_depth_var.set(depth)
    if depth == 0:
        chain_start_time_var.set(0.0)


def mask_sensitive(data: Any) -> Any:
    data_str = str(data)
    masked = _SENSITIVE_PAIR.sub(rf"\1\2'{REDACTED}'", data_str)
    return data if masked == data_str else masked


def should_mask_keyword(keyword: Any, value: Any) -> Any:
    return REDACTED if keyword in SENSITIVE_KEYWORDS else value


def truncate_content(data: Any, max_length: int = MAX_LOGGED_CONTENT_LENGTH) -> Any:
    if data is None or isinstance(data, int | float):
        return data
    data_str = str(data)
    if len(data_str) > max_length:
        return f'{data_str[:max_length]}... ({len(data_str)} chars)'
    return data


def redact(data: Any) -> Any:
    """Masks sensitive keys and key=value pairs at any depth, then caps the size"""

    def _walk(value: Any) -> Any:
        if isinstance(value, dict):
            return {key: _walk(should_mask_keyword(key, item)) for key, item in value.items()}
        if isinstance(value, list | tuple):
            return type(value)(_walk(item) for item in value)
        return mask_sensitive(value)

    return truncate_content(_walk(data))
