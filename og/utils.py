"""Logging, metrics and read-only guard for service entrypoints."""
from __future__ import annotations

import inspect
import logging
import time
from functools import wraps
from typing import Any, Callable, Dict, Mapping, Optional, Tuple, TypeVar

from logs.metrics import emit as emit_metric

from .config import env_flag
from .exceptions import OgReadOnlyError

log = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])

_CONTEXT_FIELDS = ("user_id", "group_id", "plugin_id")


def _extract_context(
    signature: inspect.Signature, args: Tuple[Any, ...], kwargs: Dict[str, Any]
) -> Dict[str, Any]:
    try:
        bound = signature.bind_partial(*args, **kwargs).arguments
    except TypeError:
        bound = dict(kwargs)
    fields: Dict[str, Any] = {key: bound.get(key) for key in _CONTEXT_FIELDS}
    user = bound.get("user")
    if fields["user_id"] is None and user is not None:
        fields["user_id"] = getattr(user, "user_id", None)
    group = bound.get("group")
    if fields["group_id"] is None and group is not None:
        fields["group_id"] = getattr(group, "id", None)
    return fields


def _is_read_only(args: Tuple[Any, ...]) -> bool:
    settings = getattr(args[0], "settings", None) if args else None
    if settings is not None:
        return bool(getattr(settings, "read_only", False))
    return env_flag("OG_READ_ONLY")


def _record_metric(path: str, status: str) -> None:
    emit_metric(
        "og_calls_total",
        value=1,
        labels={"path": path, "status": status},
    )


def og_entrypoint(name: Optional[str] = None, *, mutating: bool = False) -> Callable[[F], F]:
    """Wrap a service method with logging, metrics and the read-only guard."""

    def decorator(func: F) -> F:
        entry_name = name or func.__name__
        signature = inspect.signature(func)

        def _log_start(context: Mapping[str, Any]) -> None:
            log.debug(
                "og.%s.start user_id=%s group_id=%s plugin_id=%s",
                entry_name,
                context.get("user_id"),
                context.get("group_id"),
                context.get("plugin_id"),
            )

        def _log_finish(context: Mapping[str, Any], latency_ms: float) -> None:
            log.debug(
                "og.%s.finish latency_ms=%.2f user_id=%s group_id=%s plugin_id=%s",
                entry_name,
                latency_ms,
                context.get("user_id"),
                context.get("group_id"),
                context.get("plugin_id"),
            )

        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            if mutating and _is_read_only(args):
                log.warning("og.%s.short_circuit read-only mode is enabled", entry_name)
                _record_metric(entry_name, status="blocked")
                raise OgReadOnlyError(f"{entry_name} is disabled in read-only mode")
            context = _extract_context(signature, args, kwargs)
            _log_start(context)
            start = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception:
                _record_metric(entry_name, status="error")
                log.exception("og.%s.error", entry_name)
                raise
            else:
                latency_ms = (time.perf_counter() - start) * 1000
                _log_finish(context, latency_ms)
                _record_metric(entry_name, status="success")
                return result

        return wrapper  # type: ignore[return-value]

    return decorator


__all__ = ["og_entrypoint"]
