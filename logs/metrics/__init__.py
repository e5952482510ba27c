"""Lightweight metric recorder used by the ``og`` services."""
from __future__ import annotations

import logging
from typing import Callable, List, Mapping, MutableMapping, Optional

log = logging.getLogger(__name__)

MetricLabels = Optional[Mapping[str, str]]
MetricSink = Callable[[Mapping[str, object]], None]

_SINKS: List[MetricSink] = []


def add_sink(sink: MetricSink) -> None:
    """Forward every emitted payload to ``sink`` as well."""
    if sink not in _SINKS:
        _SINKS.append(sink)


def remove_sink(sink: MetricSink) -> None:
    if sink in _SINKS:
        _SINKS.remove(sink)


def emit(metric_name: str, value: float = 1.0, labels: MetricLabels = None) -> None:
    """Emit a numeric metric.

    The payload is written as a structured log line and handed to the
    registered sinks.  A failing sink is logged and skipped.
    """
    payload: MutableMapping[str, object] = {"metric": metric_name, "value": value}
    if labels:
        payload["labels"] = dict(labels)
    log.info("METRIC %s", payload)
    for sink in list(_SINKS):
        try:
            sink(payload)
        except Exception:
            log.exception("metric sink %r failed", sink)


__all__ = ["emit", "add_sink", "remove_sink", "MetricLabels", "MetricSink"]
