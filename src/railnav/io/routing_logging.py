# io/routing_logging.py
import json
import logging
import sys

from railnav.routing.hooks import NoopHooks


def _default_json_logger(name="railnav", level="INFO", stream=None):
    logger = logging.getLogger(name)
    if not logger.handlers:
        h = logging.StreamHandler(stream or sys.stdout)

        class _JsonFormatter(logging.Formatter):
            def format(self, record: logging.LogRecord) -> str:
                payload = {
                    "level": record.levelname,
                    "msg": record.getMessage(),
                    "logger": record.name,
                }
                extra = getattr(record, "extra", None)
                if isinstance(extra, dict):
                    payload.update(extra)
                return json.dumps(payload)

        h.setFormatter(_JsonFormatter())
        logger.addHandler(h)
    elif stream is not None:
        # re-point an existing handler, e.g. to stderr for the CLI
        for h in logger.handlers:
            if isinstance(h, logging.StreamHandler):
                h.setStream(stream)
    logger.setLevel(level)
    return logger


class RoutingLogging(NoopHooks):
    """
    Structured logs for graph construction, searches and snapping.
    Per-edge and per-search chatter is only emitted with debug=True.
    """

    def __init__(
        self,
        name: str = "railnav",
        level: str = "INFO",
        debug: bool = False,
        logger: logging.Logger | None = None,
        stream=None,
    ):
        self.name, self.debug = name, debug
        self.log = logger or _default_json_logger(level=level, stream=stream)

    def _emit(self, level: str, msg: str, **extra):
        self.log.log(getattr(logging, level), msg, extra={"extra": {"nav": self.name, **extra}})

    # graph build

    def duplicate_node(self, *, node_id: int):
        self._emit("WARNING", "duplicate_node", node_id=node_id)

    def edge_skipped(self, *, edge_id, reason: str):
        if self.debug:
            self._emit("DEBUG", "edge_skipped", edge_id=edge_id, reason=reason)

    def graph_built(self, *, nodes: int, arcs: int, skipped: int):
        self._emit("INFO", "graph_built", nodes=nodes, arcs=arcs, skipped=skipped)

    # search

    def search_start(self, *, start_id: int, end_id: int):
        if self.debug:
            self._emit("DEBUG", "search_start", start_id=start_id, end_id=end_id)

    def search_end(self, *, status: str, expanded: int, cost_m: float | None, ms: float):
        self._emit("INFO", "search_end", status=status, expanded=expanded, cost_m=cost_m, ms=ms)

    # snapping

    def snap_gap(self, *, start_id: int, end_id: int):
        if self.debug:
            self._emit("DEBUG", "snap_gap", start_id=start_id, end_id=end_id)
