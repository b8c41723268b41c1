"""Catch-all error payloads for unexpected server failures."""
import logging
import traceback
from typing import Any, Dict

logger = logging.getLogger(__name__)


class ErrorHandler:
    def __init__(self, expose_stack_traces: bool = False):
        self.expose_stack_traces = expose_stack_traces

    def handle_exception(self, exc: Exception, context: Dict[str, Any] = None) -> Dict[str, Any]:
        logger.error("Unhandled server error: %s context=%s", exc, context or {}, exc_info=exc)
        body: Dict[str, Any] = {
            "error": "Internal server error",
            "message": str(exc) or type(exc).__name__,
            "success": False,
        }
        if self.expose_stack_traces:
            body["stack"] = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
        return body
