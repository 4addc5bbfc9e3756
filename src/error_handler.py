"""Error handling helpers for the checkout API."""
from typing import Any, Dict
import logging

logger = logging.getLogger(__name__)


class ErrorHandler:
    def handle_exception(self, exc: Exception, context: Dict[str, Any] = None, include_detail: bool = False) -> Dict[str, Any]:
        logger.error("Server error: %s (context=%s)", exc, context or {}, exc_info=exc)
        body: Dict[str, Any] = {
            "status": "error",
            "message": "Internal server error",
        }
        if include_detail:
            body["error"] = str(exc)
        return body

    def not_found(self, path: str) -> Dict[str, Any]:
        return {
            "status": "error",
            "message": "Endpoint not found",
            "path": path,
        }
