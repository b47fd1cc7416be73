"""
trace_gateway

Top-level package for the trace-propagating resolver gateway.

Responsibilities:
- Expose package version metadata.
"""

__all__ = ["__version__"]

__version__ = "0.1.0"


# --- Module Notes -----------------------------------------------------------
# Keep this file minimal; the Lambda entrypoint imports it on every cold start.
