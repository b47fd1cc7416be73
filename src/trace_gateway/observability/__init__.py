"""
trace_gateway.observability

Observability package.

Responsibilities:
- Structured, trace-correlated logging.
- Request context propagation for the dev backend.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Span export is left to the Lambda runtime's collector layer; nothing here exports traces.
