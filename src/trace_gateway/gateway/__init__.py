"""
trace_gateway.gateway

Backend gateway package.

Responsibilities:
- Provide the client boundary for the single backend call and its tagged result type.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# The resolver should depend on this boundary (not on httpx directly).
