"""
trace_gateway.backend

Dev hello backend (FastAPI) used as the resolver's target service.
"""
