"""
trace_gateway.resolver

Resolver package: the invocation handler and its Lambda entrypoint.
"""
