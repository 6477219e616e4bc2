from .tracing import get_tracer, setup_tracing, tracer

__all__ = ["setup_tracing", "get_tracer", "tracer"]
