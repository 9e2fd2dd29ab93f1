"""Generate Express delegates, controller and routers from an OpenAPI document."""

__version__ = "1.0.0"
