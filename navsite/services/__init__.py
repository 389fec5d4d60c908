# navsite/services/__init__.py
from .navigation import (
    ENHANCED_NAV_HEADER,
    REDIRECT_LOCATION_HEADER,
    RedirectTargetError,
    is_enhanced_request,
    is_external_target,
    redirect_response,
    stream_redirect,
    stream_update,
    validate_target,
)
from .streaming import PageStreamer, StreamingGate, templates

__all__ = [
    "ENHANCED_NAV_HEADER",
    "REDIRECT_LOCATION_HEADER",
    "RedirectTargetError",
    "is_enhanced_request",
    "is_external_target",
    "redirect_response",
    "stream_redirect",
    "stream_update",
    "validate_target",
    "PageStreamer",
    "StreamingGate",
    "templates",
]
