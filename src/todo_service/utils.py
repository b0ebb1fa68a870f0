from __future__ import annotations

from typing import Any, Dict, Optional


# PUBLIC_INTERFACE
def success_envelope(data: Optional[Any] = None, message: str = "success") -> Dict[str, Any]:
    """
    Build the standard success envelope.

    Args:
        data: The payload; omitted from the envelope when None.
        message: Human-readable status message.

    Returns:
        Dict with keys: code (always 0), message and, when given, data.
    """
    envelope: Dict[str, Any] = {"code": 0, "message": message}
    if data is not None:
        envelope["data"] = data
    return envelope


# PUBLIC_INTERFACE
def error_envelope(message: str, **extra: Any) -> Dict[str, Any]:
    """
    Build the standard failure envelope: {"code": -1, "message": ...} plus any
    extra keys whose value is not None.
    """
    envelope: Dict[str, Any] = {"code": -1, "message": message}
    envelope.update({k: v for k, v in extra.items() if v is not None})
    return envelope
