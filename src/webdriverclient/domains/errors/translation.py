"""Pure mappings from dialect error codes onto WebDriverErrorReason."""
from __future__ import annotations

from typing import Dict

from .value_objects import WebDriverErrorReason

# JSON Wire Protocol response status codes (Selenium wiki, "JsonWireProtocol").
JWP_STATUS_REASONS: Dict[int, WebDriverErrorReason] = {
    6: WebDriverErrorReason.INVALID_SESSION_ID,
    7: WebDriverErrorReason.NO_SUCH_ELEMENT,
    8: WebDriverErrorReason.NO_SUCH_FRAME,
    9: WebDriverErrorReason.UNKNOWN_COMMAND,
    10: WebDriverErrorReason.STALE_ELEMENT_REFERENCE,
    11: WebDriverErrorReason.ELEMENT_NOT_INTERACTABLE,
    12: WebDriverErrorReason.INVALID_ELEMENT_STATE,
    13: WebDriverErrorReason.UNKNOWN_ERROR,
    15: WebDriverErrorReason.ELEMENT_NOT_SELECTABLE,
    17: WebDriverErrorReason.JAVASCRIPT_ERROR,
    19: WebDriverErrorReason.INVALID_SELECTOR,
    21: WebDriverErrorReason.TIMEOUT,
    23: WebDriverErrorReason.NO_SUCH_WINDOW,
    24: WebDriverErrorReason.INVALID_COOKIE_DOMAIN,
    25: WebDriverErrorReason.UNABLE_TO_SET_COOKIE,
    26: WebDriverErrorReason.UNEXPECTED_ALERT_OPEN,
    27: WebDriverErrorReason.NO_SUCH_ALERT,
    28: WebDriverErrorReason.SCRIPT_TIMEOUT,
    29: WebDriverErrorReason.INVALID_ELEMENT_COORDINATES,
    30: WebDriverErrorReason.IME_NOT_AVAILABLE,
    31: WebDriverErrorReason.IME_ENGINE_ACTIVATION_FAILED,
    32: WebDriverErrorReason.INVALID_SELECTOR,
    33: WebDriverErrorReason.SESSION_NOT_CREATED,
    34: WebDriverErrorReason.MOVE_TARGET_OUT_OF_BOUNDS,
}


def reason_from_jwp_status(status: int) -> WebDriverErrorReason:
    """Map a JSON Wire Protocol status code to a normalized reason."""
    return JWP_STATUS_REASONS.get(status, WebDriverErrorReason.UNKNOWN_ERROR)


def reason_from_w3c_code(code: str) -> WebDriverErrorReason:
    """Map a W3C error code string to a normalized reason.

    Codes outside the W3C registry (vendor extensions) map to UNKNOWN_ERROR.
    """
    try:
        return WebDriverErrorReason(code.strip().lower())
    except ValueError:
        return WebDriverErrorReason.UNKNOWN_ERROR
