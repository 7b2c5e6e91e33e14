from enum import StrEnum


class GateDecision(StrEnum):
    """Outcome of classifying a request against the access policy."""

    ALLOW = "allow"
    REDIRECT_LOGIN = "redirect_login"
    UNAUTHORIZED = "unauthorized"
