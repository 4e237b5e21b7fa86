"""
Domain Exceptions
================

Two disjoint error families: validation errors raised while a tax id is
constructed, and verification errors raised while a constructed tax id is
checked against its authority.
"""

from typing import Optional, Dict, Any, List


class TaxIdException(Exception):
    """Base exception for all tax id errors"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


# Validation exceptions
class ValidationError(TaxIdException):
    """Raised when a raw string cannot become a tax id"""

    def __init__(self, value: str, message: str, attempted: Optional[List[str]] = None):
        self.value = value
        self.attempted = attempted or []
        details = {"value": value, "attempted": [str(t) for t in self.attempted]}
        super().__init__(message, details)


class UnsupportedCountryCode(ValidationError):
    """Raised when the prefix belongs to no enabled tax id type"""

    def __init__(self, value: str, tax_country_code: str):
        self.tax_country_code = tax_country_code
        super().__init__(value, f"Country code {tax_country_code} is not supported")
        self.details["tax_country_code"] = tax_country_code


class InvalidSyntax(ValidationError):
    """Raised when the value does not match the grammar of its country"""

    def __init__(self, value: str, attempted: Optional[List[str]] = None):
        message = f"Invalid syntax: {value!r}"
        if attempted:
            message += f" (tried {', '.join(str(t) for t in attempted)})"
        super().__init__(value, message, attempted)


# Verification exceptions
class VerificationError(TaxIdException):
    """Base exception for failures that no verification status can express"""
    pass


class TransportError(VerificationError):
    """Raised when the request could not be sent or answered"""

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"HTTP client error for {url}: {reason}", {"url": url, "reason": reason})


class TransportTimeout(TransportError):
    """Raised when the authority did not answer in time"""
    pass


class TransportConnectionError(TransportError):
    """Raised when the authority could not be reached"""
    pass


class UnexpectedResponse(VerificationError):
    """Raised when a parseable response has a shape no rule covers"""

    def __init__(self, authority: str, reason: str):
        self.authority = authority
        self.reason = reason
        super().__init__(f"Unexpected response from {authority}: {reason}",
                         {"authority": authority, "reason": reason})


class UnexpectedStatusCode(VerificationError):
    """Raised when the authority answers with an HTTP status no rule covers"""

    def __init__(self, authority: str, status_code: int):
        self.authority = authority
        self.status_code = status_code
        super().__init__(f"Unexpected status code from {authority}: {status_code}",
                         {"authority": authority, "status_code": status_code})
