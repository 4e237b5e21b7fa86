"""
Tax Ids
=======

Syntax validation and authority verification of business tax ids.

Supported families:
- EU VAT numbers, verified through VIES
- UK VAT numbers, verified through HMRC
- Swiss UID/VAT numbers, verified through the BFS UID register
- Norwegian organisation numbers, verified through Brønnøysundregistrene

Only the families listed in ``TAX_IDS_ENABLED_TYPES`` (default ``eu_vat``)
can be constructed.
"""

import logging

from .domain.exceptions import (
    InvalidSyntax,
    TaxIdException,
    TransportConnectionError,
    TransportError,
    TransportTimeout,
    UnexpectedResponse,
    UnexpectedStatusCode,
    UnsupportedCountryCode,
    ValidationError,
    VerificationError,
)
from .domain.value_objects import TaxId, TaxIdType, UnavailableReason, Verification, VerificationStatus
from .domain.services.grammar_registry import GrammarRegistry
from .domain.services.normalizer import normalize
from .domain.services.verification_dispatcher import VerificationDispatcher

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "TaxId",
    "TaxIdType",
    "Verification",
    "VerificationStatus",
    "UnavailableReason",
    "GrammarRegistry",
    "normalize",
    "VerificationDispatcher",
    "TaxIdException",
    "ValidationError",
    "UnsupportedCountryCode",
    "InvalidSyntax",
    "VerificationError",
    "TransportError",
    "TransportTimeout",
    "TransportConnectionError",
    "UnexpectedResponse",
    "UnexpectedStatusCode",
]
