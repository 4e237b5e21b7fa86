"""
Value Objects
=============

Immutable objects that represent concepts with no identity:
a syntactically valid tax id and the outcome of one verification call.
"""

from typing import Optional, Dict, Any, TYPE_CHECKING
from datetime import datetime
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, model_validator

from .exceptions import InvalidSyntax, UnsupportedCountryCode, ValidationError

if TYPE_CHECKING:
    from .services.grammar_registry import GrammarRegistry
    from .services.verification_dispatcher import VerificationDispatcher


class TaxIdType(str, Enum):
    """Supported tax id families"""
    EU_VAT = "eu_vat"
    GB_VAT = "gb_vat"
    CH_VAT = "ch_vat"
    NO_VAT = "no_vat"

    def __str__(self) -> str:
        return self.value


class VerificationStatus(str, Enum):
    """Outcome of a lookup at the authority.

    - VERIFIED: the authority confirmed the id as legitimate.
    - UNVERIFIED: the authority answered and the id is not legitimate.
    - UNAVAILABLE: the authority could not answer (maintenance, rate limit,
      timeout). Callers typically accept the transaction and verify again later.
    """
    VERIFIED = "verified"
    UNVERIFIED = "unverified"
    UNAVAILABLE = "unavailable"


class UnavailableReason(str, Enum):
    """Why an authority could not answer"""
    SERVICE_UNAVAILABLE = "service_unavailable"
    TIMEOUT = "timeout"
    BLOCK = "block"
    RATE_LIMIT = "rate_limit"


class TaxId(BaseModel):
    """Value object for a tax id that satisfies the grammar of its type.

    Every construction path runs the grammar registry, so an instance
    can only exist in a valid state:

        >>> TaxId.parse("SE 556703748501").local_value
        '556703748501'
    """
    model_config = ConfigDict(frozen=True)

    value: str = Field(..., description="Normalized tax id, prefix included")
    country_code: str = Field(..., pattern=r"^[A-Z]{2}$", description="Declared ISO country code")
    tax_country_code: str = Field(..., pattern=r"^[A-Z]{2}$", description="Prefix used in the tax id")
    local_value: str = Field(..., min_length=1, description="Tax id without its prefix")
    tax_id_type: TaxIdType = Field(..., description="Matched tax id family")

    @model_validator(mode="before")
    @classmethod
    def match_grammar(cls, data: Any, info: ValidationInfo) -> Dict[str, Any]:
        """Decompose the raw value, ignoring any derived fields passed in"""
        raw = data.get("value") if isinstance(data, dict) else data
        if not isinstance(raw, str):
            raw = "" if raw is None else str(raw)

        registry = (info.context or {}).get("registry")
        if registry is None:
            from .services.grammar_registry import default_registry
            registry = default_registry()

        from .services.normalizer import normalize
        value = normalize(raw)
        if len(value) < 3:
            raise InvalidSyntax(raw)

        tax_country_code = value[:2]
        candidates = registry.candidates(tax_country_code)
        if not candidates:
            raise UnsupportedCountryCode(raw, tax_country_code)

        for grammar in candidates:
            if grammar.matches(value):
                return {
                    "value": value,
                    "country_code": grammar.country_code_from(tax_country_code),
                    "tax_country_code": tax_country_code,
                    "local_value": value[2:],
                    "tax_id_type": grammar.tax_id_type,
                }

        raise InvalidSyntax(raw, [grammar.tax_id_type for grammar in candidates])

    @classmethod
    def parse(cls, raw: str, registry: Optional["GrammarRegistry"] = None) -> "TaxId":
        """Build a tax id from user input.

        Args:
            raw: Tax id as typed by the user, separators allowed
            registry: Grammars to match against (defaults to the configured ones)

        Raises:
            UnsupportedCountryCode: prefix is claimed by no enabled type
            InvalidSyntax: input too short or not matching its country's grammar
        """
        return cls.model_validate({"value": raw}, context={"registry": registry})

    @classmethod
    def validate_syntax(cls, raw: str, registry: Optional["GrammarRegistry"] = None) -> None:
        """Raise the construction error for ``raw``, if any"""
        cls.parse(raw, registry)

    @classmethod
    def is_valid(cls, raw: str, registry: Optional["GrammarRegistry"] = None) -> bool:
        try:
            cls.parse(raw, registry)
        except ValidationError:
            return False
        return True

    def verify(self, dispatcher: Optional["VerificationDispatcher"] = None) -> "Verification":
        """Look this tax id up at its authority (blocking)"""
        if dispatcher is None:
            from .services.verification_dispatcher import default_dispatcher
            dispatcher = default_dispatcher()
        return dispatcher.verify(self)

    async def averify(self, dispatcher: Optional["VerificationDispatcher"] = None) -> "Verification":
        """Look this tax id up at its authority (awaitable)"""
        if dispatcher is None:
            from .services.verification_dispatcher import default_dispatcher
            dispatcher = default_dispatcher()
        return await dispatcher.averify(self)

    def __str__(self):
        return self.value


class Verification(BaseModel):
    """Result of one verification call.

    ``data`` holds whatever the authority returned. Its keys differ per
    authority and are not a stable contract.
    """
    model_config = ConfigDict(frozen=True)

    performed_at: datetime = Field(default_factory=lambda: datetime.now().astimezone(),
                                   description="Time of the call")
    status: VerificationStatus = Field(..., description="Verification outcome")
    reason: Optional[UnavailableReason] = Field(None, description="Set when status is unavailable")
    data: Dict[str, Any] = Field(default_factory=dict, description="Authority payload")

    @classmethod
    def create(cls,
               status: VerificationStatus,
               data: Optional[Dict[str, Any]] = None,
               reason: Optional[UnavailableReason] = None) -> "Verification":
        """Internal factory used by the verifiers"""
        if status == VerificationStatus.UNAVAILABLE:
            reason = reason or UnavailableReason.SERVICE_UNAVAILABLE
        else:
            reason = None
        return cls(status=status, reason=reason, data=data or {})

    @property
    def is_verified(self) -> bool:
        return self.status == VerificationStatus.VERIFIED
