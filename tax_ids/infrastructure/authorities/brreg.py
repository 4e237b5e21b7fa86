"""
Brreg Verifier
==============

Norwegian VAT numbers through the Brønnøysund Register Centre.
https://data.brreg.no/enhetsregisteret/api/dokumentasjon/no/index.html#tag/Enheter/operation/hentEnhet

The register answers with Norwegian keys; ``translate_keys`` maps the
common ones to English for callers who want them.
"""

import logging
from typing import Any, Dict

from ...domain.exceptions import UnexpectedResponse, UnexpectedStatusCode
from ...domain.grammars.no_vat import org_number
from ...domain.value_objects import TaxId, UnavailableReason, Verification, VerificationStatus
from ..transport import VerificationRequest, VerificationResponse
from .base import Verifier, http_unavailable_reason, load_json, raw_payload

logger = logging.getLogger(__name__)

HEADERS = {"Accept": "application/vnd.brreg.enhetsregisteret.enhet.v2+json"}

# Every flag must be present with exactly this value
REQUIREMENTS_TO_BE_VALID = {
    "registrertIMvaregisteret": True,   # registered for VAT
    "konkurs": False,                   # bankrupt
    "underAvvikling": False,            # in liquidation
    "underTvangsavviklingEllerTvangsopplosning": False,  # forced liquidation
}

TRANSLATIONS = {
    "organisasjonsnummer": "organization_number",
    "navn": "name",
    "organisasjonsform": "organization_form",
    "kode": "code",
    "beskrivelse": "description",
    "hjemmeside": "website",
    "postadresse": "postal_address",
    "forretningsadresse": "business_address",
    "land": "country",
    "landkode": "country_code",
    "postnummer": "postal_code",
    "poststed": "city",
    "adresse": "address",
    "kommune": "municipality",
    "kommunenummer": "municipality_number",
    "registreringsdatoEnhetsregisteret": "registration_date",
    "registrertIMvaregisteret": "registered_in_vat_register",
    "naeringskode1": "industry_code",
    "antallAnsatte": "number_of_employees",
    "harRegistrertAntallAnsatte": "has_registered_number_of_employees",
    "institusjonellSektorkode": "institutional_sector_code",
    "registrertIForetaksregisteret": "registered_in_business_register",
    "registrertIStiftelsesregisteret": "registered_in_foundation_register",
    "registrertIFrivillighetsregisteret": "registered_in_voluntary_register",
    "stiftelsesdato": "founding_date",
    "sisteInnsendteAarsregnskap": "last_submitted_annual_accounts",
    "konkurs": "bankrupt",
    "konkursdato": "bankruptcy_date",
    "underAvvikling": "under_liquidation",
    "underAvviklingDato": "liquidation_date",
    "underTvangsavviklingEllerTvangsopplosning": "under_forced_liquidation",
    "tvangsavvikletPgaManglendeSlettingDato": "forced_liquidation_date",
    "slettedato": "deletion_date",
    "maalform": "language_form",
    "vedtektsdato": "articles_date",
    "vedtektsfestetFormaal": "statutory_purpose",
    "aktivitet": "activity",
}


def translate_keys(data: Any) -> Any:
    """Copy of ``data`` with Norwegian register keys replaced by English ones.

    Nested objects and lists are translated too; unknown keys are kept.
    """
    if isinstance(data, dict):
        return {TRANSLATIONS.get(key, key): translate_keys(value) for key, value in data.items()}
    if isinstance(data, list):
        return [translate_keys(value) for value in data]
    return data


def qualify(entity: Dict[str, Any]) -> VerificationStatus:
    for key, expected in REQUIREMENTS_TO_BE_VALID.items():
        if entity.get(key) is not expected:
            return VerificationStatus.UNVERIFIED
    return VerificationStatus.VERIFIED


class Brreg(Verifier):
    """Entity register client"""

    authority = "BRREG"

    def __init__(self, url: str):
        self.url = url.rstrip("/")

    def build_request(self, tax_id: TaxId) -> VerificationRequest:
        return VerificationRequest(
            method="GET",
            url=f"{self.url}/{org_number(tax_id)}",
            headers=dict(HEADERS),
        )

    def parse_response(self, response: VerificationResponse, tax_id: TaxId) -> Verification:
        status = response.status

        # Unknown or deleted entity
        if status in (404, 410):
            return Verification.create(VerificationStatus.UNVERIFIED, {})

        if status == 429:
            return self.unavailable(tax_id, raw_payload(response), UnavailableReason.RATE_LIMIT)

        if status != 200 and status < 500:
            raise UnexpectedStatusCode(self.authority, status)

        try:
            entity = load_json(response.body)
        except ValueError:
            return self.unavailable(
                tax_id,
                raw_payload(response),
                http_unavailable_reason(status) or UnavailableReason.SERVICE_UNAVAILABLE,
            )

        if status >= 500:
            data = entity if isinstance(entity, dict) else raw_payload(response)
            return self.unavailable(tax_id, data)

        if not isinstance(entity, dict):
            raise UnexpectedResponse(self.authority, "expected a JSON object")

        result = qualify(entity)
        logger.debug(f"Brreg answered {result.value} for {tax_id.value}")
        return Verification.create(result, entity)
