"""
HMRC Verifier
=============

UK VAT numbers through HMRC's check VAT number API.
https://developer.service.hmrc.gov.uk/api-documentation/docs/api/service/vat-registered-companies-api/1.0
"""

import logging

from ...domain.exceptions import UnexpectedResponse
from ...domain.value_objects import TaxId, UnavailableReason, Verification, VerificationStatus
from ..transport import VerificationRequest, VerificationResponse
from .base import Verifier, http_unavailable_reason, load_json, raw_payload

logger = logging.getLogger(__name__)

HEADERS = {"Accept": "application/vnd.hmrc.1.0+json"}


class Hmrc(Verifier):
    """HMRC lookup client"""

    authority = "HMRC"

    def __init__(self, url: str):
        self.url = url.rstrip("/")

    def build_request(self, tax_id: TaxId) -> VerificationRequest:
        return VerificationRequest(
            method="GET",
            url=f"{self.url}/{tax_id.local_value}",
            headers=dict(HEADERS),
        )

    def parse_response(self, response: VerificationResponse, tax_id: TaxId) -> Verification:
        try:
            payload = load_json(response.body)
        except ValueError:
            return self.unavailable(
                tax_id,
                raw_payload(response),
                http_unavailable_reason(response.status) or UnavailableReason.SERVICE_UNAVAILABLE,
            )

        if not isinstance(payload, dict):
            reason = http_unavailable_reason(response.status)
            if reason:
                return self.unavailable(tax_id, raw_payload(response), reason)
            raise UnexpectedResponse(self.authority, "expected a JSON object")

        code = payload.get("code")
        if code is None:
            reason = http_unavailable_reason(response.status)
            if reason:
                return self.unavailable(tax_id, payload, reason)
            target = payload.get("target")
            if not isinstance(target, dict):
                raise UnexpectedResponse(self.authority, "missing target in lookup response")
            logger.debug(f"HMRC verified {tax_id.value}")
            return Verification.create(VerificationStatus.VERIFIED, target)

        if code == "NOT_FOUND":
            return Verification.create(VerificationStatus.UNVERIFIED, payload)

        if code == "MESSAGE_THROTTLED_OUT" or response.status == 429:
            return self.unavailable(tax_id, payload, UnavailableReason.RATE_LIMIT)
        return self.unavailable(tax_id, payload)
