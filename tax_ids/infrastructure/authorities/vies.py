"""
VIES Verifier
=============

EU VAT numbers through the European Commission's VIES checkVat service.
https://ec.europa.eu/taxation_customs/vies/checkVatService.wsdl
"""

import logging

from ...domain.exceptions import UnexpectedResponse
from ...domain.value_objects import TaxId, UnavailableReason, Verification, VerificationStatus
from ..transport import VerificationRequest, VerificationResponse
from .base import Verifier, http_unavailable_reason, parse_xml, raw_payload, xml_to_dict

logger = logging.getLogger(__name__)

ENVELOPE = """<soapenv:Envelope xmlns:soapenv="http://schemas.xmlsoap.org/soap/envelope/">
    <soapenv:Header/>
    <soapenv:Body>
        <checkVat xmlns="urn:ec.europa.eu:taxud:vies:services:checkVat:types">
            <countryCode>{country}</countryCode>
            <vatNumber>{number}</vatNumber>
        </checkVat>
    </soapenv:Body>
</soapenv:Envelope>"""

# VIES writes "---" where a member state does not share the data
ABSENT = "---"

FAULT_REASONS = {
    "GLOBAL_MAX_CONCURRENT_REQ": UnavailableReason.RATE_LIMIT,
    "GLOBAL_MAX_CONCURRENT_REQ_TIME": UnavailableReason.RATE_LIMIT,
    "MS_MAX_CONCURRENT_REQ": UnavailableReason.RATE_LIMIT,
    "MS_MAX_CONCURRENT_REQ_TIME": UnavailableReason.RATE_LIMIT,
    "TIMEOUT": UnavailableReason.TIMEOUT,
    "VAT_BLOCKED": UnavailableReason.BLOCK,
    "IP_BLOCKED": UnavailableReason.BLOCK,
}


class Vies(Verifier):
    """VIES SOAP client"""

    authority = "VIES"

    def __init__(self, url: str):
        self.url = url

    def build_request(self, tax_id: TaxId) -> VerificationRequest:
        return VerificationRequest(
            method="POST",
            url=self.url,
            headers={"Content-Type": "text/xml; charset=UTF-8"},
            body=ENVELOPE.format(country=tax_id.tax_country_code, number=tax_id.local_value),
        )

    def parse_response(self, response: VerificationResponse, tax_id: TaxId) -> Verification:
        root = parse_xml(response.body)
        if root is None:
            return self.unavailable(
                tax_id,
                raw_payload(response),
                http_unavailable_reason(response.status) or UnavailableReason.SERVICE_UNAVAILABLE,
            )

        data = xml_to_dict(root, absent_marker=ABSENT)

        # Any SOAP fault means VIES or the member state could not answer
        if "faultstring" in data:
            fault = data["faultstring"] or ""
            return self.unavailable(tax_id, data, FAULT_REASONS.get(fault, UnavailableReason.SERVICE_UNAVAILABLE))

        reason = http_unavailable_reason(response.status)
        if reason:
            return self.unavailable(tax_id, data, reason)

        valid = data.get("valid")
        if valid == "true":
            status = VerificationStatus.VERIFIED
        elif valid == "false":
            status = VerificationStatus.UNVERIFIED
        elif valid is None:
            raise UnexpectedResponse(self.authority, "Missing valid field in VIES response")
        else:
            raise UnexpectedResponse(self.authority, "Invalid value for valid field in VIES response")

        logger.debug(f"VIES answered {status.value} for {tax_id.value}")
        return Verification.create(status, data)
