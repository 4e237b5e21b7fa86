"""
BFS Verifier
============

Swiss VAT numbers through the UID register of the Federal Statistical Office.
https://www.bfs.admin.ch/bfs/en/home/registers/enterprise-register/enterprise-identification/uid-register/uid-interfaces.html

The public service allows 20 requests per minute; above that it answers
with a ``Request_limit_exceeded`` fault.
"""

import logging

from ...domain.exceptions import UnexpectedResponse
from ...domain.grammars.ch_vat import uid
from ...domain.value_objects import TaxId, UnavailableReason, Verification, VerificationStatus
from ..transport import VerificationRequest, VerificationResponse
from .base import Verifier, http_unavailable_reason, parse_xml, raw_payload, xml_to_dict

logger = logging.getLogger(__name__)

ENVELOPE = """<soapenv:Envelope xmlns:soapenv="http://schemas.xmlsoap.org/soap/envelope/" xmlns:uid="http://www.uid.admin.ch/xmlns/uid-wse">
    <soapenv:Header/>
    <soapenv:Body>
        <uid:ValidateVatNumber>
            <uid:vatNumber>{value}</uid:vatNumber>
        </uid:ValidateVatNumber>
    </soapenv:Body>
</soapenv:Envelope>"""

HEADERS = {
    "Accept": "text/xml;charset=UTF-8",
    "Content-Type": "text/xml;charset=UTF-8",
    "SOAPAction": "http://www.uid.admin.ch/xmlns/uid-wse/IPublicServices/ValidateVatNumber",
}


class Bfs(Verifier):
    """UID register SOAP client"""

    authority = "BFS"

    def __init__(self, url: str):
        self.url = url

    def build_request(self, tax_id: TaxId) -> VerificationRequest:
        return VerificationRequest(
            method="POST",
            url=self.url,
            headers=dict(HEADERS),
            body=ENVELOPE.format(value=uid(tax_id)),
        )

    def parse_response(self, response: VerificationResponse, tax_id: TaxId) -> Verification:
        root = parse_xml(response.body)
        if root is None:
            return self.unavailable(
                tax_id,
                raw_payload(response),
                http_unavailable_reason(response.status) or UnavailableReason.SERVICE_UNAVAILABLE,
            )

        data = xml_to_dict(root)

        if "faultstring" in data:
            fault = data["faultstring"]
            if fault == "Data_validation_failed":
                return Verification.create(VerificationStatus.UNVERIFIED, data)
            if fault == "Request_limit_exceeded":
                return self.unavailable(tax_id, data, UnavailableReason.RATE_LIMIT)
            raise UnexpectedResponse(self.authority, f"Unexpected faultstring: {fault}")

        reason = http_unavailable_reason(response.status)
        if reason:
            return self.unavailable(tax_id, data, reason)

        result = data.get("ValidateVatNumberResult")
        if result == "true":
            status = VerificationStatus.VERIFIED
        elif result == "false":
            status = VerificationStatus.UNVERIFIED
        else:
            raise UnexpectedResponse(self.authority, "ValidateVatNumberResult should be 'true' or 'false'")

        logger.debug(f"BFS answered {status.value} for {tax_id.value}")
        return Verification.create(status, data)
