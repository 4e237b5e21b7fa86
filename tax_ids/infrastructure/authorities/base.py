"""Shared pieces of the authority verifiers."""

import json
import logging
import xml.etree.ElementTree as ET
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from ...domain.value_objects import TaxId, UnavailableReason, Verification, VerificationStatus
from ..transport import VerificationRequest, VerificationResponse

logger = logging.getLogger(__name__)


class Verifier(ABC):
    """Request builder and response parser for one authority.

    Both steps are pure; sending the request is the transport's job.
    """

    authority: str = ""

    @abstractmethod
    def build_request(self, tax_id: TaxId) -> VerificationRequest:
        """Describe the lookup request for ``tax_id``"""

    @abstractmethod
    def parse_response(self, response: VerificationResponse, tax_id: TaxId) -> Verification:
        """Turn the authority answer into a verification"""

    def unavailable(self,
                    tax_id: TaxId,
                    data: Dict[str, Any],
                    reason: UnavailableReason = UnavailableReason.SERVICE_UNAVAILABLE) -> Verification:
        logger.warning(f"{self.authority} could not verify {tax_id.value}: {reason.value}")
        return Verification.create(VerificationStatus.UNAVAILABLE, data, reason)


def http_unavailable_reason(status: int) -> Optional[UnavailableReason]:
    """Reason implied by the HTTP status alone, if any"""
    if status == 429:
        return UnavailableReason.RATE_LIMIT
    if status >= 500:
        return UnavailableReason.SERVICE_UNAVAILABLE
    return None


def raw_payload(response: VerificationResponse) -> Dict[str, Any]:
    """Data for answers that could not be parsed"""
    return {"http_status": response.status, "body": response.text[:500]}


def parse_xml(body: bytes) -> Optional[ET.Element]:
    """Root element, or None for a malformed document"""
    try:
        return ET.fromstring(body.strip())
    except ET.ParseError:
        return None


def load_json(body: bytes) -> Any:
    """Decoded JSON body; raises ValueError when the body is not JSON"""
    return json.loads(body)


def xml_to_dict(root: ET.Element, absent_marker: Optional[str] = None) -> Dict[str, Optional[str]]:
    """Flatten the leaf elements of a SOAP document to ``{local_name: text}``.

    Namespaces are dropped, leaves without text are skipped and
    ``absent_marker`` turns into None.
    """
    result: Dict[str, Optional[str]] = {}
    for element in root.iter():
        if len(element):
            continue
        text = (element.text or "").strip()
        if not text:
            continue
        tag = element.tag.rsplit("}", 1)[-1]
        result[tag] = None if text == absent_marker else text
    return result
