"""
Verification Dispatcher
=======================

Routes a tax id to the verifier of its type and runs the request through
a transport. Transport timeouts and connection failures become
``unavailable`` verifications; everything else a verifier raises
propagates as a ``VerificationError``.

The dispatcher holds no per-call state and can be shared between threads
and event loop tasks.
"""

import logging
from functools import lru_cache
from typing import Dict, Optional, TYPE_CHECKING

from ..exceptions import TransportConnectionError, TransportTimeout
from ..value_objects import TaxId, TaxIdType, UnavailableReason, Verification, VerificationStatus

if TYPE_CHECKING:
    from ...infrastructure.authorities.base import Verifier
    from ...infrastructure.transport import HttpxTransport, RequestsTransport

logger = logging.getLogger(__name__)


class VerificationDispatcher:
    """One verifier per tax id type plus a blocking and an awaitable transport"""

    def __init__(self, verifiers: Optional[Dict[TaxIdType, "Verifier"]] = None,
                 transport: Optional["RequestsTransport"] = None,
                 async_transport: Optional["HttpxTransport"] = None):
        from ...infrastructure.config import settings
        from ...infrastructure.transport import HttpxTransport, RequestsTransport

        self.verifiers = dict(verifiers) if verifiers is not None else default_verifiers()
        self.transport = transport or RequestsTransport(settings.timeout_seconds)
        self.async_transport = async_transport or HttpxTransport(settings.timeout_seconds)

        missing = [t.value for t in TaxIdType if t not in self.verifiers]
        if missing:
            raise ValueError(f"No verifier configured for {', '.join(missing)}")

    def _verifier_for(self, tax_id: TaxId) -> "Verifier":
        try:
            return self.verifiers[tax_id.tax_id_type]
        except KeyError:
            raise RuntimeError(f"No verifier configured for {tax_id.tax_id_type.value}") from None

    def verify(self, tax_id: TaxId) -> Verification:
        """Blocking verification of ``tax_id``"""
        verifier = self._verifier_for(tax_id)
        request = verifier.build_request(tax_id)
        try:
            response = self.transport.send(request)
        except TransportTimeout as e:
            return _transport_unavailable(verifier, tax_id, e, UnavailableReason.TIMEOUT)
        except TransportConnectionError as e:
            return _transport_unavailable(verifier, tax_id, e, UnavailableReason.SERVICE_UNAVAILABLE)
        return verifier.parse_response(response, tax_id)

    async def averify(self, tax_id: TaxId) -> Verification:
        """Awaitable verification of ``tax_id``"""
        verifier = self._verifier_for(tax_id)
        request = verifier.build_request(tax_id)
        try:
            response = await self.async_transport.send(request)
        except TransportTimeout as e:
            return _transport_unavailable(verifier, tax_id, e, UnavailableReason.TIMEOUT)
        except TransportConnectionError as e:
            return _transport_unavailable(verifier, tax_id, e, UnavailableReason.SERVICE_UNAVAILABLE)
        return verifier.parse_response(response, tax_id)


def _transport_unavailable(verifier: "Verifier", tax_id: TaxId, error: Exception,
                           reason: UnavailableReason) -> Verification:
    logger.warning(f"{verifier.authority} unreachable for {tax_id.value}: {error}")
    return Verification.create(VerificationStatus.UNAVAILABLE, {"error": str(error)}, reason)


def default_verifiers() -> Dict[TaxIdType, "Verifier"]:
    """Verifiers for every tax id type, pointed at the configured endpoints"""
    from ...infrastructure.authorities import Bfs, Brreg, Hmrc, Vies
    from ...infrastructure.config import settings

    return {
        TaxIdType.EU_VAT: Vies(settings.vies_url),
        TaxIdType.GB_VAT: Hmrc(settings.hmrc_url),
        TaxIdType.CH_VAT: Bfs(settings.bfs_url),
        TaxIdType.NO_VAT: Brreg(settings.brreg_url),
    }


@lru_cache(maxsize=1)
def default_dispatcher() -> VerificationDispatcher:
    return VerificationDispatcher()
