"""Pytest configuration and shared fixtures.

Tax ids are built against a registry with every family enabled, so tests
do not depend on TAX_IDS_ENABLED_TYPES. Transports are replaced by stubs
that hand back canned authority answers.
"""
import pytest

from tax_ids.domain.services.grammar_registry import GrammarRegistry
from tax_ids.domain.value_objects import TaxId
from tax_ids.infrastructure.transport import VerificationResponse


# ── Registry fixtures ────────────────────────────────────────────────

@pytest.fixture()
def registry():
    """Registry with all tax id families enabled."""
    return GrammarRegistry()


@pytest.fixture()
def make_tax_id(registry):
    """Factory parsing a raw value against the all-families registry."""
    def _make(raw: str) -> TaxId:
        return TaxId.parse(raw, registry)
    return _make


# ── Transport stubs ──────────────────────────────────────────────────

class StubTransport:
    """Blocking transport returning a canned response or raising an error."""

    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.requests = []

    def send(self, request):
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return self.response


class AsyncStubTransport(StubTransport):
    """Awaitable flavour of StubTransport."""

    async def send(self, request):
        return StubTransport.send(self, request)


def make_response(status: int, body: str = "") -> VerificationResponse:
    return VerificationResponse(status=status, body=body.encode("utf-8"))
