"""Swiss UID/VAT numbers, checked against the BFS UID register.

Accepted inputs include ``CHE-123.456.789``, ``CHE123456789`` and either of
them followed by the MWST/TVA/IVA suffix; separators are gone after
normalization.
"""

import re

from ..value_objects import TaxId, TaxIdType
from .base import TaxIdGrammar, compile_patterns

CH_VAT = TaxIdGrammar(
    tax_id_type=TaxIdType.CH_VAT,
    patterns=compile_patterns({"CH": r"CHE[0-9]{9}(MWST|TVA|IVA)?"}),
)

_VAT_SUFFIX = re.compile(r"(MWST|TVA|IVA)$")


def uid(tax_id: TaxId) -> str:
    """UID part of a Swiss tax id, e.g. ``CHE123456789``"""
    return _VAT_SUFFIX.sub("", tax_id.value)
