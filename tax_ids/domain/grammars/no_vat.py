"""Norwegian organisation numbers, checked against Brønnøysundregistrene."""

from ..value_objects import TaxId, TaxIdType
from .base import TaxIdGrammar, compile_patterns

NO_VAT = TaxIdGrammar(
    tax_id_type=TaxIdType.NO_VAT,
    patterns=compile_patterns({"NO": r"NO[0-9]{9}(MVA)?"}),
)


def org_number(tax_id: TaxId) -> str:
    """Nine digit organisation number, without the MVA suffix"""
    return tax_id.local_value.replace("MVA", "")
