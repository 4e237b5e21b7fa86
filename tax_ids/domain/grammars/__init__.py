"""
Tax Id Grammars
===============

One grammar per tax id family. ``PRECEDENCE`` is the order in which
families sharing a prefix are tried: country specific families first,
the EU catch-all last.
"""

from ..value_objects import TaxIdType
from .base import TaxIdGrammar, compile_patterns
from .eu_vat import EU_VAT
from .gb_vat import GB_VAT
from .ch_vat import CH_VAT
from .no_vat import NO_VAT

GRAMMARS = {
    TaxIdType.GB_VAT: GB_VAT,
    TaxIdType.CH_VAT: CH_VAT,
    TaxIdType.NO_VAT: NO_VAT,
    TaxIdType.EU_VAT: EU_VAT,
}

PRECEDENCE = tuple(GRAMMARS)

if set(GRAMMARS) != set(TaxIdType):
    raise RuntimeError(f"No grammar for {sorted(t.value for t in set(TaxIdType) - set(GRAMMARS))}")

__all__ = [
    "TaxIdGrammar",
    "compile_patterns",
    "GRAMMARS",
    "PRECEDENCE",
    "EU_VAT",
    "GB_VAT",
    "CH_VAT",
    "NO_VAT",
]
