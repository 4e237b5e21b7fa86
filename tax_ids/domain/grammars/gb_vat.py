"""UK VAT registration numbers, checked against HMRC."""

from ..value_objects import TaxIdType
from .base import TaxIdGrammar, compile_patterns

# Standard (9), branch traders (12), government departments (GD), health authorities (HA)
GB_VAT = TaxIdGrammar(
    tax_id_type=TaxIdType.GB_VAT,
    patterns=compile_patterns({"GB": r"GB([0-9]{9}|[0-9]{12}|(HA|GD)[0-9]{3})"}),
)
