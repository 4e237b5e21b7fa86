"""Grammar shared by every tax id family."""

import re
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Pattern

from ..value_objects import TaxIdType


def compile_patterns(patterns: Mapping[str, str]) -> Dict[str, Pattern[str]]:
    """Compile ``{tax_country_code: pattern}`` for full-value matching"""
    return {code: re.compile(pattern) for code, pattern in patterns.items()}


@dataclass(frozen=True)
class TaxIdGrammar:
    """Syntax of one tax id family.

    ``patterns`` is keyed by the prefix found in the tax id (the tax country
    code) and each pattern has to match the whole normalized value.
    ``country_aliases`` maps a prefix to the declared country code where
    the two differ.
    """
    tax_id_type: TaxIdType
    patterns: Mapping[str, Pattern[str]]
    country_aliases: Mapping[str, str] = field(default_factory=dict)

    @property
    def tax_country_codes(self) -> List[str]:
        return sorted(self.patterns)

    def matches(self, value: str) -> bool:
        pattern = self.patterns.get(value[:2])
        return bool(pattern and pattern.fullmatch(value))

    def country_code_from(self, tax_country_code: str) -> str:
        return self.country_aliases.get(tax_country_code, tax_country_code)
