"""
Grammar Registry
================

Index of the enabled tax id grammars by the prefix that appears in the
literal tax id (``EL`` for Greece, ``XI`` for Northern Ireland), not by
the declared country code.
"""

import logging
from functools import lru_cache
from typing import Dict, Iterable, List, Optional

from ..grammars import GRAMMARS, PRECEDENCE, TaxIdGrammar
from ..value_objects import TaxIdType

logger = logging.getLogger(__name__)


class GrammarRegistry:
    """Enabled grammars, tried in a fixed precedence order"""

    def __init__(self, enabled_types: Optional[Iterable[TaxIdType]] = None):
        enabled = set(TaxIdType if enabled_types is None else (TaxIdType(t) for t in enabled_types))
        self.enabled_types: List[TaxIdType] = [t for t in PRECEDENCE if t in enabled]

        self._by_prefix: Dict[str, List[TaxIdGrammar]] = {}
        for tax_id_type in self.enabled_types:
            grammar = GRAMMARS[tax_id_type]
            for prefix in grammar.tax_country_codes:
                self._by_prefix.setdefault(prefix, []).append(grammar)

        logger.debug(f"Grammar registry enabled for {[t.value for t in self.enabled_types]}")

    def candidates(self, tax_country_code: str) -> List[TaxIdGrammar]:
        """Grammars claiming a prefix, in precedence order (case-insensitive)"""
        return list(self._by_prefix.get(tax_country_code.upper(), []))

    def match(self, value: str) -> Optional[TaxIdGrammar]:
        """First grammar that fully matches an already normalized value"""
        for grammar in self.candidates(value[:2]):
            if grammar.matches(value):
                return grammar
        return None

    def supported_tax_country_codes(self) -> List[str]:
        return sorted(self._by_prefix)

    def is_enabled(self, tax_id_type: TaxIdType) -> bool:
        return tax_id_type in self.enabled_types


@lru_cache(maxsize=1)
def default_registry() -> GrammarRegistry:
    """Registry for the families enabled in the settings"""
    from ...infrastructure.config import settings
    return GrammarRegistry(settings.enabled_tax_id_types)
