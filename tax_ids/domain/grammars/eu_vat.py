"""EU VAT numbers, checked against VIES."""

from ..value_objects import TaxIdType
from .base import TaxIdGrammar, compile_patterns

EU_VAT_PATTERNS = {
    "AT": r"ATU[0-9]{8}",                                           # Austria
    "BE": r"BE[0-1][0-9]{9}",                                       # Belgium
    "BG": r"BG[0-9]{9,10}",                                         # Bulgaria
    "CY": r"CY[0-69][0-9]{7}[A-Z]",                                 # Cyprus
    "CZ": r"CZ[0-9]{8,10}",                                         # Czech Republic
    "DE": r"DE[0-9]{9}",                                            # Germany
    "DK": r"DK[0-9]{8}",                                            # Denmark
    "EE": r"EE10[0-9]{7}",                                          # Estonia
    "EL": r"EL[0-9]{9}",                                            # Greece
    "ES": r"ES([A-Z][0-9]{8}|[0-9]{8}[A-Z]|[A-Z][0-9]{7}[A-Z])",    # Spain
    "FI": r"FI[0-9]{8}",                                            # Finland
    "FR": r"FR[A-HJ-NP-Z0-9]{2}[0-9]{9}",                           # France
    "HR": r"HR[0-9]{11}",                                           # Croatia
    "HU": r"HU[0-9]{8}",                                            # Hungary
    "IE": r"IE([0-9][A-Z][0-9]{5}|[0-9]{7}[A-Z]?)[A-Z]",            # Ireland
    "IT": r"IT[0-9]{11}",                                           # Italy
    "LT": r"LT([0-9]{7}1[0-9]|[0-9]{10}1[0-9])",                    # Lithuania
    "LU": r"LU[0-9]{8}",                                            # Luxembourg
    "LV": r"LV[0-9]{11}",                                           # Latvia
    "MT": r"MT[0-9]{8}",                                            # Malta
    "NL": r"NL[0-9]{9}B[0-9]{2}",                                   # Netherlands
    "PL": r"PL[0-9]{10}",                                           # Poland
    "PT": r"PT[0-9]{9}",                                            # Portugal
    "RO": r"RO[1-9][0-9]{1,9}",                                     # Romania
    "SE": r"SE[0-9]{10}01",                                         # Sweden
    "SI": r"SI[0-9]{8}",                                            # Slovenia
    "SK": r"SK[0-9]{10}",                                           # Slovakia
    "XI": r"XI([0-9]{9}|[0-9]{12}|(HA|GD)[0-9]{3})",                # Northern Ireland
}

EU_VAT = TaxIdGrammar(
    tax_id_type=TaxIdType.EU_VAT,
    patterns=compile_patterns(EU_VAT_PATTERNS),
    # VIES prefixes that are not the ISO code of the country
    country_aliases={"EL": "GR", "XI": "GB"},
)
