"""Unit tests for TaxId construction and its helpers."""
import pytest
from pydantic import ValidationError as PydanticValidationError

from tax_ids.domain.exceptions import InvalidSyntax, UnsupportedCountryCode, ValidationError
from tax_ids.domain.grammars.ch_vat import uid
from tax_ids.domain.grammars.no_vat import org_number
from tax_ids.domain.services.grammar_registry import GrammarRegistry
from tax_ids.domain.value_objects import TaxId, TaxIdType


def test_parse_eu_vat(make_tax_id):
    tax_id = make_tax_id("SE556703748501")
    assert tax_id.value == "SE556703748501"
    assert tax_id.country_code == "SE"
    assert tax_id.tax_country_code == "SE"
    assert tax_id.local_value == "556703748501"
    assert tax_id.tax_id_type == TaxIdType.EU_VAT


def test_parse_normalizes_input(make_tax_id):
    tax_id = make_tax_id(" se 5567-0374.8501 ")
    assert tax_id.value == "SE556703748501"


def test_greece_uses_el_prefix(make_tax_id):
    tax_id = make_tax_id("EL123456789")
    assert tax_id.country_code == "GR"
    assert tax_id.tax_country_code == "EL"


def test_northern_ireland_is_eu_vat(make_tax_id):
    tax_id = make_tax_id("XI123456789")
    assert tax_id.country_code == "GB"
    assert tax_id.tax_country_code == "XI"
    assert tax_id.tax_id_type == TaxIdType.EU_VAT


def test_gb_vat(make_tax_id):
    tax_id = make_tax_id("GB123456789")
    assert tax_id.tax_id_type == TaxIdType.GB_VAT
    assert tax_id.country_code == "GB"
    assert tax_id.local_value == "123456789"


def test_ch_vat(make_tax_id):
    tax_id = make_tax_id("CHE-778.887.921 MWST")
    assert tax_id.value == "CHE778887921MWST"
    assert tax_id.tax_id_type == TaxIdType.CH_VAT
    assert tax_id.country_code == "CH"
    assert tax_id.local_value == "E778887921MWST"
    assert uid(tax_id) == "CHE778887921"


def test_no_vat(make_tax_id):
    tax_id = make_tax_id("NO123456789MVA")
    assert tax_id.tax_id_type == TaxIdType.NO_VAT
    assert tax_id.local_value == "123456789MVA"
    assert org_number(tax_id) == "123456789"
    assert org_number(make_tax_id("NO123456789")) == "123456789"


def test_parse_is_idempotent(make_tax_id):
    tax_id = make_tax_id("de 123 456 789")
    assert make_tax_id(tax_id.value) == tax_id


@pytest.mark.parametrize("raw", ["", "S", "SE", " s-e ", None])
def test_too_short_is_invalid_syntax(registry, raw):
    with pytest.raises(InvalidSyntax):
        TaxId.parse(raw, registry)


def test_unknown_prefix_is_unsupported(registry):
    with pytest.raises(UnsupportedCountryCode) as exc_info:
        TaxId.parse("US123456789", registry)
    assert exc_info.value.tax_country_code == "US"
    assert "US" in exc_info.value.message


def test_pattern_mismatch_lists_attempted_types(registry):
    with pytest.raises(InvalidSyntax) as exc_info:
        TaxId.parse("SE12345", registry)
    assert exc_info.value.attempted == [TaxIdType.EU_VAT]
    assert exc_info.value.details["value"] == "SE12345"


def test_errors_share_the_validation_base(registry):
    for raw in ("XX123", "DE1"):
        with pytest.raises(ValidationError):
            TaxId.parse(raw, registry)


def test_disabled_family_is_unsupported():
    registry = GrammarRegistry([TaxIdType.EU_VAT])
    with pytest.raises(UnsupportedCountryCode):
        TaxId.parse("GB123456789", registry)
    with pytest.raises(UnsupportedCountryCode):
        TaxId.parse("NO123456789", registry)


def test_direct_construction_ignores_derived_fields(registry):
    """Derived fields are always recomputed from the value."""
    tax_id = TaxId.model_validate(
        {"value": "SE556703748501", "country_code": "DE", "local_value": "bogus", "tax_id_type": "gb_vat"},
        context={"registry": registry},
    )
    assert tax_id.country_code == "SE"
    assert tax_id.local_value == "556703748501"
    assert tax_id.tax_id_type == TaxIdType.EU_VAT


def test_tax_id_is_frozen(make_tax_id):
    tax_id = make_tax_id("DE123456789")
    with pytest.raises(PydanticValidationError):
        tax_id.value = "DE987654321"


def test_validate_syntax_and_is_valid(registry):
    assert TaxId.validate_syntax("DE123456789", registry) is None
    with pytest.raises(InvalidSyntax):
        TaxId.validate_syntax("DE12345678", registry)

    assert TaxId.is_valid("DE123456789", registry)
    assert not TaxId.is_valid("DE12345678", registry)
    assert not TaxId.is_valid("ZZ123456789", registry)


def test_default_registry_enables_only_eu_vat():
    assert TaxId.parse("DE123456789").tax_id_type == TaxIdType.EU_VAT
    with pytest.raises(UnsupportedCountryCode):
        TaxId.parse("GB123456789")


def test_str_and_repr(make_tax_id):
    tax_id = make_tax_id("NL 123456789 B01")
    assert str(tax_id) == "NL123456789B01"
    assert "tax_country_code='NL'" in repr(tax_id)
    assert str(TaxIdType.NO_VAT) == "no_vat"


def test_equal_values_are_equal(make_tax_id):
    assert make_tax_id("DE123456789") == make_tax_id("de-123-456-789")
    assert hash(make_tax_id("DE123456789")) == hash(make_tax_id("DE 123456789"))


def test_keyword_construction_runs_the_grammar():
    tax_id = TaxId(value="de 123 456 789")
    assert tax_id.local_value == "123456789"
    with pytest.raises(InvalidSyntax):
        TaxId(value="DE12")
