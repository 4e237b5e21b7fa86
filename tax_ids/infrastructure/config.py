"""
Configuration Management
========================

Type-safe configuration using Pydantic Settings with environment variable support.

Which tax id families exist at all is decided here: a family left out of
``TAX_IDS_ENABLED_TYPES`` can never be constructed.
"""

from typing import List
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..domain.value_objects import TaxIdType


class TaxIdsSettings(BaseSettings):
    """Library settings"""
    model_config = SettingsConfigDict(
        env_prefix="TAX_IDS_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    enabled_types: str = Field("eu_vat", description="Comma separated tax id families, e.g. 'eu_vat,gb_vat'")
    timeout_seconds: float = Field(30.0, description="Transport timeout per verification request")

    # Authority endpoints
    vies_url: str = Field(
        "http://ec.europa.eu/taxation_customs/vies/services/checkVatService",
        description="VIES checkVat SOAP service"
    )
    hmrc_url: str = Field(
        "https://api.service.hmrc.gov.uk/organisations/vat/check-vat-number/lookup",
        description="HMRC check VAT number lookup"
    )
    bfs_url: str = Field(
        "https://www.uid-wse-a.admin.ch/V5.0/PublicServices.svc",
        description="BFS UID register public services"
    )
    brreg_url: str = Field(
        "https://data.brreg.no/enhetsregisteret/api/enheter",
        description="Brønnøysund entity register"
    )

    @field_validator("enabled_types")
    @classmethod
    def validate_enabled_types(cls, v: str) -> str:
        """Reject unknown family names early"""
        names = [name.strip().lower() for name in v.split(",") if name.strip()]
        known = {t.value for t in TaxIdType}
        unknown = [name for name in names if name not in known]
        if unknown:
            raise ValueError(f"Unknown tax id types: {', '.join(unknown)} (known: {', '.join(sorted(known))})")
        return ",".join(names)

    @property
    def enabled_tax_id_types(self) -> List[TaxIdType]:
        """Enabled families as enum members, in declaration order"""
        names = set(self.enabled_types.split(",")) if self.enabled_types else set()
        return [t for t in TaxIdType if t.value in names]


def get_settings() -> TaxIdsSettings:
    """Read settings from the environment"""
    return TaxIdsSettings()


# Global configuration instance
settings = get_settings()
