"""Country metadata keyed by ICAO location prefix."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from activeatc.config import settings

logger = logging.getLogger("activeatc.countries")

DEFAULT_FLAG = "default"
DEFAULT_NAME = "default"

# Prefixes that cover a whole country with a single letter.
_SINGLE_LETTER_COUNTRIES = {
    "K": ("United States", "us"),
    "Y": ("Australia", "au"),
}


class Country(BaseModel):
    """One row of the bundled country reference file."""

    code: str = Field(..., alias="Code", description="Two-letter ICAO location prefix")
    country: str = Field(..., alias="Country", description="Display name")
    ccode: Optional[str] = Field(default=None, alias="CCode", description="ISO 3166 code")

    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)


class CountryDirectory:
    """Lookup of country names and flag codes for station callsigns."""

    def __init__(self, countries: list[Country] | None = None) -> None:
        self._by_code: dict[str, Country] = {}
        for country in countries or []:
            self._by_code.setdefault(country.code, country)

    def __len__(self) -> int:
        return len(self._by_code)

    @classmethod
    def load(cls, path: str | Path | None = None) -> "CountryDirectory":
        """Load the reference file, raising ``RuntimeError`` if it is unusable."""

        source = Path(path or settings.countries_path)
        try:
            raw = json.loads(source.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.error("Failed to load countries from %s: %s", source, exc)
            raise RuntimeError(f"Unable to load countries from {source}") from exc

        if not isinstance(raw, list):
            raise RuntimeError(f"Country file {source} does not contain a list")

        countries: list[Country] = []
        for entry in raw:
            try:
                countries.append(Country.model_validate(entry))
            except ValidationError as exc:
                logger.debug("Skipping malformed country entry %s: %s", entry, exc)
        return cls(countries)

    def _lookup(self, code: str) -> Optional[Country]:
        return self._by_code.get(code[:2].upper())

    def flag_code(self, code: str) -> str:
        """Lowercase ISO code used to pick a flag image for ``code``."""

        special = _SINGLE_LETTER_COUNTRIES.get(code[:1].upper())
        if special:
            return special[1]
        country = self._lookup(code)
        if country is None or not country.ccode:
            return DEFAULT_FLAG
        return country.ccode.lower()

    def country_name(self, code: str) -> str:
        special = _SINGLE_LETTER_COUNTRIES.get(code[:1].upper())
        if special:
            return special[0]
        country = self._lookup(code)
        return country.country if country else DEFAULT_NAME


__all__ = ["Country", "CountryDirectory", "DEFAULT_FLAG", "DEFAULT_NAME"]
