"""Species universe the pipeline can process."""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from rnaxref.domain.model import Species

from .env import optional_env_var
from .errors import ConfigurationError

if TYPE_CHECKING:
    from collections.abc import Sequence

RAT_TAXON_ID: Final[int] = 10116

DEFAULT_SPECIES: Final[tuple[Species, ...]] = (
    Species(key=1, common_name="human", taxon_id=9606),
    Species(key=2, common_name="mouse", taxon_id=10090),
    Species(key=3, common_name="rat", taxon_id=RAT_TAXON_ID),
    Species(key=4, common_name="chinchilla", taxon_id=34839),
    Species(key=5, common_name="bonobo", taxon_id=9597),
    Species(key=6, common_name="dog", taxon_id=9615),
    Species(key=7, common_name="squirrel", taxon_id=43179),
    Species(key=9, common_name="pig", taxon_id=9823),
    Species(key=13, common_name="green monkey", taxon_id=60711),
    Species(key=14, common_name="naked mole-rat", taxon_id=10181),
)


def searchable_species(universe: Sequence[Species] = DEFAULT_SPECIES) -> tuple[Species, ...]:
    return tuple(species for species in universe if species.searchable)


def select_species(
    names: Sequence[str] | None,
    *,
    universe: Sequence[Species] = DEFAULT_SPECIES,
) -> tuple[Species, ...]:
    """Return the searchable species, limited to ``names`` when given.

    Selection keeps the universe order so the final summary table is stable.
    """

    candidates = searchable_species(universe)
    if not names:
        return candidates

    wanted = {name.strip().lower() for name in names if name.strip()}
    known = {species.common_name.lower() for species in candidates}
    unknown = sorted(wanted - known)
    if unknown:
        raise ConfigurationError(f"Unknown or non-searchable species: {', '.join(unknown)}")
    return tuple(species for species in candidates if species.common_name.lower() in wanted)


def get_species_config(
    names: Sequence[str] | None = None,
    *,
    universe: Sequence[Species] = DEFAULT_SPECIES,
) -> tuple[Species, ...]:
    if names is None:
        env_value = optional_env_var("RNAXREF_SPECIES")
        names = env_value.split(",") if env_value else None
    return select_species(names, universe=universe)
