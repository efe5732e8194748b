"""
Game formulas for cities and nations.

Pure functions, importable directly or reachable from a client as
``kit.utilities``.
"""

from .city import (
    age_bonus,
    base_population,
    building_bonus,
    city_cost,
    commerce,
    crime_deaths,
    crime_rate,
    disease_deaths,
    disease_rate,
    food_production,
    hospital_modifier,
    infra_cost,
    land_cost,
    police_modifier,
    pollution_modifier,
    population_density,
    radiation_modifier,
)
from .nation import convert_bits_to_project


class Utilities:
    """Namespace exposing the formulas on a client instance."""

    city_cost = staticmethod(city_cost)
    infra_cost = staticmethod(infra_cost)
    land_cost = staticmethod(land_cost)
    base_population = staticmethod(base_population)
    population_density = staticmethod(population_density)
    age_bonus = staticmethod(age_bonus)
    commerce = staticmethod(commerce)
    food_production = staticmethod(food_production)
    radiation_modifier = staticmethod(radiation_modifier)
    building_bonus = staticmethod(building_bonus)
    crime_rate = staticmethod(crime_rate)
    police_modifier = staticmethod(police_modifier)
    crime_deaths = staticmethod(crime_deaths)
    disease_rate = staticmethod(disease_rate)
    hospital_modifier = staticmethod(hospital_modifier)
    pollution_modifier = staticmethod(pollution_modifier)
    disease_deaths = staticmethod(disease_deaths)
    convert_bits_to_project = staticmethod(convert_bits_to_project)


__all__ = [
    "Utilities",
    "age_bonus",
    "base_population",
    "building_bonus",
    "city_cost",
    "commerce",
    "convert_bits_to_project",
    "crime_deaths",
    "crime_rate",
    "disease_deaths",
    "disease_rate",
    "food_production",
    "hospital_modifier",
    "infra_cost",
    "land_cost",
    "police_modifier",
    "pollution_modifier",
    "population_density",
    "radiation_modifier",
]
