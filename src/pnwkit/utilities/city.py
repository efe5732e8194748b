"""
City formulas of the game: purchase costs, population, commerce, food,
crime and disease.

All functions are pure. Rounding follows the game's own calculators: costs
are rounded half up to cents after discounts are applied.
"""

from __future__ import annotations

import math
from typing import Literal


MAX_PURCHASE_SIZE = 10_000
INFRA_CHUNK = 100
LAND_CHUNK = 500
DOWNGRADE_PRICE = 150  # per unit, applied when the ending amount is lower

Season = Literal["spring", "summer", "fall", "winter"]

SEASON_MODIFIERS: dict[str, float] = {
    "spring": 1.0,
    "summer": 1.2,
    "fall": 1.0,
    "winter": 0.8,
}


def _round_half_up(value: float, digits: int = 2) -> float:
    scale = 10 ** digits
    return math.floor(value * scale + 0.5) / scale


def _check_non_negative(*values: float) -> None:
    if any(v < 0 for v in values):
        raise ValueError("Invalid input: Negative values are not allowed")


# =============================================================================
# Purchase costs
# =============================================================================


def city_cost(city_to_buy: int, top20_average: float) -> int:
    """
    Cost of purchasing a city.

    Args:
        city_to_buy: Number of the city being bought (11 when the nation has 10)
        top20_average: Average city count of the top 20% of active nations

    Returns:
        Cost in dollars
    """
    adjusted = city_to_buy - top20_average / 4
    polynomial = 100_000 * adjusted ** 3 + 150_000 * adjusted + 75_000
    minimum = city_to_buy ** 2 * 100_000
    return math.floor(max(polynomial, minimum))


def _purchase_discount(
    base_project: bool,
    advanced_engineering_corps: bool,
    expansion_project: bool,
    government_support_agency: bool,
    bureau_of_domestic_affairs: bool,
) -> float:
    """Total discount in percent shared by infrastructure and land purchases."""
    discount = 0.0
    if base_project:
        discount += 10 if advanced_engineering_corps else 5
    if expansion_project:
        if bureau_of_domestic_affairs:
            discount += 8.75
        elif government_support_agency:
            discount += 7.5
        else:
            discount += 5
    return discount


def _chunked_cost(
    start: float,
    end: float,
    unit_price,
    chunk: int,
) -> float:
    """Price a purchase in chunks, each priced at the amount it starts from."""
    start = _round_half_up(start)
    end = _round_half_up(end)
    difference = end - start

    if difference > MAX_PURCHASE_SIZE:
        raise ValueError(
            f"Difference between starting and ending amount exceeds maximum limit of {MAX_PURCHASE_SIZE:,}"
        )

    if difference == 0:
        return 0
    if difference < 0:
        return DOWNGRADE_PRICE * difference

    price = _round_half_up(unit_price(start))
    if difference <= chunk:
        return price * difference

    # Odd remainder first, then whole chunks
    step = difference % chunk or chunk
    return price * step + _chunked_cost(start + step, end, unit_price, chunk)


def infra_price(amount: float) -> float:
    """Price of one unit of infrastructure at the given level."""
    if amount < 10:
        return 300
    return abs(amount - 10) ** 2.2 / 710 + 300


def land_price(amount: float) -> float:
    """Price of one unit of land at the given level."""
    return 0.002 * (amount - 20) ** 2 + 50


def infra_cost(
    starting_amount: float,
    ending_amount: float,
    center_for_civil_engineering: bool = False,
    advanced_engineering_corps: bool = False,
    urbanization: bool = False,
    government_support_agency: bool = False,
    bureau_of_domestic_affairs: bool = False,
) -> float:
    """
    Cost of buying infrastructure from one level to another.

    Infrastructure is priced in chunks of 100. CCE gives 5% (10% with AEC);
    Urbanization gives 5%, 7.5% with GSA or 8.75% with BDA.

    Raises:
        ValueError: If more than 10,000 infrastructure is bought at once
    """
    total = _chunked_cost(starting_amount, ending_amount, infra_price, INFRA_CHUNK)
    discount = _purchase_discount(
        center_for_civil_engineering,
        advanced_engineering_corps,
        urbanization,
        government_support_agency,
        bureau_of_domestic_affairs,
    )
    return _round_half_up(total * (1 - discount / 100))


def land_cost(
    starting_amount: float,
    ending_amount: float,
    arable_land_agency: bool = False,
    advanced_engineering_corps: bool = False,
    rapid_expansion: bool = False,
    government_support_agency: bool = False,
    bureau_of_domestic_affairs: bool = False,
) -> float:
    """
    Cost of buying land from one level to another.

    Land is priced in chunks of 500. ALA gives 5% (10% with AEC); Rapid
    Expansion gives 5%, 7.5% with GSA or 8.75% with BDA.

    Raises:
        ValueError: If more than 10,000 land is bought at once
    """
    total = _chunked_cost(starting_amount, ending_amount, land_price, LAND_CHUNK)
    discount = _purchase_discount(
        arable_land_agency,
        advanced_engineering_corps,
        rapid_expansion,
        government_support_agency,
        bureau_of_domestic_affairs,
    )
    return _round_half_up(total * (1 - discount / 100))


# =============================================================================
# Population
# =============================================================================


def base_population(infrastructure: float) -> float:
    """100 people per point of infrastructure."""
    _check_non_negative(infrastructure)
    return 100 * infrastructure


def population_density(population: float, land: float) -> float:
    if land <= 0:
        raise ValueError("Invalid input: Land must be greater than zero")
    _check_non_negative(population)
    return population / land


def age_bonus(city_age: int) -> float:
    """Population multiplier from city age in days. A city must be at least a day old."""
    _check_non_negative(city_age)
    if city_age == 0:
        raise ValueError("Invalid input: City age must be at least 1")
    return 1 + math.log(city_age) / 15


# =============================================================================
# Commerce and production
# =============================================================================


def building_bonus(current_buildings: int, max_buildings: int) -> float:
    """Linear bonus from 1.0 at one building up to 1.5 at the maximum."""
    return 1 + (0.5 / (max_buildings - 1)) * (current_buildings - 1)


def commerce(
    supermarkets: int,
    banks: int,
    shopping_malls: int,
    stadiums: int,
    subways: int,
    international_trade_center: bool = False,
    telecommunications_satellite: bool = False,
) -> int:
    """
    Commerce rate of a city, capped at 100.

    ITC raises the cap to 115 and adds 1; with a Telecommunications Satellite
    as well the cap is 125 and the bonus 3. The satellite alone does nothing.

    Raises:
        ValueError: On negative counts or more buildings than a city allows
            (4 supermarkets, 6 banks, 5 malls, 3 stadiums, 1 subway)
    """
    _check_non_negative(supermarkets, banks, shopping_malls, stadiums, subways)
    if supermarkets > 4 or banks > 6 or shopping_malls > 5 or stadiums > 3 or subways > 1:
        raise ValueError("Invalid input: One or more values exceed their limits")

    value = supermarkets * 15 + banks * 20 + shopping_malls * 25 + stadiums * 10 + subways * 15

    max_commerce = 100
    if international_trade_center:
        max_commerce = 125 if telecommunications_satellite else 115
        value += 3 if telecommunications_satellite else 1

    return min(max_commerce, value)


def food_production(
    farms: int,
    land: float,
    radiation: float,
    season: Season,
    mass_irrigation: bool = False,
    in_antarctica: bool = False,
) -> float:
    """
    Daily food production of a city.

    Args:
        farms: Number of farms
        land: City land
        radiation: Radiation modifier, see ``radiation_modifier``
        season: Current season of the city's continent
        mass_irrigation: Nation has Mass Irrigation (land per farm unit 400 instead of 500)
        in_antarctica: Antarctic cities produce half

    Returns:
        Food per day, never negative
    """
    _check_non_negative(farms, land, radiation)
    if season not in SEASON_MODIFIERS:
        raise ValueError(f"Invalid season: {season}")

    production = (
        land / (400 if mass_irrigation else 500)
        * farms
        * building_bonus(farms, 20)
        * SEASON_MODIFIERS[season]
        * (1 - radiation)
    )
    if in_antarctica:
        production *= 0.5

    return max(production, 0)


def radiation_modifier(
    continent_radiation: float,
    global_radiation: float,
    fallout_shelter: bool = False,
) -> float:
    """Food penalty from radiation, truncated to four decimals."""
    raw = (continent_radiation + global_radiation) / 1000 * (0.85 if fallout_shelter else 1)
    return math.floor(raw * 10_000) / 10_000


# =============================================================================
# Crime and disease
# =============================================================================


def police_modifier(police_stations: int, specialized_police_training_program: bool = False) -> float:
    _check_non_negative(police_stations)
    return police_stations * (3.5 if specialized_police_training_program else 2.5)


def crime_rate(commerce_rate: float, infrastructure: float, police: float) -> float:
    """Crime in percent; values below 0.1 count as zero."""
    _check_non_negative(commerce_rate, infrastructure, police)
    result = ((103 - commerce_rate) ** 2 + infrastructure * 100) / 111_111 - police
    return 0.0 if result < 0.1 else result


def crime_deaths(rate: float, infrastructure: float) -> float:
    _check_non_negative(rate, infrastructure)
    return max(rate / 10 * (infrastructure * 100) - 25, 0)


def hospital_modifier(hospitals: int, clinical_research_center: bool = False) -> float:
    _check_non_negative(hospitals)
    return hospitals * (3.5 if clinical_research_center else 2.5)


def pollution_modifier(pollution_index: float) -> float:
    _check_non_negative(pollution_index)
    return pollution_index * 0.05


def disease_rate(density: float, population: float, pollution: float, hospitals: float) -> float:
    """Disease in percent; values below 0.1 count as zero."""
    _check_non_negative(density, population, pollution, hospitals)
    result = (density ** 2 * 0.01 - 25) / 100 + population / 100_000 + pollution - hospitals
    return 0.0 if result < 0.1 else result


def disease_deaths(rate: float, population: float) -> float:
    _check_non_negative(rate, population)
    return rate * population
