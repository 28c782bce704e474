"""
Environmental Impact Estimate

Linear, presentation-oriented estimates derived from window totals. They are
deterministic (same totals, same numbers) rather than scientifically exact.

Bases:
- recyclable weight = dry + e-waste kg (CO2, energy, water)
- diverted weight   = dry + wet + e-waste kg (landfill)
"""

from app.models.analytics.AnalyticsResponse import CategoryBreakdown, ImpactEstimate
from app.api.analytics_utils.totals import round_half_up

CO2_KG_PER_RECYCLED_KG = 0.7
CO2_KG_PER_TREE_YEAR = 21  # one tree absorbs ~21kg CO2 per year
ENERGY_KWH_PER_RECYCLED_KG = 2.5
HOME_KWH_PER_DAY = 30
WATER_LITERS_PER_RECYCLED_KG = 50
SHOWER_LITERS = 65
LANDFILL_FACTOR = 0.5
GARBAGE_BAG_KG = 5


def recyclable_weight(totals: CategoryBreakdown) -> float:
    return totals.dry.weight_kg + totals.ewaste.weight_kg


def diverted_weight(totals: CategoryBreakdown) -> float:
    return totals.dry.weight_kg + totals.wet.weight_kg + totals.ewaste.weight_kg


def impact_of(totals: CategoryBreakdown) -> ImpactEstimate:
    recyclable = recyclable_weight(totals)
    diverted = diverted_weight(totals)

    co2_saved = recyclable * CO2_KG_PER_RECYCLED_KG
    energy_saved = recyclable * ENERGY_KWH_PER_RECYCLED_KG
    # water uses recyclable weight, same basis as CO2 and energy
    water_saved = round_half_up(recyclable * WATER_LITERS_PER_RECYCLED_KG)
    landfill_diverted = round_half_up(diverted * LANDFILL_FACTOR)

    return ImpactEstimate(
        recyclable_weight_kg=recyclable,
        diverted_weight_kg=diverted,
        co2_saved_kg=co2_saved,
        trees_equivalent=round_half_up(co2_saved / CO2_KG_PER_TREE_YEAR),
        energy_saved_kwh=energy_saved,
        home_days_equivalent=round_half_up(energy_saved / HOME_KWH_PER_DAY),
        water_saved_liters=water_saved,
        showers_equivalent=round_half_up(water_saved / SHOWER_LITERS),
        landfill_diverted_kg=landfill_diverted,
        garbage_bags_equivalent=round_half_up(landfill_diverted / GARBAGE_BAG_KG),
    )
