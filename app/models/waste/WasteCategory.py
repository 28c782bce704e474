import enum


class WasteCategory(str, enum.Enum):
    DRY = "dry"
    WET = "wet"
    EWASTE = "ewaste"
    HAZARDOUS = "hazardous"


class WeightUnit(str, enum.Enum):
    KG = "kg"
    G = "g"


# closed set used by the aggregator to skip legacy rows
CATEGORY_KEYS = tuple(category.value for category in WasteCategory)
