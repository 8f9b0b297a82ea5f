"""Static lookup tables for the risk heuristics and country matching.

Tables are tuples evaluated in order; the first matching entry wins where a
lookup stops at the first hit. The boxes and centers are coarse
approximations, not building-code or census data.
"""

from __future__ import annotations

from types import MappingProxyType

from quake_monitor.models import BuildingCodeRegion, PopulationCenter

ADVANCED_CODE_REGIONS: tuple[BuildingCodeRegion, ...] = (
    BuildingCodeRegion("Japan", 30.0, 46.0, 129.0, 146.0),
    BuildingCodeRegion("California", 32.0, 42.0, -125.0, -114.0),
    BuildingCodeRegion("New Zealand", -47.5, -34.0, 166.0, 179.0),
    BuildingCodeRegion("Pacific Northwest", 42.0, 49.0, -125.0, -116.0),
)

MODERATE_CODE_REGIONS: tuple[BuildingCodeRegion, ...] = (
    BuildingCodeRegion("Taiwan", 21.5, 25.5, 119.5, 122.5),
    BuildingCodeRegion("Chile", -56.0, -17.5, -76.0, -66.0),
    BuildingCodeRegion("Italy", 36.0, 47.0, 6.0, 19.0),
    BuildingCodeRegion("Greece", 34.5, 42.0, 19.0, 28.5),
    BuildingCodeRegion("Turkey", 36.0, 42.5, 26.0, 45.0),
    BuildingCodeRegion("Mexico", 14.5, 32.5, -117.5, -86.5),
)

VARIABLE_CODE_REGIONS: tuple[BuildingCodeRegion, ...] = (
    BuildingCodeRegion("Nepal and Northern India", 26.0, 31.0, 80.0, 89.0),
    BuildingCodeRegion("Myanmar", 9.5, 28.5, 92.0, 98.5),
    BuildingCodeRegion("Indonesia", -11.0, 6.0, 95.0, 141.0),
    BuildingCodeRegion("Philippines", 4.5, 21.0, 116.5, 127.0),
    BuildingCodeRegion("Iran", 25.0, 40.0, 44.0, 63.5),
    BuildingCodeRegion("Pakistan and Afghanistan", 24.0, 38.5, 60.5, 75.5),
    BuildingCodeRegion("Haiti", 18.0, 20.1, -74.5, -71.6),
    BuildingCodeRegion("Peru and Ecuador", -18.5, 1.5, -81.5, -75.0),
)

# Checked in this order; multiplier applied to the magnitude-based base value.
BUILDING_CODE_TIERS: tuple[tuple[tuple[BuildingCodeRegion, ...], float], ...] = (
    (ADVANCED_CODE_REGIONS, 0.7),
    (MODERATE_CODE_REGIONS, 1.0),
    (VARIABLE_CODE_REGIONS, 1.3),
)

DEFAULT_POPULATION_DENSITY = 40.0
POPULATION_FALLOFF_DEG = 2.0
POPULATION_FALLOFF_PER_DEG = 15.0

POPULATION_CENTERS: tuple[PopulationCenter, ...] = (
    PopulationCenter("Tokyo", 35.6762, 139.6503, 0.5, 85),
    PopulationCenter("Osaka", 34.6937, 135.5023, 0.4, 80),
    PopulationCenter("Seoul", 37.5665, 126.9780, 0.4, 85),
    PopulationCenter("Taipei", 25.0330, 121.5654, 0.3, 80),
    PopulationCenter("Manila", 14.5995, 120.9842, 0.4, 90),
    PopulationCenter("Jakarta", -6.2088, 106.8456, 0.5, 90),
    PopulationCenter("Bangkok", 13.7563, 100.5018, 0.5, 80),
    PopulationCenter("Yangon", 16.8409, 96.1735, 0.3, 70),
    PopulationCenter("Dhaka", 23.8103, 90.4125, 0.4, 95),
    PopulationCenter("Kathmandu", 27.7172, 85.3240, 0.2, 70),
    PopulationCenter("Delhi", 28.7041, 77.1025, 0.5, 90),
    PopulationCenter("Mumbai", 19.0760, 72.8777, 0.5, 90),
    PopulationCenter("Karachi", 24.8607, 67.0011, 0.4, 85),
    PopulationCenter("Tehran", 35.6892, 51.3890, 0.4, 80),
    PopulationCenter("Istanbul", 41.0082, 28.9784, 0.5, 85),
    PopulationCenter("Athens", 37.9838, 23.7275, 0.3, 70),
    PopulationCenter("Rome", 41.9028, 12.4964, 0.3, 70),
    PopulationCenter("Los Angeles", 34.0522, -118.2437, 0.6, 75),
    PopulationCenter("San Francisco", 37.7749, -122.4194, 0.4, 75),
    PopulationCenter("New York", 40.7128, -74.0060, 0.5, 80),
    PopulationCenter("Mexico City", 19.4326, -99.1332, 0.5, 75),
    PopulationCenter("Lima", -12.0464, -77.0428, 0.4, 75),
    PopulationCenter("Santiago", -33.4489, -70.6693, 0.4, 70),
)

# Place descriptions rarely spell out the full country name.
COUNTRY_ALIASES: MappingProxyType[str, tuple[str, ...]] = MappingProxyType({
    "united states": ("usa", "us", "america", "united states of america"),
    "united kingdom": ("uk", "great britain", "england", "scotland", "wales"),
    "thailand": ("thai", "siam", "ไทย"),
    "myanmar": ("burma", "เมียนมา", "พม่า"),
    "laos": ("lao", "ลาว"),
    "cambodia": ("กัมพูชา",),
    "vietnam": ("viet nam", "เวียดนาม"),
    "malaysia": ("มาเลเซีย",),
    "indonesia": ("อินโดนีเซีย",),
    "philippines": ("philippine", "ฟิลิปปินส์"),
    "china": ("จีน",),
    "india": ("อินเดีย",),
    "bangladesh": ("บังกลาเทศ",),
    "nepal": ("เนปาล",),
    "taiwan": ("ไต้หวัน",),
    "japan": ("ญี่ปุ่น",),
    "east timor": ("timor-leste", "timor leste"),
    "papua new guinea": ("png",),
})
