"""Built-in MCEB Pub 7 reference data tables and override loading."""

from __future__ import annotations

import json
from functools import lru_cache
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from sfafkit.exceptions import ReferenceDataError
from sfafkit.logging import get_logger
from sfafkit.typing.models import ReferenceData

if TYPE_CHECKING:
    from pathlib import Path

    from sfafkit.settings import Settings

logger = get_logger(__name__)

MAJOR_FUNCTION_IDENTIFIERS: tuple[str, ...] = (
    "AIR OPERATIONS", "TACTICAL OPERATIONS", "TRAINING", "COMMUNICATIONS",
    "INTELLIGENCE", "MEDICAL", "LAW ENFORCEMENT", "RANGE OPERATIONS",
    "SUSTAINING OPERATIONS", "SPACE OPERATIONS", "EMERGENCY SERVICES",
    "COMMAND AND CONTROL", "DATA LINK", "SPECIAL OPERATIONS",
    "DOMESTIC SUPPORT OPERATIONS", "OTHER OPERATIONS",
)  # fmt: skip

# Annex G
FUNCTION_IDENTIFIERS: tuple[str, ...] = (
    # Air operations
    "AIR OPERATIONS", "FLIGHT OPERATIONS", "FLIGHT TEST", "FORWARD AIR CONTROL POST",
    "GCA", "PILOT-TO-DISPATCHER", "PILOT-TO-METRO", "PILOT-TO-PILOT", "RAMP CONTROL",
    "REFUELING", "SHIP/AIR OPERATIONS", "AIR DEFENSE", "AIR DEFENSE WARNING",
    "AIR DEFENSE / INTERCEPT", "AIR FORCE ONE", "AIR FORCE SPECIAL OPERATIONS",
    "AIR ROUTE SURVEILLANCE RADAR", "AIR TRAFFIC CONTROL", "AIR/AIR COMMUNICATIONS",
    "AIR/GROUND/AIR COMMUNICATIONS", "AIRBORNE COMMAND CENTER", "AIRCRAFT",
    "AIRPORT SURVEILLANCE RADAR", "APPROACH CONTROL", "ARMY AVIATION",
    # Training
    "TRAINING", "INSTRUCTOR/STUDENT TRAINING", "EXERCISE", "EXPERIMENTAL",
    "SIMULATOR", "AERO CLUB", "EDUCATION",
    # Tactical operations
    "TACTICAL OPERATIONS", "GROUND OPERATIONS", "SEA OPERATIONS", "SPECIAL OPERATIONS",
    "PSYCHOLOGICAL OPERATIONS", "FIRE SUPPORT", "INFANTRY", "GROUND INTERDICTION",
    "ARTILLERY", "MISSILE", "SPECIAL FORCES", "RANGER UNITS", "NAVY SPECIAL OPERATIONS",
    "NAVAL GUNFIRE SUPPORT", "TARGET ACQUISITION", "TARGET SCORING", "TARGET",
    # Administrative
    "ADMINISTRATIVE", "INSTALLATION PA SYSTEM", "MOTOR POOL", "PAGING",
    "BROADCAST", "TRAVELERS INFORMATION SYSTEM", "UNLICENSED DEVICE",
    "WIRELESS LOCAL AREA NETWORK", "WIRELESS MIKE", "BASE OPERATIONS",
    "COMMAND NET", "TRUNKING", "HICOM", "MOMS",
    # Logistics
    "LOGISTICS", "MAINTENANCE", "MUNITIONS", "POL", "RESUPPLY",
    "INVENTORY/INVENTORY CONTROLS", "SUPPLY AND LOGISTICS", "SHIPYARD",
    "TRANSPORTATION", "TAXI", "AMPS", "CSSCS", "MTS", "RF TAGS",
    # Communications
    "COMMUNICATIONS", "SATELLITE COMMUNICATIONS", "RADIO RELAY", "MICROWAVE",
    "MILSTAR", "FLTSATCOM", "GLOBAL", "MARS", "AFSATCOM", "DSCS", "LEASAT",
    "SPITFIRE", "TROJAN SPIRIT", "MSE", "TACTS", "IONOSPHERIC SOUNDER",
    "ISYSCON", "GCCS", "MICROWAVE DATA LINK",
    # Intelligence
    "INTELLIGENCE", "SURVEILLANCE", "RECONNAISSANCE", "SURVEILLANCE/RECONNAISSANCE",
    "ACS", "AHFEWS", "ARL", "TRACKWOLF", "TRAILBLAZER", "TEAMMATE",
    # Medical
    "MEDICAL", "SEARCH AND RESCUE",
    # Security and law enforcement
    "LAW ENFORCEMENT", "SECURITY FORCE", "MILITARY POLICE", "SHORE PATROL",
    "FIRE", "HAZMAT", "CID", "DIS", "NCIS", "OSI", "SCOPE SHIELD",
    "SPEED MEASUREMENT SYSTEMS", "SURVEILLANCE SYSTEMS", "TETHERED AEROSTAT RADAR",
    "WEAPONS STORAGE PROTECTION", "ALARM SYSTEMS", "DISASTER PLANNING", "EOD",
    "ANTI-TERRORISM", "CIVIL DISTURBANCES", "COUNTER DRUG", "PROJECT COTHEN",
    "SPECIAL SECURITY OPERATIONS",
    # Range operations
    "RANGE OPERATIONS", "RANGE CONTROL", "RDTE SUPPORT", "TEST AND MEASUREMENT",
    "TEST RANGE TIMING", "TEST RANGE", "RDMS", "OCCS SUPPORT",
    # Sustaining operations
    "SUSTAINING OPERATIONS", "FLEET SUPPORT", "PUBLIC WORKS", "NATURAL RESOURCES",
    "RESOURCES CONSERVATION", "SAFETY", "LOCKS AND DAMS", "HYDROLOGIC",
    "METEOROLOGICAL", "SEISMIC", "NAVAIDS", "NAVIGATION RADAR", "CIVIL ENGINEERING",
    "CIVIL WORKS", "CONSTRUCTION", "INDUSTRIAL CONTROLS", "PRIME BEEF", "RED HORSE",
    "SEABEES", "UTILITIES", "WILDLIFE PRESERVATION", "NAVAIDS CONTROLS",
    "REMOTE BARRIER CONTROL SYSTEMS", "RUNWAY LIGHTING CONTROL",
    # Space operations
    "SPACE OPERATIONS", "GPS", "SHUTTLE", "NASA", "SGLS", "ARTS", "TELEMETRY",
    "TELECOMMAND", "UAV",
    # Emergency services
    "EMERGENCY SERVICES", "WARNING SYSTEM", "CONSEQUENCE MANAGEMENT", "CBR",
    "CIVIL SUPPORT TEAM", "ENVIRONMENTAL CLEANUP", "FEMA", "HAZARDOUS MATERIAL RELEASE",
    "TECHNICAL ESCORT UNIT", "MUTUAL AID",
    # Weather
    "WEATHER", "WEATHER RADAR", "WIND PROFILER", "AMSS", "ASOS", "AWOS", "GOES",
    "IMETS", "NEXRAD", "SAWDS",
    # Command and control
    "COMMAND AND CONTROL", "A2C2S", "NAOC", "MYSTIC STAR", "WHCA",
    # Data links
    "DATA LINK", "JTIDS/MIDS", "TADIL-A", "TADIL-C", "A-EPLRS", "AFATDS",
    "TACCS", "NTDR", "MITT/DTES", "SCAMP",
    # Special systems
    "AEGIS", "PATRIOT", "MLRS", "SENTINEL", "PAVE PAWS", "OTHR/ROTHR",
    "THUNDERBIRDS", "STRIKER II", "AQF", "TACJAM", "NORAD",
    # Global operations
    "WORLDWIDE", "CONUS", "NATO", "OTHER OPERATIONS", "SPECIAL PROJECTS",
    "HAARP", "SURVEY", "DTSS", "ETRAC", "DOMESTIC SUPPORT OPERATIONS",
)  # fmt: skip

# Annex D
EQUIPMENT_MANUFACTURERS: dict[str, str] = {
    "AAI": "AAI Corp.",
    "ABB": "ABB Power T&D Co.",
    "ACS": "ACS Defense, Inc.",
    "ADC": "ADC Telecommunications",
    "AEL": "American Electronic Labs",
    "AIL": "AIL Systems",
    "AMP": "AMP Inc.",
    "ANT": "Antenna Technology Corp.",
    "ARC": "ARC Electronics",
    "ATI": "ATI Inc.",
    "BAE": "BAE Systems",
    "BOE": "Boeing Co.",
    "CAM": "Cameron Corp.",
    "CBN": "Caribbean Communications",
    "COL": "Collins Radio Co.",
    "EFJ": "EF Johnson Co.",
    "GEC": "GEC Marconi",
    "GEN": "General Dynamics",
    "HAR": "Harris Corp.",
    "HP": "Hewlett Packard",
    "IBM": "IBM Corp.",
    "ITT": "ITT Corp.",
    "LOC": "Lockheed Martin",
    "MOT": "Motorola",
    "NEC": "NEC Corp.",
    "RAY": "Raytheon",
    "ROC": "Rockwell International",
    "TBL": "Trimble Navigation",
    "TBN": "Tayburn",
    "TCC": "Telcom Communications",
    "TCD": "Techdyn Systems Corp.",
    "TCE": "Telecommunications Corp.",
    "TCH": "Techcomm",
    "TCI": "Tel Com Industries",
    "TCL": "Trio Communications, Ltd.",
    "TCM": "TCOM Industries, Inc.",
    "TCN": "Technos International Corp.",
    "TEK": "Tektronix",
    "TRW": "TRW Inc.",
    "WES": "Westinghouse Electric",
}

# Annex C
GEOGRAPHIC_REGIONS: dict[str, dict[str, Any]] = {
    "A": {
        "description": "Northeast US",
        "locations": (
            "CHESAPEAKE BAY", "CONNECTICUT", "DELAWARE", "DISTRICT OF COLUMBIA", "FIRST NAV DISTRICT",
            "LAKE ONTARIO", "MAINE", "MARYLAND", "MASSACHUSETTS", "NAV DIST WASH DC", "NEW HAMPSHIRE",
            "NEW JERSEY", "NEW YORK", "PENNSYLVANIA", "RHODE ISLAND", "THIRD NAV DISTRICT", "VERMONT",
            "VIRGINIA", "WEST VIRGINIA",
        ),
    },
    "B": {
        "description": "Great Lakes Region",
        "locations": (
            "GREAT LAKES", "ILLINOIS", "INDIANA", "IOWA", "KENTUCKY", "LAKE ERIE", "LAKE SUPERIOR",
            "LAKE HURON", "LAKE MICHIGAN", "MICHIGAN", "MINNESOTA", "MISSOURI", "OHIO", "WISCONSIN",
        ),
    },
    "C": {
        "description": "Southeast US",
        "locations": (
            "ALABAMA", "FLORIDA", "GEORGIA", "MISSISSIPPI", "NORTH CAROLINA", "SIXTH NAV DISTRICT",
            "SOUTH CAROLINA", "TENNESSEE",
        ),
    },
    "D": {
        "description": "Rocky Mountain/Plains",
        "locations": (
            "COLORADO", "IDAHO", "KANSAS", "MONTANA", "NEBRASKA", "NORTH DAKOTA", "RCKY MTN RGN. CAP 7",
            "SOUTH DAKOTA", "UTAH", "WYOMING",
        ),
    },
    "E": {
        "description": "South Central US",
        "locations": (
            "ARIZONA", "ARKANSAS", "EIGHTH NAV DIST", "LOUISIANA", "NEW MEXICO", "OKLAHOMA",
            "SW REGION CAP 6", "TEXAS",
        ),
    },
    "F": {
        "description": "Pacific US",
        "locations": ("CALIFORNIA", "NEVADA", "OREGON", "PAC REGION CAP 8", "WASHINGTON"),
    },
    "G": {"description": "Alaska (mainland)", "locations": ("ALASKA", "PACIFIC OCEAN NE")},
    "H": {
        "description": "Pacific Ocean/Hawaii/Alaska Aleutians",
        "locations": (
            "ALASKA ALEUTIAN IS", "BERING SEA", "FOURTEENTH NAV DIS", "HAWAII", "JOHNSTON ISLAND",
            "MIDWAY ISLAND", "PACIFIC OCEAN NW",
        ),
    },
    "J": {
        "description": "Canada/Greenland/Iceland",
        "locations": ("ATLANTIC OCEAN NW", "AZORES", "CANADA", "GREENLAND", "ICELAND", "JAN MAYEN"),
    },
    "K": {
        "description": "Caribbean/Central America",
        "locations": (
            "BAHAMAS", "BERMUDA", "CARIBBEAN", "CUBA", "DOMINICAN REPUBLIC", "GULF OF MEXICO",
            "HAITI REPUBLIC", "JAMAICA", "PUERTO RICO", "VIRGIN ISLANDS",
        ),
    },
    "L": {
        "description": "South America/Antarctica",
        "locations": (
            "ANTARTICA", "ARGENTINE REPUBLIC", "BOLIVIA", "BRAZIL", "CHILE (EX EASTER I)",
            "COLUMBIA REPUBLIC", "MEXICO", "SOUTH AMERICA", "VENEZUELA REPUBLIC",
        ),
    },
    "M": {
        "description": "Northern Europe/Scandinavia",
        "locations": ("BALTIC SEA", "FINLAND", "NORWAY", "NORWEGIAN SEA", "SPITSBERGEN", "SWEDEN"),
    },
    "N": {
        "description": "Western/Central Europe",
        "locations": (
            "AUSTRIA", "BELGIUM", "DENMARK", "ENGLAND CHANNEL", "EUROPE", "FRANCE", "GERMANY", "ITALY",
            "NETHERLANDS KINGDM", "SPAIN", "SWITZERLAND CONFED", "UK GREAT BRITAIN",
        ),
    },
    "O": {
        "description": "Eastern Europe",
        "locations": (
            "ALBANIA REPUBLIC", "BULGARIA PEO REPUB", "CZECHOSLOVAKIA", "HUNGARIAN REPUBLIC",
            "POLAND PEO REPUBLI", "ROUMANIA SOCLT REP",
        ),
    },
    "P": {
        "description": "Africa/Middle East",
        "locations": (
            "AFRICA", "ALGERIA", "EGYPT ARAB REPUBLI", "ISRAEL (STATE OF)", "LEBANON", "LIBYA ARAB REPUBL",
            "MOROCCO (KINGDOM OF)", "NIGERIA (REPUBLIC OF)", "SO AFRICA REPUBLIC", "SYRIAN ARAB REP.",
        ),
    },
}  # fmt: skip

IRAC_NOTES: dict[str, str] = {
    "C002": "Western Area Frequency Coordinator coordination required",
    "C004": "Eastern Area Frequency Coordinator coordination required",
    "C006": "White Sands Missile Range coordination required",
    "C008": "Arizona Area Frequency Coordinator coordination required",
    "C010": "Gulf Area Frequency Coordinator coordination required",
    "C012": "Pacific Joint Frequency Management Office coordination required",
    "C019": "Army Frequency Management Office coordination required",
    "C045": "Subject to coordination with FAA prior to use.",
    "C060": "Military installation commander coordination required",
    "C065": (
        "Subject to coordination, prior to use, with the Department of the Interior, Bureau of Land "
        "Management, National Interagency Fire Center, Boise, Idaho."
    ),
    "C067": (
        "Subject to coordination with the Area Frequency Coordinator located at Nellis AFB, Nevada, "
        "prior to use in the states of Nevada, Utah west of 111W and Idaho south of 44N."
    ),
    "E028": "Lower sideband transmission authorized",
    "E029": "Upper sideband transmission authorized",
    "E035": "Lower sideband transmission",
    "E036": "Upper sideband transmission",
    "L012": "Emergency use only - life/safety/property protection",
    "L116": "Daytime use only",
    "L131": "Nighttime use only",
    "L174": "Army communications only",
    "L180": "Coast Guard communications only",
    "L187": "Military communications only",
    "L190": "Navy communications only",
    "L282": "Back-up use only when regular channels disrupted",
    "S063": "Search and rescue communications",
    "S142": "Drone control operations",
    "S148": "National emergency communications",
    "US1": "Coordinate with NTIA",
    "US2": "Coordinate with FCC",
    "US3": "Coordinate with affected agencies",
    "US7": "Coordinate use of this frequency",
    "US8": "Coordination required for power above threshold",
    "US15": "Coordinate before use in these areas",
    "US25": "Coordinate frequency assignment",
    "US27": "Use requires coordination",
    "US30": "Coordinate interference cases",
    "US42": "Coordinate for emergency use only",
    "US60": "Federal use requires coordination",
    "US74": "Coordinate all applications",
    "US84": "Use limited to coordination",
}


def _time_code_group(number: str, description: str, usage: str, qualifier: str) -> dict[str, Any]:
    return {
        "description": description,
        "usage": usage,
        "sub_codes": {
            f"{number}H24": f"24 hours per day{qualifier}",
            f"{number}HX": f"Variable hours{qualifier}",
            f"{number}HN": f"Nighttime hours{qualifier}",
            f"{number}HJ": f"Daylight hours{qualifier}",
            f"{number}HT": f"Twilight hours{qualifier}",
        },
    }


TIME_CODES: dict[str, dict[str, Any]] = {
    "1": _time_code_group("1", "Regular Service", "Operates continuously, daily, on a regular basis", ""),
    "2": _time_code_group(
        "2",
        "Workweek Service",
        "Operates continuously during normal working hours and days",
        ", workweek only",
    ),
    "3": _time_code_group(
        "3",
        "Occasional Service",
        "Operates on an irregular, intermittent, or as-needed basis",
        ", occasional use",
    ),
    "4": _time_code_group(
        "4",
        "Occasional Workweek Service",
        "Operates occasionally during normal working hours and days",
        ", occasional workweek",
    ),
}

POWER_TYPES: dict[str, dict[str, str]] = {
    "C": {
        "description": "Carrier Power",
        "usage": 'Use for "N0N" and for "A3E" sound broadcasting service (Station Class "BC")',
    },
    "M": {
        "description": "Mean Power",
        "usage": "Air to air and air/ground/air; most unkeyed full-carrier AM and all FM emissions",
    },
    "P": {
        "description": "Peak Envelope Power",
        "usage": "All pulsed equipment, C3F television and single-sideband classes",
    },
}

# Annex A/B
STATION_CLASSES: tuple[str, ...] = (
    "FB", "FB2", "FB3", "FB8", "FX", "FX1",
    "ML", "MA", "MO", "MP", "MR", "MS", "MT",
    "BC", "BT",
    "AC", "AD", "AF", "AG", "AL", "AR", "AS", "AT",
    "CG", "CP", "CS", "CT",
    "HA",
    "XE", "XF", "XM", "XR", "XT",
)  # fmt: skip

STATE_CODES: tuple[str, ...] = (
    "AL", "AK", "AZ", "AR", "CA", "CO", "CT", "DE", "FL", "GA",
    "HI", "ID", "IL", "IN", "IA", "KS", "KY", "LA", "ME", "MD",
    "MA", "MI", "MN", "MS", "MO", "MT", "NE", "NV", "NH", "NJ",
    "NM", "NY", "NC", "ND", "OH", "OK", "OR", "PA", "RI", "SC",
    "SD", "TN", "TX", "UT", "VT", "VA", "WA", "WV", "WI", "WY",
    "DC", "PR", "VI", "GUM", "SMA", "MRA", "MDW", "PLM", "WAK", "JON",
    "CAN", "MEX", "USA", "GBR", "FRA", "DEU", "JPN", "AUS",
)  # fmt: skip


def default_reference_data() -> ReferenceData:
    """Return the built-in reference data tables."""
    return ReferenceData(
        function_identifiers=FUNCTION_IDENTIFIERS,
        major_function_identifiers=MAJOR_FUNCTION_IDENTIFIERS,
        equipment_manufacturers=EQUIPMENT_MANUFACTURERS,
        geographic_regions=GEOGRAPHIC_REGIONS,
        irac_notes=IRAC_NOTES,
        time_codes=TIME_CODES,
        power_types=POWER_TYPES,
        station_classes=STATION_CLASSES,
        state_codes=STATE_CODES,
    )


def load_reference_data(path: Path) -> ReferenceData:
    """Load reference data, overriding built-in tables with those found in a JSON file.

    Top-level keys name the table to replace (`irac_notes`, `station_classes`, ...);
    tables absent from the file keep their built-in content.

    Args:
        path (Path): JSON override file.

    Raises:
        ReferenceDataError: If the file cannot be read, is not a JSON object, or
            holds an unknown or malformed table.

    Returns:
        ReferenceData: Merged reference data.
    """
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise ReferenceDataError(message=f"Cannot read reference data file {path}", exc=exc) from exc

    if not isinstance(payload, dict):
        raise ReferenceDataError(message=f"Reference data file {path} must contain a JSON object")

    base = default_reference_data().model_dump()
    try:
        merged = ReferenceData.model_validate({**base, **payload})
    except ValidationError as exc:
        raise ReferenceDataError(message=f"Invalid reference data in {path}", exc=exc) from exc

    logger.info("Reference data overrides loaded", extra={"path": str(path), "tables": sorted(payload)})
    return merged


@lru_cache(maxsize=4)
def _cached_reference_data(path: Path | None) -> ReferenceData:
    if path is None:
        return default_reference_data()
    return load_reference_data(path)


def get_reference_data(settings: Settings | None = None) -> ReferenceData:
    """Return process-wide reference data, honoring `SFAF_REFERENCE_DATA_PATH`.

    Args:
        settings (Settings | None): Runtime settings; built-in tables are used when omitted.

    Returns:
        ReferenceData: Cached reference data.
    """
    path = settings.reference_data_path if settings else None
    return _cached_reference_data(path)
