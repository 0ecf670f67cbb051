"""Display lookup tables.

Maps feed identifiers (session kinds, constructor ids, circuit ids) to
display metadata. Every lookup degrades to a deterministic default for
unknown keys; none of them raise.
"""

import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)

DEFAULT_TEAM_COLOR = "#808080"

SESSION_LABELS: dict[str, str] = {
    "fp1": "Practice 1",
    "fp2": "Practice 2",
    "fp3": "Practice 3",
    "sprintQualifying": "Sprint Quali",
    "sprint": "Sprint",
    "qualifying": "Qualifying",
    "race": "Race",
}


@dataclass(frozen=True)
class TeamInfo:
    color: str
    shorthand: str
    name: str


TEAM_INFO: dict[str, TeamInfo] = {
    "red_bull": TeamInfo("#3671C6", "RBR", "Red Bull"),
    "mercedes": TeamInfo("#27F4D2", "MER", "Mercedes"),
    "ferrari": TeamInfo("#E80020", "FER", "Ferrari"),
    "mclaren": TeamInfo("#FF8000", "MCL", "McLaren"),
    "aston_martin": TeamInfo("#229971", "AST", "Aston Martin"),
    "alpine": TeamInfo("#00A1E8", "ALP", "Alpine"),
    "williams": TeamInfo("#005AFF", "WIL", "Williams"),
    "rb": TeamInfo("#6692FF", "RB", "Racing Bulls"),
    "sauber": TeamInfo("#52E252", "SAU", "Sauber"),
    "haas": TeamInfo("#B6BABD", "HAA", "Haas"),
}

# Circuit id -> ISO 3166 alpha-3 flag image code
FLAG_CODES: dict[str, str] = {
    "albert_park": "AUS",
    "shanghai": "CHN",
    "suzuka": "JPN",
    "bahrain": "BHR",
    "jeddah": "SAU",
    "miami": "USA",
    "imola": "ITA",
    "monaco": "MCO",
    "catalunya": "ESP",
    "villeneuve": "CAN",
    "red_bull_ring": "AUT",
    "silverstone": "GBR",
    "spa": "BEL",
    "hungaroring": "HUN",
    "zandvoort": "NLD",
    "monza": "ITA",
    "baku": "AZE",
    "marina_bay": "SGP",
    "americas": "USA",
    "rodriguez": "MEX",
    "interlagos": "BRA",
    "vegas": "USA",
    "losail": "QAT",
    "yas_marina": "ARE",
}


class Lookup:
    """Label, colour and flag lookups with fallbacks.

    Tables can be overridden per instance (e.g. a new season's team list)
    without touching the module defaults.
    """

    def __init__(
        self,
        session_labels: dict[str, str] | None = None,
        team_info: dict[str, TeamInfo] | None = None,
        flag_codes: dict[str, str] | None = None,
    ):
        self._session_labels = session_labels if session_labels is not None else SESSION_LABELS
        self._team_info = team_info if team_info is not None else TEAM_INFO
        self._flag_codes = flag_codes if flag_codes is not None else FLAG_CODES
        self._warned: set[str] = set()

    def session_label(self, key: str) -> str:
        """Human label for a session kind; unknown kinds are upper-cased."""
        return self._session_labels.get(key) or key.upper()

    def _team(self, constructor_id: str) -> TeamInfo | None:
        info = self._team_info.get(constructor_id.lower())
        if info is None and constructor_id not in self._warned:
            self._warned.add(constructor_id)
            logger.warning("[LOOKUP] Missing team info for %s", constructor_id)
        return info

    def team_color(self, constructor_id: str) -> str:
        info = self._team(constructor_id)
        return info.color if info else DEFAULT_TEAM_COLOR

    def team_shorthand(self, constructor_id: str) -> str:
        info = self._team(constructor_id)
        return info.shorthand if info else constructor_id.upper()

    def team_name(self, constructor_id: str) -> str:
        info = self._team(constructor_id)
        return info.name if info else constructor_id

    def flag_code(self, circuit_id: str | None) -> str | None:
        if not circuit_id:
            return None
        return self._flag_codes.get(circuit_id)


default_lookup = Lookup()
