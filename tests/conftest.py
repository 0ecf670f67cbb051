"""Shared fixtures: in-memory cache store, scripted feed source, fixed clock."""

from datetime import UTC, datetime

import pytest

from paddock.core import FixedClock, MalformedPayload, NetworkFailure
from paddock.database import db_factory_for, init_db

# Thursday 17 April 2025, noon UTC - the Saudi Arabian GP weekend is next
NOW = datetime(2025, 4, 17, 12, 0, tzinfo=UTC)


class MemoryCacheStore:
    """CacheStore fake. Writes are stamped with the shared clock."""

    def __init__(self, clock: FixedClock):
        self._clock = clock
        self._data: dict[str, tuple[bytes, datetime]] = {}
        self.writes = 0

    def seed(self, slot: str, data: bytes, written_at: datetime) -> None:
        self._data[slot] = (data, written_at)

    def exists(self, slot: str) -> bool:
        return slot in self._data

    def read(self, slot: str) -> bytes | None:
        entry = self._data.get(slot)
        return entry[0] if entry else None

    def write(self, slot: str, data: bytes) -> None:
        self.writes += 1
        self._data[slot] = (data, self._clock.now())

    def last_modified(self, slot: str) -> datetime | None:
        entry = self._data.get(slot)
        return entry[1] if entry else None

    def delete(self, slot: str) -> bool:
        return self._data.pop(slot, None) is not None

    def slots(self) -> list[str]:
        return sorted(self._data)


class ScriptedSource:
    """FeedSource fake returning canned payloads or raising canned errors."""

    def __init__(self, responses: dict | None = None):
        self.responses = responses or {}
        self.calls: list[str] = []

    def fetch(self, resource: str) -> dict:
        self.calls.append(resource)
        response = self.responses.get(resource)
        if response is None:
            raise NetworkFailure(f"No route to {resource}")
        if isinstance(response, Exception):
            raise response
        return response


def race(round_number: int, name: str, circuit_id: str, location: str, **sessions) -> dict:
    return {
        "round": round_number,
        "name": name,
        "location": location,
        "circuitId": circuit_id,
        "sessions": sessions,
    }


SCHEDULE_PAYLOAD = {
    "races": [
        race(
            4,
            "FORMULA 1 GULF AIR BAHRAIN GRAND PRIX 2025: Bahrain Grand Prix 2025",
            "bahrain",
            "Sakhir",
            fp1="2025-04-11T11:30:00Z",
            fp2="2025-04-11T15:00:00Z",
            fp3="2025-04-12T12:30:00Z",
            qualifying="2025-04-12T16:00:00Z",
            race="2025-04-13T15:00:00Z",
        ),
        race(
            5,
            "FORMULA 1 STC SAUDI ARABIAN GRAND PRIX 2025: Saudi Arabian Grand Prix 2025",
            "jeddah",
            "Jeddah",
            fp1="2025-04-18T13:30:00Z",
            fp2="2025-04-18T17:00:00Z",
            fp3="2025-04-19T13:30:00Z",
            qualifying="2025-04-19T17:00:00Z",
            race="2025-04-20T17:00:00Z",
        ),
        race(
            6,
            "FORMULA 1 CRYPTO.COM MIAMI GRAND PRIX 2025: Miami Grand Prix 2025",
            "miami",
            "Miami",
            fp1="2025-05-02T16:30:00Z",
            sprintQualifying="2025-05-02T20:30:00Z",
            sprint="2025-05-03T16:00:00Z",
            qualifying="2025-05-03T20:00:00Z",
            race="2025-05-04T20:00:00Z",
        ),
    ]
}


def driver_entry(position, points, code, given, family, constructor_id):
    return {
        "position": str(position),
        "points": str(points),
        "Driver": {"code": code, "givenName": given, "familyName": family},
        "Constructors": [{"constructorId": constructor_id}],
    }


DRIVER_STANDINGS_PAYLOAD = {
    "MRData": {
        "StandingsTable": {
            "season": "2025",
            "round": "4",
            "StandingsLists": [
                {
                    "DriverStandings": [
                        driver_entry(1, 77, "PIA", "Oscar", "Piastri", "mclaren"),
                        driver_entry(2, 74, "NOR", "Lando", "Norris", "mclaren"),
                        driver_entry(3, 69, "VER", "Max", "Verstappen", "red_bull"),
                        driver_entry(4, 57, "RUS", "George", "Russell", "mercedes"),
                        driver_entry(5, 32, "LEC", "Charles", "Leclerc", "ferrari"),
                        driver_entry(6, 30, "ANT", "Andrea Kimi", "Antonelli", "mercedes"),
                        driver_entry(7, 15.5, "OCO", "Esteban", "Ocon", "haas"),
                    ]
                }
            ],
        }
    }
}


def constructor_entry(position, points, constructor_id, name):
    return {
        "position": str(position),
        "points": str(points),
        "Constructor": {"constructorId": constructor_id, "name": name},
    }


CONSTRUCTOR_STANDINGS_PAYLOAD = {
    "MRData": {
        "StandingsTable": {
            "season": "2025",
            "round": "4",
            "StandingsLists": [
                {
                    "ConstructorStandings": [
                        constructor_entry(1, 151, "mclaren", "McLaren"),
                        constructor_entry(2, 93, "mercedes", "Mercedes"),
                        constructor_entry(3, 71, "red_bull", "Red Bull"),
                        constructor_entry(4, 57, "ferrari", "Ferrari"),
                        constructor_entry(5, 20, "haas", "Haas F1 Team"),
                        constructor_entry(6, 14, "williams", "Williams"),
                        constructor_entry(7, 10, "aston_martin", "Aston Martin"),
                        constructor_entry(8, 8, "rb", "RB F1 Team"),
                        constructor_entry(9, 6, "alpine", "Alpine F1 Team"),
                        constructor_entry(10, 0, "sauber", "Sauber"),
                        constructor_entry(11, 0, "cadillac", "Cadillac"),
                    ]
                }
            ],
        }
    }
}


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(NOW)


@pytest.fixture
def store(clock) -> MemoryCacheStore:
    return MemoryCacheStore(clock)


@pytest.fixture
def db_factory(tmp_path):
    path = tmp_path / "paddock.db"
    init_db(path)
    return db_factory_for(path)


@pytest.fixture
def malformed() -> MalformedPayload:
    return MalformedPayload("bad body")
