"""
Gazetteer of Vaktija.ba locations. The list position is the provider's location id.
"""
import logging
from typing import Optional

from .errors import LocationNotFound

logger = logging.getLogger(__name__)

VAKTIJA_LOCATIONS = (
    "Banovići", "Banja Luka", "Bihać", "Bijeljina", "Bileća", "Bosanski Brod", "Bosanska Dubica",
    "Bosanska Gradiška", "Bosansko Grahovo", "Bosanska Krupa", "Bosanski Novi", "Bosanski Petrovac",
    "Bosanski Šamac", "Bratunac", "Brčko", "Breza", "Bugojno", "Busovača", "Bužim", "Cazin", "Čajniče",
    "Čapljina", "Čelić", "Čelinac", "Čitluk", "Derventa", "Doboj", "Donji Vakuf", "Drvar", "Foča",
    "Fojnica", "Gacko", "Glamoč", "Goražde", "Gornji Vakuf", "Gračanica", "Gradačac", "Grude",
    "Hadžići", "Han-Pijesak", "Hlivno", "Ilijaš", "Jablanica", "Jajce", "Kakanj", "Kalesija",
    "Kalinovik", "Kiseljak", "Kladanj", "Ključ", "Konjic", "Kotor-Varoš", "Kreševo", "Kupres",
    "Laktaši", "Lopare", "Lukavac", "Ljubinje", "Ljubuški", "Maglaj", "Modriča", "Mostar",
    "Mrkonjić-Grad", "Neum", "Nevesinje", "Novi Travnik", "Odžak", "Olovo", "Orašje", "Pale",
    "Posušje", "Prijedor", "Prnjavor", "Prozor", "Rogatica", "Rudo", "Sanski Most", "Sarajevo",
    "Skender-Vakuf", "Sokolac", "Srbac", "Srebrenica", "Srebrenik", "Stolac", "Šekovići", "Šipovo",
    "Široki Brijeg", "Teslić", "Tešanj", "Tomislav-Grad", "Travnik", "Trebinje", "Trnovo", "Tuzla",
    "Ugljevik", "Vareš", "Velika Kladuša", "Visoko", "Višegrad", "Vitez", "Vlasenica", "Zavidovići",
    "Zenica", "Zvornik", "Žepa", "Žepče", "Živinice", "Bijelo Polje", "Gusinje", "Nova Varoš",
    "Novi Pazar", "Plav", "Pljevlja", "Priboj", "Prijepolje", "Rožaje", "Sjenica", "Tutin",
)


def get_location_id(city: str) -> Optional[int]:
    """Return the gazetteer index for a free-text place name, or None.

    Exact case-insensitive match first; otherwise the first entry (in list order)
    that contains the input or is contained in it. The second pass is a heuristic:
    "Novi Pazar, Srbija" finds "Novi Pazar", but an ambiguous input simply gets
    whichever entry comes first. Blank input returns None instead of matching
    the first entry (an empty string is a substring of every name).
    """
    normalized = city.strip().lower()
    if not normalized:
        return None

    for index, name in enumerate(VAKTIJA_LOCATIONS):
        if name.lower() == normalized:
            return index

    for index, name in enumerate(VAKTIJA_LOCATIONS):
        lowered = name.lower()
        if normalized in lowered or lowered in normalized:
            logger.debug(f"Location {city!r} matched {name!r} by substring")
            return index

    return None


def resolve_location_id(city: str) -> int:
    """Like get_location_id() but raises LocationNotFound on a miss."""
    location_id = get_location_id(city)
    if location_id is None:
        raise LocationNotFound(city)
    return location_id


def location_name(location_id: int) -> str:
    return VAKTIJA_LOCATIONS[location_id]
