"""Static catalogue of pilgrimage destinations offered as trip starting points."""
from __future__ import annotations

from typing import List, Optional

from smart_trip.core.schemas import PilgrimagePlace

_CHAR_DHAM_SEASON = "May to June and September to October"

PILGRIMAGE_PLACES: List[PilgrimagePlace] = [
    PilgrimagePlace(
        id="yamunotri",
        name="Yamunotri Temple",
        location="Uttarkashi, Uttarakhand",
        religion="Hindu",
        description="Sacred temple dedicated to Goddess Yamuna and the source of River Yamuna",
        lat=31.0140,
        lng=78.4600,
        significance="First stop of the Char Dham Yatra and an important site for seeking blessings of Goddess Yamuna",
        best_time_to_visit=_CHAR_DHAM_SEASON,
    ),
    PilgrimagePlace(
        id="gangotri",
        name="Gangotri Temple",
        location="Uttarkashi, Uttarakhand",
        religion="Hindu",
        description="Sacred shrine dedicated to Goddess Ganga, origin point of the River Ganges",
        lat=30.9947,
        lng=78.9398,
        significance="Second stop of the Char Dham Yatra and sacred source of the holy River Ganga",
        best_time_to_visit=_CHAR_DHAM_SEASON,
    ),
    PilgrimagePlace(
        id="kedarnath",
        name="Kedarnath Temple",
        location="Rudraprayag, Uttarakhand",
        religion="Hindu",
        description="Ancient temple dedicated to Lord Shiva and one of the twelve Jyotirlingas",
        image="/kedarnath.jpeg",
        lat=30.7352,
        lng=79.0669,
        significance="One of the holiest Shiva temples and a major pilgrimage site in the Himalayas",
        best_time_to_visit=_CHAR_DHAM_SEASON,
    ),
    PilgrimagePlace(
        id="badrinath",
        name="Badrinath Temple",
        location="Chamoli, Uttarakhand",
        religion="Hindu",
        description="Sacred temple dedicated to Lord Vishnu in his form as Badrinarayan",
        lat=30.7433,
        lng=79.4938,
        significance="Final stop of the Char Dham Yatra and one of the most important Vaishnav pilgrimage sites in India",
        best_time_to_visit=_CHAR_DHAM_SEASON,
    ),
    PilgrimagePlace(
        id="varanasi",
        name="Kashi Vishwanath Temple",
        location="Varanasi, Uttar Pradesh",
        religion="Hindu",
        description="One of the twelve Jyotirlingas, the most sacred Shiva temple",
        lat=25.3176,
        lng=82.9739,
        significance="Holiest of Hindu pilgrimage sites on the banks of Ganges",
        best_time_to_visit="October to March",
    ),
    PilgrimagePlace(
        id="tirupati",
        name="Tirumala Venkateswara Temple",
        location="Tirupati, Andhra Pradesh",
        religion="Hindu",
        description="Richest and most visited temple dedicated to Lord Venkateswara",
        lat=13.6833,
        lng=79.3472,
        significance="Abode of Lord Venkateswara, believed to grant wishes",
        best_time_to_visit="September to February",
    ),
    PilgrimagePlace(
        id="golden-temple",
        name="Harmandir Sahib (Golden Temple)",
        location="Amritsar, Punjab",
        religion="Sikh",
        description="The most sacred Gurdwara of Sikhism",
        lat=31.6200,
        lng=74.8765,
        significance="Spiritual and cultural center of Sikhism",
        best_time_to_visit="November to March",
    ),
    PilgrimagePlace(
        id="bodh-gaya",
        name="Mahabodhi Temple",
        location="Bodh Gaya, Bihar",
        religion="Buddhist",
        description="Place where Buddha attained enlightenment",
        lat=24.6958,
        lng=84.9910,
        significance="Most sacred site in Buddhism, UNESCO World Heritage",
        best_time_to_visit="October to March",
    ),
    PilgrimagePlace(
        id="ajmer-sharif",
        name="Ajmer Sharif Dargah",
        location="Ajmer, Rajasthan",
        religion="Muslim",
        description="Sufi shrine of Moinuddin Chishti",
        lat=26.4499,
        lng=74.6399,
        significance="One of the holiest Islamic shrines in India",
        best_time_to_visit="October to March",
    ),
    PilgrimagePlace(
        id="jagannath-puri",
        name="Jagannath Temple",
        location="Puri, Odisha",
        religion="Hindu",
        description="Famous for the annual Rath Yatra festival",
        lat=19.8135,
        lng=85.8312,
        significance="Part of Char Dham, dedicated to Lord Jagannath",
        best_time_to_visit="October to March",
    ),
    PilgrimagePlace(
        id="rameshwaram",
        name="Ramanathaswamy Temple",
        location="Rameswaram, Tamil Nadu",
        religion="Hindu",
        description="One of the twelve Jyotirlinga temples",
        lat=9.2876,
        lng=79.3129,
        significance="Part of Char Dham, where Lord Rama worshipped Shiva",
        best_time_to_visit="October to April",
    ),
    PilgrimagePlace(
        id="dwarka",
        name="Dwarkadhish Temple",
        location="Dwarka, Gujarat",
        religion="Hindu",
        description="Ancient Krishna temple, part of Char Dham",
        lat=22.2442,
        lng=68.9685,
        significance="Kingdom of Lord Krishna",
        best_time_to_visit="October to March",
    ),
    PilgrimagePlace(
        id="velankanni",
        name="Basilica of Our Lady of Good Health",
        location="Velankanni, Tamil Nadu",
        religion="Christian",
        description="Major Catholic pilgrimage site",
        lat=10.6833,
        lng=79.8500,
        significance="Miracles attributed to Virgin Mary",
        best_time_to_visit="August to September",
    ),
    PilgrimagePlace(
        id="hemkund-sahib",
        name="Hemkund Sahib",
        location="Chamoli, Uttarakhand",
        religion="Sikh",
        description="High altitude Sikh pilgrimage site",
        lat=30.7268,
        lng=79.7325,
        significance="Where Guru Gobind Singh meditated",
        best_time_to_visit="June to October",
    ),
]


def places_by_religion(religion: Optional[str] = None) -> List[PilgrimagePlace]:
    """All places, or only those of ``religion`` (case-insensitive)."""

    if not religion or religion.lower() == "all":
        return list(PILGRIMAGE_PLACES)
    return [place for place in PILGRIMAGE_PLACES if place.religion.lower() == religion.lower()]


def all_religions() -> List[str]:
    """Religions present in the catalogue, in first-seen order."""

    return list(dict.fromkeys(place.religion for place in PILGRIMAGE_PLACES))
