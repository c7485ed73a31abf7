"""Room presets the calculator offers per industry, plus its starting inventory."""

from __future__ import annotations

from typing import Dict, List, Tuple

from .models import FacilityProfile, Industry, PorterLineItem, RoomLineItem

# (name, minutes per unit)
_PRESETS: Dict[Industry, Tuple[Tuple[str, int], ...]] = {
    Industry.EDUCATION: (
        ("Classroom", 15),
        ("Laboratory (Science/Computer)", 17),
        ("Library", 60),
        ("Cafeteria", 60),
        ("Gymnasium", 60),
        ("Auditorium", 60),
        ("Office (Admin/Principal)", 5),
        ("Staff Room", 15),
        ("Music Room", 15),
        ("Art Room", 17),
        ("Storage Room", 5),
        ("Restroom", 15),
        ("Locker Room", 20),
        ("Hallway", 20),
        ("Staircase", 15),
        ("Entryway/Lobby", 15),
        ("Nurse's Office", 7),
        ("Special Education Room", 15),
        ("Multipurpose Room", 15),
        ("Athletic Field", 60),
        ("Playground", 60),
        ("Parking Lot", 60),
        ("Outdoor Common Areas", 60),
        ("Conference Room", 15),
        ("Teacher's Lounge", 15),
        ("Counseling Office", 7),
        ("Janitorial Closet", 5),
        ("Mechanical Room", 5),
        ("IT Room", 10),
    ),
    Industry.OFFICE: (
        ("Private Office", 10),
        ("Conference Room", 20),
        ("Open Workspace", 30),
    ),
    Industry.MEDICAL: (
        ("Exam Room", 20),
        ("Waiting Area", 25),
        ("Lab", 30),
    ),
    Industry.RETAIL: (
        ("Sales Floor", 40),
        ("Stock Room", 20),
        ("Restroom", 15),
    ),
    Industry.WAREHOUSE: (
        ("Dock Area", 30),
        ("Office", 10),
        ("Restroom", 15),
    ),
    Industry.FITNESS: (
        ("Main Weight Floor", 45),
        ("Cardio Deck", 40),
        ("Locker Room (Men)", 60),
        ("Locker Room (Women)", 60),
        ("Yoga/Group Studio", 25),
        ("Pool Deck", 30),
    ),
    Industry.DAYCARE: (
        ("Infant Room", 40),
        ("Toddler Room", 35),
        ("Indoor Play Area", 45),
        ("Staff Lounge", 15),
        ("Restroom", 20),
    ),
    Industry.HOA: (
        ("Lobby", 30),
        ("Corridor", 20),
        ("Gym", 45),
    ),
    Industry.HOTEL: (
        ("Guest Room", 30),
        ("Lobby", 40),
        ("Public Restroom", 20),
    ),
    Industry.GOVERNMENT: (
        ("Public Office", 15),
        ("Waiting Room", 20),
        ("Restroom", 20),
    ),
    Industry.CHURCH: (
        ("Main Sanctuary", 60),
        ("Fellowship Hall", 45),
        ("Nursery/Childcare", 30),
        ("Classroom", 15),
        ("Restroom", 20),
        ("Vestibule/Lobby", 25),
    ),
}


def room_presets(industry: Industry) -> List[RoomLineItem]:
    """Preset room categories for ``industry``, each with a quantity of one."""
    return [RoomLineItem(name=name, quantity=1, minutes_per_unit=minutes) for name, minutes in _PRESETS.get(industry, ())]


def default_inventory() -> Tuple[FacilityProfile, List[RoomLineItem], List[PorterLineItem]]:
    """The facility the calculator opens with before the visitor edits anything."""
    profile = FacilityProfile(
        industry=Industry.EDUCATION.value,
        square_footage=15000,
        frequency_per_week=5,
        hotel_rooms=50,
        labor_hours_per_day=8,
        warehouse_scrubbing_sqft=5000,
    )
    rooms = [
        RoomLineItem("Classroom", 15, 15),
        RoomLineItem("Hallway/Corridor", 4, 30),
        RoomLineItem("Restroom", 6, 20),
    ]
    porters = [PorterLineItem("Day Porter", 1, 8)]
    return profile, rooms, porters
