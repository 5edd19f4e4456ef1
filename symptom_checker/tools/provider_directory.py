"""Provider directory.

Static mock records standing in for a real provider search. The directory
does not check availability; the booking step trusts whatever slot the user
picks.
"""

from typing import List, Optional
from symptom_checker.models.provider import Provider


MOCK_PROVIDERS: List[Provider] = [
    Provider(
        id="1",
        name="Dr. Sarah Johnson",
        specialty="Internal Medicine",
        rating=4.8,
        distance="0.8 mi",
        address="123 Health St, Medical District",
        phone="(555) 123-4567",
        available_slots=["9:00 AM", "11:30 AM", "2:00 PM", "4:30 PM"],
    ),
    Provider(
        id="2",
        name="Dr. Michael Chen",
        specialty="Emergency Medicine",
        rating=4.9,
        distance="1.2 mi",
        address="456 Care Ave, Downtown",
        phone="(555) 987-6543",
        available_slots=["10:00 AM", "1:00 PM", "3:30 PM", "5:00 PM"],
    ),
    Provider(
        id="3",
        name="Dr. Emily Rodriguez",
        specialty="Family Medicine",
        rating=4.7,
        distance="2.1 mi",
        address="789 Wellness Blvd, Suburb",
        phone="(555) 456-7890",
        available_slots=["8:30 AM", "12:00 PM", "2:30 PM", "4:00 PM"],
    ),
]


def list_providers(specialty: Optional[str] = None) -> List[Provider]:
    """
    List providers, optionally filtered by specialty.

    Args:
        specialty: Case-insensitive substring of the specialty

    Returns:
        Providers in directory order
    """
    if not specialty:
        return list(MOCK_PROVIDERS)
    wanted = specialty.lower()
    return [p for p in MOCK_PROVIDERS if wanted in p.specialty.lower()]


def get_provider(provider_id: str) -> Optional[Provider]:
    """Look up a provider by id."""
    for provider in MOCK_PROVIDERS:
        if provider.id == provider_id:
            return provider
    return None
