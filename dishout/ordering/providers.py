from __future__ import annotations

DELIVERY_PROVIDERS: dict[str, list[str]] = {
    "UAE": ["Talabat", "Deliveroo", "Noon Food", "Careem", "Zomato", "Self Pickup"],
    "Saudi Arabia": ["HungerStation", "Jahez", "ToYou", "Mrsool", "Talabat", "Self Pickup"],
    "Kuwait": ["Talabat", "Deliveroo", "Careem", "Cari", "Self Pickup"],
    "Qatar": ["Talabat", "Snoonu", "Deliveroo", "Rafeeq", "Self Pickup"],
    "Bahrain": ["Talabat", "Ahlan", "Jahez", "Self Pickup"],
    "Oman": ["Talabat", "TM DONE", "Self Pickup"],
    "USA": ["DoorDash", "Uber Eats", "Grubhub", "Postmates", "Seamless", "Caviar", "Self Pickup"],
    "Europe": ["Just Eat", "Deliveroo", "Uber Eats", "Wolt", "Glovo", "Bolt Food", "Self Pickup"],
    "Asia": ["GrabFood", "Foodpanda", "GoFood", "Swiggy", "Zomato", "Baemin", "Self Pickup"],
}


def providers_for(region: str) -> list[str]:
    """Return the delivery providers offered in ``region``; raises KeyError if unknown."""
    return list(DELIVERY_PROVIDERS[region])


def is_known_provider(provider: str) -> bool:
    return any(provider in names for names in DELIVERY_PROVIDERS.values())
