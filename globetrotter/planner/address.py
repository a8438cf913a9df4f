from typing import Optional, Tuple

UNKNOWN_COUNTRY = "Unknown"


def derive_city(name: str, formatted_address: Optional[str]) -> Tuple[str, str]:
    """Guess (city, country) from a provider address such as
    "Place, City, State, Country".

    The last segment is the country; the third from last is the city, falling
    back to the first segment. Addresses with fewer than two segments keep the
    place name and an unknown country.
    """
    parts = [part.strip() for part in (formatted_address or "").split(",")]
    if len(parts) < 2:
        return name, UNKNOWN_COUNTRY

    country = parts[-1] or UNKNOWN_COUNTRY
    if len(parts) >= 3:
        city = parts[-3] or parts[0]
    else:
        city = parts[0]
    return city or name, country
