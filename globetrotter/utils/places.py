from typing import Any, Dict, List


def sort_by_rating(places: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Highest rating first; a missing rating counts as 0."""
    return sorted(places, key=lambda place: place.get("rating") or 0, reverse=True)


def group_by_type(places: List[Dict[str, Any]]) -> Dict[str, List[Dict[str, Any]]]:
    grouped: Dict[str, List[Dict[str, Any]]] = {}
    for place in places:
        types = place.get("types") or ["other"]
        grouped.setdefault(types[0], []).append(place)
    return grouped
