from typing import AbstractSet, Dict, Mapping


def filter_by_membership(
    catalog: Mapping[str, str], membership: AbstractSet[str], hide_non_members: bool
) -> Dict[str, str]:
    """Keep dictionary members when hide_non_members is set, otherwise only non-members."""
    if hide_non_members:
        return {code: label for code, label in catalog.items() if code in membership}
    return {code: label for code, label in catalog.items() if code not in membership}
