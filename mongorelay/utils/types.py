from typing import Any

# Type aliases for better clarity
FilterSpec = dict[str, Any]
SortSpec = list[tuple[str, int]]
Pipeline = list[dict[str, Any]]
Projection = dict[str, int]


def merge_filters(
    base: FilterSpec | None = None,
    override: FilterSpec | None = None,
    **kwargs: Any
) -> FilterSpec:
    """Merge filter dictionaries. Later arguments win on key collisions.

    Args:
        base: Base filter dict
        override: Filter dict applied over base
        **kwargs: Field equality conditions (highest precedence)

    Returns:
        Merged filter dictionary
    """
    return {**(base or {}), **(override or {}), **kwargs}
