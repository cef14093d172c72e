"""
Normalization of raw Perenual records into presentation models.

Perenual records are sparse: any field may be missing, ``null``, an
empty string or an empty list, and some fields arrive either as a
scalar or as a list.  The helpers here collapse all of those shapes
into one presence rule so that templates never need ad-hoc checks.
All functions are pure.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Union

from .schemas import Attribute, PlantSummary, PlantView


UNNAMED_PLANT = "Unnamed plant"
UNKNOWN_SCIENTIFIC_NAME = "Unknown scientific name"
DEFAULT_SUBJECT = "This plant"
DEFAULT_PRUNING_FREQUENCY = "regularly"


def has_value(value: Any) -> bool:
    """Return ``False`` for ``None``, blank strings and empty sequences."""
    if value is None:
        return False
    if isinstance(value, str):
        return value.strip() != ""
    if isinstance(value, (list, tuple)):
        return len(value) > 0
    return True


def first_or_scalar(value: Any, fallback: str) -> str:
    """Resolve a scalar-or-list field to one display string.

    The first present element is used when a list is given, the value
    itself when it is a present scalar, and ``fallback`` otherwise.
    """
    if isinstance(value, (list, tuple)):
        for item in value:
            if has_value(item):
                return str(item)
        return fallback
    if has_value(value):
        return str(value)
    return fallback


def _text(value: Any) -> Attribute:
    if not has_value(value) or isinstance(value, (dict, list, tuple)):
        return Attribute.absent()
    return Attribute.of(str(value))


def _entries(value: Any) -> List[str]:
    if isinstance(value, (list, tuple)):
        return [str(v) for v in value if has_value(v) and not isinstance(v, (dict, list))]
    if has_value(value) and not isinstance(value, dict):
        return [str(value)]
    return []


def _listing(value: Any) -> Attribute:
    items = _entries(value)
    if not items:
        return Attribute.absent()
    return Attribute.of(", ".join(items), items)


def _flag(value: Any) -> bool:
    """Flags are set by the number ``1`` only; ``True`` and ``"1"`` do not count."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return value == 1


def _identifier(value: Any) -> Union[int, str, None]:
    if value is None or (isinstance(value, (int, str)) and not isinstance(value, bool)):
        return value
    return str(value)


def _image(raw: Mapping[str, Any], key: str) -> Attribute:
    image = raw.get("default_image")
    if not isinstance(image, dict):
        return Attribute.absent()
    return _text(image.get(key))


def _hardiness(value: Any) -> Attribute:
    if not isinstance(value, dict):
        return Attribute.absent()
    low, high = value.get("min"), value.get("max")
    if not (has_value(low) and has_value(high)):
        return Attribute.absent()
    return Attribute.of(f"{low}-{high}")


def _dimension(raw: Mapping[str, Any]) -> Attribute:
    value = raw.get("dimension")
    if not has_value(value):
        value = raw.get("dimensions")
    # Newer records describe size as {"min_value", "max_value", "unit"}
    if isinstance(value, (list, tuple)):
        value = next((v for v in value if isinstance(v, dict)), None)
    if isinstance(value, dict):
        low, high = value.get("min_value"), value.get("max_value")
        unit = value.get("unit") if has_value(value.get("unit")) else ""
        if has_value(low) and has_value(high):
            size = f"{low}-{high}" if low != high else f"{low}"
        elif has_value(low) or has_value(high):
            size = f"{low if has_value(low) else high}"
        else:
            return Attribute.absent()
        return Attribute.of(f"{size} {unit}".strip())
    return _text(value)


def _pruning_frequency(value: Any) -> str:
    if isinstance(value, (list, tuple)):
        value = value[0] if value else None
    if isinstance(value, dict):
        amount, interval = value.get("amount"), value.get("interval")
        if has_value(amount) and has_value(interval):
            return f"{amount} {interval}"
    return DEFAULT_PRUNING_FREQUENCY


def summarize_plant(raw: Mapping[str, Any]) -> PlantSummary:
    """Map one species-list entry to a ``PlantSummary``."""
    thumbnail = _image(raw, "thumbnail")
    return PlantSummary(
        id=_identifier(raw.get("id")),
        common_name=first_or_scalar(raw.get("common_name"), UNNAMED_PLANT),
        scientific_name=first_or_scalar(raw.get("scientific_name"), UNKNOWN_SCIENTIFIC_NAME),
        thumbnail_url=thumbnail.value,
    )


def normalize_plant(raw: Optional[Mapping[str, Any]]) -> Optional[PlantView]:
    """Build the detail view model of a raw species record.

    Returns ``None`` for an empty or missing record, which the detail
    page reports as "not found" rather than as an error.
    """
    if not raw:
        return None

    common_name = first_or_scalar(raw.get("common_name"), UNNAMED_PLANT)
    subject = common_name if has_value(raw.get("common_name")) else DEFAULT_SUBJECT

    watering = _text(raw.get("watering"))
    sunlight = _listing(raw.get("sunlight"))
    pruning_months = _listing(raw.get("pruning_month"))
    pruning_frequency = _pruning_frequency(raw.get("pruning_count"))

    notes: Dict[str, Attribute] = {
        "watering_note": Attribute.absent(),
        "sunlight_note": Attribute.absent(),
        "pruning_note": Attribute.absent(),
    }
    if watering.present:
        notes["watering_note"] = Attribute.of(
            f"{subject} should be watered {watering.value.lower()}."
        )
    if sunlight.present:
        notes["sunlight_note"] = Attribute.of(
            f"{subject} requires {sunlight.value.lower()} sunlight."
        )
    if pruning_months.present:
        notes["pruning_note"] = Attribute.of(
            f"{subject} should be pruned {pruning_frequency}, "
            f"ideally in {pruning_months.value}."
        )

    return PlantView(
        id=_identifier(raw.get("id")),
        common_name=common_name,
        scientific_name=first_or_scalar(raw.get("scientific_name"), UNKNOWN_SCIENTIFIC_NAME),
        image_url=_image(raw, "original_url"),
        thumbnail_url=_image(raw, "thumbnail"),
        description=_text(raw.get("description")),
        cycle=_text(raw.get("cycle")),
        hardiness=_hardiness(raw.get("hardiness")),
        growth_rate=_text(raw.get("growth_rate")),
        watering=watering,
        # The header tag only shows the first sunlight entry
        sunlight=Attribute.of(sunlight.items[0], sunlight.items) if sunlight.present else sunlight,
        care_level=_text(raw.get("care_level")),
        type=_text(raw.get("type")),
        dimension=_dimension(raw),
        attracts=_listing(raw.get("attracts")),
        propagation=_listing(raw.get("propagation")),
        pruning_months=pruning_months,
        pruning_frequency=pruning_frequency,
        soil=_listing(raw.get("soil")),
        pest_susceptibility=_listing(raw.get("pest_susceptibility")),
        disease_susceptibility=_listing(raw.get("disease_susceptibility")),
        poisonous_to_humans=_flag(raw.get("poisonous_to_humans")),
        poisonous_to_pets=_flag(raw.get("poisonous_to_pets")),
        edible_leaf=_flag(raw.get("edible_leaf")),
        edible_fruit=_flag(raw.get("edible_fruit")),
        **notes,
    )
