"""Event-type taxonomy and magnitude codes for the NOAA Storm Data.

The raw ``EVTYPE`` column is free text typed in by forecast offices over
six decades, close to a thousand spellings of roughly 48 real things
("TSTM WIND", "THUNDERSTORM WINDS", "FLOOD/FLASH FLOOD", ...).  This
module owns the fixed list of 48 canonical labels from NWS Directive
10-1605 and maps any raw label onto it by nearest Levenshtein distance.

It also owns the one-letter magnitude codes used by the damage columns
(``PROPDMGEXP`` / ``CROPDMGEXP``).

Both tables are process-wide constants: a tuple and a read-only mapping.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from types import MappingProxyType

import numpy as np
import pandas as pd
from rapidfuzz import process
from rapidfuzz.distance import Levenshtein


# ── The 48 canonical event types (order matters: it breaks ties) ──
CANONICAL_EVENT_TYPES: tuple[str, ...] = (
    "Astronomical Low Tide",
    "Avalanche",
    "Blizzard",
    "Coastal Flood",
    "Cold/Wind Chill",
    "Debris Flow",
    "Dense Fog",
    "Dense Smoke",
    "Drought",
    "Dust Devil",
    "Dust Storm",
    "Excessive Heat",
    "Extreme Cold/Wind Chill",
    "Flash Flood",
    "Flood",
    "Frost/Freeze",
    "Funnel Cloud",
    "Freezing Fog",
    "Hail",
    "Heat",
    "Heavy Rain",
    "Heavy Snow",
    "High Surf",
    "High Wind",
    "Hurricane (Typhoon)",
    "Ice Storm",
    "Lake-Effect Snow",
    "Lakeshore Flood",
    "Lightning",
    "Marine Hail",
    "Marine High Wind",
    "Marine Strong Wind",
    "Marine Thunderstorm Wind",
    "Rip Current",
    "Seiche",
    "Sleet",
    "Storm Surge/Tide",
    "Strong Wind",
    "Thunderstorm Wind",
    "Tornado",
    "Tropical Depression",
    "Tropical Storm",
    "Tsunami",
    "Volcanic Ash",
    "Waterspout",
    "Wildfire",
    "Winter Storm",
    "Winter Weather",
)

# ── Exponent codes for damage mantissas, e.g. 2.5 + "M" → 2.5e6 ──
MAGNITUDE_EXPONENTS: MappingProxyType[str, int] = MappingProxyType(
    {
        "H": 2,
        "K": 3,
        "M": 6,
        "B": 9,
    }
)


def decode_magnitude(code: object) -> int:
    """Return the power-of-ten exponent for a damage magnitude code.

    Case-insensitive.  Anything that is not H/K/M/B (blanks, NaN,
    digits, "+", "?") decodes to 0, i.e. the mantissa is taken to be
    in dollars already.

    Examples:
        "K" → 3
        "m" → 6
        ""  → 0
        NaN → 0
    """
    if code is None or (isinstance(code, float) and np.isnan(code)):
        return 0
    return MAGNITUDE_EXPONENTS.get(str(code).strip().upper(), 0)


def _preprocess_label(label: str) -> str:
    """Apply the textual clean-up that precedes distance matching.

    1. "FLOOD/FLASH FLOOD" → "FLOOD"  (first alternative wins)
    2. "TSTM" → "THUNDERSTORM"        (first occurrence only)
    3. Capitalise the first letter of each space-separated word and
       lower-case the rest ("DON'T" → "Don't"), to match the casing
       of the canonical labels
    """
    text = label.split("/", 1)[0]
    text = text.replace("TSTM", "THUNDERSTORM", 1)
    return " ".join(word.capitalize() for word in text.split(" "))


def normalize_event_types(
    labels: Iterable[object],
    canonical: Sequence[str] = CANONICAL_EVENT_TYPES,
) -> list[str]:
    """Map raw event-type labels to canonical labels, one per input.

    Only the distinct labels are matched (the raw data has ~900
    distinct spellings across ~900K rows) and the result is expanded
    back to the input order.

    Each label goes to the canonical label with the smallest
    Levenshtein distance; on a tie the one listed first in
    ``canonical`` wins.  There is no similarity cut-off, so garbage
    input still lands on *some* label.

    Args:
        labels: Raw labels.  Non-strings (e.g. NaN) are matched as
            their ``str()`` form.
        canonical: The target label set, in tie-break order.

    Returns:
        List of canonical labels, same length and order as ``labels``.

    Raises:
        ValueError: If ``canonical`` is empty.
    """
    if len(canonical) == 0:
        raise ValueError("Canonical event type set is empty; nothing to match against")

    raw = [str(label) for label in labels]
    distinct = list(dict.fromkeys(raw))
    if not distinct:
        return []

    prepared = [_preprocess_label(label) for label in distinct]
    distances = process.cdist(prepared, list(canonical), scorer=Levenshtein.distance)
    # argmin returns the first minimum → enumeration-order tie-break
    best = np.argmin(distances, axis=1)

    mapping = {label: canonical[idx] for label, idx in zip(distinct, best)}
    return [mapping[label] for label in raw]


def normalize_event_type(label: object) -> str:
    """Map a single raw event-type label to its canonical label."""
    return normalize_event_types([label])[0]


def event_type_dtype() -> pd.CategoricalDtype:
    """Ordered categorical dtype over the canonical labels."""
    return pd.CategoricalDtype(categories=list(CANONICAL_EVENT_TYPES), ordered=True)
