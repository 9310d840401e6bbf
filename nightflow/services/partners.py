# nightflow/services/partners.py
"""Partner split editing.

The house partner (``settings.HOUSE_PARTNER_NAME``) is special: editing its
percentage redistributes what is left among the other partners, keeping their
relative ratios. Editing any other row only touches that row; keeping the
total at 100 is checked at submission time (``validate_split``).

Every function returns a new list and leaves its input untouched.
"""
from __future__ import annotations

import logging
import math
import re
from typing import Any, List, Optional, Sequence

from nightflow.core.config import settings
from nightflow.core.errors import HousePartnerLockedError, InvalidPartnerSplitError
from nightflow.schemas.partner import Partner

logger = logging.getLogger(__name__)

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def house_name() -> str:
    return settings.HOUSE_PARTNER_NAME


def is_house(partner: Partner) -> bool:
    return partner.name == house_name()


def parse_percentage(value: Any) -> int:
    """Coerce a raw form value to an integer percentage; anything unparseable is 0."""
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else 0
    m = _LEADING_INT.match(str(value))
    return int(m.group(1)) if m else 0


def clamp_percentage(value: int) -> int:
    return max(0, min(100, value))


def _round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def _copy(partners: Sequence[Partner]) -> List[Partner]:
    return [p.model_copy() for p in partners]


def split_total(partners: Sequence[Partner]) -> int:
    return sum(p.percentage for p in partners)


def find_house(partners: Sequence[Partner]) -> Optional[int]:
    for i, p in enumerate(partners):
        if is_house(p):
            return i
    return None


def set_house_percentage(partners: Sequence[Partner], value: Any) -> List[Partner]:
    p = clamp_percentage(parse_percentage(value))
    updated = _copy(partners)

    idx = find_house(updated)
    if idx is None:
        updated.append(Partner(name=house_name(), percentage=p))
    else:
        updated[idx] = updated[idx].model_copy(update={"percentage": p})

    remaining = 100 - p
    others = [i for i, partner in enumerate(updated) if not is_house(partner)]
    total_others = sum(updated[i].percentage for i in others)
    # nothing to scale against: the remainder is left undistributed
    if total_others > 0:
        for i in others:
            scaled = _round_half_up(updated[i].percentage * remaining / total_others)
            updated[i] = updated[i].model_copy(update={"percentage": scaled})

    logger.debug("house share set to %s, split now %s", p, [(x.name, x.percentage) for x in updated])
    return updated


def rebalance(partners: Sequence[Partner], edited_name: str, new_percentage: Any) -> List[Partner]:
    if edited_name == house_name():
        return set_house_percentage(partners, new_percentage)

    updated = _copy(partners)
    for i, partner in enumerate(updated):
        if partner.name == edited_name:
            updated[i] = partner.model_copy(update={"percentage": parse_percentage(new_percentage)})
            break
    return updated


def update_partner(partners: Sequence[Partner], index: int, field: str, value: Any) -> List[Partner]:
    """Row edit in manual mode: only the edited row changes."""
    updated = _copy(partners)
    current = updated[index]
    if field == "name":
        new_name = "" if value is None else str(value)
        if is_house(current) and new_name != current.name:
            raise HousePartnerLockedError(current.name)
        if new_name == house_name() and not is_house(current):
            raise HousePartnerLockedError(house_name())
        updated[index] = current.model_copy(update={"name": new_name})
    elif field == "percentage":
        updated[index] = current.model_copy(update={"percentage": parse_percentage(value)})
    else:
        raise ValueError(f"unknown partner field: {field}")
    return updated


def add_partner(partners: Sequence[Partner], name: str = "") -> List[Partner]:
    updated = _copy(partners)
    updated.append(Partner(name=name, percentage=max(0, 100 - split_total(partners))))
    return updated


def remove_partner(partners: Sequence[Partner], index: int) -> List[Partner]:
    if is_house(partners[index]):
        raise HousePartnerLockedError(partners[index].name)
    return [p.model_copy() for i, p in enumerate(partners) if i != index]


def sync_house_partner(partners: Sequence[Partner], rumba_percentage: int) -> List[Partner]:
    """Make the house row mirror the event-level share (inserted first when missing)."""
    updated = _copy(partners)
    idx = find_house(updated)
    if idx is None:
        updated.insert(0, Partner(name=house_name(), percentage=rumba_percentage))
    else:
        updated[idx] = updated[idx].model_copy(update={"percentage": rumba_percentage})
    return updated


def validate_split(partners: Sequence[Partner]) -> int:
    total = split_total(partners)
    if total != 100:
        raise InvalidPartnerSplitError(total)
    return total
