import re
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import List, Sequence, Tuple

from ..exceptions import FieldError

_SLOT_RE = re.compile(r"^(\d{2}):(\d{2})-(\d{2}):(\d{2})$")


@dataclass(frozen=True)
class TimeSlot:
    """A recurring daily window such as ``09:00-10:00``.

    An ``end`` of midnight (``time.min``) means the end of the day, written
    ``24:00`` in labels.
    """

    start: time
    end: time

    @property
    def ends_at_midnight(self) -> bool:
        return self.end == time.min

    @property
    def label(self) -> str:
        end = "24:00" if self.ends_at_midnight else f"{self.end:%H:%M}"
        return f"{self.start:%H:%M}-{end}"

    def on(self, day: date) -> Tuple[datetime, datetime]:
        end = datetime.combine(day, self.end)
        if self.ends_at_midnight:
            end += timedelta(days=1)
        return datetime.combine(day, self.start), end

    def contains(self, start: datetime, end: datetime) -> bool:
        """True when ``[start, end)`` lies inside this slot on ``start``'s day."""
        slot_start, slot_end = self.on(start.date())
        return slot_start <= start and end <= slot_end


def parse_slot(label: str) -> TimeSlot:
    match = _SLOT_RE.match(label.strip()) if isinstance(label, str) else None
    if not match:
        raise ValueError(f"'{label}' is not a HH:MM-HH:MM time slot")
    h1, m1, h2, m2 = (int(g) for g in match.groups())
    try:
        start = time(h1, m1)
        end = time.min if (h2, m2) == (24, 0) else time(h2, m2)
    except ValueError:
        raise ValueError(f"'{label}' contains an invalid clock time")
    slot = TimeSlot(start, end)
    # end of day is spelled 24:00; a written 00:00 end never follows its start
    if (h2, m2) == (0, 0) or (not slot.ends_at_midnight and start >= end):
        raise ValueError(f"'{label}' must start before it ends")
    return slot


def validate_slots(labels: Sequence[str]) -> Tuple[List[TimeSlot], List[FieldError]]:
    slots: List[TimeSlot] = []
    errors: List[FieldError] = []
    seen = set()
    for label in labels:
        try:
            slot = parse_slot(label)
        except ValueError as e:
            errors.append(FieldError("available_times", str(e)))
            continue
        if slot.label in seen:
            errors.append(FieldError("available_times", f"'{slot.label}' is listed more than once"))
            continue
        seen.add(slot.label)
        slots.append(slot)
    return slots, errors


def slot_contains(slot: TimeSlot, start: datetime, end: datetime) -> bool:
    return slot.contains(start, end)
