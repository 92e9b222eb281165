# backend/venuebook/services/slots/calculator.py
"""
Candidate slot grid for one open interval.

Slot [t, t + duration) for t = open, open + interval, ...
while t + duration <= close.

interval < duration produces overlapping slots; they share one
capacity pool (see evaluator).
"""


def generate_slots(
    open_time: int,
    close_time: int,
    duration: int,
    interval: int,
) -> list[tuple[int, int]]:
    """
    Generate (start, end) minute pairs, ordered by start.

    Returns:
        Empty list when not even one slot fits.
    """
    if duration <= 0:
        raise ValueError(f"duration must be positive, got {duration}")
    if interval <= 0:
        raise ValueError(f"interval must be positive, got {interval}")

    slots: list[tuple[int, int]] = []
    t = open_time
    while t + duration <= close_time:
        slots.append((t, t + duration))
        t += interval

    return slots
