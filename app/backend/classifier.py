from dataclasses import replace


DEFAULT_HIGH_COST_HOUR_COUNT = 8


def find_threshold(costs, n):
    ranked = sorted(costs, reverse=True)
    return ranked[n - 1]


def _demote_preferred(hours, flags, excess, preferred_hours):
    for hour_of_day in preferred_hours:
        if excess <= 0:
            break
        for index, hour in enumerate(hours):
            if excess <= 0:
                break
            if flags[index] and hour.hour_of_day == hour_of_day:
                flags[index] = False
                excess -= 1
    return excess


def _demote_earliest(flags, excess):
    index = 0
    while excess > 0 and index < len(flags):
        if flags[index]:
            flags[index] = False
            excess -= 1
        index += 1
    return excess


def classify_high_cost(hours, n=DEFAULT_HIGH_COST_HOUR_COUNT, preferred_hours=()):
    """Mark exactly ``n`` of the day's hours as high-cost.

    Every hour priced at or above the n-th highest cost qualifies. When ties at
    that cost push the count past ``n``, the surplus is demoted first from the
    preferred hours (in their priority order), then from the earliest hours of
    the day, so high-cost flags gather later in the day. ``hours`` must be
    ordered by start. Returns new records; the input is left untouched.
    """
    hours = list(hours)
    if n <= 0 or not hours:
        return tuple(replace(hour, is_high_cost=False) for hour in hours)
    if n >= len(hours):
        return tuple(replace(hour, is_high_cost=True) for hour in hours)

    threshold = find_threshold([hour.cost for hour in hours], n)
    flags = [hour.cost >= threshold for hour in hours]
    excess = sum(flags) - n

    if excess > 0:
        excess = _demote_preferred(hours, flags, excess, preferred_hours)
    if excess > 0:
        _demote_earliest(flags, excess)

    return tuple(replace(hour, is_high_cost=flag) for hour, flag in zip(hours, flags))
