"""
Derived values for site operation records.

Kept free of model imports so the serializers and the models can both use
them and they can be tested without a database.
"""
import re
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

ROD_KEY_RE = re.compile(r'^rod(?P<length>10|[1-9])(?P<set>_set2)?$')
TONS_PER_FOOT = Decimal('0.8')

TIME_24H_RE = re.compile(r'^(\d{1,2}):(\d{2})$')
TIME_12H_RE = re.compile(r'^(\d{1,2}):(\d{2})\s*(AM|PM)?$', re.IGNORECASE)

TWO_PLACES = Decimal('0.01')


class CalculationError(ValueError):
    """Raised when an input cannot be turned into a derived value"""


def rod_length(key):
    """Rod length in feet for a measurement key such as 'rod7' or 'rod7_set2'"""
    match = ROD_KEY_RE.match(key)
    if not match:
        raise CalculationError(f"Unknown rod measurement '{key}'")
    return int(match.group('length'))


def hole_count(key, count):
    """Whole, non-negative hole count; blank values count as zero"""
    if count in (None, ''):
        return 0
    if isinstance(count, bool):
        raise CalculationError(f"Hole count for '{key}' must be a whole number")
    try:
        number = Decimal(str(count).strip())
    except InvalidOperation:
        raise CalculationError(f"Hole count for '{key}' must be a whole number")
    if not number.is_finite() or number != number.to_integral_value():
        raise CalculationError(f"Hole count for '{key}' must be a whole number")
    if number < 0:
        raise CalculationError(f"Hole count for '{key}' cannot be negative")
    return int(number)


def drilling_totals(rod_measurements):
    """
    Compute (holes_drilled, total_depth_ft, approx_production_tons).

    rod_measurements maps a rod key to the number of holes drilled with that
    rod. Blank values count as zero.
    """
    holes = 0
    depth = Decimal('0')
    for key, count in (rod_measurements or {}).items():
        length = rod_length(key)
        count = hole_count(key, count)
        holes += count
        depth += Decimal(count * length)
    tons = (depth * TONS_PER_FOOT).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)
    return holes, depth.quantize(TWO_PLACES), tons


def parse_clock_time(value):
    """
    Parse 'HH:MM' (24-hour) or 'h:MM AM/PM' into fractional hours since midnight.

    Returns None when the value is not a valid clock time.
    """
    value = (value or '').strip()
    if not value:
        return None

    match = TIME_24H_RE.match(value)
    period = ''
    if not match:
        match = TIME_12H_RE.match(value)
        if not match:
            return None
        period = (match.group(3) or '').lower()

    hours = int(match.group(1))
    minutes = int(match.group(2))
    if period == 'pm' and hours < 12:
        hours += 12
    if period == 'am' and hours == 12:
        hours = 0
    if not (0 <= hours < 24 and 0 <= minutes < 60):
        return None
    return Decimal(hours) + Decimal(minutes) / Decimal(60)


def elapsed_hours(start, end):
    """Hours between two clock times; an end before the start rolls over midnight"""
    start_hours = parse_clock_time(start)
    end_hours = parse_clock_time(end)
    if start_hours is None:
        raise CalculationError(f"Invalid start time '{start}'")
    if end_hours is None:
        raise CalculationError(f"Invalid end time '{end}'")
    diff = end_hours - start_hours
    if diff < 0:
        diff += 24
    return diff.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def hour_meter_hours(starting, ending):
    """Hours worked from two machine hour-meter readings"""
    if starting is None or ending is None:
        return None
    if ending < starting:
        raise CalculationError('Ending hours cannot be less than starting hours')
    return ending - starting


def shift_hours(check_in, check_out):
    """Hours between two datetime.time values on the same day"""
    if check_in is None or check_out is None:
        return None
    seconds = (check_out.hour * 3600 + check_out.minute * 60 + check_out.second) - \
        (check_in.hour * 3600 + check_in.minute * 60 + check_in.second)
    if seconds <= 0:
        raise CalculationError('Check-out time must be after check-in time')
    return (Decimal(seconds) / Decimal(3600)).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)
