"""
Delay expressions used to compute subscription periods.

An expression is a comma separated list of steps applied in order::

    "1 year"                 one year later
    "1 year, 1 day ago"      one year later, minus one day
    "2 months, eom"          end of the month two months later

Steps are ``<n> <unit>[s] [ago]`` with units second, minute, hour, day,
week, month and year, or one of ``bom``/``eom`` (beginning/end of month)
and ``boy``/``eoy`` (beginning/end of year).
"""
import re

from dateutil.relativedelta import relativedelta

UNITS = ('second', 'minute', 'hour', 'day', 'week', 'month', 'year')

STEP_PATTERN = re.compile(
    r'^(?P<count>\d+)\s+(?P<unit>' + '|'.join(UNITS) + r')s?(?:\s+(?P<ago>ago))?$'
)

ANCHORS = {
    'bom': relativedelta(day=1),
    'eom': relativedelta(day=31),
    'boy': relativedelta(month=1, day=1),
    'eoy': relativedelta(month=12, day=31),
}


def parse_delay(expression):
    """Return the list of ``relativedelta`` steps of an expression"""
    if expression is None or not str(expression).strip():
        raise ValueError('Empty delay expression')

    steps = []
    for part in str(expression).split(','):
        step = ' '.join(part.strip().lower().split())
        if step in ANCHORS:
            steps.append(ANCHORS[step])
            continue
        match = STEP_PATTERN.match(step)
        if not match:
            raise ValueError(f'Invalid delay step: {part.strip()!r}')
        count = int(match.group('count'))
        if match.group('ago'):
            count = -count
        steps.append(relativedelta(**{match.group('unit') + 's': count}))
    return steps


def compute_delay(expression, origin):
    """Apply a delay expression to a date or datetime"""
    result = origin
    for step in parse_delay(expression):
        result = result + step
    return result
