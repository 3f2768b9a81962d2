"""
Display formatters for DANFE fields.

Pure string/number transformations: national registration masks (CPF/CNPJ),
dates, times, Brazilian currency notation and access key grouping.
None of them mutate their input and none raise for documented inputs.
"""
from datetime import datetime, tzinfo
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP, localcontext
from typing import Optional, Tuple, Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError
import re
from loguru import logger


ACCESS_KEY_LENGTH = 44
DEFAULT_DECIMALS = 4
FALLBACK_DECIMALS = 2

# Appended to bare dates (YYYY-MM-DD) so they read as midnight UTC
MIDNIGHT_UTC = "T00:00:00+00:00"


class MalformedTimestamp(ValueError):
    """Timestamp does not have the YYYY-MM-DD[Thh:mm:ss[±hh:mm]] shape"""


def mask_person_id(value: str) -> str:
    """
    Apply the CPF mask (XXX.XXX.XXX-XX).

    Separators are only inserted in front of non-empty groups, so shorter
    input is masked as far as it goes instead of failing.
    """
    result = value[0:3]
    if value[3:6]:
        result += "." + value[3:6]
    if value[6:9]:
        result += "." + value[6:9]
    if value[9:]:
        result += "-" + value[9:]
    return result


def mask_company_id(value: str) -> str:
    """Apply the CNPJ mask (XX.XXX.XXX/XXXX-XX), same rule as mask_person_id"""
    result = value[0:2]
    if value[2:5]:
        result += "." + value[2:5]
    if value[5:8]:
        result += "." + value[5:8]
    if value[8:12]:
        result += "/" + value[8:12]
    if value[12:]:
        result += "-" + value[12:]
    return result


def format_national_id(value: Optional[str]) -> Optional[str]:
    """
    Mask a CPF (11 chars) or CNPJ (14 chars).
    Any other length, empty or None is returned untouched.
    """
    if value:
        if len(value) == 11:
            return mask_person_id(value)
        if len(value) == 14:
            return mask_company_id(value)
    return value


def parse_date_parts(timestamp: str) -> Tuple[str, str, str]:
    """
    Split a W3C datetime into (year, month, day).

    Raises:
        MalformedTimestamp: date part is not three numeric components or
            the time part is missing.
    """
    if len(timestamp) == 10:
        timestamp += MIDNIGHT_UTC

    date_part, sep, time_part = timestamp.partition("T")
    if not sep or not time_part:
        raise MalformedTimestamp(f"Missing time portion in '{timestamp}'")

    clock = re.split(r"[-+]", time_part, maxsplit=1)[0]
    if not clock:
        raise MalformedTimestamp(f"Missing time portion in '{timestamp}'")

    parts = date_part.split("-")
    if len(parts) != 3 or not all(p.isdigit() for p in parts):
        raise MalformedTimestamp(f"Invalid date portion in '{timestamp}'")

    year, month, day = parts
    return year, month, day


def format_date(timestamp) -> str:
    """Format a timestamp as DD/MM/YYYY, or '' when empty or malformed"""
    value = str(timestamp) if timestamp else ""
    if not value:
        return ""

    try:
        year, month, day = parse_date_parts(value)
    except MalformedTimestamp as e:
        logger.warning(f"Ignoring date field: {e}")
        return ""

    return f"{day.zfill(2)}/{month.zfill(2)}/{year}"


def resolve_timezone(name: Optional[str]) -> Optional[tzinfo]:
    """
    Resolve an IANA zone name. Empty or unknown names resolve to None,
    meaning the runtime's local zone.
    """
    if not name:
        return None
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning(f"Unknown timezone '{name}', using local time")
        return None


def format_time(timestamp, tz: Union[tzinfo, str, None] = None) -> str:
    """
    Format a timestamp as HH:MM:SS.

    Offset-aware timestamps are converted to `tz` (the local zone when None);
    timestamps without an offset are taken as wall-clock time in that zone.
    Bare dates read as midnight UTC. Timestamps format_date rejects give
    '' here too.
    """
    if not timestamp:
        return ""

    if isinstance(tz, str):
        tz = resolve_timezone(tz)

    value = str(timestamp).strip()
    try:
        parse_date_parts(value)
    except MalformedTimestamp as e:
        logger.warning(f"Ignoring time field: {e}")
        return ""

    if len(value) == 10:
        value += MIDNIGHT_UTC
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"

    try:
        moment = datetime.fromisoformat(value)
    except ValueError:
        logger.warning(f"Ignoring time field: unparseable timestamp '{timestamp}'")
        return ""

    if moment.tzinfo is not None:
        moment = moment.astimezone(tz)

    return f"{moment.hour:02d}:{moment.minute:02d}:{moment.second:02d}"


def _to_decimal(amount) -> Decimal:
    """Numeric coercion: anything that is not a finite number reads as zero"""
    if amount is None or isinstance(amount, bool):
        return Decimal(0)
    if isinstance(amount, Decimal):
        number = amount
    else:
        try:
            number = Decimal(str(amount).strip())
        except InvalidOperation:
            return Decimal(0)
    if not number.is_finite():
        return Decimal(0)
    return number


def _resolve_decimals(decimals) -> int:
    if decimals is None:
        return DEFAULT_DECIMALS
    try:
        decimals = int(decimals)
    except (TypeError, ValueError, OverflowError):
        return FALLBACK_DECIMALS
    return decimals if decimals >= 0 else FALLBACK_DECIMALS


def format_currency(amount, decimals: Optional[int] = None) -> str:
    """
    Format an amount in Brazilian notation without currency symbol.

    Rounds half away from zero to `decimals` places (4 when not given),
    groups thousands with '.' and uses ',' as decimal mark.

    Example:
        >>> format_currency(1234567.891, 2)
        '1.234.567,89'
        >>> format_currency(-42, 2)
        '-42,00'
    """
    decimals = _resolve_decimals(decimals)
    number = _to_decimal(amount)
    sign = "-" if number < 0 else ""

    with localcontext() as ctx:
        # enough digits for the integer part plus the requested places
        ctx.prec = max(28, number.adjusted() + decimals + 2)
        rounded = abs(number).quantize(Decimal(1).scaleb(-decimals), rounding=ROUND_HALF_UP)

    integer, _, fraction = f"{rounded:f}".partition(".")
    grouped = f"{int(integer):,}".replace(",", ".")

    if decimals:
        return f"{sign}{grouped},{fraction}"
    return f"{sign}{grouped}"


def format_access_key(key: Optional[str]) -> Optional[str]:
    """
    Group a 44 character access key in blocks of four, each block preceded
    by a space. Keys of any other length are returned untouched.
    """
    if key and len(key) == ACCESS_KEY_LENGTH:
        return "".join(" " + key[i:i + 4] for i in range(0, ACCESS_KEY_LENGTH, 4))
    return key
