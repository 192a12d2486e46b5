# bluetraffic/viz/time_label.py
from bluetraffic.traffic.time_window import ANY_TIME

ANY_TIME_LABEL = "(any time)"


def format_time(minute: int) -> str:
    """
    Minutes since midnight -> en-US short time, e.g. 500 -> "8:20 AM".
    """
    minute = int(minute) % 1440
    hh, mm = divmod(minute, 60)
    suffix = "AM" if hh < 12 else "PM"
    h12 = hh % 12 or 12
    return f"{h12}:{mm:02d} {suffix}"


def time_filter_label(minute: int) -> str:
    if int(minute) == ANY_TIME:
        return ANY_TIME_LABEL
    return format_time(minute)
