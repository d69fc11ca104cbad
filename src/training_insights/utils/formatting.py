"""Display formatting for times, paces and distances."""


def format_race_time(seconds: float) -> str:
    """Format time in seconds to H:MM:SS or M:SS string."""
    total = int(round(seconds))
    hours = total // 3600
    minutes = (total % 3600) // 60
    secs = total % 60

    if hours > 0:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"


def format_pace(pace_sec_per_km: float) -> str:
    """Format pace in sec/km as M:SS (seconds rounded, never ':60')."""
    total = int(round(pace_sec_per_km))
    return f"{total // 60}:{total % 60:02d}"


def velocity_to_pace(velocity_m_per_min: float) -> str:
    """Format a velocity in m/min as a M:SS per km pace."""
    if velocity_m_per_min <= 0:
        return "-"
    return format_pace(1000.0 / velocity_m_per_min * 60.0)


def format_duration(seconds: float) -> str:
    """Format a duration as '1h 5m', '5m 3s' or '42s'."""
    total = int(seconds)
    hours = total // 3600
    minutes = (total % 3600) // 60
    secs = total % 60

    if hours > 0:
        return f"{hours}h {minutes}m"
    if minutes > 0:
        return f"{minutes}m {secs}s"
    return f"{secs}s"


def format_distance(meters: float) -> str:
    """Format a distance as kilometers (2 dp) or whole meters below 1 km."""
    if meters >= 1000:
        return f"{meters / 1000:.2f} km"
    return f"{round(meters)} m"
