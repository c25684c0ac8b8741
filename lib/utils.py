# =============================================================================
# lib/utils.py - Shared Utilities
# =============================================================================
# Display helpers used when rendering directory listings:
# - format_size: byte counts as human-readable binary units
# - format_elapsed: coarse "time since modified" labels
# =============================================================================

# Binary unit ladder, 1024 per step
_SIZE_UNITS = ["KiB", "MiB", "GiB", "TiB", "PiB", "EiB"]

_MINUTE = 60
_HOUR = 60 * _MINUTE
_DAY = 24 * _HOUR


# =============================================================================
# Size Formatting
# =============================================================================

def format_size(num_bytes: int) -> str:
    """
    Format a byte count using the largest fitting binary unit.

    Values below 1 KiB are printed as whole bytes, everything else with
    two decimals.

    Args:
        num_bytes: Size in bytes (must be non-negative)

    Returns:
        Display string

    Example:
        format_size(10)      # "10 B"
        format_size(12697)   # "12.40 KiB"
    """
    if num_bytes < 0:
        raise ValueError(f"Size cannot be negative: {num_bytes}")

    if num_bytes < 1024:
        return f"{num_bytes} B"

    value = float(num_bytes)
    unit = _SIZE_UNITS[0]
    for unit in _SIZE_UNITS:
        value /= 1024
        if value < 1024:
            break

    return f"{value:.2f} {unit}"


# =============================================================================
# Elapsed Time Formatting
# =============================================================================

def format_elapsed(seconds: float) -> str:
    """
    Bucket an elapsed duration into its largest applicable unit.

    The duration is first truncated to whole minutes, hours and days; a
    unit is used only when its count is greater than one. Anything below
    two of a unit therefore reports the next smaller one: 90 seconds is
    "90 second(s)", 90 minutes is "90 minute(s)" and 25 hours is
    "25 hour(s)". Negative durations (files modified "in the
    future" because of clock skew) report zero seconds.

    Args:
        seconds: Elapsed time in seconds

    Returns:
        Label such as "3 day(s)" or "45 second(s)"
    """
    elapsed = max(int(seconds), 0)
    minutes = elapsed // _MINUTE
    hours = elapsed // _HOUR
    days = elapsed // _DAY

    if days > 1:
        return f"{days} day(s)"
    if hours > 1:
        return f"{hours} hour(s)"
    if minutes > 1:
        return f"{minutes} minute(s)"
    return f"{elapsed} second(s)"
