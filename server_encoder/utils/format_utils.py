"""
Human-readable formatting for log messages.
"""

SIZE_UNITS = ("B", "KB", "MB", "GB", "TB")


def formatted_size(size_bytes: int) -> str:
    """
    Renders a byte count with a binary unit, e.g. for download and upload logs.

    Whole values drop their decimals: 1536 -> "1.50 KB", 2097152 -> "2 MB".
    Negative counts are shown as "0 B".
    """
    size = float(max(size_bytes, 0))
    for unit in SIZE_UNITS:
        if size < 1024 or unit == SIZE_UNITS[-1]:
            break
        size /= 1024

    if unit == "B":
        return f"{int(size)} B"
    if size.is_integer():
        return f"{int(size)} {unit}"
    return f"{size:.2f} {unit}"
