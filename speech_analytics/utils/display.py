"""
Terminal rendering of analytics snapshots.

Functions:
    - display_elapsed_time: Formats a duration in seconds.
    - color_txt: Colorizes a string.
    - format_snapshot_row: Renders one snapshot as aligned table cells.
    - print_snapshot_header: Prints the coloured column header.
    - print_snapshot: Prints one snapshot row.
"""

from colored import attr, bg, fg

from speech_analytics.domain import AnalyticsSnapshot

COLUMNS: tuple[tuple[str, int, str], ...] = (
    ("Time", 8, "green"),
    ("WPM", 6, "yellow"),
    ("Fillers", 9, "yellow"),
    ("Diversity", 11, "blue"),
    ("Pos", 6, "green"),
    ("Neg", 6, "red"),
    ("Neu", 6, "cyan"),
    ("", 7, "white"),
)


def display_elapsed_time(elapsed_time: float, _format: str = "long") -> str:
    """
    Returns the elapsed time in seconds in long or short format.

    Arguments:
        elapsed_time (float): Elapsed time in seconds.
        _format (str, optional): 'long' or 'short', by default 'long'.

    Returns:
        str: Formatted elapsed time.
    """
    minutes, seconds = divmod(int(elapsed_time), 60)
    if _format == "long":
        return (
            f"{minutes} min {seconds} seconds" if minutes else f"{seconds} seconds"
        )
    return f"{minutes}m{seconds}s" if minutes else f"{seconds}s"


def color_txt(
    string: str, fg_color: str, bg_color: str, padding: int = 0
) -> str:
    """
    Colorizes a string.

    Arguments:
        string (str): String to be colorized.
        fg_color (str): Foreground color.
        bg_color (str): Background color.
        padding (int): Minimum width, applied before colouring.

    Returns:
        str: Colorized string.
    """
    if padding:
        string = string.ljust(padding)

    return f"{fg(fg_color)}{bg(bg_color)}{string}{attr('reset')}"


def format_snapshot_row(snapshot: AnalyticsSnapshot) -> list[str]:
    tone = snapshot.emotional_tone
    cells = [
        display_elapsed_time(snapshot.duration, _format="short"),
        str(snapshot.speaking_pace),
        str(snapshot.filler_word_count),
        snapshot.vocabulary_diversity,
        tone.positive,
        tone.negative,
        tone.neutral,
        "final" if snapshot.is_final else "live",
    ]
    return [cell.ljust(width) for cell, (_, width, _) in zip(cells, COLUMNS)]


def print_snapshot_header() -> None:
    print(
        "".join(
            color_txt(title, "black", color, width) for title, width, color in COLUMNS
        )
    )


def print_snapshot(snapshot: AnalyticsSnapshot) -> None:
    """Prints one snapshot, highlighting the terminating report."""
    row = "".join(format_snapshot_row(snapshot))
    if snapshot.is_final:
        print(color_txt(row, "black", "white"))
    else:
        print(row)
