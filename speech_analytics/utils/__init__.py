from .logger import configure_logging, get_logger
from .display import (
    color_txt,
    display_elapsed_time,
    print_snapshot,
    print_snapshot_header,
)
