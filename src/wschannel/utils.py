"""
Utility functions for wschannel.
"""

import os
from datetime import datetime


def get_project_root() -> str:
    """
    Get the project root directory (parent of src/wschannel).

    Returns:
        Absolute path to the project root directory
    """
    return os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


def format_time_hhmmss(moment: datetime | None) -> str:
    """
    Format a datetime as HH:MM:SS.

    Args:
        moment: The instant to format

    Returns:
        Formatted string like "14:30:45" or "--:--:--" if moment is None
    """
    if moment is None:
        return "--:--:--"
    return moment.strftime("%H:%M:%S")

