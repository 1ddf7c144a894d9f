import sys
import os

from .timer_state import Phase

# Ring / label colors per phase
PHASE_COLORS = {
    Phase.Ready:     "#F59E0B",
    Phase.Exercise:  "#EF4444",
    Phase.Rest:      "#22C55E",
    Phase.RoundRest: "#3B82F6",
    Phase.Paused:    "#6B7280",
    Phase.Completed: "#8B5CF6",
}
IDLE_COLOR = "#5A5177"

PHASE_TEXT = {
    Phase.Ready:     "Get Ready!",
    Phase.Exercise:  "WORK!",
    Phase.Rest:      "Rest",
    Phase.RoundRest: "Round Rest",
    Phase.Paused:    "Paused",
    Phase.Completed: "Complete!",
}


def resource_path(relative_path: str) -> str:
    """Return absolute path to resource inside the 'resources' folder."""
    base = sys._MEIPASS if hasattr(sys, "_MEIPASS") else os.path.abspath(".")
    return os.path.join(base, "resources", relative_path)


def format_clock(seconds: int) -> str:
    mins, secs = divmod(max(int(seconds), 0), 60)
    return f"{mins:02}:{secs:02}"


def phase_color(phase: Phase) -> str:
    return PHASE_COLORS.get(phase, IDLE_COLOR)


def phase_text(phase: Phase) -> str:
    return PHASE_TEXT.get(phase, "Ready")
