from typing import Optional

# Icon names a client knows how to draw. Anything else falls back to DEFAULT_ICON.
VALID_ICONS = (
    "Trophy", "Star", "CheckCircle2", "Footprints", "BookOpen", "Dumbbell", "Heart", "Brain",
    "Mountain", "Sun", "Coffee", "Pizza", "Bike", "Award", "Sparkles", "Target", "Medal",
    "Ribbon", "Gem", "Crown", "Feather", "Zap", "Flame", "Leaf", "Clock",
)

DEFAULT_ICON = "Award"

def resolve_icon(name: Optional[str]) -> str:
    if name in VALID_ICONS:
        return name
    return DEFAULT_ICON
