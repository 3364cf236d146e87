# social_dashboard/services/suggestions.py
from typing import Optional

# keyword found in a platform error -> what the user should do about it; first match wins
FAILURE_SUGGESTIONS = (
    ("token", "reconnect account"),
    ("rate limit", "wait and retry"),
    ("media", "check file format"),
    ("image", "check file format"),
    ("size", "reduce file size"),
)


def suggest_fix(error: Optional[str]) -> Optional[str]:
    if not error:
        return None
    text = error.lower()
    for keyword, suggestion in FAILURE_SUGGESTIONS:
        if keyword in text:
            return suggestion
    return None
