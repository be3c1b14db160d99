"""Storage keys. Namespaced and versioned so they never collide."""

USERS_KEY = "softpack:users:v1"
SESSION_KEY = "softpack:session:v1"
GAMES_KEY = "softpack:games:v1"
CHEATS_KEY = "softpack:cheats:v1"
SETTINGS_KEY = "softpack:settings:v1"
SECURITY_LOG_KEY = "softpack:security_log:v1"
CSRF_KEY = "softpack:csrf:v1"


def session_key_for(profile_id: str) -> str:
    """Session slot owned by one client profile"""
    return f"{SESSION_KEY}:{profile_id}"


def csrf_key_for(profile_id: str) -> str:
    return f"{CSRF_KEY}:{profile_id}"
