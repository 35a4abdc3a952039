"""
Standardized cache key generation and TTL management
"""

# --- TTL Constants (in seconds) ---
LEADERBOARD_TTL = 60
STATS_TTL = 30

# --- Key Generation Functions ---

def leaderboard_key(limit: int) -> str:
    """
    Generates cache key for the architecture leaderboard
    Example: "architectures:leaderboard:10"
    """
    return f"architectures:leaderboard:{limit}"


def global_stats_key() -> str:
    return "stats:global"

# --- Key Pattern Functions for Invalidation ---

def leaderboard_pattern() -> str:
    return "architectures:leaderboard:*"


def stats_pattern() -> str:
    return "stats:*"

# --- Cache Key Generators for Decorators ---

def generate_leaderboard_key(limit: int = 10, **kwargs) -> str:
    """Key for the leaderboard handler, taken from its ``limit`` argument"""
    return leaderboard_key(limit)


def generate_stats_key(*args, **kwargs) -> str:
    return global_stats_key()

# --- Invalidation Pattern Generators for Decorators ---

def generate_architecture_invalidation_patterns(*args, **kwargs) -> list[str]:
    """New or changed architectures move the leaderboard and the counts"""
    return [leaderboard_pattern(), stats_pattern()]


def generate_stats_invalidation_patterns(*args, **kwargs) -> list[str]:
    return [stats_pattern()]
