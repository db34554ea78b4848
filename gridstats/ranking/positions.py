"""Position inference for rows that arrive without a usable position.

The season view from the API always reports the placeholder "N/A", so the
dashboard guesses a position to show and to filter on. The guess is a pure
function of (name, touchdowns, yards, tackles):

1. A short table of known names (case-insensitive substring match)
2. A stat heuristic, checked in strict order
3. A deterministic hash of the lowercased name into a fixed position list

The hash fallback exists only so the same unknown player always lands on the
same position; it is not meant to be relied on outside this package.
"""

import struct

from .rows import PLACEHOLDER_POSITION, PlayerRow

# Checked in order; first substring hit wins
KNOWN_PLAYER_POSITIONS: tuple[tuple[str, str], ...] = (
    ("kittle", "TE"),
    ("samuel", "WR"),
    ("aiyuk", "WR"),
    ("purdy", "QB"),
    ("mccaffrey", "RB"),
    ("bosa", "DE"),
    ("warner", "LB"),
)

FALLBACK_POSITIONS: tuple[str, ...] = ("QB", "RB", "WR", "TE", "OL", "DL", "LB", "DB")

# Positions offered by the dashboard's position filter
FILTER_POSITIONS: dict[str, str] = {
    "QB": "Quarterback",
    "RB": "Running Back",
    "WR": "Wide Receiver",
    "TE": "Tight End",
    "OL": "Offensive Line",
    "DL": "Defensive Line",
    "LB": "Linebacker",
    "DB": "Defensive Back",
}


def name_hash(text: str) -> int:
    """32-bit signed string hash (h = h * 31 + UTF-16 code unit, wrapped).

    Walks UTF-16 code units like JavaScript's charCodeAt, so characters
    outside the BMP contribute their two surrogates. Unlike the built-in
    hash() this does not change between interpreter runs.
    """
    encoded = text.encode("utf-16-le", "surrogatepass")
    value = 0
    for unit in struct.unpack(f"<{len(encoded) // 2}H", encoded):
        value = (value * 31 + unit) & 0xFFFFFFFF
    if value >= 0x80000000:
        value -= 0x100000000
    return value


def position_from_stats(touchdowns: int, yards: int, tackles: int) -> str | None:
    """Guess a position from counting stats, or None when nothing matches."""
    if tackles > 80:
        return "LB"
    if tackles > 30:
        return "DB"
    if touchdowns > 5 and yards > 700:
        return "WR"
    if touchdowns > 5:
        return "RB"
    if yards > 1000:
        return "QB"
    if yards > 500:
        return "WR"
    return None


def get_realistic_position(player: PlayerRow) -> str:
    """Return the row's position, inferring one when it is missing or a placeholder."""
    if player.position and player.position != PLACEHOLDER_POSITION:
        return player.position

    name = player.player_name.lower()
    for fragment, position in KNOWN_PLAYER_POSITIONS:
        if fragment in name:
            return position

    guessed = position_from_stats(player.touchdowns, player.yards, player.tackles)
    if guessed:
        return guessed

    return FALLBACK_POSITIONS[abs(name_hash(name)) % len(FALLBACK_POSITIONS)]


def assign_generic_position(touchdowns: int, yards: int, tackles: int) -> str:
    """Coarse position label attached by the API to per-game rows.

    Rows that match nothing keep the placeholder, which the dashboard then
    refines with get_realistic_position.
    """
    if touchdowns > 20:
        return "QB"
    if touchdowns >= 5 and yards > 500:
        return "WR"
    if tackles > 50:
        return "LB"
    return PLACEHOLDER_POSITION
