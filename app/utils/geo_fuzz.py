"""Location fuzzing for submitter anonymity.

Offsets are one-way: the true position is discarded as soon as the fuzzed
one is computed.
"""

from __future__ import annotations

import random

MIN_OFFSET_DEG = 0.09
MAX_OFFSET_DEG = 0.45

# Random fallback avoids the polar regions where nobody is submitting from
RANDOM_LAT_RANGE = (-70.0, 70.0)
RANDOM_LNG_RANGE = (-180.0, 180.0)

_system_rng = random.SystemRandom()


def _signed_offset(rng: random.Random) -> float:
    magnitude = rng.uniform(MIN_OFFSET_DEG, MAX_OFFSET_DEG)
    return magnitude if rng.random() < 0.5 else -magnitude


def apply_fuzz(lat: float, lng: float, rng: random.Random | None = None) -> tuple[float, float]:
    """Displace a coordinate by 0.09-0.45 degrees on each axis, random sign.

    A latitude offset that would cross a pole is applied in the other
    direction instead; longitude wraps around the antimeridian.

    Args:
        lat: True latitude.
        lng: True longitude.
        rng: Random source (defaults to the OS CSPRNG).

    Returns:
        (fuzzed_lat, fuzzed_lng)
    """
    rng = rng or _system_rng
    lat_offset = _signed_offset(rng)
    fuzzed_lat = lat + lat_offset
    if not -90.0 <= fuzzed_lat <= 90.0:
        fuzzed_lat = lat - lat_offset
    fuzzed_lng = lng + _signed_offset(rng)
    if fuzzed_lng > 180.0:
        fuzzed_lng -= 360.0
    elif fuzzed_lng < -180.0:
        fuzzed_lng += 360.0
    return fuzzed_lat, fuzzed_lng


def random_location(rng: random.Random | None = None) -> tuple[float, float]:
    """Pick a random (lat, lng) for submissions that arrive without a location."""
    rng = rng or _system_rng
    return rng.uniform(*RANDOM_LAT_RANGE), rng.uniform(*RANDOM_LNG_RANGE)


def jitter(lat: float, lng: float, spread: float, rng: random.Random | None = None) -> tuple[float, float]:
    """Small symmetric perturbation, used to scatter demo seed locations."""
    rng = rng or _system_rng
    return lat + rng.uniform(-spread, spread), lng + rng.uniform(-spread, spread)
