# src/encoder_params.py
from typing import NamedTuple

from errors import InvalidConfiguration


class EncoderParams(NamedTuple):
    """Derived encoding parameters for one (min_val, max_val) pair."""
    min_val: float
    max_val: float
    resolution: float
    radius: float
    range: float
    n_internal: int


def compute_encoder_params(min_val: float, max_val: float, n: int, w: int, padding: int) -> EncoderParams:
    """
    Recomputes resolution, radius, range and the effective (unpadded) width
    from the current bounds and the fixed bit-width settings.

    Args:
        min_val (float): Lower bound of the value range.
        max_val (float): Upper bound of the value range.
        n (int): Total number of bits in the output pattern.
        w (int): Number of active bits per pattern.
        padding (int): Margin bits at each end of the pattern.

    Returns:
        EncoderParams: The derived parameters.
    """
    if n <= w:
        raise InvalidConfiguration(f"n ({n}) must be greater than w ({w})")

    range_internal = float(max_val) - float(min_val)
    resolution = range_internal / (n - w)
    return EncoderParams(
        min_val=float(min_val),
        max_val=float(max_val),
        resolution=resolution,
        radius=w * resolution,
        range=range_internal + resolution,
        n_internal=n - 2 * padding,
    )
