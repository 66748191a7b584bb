# src/scalar_encoder.py
from typing import List, NamedTuple, Optional, Sequence

import numpy as np

from encoder_params import EncoderParams, compute_encoder_params
from errors import InvalidConfiguration

SDR_DTYPE = np.int8


class EncoderResult(NamedTuple):
    """
    A decoded bucket: the value it stands for, the scalar used for
    comparisons (identical for scalar encoders) and its bit pattern.
    """
    value: float
    scalar: float
    encoding: np.ndarray


def overlap(sdr1: np.ndarray, sdr2: np.ndarray) -> int:
    """
    Computes the overlap (number of shared active bits) between two binary SDRs.
    """
    if sdr1.shape != sdr2.shape:
        raise ValueError("SDRs must have the same size to compute overlap")
    return int(np.sum((sdr1 != 0) & (sdr2 != 0)))


class ScalarEncoder:
    """
    Fixed-range bucket encoder.

    A value in [min_val, max_val] is mapped to one of n - w + 1 buckets and
    encoded as a block of w contiguous active bits in a pattern of n bits.
    Neighbouring buckets share w - 1 bits, so nearby values have overlapping
    representations. When padding is smaller than the half-width of w, the
    lowest buckets share the first block; when it is larger, the highest
    buckets share the last one.
    """
    def __init__(self, w: int, n: int, min_val: float, max_val: float,
                 padding: Optional[int] = None, clip_input: bool = True, name: str = "[scalar]"):
        """
        Args:
            w (int): Number of active bits in each encoding.
            n (int): Total number of bits in each encoding.
            min_val (float): Lowest encodable value.
            max_val (float): Highest encodable value, must be above min_val.
            padding (int): Margin bits at each end. Defaults to the half-width of w.
            clip_input (bool): Clip out-of-range values instead of rejecting them.
            name (str): Name used in descriptions and log messages.
        """
        if w < 1:
            raise InvalidConfiguration(f"w must be at least 1, got {w}")
        if n <= w:
            raise InvalidConfiguration(f"n ({n}) must be greater than w ({w})")
        if not min_val < max_val:
            raise InvalidConfiguration(f"min_val ({min_val}) must be less than max_val ({max_val})")

        self.w = w
        self.n = n
        self.halfwidth = (w - 1) // 2
        self.padding = self.halfwidth if padding is None else padding
        if self.padding < 0 or 2 * self.padding >= n:
            raise InvalidConfiguration(f"padding ({self.padding}) does not fit in n ({n})")
        self.clip_input = clip_input
        self.name = name
        self._bucket_values: Optional[List[float]] = None

        self.set_params(compute_encoder_params(min_val, max_val, n, w, self.padding))

    def set_params(self, params: EncoderParams) -> None:
        """Installs new derived parameters and drops the cached bucket table."""
        self.params = params
        self._bucket_values = None

    @property
    def min_val(self) -> float:
        return self.params.min_val

    @property
    def max_val(self) -> float:
        return self.params.max_val

    @property
    def resolution(self) -> float:
        return self.params.resolution

    @property
    def radius(self) -> float:
        return self.params.radius

    @property
    def n_buckets(self) -> int:
        return self.n - self.w + 1

    def get_width(self) -> int:
        return self.n

    def get_description(self) -> list:
        return [(self.name, 0)]

    def _bucket_index(self, value: float) -> int:
        if value < self.min_val or value > self.max_val:
            if not self.clip_input:
                raise ValueError(f"Input ({value}) for {self.name} is outside "
                                 f"[{self.min_val}, {self.max_val}]")
            value = min(max(value, self.min_val), self.max_val)

        bucket = int((value - self.min_val + self.resolution / 2) / self.resolution)
        return min(max(bucket, 0), self.n_buckets - 1)

    def _bucket_encoding(self, bucket: int) -> np.ndarray:
        start = int(self._first_bits(bucket))
        sdr = np.zeros(self.n, dtype=SDR_DTYPE)
        sdr[start:start + self.w] = 1
        return sdr

    def _first_bits(self, buckets):
        # the active block always fits inside the pattern, so every encoding has w bits
        return np.clip(np.asarray(buckets) + self.padding - self.halfwidth, 0, self.n - self.w)

    def get_bucket_indices(self, value: float) -> np.ndarray:
        return np.array([self._bucket_index(float(value))], dtype=np.int64)

    def encode_into_array(self, value: float, output: np.ndarray) -> None:
        if output.shape != (self.n,):
            raise ValueError(f"Output array must have shape ({self.n},), got {output.shape}")
        output[:] = self._bucket_encoding(self._bucket_index(float(value)))

    def encode(self, value: float) -> np.ndarray:
        output = np.zeros(self.n, dtype=SDR_DTYPE)
        self.encode_into_array(value, output)
        return output

    def get_bucket_values(self) -> List[float]:
        """Returns the value represented by each bucket, lowest first."""
        if self._bucket_values is None:
            self._bucket_values = [self.min_val + i * self.resolution for i in range(self.n_buckets)]
        return self._bucket_values

    def get_bucket_info(self, buckets: Sequence[int]) -> List[EncoderResult]:
        bucket = int(buckets[0])
        if not 0 <= bucket < self.n_buckets:
            raise ValueError(f"Bucket index {bucket} out of range [0, {self.n_buckets})")
        value = self.get_bucket_values()[bucket]
        return [EncoderResult(value=value, scalar=value, encoding=self._bucket_encoding(bucket))]

    def top_down_compute(self, encoded: np.ndarray) -> List[EncoderResult]:
        """
        Finds the bucket whose encoding best overlaps `encoded` and returns its info.
        Ties resolve to the lowest bucket.
        """
        encoded = np.asarray(encoded)
        if encoded.shape != (self.n,):
            raise ValueError(f"Encoded array must have shape ({self.n},), got {encoded.shape}")

        # overlap of every bucket's contiguous block via prefix sums
        counts = np.concatenate(([0], np.cumsum(encoded != 0)))
        starts = self._first_bits(np.arange(self.n_buckets))
        scores = counts[starts + self.w] - counts[starts]
        return self.get_bucket_info([int(np.argmax(scores))])

    def decode(self, encoded: np.ndarray) -> EncoderResult:
        return self.top_down_compute(encoded)[0]

    def closeness_scores(self, exp_values: Sequence[float], act_values: Sequence[float],
                         fractional: bool = True) -> np.ndarray:
        """
        Scores how close an actual value is to the expected one. With
        `fractional` the score is 1 - |error| / (max_val - min_val), floored at 0;
        otherwise it is the raw absolute error.
        """
        err = abs(exp_values[0] - act_values[0])
        if fractional:
            pct_err = min(1.0, err / (self.max_val - self.min_val))
            return np.array([1.0 - pct_err])
        return np.array([err])

    def __repr__(self) -> str:
        return (f"ScalarEncoder(name={self.name!r}, w={self.w}, n={self.n}, "
                f"min_val={self.min_val}, max_val={self.max_val}, resolution={self.resolution})")
