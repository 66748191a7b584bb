# src/adaptive_scalar_encoder.py
import logging
import math
from numbers import Number
from typing import Iterable, List, Optional, Sequence, Union

import numpy as np

from encoder_config import DEFAULT_WINDOW_SIZE, EncoderConfig
from encoder_params import EncoderParams, compute_encoder_params
from errors import InvalidConfiguration, InvalidInput
from range_tracker import SENTINEL_VALUE_FOR_MISSING_DATA, RangeTracker, is_missing
from scalar_encoder import SDR_DTYPE, EncoderResult, ScalarEncoder

logger = logging.getLogger(__name__)

__all__ = ["AdaptiveScalarEncoder", "SENTINEL_VALUE_FOR_MISSING_DATA"]


def _check_config(config: EncoderConfig) -> None:
    if config.periodic:
        raise InvalidConfiguration("Adaptive scalar encoder does not encode periodic inputs")
    if config.n is None:
        if config.radius is not None or config.resolution is not None:
            raise InvalidConfiguration("Adaptive scalar encoder must be sized with n, "
                                       "not with radius or resolution")
        raise InvalidConfiguration("Adaptive scalar encoder requires n")
    if config.w < 1:
        raise InvalidConfiguration(f"w must be at least 1, got {config.w}")
    if config.n <= config.w:
        raise InvalidConfiguration(f"n ({config.n}) must be greater than w ({config.w})")
    if config.window_size < 1:
        raise InvalidConfiguration(f"window_size must be at least 1, got {config.window_size}")
    padding = config.effective_padding
    if padding < 0 or 2 * padding >= config.n:
        raise InvalidConfiguration(f"padding ({padding}) does not fit in n ({config.n})")
    if not (math.isfinite(config.min_val) and math.isfinite(config.max_val)):
        raise InvalidConfiguration(f"Initial bounds must be finite, got [{config.min_val}, {config.max_val}]")
    if config.min_val > config.max_val:
        raise InvalidConfiguration(f"min_val ({config.min_val}) is greater than max_val ({config.max_val})")


class AdaptiveScalarEncoder:
    """
    A scalar encoder that learns its own value range from the stream.

    No prior knowledge of the data's minimum or maximum is needed. The first
    real value x bootstraps the range to [x, x + 1]; later values widen it to
    the extremes seen in a sliding window of recent records. `n` and `w` stay
    fixed, so every output has the same width even as the value-to-bucket
    mapping shifts underneath.

    Missing data (None), NaN and infinities encode to all-zero patterns and
    never move the bounds. Until the first real value has been seen the
    encoder is Uninitialized and every encoding and decoding is all-zero.

    Instances are not thread-safe; serialize access externally if shared.
    """
    def __init__(self, w: int, n: Optional[int] = None, min_val: float = 0.0, max_val: float = 0.0,
                 padding: Optional[int] = None, window_size: int = DEFAULT_WINDOW_SIZE, learning_enabled: bool = True,
                 periodic: bool = False, clip_input: bool = True, name: str = "[adaptive]",
                 verbosity: int = 0, radius: Optional[float] = None, resolution: Optional[float] = None):
        config = EncoderConfig(
            w=w, n=n, min_val=min_val, max_val=max_val, padding=padding, radius=radius,
            resolution=resolution, window_size=window_size, learning_enabled=learning_enabled,
            periodic=periodic, clip_input=clip_input, name=name, verbosity=verbosity,
        )
        self._init_from_config(config)

    @classmethod
    def from_config(cls, config: EncoderConfig) -> "AdaptiveScalarEncoder":
        encoder = cls.__new__(cls)
        encoder._init_from_config(config)
        return encoder

    def _init_from_config(self, config: EncoderConfig) -> None:
        _check_config(config)
        self.config = config
        self.w = config.w
        self.n = config.n
        self.padding = config.effective_padding
        self.name = config.name
        self.verbosity = config.verbosity
        self.adapt_bounds = config.learning_enabled
        self.record_num = 0

        self.tracker = RangeTracker(
            min_val=config.min_val, max_val=config.max_val, window_size=config.window_size,
            name=config.name, verbosity=config.verbosity,
        )
        self._base: Optional[ScalarEncoder] = None
        self._set_encoder_params()

    def _set_encoder_params(self) -> None:
        self.params: EncoderParams = compute_encoder_params(
            self.tracker.min_val, self.tracker.max_val, self.n, self.w, self.padding)
        if not self.tracker.bootstrapped:
            return
        if self.verbosity >= 1:
            logger.debug(f"Encoder {self.name} parameters: resolution={self.params.resolution}, "
                         f"radius={self.params.radius}, range={self.params.range}")
        if self._base is None:
            self._base = ScalarEncoder(
                w=self.w, n=self.n, min_val=self.params.min_val, max_val=self.params.max_val,
                padding=self.padding, clip_input=self.config.clip_input, name=self.name,
            )
        else:
            self._base.set_params(self.params)

    # --- state ---

    @property
    def is_bootstrapped(self) -> bool:
        return self.tracker.bootstrapped

    @property
    def min_val(self) -> float:
        return self.tracker.min_val

    @property
    def max_val(self) -> float:
        return self.tracker.max_val

    @property
    def resolution(self) -> float:
        return self.params.resolution

    @property
    def radius(self) -> float:
        return self.params.radius

    @property
    def range(self) -> float:
        return self.params.range

    @property
    def n_internal(self) -> int:
        return self.params.n_internal

    @property
    def learning_enabled(self) -> bool:
        return self.adapt_bounds

    def set_learning_enabled(self, enabled: bool) -> None:
        """Turns range adaptation on or off for subsequent records."""
        self.adapt_bounds = bool(enabled)

    def get_width(self) -> int:
        return self.n

    def get_description(self) -> list:
        return [(self.name, 0)]

    # --- encoding ---

    def _to_number(self, value) -> Optional[float]:
        if value is SENTINEL_VALUE_FOR_MISSING_DATA:
            return None
        if isinstance(value, str):
            try:
                return float(value)
            except ValueError:
                raise InvalidInput(f"Cannot parse {value!r} as a number for {self.name}") from None
        if isinstance(value, (bool, np.bool_)) or not isinstance(value, (Number, np.number)):
            raise InvalidInput(f"Expected a number for {self.name}, got {type(value).__name__}")
        return float(value)

    def _observe(self, value: float) -> None:
        if self.adapt_bounds and self.tracker.observe(value):
            self._set_encoder_params()

    def encode_into_array(self, value: Optional[Union[float, str]], output: np.ndarray) -> None:
        """
        Encodes `value` into `output` in place, adapting the range first when
        learning is enabled.
        """
        if output.shape != (self.n,):
            raise ValueError(f"Output array must have shape ({self.n},), got {output.shape}")
        number = self._to_number(value)
        self.record_num += 1

        if is_missing(number):
            output[:] = 0
            return

        self._observe(number)
        if self._base is None:
            output[:] = 0
            return
        self._base.encode_into_array(number, output)

    def encode(self, value: Optional[Union[float, str]]) -> np.ndarray:
        output = np.zeros(self.n, dtype=SDR_DTYPE)
        self.encode_into_array(value, output)
        return output

    def encode_batch(self, values: Iterable[Optional[float]]) -> np.ndarray:
        """Encodes values in order, returning an array of shape [len(values), n]."""
        sdrs = [self.encode(value) for value in values]
        if not sdrs:
            return np.zeros((0, self.n), dtype=SDR_DTYPE)
        return np.stack(sdrs)

    def get_bucket_indices(self, value: Optional[Union[float, str]]) -> np.ndarray:
        """
        Returns the bucket index for `value`, adapting the range first when
        learning is enabled. Strings are parsed as numbers. Missing data, NaN and
        an Uninitialized encoder all yield an all-zero array of length n.
        """
        number = self._to_number(value)
        self.record_num += 1

        if is_missing(number):
            return np.zeros(self.n, dtype=np.int64)

        self._observe(number)
        if self._base is None:
            return np.zeros(self.n, dtype=np.int64)
        return self._base.get_bucket_indices(number)

    # --- decoding ---

    def _degenerate_result(self) -> List[EncoderResult]:
        return [EncoderResult(value=0, scalar=0, encoding=np.zeros(self.n, dtype=SDR_DTYPE))]

    def top_down_compute(self, encoded: np.ndarray) -> List[EncoderResult]:
        if self._base is None:
            return self._degenerate_result()
        return self._base.top_down_compute(encoded)

    def decode(self, encoded: np.ndarray) -> EncoderResult:
        return self.top_down_compute(encoded)[0]

    def get_bucket_info(self, buckets: Sequence[int]) -> List[EncoderResult]:
        if self._base is None:
            return self._degenerate_result()
        return self._base.get_bucket_info(buckets)

    def get_bucket_values(self) -> List[float]:
        if self._base is None:
            return []
        return self._base.get_bucket_values()

    def closeness_scores(self, exp_values: Sequence[float], act_values: Sequence[float],
                         fractional: bool = True) -> np.ndarray:
        if self._base is None:
            return np.array([0.0])
        return self._base.closeness_scores(exp_values, act_values, fractional=fractional)

    def __repr__(self) -> str:
        return (f"AdaptiveScalarEncoder(name={self.name!r}, w={self.w}, n={self.n}, "
                f"min_val={self.min_val}, max_val={self.max_val}, resolution={self.resolution}, "
                f"bootstrapped={self.is_bootstrapped}, record_num={self.record_num})")
