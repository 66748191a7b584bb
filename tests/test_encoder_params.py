import pytest
from encoder_params import compute_encoder_params
from errors import InvalidConfiguration


def test_derived_parameters():
    params = compute_encoder_params(10.0, 20.0, n=50, w=5, padding=0)
    assert params.min_val == 10.0
    assert params.max_val == 20.0
    assert params.resolution == pytest.approx(10.0 / 45)
    assert params.radius == pytest.approx(5 * 10.0 / 45)
    assert params.range == pytest.approx(10.0 + 10.0 / 45)
    assert params.n_internal == 50


def test_padding_shrinks_effective_width():
    params = compute_encoder_params(0.0, 1.0, n=100, w=21, padding=10)
    assert params.n_internal == 80


def test_unit_range_after_bootstrap():
    params = compute_encoder_params(10.0, 11.0, n=50, w=5, padding=0)
    assert params.resolution == pytest.approx(1.0 / 45)


@pytest.mark.parametrize("n, w", [(5, 5), (4, 5)])
def test_n_must_exceed_w(n, w):
    with pytest.raises(InvalidConfiguration):
        compute_encoder_params(0.0, 1.0, n=n, w=w, padding=0)
