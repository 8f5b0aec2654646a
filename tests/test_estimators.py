"""Tests for the frequency estimators."""

import math

import numpy as np
import pytest

from pitchengine.core import (
    Buffer,
    InvalidBufferError,
    EmptyBufferError,
    UnresolvablePeakError,
)
from pitchengine.estimation import (
    Estimator,
    EstimationStrategy,
    MaxValueEstimator,
    QuadraticEstimator,
    BarycentricEstimator,
    JainsEstimator,
    QuinnsFirstEstimator,
    QuinnsSecondEstimator,
    HPSEstimator,
    YINEstimator,
)
from pitchengine.transform import FFTTransformer, PassthroughTransformer

MAGNITUDE_ESTIMATORS = [
    MaxValueEstimator,
    QuadraticEstimator,
    BarycentricEstimator,
    JainsEstimator,
]

SPECTRAL_STRATEGIES = [
    EstimationStrategy.MAX_VALUE,
    EstimationStrategy.QUADRATIC,
    EstimationStrategy.BARYCENTRIC,
    EstimationStrategy.QUINNS_FIRST,
    EstimationStrategy.QUINNS_SECOND,
    EstimationStrategy.JAINS,
]


def peak_spectrum(count: int = 128, index: int = 50, left: float = 0.4, right: float = 0.7):
    """Magnitude spectrum with one dominant bin and smaller neighbors."""
    elements = np.full(count, 0.01)
    elements[index - 1] = left
    elements[index] = 1.0
    elements[index + 1] = right
    return Buffer(elements=elements)


class TestBinMapping:
    """Tests for the shared bin-to-frequency mapping."""

    def test_exact_mapping(self):
        frequency = Estimator.frequency_for_location(44100, 100, 2048)
        assert frequency == pytest.approx(100 * 44100 / (2 * 2048), abs=0.01)
        assert frequency == pytest.approx(1076.66, abs=0.01)

    def test_fractional_location(self):
        frequency = Estimator.frequency_for_location(44100, 100.5, 2048)
        assert frequency == pytest.approx(100.5 * 44100 / 4096)

    def test_sanitize_keeps_location_in_range(self):
        elements = np.zeros(10)
        assert Estimator.sanitize(4.3, 4, elements) == 4.3
        assert Estimator.sanitize(-0.3, 0, elements) == 0.0
        assert Estimator.sanitize(10.2, 9, elements) == 9.0
        assert Estimator.sanitize(float("nan"), 5, elements) == 5.0


class TestPeakLocation:
    """Tests for the arg-max refinement family."""

    @pytest.mark.parametrize("estimator_cls", MAGNITUDE_ESTIMATORS)
    def test_refined_location_within_one_bin(self, estimator_cls):
        location = estimator_cls().estimate_location(peak_spectrum())
        assert abs(location - 50) <= 1.0

    @pytest.mark.parametrize("estimator_cls", MAGNITUDE_ESTIMATORS)
    def test_refinement_leans_toward_larger_neighbor(self, estimator_cls):
        location = estimator_cls().estimate_location(peak_spectrum(left=0.2, right=0.8))
        assert 50 <= location <= 51

    @pytest.mark.parametrize("estimator_cls", MAGNITUDE_ESTIMATORS)
    def test_edge_peak_returns_raw_bin(self, estimator_cls):
        first = Buffer(elements=[1.0, 0.5, 0.1, 0.05])
        last = Buffer(elements=[0.05, 0.1, 0.5, 1.0])

        assert estimator_cls().estimate_location(first) == 0.0
        assert estimator_cls().estimate_location(last) == 3.0

    def test_max_value_is_unrefined(self):
        assert MaxValueEstimator().estimate_location(peak_spectrum()) == 50.0

    def test_quadratic_formula(self):
        buffer = Buffer(elements=[0.0, 1.0, 3.0, 2.0, 0.0])
        # 0.5 * (1 - 2) / (1 - 6 + 2)
        assert QuadraticEstimator().estimate_location(buffer) == pytest.approx(2 + 1 / 6)

    def test_barycentric_formula(self):
        buffer = Buffer(elements=[0.0, 1.0, 3.0, 2.0, 0.0])
        # (2 - 1) / (1 + 3 + 2)
        assert BarycentricEstimator().estimate_location(buffer) == pytest.approx(2 + 1 / 6)

    def test_jains_formula(self):
        right = Buffer(elements=[0.0, 1.0, 3.0, 2.0, 0.0])
        left = Buffer(elements=[0.0, 2.0, 3.0, 1.0, 0.0])

        # Toward the larger neighbor: +2 / (3 + 2) and -2 / (3 + 2)
        assert JainsEstimator().estimate_location(right) == pytest.approx(2.4)
        assert JainsEstimator().estimate_location(left) == pytest.approx(1.6)

    def test_quinns_requires_components(self):
        with pytest.raises(UnresolvablePeakError):
            QuinnsFirstEstimator().estimate_location(peak_spectrum())
        with pytest.raises(UnresolvablePeakError):
            QuinnsSecondEstimator().estimate_location(peak_spectrum())

    @pytest.mark.parametrize("estimator_cls", [QuinnsFirstEstimator, QuinnsSecondEstimator])
    def test_quinns_within_one_bin(self, estimator_cls, sine):
        frame = sine(1000.0, 4096)
        buffer = FFTTransformer(retain_components=True).transform(frame)
        peak = int(np.argmax(buffer.elements))

        location = estimator_cls().estimate_location(buffer)
        assert abs(location - peak) <= 1.0


class TestSpectralEstimation:
    """End-to-end spectral estimation on sine waves."""

    @pytest.mark.parametrize("strategy", SPECTRAL_STRATEGIES)
    @pytest.mark.parametrize("freq", [220.0, 440.0, 1000.0])
    def test_sine_within_one_bin(self, strategy, freq, sine, sample_rate):
        estimator = strategy.estimator
        buffer = estimator.transformer.transform(sine(freq, 4096, sr=sample_rate))

        estimate = estimator.estimate(sample_rate, buffer)

        bin_width = sample_rate / 4096
        assert abs(estimate - freq) <= bin_width

    def test_interpolation_beats_max_value(self, sine, sample_rate):
        # 440 Hz sits between bins 40 and 41 at 44.1 kHz / 4096
        buffer = FFTTransformer().transform(sine(440.0, 4096, sr=sample_rate))

        raw = MaxValueEstimator().estimate(sample_rate, buffer)
        refined = QuadraticEstimator().estimate(sample_rate, buffer)

        assert abs(refined - 440.0) < abs(raw - 440.0)

    @pytest.mark.parametrize("strategy", [EstimationStrategy.QUINNS_FIRST, EstimationStrategy.QUINNS_SECOND])
    @pytest.mark.parametrize("freq", [330.0, 523.25, 880.0, 1500.0])
    def test_quinns_beats_max_value_between_bins(self, strategy, freq, sine, sample_rate):
        # Each of these lies 0.25-0.4 of a bin away from the nearest bin center
        frame = sine(freq, 4096, sr=sample_rate)
        estimator = strategy.estimator

        raw = MaxValueEstimator().estimate(sample_rate, FFTTransformer().transform(frame))
        refined = estimator.estimate(sample_rate, estimator.transformer.transform(frame))

        assert abs(refined - freq) < abs(raw - freq)
        assert refined == pytest.approx(freq, abs=0.5)


class TestHPS:
    """Tests for the harmonic product spectrum estimator."""

    def test_selects_fundamental(self):
        elements = np.full(512, 0.01)
        elements[20] = 1.0
        elements[40] = 0.8
        elements[60] = 0.6

        estimator = HPSEstimator(harmonics=4)
        assert estimator.estimate_location(Buffer(elements=elements)) == 20.0

    def test_selects_fundamental_over_stronger_harmonic(self):
        elements = np.full(512, 0.01)
        elements[20] = 0.5
        elements[40] = 1.0
        elements[60] = 0.8
        elements[80] = 0.6

        assert HPSEstimator(harmonics=4).estimate_location(Buffer(elements=elements)) == 20.0

    def test_product_range(self):
        product = HPSEstimator(harmonics=5).product_spectrum(np.ones(101))
        # ceil(101 / 5)
        assert len(product) == 21

    def test_harmonic_tone(self, sine, sample_rate):
        frame = sine(220.0, 4096, sr=sample_rate, harmonics=5)
        estimator = HPSEstimator()

        estimate = estimator.estimate(sample_rate, estimator.transformer.transform(frame))

        assert abs(estimate - 220.0) <= sample_rate / 4096

    def test_silent_spectrum_is_unresolvable(self):
        with pytest.raises(UnresolvablePeakError):
            HPSEstimator().estimate_location(Buffer(elements=np.zeros(64)))

    def test_harmonics_validation(self):
        with pytest.raises(ValueError):
            HPSEstimator(harmonics=1)


class TestYIN:
    """Tests for the autocorrelation estimator."""

    @pytest.mark.parametrize("freq", [80.0, 110.0, 220.0, 440.0, 659.25, 1000.0])
    def test_sine_within_one_percent(self, freq, sine, sample_rate):
        estimator = YINEstimator()
        buffer = estimator.transformer.transform(sine(freq, 4096, sr=sample_rate))

        estimate = estimator.estimate(sample_rate, buffer)

        assert estimate == pytest.approx(freq, rel=0.01)

    @pytest.mark.parametrize("sr", [8000, 16000, 22050, 44100, 48000])
    @pytest.mark.parametrize("freq", [80.0, 110.0, 196.0, 261.63, 333.3, 440.0, 659.25, 950.0, 1000.0])
    @pytest.mark.parametrize("extra", [0, 1, 7])
    def test_shortest_frame(self, sr, freq, extra, sine):
        # Two periods, so the period sits at the end of the lag range
        n = math.ceil(2 * sr / freq) + extra

        estimate = YINEstimator().estimate(sr, Buffer(elements=sine(freq, n, sr=sr)))

        assert estimate == pytest.approx(freq, rel=0.01)

    @pytest.mark.parametrize("freq", [333.3, 1000.0])
    @pytest.mark.parametrize("phase", np.linspace(0, 2 * np.pi, 8, endpoint=False))
    def test_shortest_frame_any_phase(self, freq, phase, sample_rate):
        n = math.ceil(2 * sample_rate / freq)
        frame = 0.5 * np.sin(2 * np.pi * freq * np.arange(n) / sample_rate + phase)

        estimate = YINEstimator().estimate(sample_rate, Buffer(elements=frame))

        assert estimate == pytest.approx(freq, rel=0.01)

    def test_harmonic_tone(self, sine, sample_rate):
        frame = sine(196.0, 4096, sr=sample_rate, harmonics=4)
        estimate = YINEstimator().estimate(sample_rate, Buffer(elements=frame))
        assert estimate == pytest.approx(196.0, rel=0.01)

    def test_difference_function_zero_at_period(self):
        # Period of exactly 20 samples
        t = np.arange(1000)
        frame = np.sin(2 * np.pi * t / 20)

        diff = YINEstimator.difference(frame)

        # Lags 0..N/2 plus one trailing neighbor
        assert len(diff) == 502
        assert diff[0] == 0.0
        assert diff[20] == pytest.approx(0.0, abs=1e-6)
        assert diff[10] > 1.0

    def test_cmndf_starts_at_one(self, sine):
        cmndf = YINEstimator.cumulative_mean_normalized_difference(sine(440.0, 2048))
        assert cmndf[0] == 1.0
        assert cmndf[1] == pytest.approx(1.0)

    def test_noise_falls_back_to_global_minimum(self):
        rng = np.random.default_rng(7)
        frame = rng.standard_normal(2048)

        estimate = YINEstimator(threshold=0.01).estimate(44100, Buffer(elements=frame))

        assert np.isfinite(estimate)
        assert estimate > 0

    def test_silent_frame_is_unresolvable(self):
        with pytest.raises(UnresolvablePeakError):
            YINEstimator().estimate(44100, Buffer(elements=np.zeros(1024)))

    def test_short_frame_is_unresolvable(self):
        with pytest.raises(UnresolvablePeakError):
            YINEstimator().estimate(44100, Buffer(elements=[0.1, 0.2]))

    def test_threshold_validation(self):
        with pytest.raises(ValueError):
            YINEstimator(threshold=0.0)
        with pytest.raises(ValueError):
            YINEstimator(threshold=1.5)


class TestEmptyBuffer:
    """Every strategy rejects an empty buffer."""

    @pytest.mark.parametrize("strategy", list(EstimationStrategy))
    def test_empty_buffer_fails(self, strategy):
        with pytest.raises(EmptyBufferError):
            strategy.estimator.estimate(44100, Buffer(elements=[]))

    @pytest.mark.parametrize("strategy", list(EstimationStrategy))
    def test_empty_buffer_is_buffer_error(self, strategy):
        with pytest.raises(InvalidBufferError):
            strategy.estimator.estimate(44100, Buffer(elements=[]))


class TestEstimationStrategy:
    """Tests for the strategy tag."""

    def test_eight_strategies(self):
        assert len(EstimationStrategy) == 8

    def test_each_strategy_builds_its_estimator(self):
        expected = {
            EstimationStrategy.MAX_VALUE: MaxValueEstimator,
            EstimationStrategy.QUADRATIC: QuadraticEstimator,
            EstimationStrategy.BARYCENTRIC: BarycentricEstimator,
            EstimationStrategy.QUINNS_FIRST: QuinnsFirstEstimator,
            EstimationStrategy.QUINNS_SECOND: QuinnsSecondEstimator,
            EstimationStrategy.JAINS: JainsEstimator,
            EstimationStrategy.HPS: HPSEstimator,
            EstimationStrategy.YIN: YINEstimator,
        }
        for strategy, estimator_cls in expected.items():
            assert type(strategy.estimator) is estimator_cls

    def test_transformer_selection(self):
        assert isinstance(EstimationStrategy.YIN.estimator.transformer, PassthroughTransformer)

        quinns = EstimationStrategy.QUINNS_FIRST.estimator.transformer
        assert isinstance(quinns, FFTTransformer)
        assert quinns.retain_components

        quadratic = EstimationStrategy.QUADRATIC.estimator.transformer
        assert isinstance(quadratic, FFTTransformer)
        assert not quadratic.retain_components

    def test_from_name(self):
        assert EstimationStrategy.from_name("yin") is EstimationStrategy.YIN
        assert EstimationStrategy.from_name("QUINNS_FIRST") is EstimationStrategy.QUINNS_FIRST
        assert EstimationStrategy.from_name(" Max Value ") is EstimationStrategy.MAX_VALUE

    def test_from_name_unknown(self):
        with pytest.raises(ValueError, match="Unknown estimation strategy"):
            EstimationStrategy.from_name("cepstrum")
