"""
Formula-focused unit tests for the core training engine.

Each test verifies one formula or lookup table:
- readiness weighting and normalisation
- Epley 1RM estimate and load rounding
- adaptation scalers (readiness band × mode) and their application per block
- equipment filter

Values are hand-computed from the formulas so the tests act as a reference.
"""

import pytest

from praxis_engine.core.adaptation import (
    adjust_workout_for_today,
    base_scaler,
    final_scaler,
    intensity_to_zone,
    mode_multiplier,
    scale_accessory_set,
    scale_strength_set,
    zone_to_intensity,
)
from praxis_engine.core.config import (
    ADAPTATION_MODE_MULTIPLIERS,
    ENERGY_WEIGHT,
    SLEEP_WEIGHT,
    SORENESS_WEIGHT,
    STRESS_WEIGHT,
)
from praxis_engine.core.equipment import filter_usable, usable
from praxis_engine.core.exercises import Exercise
from praxis_engine.core.max_estimator import estimate_1rm
from praxis_engine.core.metrics import (
    clamp,
    load_for_percent,
    round_half_up,
    round_to_increment,
    session_duration_minutes,
    session_total_volume,
)
from praxis_engine.core.models import (
    BLOCK_TYPES,
    AccessoryBlock,
    CompletedSet,
    ConditioningBlock,
    ConditioningPrescription,
    CooldownBlock,
    ExercisePrescription,
    ReadinessInput,
    SetPrescription,
    StrengthBlock,
    WarmupBlock,
    WorkoutPlanDay,
    WorkoutSessionLog,
)
from praxis_engine.core.readiness import calculate_readiness, normalize_rating

# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------


def _ratings(sleep: int, energy: int, soreness: int, stress: int) -> ReadinessInput:
    return ReadinessInput(sleep_quality=sleep, energy=energy, soreness=soreness, stress=stress)


def _strength_sets(reps: int, percents: list[float]) -> list[SetPrescription]:
    return [SetPrescription(target_reps=reps, target_percent_1rm=p) for p in percents]


def _planned_day() -> WorkoutPlanDay:
    """A hand-built day covering every block variant."""
    return WorkoutPlanDay(
        id="mixed-2026-03-02",
        user_id="u1",
        date="2026-03-02",
        day_index=0,
        focus_tags=["mixed"],
        blocks=[
            WarmupBlock(id="w", title="Warm-Up", estimated_duration_minutes=11,
                        items=["Dead Bug", "Glute Bridge", "Bodyweight Squat"]),
            StrengthBlock(
                id="s",
                title="Main Lift – Back Squat",
                estimated_duration_minutes=31,
                main=ExercisePrescription("back_squat", _strength_sets(5, [70.0, 80.0, 80.0])),
                secondary=[
                    ExercisePrescription(
                        "rdl", [SetPrescription(target_reps=8, target_rpe=8.0) for _ in range(3)]
                    )
                ],
            ),
            AccessoryBlock(
                id="a",
                title="Accessory Work",
                estimated_duration_minutes=20,
                exercises=[
                    ExercisePrescription(
                        "db_split_squat",
                        [SetPrescription(target_reps=10, target_rpe=7.0) for _ in range(3)],
                    )
                ],
            ),
            ConditioningBlock(
                id="c",
                title="Engine – Rowing Intervals",
                estimated_duration_minutes=16,
                conditioning=ConditioningPrescription(
                    mode="interval", work_seconds=60, rest_seconds=60, rounds=8,
                    target_zone="Z4", exercise_id="rower_intervals",
                ),
            ),
            CooldownBlock(id="cd", title="Cooldown", estimated_duration_minutes=5,
                          items=["Easy walk", "Breathing"]),
        ],
        estimated_duration_minutes=60,
    )


# ===========================================================================
# Readiness
# ===========================================================================


class TestReadiness:
    """score = 0.30·sleep + 0.30·energy + 0.20·(100−soreness) + 0.20·(100−stress)"""

    def test_weights_sum_to_one(self):
        assert SLEEP_WEIGHT + ENERGY_WEIGHT + SORENESS_WEIGHT + STRESS_WEIGHT == pytest.approx(1.0)

    def test_normalize_rating_endpoints(self):
        assert normalize_rating(1) == 0.0
        assert normalize_rating(3) == 50.0
        assert normalize_rating(5) == 100.0

    def test_best_ratings_score_100(self):
        assert calculate_readiness(_ratings(5, 5, 1, 1)).score == 100

    def test_worst_ratings_score_0(self):
        assert calculate_readiness(_ratings(1, 1, 5, 5)).score == 0

    def test_good_day_scores_high(self):
        """(5,4,2,1): 30 + 22.5 + 15 + 20 = 87.5 → 88 (half-up)."""
        result = calculate_readiness(_ratings(5, 4, 2, 1))
        assert 70 < result.score <= 100
        assert result.score in (87, 88)

    def test_factors_are_inverted_for_soreness_and_stress(self):
        """Soreness 5 and stress 4 → factors 0 and 25."""
        factors = calculate_readiness(_ratings(3, 3, 5, 4)).factors
        assert factors.soreness == pytest.approx(0.0)
        assert factors.stress == pytest.approx(25.0)
        assert factors.sleep == pytest.approx(50.0)

    def test_mid_ratings(self):
        """All 3s: every factor 50 → 50."""
        assert calculate_readiness(_ratings(3, 3, 3, 3)).score == 50

    def test_out_of_range_extrapolates(self):
        """The scorer itself never raises; validation is the caller's job."""
        result = calculate_readiness(_ratings(6, 6, 1, 1))
        assert result.score > 100


# ===========================================================================
# 1RM and load rounding
# ===========================================================================


class TestOneRepMax:
    """1RM = weight × (1 + reps / 30)"""

    def test_epley_value(self):
        assert estimate_1rm(100.0, 10) == pytest.approx(133.333, rel=1e-4)

    def test_single_rep_is_slightly_above_weight(self):
        assert estimate_1rm(100.0, 1) == pytest.approx(103.333, rel=1e-4)

    @pytest.mark.parametrize("weight,reps", [(20.0, 1), (60.0, 5), (142.5, 3), (1.0, 30)])
    def test_estimate_exceeds_weight(self, weight, reps):
        assert estimate_1rm(weight, reps) > weight

    @pytest.mark.parametrize("reps", [0, 1, 12])
    def test_zero_weight_gives_zero(self, reps):
        assert estimate_1rm(0.0, reps) == 0.0

    def test_zero_reps_gives_weight(self):
        assert estimate_1rm(80.0, 0) == 80.0

    def test_negative_reps_clamped(self):
        assert estimate_1rm(80.0, -3) == 80.0


class TestRounding:
    def test_round_half_up(self):
        assert round_half_up(2.5) == 3
        assert round_half_up(3.5) == 4
        assert round_half_up(2.4) == 2

    def test_round_to_increment(self):
        """47.25 / 2.5 = 18.9 → 19 × 2.5 = 47.5"""
        assert round_to_increment(47.25, 2.5) == 47.5

    def test_clamp(self):
        assert clamp(11.0, 1.0, 10.0) == 10.0
        assert clamp(0.2, 1.0, 10.0) == 1.0

    def test_metric_load(self):
        """100 kg at 77% = 77 → 30.8 steps → 31 × 2.5 = 77.5 kg"""
        assert load_for_percent(100.0, 77.0, "metric") == 77.5

    def test_imperial_load(self):
        """315 lb at 75% = 236.25 → 47.25 steps → 47 × 5 = 235 lb"""
        assert load_for_percent(315.0, 75.0, "imperial") == 235.0

    def test_no_one_rm_gives_zero(self):
        assert load_for_percent(0.0, 80.0) == 0.0


# ===========================================================================
# Adaptation
# ===========================================================================


class TestAdaptationScalers:
    @pytest.mark.parametrize("score,expected", [
        (0, 0.75), (39, 0.75), (40, 0.90), (59, 0.90),
        (60, 1.00), (80, 1.00), (81, 1.10), (100, 1.10),
    ])
    def test_base_scaler_bands(self, score, expected):
        assert base_scaler(score) == expected

    def test_mode_multipliers(self):
        assert mode_multiplier("conservative") == 0.90
        assert mode_multiplier("automatic") == 1.00
        assert mode_multiplier("aggressive") == 1.15
        assert set(ADAPTATION_MODE_MULTIPLIERS) == {"conservative", "automatic", "aggressive"}

    def test_unknown_mode_behaves_like_automatic(self):
        assert mode_multiplier("reckless") == 1.0

    def test_final_scaler_low_conservative(self):
        assert final_scaler(30, "conservative") == pytest.approx(0.675)

    def test_zone_parsing(self):
        assert zone_to_intensity("Z4") == 4
        assert zone_to_intensity("zone?") == 3
        assert intensity_to_zone(2.7) == "Z3"
        assert intensity_to_zone(7.0) == "Z5"
        assert intensity_to_zone(0.2) == "Z1"


class TestScaleSets:
    def test_strength_percent_reps_and_rpe(self):
        """70% × 0.675 = 47.25 → 47.5; 5 reps → 3.375 → 3"""
        s = scale_strength_set(SetPrescription(5, target_percent_1rm=70.0), 0.675)
        assert s.target_percent_1rm == 47.5
        assert s.target_reps == 3
        assert s.target_rpe is None

    def test_rpe_clamped(self):
        s = scale_strength_set(SetPrescription(5, target_rpe=9.5), 1.265)
        assert s.target_rpe == 10.0

    def test_high_rep_sets_keep_reps(self):
        s = scale_strength_set(SetPrescription(20, target_rpe=7.0), 0.675)
        assert s.target_reps == 20

    def test_accessory_damped(self):
        """Damped scaler (0.675 − 1)·0.5 + 1 = 0.8375; 10 reps → 8.375 → 8"""
        s = scale_accessory_set(SetPrescription(10, target_rpe=7.0), 0.675)
        assert s.target_reps == 8
        assert s.target_rpe == 7.0


class TestAdjustWorkout:
    def test_scaling_disabled_returns_equal_day(self):
        day = _planned_day()
        adjusted = adjust_workout_for_today(day, 20, "conservative", scaling_enabled=False)
        assert adjusted == day
        assert adjusted.adjusted_for_readiness is False

    def test_low_readiness_conservative(self):
        """Final scaler 0.75 × 0.90 = 0.675."""
        day = _planned_day()
        adjusted = adjust_workout_for_today(day, 30, "conservative")

        assert adjusted.adjusted_for_readiness is True
        strength = adjusted.blocks_of_type("strength")[0]
        # 70 → 47.25 → 47.5 ; 80 → 54.0 → 55.0
        assert [s.target_percent_1rm for s in strength.main.sets] == [47.5, 55.0, 55.0]
        assert all(s.target_reps == 3 for s in strength.main.sets)
        # RPE 8 × 0.675 = 5.4, reps 8 → 5.4 → 5
        secondary = strength.secondary[0].sets[0]
        assert secondary.target_rpe == pytest.approx(5.4)
        assert secondary.target_reps == 5

    def test_warmup_and_cooldown_untouched(self):
        day = _planned_day()
        adjusted = adjust_workout_for_today(day, 30, "conservative")
        assert adjusted.blocks_of_type("warmup") == day.blocks_of_type("warmup")
        assert adjusted.blocks_of_type("cooldown") == day.blocks_of_type("cooldown")

    def test_conditioning_zone_scaled(self):
        """Z4 × 0.675 = 2.7 → Z3"""
        adjusted = adjust_workout_for_today(_planned_day(), 30, "conservative")
        block = adjusted.blocks_of_type("conditioning")[0]
        assert block.conditioning.target_zone == "Z3"
        assert block.conditioning.rounds == 8

    def test_high_readiness_aggressive(self):
        """1.10 × 1.15 = 1.265; 80% → 101.2 → 100.0; Z4 → 5.06 → Z5"""
        adjusted = adjust_workout_for_today(_planned_day(), 90, "aggressive")
        strength = adjusted.blocks_of_type("strength")[0]
        assert strength.main.sets[1].target_percent_1rm == 100.0
        conditioning = adjusted.blocks_of_type("conditioning")[0]
        assert conditioning.conditioning.target_zone == "Z5"

    def test_duration_never_changes(self):
        day = _planned_day()
        adjusted = adjust_workout_for_today(day, 10, "conservative")
        assert adjusted.estimated_duration_minutes == day.estimated_duration_minutes
        assert [b.estimated_duration_minutes for b in adjusted.blocks] == [
            b.estimated_duration_minutes for b in day.blocks
        ]

    def test_adjusting_the_original_twice_is_idempotent(self):
        day = _planned_day()
        once = adjust_workout_for_today(day, 45, "automatic")
        twice = adjust_workout_for_today(day, 45, "automatic")
        assert once == twice

    def test_original_not_mutated(self):
        day = _planned_day()
        adjust_workout_for_today(day, 30, "conservative")
        assert day.blocks_of_type("strength")[0].main.sets[0].target_percent_1rm == 70.0
        assert day.adjusted_for_readiness is False

    def test_rest_day_passes_through(self):
        rest = WorkoutPlanDay(
            id="rest-2026-03-03", user_id="u1", date="2026-03-03", day_index=1,
            focus_tags=["rest"], blocks=[], estimated_duration_minutes=0,
        )
        adjusted = adjust_workout_for_today(rest, 30, "conservative")
        assert adjusted.blocks == []
        assert adjusted.estimated_duration_minutes == 0


# ===========================================================================
# Block variants
# ===========================================================================


class TestBlockVariants:
    def test_registry_keys_match_block_type(self):
        assert set(BLOCK_TYPES) == {"warmup", "strength", "accessory", "conditioning", "cooldown"}
        for key, cls in BLOCK_TYPES.items():
            assert cls.block_type == key

    def test_every_variant_is_documented(self):
        """dataclass fills in a signature docstring when a class has none."""
        for cls in BLOCK_TYPES.values():
            assert cls.__doc__
            assert not cls.__doc__.startswith(f"{cls.__name__}(")


# ===========================================================================
# Equipment filter
# ===========================================================================


def _exercise(ex_id: str, equipment: tuple[str, ...]) -> Exercise:
    return Exercise(id=ex_id, name=ex_id, pattern="squat", modality="test", equipment_ids=equipment)


class TestEquipmentFilter:
    def test_no_equipment_always_usable(self):
        assert usable(_exercise("air_squat", ()), [])

    def test_any_owned_item_is_enough(self):
        assert usable(_exercise("goblet", ("dumbbell", "kettlebell")), ["kettlebell"])

    def test_missing_equipment(self):
        assert not usable(_exercise("back_squat", ("barbell",)), ["dumbbell"])

    def test_filter_preserves_order(self):
        exercises = [
            _exercise("a", ("barbell",)),
            _exercise("b", ()),
            _exercise("c", ("rower",)),
            _exercise("d", ("barbell", "rack")),
        ]
        assert [ex.id for ex in filter_usable(exercises, ["barbell"])] == ["a", "b", "d"]


# ===========================================================================
# Session metrics
# ===========================================================================


class TestSessionMetrics:
    def _session(self, completed_at: str | None) -> WorkoutSessionLog:
        return WorkoutSessionLog(
            id="s1",
            user_id="u1",
            date="2026-03-02",
            started_at="2026-03-02T10:00:00Z",
            completed_at=completed_at,
            completed_sets=[
                CompletedSet("blk", "back_squat", 0, weight=100.0, reps=5),
                CompletedSet("blk", "back_squat", 1, weight=100.0, reps=4),
                CompletedSet("blk", "plank", 2),
            ],
        )

    def test_total_volume_skips_unrecorded_sets(self):
        assert session_total_volume(self._session(None)) == 900.0

    def test_duration(self):
        assert session_duration_minutes(self._session("2026-03-02T10:45:00Z")) == 45

    def test_unfinished_session_has_no_duration(self):
        assert session_duration_minutes(self._session(None)) is None
