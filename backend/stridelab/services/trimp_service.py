"""Per-session training load (TRIMP) scoring.

This service turns one completed workout into a single Training Impulse
score. Two scoring paths exist:
- Heart rate (Banister TRIMP), used whenever the session has a positive
  average heart rate
- Pace and elevation, a fallback for sessions recorded without heart rate

Every degenerate input (missing, zero, negative or non-finite values)
scores 0. The functions never raise and never return NaN.
"""

import enum
import logging
import math
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Union

from stridelab.config import settings

logger = logging.getLogger(__name__)


class Sex(str, enum.Enum):
    """Athlete sex, selects the Banister gender factor."""
    MALE = "male"
    FEMALE = "female"


@dataclass(frozen=True)
class WorkoutSample:
    """One completed training session as seen by the load engine."""
    date: Union[date, datetime]
    duration_seconds: float
    distance_km: float = 0.0
    elevation_gain_m: float = 0.0
    avg_heart_rate: Optional[float] = None
    max_heart_rate: Optional[float] = None

    @property
    def has_heart_rate(self) -> bool:
        # 0 bpm is what devices report when no monitor was worn
        return self.avg_heart_rate is not None and self.avg_heart_rate > 0

    @property
    def duration_minutes(self) -> float:
        return self.duration_seconds / 60


@dataclass(frozen=True)
class AthleteProfile:
    """Read-only athlete context for heart-rate scoring.

    A missing max heart rate falls back to the session's own max heart rate.
    """
    max_heart_rate: Optional[float] = None
    resting_heart_rate: float = 60
    sex: Optional[Sex] = None


def _is_finite(*values: Optional[float]) -> bool:
    """True when every non-None value is a finite number."""
    for value in values:
        if value is None:
            continue
        try:
            if not math.isfinite(value):
                return False
        except TypeError:
            return False
    return True


def round_half_up(value: float, digits: int = 0) -> float:
    """Round halves away from the floor, the way dashboards display numbers."""
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


class TrimpService:
    """Score individual workouts with Banister TRIMP or a pace estimate."""

    MALE_GENDER_FACTOR = 1.92
    FEMALE_GENDER_FACTOR = 1.67
    INTENSITY_COEFFICIENT = 0.64

    DEFAULT_MAX_HEART_RATE = 190
    DEFAULT_RESTING_HEART_RATE = 60

    # (upper pace bound in min/km, intensity factor), ascending
    PACE_INTENSITY_STEPS = (
        (4.0, 0.9),   # Very fast
        (4.5, 0.8),   # Fast
        (5.0, 0.7),   # Moderate-fast
        (5.5, 0.6),   # Moderate
        (6.0, 0.5),   # Moderate-easy
        (7.0, 0.4),   # Easy
    )
    SLOWEST_PACE_INTENSITY = 0.3
    MAX_ELEVATION_BONUS = 0.2

    def __init__(
        self,
        gender_factor: float = MALE_GENDER_FACTOR,
        female_gender_factor: float = FEMALE_GENDER_FACTOR,
        default_max_heart_rate: float = DEFAULT_MAX_HEART_RATE,
        default_resting_heart_rate: float = DEFAULT_RESTING_HEART_RATE,
    ):
        """
        Args:
            gender_factor: Banister exponent used when the athlete's sex is
                unknown or male
            female_gender_factor: Banister exponent for female athletes
            default_max_heart_rate: Max HR assumed when neither a profile
                nor the session provides one
            default_resting_heart_rate: Resting HR assumed without a profile
        """
        self.gender_factor = gender_factor
        self.female_gender_factor = female_gender_factor
        self.default_max_heart_rate = default_max_heart_rate
        self.default_resting_heart_rate = default_resting_heart_rate

    def gender_factor_for(self, profile: Optional[AthleteProfile]) -> float:
        """Pick the Banister exponent for an athlete."""
        if profile is not None and profile.sex == Sex.FEMALE:
            return self.female_gender_factor
        return self.gender_factor

    def resolve_max_heart_rate(
        self,
        sample: Optional[WorkoutSample],
        profile: Optional[AthleteProfile] = None
    ) -> float:
        """Max heart rate from the profile, then the session, then the default."""
        if profile is not None and profile.max_heart_rate is not None:
            return profile.max_heart_rate
        if sample is not None and sample.max_heart_rate and sample.max_heart_rate > 0:
            return sample.max_heart_rate
        return self.default_max_heart_rate

    def score_session(
        self,
        sample: WorkoutSample,
        profile: Optional[AthleteProfile] = None
    ) -> int:
        """
        Calculate the training load of one session.

        The heart-rate path is chosen when the sample carries a positive
        average heart rate, otherwise pace and elevation are used.

        Args:
            sample: The workout to score
            profile: Athlete max/resting heart rate. Without a profile max
                the session's own max heart rate (or 190) is used, without
                a profile a resting heart rate of 60.

        Returns:
            Non-negative integer TRIMP score
        """
        numeric_fields = (
            sample.duration_seconds,
            sample.distance_km,
            sample.elevation_gain_m,
            sample.avg_heart_rate,
            sample.max_heart_rate,
        )
        if not _is_finite(*numeric_fields):
            logger.debug(f"Non-finite workout fields on {sample.date}, scoring 0")
            return 0

        if sample.duration_seconds is None or sample.duration_seconds <= 0:
            return 0

        if sample.has_heart_rate:
            resting_hr = self.default_resting_heart_rate
            if profile is not None:
                resting_hr = profile.resting_heart_rate
            return self.score_heart_rate(
                duration_minutes=sample.duration_minutes,
                avg_hr=sample.avg_heart_rate,
                max_hr=self.resolve_max_heart_rate(sample, profile),
                resting_hr=resting_hr,
                gender_factor=self.gender_factor_for(profile),
            )

        return self.score_pace(
            duration_minutes=sample.duration_minutes,
            distance_km=sample.distance_km,
            elevation_gain_m=sample.elevation_gain_m,
        )

    def score_heart_rate(
        self,
        duration_minutes: float,
        avg_hr: float,
        max_hr: float,
        resting_hr: float,
        gender_factor: Optional[float] = None
    ) -> int:
        """
        Banister TRIMP.

        HRR = (avg HR - resting HR) / (max HR - resting HR)
        TRIMP = minutes × HRR × 0.64 × e^(k × HRR)

        where k is the gender factor (1.92 male, 1.67 female).
        """
        if gender_factor is None:
            gender_factor = self.gender_factor

        if not _is_finite(duration_minutes, avg_hr, max_hr, resting_hr, gender_factor):
            return 0
        if duration_minutes <= 0 or avg_hr <= 0 or max_hr <= 0 or resting_hr <= 0:
            return 0
        if max_hr <= resting_hr:
            return 0

        hrr = (avg_hr - resting_hr) / (max_hr - resting_hr)
        if not math.isfinite(hrr) or hrr <= 0:
            return 0

        try:
            weight = hrr * self.INTENSITY_COEFFICIENT * math.exp(gender_factor * hrr)
        except OverflowError:
            return 0

        trimp = duration_minutes * weight
        if not math.isfinite(trimp) or trimp <= 0:
            return 0

        return int(round_half_up(trimp))

    def pace_intensity(self, pace_min_per_km: float) -> float:
        """Map pace (min/km) to an intensity factor, faster is harder."""
        for threshold, intensity in self.PACE_INTENSITY_STEPS:
            if pace_min_per_km < threshold:
                return intensity
        return self.SLOWEST_PACE_INTENSITY

    def score_pace(
        self,
        duration_minutes: float,
        distance_km: float,
        elevation_gain_m: float = 0.0
    ) -> int:
        """
        Estimate TRIMP from pace and climbing when heart rate is missing.

        TRIMP = minutes × (pace intensity + min(elevation / 1000, 0.2))
        """
        if not _is_finite(duration_minutes, distance_km, elevation_gain_m):
            return 0
        if duration_minutes <= 0 or distance_km is None or distance_km <= 0:
            return 0

        pace = duration_minutes / distance_km
        if not math.isfinite(pace):
            return 0

        intensity = self.pace_intensity(pace)

        elevation_bonus = 0.0
        if elevation_gain_m and elevation_gain_m > 0:
            elevation_bonus = min(elevation_gain_m / 1000, self.MAX_ELEVATION_BONUS)

        trimp = duration_minutes * (intensity + elevation_bonus)
        if not math.isfinite(trimp) or trimp <= 0:
            return 0

        return int(round_half_up(trimp))


# Create a singleton instance for convenience
trimp_service = TrimpService(
    gender_factor=settings.GENDER_FACTOR_MALE,
    female_gender_factor=settings.GENDER_FACTOR_FEMALE,
    default_max_heart_rate=settings.DEFAULT_MAX_HEART_RATE,
    default_resting_heart_rate=settings.DEFAULT_RESTING_HEART_RATE,
)
