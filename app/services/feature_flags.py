"""
Feature flags gating selection analysis.

Usage:
    flags = FeatureFlagService.from_settings()
    gate = ActivationGate(flags.predicate(SELECTION_ANALYSIS_FLAG))

    if gate.is_enabled(profile):
        ...
"""
import hashlib
import logging
from dataclasses import dataclass, field, replace
from typing import Callable, Optional

from app.core.config import settings
from app.core.logger import logger
from app.models.selection import UserProfile


SELECTION_ANALYSIS_FLAG = settings.SELECTION_ANALYSIS_FLAG


@dataclass(frozen=True)
class FeatureFlag:
    """One flag: global switch, rollout percentage and per-user overrides."""
    id: str
    enabled: bool = False
    rolloutPercentage: int = 100
    overrides: dict[str, bool] = field(default_factory=dict)
    description: str = ""


def user_id_for(profile: UserProfile) -> str:
    """Derive a stable pseudo user id from profile data."""
    fitness_level = profile.fitnessLevel or "unknown"
    goals = ",".join(profile.goals) or "no-goals"
    styles = ",".join(profile.preferences.workoutStyle) or "no-style"
    user_data = f"{fitness_level}-{goals}-{styles}"
    return hashlib.md5(user_data.encode()).hexdigest()[:12]


def rollout_bucket(user_id: str, flag_id: str) -> int:
    """Consistent bucket in 1..100 for a user and flag."""
    hash_value = int(hashlib.md5(f"{user_id}:{flag_id}".encode()).hexdigest(), 16)
    return hash_value % 100 + 1


class FeatureFlagService:
    """
    In-memory feature flag table.

    A flag is on for a user when it exists and is enabled, and either the
    user has an override (which wins) or their rollout bucket falls within
    the rollout percentage.
    """

    def __init__(self, flags: Optional[list[FeatureFlag]] = None):
        self._flags: dict[str, FeatureFlag] = {flag.id: flag for flag in flags or []}

    @classmethod
    def from_settings(cls) -> "FeatureFlagService":
        return cls([
            FeatureFlag(
                id=SELECTION_ANALYSIS_FLAG,
                enabled=settings.SELECTION_ANALYSIS_ENABLED,
                rolloutPercentage=settings.SELECTION_ANALYSIS_ROLLOUT,
                description="AI-powered workout selection analysis",
            )
        ])

    def is_enabled(self, flag_id: str, profile: UserProfile) -> bool:
        flag = self._flags.get(flag_id)
        if flag is None or not flag.enabled:
            return False

        user_id = user_id_for(profile)
        if user_id in flag.overrides:
            return flag.overrides[user_id]

        if flag.rolloutPercentage >= 100:
            return True
        if flag.rolloutPercentage <= 0:
            return False
        return rollout_bucket(user_id, flag_id) <= flag.rolloutPercentage

    def get_flag(self, flag_id: str) -> Optional[FeatureFlag]:
        return self._flags.get(flag_id)

    def set_flag(self, flag_id: str, **updates) -> FeatureFlag:
        """Create or update a flag. Unknown fields raise TypeError."""
        current = self._flags.get(flag_id) or FeatureFlag(id=flag_id)
        updated = replace(current, **updates)
        if not 0 <= updated.rolloutPercentage <= 100:
            raise ValueError(f"rolloutPercentage must be within 0-100, got {updated.rolloutPercentage}")
        self._flags[flag_id] = updated
        logger.info(f"Feature flag updated: {flag_id} enabled={updated.enabled} "
                    f"rollout={updated.rolloutPercentage}")
        return updated

    def add_override(self, flag_id: str, profile: UserProfile, enabled: bool) -> FeatureFlag:
        current = self._flags.get(flag_id) or FeatureFlag(id=flag_id)
        overrides = {**current.overrides, user_id_for(profile): enabled}
        return self.set_flag(flag_id, overrides=overrides)

    def disable(self, flag_id: str) -> FeatureFlag:
        return self.set_flag(flag_id, enabled=False, rolloutPercentage=0)

    def predicate(self, flag_id: str) -> Callable[[UserProfile], bool]:
        return lambda profile: self.is_enabled(flag_id, profile)


class ActivationGate:
    """Decides whether analysis may run for a profile. Fails closed."""

    def __init__(
        self,
        predicate: Callable[[UserProfile], bool],
        flag_id: str = SELECTION_ANALYSIS_FLAG,
        log: Optional[logging.Logger] = None,
    ):
        self.predicate = predicate
        self.flag_id = flag_id
        self.log = log or logger

    def is_enabled(self, profile: Optional[UserProfile]) -> bool:
        if profile is None:
            return False
        try:
            return bool(self.predicate(profile))
        except Exception as e:
            self.log.warning(f"Feature flag check failed for {self.flag_id}, treating as disabled: {e}")
            return False
