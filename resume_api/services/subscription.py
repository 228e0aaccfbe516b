# =============================================================================
# Subscription Policy
# =============================================================================
"""
Pure mapping from subscription tier to usage limits.

No I/O happens here; callers pass in whatever user record they have.
"""

from dataclasses import dataclass
from typing import Optional, Protocol, Union

from resume_api.database.models import SubscriptionTier


@dataclass(frozen=True, slots=True)
class TierLimits:
    """
    Limits granted by a subscription tier.

    Attributes:
        max_resumes: Maximum number of non-deleted resumes.
    """

    max_resumes: int


TIER_LIMITS: dict[SubscriptionTier, TierLimits] = {
    SubscriptionTier.FREE: TierLimits(max_resumes=3),
    SubscriptionTier.BASIC: TierLimits(max_resumes=10),
    SubscriptionTier.PRO: TierLimits(max_resumes=50),
    SubscriptionTier.ENTERPRISE: TierLimits(max_resumes=999_999),
}


class SubscribedUser(Protocol):
    """Anything carrying a tier and a resume count, e.g. the User ORM model."""

    subscription_tier: Union[SubscriptionTier, str, None]
    resume_count: int


def limits_for(tier: Union[SubscriptionTier, str, None]) -> TierLimits:
    """
    Look up the limits of a tier.

    Args:
        tier: Tier enum member or its string value.

    Returns:
        The tier's limits; unknown or missing tiers get the free limits.
    """
    if tier is None:
        return TIER_LIMITS[SubscriptionTier.FREE]
    try:
        return TIER_LIMITS[SubscriptionTier(tier)]
    except ValueError:
        return TIER_LIMITS[SubscriptionTier.FREE]


def can_create_resume(user: Optional[SubscribedUser]) -> bool:
    """
    Whether the user may create one more resume.

    Args:
        user: User record with subscription_tier and resume_count.

    Returns:
        True iff resume_count is below the tier's max_resumes.
    """
    if user is None:
        return False
    return user.resume_count < limits_for(user.subscription_tier).max_resumes
