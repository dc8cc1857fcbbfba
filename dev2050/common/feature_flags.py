# dev2050/common/feature_flags.py

from fastapi import Depends, HTTPException, Request, status
from pydantic import BaseModel

from dev2050.common.config import Settings
from dev2050.common.utils.global_messages import GlobalMessages

class FeatureFlags(BaseModel):
    """
    Feature gates resolved once at startup and injected into handlers.
    """
    features_enabled: bool = False

    class Config:
        frozen = True

    @classmethod
    def from_settings(cls, settings: Settings) -> "FeatureFlags":
        return cls(features_enabled=settings.FEATURES_ENABLED)

def get_feature_flags(request: Request) -> FeatureFlags:
    return request.app.state.feature_flags

def require_beta_features(flags: FeatureFlags = Depends(get_feature_flags)) -> FeatureFlags:
    if not flags.features_enabled:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=GlobalMessages.FEATURE_DISABLED
        )
    return flags
