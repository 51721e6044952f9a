"""
Shared data models used across modules.

These models are shared infrastructure, not business logic.
Module-specific models should stay in their respective module directories.
"""

from typing import Optional
from pydantic import BaseModel, Field


class Identity(BaseModel):
    """
    One account as known to the identity provider.

    The session store owns the live reference; every consumer reads it
    through the store instead of keeping a copy.
    """

    id: str = Field(..., description="Stable opaque user ID from the provider")
    email: Optional[str] = Field(None, description="Account email, if any")
    email_verified: bool = Field(
        default=False,
        description="Out-of-band email confirmation done (never reverts)",
    )

    model_config = {
        "frozen": True,  # Make immutable for safety
        "extra": "ignore",
    }

    def merged_with(self, fresh: "Identity") -> "Identity":
        """
        Combine a freshly fetched copy of this identity with the current one.

        The verification flag only moves from false to true.
        """
        if fresh.id != self.id:
            return fresh
        if self.email_verified and not fresh.email_verified:
            return fresh.model_copy(update={"email_verified": True})
        return fresh
