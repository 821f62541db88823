"""
Shared Enums

Single source of truth for enums used across configuration, API schemas,
and business logic.
"""

from enum import Enum


# ============================================================================
# Environment Enums
# ============================================================================


class EnvironmentType(str, Enum):
    """
    Deployment environment

    Selects the token program and decimal precision of the SPL token:
    - PRODUCTION: classic Token program
    - DEVELOPMENT: Token-2022 program
    """

    PRODUCTION = "production"
    DEVELOPMENT = "development"


# ============================================================================
# Transfer Enums
# ============================================================================


class AssetType(str, Enum):
    """Asset moved by a transfer endpoint"""

    SOL = "sol"
    SPL = "spl"
