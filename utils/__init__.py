"""
Utilities Package
Configuration shared by the deployment scripts
"""

from .config import DeployConfig, PROJECT_ROOT

__all__ = ['DeployConfig', 'PROJECT_ROOT']
