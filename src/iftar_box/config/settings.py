"""
Centralized settings and path configuration for the Iftar Box tool.
"""
import os
from pathlib import Path
from dataclasses import dataclass
from typing import Optional


def get_project_root() -> Path:
    """Get the project root directory (where pyproject.toml lives)."""
    current = Path(__file__).resolve()
    for parent in current.parents:
        if (parent / 'pyproject.toml').exists():
            return parent
    # Fallback to 3 levels up from this file
    return Path(__file__).resolve().parent.parent.parent.parent


@dataclass
class Settings:
    """Application settings with sensible defaults."""

    # Project paths
    project_root: Path

    # Output files
    price_list: Path
    build_report: Path

    # Display
    currency: str = 'CAD'

    # Hand-off URLs between the wizard and checkout
    base_url: str = ''
    product_path: str = '/product'
    checkout_path: str = '/checkout'

    @classmethod
    def load(cls, project_root: Optional[Path] = None) -> 'Settings':
        """Load settings from the project structure and environment."""
        root = project_root or get_project_root()
        outputs = root / 'src' / 'iftar_box' / 'data' / 'outputs'

        return cls(
            project_root=root,
            price_list=outputs / 'price_list.csv',
            build_report=outputs / 'build_report.json',
            currency=os.environ.get('IFTAR_BOX_CURRENCY', 'CAD'),
            base_url=os.environ.get('IFTAR_BOX_BASE_URL', '').rstrip('/'),
        )

    def checkout_url(self, query: str) -> str:
        return f"{self.base_url}{self.checkout_path}?{query}"

    def product_url(self, query: str) -> str:
        return f"{self.base_url}{self.product_path}?{query}"


# Default settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings.load()
    return _settings
