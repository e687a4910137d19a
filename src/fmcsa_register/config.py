"""
Configuration management using Pydantic Settings.

Automatically loads the category catalog (packaged fmcsa_register/data/categories.yaml,
or config/categories.yaml in the working directory) and environment variables.
Provides type-safe access to:
- The register category catalog (anchor code → label, in output order)
- FMCSA register endpoint and request settings
- MongoDB connection settings
"""

from pathlib import Path
from typing import Dict, List, Optional, Tuple
import yaml
from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from fmcsa_register.models.category import CategoryDescriptor


PACKAGED_CATALOG = Path(__file__).parent / "data" / "categories.yaml"


class CategoryCatalogConfig(BaseSettings):
    """
    Category catalog automatically loaded from the packaged categories.yaml.

    Each entry pairs the anchor name used in the register page
    (``<a name="NC">``) with its human-readable category label. The order
    of the YAML list is the order categories are processed and reported.

    Attributes:
        categories: Ordered list of ``{'code': ..., 'label': ...}`` mappings

    Example:
        >>> config = CategoryCatalogConfig()
        >>> config.get_label('REV')
        'REVOCATION'
        >>> [d.code for d in config.descriptors()][:3]
        ['NC', 'CPL', 'CX2']
    """

    categories: List[Dict[str, str]] = Field(
        default_factory=list,
        description="Ordered category catalog entries (code, label)"
    )

    model_config = SettingsConfigDict(
        extra='ignore'
    )

    @model_validator(mode='before')
    @classmethod
    def load_yaml_config(cls, data: dict) -> dict:
        """
        Load the catalog YAML if not already provided.

        This validator runs before field validation and loads the YAML file
        if the data dict is empty (i.e., no values were provided).
        config/categories.yaml in the working directory takes precedence over
        the copy shipped in the package.
        """
        # Values passed explicitly (e.g. from tests) win over the file
        if data:
            return data

        # A catalog in the working directory overrides the packaged one
        config_path = Path('config/categories.yaml')

        if not config_path.exists():
            config_path = PACKAGED_CATALOG

        if not config_path.exists():
            raise FileNotFoundError(
                f"Config file not found at {config_path}. "
                f"Ensure fmcsa_register/data/categories.yaml was installed."
            )

        with open(config_path, 'r', encoding='utf-8') as f:
            yaml_data = yaml.safe_load(f) or {}

        return {
            'categories': yaml_data.get('categories', [])
        }

    def descriptors(self) -> Tuple[CategoryDescriptor, ...]:
        """
        Build the immutable, ordered category catalog.

        Returns:
            Tuple of CategoryDescriptor in YAML order
        """
        return tuple(
            CategoryDescriptor(code=item['code'], label=item['label'])
            for item in self.categories
        )

    def is_valid_code(self, code: Optional[str]) -> bool:
        """Check if an anchor code is part of the catalog."""
        if code is None:
            return False
        return any(item['code'] == code for item in self.categories)

    def get_label(self, code: str) -> str:
        """
        Get the category label for an anchor code.

        Raises:
            KeyError: If code is not found in the catalog
        """
        for item in self.categories:
            if item['code'] == code:
                return item['label']
        raise KeyError(f"Unknown category code: {code}")


# Singleton pattern - loaded once, cached forever
_category_config: Optional[CategoryCatalogConfig] = None


def get_category_config() -> CategoryCatalogConfig:
    """
    Get global category catalog config (lazy-loaded singleton).

    Returns:
        Singleton CategoryCatalogConfig instance
    """
    global _category_config
    if _category_config is None:
        _category_config = CategoryCatalogConfig()
    return _category_config


def get_category_catalog() -> Tuple[CategoryDescriptor, ...]:
    """
    Get the ordered category catalog used by the extraction engine.

    Example:
        >>> catalog = get_category_catalog()
        >>> catalog[0].code, catalog[0].label
        ('NC', 'NAME CHANGE')
    """
    return get_category_config().descriptors()


class AppConfig(BaseSettings):
    """
    Application configuration loaded from environment variables.

    Provides centralized access to runtime configuration:
    - FMCSA register endpoint, headers and timeout
    - Expected document signature text
    - MongoDB connection settings
    - Log level for scripts

    Environment Variables (from .env):
        REGISTER_URL: Register detail endpoint (POST target)
        REFERER_URL: Referer header sent with the register request
        USER_AGENT: Browser user agent sent with the register request
        REQUEST_TIMEOUT: Request timeout in seconds (default: 60)
        DOCUMENT_MARKER: Text a genuine register page contains
        MONGO_HOST: MongoDB host (e.g., "localhost:27017")
        DB_NAME: MongoDB database name (e.g., "FMCSA")
        COLLECTION_NAME: MongoDB collection name (e.g., "register_entries")
        LOG_LEVEL: Logging level for collection scripts

    Example:
        >>> config = get_app_config()
        >>> config.request_timeout
        60.0
        >>> config.mongodb_uri
        'mongodb://localhost:27017/'
    """

    register_url: str = Field(
        default="https://li-public.fmcsa.dot.gov/LIVIEW/PKG_register.prc_reg_detail",
        description="FMCSA register detail endpoint"
    )

    referer_url: str = Field(
        default="https://li-public.fmcsa.dot.gov/LIVIEW/PKG_REGISTER.prc_reg_list",
        description="Referer header for register requests"
    )

    user_agent: str = Field(
        default=(
            "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
            "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
        ),
        description="User-Agent header for register requests"
    )

    request_timeout: float = Field(
        default=60.0,
        gt=0,
        description="Register request timeout in seconds"
    )

    document_marker: str = Field(
        default="FMCSA REGISTER",
        description="Text that identifies a genuine register page (case-insensitive)"
    )

    mongo_host: str = Field(
        default="localhost:27017",
        description="MongoDB host address"
    )

    db_name: str = Field(
        default="FMCSA",
        description="MongoDB database name"
    )

    collection_name: str = Field(
        default="register_entries",
        description="MongoDB collection name for register entries"
    )

    log_level: str = Field(
        default="INFO",
        description="Logging level used by collection scripts"
    )

    model_config = SettingsConfigDict(
        env_file='.env',
        env_file_encoding='utf-8',
        case_sensitive=False,
        extra='ignore'
    )

    @property
    def mongodb_uri(self) -> str:
        """Construct MongoDB URI from host."""
        return f"mongodb://{self.mongo_host}/"

    @property
    def mongodb_database(self) -> str:
        """Alias for db_name."""
        return self.db_name

    @property
    def mongodb_collection(self) -> str:
        """Alias for collection_name."""
        return self.collection_name


# Singleton pattern - loaded once, cached forever
_app_config: Optional[AppConfig] = None


def get_app_config() -> AppConfig:
    """
    Get global application config instance (lazy-loaded singleton).

    Configuration is loaded from environment variables and .env file.
    Cached after first access for efficiency.

    Returns:
        Singleton AppConfig instance
    """
    global _app_config
    if _app_config is None:
        _app_config = AppConfig()
    return _app_config
