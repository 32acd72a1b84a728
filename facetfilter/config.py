from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from facetfilter.models.facet import DEFAULT_DIMENSIONS

DATA_DIR = Path(__file__).parent / "data"


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env")

    app_name: str = "facetfilter"
    debug: bool = False

    # Catalog source (JSON or CSV, chosen by suffix)
    catalog_path: Path = DATA_DIR / "shoes.json"

    # Top-level key holding the item list in JSON catalogs
    catalog_key: str = "shoes"

    # Dimension names in display order
    dimensions: list[str] = list(DEFAULT_DIMENSIONS)

    # Catalog record field -> dimension name
    field_map: dict[str, str] = {
        "color": "colors",
        "size": "sizes",
        "width": "widths",
    }

    max_sessions: int = 1000


settings = Settings()
